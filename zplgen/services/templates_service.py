# zplgen/services/templates_service.py
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, TemplateNotFound

from . import zpl_tokens
from .zpl_generator import SessionConfig, ZplGenerator

TEMPLATE_SUFFIX = ".zpl.j2"


def list_templates(templates_dir: Path) -> List[str]:
    templates_dir = Path(templates_dir)
    if not templates_dir.exists():
        return []
    return sorted(f.name for f in templates_dir.glob(f"*{TEMPLATE_SUFFIX}"))


def make_env(templates_dir: Path) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=False, trim_blocks=True, lstrip_blocks=True,
    )


def build_sample_label(builder: ZplGenerator, texto: str = "Hello World") -> ZplGenerator:
    """Etiqueta de demonstração: caixa, texto e QR com o mesmo conteúdo."""
    return (builder.start()
                   .draw_box_at(50, 50, 100, 100, 2)
                   .set_font(50)
                   .write_text_at(150, 150, texto)
                   .add_qr_code_at(200, 200, texto)
                   .end())


def _template_globals(config: SessionConfig) -> dict:
    return {
        "zpl": ZplGenerator.from_config(config),
        "Color": zpl_tokens.Color,
        "Roundness": zpl_tokens.Roundness,
        "Orientation": zpl_tokens.Orientation,
        "Justification": zpl_tokens.Justification,
        "BarcodeLabelPosition": zpl_tokens.BarcodeLabelPosition,
        "BarcodeMode": zpl_tokens.BarcodeMode,
    }


def render_template(env: Environment, template_name: str, ctx: Optional[dict] = None,
                    config: Optional[SessionConfig] = None) -> str:
    """Renderiza um .zpl.j2; levanta TemplateNotFound se não existir."""
    config = config or SessionConfig.from_env()
    return env.get_template(template_name).render({**(ctx or {}), **_template_globals(config)})


def render_zpl(env: Environment, template_name: Optional[str],
               config: Optional[SessionConfig] = None, **ctx) -> str:
    config = config or SessionConfig.from_env()
    if template_name:
        try:
            return render_template(env, template_name, ctx, config)
        except TemplateNotFound:
            pass
    # Fallback: etiqueta de demonstração montada pelo gerador
    texto = ctx.get("texto") or "Hello World"
    return build_sample_label(ZplGenerator.from_config(config), texto).render()
