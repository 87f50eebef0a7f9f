# zplgen/routes/api.py
"""
API JSON para pré-visualizar documentos ZPL.
Endpoints:
  GET  /api/sample              → etiqueta de demonstração (text/plain)
  POST /api/render              → executa um script de operações, retorna o ZPL
  GET  /api/operations          → operações aceitas no script
  GET  /api/dots                → converte polegadas em dots
  GET  /api/templates           → lista os .zpl.j2
  POST /api/templates/<nome>    → renderiza um template com o JSON como contexto
"""
from decimal import Decimal, InvalidOperation
from flask import Blueprint, Response, request, jsonify, current_app
from jinja2 import TemplateNotFound

from zplgen.services.log_service import log_audit, log_error, log_exception
from zplgen.services.script_service import ScriptError, apply_script, supported_operations
from zplgen.services.templates_service import build_sample_label, list_templates, render_template
from zplgen.services.zpl_generator import SessionConfig, ZplGenerator

bp = Blueprint("api", __name__, url_prefix="/api")


# ---------------------------------------------------------
# CORS básico para dev local (frontend em porta diferente)
# ---------------------------------------------------------
@bp.after_request
def _add_cors(response):
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    return response


def _session() -> SessionConfig:
    return current_app.config["ZPL_SESSION"]


def _flag(name: str) -> bool:
    return request.args.get(name, "").strip().lower() in ("1", "true", "yes", "sim")


@bp.route("/sample", methods=["GET"])
def sample():
    cfg = _session()
    builder = ZplGenerator(suppress_separator=not _flag("crlf"), dpi=cfg.dpi,
                           max_width=cfg.max_width)
    texto = request.args.get("texto") or "Hello World"
    zpl = build_sample_label(builder, texto).render()
    return Response(zpl, mimetype="text/plain")


@bp.route("/render", methods=["POST", "OPTIONS"])
def render():
    """Recebe um script JSON e devolve o documento gerado."""
    if request.method == "OPTIONS":
        return "", 204

    script = request.get_json(silent=True)
    try:
        result = apply_script(script, _session())
    except ScriptError as e:
        log_error("Script inválido", erro=str(e))
        return jsonify({"success": False, "error": str(e)}), 400
    except Exception as e:
        log_exception("Erro ao gerar ZPL", erro=str(e))
        return jsonify({"success": False, "error": "Erro ao gerar ZPL"}), 500

    log_audit("render", operations=len(script.get("operations", [])), length=len(result.zpl))
    return jsonify({"success": True, "zpl": result.zpl, "ending_y": result.ending_ys})


@bp.route("/operations", methods=["GET"])
def operations():
    return jsonify({"operations": supported_operations()})


@bp.route("/dots", methods=["GET"])
def dots():
    """Converte ?inches=<n> para dots no DPI da sessão (ou ?dpi=<n>)."""
    try:
        inches = Decimal(request.args.get("inches", ""))
        dpi = int(request.args.get("dpi") or _session().dpi)
    except (InvalidOperation, ValueError):
        return jsonify({"success": False, "error": "Parâmetros inválidos"}), 400
    if not inches.is_finite() or dpi <= 0:
        return jsonify({"success": False, "error": "Parâmetros inválidos"}), 400

    try:
        value = ZplGenerator(dpi=dpi).get_dots_from_inches(inches)
    except (InvalidOperation, ValueError):
        # produto fora da precisão do Decimal (ex.: 1e30 polegadas)
        return jsonify({"success": False, "error": "Valor fora da faixa"}), 400
    return jsonify({"inches": str(inches), "dpi": dpi, "dots": value})


# =============================================================
# Templates
# =============================================================
@bp.route("/templates", methods=["GET"])
def templates():
    return jsonify({"templates": list_templates(current_app.config["DIRS"]["templates"])})


@bp.route("/templates/<name>", methods=["POST", "OPTIONS"])
def render_named_template(name):
    """Renderiza um .zpl.j2 usando o corpo JSON como contexto."""
    if request.method == "OPTIONS":
        return "", 204

    ctx = request.get_json(silent=True) or {}
    if not isinstance(ctx, dict):
        return jsonify({"success": False, "error": "Contexto deve ser um objeto"}), 400
    if not name.endswith(".zpl.j2"):
        name = f"{name}.zpl.j2"

    try:
        zpl = render_template(current_app.config["ZPL_ENV"], name, ctx, _session())
    except TemplateNotFound:
        return jsonify({"success": False, "error": "Template não encontrado"}), 404
    except Exception as e:
        log_exception("Erro render template", template=name, erro=str(e))
        return jsonify({"success": False, "error": "Erro ao renderizar etiqueta"}), 500

    log_audit("render_template", template=name, length=len(zpl))
    return Response(zpl, mimetype="text/plain")
