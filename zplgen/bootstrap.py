import os, shutil
from pathlib import Path

from .constants import DATA_HOME, PACKAGED_TEMPLATES_DIR
from .services.logging_setup import setup_logging


def get_data_root() -> Path:
    return Path(os.environ.get("ZPLGEN_HOME") or DATA_HOME)


def _copy_if_missing(src: Path, dst: Path):
    if src.is_file() and not dst.exists():
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dst)


def init_data_layout(repo_templates_dir=PACKAGED_TEMPLATES_DIR, root: Path = None) -> dict:
    root = Path(root) if root is not None else get_data_root()
    dirs = {
        "root": root,
        "templates": root / "zpl_templates",
        "logs": root / "logs",
    }
    for p in dirs.values():
        p.mkdir(parents=True, exist_ok=True)

    # Templates: semeia os empacotados sem sobrescrever os do usuário
    repo_tpl = Path(repo_templates_dir)
    if repo_tpl.is_dir():
        for f in repo_tpl.glob("*.zpl.j2"):
            _copy_if_missing(f, dirs["templates"] / f.name)

    return dirs


__all__ = ["get_data_root", "init_data_layout", "setup_logging"]
