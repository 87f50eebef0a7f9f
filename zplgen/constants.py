import os
from pathlib import Path

BASE_DIR = os.path.dirname(__file__)

# Templates empacotados (semeados no ZPLGEN_HOME no bootstrap)
PACKAGED_TEMPLATES_DIR = os.path.join(BASE_DIR, "zpl_templates")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "sim", "on")


# Sessão do gerador
DEFAULT_DPI                = _env_int("ZPLGEN_DPI", 203)
DEFAULT_MAX_WIDTH          = _env_int("ZPLGEN_MAX_WIDTH", 710)
DEFAULT_SUPPRESS_SEPARATOR = _env_bool("ZPLGEN_SUPPRESS_SEPARATOR", True)
LINE_SEPARATOR             = "\n"

# Ambiente / servidor
APP_NAME    = "ZplGenerator"
APP_VERSION = os.environ.get("ZPLGEN_APP_VERSION", "dev")
ENVIRONMENT = os.environ.get("ZPLGEN_ENV", "prd")   # prd|hml|dev
HOST        = os.environ.get("ZPLGEN_HOST", "127.0.0.1")
PORT        = _env_int("ZPLGEN_PORT", 8000)
DATA_HOME   = Path(os.environ.get("ZPLGEN_HOME") or Path.home() / ".zplgen")
