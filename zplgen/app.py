from pathlib import Path
from flask import Flask

from .bootstrap import init_data_layout, setup_logging
from .services.log_service import log_exception
from .services.templates_service import make_env
from .services.zpl_generator import SessionConfig
from .routes.api import bp as api_bp


def create_app(root: Path = None, config: SessionConfig = None) -> Flask:
    # --- Layout de dados + logs ---
    dirs = init_data_layout(root=root)
    setup_logging(dirs["logs"])

    app = Flask(__name__)
    app.config["DIRS"] = dirs
    app.config["ZPL_SESSION"] = config or SessionConfig.from_env()
    app.config["ZPL_ENV"] = make_env(dirs["templates"])

    app.register_blueprint(api_bp)

    # Loga 500 com stack
    @app.errorhandler(500)
    def _err500(e):
        log_exception("Erro 500 na requisição")
        return {"success": False, "error": "Erro interno"}, 500

    return app
