from .app import create_app
from .constants import HOST, PORT
from .services.log_service import log_service

if __name__ == "__main__":
    app = create_app()
    log_service("startup", host=HOST, port=PORT)
    try:
        app.run(host=HOST, port=PORT, debug=False, use_reloader=False)
    finally:
        log_service("shutdown")
