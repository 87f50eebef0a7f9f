# zplgen/services/log_service.py
import logging
from flask import has_request_context, request

SERVICE_LOGGER = logging.getLogger("zplgen.service")
AUDIT_LOGGER   = logging.getLogger("zplgen.audit")
ERROR_LOGGER   = logging.getLogger("zplgen.error")


# ---------------------------------------------------------
# Insere dados do contexto HTTP automaticamente
# ---------------------------------------------------------
def _with_request_context(data: dict) -> dict:
    if has_request_context():
        data.setdefault("client_ip", request.remote_addr)
        data.setdefault("method", request.method)
        data.setdefault("path", request.path)
    return data


def log_service(message: str, **meta):
    SERVICE_LOGGER.info(message, extra=_with_request_context(meta))


def log_audit(action: str, **meta):
    AUDIT_LOGGER.info(action, extra=_with_request_context(meta))


def log_error(message: str, **meta):
    ERROR_LOGGER.error(message, extra=_with_request_context(meta))


def log_exception(message: str, **meta):
    ERROR_LOGGER.exception(message, extra=_with_request_context(meta))
