# zplgen/services/logging_setup.py
import os, json, socket, logging
from datetime import datetime
from pathlib import Path
from logging.handlers import TimedRotatingFileHandler

from ..constants import APP_NAME, APP_VERSION, ENVIRONMENT

# Loggers do app -> nível mínimo; o arquivo leva o sufixo do nome (service.log, ...)
LOGGER_LEVELS = {
    "zplgen.service": logging.INFO,
    "zplgen.audit":   logging.INFO,
    "zplgen.error":   logging.WARNING,
}
LOGGER_NAMES = tuple(LOGGER_LEVELS)

# Campos fixos do processo, calculados uma vez
_PROCESS_CONTEXT = {
    "app":     APP_NAME,
    "version": APP_VERSION,
    "env":     ENVIRONMENT,
    "host":    socket.gethostname(),
    "pid":     os.getpid(),
}

# Atributos do próprio LogRecord (o resto veio de extra=)
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def _extras(record: logging.LogRecord) -> dict:
    return {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}


class JsonFormatter(logging.Formatter):
    """Uma linha JSON por registro: contexto do processo + extras do chamador."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts":      datetime.fromtimestamp(record.created).astimezone().isoformat(timespec="milliseconds"),
            "level":   record.levelname,
            "logger":  record.name,
            "message": record.getMessage(),
            "where":   f"{record.module}:{record.funcName}:{record.lineno}",
            **_PROCESS_CONTEXT,
        }
        for k, v in _extras(record).items():
            entry.setdefault(k, v)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack"] = self.formatStack(record.stack_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _file_handler(path: Path, backup_days: int) -> TimedRotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(str(path), when="midnight",
                                       backupCount=backup_days, encoding="utf-8")
    handler.setFormatter(JsonFormatter())
    return handler


def _reset(logger: logging.Logger) -> None:
    # setup_logging pode rodar mais de uma vez (testes, create_app repetido)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(logs_dir: Path, console: bool = None, backup_days: int = 7) -> dict:
    """
    Configura os loggers do app, um arquivo JSONL rotativo por logger:
      - service → requisições, renderizações, startup/shutdown
      - audit   → documentos gerados (tamanho, operações)
      - error   → exceções e scripts inválidos
    Fora de produção (ZPLGEN_ENV != prd) também espelha no console.
    Retorna {"service": ..., "audit": ..., "error": ...}.
    """
    logs_dir = Path(logs_dir)
    if console is None:
        console = ENVIRONMENT != "prd"
    stream = None
    if console:
        stream = logging.StreamHandler()
        stream.setFormatter(JsonFormatter())

    loggers = {}
    for name, level in LOGGER_LEVELS.items():
        short = name.rsplit(".", 1)[-1]
        logger = logging.getLogger(name)
        _reset(logger)
        logger.propagate = False
        logger.setLevel(level)
        logger.addHandler(_file_handler(logs_dir / f"{short}.log", backup_days))
        if stream is not None:
            logger.addHandler(stream)
        loggers[short] = logger
    return loggers
