# zplgen/services/script_service.py
"""
Executa um "script" JSON de operações sobre um ZplGenerator.

Formato:
    {
      "config": {"dpi": 203, "max_width": 710, "suppress_separator": true},
      "operations": [
        {"op": "start"},
        {"op": "write_text_at", "x": 10, "y": 20, "value": "Oi", "justification": "center"},
        {"op": "end"}
      ]
    }

Aqui sim há validação (nome da operação, argumentos); o gerador em si
continua permissivo.
"""
import inspect
from typing import List, NamedTuple, Optional

from .zpl_generator import SessionConfig, WrapResult, ZplGenerator
from .zpl_tokens import (
    Color, Roundness, Orientation, Justification, BarcodeLabelPosition, BarcodeMode,
)


class ScriptError(ValueError):
    """Script malformado (operação desconhecida, argumento inválido...)."""


class ScriptResult(NamedTuple):
    zpl: str
    ending_ys: List[int]


# Operações expostas -> argumentos que são enums
OPERATIONS = {
    "start": {},
    "end": {},
    "raw": {},
    "reverse_print": {},
    "set_font": {},
    "set_font_size": {},
    "set_position": {},
    "end_field": {},
    "data": {},
    "draw_box_at": {"color": Color, "roundness": Roundness},
    "draw_box": {"color": Color, "roundness": Roundness},
    "draw_horizontal_line_at": {},
    "draw_vertical_line_at": {},
    "write_text": {},
    "write_text_at": {"orientation": Orientation, "justification": Justification},
    "write_underline": {},
    "write_text_at_with_wrap": {"orientation": Orientation, "justification": Justification},
    "barcode_format": {},
    "barcode": {"orientation": Orientation, "text_position": BarcodeLabelPosition,
                "mode": BarcodeMode},
    "simple_barcode": {},
    "add_qr_code_at": {},
    "add_void_message": {},
}

_CONFIG_FIELDS = ("dpi", "max_width", "suppress_separator")


def _norm(name: str) -> str:
    return name.replace("_", "").replace("-", "").lower()


def parse_enum(enum_cls, value):
    """
    Aceita membro, nome (sem diferenciar caixa/underscore) ou int.
    Ints passam direto para cair no token padrão quando fora da faixa.
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, bool):
        raise ScriptError(f"valor inválido para {enum_cls.__name__}: {value!r}")
    if isinstance(value, int):
        try:
            return enum_cls(value)
        except ValueError:
            return value
    if isinstance(value, str):
        wanted = _norm(value)
        for member in enum_cls:
            if _norm(member.name) == wanted:
                return member
    raise ScriptError(f"valor inválido para {enum_cls.__name__}: {value!r}")


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return _is_int(value) or isinstance(value, float)


# Anotação do gerador -> (checagem, descrição)
_TYPE_CHECKS = {
    int: (_is_int, "inteiro"),
    str: (lambda v: isinstance(v, str), "texto"),
    bool: (lambda v: isinstance(v, bool), "booleano"),
    Optional[str]: (lambda v: v is None or isinstance(v, str), "texto ou null"),
}

# Parâmetros sem anotação no gerador
_UNANNOTATED_CHECKS = {
    "ratio": (_is_number, "número"),
}


def _check_types(index: int, name: str, bound: inspect.BoundArguments) -> None:
    params = bound.signature.parameters
    for arg, value in bound.arguments.items():
        if arg in OPERATIONS[name]:
            continue  # enums já passaram por parse_enum
        check = _TYPE_CHECKS.get(params[arg].annotation) or _UNANNOTATED_CHECKS.get(arg)
        if check and not check[0](value):
            raise ScriptError(
                f"operação #{index} ({name}): '{arg}' deve ser {check[1]}, recebeu {value!r}"
            )


def _parse_config(raw, defaults: SessionConfig) -> SessionConfig:
    raw = raw or {}
    if not isinstance(raw, dict):
        raise ScriptError("'config' deve ser um objeto")
    unknown = set(raw) - set(_CONFIG_FIELDS)
    if unknown:
        raise ScriptError(f"config desconhecida: {', '.join(sorted(unknown))}")

    dpi = raw.get("dpi", defaults.dpi)
    max_width = raw.get("max_width", defaults.max_width)
    suppress = raw.get("suppress_separator", defaults.suppress_separator)
    for field, value in (("dpi", dpi), ("max_width", max_width)):
        if not _is_int(value) or value <= 0:
            raise ScriptError(f"config inválida: '{field}' deve ser inteiro > 0, recebeu {value!r}")
    if not isinstance(suppress, bool):
        raise ScriptError(f"config inválida: 'suppress_separator' deve ser booleano, recebeu {suppress!r}")
    return SessionConfig(dpi=dpi, max_width=max_width, suppress_separator=suppress)


def _call(builder: ZplGenerator, index: int, step):
    if not isinstance(step, dict):
        raise ScriptError(f"operação #{index} deve ser um objeto")
    kwargs = dict(step)
    name = kwargs.pop("op", None)
    if not isinstance(name, str) or name not in OPERATIONS:
        raise ScriptError(f"operação #{index} desconhecida: {name!r}")

    for arg, enum_cls in OPERATIONS[name].items():
        if arg in kwargs:
            kwargs[arg] = parse_enum(enum_cls, kwargs[arg])

    method = getattr(builder, name)
    try:
        bound = inspect.signature(method).bind(**kwargs)
    except TypeError as e:
        raise ScriptError(f"operação #{index} ({name}): {e}") from e
    _check_types(index, name, bound)
    return method(**kwargs)


def apply_script(script, defaults: Optional[SessionConfig] = None) -> ScriptResult:
    """
    `defaults` é a config da sessão (ZPL_SESSION no app); o bloco "config"
    do script sobrescreve campo a campo.
    """
    if not isinstance(script, dict):
        raise ScriptError("script deve ser um objeto JSON")
    operations = script.get("operations")
    if not isinstance(operations, list):
        raise ScriptError("'operations' deve ser uma lista")

    config = _parse_config(script.get("config"), defaults or SessionConfig.from_env())
    builder = ZplGenerator.from_config(config)
    ending_ys = []
    for index, step in enumerate(operations):
        result = _call(builder, index, step)
        if isinstance(result, WrapResult):
            ending_ys.append(result.ending_y)
    return ScriptResult(builder.render(), ending_ys)


def supported_operations() -> List[str]:
    return sorted(OPERATIONS)
