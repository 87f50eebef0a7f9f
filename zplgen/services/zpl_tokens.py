# zplgen/services/zpl_tokens.py
"""
Enumerações do gerador e tabelas de conversão para os tokens ZPL.

Todas as funções são puras e totais: qualquer valor fora das enumerações
(ex.: um int solto) cai no token padrão de cada tabela, sem levantar erro.
"""
from enum import IntEnum


class Color(IntEnum):
    BLACK = 0
    WHITE = 1


class Roundness(IntEnum):
    NONE = 0
    LEVEL1 = 1
    LEVEL2 = 2
    LEVEL3 = 3
    LEVEL4 = 4
    LEVEL5 = 5
    LEVEL6 = 6
    LEVEL7 = 7
    LEVEL8 = 8


class Orientation(IntEnum):
    NORMAL = 0
    ROTATE90 = 1
    INVERT = 2
    ROTATE270 = 3


class Justification(IntEnum):
    LEFT = 0
    RIGHT = 1
    AUTO = 2
    CENTER = 3


class BarcodeLabelPosition(IntEnum):
    TOP = 0
    BOTTOM = 1


class BarcodeMode(IntEnum):
    DEFAULT = 0
    UCC_CASE_MODE = 1
    AUTOMATIC_MODE = 2
    UCC_EAN_MODE = 3


# ------------------------------------------------------------
# Tabelas
# ------------------------------------------------------------
_COLOR = {
    Color.BLACK: "B",
    Color.WHITE: "W",
}

# ROTATE270 usa "B", a mesma letra de "barcode invertido" no ^BC.
# Colisão herdada do esquema de tokens; mantida para compatibilidade.
_ORIENTATION = {
    Orientation.NORMAL: "N",
    Orientation.ROTATE90: "R",
    Orientation.INVERT: "I",
    Orientation.ROTATE270: "B",
}

_BARCODE_MODE = {
    BarcodeMode.DEFAULT: "N",
    BarcodeMode.UCC_CASE_MODE: "U",
    BarcodeMode.AUTOMATIC_MODE: "A",
    BarcodeMode.UCC_EAN_MODE: "D",
}

_JUSTIFICATION_OFFSET = {
    Justification.LEFT: ",0",
    Justification.RIGHT: ",1",
    Justification.AUTO: ",2",
}


def _lookup(table: dict, value, default: str) -> str:
    try:
        return table.get(value, default)
    except TypeError:  # valor não-hashable
        return default


def color_token(color) -> str:
    return _lookup(_COLOR, color, "B")


def orientation_token(orientation) -> str:
    return _lookup(_ORIENTATION, orientation, "N")


def barcode_mode_token(mode) -> str:
    return _lookup(_BARCODE_MODE, mode, "N")


def roundness_token(roundness) -> str:
    """Ordinal do arredondamento (NONE=0 .. LEVEL8=8) em decimal."""
    return str(int(roundness))


def yes_no(flag) -> str:
    return "Y" if flag else "N"


def text_position_token(position) -> str:
    # Só TOP liga o texto acima do código; o resto é "N"
    return "Y" if position == BarcodeLabelPosition.TOP else "N"


def justification_token(justification, max_width: int) -> str:
    """
    Devolve o sufixo de justificação de um ^FO.
    - LEFT/RIGHT/AUTO -> ",0" / ",1" / ",2"
    - CENTER          -> bloco ^FB com a largura máxima configurada
    - qualquer outro  -> "" (sem sufixo)
    """
    if justification == Justification.CENTER:
        return f"^FB{max_width},1,0,C,0"
    return _lookup(_JUSTIFICATION_OFFSET, justification, "")


def font_orientation_token(orientation) -> str:
    """Comando ^AO + letra da orientação (padrão ^AON)."""
    return f"^AO{orientation_token(orientation)}"
