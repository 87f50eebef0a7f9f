# zplgen/services/zpl_generator.py
"""
Gerador fluente de documentos ZPL.

Cada operação pública acrescenta zero ou mais fragmentos ao documento e
devolve o próprio gerador, permitindo encadear chamadas:

    zpl = (ZplGenerator(suppress_separator=False)
           .start()
           .draw_box_at(50, 50, 100, 100, 2)
           .write_text_at(150, 150, "Hello World")
           .end()
           .render())

Nada é validado aqui: coordenadas, textos e enums são emitidos como vieram
e a checagem fica por conta da impressora.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_EVEN
from typing import NamedTuple, Optional, Tuple

from ..constants import (
    DEFAULT_DPI, DEFAULT_MAX_WIDTH, DEFAULT_SUPPRESS_SEPARATOR, LINE_SEPARATOR,
)
from .zpl_tokens import (
    Color, Roundness, Orientation, Justification,
    color_token, roundness_token, orientation_token, barcode_mode_token,
    justification_token, font_orientation_token, text_position_token, yes_no,
)

logger = logging.getLogger(__name__)

START_LABEL  = "^XA"
END_LABEL    = "^XZ"
FLUSH_BUFFER = "~JSN"
FIELD_END    = "^FS"

# Marca d'água "VOID" diagonal (fixa)
_VOID_GRAPHIC = "^FO0,0^GD650,700,10,,R ^FS"
_VOID_LETTERS = (
    (70, "V"), (130, "O"), (190, "I"), (250, "D"),
    (430, "V"), (490, "O"), (550, "I"), (610, "D"),
)


@dataclass(frozen=True)
class SessionConfig:
    dpi: int = DEFAULT_DPI
    max_width: int = DEFAULT_MAX_WIDTH
    suppress_separator: bool = DEFAULT_SUPPRESS_SEPARATOR

    @classmethod
    def from_env(cls) -> "SessionConfig":
        """Config padrão do processo (ZPLGEN_DPI, ZPLGEN_MAX_WIDTH, ...)."""
        return cls()


class WrapResult(NamedTuple):
    builder: "ZplGenerator"
    ending_y: int


def escape_field_hex(value: str) -> str:
    """Escapa '_' e ' ' para o modo ^FH (o '_' primeiro, senão o _20 vira _5F20)."""
    return value.replace("_", "_5F").replace(" ", "_20")


class ZplGenerator:
    """Acumula comandos ZPL em ordem de emissão."""

    def __init__(self, suppress_separator: bool = DEFAULT_SUPPRESS_SEPARATOR,
                 dpi: int = DEFAULT_DPI, max_width: int = DEFAULT_MAX_WIDTH):
        self._config = SessionConfig(dpi=dpi, max_width=max_width,
                                     suppress_separator=suppress_separator)
        self._fragments = []

    @classmethod
    def from_config(cls, config: SessionConfig) -> "ZplGenerator":
        return cls(suppress_separator=config.suppress_separator,
                   dpi=config.dpi, max_width=config.max_width)

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def fragments(self) -> Tuple[str, ...]:
        return tuple(self._fragments)

    # ---------------------------------------------------------
    # Emissão / renderização
    # ---------------------------------------------------------
    def _append(self, data: str) -> None:
        self._fragments.append(data)

    def _separator(self) -> str:
        return "" if self._config.suppress_separator else LINE_SEPARATOR

    def render(self) -> str:
        sep = self._separator()
        return "".join(f"{frag}{sep}" for frag in self._fragments)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"ZplGenerator({self._config!r}, fragments={len(self._fragments)})"

    # ---------------------------------------------------------
    # Ciclo de vida
    # ---------------------------------------------------------
    def start(self) -> "ZplGenerator":
        self._append(START_LABEL)
        return self

    def end(self) -> "ZplGenerator":
        self._append(FLUSH_BUFFER)
        self._append(END_LABEL)
        return self

    def raw(self, value: str) -> "ZplGenerator":
        """Acrescenta o texto como veio (comandos não modelados)."""
        self._append(value)
        return self

    def reverse_print(self) -> "ZplGenerator":
        self._append("^FR")
        return self

    # ---------------------------------------------------------
    # Fonte / campo
    # ---------------------------------------------------------
    def set_font(self, height: int, font: str = "0") -> "ZplGenerator":
        """Fonte padrão e altura em dots; largura proporcional à altura."""
        self._append(f"^CF{font},{height}")
        return self

    def set_font_size(self, font: str, height: int, width: int) -> "ZplGenerator":
        """Fonte padrão com altura e largura explícitas (dots)."""
        self._append(f"^CF{font},{height},{width}")
        return self

    def set_position(self, x: int, y: int) -> "ZplGenerator":
        self._append(_field_origin(x, y))
        return self

    def end_field(self) -> "ZplGenerator":
        self._append(FIELD_END)
        return self

    def data(self, value: str) -> "ZplGenerator":
        self._append(_field_data(value))
        return self

    # ---------------------------------------------------------
    # Formas
    # ---------------------------------------------------------
    def draw_box_at(self, x: int, y: int, width: int, height: int, line_thickness: int,
                    color=Color.BLACK, roundness=Roundness.NONE) -> "ZplGenerator":
        self._append(f"{_field_origin(x, y)}"
                     f"{_box_field(width, height, line_thickness, color, roundness)}{FIELD_END}")
        return self

    def draw_box(self, width: int, height: int, line_thickness: int,
                 color=Color.BLACK, roundness=Roundness.NONE) -> "ZplGenerator":
        self._append(_box_field(width, height, line_thickness, color, roundness))
        return self

    def draw_horizontal_line_at(self, x: int, y: int, width: int, line_thickness: int) -> "ZplGenerator":
        return self.draw_box_at(x, y, width, 1, line_thickness)

    def draw_vertical_line_at(self, x: int, y: int, height: int, line_thickness: int) -> "ZplGenerator":
        return self.draw_box_at(x, y, 1, height, line_thickness)

    # ---------------------------------------------------------
    # Texto
    # ---------------------------------------------------------
    def write_text(self, value: str) -> "ZplGenerator":
        self._append(_field_data(value))
        return self

    def write_text_at(self, x: int, y: int, value: str,
                      orientation=Orientation.NORMAL,
                      justification=Justification.LEFT) -> "ZplGenerator":
        """
        Texto posicionado em modo ^FH.
        Com CENTER o bloco ^FB faz o alinhamento e o X vai para 0.
        """
        escaped = escape_field_hex(value)
        block = justification_token(justification, self._config.max_width)
        font = font_orientation_token(orientation)
        origin_x = 0 if justification == Justification.CENTER else x
        self._append(f"^FO{origin_x},{y}{block}{font}^FH{_field_data(escaped)}{FIELD_END}")
        return self

    def write_underline(self, x: int, y: int, length: int, c1: int, c2: int) -> "ZplGenerator":
        self._append(f"{_field_origin(x, y)}^GB{length},{c1},{c2}{FIELD_END}")
        return self

    def write_text_at_with_wrap(self, x: int, y: int, value: Optional[str], wrap: int,
                                line_interval: int, max_y: int,
                                orientation=Orientation.NORMAL,
                                justification=Justification.LEFT) -> WrapResult:
        """
        Quebra `value` em linhas de até `wrap` caracteres (por palavra, guloso).

        Cada palavra conta len(palavra) + 1 (o espaço). Ao estourar o limite a
        linha acumulada é emitida e o Y avança `line_interval`; se passar de
        `max_y` o resto do texto é descartado e `ending_y` fica no Y da última
        linha emitida. Palavra maior que `wrap` sai sozinha numa linha.
        """
        if value is None or not value.strip():
            return WrapResult(self, y)

        if len(value) <= wrap:
            self.write_text_at(x, y, value, orientation, justification)
            return WrapResult(self, y)

        words = value.split(" ")
        line = ""
        length = 0
        i = 0
        while i < len(words):
            word = words[i]
            length += len(word) + 1
            if length <= wrap or not line:
                line += word + " "
                i += 1
                continue

            self.write_text_at(x, y, line, orientation, justification)
            line = ""
            length = 0
            y += line_interval
            if y > max_y:
                logger.debug("wrap: limite vertical %s atingido, %d palavra(s) descartada(s)",
                             max_y, len(words) - i)
                return WrapResult(self, y - line_interval)

        self.write_text_at(x, y, line, orientation, justification)
        return WrapResult(self, y)

    # ---------------------------------------------------------
    # Código de barras / QR
    # ---------------------------------------------------------
    def barcode_format(self, module_width: int, ratio, bar_height: int) -> "ZplGenerator":
        """
        Padrões de código de barras (^BY).
        module_width: 1-10 dots; ratio: 2.0 a 3.0 em passos de 0.1.
        """
        self._append(f"^BY{module_width},{ratio},{bar_height}")
        return self

    def barcode(self, orientation, height: int, print_text: bool,
                text_position, use_ucc_check_digit: bool, mode,
                x: int, y: int, value: str) -> "ZplGenerator":
        self._append(
            f"{_field_origin(x, y)}"
            f"^BC{orientation_token(orientation)},{height},{yes_no(print_text)},"
            f"{text_position_token(text_position)},{yes_no(use_ucc_check_digit)},"
            f"{barcode_mode_token(mode)}"
            f"{_field_data(value)}{FIELD_END}"
        )
        return self

    def simple_barcode(self, x: int, y: int, value: str) -> "ZplGenerator":
        self._append(f"{_field_origin(x, y)}^BC{_field_data(value)}{FIELD_END}")
        return self

    def add_qr_code_at(self, x: int, y: int, data: str) -> "ZplGenerator":
        # ^BY2,2,0 fixo; QR normal, ampliação 2, correção 5; "LA," = modo automático
        self._append(f"^BY2,2,0{_field_origin(x, y)}^BQN,2,5{_field_data('LA,' + data)}{FIELD_END}")
        return self

    # ---------------------------------------------------------
    # Utilidades
    # ---------------------------------------------------------
    def get_dots_from_inches(self, inches) -> int:
        """Polegadas -> dots, arredondando meio para o par (1.5 -> 2, 2.5 -> 2)."""
        dots = Decimal(str(inches)) * Decimal(self._config.dpi)
        return int(dots.quantize(Decimal(1), rounding=ROUND_HALF_EVEN))

    def add_void_message(self) -> "ZplGenerator":
        self._append(_VOID_GRAPHIC)
        for y, letter in _VOID_LETTERS:
            self._append(f"^ADN,60,40^FO300,{y}^FD{letter}{FIELD_END}")
        return self


# ------------------------------------------------------------
# Helpers de campo
# ------------------------------------------------------------
def _field_origin(x, y) -> str:
    return f"^FO{x},{y}"


def _field_data(value) -> str:
    return f"^FD{value}"


def _box_field(width, height, line_thickness, color, roundness) -> str:
    return (f"^GB{width},{height},{line_thickness},"
            f"{color_token(color)},{roundness_token(roundness)}")
