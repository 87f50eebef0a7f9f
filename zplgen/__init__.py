from .services.zpl_generator import SessionConfig, WrapResult, ZplGenerator
from .services.zpl_tokens import (
    Color, Roundness, Orientation, Justification, BarcodeLabelPosition, BarcodeMode,
)

__version__ = "1.0.0"
