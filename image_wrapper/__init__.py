from .config import Config
from .engine import PillowEngine
from .exceptions import (
    ConfigError,
    EngineError,
    ImageWrapperError,
    InvalidMethod,
    MissingDestination,
    UnresolvedConstraint,
    UnsupportedSource,
)
from .geometry import Dimension, Offset, ResizeResult
from .image import ImageSession, SessionState
from .orientation import Orientation, is_mirrored, rotation_for
from .resize import (
    Circumscribed,
    CropProportionate,
    Inscribed,
    Proportionate,
    ResizeMethod,
    Standard,
    compute_resize,
    constraints_for,
)

__all__ = [
    "Circumscribed",
    "Config",
    "ConfigError",
    "CropProportionate",
    "Dimension",
    "EngineError",
    "ImageSession",
    "ImageWrapperError",
    "Inscribed",
    "InvalidMethod",
    "MissingDestination",
    "Offset",
    "Orientation",
    "PillowEngine",
    "Proportionate",
    "ResizeMethod",
    "ResizeResult",
    "SessionState",
    "Standard",
    "UnresolvedConstraint",
    "UnsupportedSource",
    "compute_resize",
    "constraints_for",
    "is_mirrored",
    "rotation_for",
]
