"""Rolling shutter simulation: one band per frame, swept across the image."""

__version__ = "0.3.0"

from .config import AppConfig, Direction, FolderSelector, MaskSelector, RunConfig
from .core.errors import RollingShutterError
from .core.types import Band, Bounds, CompositeResult, ParsedMask, PlaceholderSpec
from .processing.compositor import process_images
from .processing.geometry import band, scan_limit
from .utils.path import get_paths, parse_filemask

__all__ = [
    "AppConfig",
    "Direction",
    "FolderSelector",
    "MaskSelector",
    "RunConfig",
    "RollingShutterError",
    "Band",
    "Bounds",
    "CompositeResult",
    "ParsedMask",
    "PlaceholderSpec",
    "process_images",
    "band",
    "scan_limit",
    "get_paths",
    "parse_filemask",
]
