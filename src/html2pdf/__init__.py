"""Command-line HTML to PDF converter."""

from .config import AppConfig, load_config
from .core import ConversionService
from .models import ConversionOptions, ConversionResult
from .request import ConversionRequest, build_request

__version__ = "1.0.10"

__all__ = [
    "AppConfig",
    "load_config",
    "ConversionOptions",
    "ConversionRequest",
    "ConversionResult",
    "ConversionService",
    "build_request",
]
