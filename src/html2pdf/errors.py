from __future__ import annotations


class ConversionError(RuntimeError):
    code = "CONVERSION_FAILED"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code


class ValidationError(ConversionError):
    """Raised for bad option values, before any I/O happens."""

    code = "INVALID_OPTION"


class ParseError(ConversionError):
    """Raised when the input document cannot be read or normalized."""

    code = "PARSE_FAILED"


class ConfigError(ConversionError):
    code = "INVALID_BASE_URI"


class OutputError(ConversionError):
    """Raised when the output sink cannot be opened or written."""

    code = "OUTPUT_UNWRITABLE"


class RenderError(ConversionError):
    code = "RENDER_FAILED"


__all__ = [
    "ConversionError",
    "ValidationError",
    "ParseError",
    "ConfigError",
    "OutputError",
    "RenderError",
]
