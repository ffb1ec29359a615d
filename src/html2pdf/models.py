"""Domain models for HTML to PDF conversion."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class Verbosity(str, Enum):
    QUIET = "quiet"
    NORMAL = "normal"
    VERBOSE = "verbose"

    @classmethod
    def resolve(cls, *, verbose: bool, quiet: bool) -> "Verbosity":
        """Collapse the two command-line flags into one level; verbose wins."""

        if verbose:
            return cls.VERBOSE
        if quiet:
            return cls.QUIET
        return cls.NORMAL


class Conformance(str, Enum):
    NONE = "none"
    PDF_UA_PDFA_3U = "pdf/ua+pdf/a-3u"

    @classmethod
    def from_flag(cls, accessible: bool) -> "Conformance":
        return cls.PDF_UA_PDFA_3U if accessible else cls.NONE


@dataclass(frozen=True, slots=True)
class ConversionOptions:
    """Option values for a single conversion, as given on the command line."""

    input_path: Path
    output_path: Path
    base_path: str | None = None
    xhtml: bool = False
    block: bool = False
    accessible: bool = False
    verbose: bool = False
    quiet: bool = False
    fonts: tuple[str, ...] = ()

    @property
    def verbosity(self) -> Verbosity:
        return Verbosity.resolve(verbose=self.verbose, quiet=self.quiet)


@dataclass(slots=True)
class ConversionResult:
    """Outcome of one conversion attempt."""

    success: bool
    elapsed_ms: int
    output_path: Path
    error_message: str | None = None
    error_code: str | None = None

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1


__all__ = [
    "Conformance",
    "ConversionOptions",
    "ConversionResult",
    "Verbosity",
]
