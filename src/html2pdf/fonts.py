from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .errors import ValidationError

FONT_SPEC_FIELDS = 3
_WEIGHT_RE = re.compile(r"[+]?\d+")


@dataclass(frozen=True, slots=True)
class FontRegistration:
    family: str
    weight: int
    source: Path
    style: str = "normal"


def parse_font_spec(spec: str) -> FontRegistration:
    """Parse one ``<name>,<weight>,<file>`` triple.

    The font file is not opened here; the renderer loads it.
    """

    parts = spec.split(",")
    if len(parts) != FONT_SPEC_FIELDS:
        raise ValidationError(f"Invalid font specification: {spec}", code="INVALID_FONT_SPEC")
    family, weight, source = parts
    if not family or not source:
        raise ValidationError(f"Invalid font specification: {spec}", code="INVALID_FONT_SPEC")
    if not _WEIGHT_RE.fullmatch(weight):
        raise ValidationError(
            f"Invalid font weight '{weight}' in font specification: {spec}",
            code="INVALID_FONT_SPEC",
        )
    value = int(weight)
    if value <= 0:
        raise ValidationError(
            f"Font weight must be positive in font specification: {spec}",
            code="INVALID_FONT_SPEC",
        )
    return FontRegistration(family=family, weight=value, source=Path(source))


def parse_font_specs(specs: Iterable[str]) -> tuple[FontRegistration, ...]:
    # Fails on the first bad entry; no partial list is ever returned.
    return tuple(parse_font_spec(spec) for spec in specs)


__all__ = ["FontRegistration", "parse_font_spec", "parse_font_specs"]
