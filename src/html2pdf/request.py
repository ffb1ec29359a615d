from __future__ import annotations

from dataclasses import dataclass

from .config import AppConfig
from .fonts import FontRegistration, parse_font_specs
from .models import Conformance, ConversionOptions, Verbosity
from .normalizer import DocumentSource, StrictDocument, prepare_document
from .policy import ResourcePolicy


@dataclass(frozen=True, slots=True)
class ConversionRequest:
    """Everything the renderer needs for one conversion. Built once, run once."""

    source: DocumentSource
    fonts: tuple[FontRegistration, ...]
    policy: ResourcePolicy
    conformance: Conformance
    verbosity: Verbosity = Verbosity.NORMAL
    fast_mode: bool = True
    svg_support: bool = True
    media_type: str = "print"
    presentational_hints: bool = False

    @property
    def base_uri(self) -> str | None:
        if isinstance(self.source, StrictDocument):
            return self.source.base_uri
        return None

    @property
    def accessible(self) -> bool:
        return self.conformance is Conformance.PDF_UA_PDFA_3U


def build_request(options: ConversionOptions, config: AppConfig | None = None) -> ConversionRequest:
    """Assemble a request from option values.

    Font specs are validated before the input document is touched, so a bad
    ``--font`` never costs a parse.
    """

    config = config or AppConfig()
    fonts = parse_font_specs((*config.fonts, *options.fonts))
    policy = ResourcePolicy.from_flag(options.block)
    source = prepare_document(
        options.input_path,
        xhtml=options.xhtml,
        base_path=options.base_path,
    )
    return ConversionRequest(
        source=source,
        fonts=fonts,
        policy=policy,
        conformance=Conformance.from_flag(options.accessible),
        verbosity=options.verbosity,
        media_type=config.render.media_type,
        presentational_hints=config.render.presentational_hints,
    )


__all__ = ["ConversionRequest", "build_request"]
