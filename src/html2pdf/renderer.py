"""Renderer capability and its WeasyPrint implementation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, BinaryIO, Protocol

from .errors import OutputError, RenderError
from .fonts import FontRegistration
from .logging import RENDERER_LOGGERS, scoped_logging
from .models import Conformance
from .normalizer import StrictDocument
from .policy import ResourceBlockedError, ResourceKind, ResourcePolicy, guess_resource_kind
from .request import ConversionRequest

logger = logging.getLogger(__name__)

PDF_VARIANTS: dict[Conformance, str | None] = {
    Conformance.NONE: None,
    Conformance.PDF_UA_PDFA_3U: "pdf/a-3u",
}


class Renderer(Protocol):
    def run(self, request: ConversionRequest, sink: BinaryIO) -> None:  # pragma: no cover - interface
        ...


class ResourceGate:
    """Applies a ResourcePolicy to each URL the renderer asks for."""

    def __init__(
        self,
        policy: ResourcePolicy,
        base_uri: str | None,
        *,
        svg_support: bool = True,
    ) -> None:
        self._policy = policy
        self._base_uri = base_uri
        self._svg_support = svg_support

    def resolve(self, url: str) -> str:
        """Return the URL to fetch, or raise ResourceBlockedError."""

        kind = guess_resource_kind(url)
        if kind is ResourceKind.SVG and not self._svg_support:
            raise ResourceBlockedError(url)
        resolved = self._policy.resolve(self._base_uri, url, kind)
        if resolved is None:
            logger.debug("Blocked %s resource %s (%s policy)", kind.value, url, self._policy.name)
            raise ResourceBlockedError(url)
        return resolved


class GuardedSink:
    """Wraps the output handle so write failures surface as OutputError."""

    def __init__(self, handle: BinaryIO, path: Path) -> None:
        self._handle = handle
        self._path = path

    def write(self, data: bytes) -> int:
        try:
            return self._handle.write(data)
        except OSError as exc:
            raise OutputError(f"Unable to write PDF to {self._path}: {exc}") from exc

    def __getattr__(self, name: str) -> Any:
        return getattr(self._handle, name)


def _css_string(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def font_face_rules(fonts: tuple[FontRegistration, ...]) -> str:
    rules: list[str] = []
    for font in fonts:
        rules.append(
            "@font-face { "
            f"font-family: {_css_string(font.family)}; "
            f"font-weight: {font.weight}; "
            f"font-style: {font.style}; "
            f"src: url({_css_string(font.source.absolute().as_uri())}); "
            "}"
        )
    return "\n".join(rules)


def pdf_options(request: ConversionRequest) -> dict[str, Any]:
    options: dict[str, Any] = {"presentational_hints": request.presentational_hints}
    if request.fast_mode:
        options.update(optimize_images=False, hinting=False, cache={})
    variant = PDF_VARIANTS[request.conformance]
    if variant is not None:
        options.update(pdf_variant=variant, pdf_tags=True)
    return options


class WeasyRenderer:
    def __init__(self) -> None:
        try:
            import weasyprint
            from weasyprint.text.fonts import FontConfiguration

            from .fetcher import PolicyURLFetcher
        except ModuleNotFoundError as exc:  # pragma: no cover - import guard
            raise RuntimeError("weasyprint dependency is required to render PDF output") from exc

        self._weasyprint = weasyprint
        self._font_config_cls = FontConfiguration
        self._fetcher_cls = PolicyURLFetcher

    def _load_document(self, request: ConversionRequest, fetcher):  # type: ignore[no-untyped-def]
        source = request.source
        if isinstance(source, StrictDocument):
            return self._weasyprint.HTML(
                string=source.serialize(),
                base_url=source.base_uri,
                url_fetcher=fetcher,
                media_type=request.media_type,
            )
        return self._weasyprint.HTML(
            filename=str(source.path),
            url_fetcher=fetcher,
            media_type=request.media_type,
        )

    def _font_stylesheets(self, fonts: tuple[FontRegistration, ...], font_config) -> list:  # type: ignore[no-untyped-def]
        if not fonts:
            return []
        for font in fonts:
            if not font.source.is_file():
                raise RenderError(f"Font file not found: {font.source}")
        # Registered fonts are loaded directly, outside the resource policy.
        return [
            self._weasyprint.CSS(
                string=font_face_rules(fonts),
                font_config=font_config,
                url_fetcher=self._weasyprint.URLFetcher(),
            )
        ]

    def run(self, request: ConversionRequest, sink: BinaryIO) -> None:
        with scoped_logging(request.verbosity, RENDERER_LOGGERS):
            font_config = self._font_config_cls()
            gate = ResourceGate(request.policy, request.base_uri, svg_support=request.svg_support)
            stylesheets = self._font_stylesheets(request.fonts, font_config)
            document = self._load_document(request, self._fetcher_cls(gate))
            document.write_pdf(
                sink,
                stylesheets=stylesheets,
                font_config=font_config,
                **pdf_options(request),
            )


__all__ = [
    "GuardedSink",
    "PDF_VARIANTS",
    "Renderer",
    "ResourceGate",
    "WeasyRenderer",
    "font_face_rules",
    "pdf_options",
]
