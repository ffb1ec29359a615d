from __future__ import annotations

import time
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .config import AppConfig
from .errors import ConversionError, OutputError, RenderError
from .logging import PACKAGE_LOGGERS, RunLogEntry, RunLogger, scoped_logging
from .models import Conformance, ConversionOptions, ConversionResult, Verbosity
from .policy import ResourcePolicy
from .renderer import GuardedSink, Renderer, WeasyRenderer
from .request import ConversionRequest, build_request


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class ConversionService:
    def __init__(
        self,
        config: AppConfig | None = None,
        renderer: Renderer | None = None,
        *,
        console: Console | None = None,
        error_console: Console | None = None,
    ) -> None:
        self._config = config or AppConfig()
        self._renderer = renderer
        self._console = console or Console(soft_wrap=True)
        self._error_console = error_console or Console(stderr=True, soft_wrap=True)

    def build(self, options: ConversionOptions) -> ConversionRequest:
        return build_request(options, self._config)

    def convert(self, options: ConversionOptions) -> ConversionResult:
        """Build a request from ``options`` and run it. Never raises ConversionError."""

        verbosity = options.verbosity
        start = time.perf_counter()
        with scoped_logging(verbosity, PACKAGE_LOGGERS):
            self._progress(
                verbosity,
                f"Attempting to convert '{options.input_path.absolute()}' "
                f"to PDF at '{options.output_path.absolute()}'",
            )
            try:
                request = self.build(options)
            except ConversionError as exc:
                result = self._failure(options.output_path, start, exc)
            else:
                result = self.execute(request, options.output_path, start=start)
        self._log_run(options, result)
        return result

    def execute(
        self,
        request: ConversionRequest,
        output_path: Path,
        *,
        start: float | None = None,
    ) -> ConversionResult:
        """Run ``request`` once, writing the PDF to ``output_path``."""

        start = time.perf_counter() if start is None else start
        for font in request.fonts:
            self._progress(
                request.verbosity,
                f"Loading font '{font.source}' as '{font.family}' (weight {font.weight})",
            )
        try:
            self._render(request, output_path)
        except ConversionError as exc:
            return self._failure(output_path, start, exc)
        elapsed = _elapsed_ms(start)
        self._progress(request.verbosity, f"Successfully created PDF in {elapsed}ms")
        return ConversionResult(success=True, elapsed_ms=elapsed, output_path=output_path)

    def _get_renderer(self) -> Renderer:
        if self._renderer is None:
            self._renderer = WeasyRenderer()
        return self._renderer

    def _render(self, request: ConversionRequest, output_path: Path) -> None:
        try:
            with output_path.open("wb") as handle:
                self._run_renderer(request, GuardedSink(handle, output_path))
        except OSError as exc:
            raise OutputError(f"Unable to write output file {output_path}: {exc}") from exc

    def _run_renderer(self, request: ConversionRequest, sink: GuardedSink) -> None:
        try:
            self._get_renderer().run(request, sink)
        except ConversionError:
            raise
        except Exception as exc:
            raise RenderError(f"Rendering failed: {exc}") from exc

    def _failure(self, output_path: Path, start: float, exc: ConversionError) -> ConversionResult:
        self._error_console.print(f"[red]Conversion failed[/red]: {exc.code} - {escape(str(exc))}")
        return ConversionResult(
            success=False,
            elapsed_ms=_elapsed_ms(start),
            output_path=output_path,
            error_message=str(exc),
            error_code=exc.code,
        )

    def _progress(self, verbosity: Verbosity, message: str) -> None:
        if verbosity is Verbosity.QUIET:
            return
        self._console.print(escape(message))

    def _log_run(self, options: ConversionOptions, result: ConversionResult) -> None:
        log_file = self._config.runtime.log_file
        if log_file is None:
            return
        entry = RunLogEntry(
            source=str(options.input_path),
            output_path=str(options.output_path),
            status="success" if result.success else "failure",
            error_code=result.error_code,
            elapsed_ms=result.elapsed_ms,
            fonts=len(self._config.fonts) + len(options.fonts),
            policy=ResourcePolicy.from_flag(options.block).name,
            conformance=Conformance.from_flag(options.accessible).value,
        )
        try:
            RunLogger(log_file).append(entry)
        except OSError as exc:
            # The run log is a side record; its failure does not change the result.
            self._error_console.print(
                f"[yellow]Warning[/yellow]: unable to write run log {escape(str(log_file))}: {escape(str(exc))}"
            )


__all__ = [
    "ConversionService",
    "ConversionResult",
    "ConversionOptions",
    "ConversionError",
]
