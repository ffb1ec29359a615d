"""WeasyPrint URL fetcher bound to a resource gate.

Kept apart from ``renderer`` so that importing the package does not load
WeasyPrint and its native libraries.
"""

from __future__ import annotations

from typing import Any

from weasyprint.urls import URLFetcher, URLFetcherResponse

from .policy import ResourceBlockedError
from .renderer import ResourceGate


class PolicyURLFetcher(URLFetcher):
    def __init__(self, gate: ResourceGate, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._gate = gate

    def fetch(self, url: str, headers: Any = None) -> URLFetcherResponse:
        try:
            resolved = self._gate.resolve(url)
        except ResourceBlockedError:
            # A redirect stashes its request in open(); drop it with the refusal.
            self._request = None
            raise
        return super().fetch(resolved, headers)


__all__ = ["PolicyURLFetcher"]
