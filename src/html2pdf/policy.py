"""Access policy for external resources referenced by a document.

A policy is a resolver plus two access controllers: one consulted with the
reference as written, before it is resolved against the base URI, and one
consulted with the resolved URI. Both gates and the resolver must agree
before a resource is fetched.
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import Protocol
from urllib.parse import urljoin, urlsplit


class ResourceKind(str, Enum):
    IMAGE = "image"
    STYLESHEET = "stylesheet"
    FONT = "font"
    SVG = "svg"
    OTHER = "other"


EXTENSION_MAP: dict[str, ResourceKind] = {
    ".css": ResourceKind.STYLESHEET,
    ".svg": ResourceKind.SVG,
    ".svgz": ResourceKind.SVG,
    ".ttf": ResourceKind.FONT,
    ".otf": ResourceKind.FONT,
    ".woff": ResourceKind.FONT,
    ".woff2": ResourceKind.FONT,
}

MIME_MAP: dict[str, ResourceKind] = {
    "text/css": ResourceKind.STYLESHEET,
    "image/svg+xml": ResourceKind.SVG,
}


class ResourceBlockedError(PermissionError):
    def __init__(self, uri: str) -> None:
        super().__init__(f"Access to external resource blocked: {uri}")
        self.uri = uri


def _kind_for_mime(mime: str | None) -> ResourceKind | None:
    if not mime:
        return None
    mime = mime.lower()
    if mime in MIME_MAP:
        return MIME_MAP[mime]
    if mime.startswith("image/"):
        return ResourceKind.IMAGE
    if mime.startswith("font/") or mime.startswith("application/font"):
        return ResourceKind.FONT
    return None


def guess_resource_kind(uri: str) -> ResourceKind:
    parts = urlsplit(uri)
    if parts.scheme == "data":
        media_type = parts.path.split(",", 1)[0].split(";", 1)[0]
        return _kind_for_mime(media_type) or ResourceKind.OTHER
    extension = PurePosixPath(parts.path).suffix.lower()
    if extension in EXTENSION_MAP:
        return EXTENSION_MAP[extension]
    mime, _ = mimetypes.guess_type(parts.path.lower())
    return _kind_for_mime(mime) or ResourceKind.OTHER


class URIResolver(Protocol):
    def resolve(self, base: str | None, reference: str) -> str | None:  # pragma: no cover - interface
        ...


class AccessController(Protocol):
    def allows(self, uri: str, kind: ResourceKind) -> bool:  # pragma: no cover - interface
        ...


class StandardResolver:
    def resolve(self, base: str | None, reference: str) -> str | None:
        if not base:
            return reference
        return urljoin(base, reference)


class NullResolver:
    """Resolves nothing."""

    def resolve(self, base: str | None, reference: str) -> str | None:
        return None


class AllowAll:
    def allows(self, uri: str, kind: ResourceKind) -> bool:
        return True


class DenyAll:
    def allows(self, uri: str, kind: ResourceKind) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class ResourcePolicy:
    name: str
    resolver: URIResolver
    before_resolving: AccessController
    after_resolving: AccessController

    @classmethod
    def unrestricted(cls) -> "ResourcePolicy":
        return cls(
            name="unrestricted",
            resolver=StandardResolver(),
            before_resolving=AllowAll(),
            after_resolving=AllowAll(),
        )

    @classmethod
    def block_all(cls) -> "ResourcePolicy":
        return cls(
            name="block-all",
            resolver=NullResolver(),
            before_resolving=DenyAll(),
            after_resolving=DenyAll(),
        )

    @classmethod
    def from_flag(cls, block: bool) -> "ResourcePolicy":
        return cls.block_all() if block else cls.unrestricted()

    def resolve(self, base: str | None, reference: str, kind: ResourceKind | None = None) -> str | None:
        """Return the URI to fetch for ``reference``, or None when access is refused."""

        kind = kind or guess_resource_kind(reference)
        if not self.before_resolving.allows(reference, kind):
            return None
        resolved = self.resolver.resolve(base, reference)
        if resolved is None:
            return None
        if not self.after_resolving.allows(resolved, kind):
            return None
        return resolved


__all__ = [
    "AccessController",
    "AllowAll",
    "DenyAll",
    "NullResolver",
    "ResourceBlockedError",
    "ResourceKind",
    "ResourcePolicy",
    "StandardResolver",
    "URIResolver",
    "guess_resource_kind",
]
