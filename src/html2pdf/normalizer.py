"""Turn an input path into a document source the renderer can consume.

Plain HTML is parsed forgivingly and rebuilt as a namespace-qualified tree
(every HTML element lives in the XHTML namespace). Input declared as strict
XHTML is handed to the renderer untouched, which then resolves relative
references against the file's own location.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

import html5lib
from html5lib.serializer import HTMLSerializer
from lxml import etree

from .errors import ConfigError, ParseError

logger = logging.getLogger(__name__)

XHTML_NAMESPACE = "http://www.w3.org/1999/xhtml"
DEFAULT_ENCODING = "utf-8"

# Code points html5lib passes through but lxml refuses to store.
XML_INVALID_CHARS = re.compile("[\x00-\x08\x0B\x0E-\x1F\uFFFE\uFFFF]")
REPLACEMENT_CHAR = "\uFFFD"


@dataclass(frozen=True, slots=True)
class StrictDocument:
    tree: etree._ElementTree
    base_uri: str
    path: Path

    @property
    def root(self) -> etree._Element:
        return self.tree.getroot()

    def serialize(self) -> str:
        walker = html5lib.getTreeWalker("lxml")
        serializer = HTMLSerializer(
            omit_optional_tags=False,
            quote_attr_values="always",
            use_trailing_solidus=True,
            minimize_boolean_attributes=False,
        )
        return serializer.render(walker(self.tree))


@dataclass(frozen=True, slots=True)
class FileDocument:
    path: Path


DocumentSource = StrictDocument | FileDocument


def normalize(data: bytes, encoding: str = DEFAULT_ENCODING) -> etree._ElementTree:
    try:
        text = data.decode(encoding, errors="replace")
    except LookupError as exc:
        raise ParseError(f"Unknown input encoding: {encoding}") from exc
    text = text.removeprefix("\ufeff").replace("\f", " ")
    text = XML_INVALID_CHARS.sub(REPLACEMENT_CHAR, text)
    parser = html5lib.HTMLParser(
        tree=html5lib.getTreeBuilder("lxml"),
        namespaceHTMLElements=True,
    )
    try:
        document = parser.parse(text)
    except (ValueError, etree.LxmlError) as exc:
        raise ParseError(f"Unable to normalize HTML: {exc}") from exc
    if isinstance(document, etree._Element):
        return document.getroottree()
    return document


def _file_uri(path: Path) -> str:
    uri = path.as_uri()
    if path.is_dir() and not uri.endswith("/"):
        uri += "/"
    return uri


def compute_base_uri(input_path: Path, base_path: str | None = None) -> str:
    """Return the absolute ``file:`` URI relative references resolve against.

    An explicit base path wins over the input location. Existing directories
    get a trailing slash so that references resolve inside them.
    """

    if base_path is None:
        try:
            return input_path.absolute().as_uri()
        except ValueError as exc:
            raise ConfigError(f"Invalid input path for base URI: {input_path}") from exc
    if "\x00" in base_path:
        raise ConfigError(f"Invalid base path: {base_path!r}")
    try:
        return _file_uri(Path(os.path.normpath(os.path.abspath(base_path))))
    except (ValueError, OSError) as exc:
        raise ConfigError(f"Invalid base path: {base_path!r}") from exc


def read_document(path: Path, encoding: str = DEFAULT_ENCODING) -> etree._ElementTree:
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ParseError(f"Unable to read input document {path}: {exc}") from exc
    return normalize(data, encoding)


def prepare_document(
    input_path: Path,
    *,
    xhtml: bool,
    base_path: str | None = None,
    encoding: str = DEFAULT_ENCODING,
) -> DocumentSource:
    if xhtml:
        if not input_path.is_file():
            raise ParseError(f"Input document not found: {input_path}")
        if base_path is not None:
            logger.debug("Ignoring base path %s for strict XHTML input", base_path)
        return FileDocument(path=input_path)
    tree = read_document(input_path, encoding)
    base_uri = compute_base_uri(input_path, base_path)
    return StrictDocument(tree=tree, base_uri=base_uri, path=input_path)


__all__ = [
    "DocumentSource",
    "FileDocument",
    "StrictDocument",
    "XHTML_NAMESPACE",
    "compute_base_uri",
    "normalize",
    "prepare_document",
    "read_document",
]
