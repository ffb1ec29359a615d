import pytest

from html2pdf.policy import (
    DenyAll,
    NullResolver,
    ResourceKind,
    ResourcePolicy,
    StandardResolver,
    guess_resource_kind,
)

URIS = [
    "images/logo.png",
    "../style.css",
    "file:///etc/passwd",
    "https://example.com/font.woff2",
    "data:image/png;base64,iVBORw0KGgo=",
    "",
]


@pytest.mark.parametrize("uri", URIS)
@pytest.mark.parametrize("kind", list(ResourceKind))
def test_block_all_denies_everything(uri: str, kind: ResourceKind) -> None:
    policy = ResourcePolicy.block_all()
    assert policy.resolver.resolve("file:///docs/page.html", uri) is None
    assert policy.before_resolving.allows(uri, kind) is False
    assert policy.after_resolving.allows(uri, kind) is False
    assert policy.resolve("file:///docs/page.html", uri, kind) is None


def test_unrestricted_resolves_against_base() -> None:
    policy = ResourcePolicy.unrestricted()
    assert policy.resolve("file:///docs/page.html", "images/logo.png") == "file:///docs/images/logo.png"
    assert policy.resolve(None, "https://example.com/a.css") == "https://example.com/a.css"


def test_from_flag() -> None:
    assert ResourcePolicy.from_flag(True).name == "block-all"
    assert ResourcePolicy.from_flag(False).name == "unrestricted"


def test_post_resolution_gate_is_checked() -> None:
    policy = ResourcePolicy(
        name="custom",
        resolver=StandardResolver(),
        before_resolving=ResourcePolicy.unrestricted().before_resolving,
        after_resolving=DenyAll(),
    )
    assert policy.resolve("file:///docs/", "a.png") is None


def test_null_resolver_short_circuits() -> None:
    policy = ResourcePolicy(
        name="custom",
        resolver=NullResolver(),
        before_resolving=ResourcePolicy.unrestricted().before_resolving,
        after_resolving=ResourcePolicy.unrestricted().after_resolving,
    )
    assert policy.resolve("file:///docs/", "a.png") is None


@pytest.mark.parametrize(
    ("uri", "kind"),
    [
        ("file:///a/style.css", ResourceKind.STYLESHEET),
        ("https://x.org/logo.PNG", ResourceKind.IMAGE),
        ("drawing.svg", ResourceKind.SVG),
        ("fonts/Inter.woff2", ResourceKind.FONT),
        ("data:image/svg+xml;utf8,<svg/>", ResourceKind.SVG),
        ("data:text/css,body{}", ResourceKind.STYLESHEET),
        ("https://x.org/", ResourceKind.OTHER),
    ],
)
def test_guess_resource_kind(uri: str, kind: ResourceKind) -> None:
    assert guess_resource_kind(uri) is kind
