"""
Rewrite links and image sources in wiki markup to absolute URLs.

MediaWiki renders root-relative hrefs (``/wiki/Foo``), same-page anchors
(``#Bar``) and root-relative image paths. These only work on the wiki itself,
so everything is resolved against the wiki origin before the markup leaves
the pipeline.
"""

import re

from isaac_achievements import dom

_PASSTHROUGH = re.compile(r"^(https?:|mailto:|[a-z][a-z0-9+.\-]*://)", re.IGNORECASE)
_UNSAFE_SCHEME = re.compile(r"^(javascript|vbscript|data):", re.IGNORECASE)

LINK_SCHEMES = frozenset({"http", "https", "mailto"})
IMAGE_SCHEMES = frozenset({"http", "https"})

LINK_ATTRIBUTES = {"target": "_blank", "rel": "noopener noreferrer"}
IMAGE_ATTRIBUTES = {"loading": "lazy", "decoding": "async"}


def absolutize(href: str | None, base: str, page: str) -> str:
    value = (href or "").strip()
    if not value:
        return value
    if _PASSTHROUGH.match(value):
        return value
    if _UNSAFE_SCHEME.match(value):
        # Left for the sanitizer to reject
        return value

    origin = base.rstrip("/")
    if value.startswith("//"):
        return f"https:{value}"
    if value.startswith("/"):
        return f"{origin}{value}"
    if value.startswith("#"):
        return f"{origin}/wiki/{page.replace(' ', '_')}{value}"
    return f"{origin}/{value.lstrip('/')}"


def resolve(
    href: str | None, base: str, page: str, schemes: frozenset[str] = LINK_SCHEMES
) -> str | None:
    """Absolute URL for a record field, or None when empty or of an unsafe scheme."""
    url = absolutize(href, base, page)
    scheme, sep, _ = url.partition(":")
    if not sep or scheme.lower() not in schemes:
        return None
    return url


def normalize_markup(html: str, base: str, page: str) -> str:
    if not html:
        return html

    fragment = dom.parse(html)

    for link in fragment.find_all("a", href=True):
        link["href"] = absolutize(dom.attr(link, "href"), base, page)
        link.attrs.update(LINK_ATTRIBUTES)

    for img in fragment.find_all("img"):
        src = dom.image_source(img)
        if src:
            img["src"] = absolutize(src, base, page)
        img.attrs.pop("data-src", None)
        img.attrs.pop("srcset", None)
        img.attrs.update(IMAGE_ATTRIBUTES)

    return fragment.decode()
