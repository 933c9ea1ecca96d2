"""
Allow-list sanitizer for unlock markup.

Everything scraped from the wiki is untrusted. Only inline formatting, lists,
links, images and code spans survive, each with a fixed attribute set and,
for URL attributes, a fixed set of schemes. Disallowed tags are unwrapped so
their text remains; tags whose content is never meant to be shown are
dropped entirely.
"""

import re

from bs4.element import Tag

from isaac_achievements import dom
from isaac_achievements.links import IMAGE_SCHEMES, LINK_SCHEMES

ALLOWED_TAGS = frozenset(
    {"a", "b", "strong", "i", "em", "span", "ul", "ol", "li", "br", "code", "img"}
)

ALLOWED_ATTRIBUTES: dict[str, frozenset[str]] = {
    "a": frozenset({"href", "target", "rel", "title"}),
    "span": frozenset({"class"}),
    "img": frozenset({"src", "alt", "title", "width", "height", "loading", "decoding"}),
}

ALLOWED_SCHEMES: dict[str, frozenset[str]] = {"a": LINK_SCHEMES, "img": IMAGE_SCHEMES}

URL_ATTRIBUTES = {"a": "href", "img": "src"}

DISCARD_CONTENT_TAGS = frozenset(
    {"script", "style", "textarea", "option", "noscript", "iframe", "object", "embed", "template"}
)

_SCHEME = re.compile(r"^([a-z][a-z0-9+.\-]*):", re.IGNORECASE)
_IGNORED_URL_CHARS = re.compile(r"[\x00-\x20\x7f]+")


def _scheme_allowed(url: str, schemes: frozenset[str]) -> bool:
    # Browsers ignore whitespace and control characters inside a scheme
    compact = _IGNORED_URL_CHARS.sub("", url)
    match = _SCHEME.match(compact)
    if match is None:
        return True
    return match.group(1).lower() in schemes


def _filter_attributes(tag: Tag) -> None:
    allowed = ALLOWED_ATTRIBUTES.get(tag.name, frozenset())
    for name in list(tag.attrs):
        if name not in allowed:
            del tag.attrs[name]

    url_attr = URL_ATTRIBUTES.get(tag.name)
    if url_attr is None:
        return
    url = dom.attr(tag, url_attr)
    if url is not None and not _scheme_allowed(url, ALLOWED_SCHEMES[tag.name]):
        del tag.attrs[url_attr]


def _clean_children(node: Tag) -> None:
    for child in list(node.children):
        if dom.is_element(child):
            if child.name in DISCARD_CONTENT_TAGS:
                child.decompose()
                continue
            _clean_children(child)
            if child.name not in ALLOWED_TAGS:
                child.unwrap()
                continue
            _filter_attributes(child)
            if child.name == "img" and dom.attr(child, "src") is None:
                child.decompose()
        elif not dom.is_text(child):
            child.extract()


def sanitize(html: str) -> str:
    if not html:
        return html
    fragment = dom.parse(html)
    _clean_children(fragment)
    return fragment.decode()
