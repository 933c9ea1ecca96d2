"""
Type definitions for MediaWiki parse API responses and pipeline intermediates.

The parse API nests rendered HTML under a ``"*"`` key, which is not a valid
identifier, hence the functional TypedDict syntax.
"""

from typing import NamedTuple, NotRequired, TypedDict

ParseText = TypedDict("ParseText", {"*": str})

WikiParse = TypedDict(
    "WikiParse",
    {
        "title": NotRequired[str],
        "pageid": NotRequired[int],
        "text": NotRequired[ParseText | str],
        "*": NotRequired[str],
    },
)


class WikiErrorInfo(TypedDict):
    code: NotRequired[str]
    info: NotRequired[str]


class WikiParseResponse(TypedDict):
    parse: NotRequired[WikiParse]
    error: NotRequired[WikiErrorInfo]


# Saved payloads may be a parse API response or the rendered HTML itself
WikiPayload = WikiParseResponse | str


class VariantCandidate(NamedTuple):
    html: str
    text: str


class RawRow(NamedTuple):
    id: int
    name: str
    unlock_html: str
    url: str | None
    image_url: str | None
