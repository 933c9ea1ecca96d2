"""
Typed traversal helpers over BeautifulSoup documents.

Wiki markup is walked through these functions rather than ad-hoc attribute
access, so every lookup has an explicit node kind and attribute lookups
return ``None`` instead of raising.
"""

from collections.abc import Iterator
from typing import TypeGuard

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

_PARSER = "html.parser"
_CELL_TAGS = ["th", "td"]


def parse(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, _PARSER)


def is_element(node: PageElement) -> TypeGuard[Tag]:
    return isinstance(node, Tag)


def is_text(node: PageElement) -> TypeGuard[NavigableString]:
    # Comments, CDATA and doctypes are NavigableStrings too, but never rendered text
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def attr(node: Tag, name: str) -> str | None:
    value = node.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        return " ".join(value)
    return value


def text_of(node: Tag) -> str:
    return node.get_text()


def inner_html(node: Tag) -> str:
    return node.decode_contents()


def iter_tables(root: Tag) -> Iterator[Tag]:
    yield from root.find_all("table")


def rows(table: Tag) -> list[Tag]:
    """Rows belonging to ``table`` itself, excluding rows of nested tables."""
    return [tr for tr in table.find_all("tr") if tr.find_parent("table") is table]


def cells(row: Tag) -> list[Tag]:
    return row.find_all(_CELL_TAGS, recursive=False)


def data_cells(row: Tag) -> list[Tag]:
    return row.find_all("td", recursive=False)


def header_cells(table: Tag) -> list[Tag]:
    table_rows = rows(table)
    if not table_rows:
        return []
    return cells(table_rows[0])


def first_link_href(node: Tag) -> str | None:
    link = node.find("a", href=True)
    if link is None:
        return None
    return attr(link, "href")


def image_source(img: Tag) -> str | None:
    src = attr(img, "src")
    if src and not src.startswith("data:"):
        return src
    # Lazy-loaded thumbnails keep the real source in data-src
    return attr(img, "data-src") or src


def first_image_src(node: Tag) -> str | None:
    img = node.find("img")
    if img is None:
        return None
    return image_source(img)
