"""
Row extraction for accepted achievement tables.

Rows that lack a numeric identifier or a name are legend, spacer or footnote
rows and are skipped without error.
"""

import logging
import re
from collections.abc import Iterator

from bs4.element import Tag

from isaac_achievements import dom, links
from isaac_achievements.tables import ColumnRoles
from isaac_achievements.types import RawRow

log = logging.getLogger(__name__)

MIN_DATA_CELLS = 3

_NON_DIGIT = re.compile(r"[^0-9]")


def parse_identifier(text: str) -> int | None:
    digits = _NON_DIGIT.sub("", text)
    if not digits:
        return None
    return int(digits)


def _cell(cells: list[Tag], index: int | None) -> Tag | None:
    if index is None or index >= len(cells):
        return None
    return cells[index]


def _row_image(cells: list[Tag], roles: ColumnRoles, name_cell: Tag) -> str | None:
    for cell in (_cell(cells, roles.image), name_cell, cells[0]):
        if cell is None:
            continue
        src = dom.first_image_src(cell)
        if src:
            return src
    return None


def extract_row(row: Tag, roles: ColumnRoles, base: str, page: str) -> RawRow | None:
    cells = dom.data_cells(row)
    if len(cells) < MIN_DATA_CELLS:
        return None

    id_cell = _cell(cells, roles.identifier)
    if id_cell is None:
        return None
    achievement_id = parse_identifier(dom.text_of(id_cell))
    if achievement_id is None:
        log.debug("Skipping row without numeric id: %r", dom.text_of(id_cell).strip())
        return None

    name_cell = _cell(cells, roles.name)
    if name_cell is None:
        return None
    name = dom.text_of(name_cell).strip()
    if not name:
        log.debug("Skipping achievement %d: empty name", achievement_id)
        return None

    url = links.resolve(dom.first_link_href(name_cell), base, page)
    image_url = links.resolve(
        _row_image(cells, roles, name_cell), base, page, schemes=links.IMAGE_SCHEMES
    )

    unlock_cell = _cell(cells, roles.unlock)
    unlock_html = ""
    if unlock_cell is not None:
        unlock_html = dom.inner_html(unlock_cell).strip() or dom.text_of(unlock_cell).strip()

    return RawRow(
        id=achievement_id,
        name=name,
        unlock_html=unlock_html,
        url=url,
        image_url=image_url,
    )


def extract_rows(table: Tag, roles: ColumnRoles, base: str, page: str) -> Iterator[RawRow]:
    for row in dom.rows(table)[1:]:
        raw = extract_row(row, roles, base, page)
        if raw is not None:
            yield raw
