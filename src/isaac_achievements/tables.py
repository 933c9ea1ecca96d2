"""
Table location and column role inference.

Wiki tables reorder, rename and add columns over time. Instead of relying on
a fixed schema, each header cell is matched against the keyword rules and the
first column claiming a role keeps it.
"""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass

from bs4 import BeautifulSoup
from bs4.element import Tag

from isaac_achievements import dom
from isaac_achievements.heuristics import REQUIRED_ROLES, Heuristics

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnRoles:
    identifier: int
    name: int
    unlock: int
    image: int | None = None


def locate_tables(document: BeautifulSoup | Tag) -> list[Tag]:
    return list(dom.iter_tables(document))


def normalize_header(text: str, punctuation: str = ":*#().") -> str:
    normalized = re.sub(r"\s+", " ", text.lower())
    if punctuation:
        normalized = re.sub(f"[{re.escape(punctuation)}]", "", normalized)
    return normalized.strip()


def infer_roles(headers: Sequence[str], heuristics: Heuristics) -> ColumnRoles | None:
    """
    Map raw header texts to column roles.

    Headers are normalized and scanned left to right. Each header takes at
    most one role: the first rule that matches and whose role has not been
    claimed yet. Returns None when any required role is missing.
    """
    assigned: dict[str, int] = {}

    for index, raw in enumerate(headers):
        header = normalize_header(raw, heuristics.header_punctuation)
        if not header:
            continue
        for rule in heuristics.header_rules:
            if rule.role in assigned:
                continue
            if rule.matches(header):
                assigned[rule.role] = index
                break

    missing = [role for role in REQUIRED_ROLES if role not in assigned]
    if missing:
        log.debug("Headers %s missing roles %s", list(headers), missing)
        return None

    return ColumnRoles(
        identifier=assigned["identifier"],
        name=assigned["name"],
        unlock=assigned["unlock"],
        image=assigned.get("image"),
    )


def table_roles(table: Tag, heuristics: Heuristics) -> ColumnRoles | None:
    headers = [dom.text_of(cell) for cell in dom.header_cells(table)]
    if not headers:
        return None
    return infer_roles(headers, heuristics)
