"""
Pick the current-version line out of a multi-version unlock cell.

A single unlock cell often lists how an achievement was obtained across
several releases, one per list item or line break. Only the line relevant to
the newest release is kept; the rest is discarded.
"""

import logging
import re

from isaac_achievements import dom
from isaac_achievements.heuristics import Heuristics
from isaac_achievements.types import VariantCandidate

log = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"<br\s*/?>", re.IGNORECASE)


def split_candidates(html: str) -> list[VariantCandidate]:
    """List items become candidates when present, otherwise ``<br>``-separated lines."""
    items = dom.parse(html).find_all("li")
    if items:
        return [VariantCandidate(html=dom.inner_html(li), text=dom.text_of(li)) for li in items]

    candidates = []
    for part in _LINE_BREAK.split(html):
        part = part.strip()
        if part:
            candidates.append(VariantCandidate(html=part, text=dom.text_of(dom.parse(part))))
    return candidates


def select_variant(html: str, heuristics: Heuristics) -> str:
    if not html:
        return html

    candidates = split_candidates(html)
    if not candidates:
        return html

    for rule in heuristics.variant_rules:
        matching = [
            c
            for c in candidates
            if rule.pattern.search(c.text)
            and not (rule.skip_exclusions and heuristics.is_exclusion(c.text))
        ]
        if matching:
            log.debug(
                "Variant rule '%s' matched %d of %d lines",
                rule.label,
                len(matching),
                len(candidates),
            )
            return matching[-1].html

    return candidates[-1].html
