"""
Deduplication and plausibility check for extracted achievements.

The wiki repeats some achievements across tables; the first occurrence in
document order is kept. Output is ordered by id so repeated runs produce
identical files.
"""

import logging
from collections.abc import Iterable

from isaac_achievements.exceptions import SchemaDriftError
from isaac_achievements.models import Achievement

log = logging.getLogger(__name__)


def deduplicate(achievements: Iterable[Achievement]) -> list[Achievement]:
    by_id: dict[int, Achievement] = {}
    duplicates = 0
    for achievement in achievements:
        if achievement.id in by_id:
            duplicates += 1
            continue
        by_id[achievement.id] = achievement

    if duplicates:
        log.debug("Dropped %d duplicate achievement row(s)", duplicates)
    return sorted(by_id.values(), key=lambda a: a.id)


def validate_count(achievements: list[Achievement], minimum: int) -> None:
    if len(achievements) < minimum:
        log.warning(
            "Only %d achievements extracted (expected at least %d)", len(achievements), minimum
        )
        raise SchemaDriftError(len(achievements), minimum)
