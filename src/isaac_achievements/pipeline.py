"""
Achievement extraction pipeline.

Turns the rendered HTML of the wiki's achievements page into a validated,
deduplicated list of achievements:

1. Locate every table in the document
2. Infer column roles from each table's header row, skipping non-data tables
3. Extract id, name, links, image and raw unlock markup per row
4. Keep only the unlock line for the newest game version
5. Rewrite links and images to absolute URLs
6. Sanitize the unlock markup
7. Deduplicate by id, sort, and enforce the minimum count
"""

import logging
from datetime import UTC, datetime

from isaac_achievements import dedupe, dom, extractor, links, sanitizer, tables, variants
from isaac_achievements.config import Settings, get_settings
from isaac_achievements.heuristics import Heuristics, load_heuristics
from isaac_achievements.models import Achievement, AchievementsEnvelope
from isaac_achievements.types import RawRow

log = logging.getLogger(__name__)


def finalize_row(raw: RawRow, heuristics: Heuristics, base: str, page: str) -> Achievement:
    chosen = variants.select_variant(raw.unlock_html, heuristics)
    normalized = links.normalize_markup(chosen, base, page)
    return Achievement(
        id=raw.id,
        name=raw.name,
        unlock_html=sanitizer.sanitize(normalized),
        url=raw.url,
        image_url=raw.image_url,
    )


def extract_achievements(
    html: str,
    settings: Settings | None = None,
    heuristics: Heuristics | None = None,
) -> list[Achievement]:
    settings = settings or get_settings()
    heuristics = heuristics or load_heuristics(settings.heuristics_file)
    base, page = settings.wiki_base, settings.page

    document = dom.parse(html)
    found = tables.locate_tables(document)

    records: list[Achievement] = []
    accepted = 0
    for position, table in enumerate(found):
        roles = tables.table_roles(table, heuristics)
        if roles is None:
            log.debug("Table %d: no achievement columns, skipping", position)
            continue
        accepted += 1
        for raw in extractor.extract_rows(table, roles, base, page):
            records.append(finalize_row(raw, heuristics, base, page))

    achievements = dedupe.deduplicate(records)
    log.info(
        "Extracted %d achievements from %d of %d table(s)",
        len(achievements),
        accepted,
        len(found),
    )
    dedupe.validate_count(achievements, settings.min_achievements)
    return achievements


def build_envelope(
    achievements: list[Achievement],
    source: str,
    fetched_at: datetime | None = None,
) -> AchievementsEnvelope:
    return AchievementsEnvelope(
        achievements=achievements,
        count=len(achievements),
        source=source,
        last_fetched=fetched_at or datetime.now(UTC),
    )
