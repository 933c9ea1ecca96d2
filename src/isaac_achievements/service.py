"""
Entry points that run the full fetch-and-extract cycle.

Failures never escape as exceptions here: every run-level error is turned
into a ``Failure`` result carrying its kind, message and a retry hint. A
failed run leaves the previously stored result untouched.
"""

import logging
from datetime import datetime

from isaac_achievements import pipeline, wiki
from isaac_achievements.cache import CacheClient
from isaac_achievements.config import Settings, get_settings
from isaac_achievements.exceptions import AchievementsError, FetchError, SchemaDriftError
from isaac_achievements.models import AchievementsEnvelope, Failure
from isaac_achievements.types import WikiParseResponse

log = logging.getLogger(__name__)

RunResult = AchievementsEnvelope | Failure


def failure_from(error: AchievementsError) -> Failure:
    return Failure(
        kind=error.kind,
        message=str(error),
        retryable=error.retryable,
        status_code=error.status_code if isinstance(error, FetchError) else None,
    )


def extract_from_payload(
    raw: bytes | str | WikiParseResponse,
    settings: Settings | None = None,
    fetched_at: datetime | None = None,
) -> RunResult:
    """Run the pipeline over an already fetched payload (HTML or parse API JSON)."""
    settings = settings or get_settings()
    try:
        payload = raw if isinstance(raw, dict) else wiki.decode_payload(raw)
        html = wiki.extract_html(payload)
        achievements = pipeline.extract_achievements(html, settings)
    except AchievementsError as e:
        log.warning("Extraction failed (%s): %s", e.kind, e)
        return failure_from(e)
    return pipeline.build_envelope(achievements, settings.source_url, fetched_at)


def refresh(
    cache: CacheClient, settings: Settings | None = None, *, force: bool = False
) -> RunResult:
    settings = settings or get_settings()
    try:
        html = wiki.get_page_html(cache, settings, force=force)
        achievements = pipeline.extract_achievements(html, settings)
    except SchemaDriftError as e:
        # Do not keep serving a page the extractor cannot read
        cache.delete_wiki_page(settings.source_url)
        log.warning("Refresh failed (%s): %s", e.kind, e)
        return failure_from(e)
    except AchievementsError as e:
        log.warning("Refresh failed (%s): %s", e.kind, e)
        return failure_from(e)

    envelope = pipeline.build_envelope(achievements, settings.source_url)
    cache.set_result(settings.source_url, envelope.model_dump(mode="json", by_alias=True))
    log.info("Stored %d achievements from %s", envelope.count, envelope.source)
    return envelope


def last_result(
    cache: CacheClient, settings: Settings | None = None
) -> AchievementsEnvelope | None:
    settings = settings or get_settings()
    data = cache.get_result(settings.source_url)
    if data is None:
        return None
    return AchievementsEnvelope.model_validate(data)
