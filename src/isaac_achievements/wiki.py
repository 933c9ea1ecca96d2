"""
Wiki client for fetching the rendered achievements page.

Wraps the MediaWiki parse API. The rendered HTML can sit in a few places in
the response depending on the API format version, so extraction tries each
known location in turn. Pages are cached for ``page_ttl`` seconds.
"""

import json
import logging
from collections.abc import Callable

import httpx

from isaac_achievements.cache import CacheClient
from isaac_achievements.config import Settings, get_settings
from isaac_achievements.exceptions import EmptyContentError, FetchError
from isaac_achievements.types import WikiParse, WikiParseResponse, WikiPayload

log = logging.getLogger(__name__)


def fetch_page_payload(settings: Settings) -> WikiParseResponse:
    page = settings.page
    try:
        response = httpx.get(
            settings.api_url,
            params={
                "action": "parse",
                "page": page,
                "prop": "text",
                "format": "json",
            },
            headers={"Accept": "application/json", "User-Agent": settings.user_agent},
            timeout=settings.api_timeout,
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise FetchError(
            f"Upstream fetch failed for wiki page '{page}': HTTP {e.response.status_code}",
            status_code=e.response.status_code,
        ) from e
    except httpx.RequestError as e:
        raise FetchError(f"Network error fetching wiki page '{page}': {e}") from e

    try:
        data: WikiParseResponse = response.json()
    except (ValueError, TypeError) as e:
        raise FetchError(f"Invalid JSON response for wiki page '{page}'") from e

    if isinstance(data, dict) and "error" in data:
        error = data["error"]
        info = error.get("info", "Unknown error") if isinstance(error, dict) else error
        raise FetchError(f"Wiki page '{page}' could not be parsed: {info}")

    return data


def _parse_section(payload: WikiPayload) -> WikiParse | None:
    if not isinstance(payload, dict):
        return None
    section = payload.get("parse")
    return section if isinstance(section, dict) else None


def _from_parse_text_star(payload: WikiPayload) -> str | None:
    section = _parse_section(payload)
    text = section.get("text") if section else None
    return text.get("*") if isinstance(text, dict) else None


def _from_parse_text(payload: WikiPayload) -> str | None:
    section = _parse_section(payload)
    text = section.get("text") if section else None
    return text if isinstance(text, str) else None


def _from_parse_star(payload: WikiPayload) -> str | None:
    section = _parse_section(payload)
    return section.get("*") if section else None


def _from_raw_html(payload: WikiPayload) -> str | None:
    return payload if isinstance(payload, str) else None


HTML_STRATEGIES: tuple[Callable[[WikiPayload], str | None], ...] = (
    _from_parse_text_star,
    _from_parse_text,
    _from_parse_star,
    _from_raw_html,
)


def extract_html(payload: WikiPayload) -> str:
    for strategy in HTML_STRATEGIES:
        html = strategy(payload)
        if isinstance(html, str) and html.strip():
            return html
    raise EmptyContentError("Wiki parse API returned no HTML content.")


def decode_payload(raw: bytes | str) -> WikiPayload:
    """Decode a saved API response or HTML document; JSON is tried first."""
    text = raw.decode("utf-8-sig", errors="replace") if isinstance(raw, bytes) else raw
    text = text.removeprefix("\ufeff")
    if text.lstrip().startswith("{"):
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            log.debug("Payload looks like JSON but does not parse; treating it as HTML")
    return text


def get_page_html(
    cache: CacheClient, settings: Settings | None = None, *, force: bool = False
) -> str:
    settings = settings or get_settings()
    source = settings.source_url

    if not force:
        cached = cache.get_wiki_page(source)
        if cached is not None:
            log.info("Wiki page '%s': using cached HTML", settings.page)
            return cached

    log.info("Wiki page '%s': fetching from wiki API", settings.page)
    html = extract_html(fetch_page_payload(settings))
    cache.set_wiki_page(source, html, ttl=settings.page_ttl)
    return html
