"""Tests for pipeline module."""

from datetime import UTC, datetime

import pytest

from isaac_achievements import dom, pipeline
from isaac_achievements.config import Settings
from isaac_achievements.exceptions import SchemaDriftError
from isaac_achievements.heuristics import load_heuristics
from isaac_achievements.sanitizer import ALLOWED_ATTRIBUTES, ALLOWED_TAGS
from isaac_achievements.types import RawRow

BASE = "https://bindingofisaacrebirth.wiki.gg"


def test_extracts_records(make_page, settings: Settings):
    achievements = pipeline.extract_achievements(make_page(range(1, 6)), settings)

    assert [a.id for a in achievements] == [1, 2, 3, 4, 5]
    first = achievements[0]
    assert first.name == "Achievement 1"
    assert first.url == f"{BASE}/wiki/Achievement_1"
    assert first.image_url == f"{BASE}/images/Achievement_1.png"


def test_unlock_markup_is_latest_variant_normalized_and_sanitized(make_page, settings):
    achievement = pipeline.extract_achievements(make_page(range(1, 4)), settings)[0]

    assert "old way" not in achievement.unlock_html
    link = dom.parse(achievement.unlock_html).find("a")
    assert link["href"] == f"{BASE}/wiki/Boss_1"
    assert link["target"] == "_blank"
    assert achievement.unlock_html.startswith("In Repentance: beat ")


def test_ids_unique_and_sorted_across_tables(make_page, settings):
    html = make_page([7, 3, 5]) + make_page([5, 1, 3, 9])

    achievements = pipeline.extract_achievements(html, settings)

    ids = [a.id for a in achievements]
    assert ids == sorted(set(ids))
    assert ids == [1, 3, 5, 7, 9]


def test_reordered_columns(settings):
    reordered = (
        "<table><tr><th>Unlock</th><th>ID</th><th>Name</th></tr>"
        "<tr><td>Beat Mom</td><td>10</td><td>Isaac's Head</td></tr>"
        "<tr><td>Beat Satan</td><td>11</td><td>Judas</td></tr>"
        "<tr><td>Beat Isaac</td><td>12</td><td>Cain</td></tr>"
        "</table>"
    )

    achievements = pipeline.extract_achievements(reordered, settings)

    assert [(a.id, a.name, a.unlock_html) for a in achievements] == [
        (10, "Isaac's Head", "Beat Mom"),
        (11, "Judas", "Beat Satan"),
        (12, "Cain", "Beat Isaac"),
    ]


def test_noisy_row_does_not_abort_run(make_page, settings):
    html = make_page(range(1, 4)).replace(
        "</table></div>",
        "<tr><td>*</td><td>Footnote</td><td>Legend</td></tr></table></div>",
    )

    achievements = pipeline.extract_achievements(html, settings)

    assert [a.id for a in achievements] == [1, 2, 3]


def test_below_floor_fails(make_page):
    settings = Settings(min_achievements=500)

    with pytest.raises(SchemaDriftError) as exc_info:
        pipeline.extract_achievements(make_page(range(1, 11)), settings)

    assert exc_info.value.count == 10


def test_no_matching_tables_fails(settings):
    with pytest.raises(SchemaDriftError):
        pipeline.extract_achievements("<p>The page moved</p>", settings)


def test_idempotent(make_page, settings):
    html = make_page(range(1, 20))

    assert pipeline.extract_achievements(html, settings) == pipeline.extract_achievements(
        html, settings
    )


def test_output_markup_within_allow_list(settings):
    html = (
        "<table><tr><th>ID</th><th>Name</th><th>Unlock</th></tr>"
        + "".join(
            f"<tr><td>{i}</td><td>A{i}</td><td>"
            f'<div style="x" onclick="y()"><script>alert({i})</script>'
            f'<p>In Repentance <a href="javascript:x()">go</a><img src="/i.png" onerror="z"></p>'
            "</div></td></tr>"
            for i in range(3)
        )
        + "</table>"
    )

    for achievement in pipeline.extract_achievements(html, settings):
        for tag in dom.parse(achievement.unlock_html).find_all(True):
            assert tag.name in ALLOWED_TAGS
            assert set(tag.attrs) <= ALLOWED_ATTRIBUTES.get(tag.name, frozenset())
        assert "alert" not in achievement.unlock_html


def test_finalize_row_fragment_link():
    raw = RawRow(
        id=1,
        name="Magdalene",
        unlock_html='See <a href="#Notes">notes</a>',
        url=None,
        image_url=None,
    )

    achievement = pipeline.finalize_row(raw, load_heuristics(), BASE, "Achievements")

    link = dom.parse(achievement.unlock_html).find("a")
    assert link["href"] == f"{BASE}/wiki/Achievements#Notes"


def test_build_envelope(make_page, settings):
    achievements = pipeline.extract_achievements(make_page(range(1, 4)), settings)
    fetched_at = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)

    envelope = pipeline.build_envelope(achievements, settings.source_url, fetched_at)

    assert envelope.count == 3
    assert envelope.source == f"{BASE}/wiki/Achievements"
    data = envelope.model_dump(mode="json", by_alias=True, exclude_none=True)
    assert data["lastFetched"] == "2026-01-02T03:04:05Z"
    assert set(data["achievements"][0]) == {"id", "name", "unlockHtml", "url", "imageUrl"}


def test_build_envelope_defaults_to_now():
    envelope = pipeline.build_envelope([], "https://example.wiki.gg/wiki/Achievements")

    assert envelope.last_fetched.tzinfo is not None
    assert envelope.count == 0
