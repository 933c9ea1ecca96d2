"""Shared fixtures for building achievement pages."""

from collections.abc import Callable

import pytest

from isaac_achievements.config import Settings

PageBuilder = Callable[..., str]


def _row(achievement_id: int) -> str:
    return (
        f"<tr><td>{achievement_id}</td>"
        f'<td><img src="/images/Achievement_{achievement_id}.png">'
        f'<a href="/wiki/Achievement_{achievement_id}">Achievement {achievement_id}</a></td>'
        f"<td>Before Repentance: old way {achievement_id}"
        f'<br>In Repentance: beat <a href="/wiki/Boss_{achievement_id}">Boss</a></td></tr>'
    )


def build_page(
    ids: range | list[int], headers: tuple[str, ...] = ("ID", "Name", "Unlock")
) -> str:
    header = "".join(f"<th>{h}</th>" for h in headers)
    rows = "".join(_row(i) for i in ids)
    return (
        "<div class='mw-parser-output'>"
        "<table class='navbox'><tr><th>Characters</th><th>Items</th></tr>"
        "<tr><td>Isaac</td><td>Breakfast</td><td>More</td></tr></table>"
        f"<table class='wikitable'><tr>{header}</tr>{rows}</table>"
        "</div>"
    )


@pytest.fixture
def make_page() -> PageBuilder:
    return build_page


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        wiki_base="https://bindingofisaacrebirth.wiki.gg",
        page="Achievements",
        min_achievements=3,
        cache_dir=tmp_path / "cache",
    )
