from datetime import UTC, datetime
from io import StringIO
from unittest.mock import patch

from isaac_achievements import terminal
from isaac_achievements.models import Achievement, AchievementsEnvelope, Failure


def _envelope(count: int) -> AchievementsEnvelope:
    achievements = [
        Achievement(id=i, name=f"Achievement {i}", unlock_html="Beat Mom") for i in range(count)
    ]
    return AchievementsEnvelope(
        achievements=achievements,
        count=count,
        source="https://example.wiki.gg/wiki/Achievements",
        last_fetched=datetime(2026, 1, 1, tzinfo=UTC),
    )


def test_colorize_with_tty():
    with patch("sys.stdout.isatty", return_value=True):
        result = terminal.colorize("test", terminal.Color.BRIGHT_RED)
        assert "\033[91m" in result
        assert "test" in result
        assert "\033[0m" in result


def test_colorize_without_tty():
    with patch("sys.stdout.isatty", return_value=False):
        result = terminal.colorize("test", terminal.Color.BRIGHT_RED)
        assert result == "test"


def test_link_without_tty():
    with patch("sys.stdout.isatty", return_value=False):
        result = terminal.link("https://example.com", "Example")
        assert result == "Example (https://example.com)"


def test_warning_without_tty(capsys):
    with patch("sys.stdout.isatty", return_value=False):
        terminal.warning("Dry run")

    assert capsys.readouterr().out == "⚠ Dry run\n"


def test_achievement_line_with_url():
    achievement = Achievement(
        id=7, name="Eve", unlock_html="x", url="https://example.wiki.gg/wiki/Eve"
    )
    with patch("sys.stdout.isatty", return_value=False):
        result = terminal.achievement_line(achievement)

    assert result == "#  7 Eve (https://example.wiki.gg/wiki/Eve)"


def test_envelope_summary_preview():
    output = StringIO()
    with patch("sys.stdout", output):
        terminal.envelope_summary(_envelope(8), preview=2)

    result = output.getvalue()
    assert "8 achievements" in result
    assert "Achievement 1" in result
    assert "Achievement 2" not in result
    assert "and 6 more" in result
    assert "0-7" in result


def test_failure_summary():
    output = StringIO()
    with patch("sys.stderr", output):
        terminal.failure_summary(Failure(kind="schema_drift", message="Parsed 10 achievements"))

    assert "schema_drift: Parsed 10 achievements" in output.getvalue()
