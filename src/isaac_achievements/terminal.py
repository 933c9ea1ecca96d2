"""
Terminal output for the achievement scripts.

Colour is only emitted when stdout is a TTY, so redirected output stays plain.
"""

import sys
from enum import Enum

from isaac_achievements.models import Achievement, AchievementsEnvelope, Failure


class Color(Enum):
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    BRIGHT_BLACK = "\033[90m"
    BRIGHT_RED = "\033[91m"
    BRIGHT_GREEN = "\033[92m"
    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_BLUE = "\033[94m"
    BRIGHT_CYAN = "\033[96m"
    BRIGHT_WHITE = "\033[97m"


def _supports_color() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def colorize(text: str, *colors: Color) -> str:
    if not _supports_color():
        return text
    prefix = "".join(c.value for c in colors)
    return f"{prefix}{text}{Color.RESET.value}"


def debug(message: str) -> None:
    print(colorize(message, Color.DIM, Color.BRIGHT_BLACK))


def info(message: str) -> None:
    print(message)


def success(message: str) -> None:
    print(colorize(message, Color.BRIGHT_GREEN))


def warning(message: str) -> None:
    print(colorize(f"⚠ {message}", Color.BRIGHT_YELLOW))


def error(message: str) -> None:
    print(colorize(f"✗ {message}", Color.BRIGHT_RED), file=sys.stderr)


def key_value(key: str, value: str, indent: int = 0) -> None:
    spaces = " " * indent
    colored_key = colorize(f"{key}:", Color.BRIGHT_WHITE)
    print(f"{spaces}{colored_key} {value}")


def bullet(message: str, indent: int = 2, symbol: str = "•") -> None:
    spaces = " " * indent
    print(f"{spaces}{colorize(symbol, Color.BRIGHT_BLUE)} {message}")


def link(url: str, label: str | None = None) -> str:
    display = label or url
    if _supports_color():
        colored_text = colorize(display, Color.BRIGHT_CYAN, Color.BOLD)
        return f"\033]8;;{url}\033\\{colored_text}\033]8;;\033\\"
    return f"{display} ({url})"


def achievement_line(achievement: Achievement) -> str:
    label = colorize(f"#{achievement.id:>3}", Color.BRIGHT_CYAN)
    name = link(achievement.url, achievement.name) if achievement.url else achievement.name
    return f"{label} {name}"


def envelope_summary(envelope: AchievementsEnvelope, preview: int = 5) -> None:
    success(f"✓ {envelope.count} achievements")
    key_value("Source", link(envelope.source), indent=2)
    key_value("Fetched", envelope.last_fetched.isoformat(), indent=2)
    if envelope.achievements:
        first, last = envelope.achievements[0], envelope.achievements[-1]
        key_value("Id range", f"{first.id}-{last.id}", indent=2)
    for achievement in envelope.achievements[:preview]:
        bullet(achievement_line(achievement), indent=2)
    if envelope.count > preview:
        debug(f"  ... and {envelope.count - preview} more")


def failure_summary(failure: Failure) -> None:
    error(f"{failure.kind}: {failure.message}")
    if failure.status_code is not None:
        key_value("HTTP status", str(failure.status_code), indent=2)
    if failure.retryable:
        debug("  This failure is usually temporary; try again later.")
