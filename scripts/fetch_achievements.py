"""
CLI script for fetching the achievement list.

Runs the extraction pipeline:
1. Fetch the rendered achievements page (or read a saved payload)
2. Extract, normalize and sanitize achievements from its tables
3. Validate the result against the minimum count
4. Write the result envelope to a JSON file
"""

import argparse
import logging
import sys
from pathlib import Path

from isaac_achievements import service, terminal
from isaac_achievements.cache import CacheClient
from isaac_achievements.config import get_settings
from isaac_achievements.models import AchievementsEnvelope, Failure


def run(
    cache: CacheClient,
    output: Path | None,
    *,
    from_file: Path | None = None,
    force: bool = False,
    dry_run: bool = False,
) -> int:
    settings = get_settings()

    if from_file is not None:
        if not from_file.exists():
            terminal.error(f"Payload file not found: {from_file}")
            return 1
        terminal.info(f"Reading saved payload from {from_file}")
        result = service.extract_from_payload(from_file.read_bytes(), settings)
    else:
        terminal.info(f"Fetching {terminal.link(settings.source_url)}")
        result = service.refresh(cache, settings, force=force)

    if isinstance(result, Failure):
        terminal.failure_summary(result)
        return 1

    terminal.envelope_summary(result)

    if dry_run or output is None:
        if dry_run:
            terminal.warning(f"Dry run: {output} not written")
        return 0

    write_envelope(result, output)
    terminal.success(f"✓ Written to {output}")
    return 0


def write_envelope(envelope: AchievementsEnvelope, output: Path) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8") as f:
        f.write(envelope.to_json())
        f.write("\n")


def main() -> None:
    parser = argparse.ArgumentParser(description="Fetch the achievement list from the wiki")
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--from-file",
        type=Path,
        default=None,
        help="Extract from a saved page HTML or parse API JSON instead of fetching",
    )
    group.add_argument(
        "--clear-cache",
        nargs="*",
        metavar="TAG",
        help="Clear cache (optionally specify tags: wiki, result)",
    )

    parser.add_argument(
        "--output",
        type=Path,
        default=Path("data/achievements.json"),
        help="Where to write the result (default: data/achievements.json)",
    )
    parser.add_argument("--force", action="store_true", help="Ignore the cached page")
    parser.add_argument("--dry-run", action="store_true", help="Print a summary without writing")

    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(message)s",
    )
    cache = CacheClient(settings.cache_dir)

    if args.clear_cache is not None:
        tags = args.clear_cache if args.clear_cache else None
        cache.clear_cache(tags)
        tag_str = f" ({', '.join(tags)})" if tags else " (all)"
        terminal.success(f"Cache cleared{tag_str}")
        return

    try:
        code = run(
            cache,
            args.output,
            from_file=args.from_file,
            force=args.force,
            dry_run=args.dry_run,
        )
    except OSError as e:
        terminal.error(f"Could not write output: {e}")
        sys.exit(1)

    sys.exit(code)


if __name__ == "__main__":
    main()
