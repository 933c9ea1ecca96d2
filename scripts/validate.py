"""Validate a written achievements file against the JSON Schema and Pydantic models."""

import argparse
import json
import sys
from pathlib import Path

from jsonschema import Draft202012Validator
from pydantic import ValidationError as PydanticValidationError

from isaac_achievements.models import AchievementsEnvelope

REPO_ROOT = Path(__file__).parent.parent
SCHEMA_PATH = REPO_ROOT / "data" / "schema" / "achievements.schema.json"
DEFAULT_PATH = REPO_ROOT / "data" / "achievements.json"


def load_schema() -> dict:
    with open(SCHEMA_PATH) as f:
        return json.load(f)


def check_invariants(data: dict) -> list[str]:
    errors: list[str] = []
    achievements = data.get("achievements") or []
    ids = [a.get("id") for a in achievements if isinstance(a, dict)]

    if data.get("count") != len(achievements):
        errors.append(f"count is {data.get('count')} but {len(achievements)} achievements listed")

    for previous, current in zip(ids, ids[1:]):
        if not isinstance(previous, int) or not isinstance(current, int):
            continue
        if current == previous:
            errors.append(f"duplicate id {current}")
        elif current < previous:
            errors.append(f"id {current} listed after {previous}")

    return errors


def validate_file(filepath: Path, validator: Draft202012Validator) -> list[str]:
    errors: list[str] = []

    try:
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        errors.append(f"JSON parse error: {e}")
        return errors

    if not isinstance(data, dict):
        errors.append("File must contain a JSON object")
        return errors

    for error in validator.iter_errors(data):
        path = " -> ".join(str(p) for p in error.absolute_path)
        location = f" at {path}" if path else ""
        errors.append(f"Schema: {error.message}{location}")

    try:
        AchievementsEnvelope.model_validate(data)
    except PydanticValidationError as e:
        for err in e.errors():
            loc = " -> ".join(str(part) for part in err["loc"])
            errors.append(f"Model: {err['msg']} at {loc}")

    errors.extend(check_invariants(data))
    return errors


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate an achievements JSON file")
    parser.add_argument("path", type=Path, nargs="?", default=DEFAULT_PATH)
    args = parser.parse_args()

    if not args.path.exists():
        print(f"No achievements file at {args.path}. Nothing to validate.")
        return 0

    validator = Draft202012Validator(load_schema())
    errors = validate_file(args.path, validator)

    if errors:
        print(f"\n{args.path.name}:")
        for error in errors:
            print(f"  - {error}")
        print(f"\n{len(errors)} error(s)")
        return 1

    print(f"{args.path.name} is valid.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
