"""
Keyword rule tables for reading the achievements tables.

Header-role rules and version-variant rules live in a YAML file shipped with
the package so the wording they track can be tuned without touching the
extraction code. A different file can be supplied through
``ISAAC_HEURISTICS_FILE``.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from isaac_achievements.exceptions import HeuristicsError

log = logging.getLogger(__name__)

Role = Literal["identifier", "name", "unlock", "image"]

_DEFAULT_FILE = "heuristics.yaml"

REQUIRED_ROLES: tuple[Role, ...] = ("identifier", "name", "unlock")


def _compile(value: object) -> re.Pattern[str]:
    if isinstance(value, re.Pattern):
        return value
    if not isinstance(value, str):
        raise ValueError("pattern must be a string")
    try:
        return re.compile(value, re.IGNORECASE)
    except re.error as e:
        raise ValueError(f"invalid regular expression {value!r}: {e}") from e


class HeaderRule(BaseModel):
    role: Role
    exact: list[str] = Field(default_factory=list)
    contains: list[str] = Field(default_factory=list)
    patterns: list[re.Pattern[str]] = Field(default_factory=list)

    @field_validator("patterns", mode="before")
    @classmethod
    def _compile_patterns(cls, value: object) -> object:
        if isinstance(value, list):
            return [_compile(v) for v in value]
        return value

    def matches(self, header: str) -> bool:
        if header in self.exact:
            return True
        if any(keyword in header for keyword in self.contains):
            return True
        return any(pattern.search(header) for pattern in self.patterns)


class VariantRule(BaseModel):
    label: str
    pattern: re.Pattern[str]
    skip_exclusions: bool = False

    @field_validator("pattern", mode="before")
    @classmethod
    def _compile_pattern(cls, value: object) -> re.Pattern[str]:
        return _compile(value)


class Heuristics(BaseModel):
    version: int
    header_punctuation: str = ""
    header_rules: list[HeaderRule]
    exclusion_pattern: re.Pattern[str]
    variant_rules: list[VariantRule]

    @field_validator("exclusion_pattern", mode="before")
    @classmethod
    def _compile_exclusion(cls, value: object) -> re.Pattern[str]:
        return _compile(value)

    @model_validator(mode="after")
    def _check_required_roles_have_rules(self) -> Heuristics:
        covered = {rule.role for rule in self.header_rules}
        missing = [role for role in REQUIRED_ROLES if role not in covered]
        if missing:
            raise ValueError(f"required roles without a header rule: {missing}")
        return self

    def is_exclusion(self, text: str) -> bool:
        return self.exclusion_pattern.search(text) is not None


def parse_heuristics(text: str, origin: str = "<string>") -> Heuristics:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise HeuristicsError(f"Heuristics file {origin} is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise HeuristicsError(f"Heuristics file {origin} must contain a mapping")

    try:
        return Heuristics.model_validate(data)
    except PydanticValidationError as e:
        raise HeuristicsError(f"Invalid heuristics in {origin}: {e}") from e


@lru_cache(maxsize=8)
def load_heuristics(path: Path | None = None) -> Heuristics:
    if path is None:
        text = resources.files("isaac_achievements").joinpath(_DEFAULT_FILE).read_text("utf-8")
        return parse_heuristics(text, origin=_DEFAULT_FILE)

    if not path.exists():
        raise HeuristicsError(f"Heuristics file not found at {path}")

    log.info("Loading keyword rules from %s", path)
    heuristics = parse_heuristics(path.read_text("utf-8"), origin=str(path))
    log.debug("Keyword rules version %d", heuristics.version)
    return heuristics
