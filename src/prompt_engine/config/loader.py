"""
Rule table override loader.

Override files are YAML or JSON and are validated with Pydantic before they
touch the shipped tables. Only the fields present in the file are replaced:

    domains:
      sql:
        persona: "You are a data warehouse engineer."
        keywords:
          - pattern: "snowflake|bigquery"
            weight: 3.0
"""

import json
import logging
import re
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..domains import Domain, Template
from ..exceptions import ConfigurationError
from ..models import Severity
from ..rules import RuleTables
from ..rules.base import (
    AntiPattern,
    ChecklistField,
    EnhancementRule,
    ExamplePair,
    KeywordPattern,
    OverlaySection,
    Replacement,
)

logger = logging.getLogger(__name__)


def _compiles(value: str) -> str:
    try:
        re.compile(value)
    except re.error as e:
        raise ValueError(f"invalid regular expression {value!r}: {e}")
    return value


class KeywordConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    pattern: str
    weight: float = Field(default=1.0, gt=0.0)

    @field_validator("pattern")
    @classmethod
    def check_pattern(cls, v: str) -> str:
        return _compiles(v)


class ReplacementConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    pattern: str
    replacement: str
    description: str = ""

    @field_validator("pattern")
    @classmethod
    def check_pattern(cls, v: str) -> str:
        return _compiles(v)


class OverlaySectionConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1)
    content: str = Field(min_length=1)


class EnhancementConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    trigger: str
    item: str = Field(min_length=1)

    @field_validator("trigger")
    @classmethod
    def check_trigger(cls, v: str) -> str:
        return _compiles(v)


class ChecklistFieldConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    pattern: str
    description: str = ""

    @field_validator("pattern")
    @classmethod
    def check_pattern(cls, v: str) -> str:
        return _compiles(v)


class AntiPatternConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    code: str = Field(min_length=1)
    category: str = Field(min_length=1)
    severity: Severity
    message: str = Field(min_length=1)
    pattern: str
    mode: str = Field(default="present", pattern="^(present|absent)$")

    @field_validator("pattern")
    @classmethod
    def check_pattern(cls, v: str) -> str:
        return _compiles(v)


class ExampleConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    input: str
    output: str


class DomainOverrideConfig(BaseModel):
    """Fields of one domain table; anything left out keeps its shipped value."""

    model_config = ConfigDict(extra="forbid")

    description: Optional[str] = None
    persona: Optional[str] = Field(default=None, min_length=1)
    persona_title: Optional[str] = Field(default=None, min_length=1)
    default_template: Optional[Template] = None
    output_format: Optional[str] = Field(default=None, min_length=1)
    preferred_verb: Optional[str] = Field(default=None, min_length=1)
    keywords: Optional[List[KeywordConfig]] = None
    vocabulary: Optional[List[str]] = None
    replacements: Optional[List[ReplacementConfig]] = None
    overlay_sections: Optional[List[OverlaySectionConfig]] = None
    enhancements: Optional[List[EnhancementConfig]] = None
    checklist: Optional[List[ChecklistFieldConfig]] = None
    constraints: Optional[List[str]] = None
    success_criteria: Optional[List[str]] = None
    default_requirements: Optional[List[str]] = None
    reasoning_steps: Optional[List[str]] = None
    examples: Optional[List[ExampleConfig]] = Field(default=None, max_length=3)
    anti_patterns: Optional[List[AntiPatternConfig]] = None

    def to_changes(self) -> Dict[str, Any]:
        """Convert the fields that were set into DomainRules keyword arguments."""
        changes: Dict[str, Any] = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if value is None:
                continue
            if name == "keywords":
                value = tuple(KeywordPattern(k.pattern, k.weight) for k in value)
            elif name == "vocabulary":
                value = frozenset(term.lower() for term in value)
            elif name == "replacements":
                value = tuple(Replacement(r.pattern, r.replacement, r.description) for r in value)
            elif name == "overlay_sections":
                value = tuple(OverlaySection(s.title, s.content) for s in value)
            elif name == "enhancements":
                value = tuple(EnhancementRule(e.trigger, e.item) for e in value)
            elif name == "checklist":
                value = tuple(ChecklistField(c.name, c.pattern, c.description) for c in value)
            elif name == "examples":
                value = tuple(ExamplePair(e.input, e.output) for e in value)
            elif name == "anti_patterns":
                value = tuple(
                    AntiPattern(a.code, a.category, a.severity, a.message, a.pattern, a.mode)
                    for a in value
                )
            elif isinstance(value, list):
                value = tuple(value)
            changes[name] = value
        return changes


class RulesFileConfig(BaseModel):
    """Root of a rule override file."""

    model_config = ConfigDict(extra="forbid")

    version: Optional[str] = None
    domains: Dict[str, DomainOverrideConfig] = Field(default_factory=dict)


def load_rules_file(path: Union[str, Path]) -> RulesFileConfig:
    """
    Parse and validate a rule override file.

    Args:
        path: Path to a ``.yaml``/``.yml`` or ``.json`` file

    Returns:
        The validated override configuration

    Raises:
        ConfigurationError: If the file is missing, unparseable or invalid
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(str(path), "file not found")

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(str(path), f"cannot parse: {e}")
    except OSError as e:
        raise ConfigurationError(str(path), str(e))

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(str(path), f"expected a mapping, got {type(data).__name__}")

    try:
        config = RulesFileConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(str(path), str(e))

    logger.debug(f"Loaded rule overrides: {path}")
    return config


def load_rule_tables(
    path: Optional[Union[str, Path]] = None,
    base: Optional[RuleTables] = None,
) -> RuleTables:
    """
    Build RuleTables from the shipped defaults plus an optional override file.

    Args:
        path: Override file; None returns the base tables unchanged
        base: Tables to override (defaults to RuleTables.default())

    Returns:
        Validated, immutable RuleTables

    Raises:
        ConfigurationError: If the overrides name an unknown domain or leave
            a table without required data
    """
    base = base or RuleTables.default()
    if path is None:
        return base

    config = load_rules_file(path)
    overrides = {}
    for key, override in config.domains.items():
        domain = Domain.parse(key)
        if domain is None:
            raise ConfigurationError(str(path), f"unknown domain '{key}'")
        overrides[domain] = replace(base[domain], **override.to_changes())

    logger.info(f"Applied rule overrides for {len(overrides)} domain(s) from {path}")
    return base.with_overrides(overrides, source=str(path))
