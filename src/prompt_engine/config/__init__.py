"""Configuration package."""

from .loader import load_rule_tables, load_rules_file
from .settings import EngineSettings

__all__ = [
    "EngineSettings",
    "load_rule_tables",
    "load_rules_file",
]
