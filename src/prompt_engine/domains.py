"""
Closed enumerations used throughout the engine.

The domain set is fixed at build time. Adding a domain means adding a member
here and shipping its rule table in ``prompt_engine.rules``.
"""

from enum import Enum
from typing import Optional


class Domain(str, Enum):
    """Prompt domains. Declaration order is the classifier's tie-break order."""

    SQL = "sql"
    BRANDING = "branding"
    CINEMA = "cinema"
    SAAS = "saas"
    DEVOPS = "devops"
    GENERAL = "general"
    MOBILE = "mobile"
    WEB = "web"
    BACKEND = "backend"
    FRONTEND = "frontend"
    AI = "ai"
    GAMING = "gaming"
    CRYPTO = "crypto"
    EDUCATION = "education"
    HEALTHCARE = "healthcare"
    FINANCE = "finance"
    LEGAL = "legal"

    @property
    def index(self) -> int:
        """Declaration index, used for deterministic tie-breaks."""
        return _DOMAIN_ORDER[self]

    @classmethod
    def parse(cls, value) -> Optional["Domain"]:
        """
        Resolve a user-supplied value to a Domain.

        Args:
            value: Domain member, domain value string, or legacy alias

        Returns:
            The matching Domain, or None if the value is not recognized
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        key = value.strip().lower()
        key = _DOMAIN_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return None


_DOMAIN_ORDER = {domain: i for i, domain in enumerate(Domain)}

# Older clients sent "cine" for the cinema domain
_DOMAIN_ALIASES = {
    "cine": "cinema",
    "film": "cinema",
}


class Template(str, Enum):
    """Structural shapes imposed on refined output."""

    BASIC = "basic"
    CHAIN_OF_THOUGHT = "chain-of-thought"
    FEW_SHOT = "few-shot"
    ROLE_BASED = "role-based"

    @classmethod
    def parse(cls, value) -> Optional["Template"]:
        """Resolve an exact template identifier, or return None."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class Tone(str, Enum):
    """Optional tone hint carried on a raw prompt."""

    PROFESSIONAL = "professional"
    FORMAL = "formal"
    CASUAL = "casual"
    TECHNICAL = "technical"
    CREATIVE = "creative"

    @classmethod
    def parse(cls, value) -> Optional["Tone"]:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None
