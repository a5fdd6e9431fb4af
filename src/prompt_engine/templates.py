"""
Template selection.

Each domain has a default template. A style hint overrides it only when the
hint points at exactly one template.
"""

import logging
import re
from typing import Optional

from .domains import Domain, Template
from .rules import RuleTables

logger = logging.getLogger(__name__)

TEMPLATE_SYNONYMS = {
    Template.CHAIN_OF_THOUGHT: re.compile(
        r"\b(?:chain[- ]of[- ]thought|cot|reasoning|step[- ]by[- ]step|think through|"
        r"explain your thinking|show (?:your|the) work)\b",
        re.IGNORECASE,
    ),
    Template.FEW_SHOT: re.compile(
        r"\b(?:few[- ]shot|examples?|samples?|demonstrations?)\b",
        re.IGNORECASE,
    ),
    Template.ROLE_BASED: re.compile(
        r"\b(?:role[- ]based|persona|act as|expert|role[- ]?play|in character)\b",
        re.IGNORECASE,
    ),
    Template.BASIC: re.compile(
        r"\b(?:basic|plain|simple|direct|minimal|no frills)\b",
        re.IGNORECASE,
    ),
}


class TemplateSelector:
    """Pick the Template for a domain, honoring unambiguous style hints."""

    def __init__(self, rule_tables: RuleTables):
        self.rule_tables = rule_tables

    def select(self, domain: Domain, style_hint: Optional[str] = None) -> Template:
        default = self.rule_tables[domain].default_template
        if not style_hint or not isinstance(style_hint, str):
            return default

        exact = Template.parse(style_hint)
        if exact is not None:
            return exact

        matches = [template for template, pattern in TEMPLATE_SYNONYMS.items() if pattern.search(style_hint)]
        if len(matches) == 1:
            logger.debug(f"Style hint {style_hint!r} selects {matches[0].value}")
            return matches[0]

        if matches:
            logger.debug(f"Ambiguous style hint {style_hint!r}; using {default.value}")
        return default
