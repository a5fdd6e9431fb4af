"""
General domain rules.

Universal improvements applied to every prompt, and the fallback table for
prompts no specific domain claims.
"""

from ..domains import Domain, Template
from ..lexicon import (
    AUDIENCE_PATTERN,
    CONSTRAINT_PATTERN,
    OBJECTIVE_PATTERN,
    OUTPUT_PATTERN,
    PLACEHOLDER_PATTERN,
    SUCCESS_PATTERN,
)
from ..models import Severity
from .base import (
    AntiPattern,
    ChecklistField,
    DomainRules,
    ExamplePair,
    Replacement,
    vocab,
)

# Applied to every domain before the domain's own replacements
GENERIC_REPLACEMENTS = (
    Replacement(r"bonit[oa]s?", "well-designed", "Replace vague aesthetic terms"),
    Replacement(r"buen[oa]s?", "high-quality", "Replace vague quality terms"),
    Replacement(r"nice", "well-crafted", "Replace generic positive terms"),
    Replacement(r"cool", "impressive", "Replace casual terms with professional language"),
    Replacement(r"awesome", "outstanding", "Replace casual terms with professional language"),
    Replacement(r"good", "high-quality", "Replace vague quality terms"),
    Replacement(r"stuff", "details", "Replace filler nouns"),
)

# Acronyms and product names normalised to their canonical casing
CANONICAL_CASING = (
    ("sql", "SQL"), ("api", "API"), ("apis", "APIs"), ("json", "JSON"),
    ("csv", "CSV"), ("html", "HTML"), ("css", "CSS"), ("ui", "UI"),
    ("ux", "UX"), ("ci/cd", "CI/CD"), ("aws", "AWS"), ("gcp", "GCP"),
    ("seo", "SEO"), ("saas", "SaaS"), ("ios", "iOS"), ("kpi", "KPI"),
    ("kpis", "KPIs"), ("gdpr", "GDPR"), ("hipaa", "HIPAA"), ("nft", "NFT"),
    ("url", "URL"), ("http", "HTTP"), ("jwt", "JWT"), ("llm", "LLM"),
    ("postgresql", "PostgreSQL"), ("mysql", "MySQL"), ("sqlite", "SQLite"),
    ("kubernetes", "Kubernetes"), ("docker", "Docker"), ("terraform", "Terraform"),
    ("python", "Python"), ("javascript", "JavaScript"),
    ("typescript", "TypeScript"), ("android", "Android"),
)

GENERIC_REASONING_STEPS = (
    "Restate the goal and the expected deliverable in one sentence.",
    "Identify the inputs, assumptions and constraints that apply.",
    "Work through the solution one step at a time and justify each decision.",
    "Check the result against every requirement before answering.",
)

# Every domain's completeness checklist starts with these fields
GENERIC_CHECKLIST = (
    ChecklistField("objective", OBJECTIVE_PATTERN, "A task that starts with an action verb"),
    ChecklistField("audience", AUDIENCE_PATTERN, "Who answers or who reads the answer"),
    ChecklistField("output", OUTPUT_PATTERN, "Expected output format"),
    ChecklistField("constraints", CONSTRAINT_PATTERN, "At least one explicit constraint"),
    ChecklistField("success", SUCCESS_PATTERN, "How success is judged"),
)

GENERIC_ANTI_PATTERNS = (
    AntiPattern(
        code="PLACEHOLDER_TEXT",
        category="placeholder",
        severity=Severity.HIGH,
        message="Prompt contains placeholder text that was never filled in.",
        pattern=PLACEHOLDER_PATTERN,
    ),
    AntiPattern(
        code="MISSING_SUCCESS_CRITERION",
        category="missing-success-criterion",
        severity=Severity.MEDIUM,
        message="Prompt does not state how success will be judged.",
        pattern=SUCCESS_PATTERN,
        mode="absent",
    ),
    AntiPattern(
        code="MISSING_CONSTRAINT",
        category="missing-constraint",
        severity=Severity.MEDIUM,
        message="Prompt does not state any explicit constraint or limit.",
        pattern=CONSTRAINT_PATTERN,
        mode="absent",
    ),
    AntiPattern(
        code="MISSING_REQUIREMENTS",
        category="missing-requirements",
        severity=Severity.LOW,
        message="Prompt has no explicit list of requirements.",
        pattern=r"^Requirements:|^\s*(?:[-*•]|\d+[.)])\s+\S",
        mode="absent",
    ),
)


GENERAL_RULES = DomainRules(
    domain=Domain.GENERAL,
    description="General purpose prompt optimization with universal improvements",
    persona="You are an experienced professional assistant.",
    persona_title="an experienced professional assistant",
    default_template=Template.BASIC,
    output_format="Deliver the complete result as structured markdown with clear headings.",
    preferred_verb="Create",
    vocabulary=vocab(
        "api", "app", "application", "article", "button", "chart", "checklist",
        "code", "component", "csv", "dashboard", "database", "document", "email",
        "form", "function", "heading", "interface", "json", "login", "markdown",
        "page", "password", "report", "schedule", "script", "spreadsheet",
        "summary", "table", "template", "timeline", "website", "workflow",
    ),
    constraints=(
        "Keep the answer under 500 words unless the task requires more.",
        "Use only facts stated in the task or explicitly marked as assumptions.",
    ),
    success_criteria=(
        "Every requirement in the task is addressed in the output.",
        "A reviewer can verify the result without asking follow-up questions.",
    ),
    default_requirements=(
        "Cover the full scope of the task in the first response.",
        "State any assumptions explicitly before the answer.",
    ),
    reasoning_steps=GENERIC_REASONING_STEPS,
    examples=(
        ExamplePair(
            input="plan a team offsite",
            output="Create a 2-day offsite agenda for a 12-person engineering team "
                   "with timed sessions, meals and a budget under 5,000 USD.",
        ),
    ),
)
