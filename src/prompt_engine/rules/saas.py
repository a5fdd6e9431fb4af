"""
SaaS product and platform rules.
"""

from ..domains import Domain, Template
from ..models import Severity
from .base import (
    AntiPattern,
    ChecklistField,
    DomainRules,
    EnhancementRule,
    ExamplePair,
    OverlaySection,
    keywords,
    vocab,
)

SAAS_RULES = DomainRules(
    domain=Domain.SAAS,
    description="SaaS products, multi-tenant platforms and subscription features",
    persona="You are a SaaS product architect who designs multi-tenant platforms.",
    persona_title="a SaaS product architect",
    default_template=Template.BASIC,
    output_format="Deliver a feature specification with user stories, acceptance criteria and API endpoints.",
    preferred_verb="Design",
    keywords=keywords(
        (r"saas", 3.0),
        (r"dashboards?", 2.0),
        (r"subscriptions?|billing|pricing tiers?", 2.5),
        (r"multi-?tenan(?:t|cy)|tenants?", 3.0),
        (r"onboarding", 2.0),
        (r"user management|role management|roles?|permissions?", 1.5),
        (r"platform", 1.0),
        (r"churn|mrr|arr", 2.5),
        (r"admin panel|self-serve", 2.0),
        (r"activity tracking|audit logs?", 1.5),
    ),
    vocabulary=vocab(
        "saas", "dashboard", "tenant", "subscription", "billing", "plan",
        "onboarding", "authentication", "authorization", "role", "roles",
        "permission", "activity", "tracking", "audit", "log", "analytics",
        "api", "webhook", "sso", "oauth", "integration", "churn", "mrr",
        "admin", "user", "users", "account", "workspace", "invoice", "trial",
        "management",
    ),
    overlay_sections=(
        OverlaySection("Tenancy", "Isolate every tenant's data by tenant_id and enforce the isolation in every query."),
        OverlaySection("Scalability", "Support 10,000 active tenants and 99.9% monthly uptime."),
    ),
    enhancements=(
        EnhancementRule(r"dashboards?", "Show the 5 metrics the primary user checks daily"),
        EnhancementRule(r"auth(?:entication)?|login|sign[- ]?in", "Support SSO via OAuth 2.0 and enforce MFA for admins"),
        EnhancementRule(r"billing|subscriptions?|pricing", "Integrate metered billing with proration on plan changes"),
        EnhancementRule(r"roles?|permissions?", "Define roles with least-privilege permissions"),
    ),
    checklist=(
        ChecklistField("users", r"\b(?:users?|tenants?|customers?|accounts?)\b", "Primary users"),
        ChecklistField("tenancy", r"^Tenancy:|\bmulti-?tenan(?:t|cy)\b|\btenant", "Tenancy model"),
        ChecklistField("scale", r"^Scalability:|\b(?:scal(?:e|able|ability)|uptime|sla)\b", "Scale targets"),
    ),
    constraints=(
        "Keep p95 API latency under 300 ms.",
        "Store personal data only in the tenant's region to satisfy GDPR.",
    ),
    success_criteria=(
        "Each user story has acceptance criteria that QA can verify.",
        "The design supports 10,000 tenants without schema changes.",
    ),
    default_requirements=(
        "Define the primary user roles",
        "List the API endpoints each feature needs",
    ),
    examples=(
        ExamplePair(
            input="build a dashboard for my app",
            output="Design a tenant-scoped analytics dashboard showing MRR, churn rate and active users, "
                   "refreshed every 15 minutes, with role-based access for admins and viewers.",
        ),
    ),
    anti_patterns=(
        AntiPattern(
            code="SAAS_MISSING_USERS",
            category="missing-context",
            severity=Severity.LOW,
            message="SaaS request does not identify the users or tenants served.",
            pattern=r"\b(?:users?|tenants?|customers?|accounts?|admins?)\b",
            mode="absent",
        ),
    ),
)
