"""
DevOps, infrastructure and delivery pipeline rules.
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

DEVOPS_RULES = DomainRules(
    domain=Domain.DEVOPS,
    description="Infrastructure, CI/CD pipelines, deployment and observability",
    persona="You are a site reliability engineer who automates infrastructure as code.",
    persona_title="a site reliability engineer",
    default_template=Template.CHAIN_OF_THOUGHT,
    output_format="Deliver the configuration files in fenced code blocks, then the commands to apply and verify them.",
    preferred_verb="Configure",
    keywords=keywords(
        (r"devops", 3.0),
        (r"ci/?cd|pipelines?", 2.5),
        (r"deploy(?:s|ment|ing)?", 2.0),
        (r"docker(?:file)?|containers?", 2.5),
        (r"kubernetes|k8s|helm", 3.0),
        (r"terraform|ansible|infrastructure as code|iac", 3.0),
        (r"infrastructure", 2.0),
        (r"monitoring|observability|alerting|prometheus|grafana", 2.0),
        (r"github actions|gitlab ci|jenkins", 2.5),
        (r"rollback|blue-green|canary", 2.0),
    ),
    vocabulary=vocab(
        "docker", "dockerfile", "container", "kubernetes", "k8s", "helm",
        "terraform", "ansible", "pipeline", "ci/cd", "deployment", "rollback",
        "canary", "prometheus", "grafana", "alert", "metric", "log", "staging",
        "production", "environment", "secret", "vault", "aws", "gcp", "azure",
        "cluster", "node", "pod", "ingress", "yaml", "slo", "sli",
    ),
    overlay_sections=(
        OverlaySection("Environments", "Define separate staging and production environments with identical configuration."),
        OverlaySection("Rollback plan", "Describe how to roll back within 5 minutes if health checks fail."),
    ),
    enhancements=(
        EnhancementRule(r"deploy(?:s|ment|ing)?", "Use a canary or blue-green release with automated health checks"),
        EnhancementRule(r"docker(?:file)?|containers?", "Use multi-stage builds and run containers as a non-root user"),
        EnhancementRule(r"pipelines?|ci/?cd", "Run lint, unit tests and a security scan before every deploy"),
        EnhancementRule(r"monitoring|observability|alerting", "Define SLOs and alert on error-budget burn rate"),
        EnhancementRule(r"secrets?|credentials?", "Load secrets from a vault, never from the repository"),
    ),
    checklist=(
        ChecklistField("environment", r"^Environments:|\b(?:staging|production|environment)\b", "Target environments"),
        ChecklistField("rollback", r"^Rollback plan:|\brollback\b|\broll back\b", "Rollback plan"),
        ChecklistField("monitoring", r"\b(?:monitoring|alert(?:s|ing)?|slo|metrics?|health checks?)\b",
                       "Monitoring and alerting"),
    ),
    constraints=(
        "Keep deployments under 10 minutes end to end.",
        "Store no secrets in source control or container images.",
    ),
    success_criteria=(
        "A deploy to staging passes every health check before promotion.",
        "A failed release is rolled back automatically within 5 minutes.",
    ),
    default_requirements=(
        "Define the target cloud provider and region",
        "Version every infrastructure change in Git",
    ),
    reasoning_steps=(
        "Identify the target environments, cloud provider and constraints.",
        "Design the pipeline stages and the promotion rules.",
        "Write the infrastructure and pipeline configuration.",
        "Verify health checks, monitoring and the rollback path.",
    ),
    examples=(
        ExamplePair(
            input="deploy my app",
            output="Configure a GitHub Actions pipeline that builds a Docker image, runs tests, deploys to "
                   "a staging Kubernetes namespace and promotes to production after health checks pass.",
        ),
    ),
    anti_patterns=(
        AntiPattern(
            code="DEVOPS_MISSING_ENVIRONMENT",
            category="missing-context",
            severity=Severity.MEDIUM,
            message="DevOps request does not name the target environment.",
            pattern=r"\b(?:staging|production|prod|dev|environment|cluster)\b",
            mode="absent",
        ),
        AntiPattern(
            code="DEVOPS_MISSING_ROLLBACK",
            category="missing-constraint",
            severity=Severity.LOW,
            message="Deployment request does not describe a rollback strategy.",
            pattern=r"\brollback\b|\broll back\b",
            mode="absent",
        ),
    ),
)
