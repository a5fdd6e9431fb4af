"""
Branding, marketing copy and brand identity rules.
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
    Replacement,
    keywords,
    vocab,
)

BRANDING_RULES = DomainRules(
    domain=Domain.BRANDING,
    description="Brand identity, messaging and marketing copy",
    persona="You are a brand strategist with 10 years of experience positioning consumer and B2B brands.",
    persona_title="a senior brand strategist",
    default_template=Template.ROLE_BASED,
    output_format="Deliver the copy first, then a rationale that ties each choice to the audience and brand voice.",
    keywords=keywords(
        (r"brand(?:s|ing)?", 3.0),
        (r"logos?", 2.0),
        (r"slogans?|taglines?", 2.5),
        (r"marketing", 2.0),
        (r"campaigns?", 2.0),
        (r"target audience", 2.0),
        (r"brand voice|tone of voice", 2.0),
        (r"visual identity|color palette|typography", 2.0),
        (r"positioning", 1.5),
        (r"copywriting|ad copy", 2.0),
        (r"marca|eslogan", 2.0),
    ),
    vocabulary=vocab(
        "brand", "logo", "slogan", "tagline", "audience", "persona", "voice",
        "tone", "positioning", "campaign", "palette", "typography", "identity",
        "messaging", "copy", "headline", "cta", "b2b", "b2c", "differentiator",
        "value", "proposition", "competitor", "market", "channel", "instagram",
        "linkedin", "newsletter",
    ),
    replacements=(
        Replacement(r"logo\s+bonito", "distinctive, memorable logo", "Replace vague logo wording"),
        Replacement(r"catchy", "memorable", "Use measurable copy qualities"),
        Replacement(r"eslogan", "slogan", "Use English branding terminology"),
        Replacement(r"marca", "brand", "Use English branding terminology"),
    ),
    overlay_sections=(
        OverlaySection("Target audience", "Describe the primary audience segment, including age range, needs and buying context."),
        OverlaySection("Brand voice", "Keep one consistent voice and list 3 adjectives that define the voice."),
    ),
    enhancements=(
        EnhancementRule(r"logos?|visual identity", "Specify color palette, typography and usage across 3 media"),
        EnhancementRule(r"slogans?|taglines?", "Propose 5 slogan options of 8 words or fewer"),
        EnhancementRule(r"campaigns?", "Define the campaign channel mix and one measurable KPI per channel"),
        EnhancementRule(r"competitors?|positioning", "Contrast the brand with 2 named competitors"),
    ),
    checklist=(
        ChecklistField("audience", r"^Target audience:|\b(?:audience|customers?|segment)\b", "Target audience"),
        ChecklistField("voice", r"^Brand voice:|\b(?:voice|tone)\b", "Brand voice"),
    ),
    constraints=(
        "Keep every headline under 60 characters.",
        "Avoid claims the brand cannot substantiate.",
    ),
    success_criteria=(
        "A member of the target audience can restate the brand promise after one read.",
        "Each deliverable maps to at least one brand value.",
    ),
    default_requirements=(
        "Reflect the brand values in every deliverable",
        "Differentiate the brand from named competitors",
    ),
    reasoning_steps=(
        "Summarize the brand, the audience and the competitive context.",
        "Define the message hierarchy and the voice.",
        "Draft the deliverables.",
        "Check every deliverable against the audience and the brand values.",
    ),
    examples=(
        ExamplePair(
            input="logo para mi marca de cafe",
            output="Design a distinctive, memorable logo for a sustainable coffee brand targeting "
                   "urban professionals aged 25-40, with a 3-color palette and a wordmark variant.",
        ),
    ),
    anti_patterns=(
        AntiPattern(
            code="BRANDING_MISSING_AUDIENCE",
            category="missing-context",
            severity=Severity.MEDIUM,
            message="Branding request does not describe the target audience.",
            pattern=r"\b(?:audience|customers?|segment|demographic)\b",
            mode="absent",
        ),
        AntiPattern(
            code="BRANDING_MISSING_VOICE",
            category="missing-context",
            severity=Severity.LOW,
            message="Specify the brand tone and voice.",
            pattern=r"\b(?:voice|tone|personality)\b",
            mode="absent",
        ),
    ),
)
