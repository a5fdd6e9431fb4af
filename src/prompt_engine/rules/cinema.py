"""
Screenwriting and film production rules.

Refined cinema prompts enforce screenplay conventions: scene headings in
INT./EXT. form and character cues in uppercase above dialogue.
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

CINEMA_RULES = DomainRules(
    domain=Domain.CINEMA,
    description="Screenwriting, scenes, characters and film production",
    persona="You are a professional screenwriter who writes in industry-standard screenplay format.",
    persona_title="a professional screenwriter",
    default_template=Template.ROLE_BASED,
    output_format="Deliver the pages in screenplay format, followed by a one-paragraph note on the dramatic intent.",
    preferred_verb="Write",
    keywords=keywords(
        (r"screenplay|screenwriting", 3.0),
        (r"scripts?", 1.5),
        (r"scenes?", 2.0),
        (r"films?|movies?|cinema", 2.5),
        (r"dialogues?", 2.0),
        (r"characters?", 1.5),
        (r"storyboards?|shot list", 2.5),
        (r"plot|act (?:one|two|three)|three-act", 2.0),
        (r"directors?|cinematograph(?:y|er)", 2.0),
        (r"guion|pel[ií]cula|escena", 2.0),
    ),
    vocabulary=vocab(
        "scene", "int", "ext", "character", "dialogue", "action", "slugline",
        "screenplay", "act", "beat", "plot", "protagonist", "antagonist",
        "logline", "shot", "camera", "transition", "cut", "fade", "montage",
        "subtext", "arc", "setting", "genre", "thriller", "drama", "comedy",
        "night", "day", "pages",
    ),
    replacements=(
        Replacement(r"guion", "screenplay", "Use English screenwriting terminology"),
        Replacement(r"escena", "scene", "Use English screenwriting terminology"),
        Replacement(r"pel[ií]cula", "film", "Use English screenwriting terminology"),
    ),
    overlay_sections=(
        OverlaySection(
            "Screenplay format",
            "Open every scene with a heading such as INT. KITCHEN - NIGHT or EXT. STREET - DAY, "
            "and place each character cue in uppercase on the line above the dialogue.",
        ),
        OverlaySection("Characters", "Introduce each character in uppercase at first appearance with age and one defining trait."),
    ),
    enhancements=(
        EnhancementRule(r"dialogues?|conversations?", "Give each character a distinct voice and subtext in the dialogue"),
        EnhancementRule(r"scenes?", "State the scene goal, the conflict and the turning point"),
        EnhancementRule(r"characters?", "Define the protagonist's want, need and arc"),
        EnhancementRule(r"storyboards?|shots?", "List shot size, camera movement and transition for every shot"),
    ),
    checklist=(
        ChecklistField("scene_heading", r"^Screenplay format:|\b(?:INT|EXT)\.", "Scene heading convention"),
        ChecklistField("characters", r"^Characters:|\bcharacters?\b", "Character definitions"),
        ChecklistField("genre", r"\b(?:genre|thriller|drama|comedy|horror|romance|sci-fi|documentary)\b",
                       "Genre"),
    ),
    constraints=(
        "Keep the scene between 2 and 4 pages at one page per minute of screen time.",
        "Limit action lines to 4 lines per paragraph.",
    ),
    success_criteria=(
        "Each scene has a clear goal, conflict and turning point.",
        "A reader can identify every speaker from the character cues alone.",
    ),
    default_requirements=(
        "Establish the setting in the first scene heading",
        "Reveal character through action before exposition",
    ),
    reasoning_steps=(
        "Define the logline, genre and tone.",
        "Outline the scene beats and the turning point.",
        "Draft action lines and dialogue in screenplay format.",
        "Check every scene heading and character cue against screenplay conventions.",
    ),
    examples=(
        ExamplePair(
            input="escena de pelea en un bar",
            output="INT. DOCKSIDE BAR - NIGHT. A crowded bar. MARCO (30s, ex-boxer) sets down his glass as "
                   "the door slams open. MARCO: Not tonight, Eddie.",
        ),
    ),
    anti_patterns=(
        AntiPattern(
            code="CINEMA_MISSING_SCENE_HEADING",
            category="format",
            severity=Severity.LOW,
            message="Screenplay request does not use INT./EXT. scene headings.",
            pattern=r"\b(?:INT|EXT)\.|scene heading",
            mode="absent",
        ),
        AntiPattern(
            code="CINEMA_MISSING_GENRE",
            category="missing-context",
            severity=Severity.LOW,
            message="Specify the genre and tone of the piece.",
            pattern=r"\b(?:genre|thriller|drama|comedy|horror|romance|sci-fi|documentary|tone)\b",
            mode="absent",
        ),
    ),
)
