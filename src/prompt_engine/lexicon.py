"""
Shared word lists, section labels and text helpers.

Used by the Refiner, the Scorer and the Validator so that all three agree on
what a section, a sentence or a token is.
"""

import re
from typing import Dict, List, Tuple

# Section labels emitted by the Refiner
PERSONA = "Persona"
ROLE = "Role"
TASK = "Task"
CONTEXT = "Context"
REQUIREMENTS = "Requirements"
CONSTRAINTS = "Constraints"
SUCCESS_CRITERIA = "Success criteria"
REASONING_STEPS = "Reasoning steps"
EXAMPLES = "Examples"
OUTPUT = "Output"

ACTION_VERBS = frozenset({
    "analyze", "answer", "assess", "audit", "automate", "brainstorm", "build",
    "calculate", "classify", "compare", "compose", "configure", "convert",
    "create", "debug", "define", "deliver", "deploy", "describe", "design",
    "develop", "document", "draft", "evaluate", "examine", "explain",
    "extract", "fix", "generate", "identify", "implement", "improve", "list",
    "migrate", "model", "monitor", "optimize", "outline", "perform", "plan",
    "prepare", "produce", "propose", "provide", "recommend", "refactor",
    "research", "retrieve", "review", "summarize", "test", "translate",
    "write",
})

# Leading verbs that carry no intent and are replaced by the domain verb
WEAK_LEADING_VERBS: Dict[str, str] = {
    "make me": "",
    "make": "",
    "do": "Perform",
    "give me": "Provide",
    "get me": "Provide",
    "write me": "Write",
    "show me": "Explain",
}

VAGUE_TERMS = frozenset({
    "good", "bad", "nice", "cool", "awesome", "great", "bonito", "bonita",
    "bueno", "buena", "malo", "stuff", "things", "something", "anything",
    "big", "small", "fast", "slow", "easy", "hard", "whatever", "etc",
})

# What a suggestion asks for in place of a vague term
VAGUE_TERM_ALTERNATIVES = {
    "good": "high-quality",
    "bad": "a named defect to avoid",
    "nice": "well-crafted",
    "cool": "impressive",
    "awesome": "outstanding",
    "great": "a measurable quality target",
    "bonito": "well-designed",
    "bonita": "well-designed",
    "bueno": "high-quality",
    "buena": "high-quality",
    "malo": "a named defect to avoid",
    "stuff": "details",
    "things": "the specific items",
    "something": "the specific deliverable",
    "anything": "the specific options allowed",
    "big": "an explicit size limit",
    "small": "an explicit size limit",
    "fast": "a latency target such as under 200 ms",
    "slow": "a measured latency",
    "easy": "usable without prior training",
    "hard": "an explicit difficulty level",
    "whatever": "a specific choice",
    "etc": "the complete list",
}

AMBIGUOUS_PRONOUNS = frozenset({
    "it", "its", "they", "them", "stuff", "something", "thing", "things",
    "whatever", "somehow",
})

CONSTRAINT_WORDS = frozenset({
    "must", "only", "exactly", "least", "most", "maximum", "minimum", "within",
    "limit", "never", "always", "required", "under",
})

FILLER_PATTERN = re.compile(
    r"\b(?:just|basically|really|very|actually|simply|literally|kind of|sort of|"
    r"maybe|perhaps|somehow|quite)\b\s*",
    re.IGNORECASE,
)

POLITE_PREFIX_PATTERN = re.compile(
    r"^(?:please|kindly|hey|hi|hello|ok|okay|so|can you|could you|would you|will you|"
    r"i want you to|i need you to|i would like you to|i'd like you to|"
    r"help me(?: to)?)\b[\s,]*",
    re.IGNORECASE,
)

QUESTION_PREFIX_PATTERN = re.compile(
    r"^(?:can you|could you|would you|will you)\b", re.IGNORECASE
)

QUESTION_START = frozenset({
    "what", "why", "how", "when", "where", "which", "who", "is", "are",
    "does", "should",
})

ROLE_SENTENCE_PATTERN = re.compile(
    r"^(?:you are|you're|act as|acting as|pretend to be|imagine you are|"
    r"take the role of|as an?\s)",
    re.IGNORECASE,
)

REQUIREMENT_SENTENCE_PATTERN = re.compile(
    r"\b(?:must|should|needs? to|has to|have to|make sure|ensure|requires?)\b",
    re.IGNORECASE,
)

REQUIREMENT_CLAUSE_PATTERN = re.compile(
    r"\s+(?P<marker>with|including|that includes|which includes|that supports|such as|"
    r"featuring)\s+(?P<items>.+)$",
    re.IGNORECASE,
)

CONTRADICTORY_MODIFIERS: Tuple[Tuple[str, str], ...] = (
    ("brief", "detailed"),
    ("short", "comprehensive"),
    ("concise", "exhaustive"),
    ("simple", "complex"),
    ("formal", "casual"),
    ("minimal", "elaborate"),
)

PLACEHOLDER_PATTERN = (
    r"\[(?:todo|tbd|placeholder|insert[^\]]*|your [^\]]*|(?-i:[A-Z_ ]{3,}))\]"
    r"|\{\{\s*\w+\s*\}\}|\bTODO\b|\bTBD\b|\blorem ipsum\b|\bXXX\b"
)

CONSTRAINT_PATTERN = (
    r"^Constraints:|\b(?:must|must not|should not|at least|at most|no more than|"
    r"within|maximum|minimum|limited to|constraint)\b"
)

SUCCESS_PATTERN = (
    r"^Success criteria:|\b(?:success|acceptance criteria|done when|verif(?:y|ied)|"
    r"measurable)\b"
)

AUDIENCE_PATTERN = (
    r"^(?:Role|Persona):|\byou are\b|\bact as\b|\baudience\b|"
    r"\bfor (?:beginners|experts|developers|executives|customers|students|stakeholders)\b"
)

OUTPUT_PATTERN = (
    r"^Output:|\b(?:output format|respond with|return (?:a|the)|formatted as|deliverable)\b"
)

OBJECTIVE_PATTERN = (
    r"^(?:Task:\s*)?(?:" + "|".join(sorted(ACTION_VERBS)) + r")\b"
)

LABEL_PATTERN = re.compile(r"^(?P<label>[A-Z][A-Za-z /-]{1,40}):(?=\s|$)", re.MULTILINE)
BULLET_PATTERN = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s+", re.MULTILINE)
TOKEN_PATTERN = re.compile(r"[A-Za-z0-9]+(?:[-'/.+#][A-Za-z0-9]+)*")
SENTENCE_BREAK_PATTERN = re.compile(r"(?<=[.!?])\s+|\n+")


def section_positions(text: str) -> Dict[str, int]:
    """Map each section label to the character offset of its first occurrence."""
    positions: Dict[str, int] = {}
    for match in LABEL_PATTERN.finditer(text):
        positions.setdefault(match.group("label"), match.start())
    return positions


def strip_labels(text: str) -> str:
    """Remove section labels and list bullets, leaving only content."""
    text = LABEL_PATTERN.sub("", text)
    return BULLET_PATTERN.sub("", text)


def split_sentences(text: str) -> List[str]:
    """Split on terminal punctuation and line breaks, dropping empties."""
    return [part.strip() for part in SENTENCE_BREAK_PATTERN.split(text) if part.strip()]


def tokenize(text: str) -> List[str]:
    return TOKEN_PATTERN.findall(text)


def words(text: str) -> List[str]:
    """Lowercase tokens."""
    return [token.lower() for token in tokenize(text)]
