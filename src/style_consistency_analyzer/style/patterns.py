"""
Rule Tables

Ordered regex rule records for sentence openings, clause markers,
punctuation and error detection. Every table is evaluated by a single
function in the module that consumes it; the order of a table is
significant wherever "first match wins".
"""

from dataclasses import dataclass
import re


@dataclass(frozen=True)
class OpeningRule:
    """Classifier for how a sentence begins."""
    name: str
    pattern: re.Pattern
    label: str


@dataclass(frozen=True)
class PunctuationRule:
    """Punctuation mark tracked for density, with a stylistic weight."""
    name: str
    pattern: re.Pattern
    label: str
    weight: float


@dataclass(frozen=True)
class ErrorRule:
    """A grammatical or stylistic error pattern."""
    id: str
    pattern: re.Pattern
    type: str
    severity: int  # 0 (style marker) to 3 (serious)
    description: str


# === Sentence openings (first match wins) ===

SENTENCE_OPENINGS: tuple[OpeningRule, ...] = (
    OpeningRule(
        "subject",
        re.compile(r"^(i|we|he|she|it|they|the|this|that|these|those|many|some|most|all|each|every|any|a|an)\b", re.I),
        "Subject",
    ),
    OpeningRule(
        "conjunction",
        re.compile(r"^(and|but|or|so|yet|nor|for)\b", re.I),
        "Conjunction",
    ),
    OpeningRule(
        "adverb",
        re.compile(
            r"^(however|therefore|moreover|furthermore|additionally|consequently|thus|hence|"
            r"nevertheless|meanwhile|likewise|similarly|indeed|certainly|clearly|obviously|"
            r"perhaps|possibly|probably|unfortunately|fortunately|interestingly|surprisingly|"
            r"notably|specifically|particularly|especially)\b",
            re.I,
        ),
        "Adverb",
    ),
    OpeningRule(
        "prepositional",
        re.compile(
            r"^(in|on|at|by|with|from|to|for|of|about|after|before|during|through|under|"
            r"over|between|among|across|along|around|near|beyond)\b",
            re.I,
        ),
        "Prepositional",
    ),
    OpeningRule(
        "subordinate",
        re.compile(
            r"^(although|though|even though|whereas|while|whilst|because|since|as|if|"
            r"unless|until|when|whenever|where|wherever|after|before)\b",
            re.I,
        ),
        "Subordinate",
    ),
    OpeningRule(
        "interrogative",
        re.compile(r"^(who|what|when|where|why|how|which|whose|whom)\b", re.I),
        "Interrogative",
    ),
    OpeningRule(
        "infinitive",
        re.compile(r"^(to\s+[a-z]+)\b", re.I),
        "Infinitive",
    ),
    OpeningRule(
        "participial",
        re.compile(r"^([a-z]+ing|[a-z]+ed)\s", re.I),
        "Participial",
    ),
)

OTHER_OPENING = "other"

OPENING_CATEGORIES: tuple[str, ...] = tuple(rule.name for rule in SENTENCE_OPENINGS) + (OTHER_OPENING,)


# === Clause markers ===

COORDINATING_MARKERS: tuple[str, ...] = ("and", "but", "or", "so", "yet", "nor", "for")

SUBORDINATING_MARKERS: tuple[str, ...] = (
    "because", "since", "as", "although", "though", "even though",
    "while", "whereas", "if", "unless", "until", "when", "whenever",
    "where", "wherever", "after", "before", "that", "which", "who",
)


def _word_pattern(word: str) -> re.Pattern:
    return re.compile(rf"\b{re.escape(word)}\b", re.I)


COORDINATING_PATTERNS: tuple[re.Pattern, ...] = tuple(_word_pattern(w) for w in COORDINATING_MARKERS)
SUBORDINATING_PATTERNS: tuple[re.Pattern, ...] = tuple(_word_pattern(w) for w in SUBORDINATING_MARKERS)

# Marks that make a single sentence structurally heavier
COMPLEX_PUNCTUATION_RE = re.compile(r"[;:—]")


# === Punctuation density ===

PUNCTUATION_PATTERNS: tuple[PunctuationRule, ...] = (
    PunctuationRule("semicolon", re.compile(r";"), "Semicolon", 2),
    PunctuationRule("colon", re.compile(r"(?<!:):"), "Colon", 1),
    PunctuationRule("dash", re.compile(r"—|--"), "Dash", 1),
    PunctuationRule("parenthetical", re.compile(r"\([^)]+\)"), "Parenthetical", 1),
    PunctuationRule("comma", re.compile(r","), "Comma", 0.5),
)


# === Passive voice ===

PASSIVE_VOICE_RE = re.compile(
    r"\b(is|are|was|were|been|being|be)\s+(\w+ed|written|spoken|taken|given|made|done|seen|"
    r"known|found|thought|begun|broken|chosen|driven|eaten|fallen|forgotten|frozen|gotten|"
    r"grown|hidden|ridden|risen|shaken|stolen|thrown|worn)\b",
    re.I,
)


# === Error patterns ===

COMMON_ERROR_PATTERNS: tuple[ErrorRule, ...] = (
    ErrorRule(
        "its-contraction", re.compile(r"\bits\s+(\w+ing)\b", re.I),
        "contraction-misuse", 1, "Possible its/it's confusion",
    ),
    ErrorRule(
        "could-of", re.compile(r"\b(could|should|would|might|must)\s+of\b", re.I),
        "modal-preposition", 2, 'Modal + "of" instead of "have"',
    ),
    ErrorRule(
        "there-overuse",
        re.compile(r"\bthere\s+(is|are|was|were)\s+(a|an|the|many|several|some|numerous)\b", re.I),
        "expletive-overuse", 1, "Expletive construction overuse",
    ),
    ErrorRule(
        "your-youre", re.compile(r"\byour\s+(going|coming|being|doing|having)\b", re.I),
        "possessive-contraction", 2, "Possible your/you're confusion",
    ),
    ErrorRule(
        "affect-effect", re.compile(r"\b(affect|effect)(s|ed|ing)?\b", re.I),
        "commonly-confused", 1, "Commonly confused word pair",
    ),
    ErrorRule(
        "then-than", re.compile(r"\b(more|less|better|worse|rather)\s+then\b", re.I),
        "commonly-confused", 2, "Then/than confusion in comparison",
    ),
    ErrorRule(
        "alot", re.compile(r"\balot\b", re.I),
        "spacing-error", 2, 'Spacing error: "alot" should be "a lot"',
    ),
    ErrorRule(
        "loose-lose", re.compile(r"\b(loose|lose)(s|d|ing)?\b", re.I),
        "commonly-confused", 1, "Loose/lose confusion",
    ),
    ErrorRule(
        "their-there", re.compile(r"\b(their|there|they're)\b", re.I),
        "commonly-confused", 1, "Their/there/they're usage",
    ),
    ErrorRule(
        "comma-splice-potential",
        re.compile(r",\s+(however|therefore|moreover|furthermore|nevertheless|thus|hence)\s+", re.I),
        "comma-splice", 1, "Potential comma splice with conjunctive adverb",
    ),
    ErrorRule(
        "fragment-because", re.compile(r"^because\s+\w+.*[.!?]\s+[A-Z]", re.M),
        "sentence-fragment", 1, 'Potential sentence fragment starting with "because"',
    ),
    ErrorRule(
        "double-negative",
        re.compile(
            r"\b(don't|doesn't|didn't|won't|can't|couldn't|shouldn't|wouldn't)\s+\w*\s+"
            r"(no|nothing|nobody|nowhere|never|none)\b",
            re.I,
        ),
        "double-negative", 2, "Double negative construction",
    ),
    ErrorRule(
        "subject-verb", re.compile(r"\b(he|she|it)\s+(have|do|are)\b", re.I),
        "agreement", 2, "Subject-verb agreement error",
    ),
    ErrorRule(
        "redundancy",
        re.compile(
            r"\b(advance\s+forward|past\s+history|future\s+plans|repeat\s+again|"
            r"close\s+proximity|end\s+result)\b",
            re.I,
        ),
        "redundancy", 1, "Redundant phrase",
    ),
    ErrorRule(
        "wordiness",
        re.compile(
            r"\b(in\s+order\s+to|due\s+to\s+the\s+fact\s+that|at\s+this\s+point\s+in\s+time|"
            r"for\s+the\s+purpose\s+of)\b",
            re.I,
        ),
        "wordiness", 1, "Wordy construction",
    ),
)

PUNCTUATION_ERRORS: tuple[ErrorRule, ...] = (
    ErrorRule(
        "space-before-punctuation", re.compile(r"\s+[.,!?;:]"),
        "punctuation-spacing", 1, "Space before punctuation",
    ),
    ErrorRule(
        "multiple-punctuation", re.compile(r"[.!?]{2,}"),
        "punctuation-repetition", 1, "Multiple punctuation marks",
    ),
    ErrorRule(
        "missing-space-after", re.compile(r"[.,!?;:][a-zA-Z]"),
        "punctuation-spacing", 1, "Missing space after punctuation",
    ),
    ErrorRule(
        "quotation-spacing", re.compile(r"""[.,!?]\s*["']"""),
        "quotation-punctuation", 1, "Quotation mark placement",
    ),
)

ERROR_RULES: tuple[ErrorRule, ...] = COMMON_ERROR_PATTERNS + PUNCTUATION_ERRORS


# === Style markers (not errors, register signals) ===

STYLE_MARKERS: tuple[ErrorRule, ...] = (
    ErrorRule(
        "contractions",
        re.compile(
            r"\b(don't|doesn't|didn't|isn't|aren't|wasn't|weren't|haven't|hasn't|hadn't|can't|"
            r"couldn't|shouldn't|wouldn't|won't|it's|that's|what's|who's|where's|when's|how's|"
            r"I'm|you're|we're|they're|I've|you've|we've|they've|I'll|you'll|we'll|they'll|"
            r"he's|she's)\b",
            re.I,
        ),
        "contraction", 0, "Contraction usage",
    ),
    ErrorRule(
        "first_person", re.compile(r"\b(I|me|my|mine|we|us|our|ours)\b", re.I),
        "first-person", 0, "First-person pronouns",
    ),
    ErrorRule(
        "second_person", re.compile(r"\b(you|your|yours)\b", re.I),
        "second-person", 0, "Second-person pronouns",
    ),
    ErrorRule(
        "colloquial", re.compile(r"\b(gonna|wanna|gotta|kinda|sorta|yeah|yep|nope|ok|okay)\b", re.I),
        "colloquial", 2, "Colloquial language",
    ),
)
