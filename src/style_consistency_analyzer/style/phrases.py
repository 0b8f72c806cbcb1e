"""
Word and Phrase Catalogs

Fixed vocabularies used by the metric extractors: the high-frequency
(function) word list, connectives, formulaic register phrases and
template n-grams.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


# ~150 most frequent English words (style markers, not content).
# Order is fixed: function-word similarity sums over this tuple in order.
_HIGH_FREQUENCY_WORDS = [
    "the", "of", "and", "to", "a", "in", "that", "is", "was", "he",
    "for", "it", "with", "as", "his", "on", "be", "at", "by", "i",
    "this", "had", "not", "are", "but", "from", "or", "have", "an", "they",
    "which", "one", "you", "were", "all", "her", "she", "there", "would", "their",
    "we", "him", "been", "has", "when", "who", "will", "no", "more", "if",
    "out", "so", "up", "said", "what", "its", "about", "than", "into", "them",
    "can", "only", "other", "time", "new", "some", "could", "these", "two", "may",
    "first", "then", "do", "any", "like", "my", "now", "over", "such", "our",
    "man", "me", "even", "most", "made", "after", "also", "did", "many", "off",
    "before", "must", "well", "back", "through", "years", "much", "where", "your", "way",
    "being", "both", "each", "few", "how", "just", "very", "because", "while", "should",
    "might", "us", "why", "here", "am", "those", "does", "same", "own", "too",
    "again", "against", "once", "under", "between", "during", "until", "upon", "without", "within",
    "however", "another", "still", "though", "although", "every", "something", "make", "get", "know",
    "take", "see", "come", "think", "good", "people", "day", "use", "work", "thing",
]

HIGH_FREQUENCY_WORDS: tuple[str, ...] = tuple(dict.fromkeys(_HIGH_FREQUENCY_WORDS))
HIGH_FREQUENCY_SET: frozenset[str] = frozenset(HIGH_FREQUENCY_WORDS)


def is_content_word(word: str) -> bool:
    """Content words are longer than three letters and not high-frequency."""
    return len(word) > 3 and word not in HIGH_FREQUENCY_SET


# Discourse connectives, by rhetorical function
CONNECTIVES: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "addition": ("furthermore", "moreover", "additionally", "also", "in addition", "besides"),
    "contrast": (
        "however", "nevertheless", "nonetheless", "on the other hand",
        "conversely", "yet", "although", "whereas",
    ),
    "cause": ("therefore", "consequently", "thus", "hence", "as a result", "because"),
    "sequence": (
        "first", "firstly", "second", "secondly", "then", "next",
        "finally", "subsequently", "meanwhile",
    ),
    "example": ("for example", "for instance", "such as", "specifically", "namely"),
    "conclusion": ("in conclusion", "to summarize", "in summary", "overall", "ultimately"),
})

ALL_CONNECTIVES: tuple[str, ...] = tuple(
    word for words in CONNECTIVES.values() for word in words
)


@dataclass(frozen=True)
class PhraseRule:
    """A formulaic phrase with its severity weight (1-3) and a plainer alternative."""
    phrase: str
    weight: int
    suggestion: str


FORMAL_REGISTER_PHRASES: tuple[PhraseRule, ...] = (
    # High severity: stock phrases of template prose
    PhraseRule("it is important to note", 3, "Drop it and state the point"),
    PhraseRule("it is worth noting", 3, "Drop it and state the point"),
    PhraseRule("in today's world", 3, "Name the actual time or context"),
    PhraseRule("in today's society", 3, "Name the actual time or context"),
    PhraseRule("plays a crucial role", 3, "matters because..."),
    PhraseRule("plays a vital role", 3, "matters because..."),
    PhraseRule("a testament to", 3, "shows"),
    PhraseRule("delve", 3, "look at, examine"),
    PhraseRule("tapestry", 3, "mix, combination"),
    PhraseRule("multifaceted", 3, "complex, varied"),
    PhraseRule("navigate the complexities", 3, "deal with"),
    PhraseRule("in the realm of", 3, "in"),
    PhraseRule("ever-evolving", 3, "changing"),
    # Medium severity: heavy transitions and hedges
    PhraseRule("in conclusion", 2, "Let the last paragraph speak for itself"),
    PhraseRule("to sum up", 2, "Let the last paragraph speak for itself"),
    PhraseRule("furthermore", 2, "also, and"),
    PhraseRule("moreover", 2, "also, and"),
    PhraseRule("additionally", 2, "also"),
    PhraseRule("on the other hand", 2, "but"),
    PhraseRule("a wide range of", 2, "many"),
    PhraseRule("a variety of", 2, "several, many"),
    PhraseRule("due to the fact that", 2, "because"),
    PhraseRule("in order to", 2, "to"),
    PhraseRule("crucial", 2, "important, key"),
    PhraseRule("pivotal", 2, "key"),
    PhraseRule("foster", 2, "encourage, build"),
    PhraseRule("underscore", 2, "show, stress"),
    PhraseRule("showcase", 2, "show"),
    PhraseRule("leverage", 2, "use"),
    # Low severity: common but worth watching
    PhraseRule("overall", 1, "Often removable"),
    PhraseRule("significantly", 1, "Quantify instead"),
    PhraseRule("various", 1, "several, different"),
    PhraseRule("numerous", 1, "many"),
    PhraseRule("utilize", 1, "use"),
    PhraseRule("in terms of", 1, "in, for, about"),
    PhraseRule("as well as", 1, "and"),
    PhraseRule("therefore", 1, "so"),
    PhraseRule("thus", 1, "so"),
    PhraseRule("ultimately", 1, "in the end"),
)


# Template n-grams whose density is compared against human baselines
FORMULAIC_NGRAMS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "bigrams": (
        "of the", "in the", "to the", "on the", "and the", "for the", "it is",
        "this is", "there are", "there is", "such as", "as well", "in order",
        "due to", "plays a", "a crucial", "a vital", "an important", "is important",
        "can be", "in addition", "in conclusion", "as a", "one of",
    ),
    "trigrams": (
        "it is important", "is important to", "plays a crucial", "plays a vital",
        "in order to", "as well as", "one of the", "a wide range", "wide range of",
        "a variety of", "on the other", "the other hand", "it is essential",
        "due to the", "in terms of", "the fact that", "a significant role",
        "in today's world", "it can be", "can be seen",
    ),
})
