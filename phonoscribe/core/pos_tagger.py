"""Context-window part-of-speech heuristics used to pick homograph variants.

The tagger is deliberately shallow: it only looks at the word itself and its
immediate neighbours, and only distinguishes the handful of coarse tags the
homograph table is keyed on.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Sequence, Tuple

VERB = "V"
NON_VERB = "!V"
DETERMINER = "DT"
PAST_VERB = "VBD"
ADJECTIVE = "ADJ"

VERB_ENDINGS: Tuple[str, ...] = ("ed", "ing", "es", "s", "en", "er", "ize", "ise", "fy", "ate")
NOUN_ENDINGS: Tuple[str, ...] = (
    "tion", "sion", "ness", "ment", "ity", "ty", "er", "or",
    "ist", "ian", "ism", "age", "ure", "ence", "ance",
)
ADJECTIVE_ENDINGS: Tuple[str, ...] = (
    "able", "ible", "al", "ial", "ed", "en", "er", "est",
    "ful", "ic", "ish", "ive", "less", "ly", "ous", "y",
)

DETERMINERS: FrozenSet[str] = frozenset(
    {"the", "a", "an", "this", "that", "these", "those", "my", "your",
     "his", "her", "its", "our", "their"}
)
AUX_VERBS: FrozenSet[str] = frozenset(
    {"am", "is", "are", "was", "were", "be", "being", "been", "have", "has",
     "had", "having", "do", "does", "did", "doing", "will", "would", "shall",
     "should", "can", "could", "may", "might", "must"}
)
PREPOSITIONS: FrozenSet[str] = frozenset(
    {"in", "on", "at", "by", "for", "with", "from", "to", "of", "about",
     "under", "over", "through", "between", "among"}
)
COMMON_NOUNS: FrozenSet[str] = frozenset(
    {"way", "book", "books", "paper", "time", "people", "world", "life",
     "hand", "part", "child", "eye", "woman", "place", "work", "week",
     "case", "point", "company", "number", "group", "problem", "fact"}
)
IMPERATIVE_CUES: FrozenSet[str] = frozenset({"please", "don't", "do", "doesn't", "never"})
MODAL_VERBS: FrozenSet[str] = frozenset(
    {"can", "will", "would", "should", "could", "may", "might", "must"}
)
SUBJECT_PRONOUNS: FrozenSet[str] = frozenset({"i", "you", "he", "she", "it", "we", "they"})

_SENTENCE_SPLIT = re.compile(r"[\s,.!?;:()]+")


@dataclass(frozen=True)
class POSResult:
    word: str
    pos: str
    confidence: float


def _is_likely_noun(word: str) -> bool:
    return word in COMMON_NOUNS or word.endswith(NOUN_ENDINGS)


class SimplePOSTagger:
    """Assign a coarse tag to a word from its left and right neighbours."""

    def tag_word(self, word: str, context: Optional[Sequence[str]] = None) -> POSResult:
        """Tag ``word`` given ``context`` as ``[previous, next]``.

        The successor is only read when ``context`` holds two entries.
        """

        context = context or ()
        lower = word.lower()
        prev_word = context[0].lower() if len(context) >= 1 and context[0] else ""
        next_word = context[1].lower() if len(context) >= 2 and context[1] else ""

        if lower in DETERMINERS:
            return POSResult(word, DETERMINER, 0.9)

        if prev_word in DETERMINERS:
            return POSResult(word, NON_VERB, 0.95)
        if prev_word in IMPERATIVE_CUES:
            return POSResult(word, VERB, 0.9)
        if prev_word in MODAL_VERBS:
            return POSResult(word, VERB, 0.9)
        if prev_word in SUBJECT_PRONOUNS:
            return POSResult(word, VERB, 0.85)
        if prev_word in AUX_VERBS:
            return POSResult(word, VERB, 0.8)

        if next_word in DETERMINERS:
            return POSResult(word, VERB, 0.8)
        if next_word and _is_likely_noun(next_word):
            return POSResult(word, VERB, 0.75)
        if next_word == "to":
            return POSResult(word, VERB, 0.7)

        if prev_word in PREPOSITIONS:
            return POSResult(word, NON_VERB, 0.7)

        return self._tag_by_suffix(word, lower)

    def _tag_by_suffix(self, word: str, lower: str) -> POSResult:
        for ending in VERB_ENDINGS:
            if not lower.endswith(ending):
                continue
            if ending == "ed":
                return POSResult(word, PAST_VERB, 0.6)
            if ending == "ing":
                return POSResult(word, VERB, 0.6)
            if ending == "s" and len(lower) > 2:
                return POSResult(word, VERB, 0.4)
            return POSResult(word, VERB, 0.5)

        if lower.endswith(NOUN_ENDINGS):
            return POSResult(word, NON_VERB, 0.5)

        for ending in ADJECTIVE_ENDINGS:
            if lower.endswith(ending):
                if ending == "ly":
                    return POSResult(word, ADJECTIVE, 0.6)
                return POSResult(word, NON_VERB, 0.5)

        return POSResult(word, NON_VERB, 0.3)

    def tag_words(self, words: Sequence[str]) -> List[POSResult]:
        """Tag every word using its immediate neighbours.

        Boundary positions have no neighbour on one side; the missing slot is
        dropped rather than padded, so a first word's successor lands in the
        predecessor position.
        """

        results: List[POSResult] = []
        for index, word in enumerate(words):
            prev_word = words[index - 1] if index > 0 else ""
            next_word = words[index + 1] if index + 1 < len(words) else ""
            context = [item for item in (prev_word, next_word) if item]
            results.append(self.tag_word(word, context))
        return results

    def tag_sentence(self, sentence: str) -> List[POSResult]:
        words = [piece for piece in _SENTENCE_SPLIT.split(sentence.lower()) if piece]
        return self.tag_words(words)


__all__ = [
    "ADJECTIVE",
    "DETERMINER",
    "NON_VERB",
    "PAST_VERB",
    "VERB",
    "POSResult",
    "SimplePOSTagger",
]
