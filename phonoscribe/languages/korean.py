"""Korean engine over capitalised romaja syllables (``HanGugEo``).

Hangul input is romanized one syllable block at a time so that syllable
boundaries survive. Each syllable is split into initial, medial and final
jamo before liaison and intervocalic voicing are applied.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from anyascii import anyascii

from ..core.engine import TablePhoneticEngine

INITIALS: Dict[str, str] = {
    "g": "k", "kk": "k͈", "k": "kʰ",
    "n": "n",
    "d": "t", "tt": "t͈", "t": "tʰ",
    "r": "ɾ", "l": "l",
    "m": "m",
    "b": "p", "pp": "p͈", "p": "pʰ",
    "s": "s", "ss": "s͈",
    "j": "tɕ", "jj": "tɕ͈", "ch": "tɕʰ",
    "h": "h",
    "ng": "ŋ",
    # silent ieung
    "": "ʔ",
}

MEDIALS: Dict[str, str] = {
    "a": "a", "ae": "ɛ", "ya": "ja", "yae": "jɛ",
    "eo": "ʌ", "e": "e", "yeo": "jʌ", "ye": "je",
    "o": "o", "wa": "wa", "wae": "wɛ", "oe": "we", "yo": "jo",
    "u": "u", "wo": "wʌ", "we": "we", "wi": "wi", "yu": "ju",
    "eu": "ɯ", "ui": "ɰi",
    "i": "i",
}

# Seven representative final sounds.
FINALS: Dict[str, str] = {
    "g": "k̚", "k": "k̚", "kk": "k̚",
    "n": "n",
    "d": "t̚", "s": "t̚", "ss": "t̚", "t": "t̚", "j": "t̚", "ch": "t̚",
    "l": "l",
    "m": "m",
    "b": "p̚", "p": "p̚",
    "ng": "ŋ",
}

VOICED: Dict[str, str] = {"k": "ɡ", "t": "d", "p": "b", "tɕ": "dʑ"}
_SONORANT_FINALS = frozenset({"n", "m", "ŋ", "l"})

# Longest medial first so that "yeo" wins over "eo" and "o".
_MEDIAL_KEYS: Tuple[str, ...] = tuple(sorted(MEDIALS, key=len, reverse=True))
_SYLLABLE = re.compile(r"[A-Z][a-z]*")
_HANGUL = re.compile(r"[가-힯]")


@dataclass
class Syllable:
    initial: str
    medial: str
    final: str


def decompose(syllable: str) -> Syllable:
    syllable = syllable.lower()
    for medial in _MEDIAL_KEYS:
        index = syllable.find(medial)
        if index != -1:
            return Syllable(syllable[:index], medial, syllable[index + len(medial) :])
    return Syllable("", syllable, "")


def hangul_to_romaja(text: str) -> str:
    """Romanize Hangul, capitalising each syllable block."""

    return "".join(anyascii(char).capitalize() if _HANGUL.match(char) else char for char in text)


def romaja_to_ipa(text: str) -> str:
    chunks = _SYLLABLE.findall(text)
    if not chunks:
        return text

    syllables: List[Syllable] = [decompose(chunk) for chunk in chunks]

    # Liaison: a final consonant moves into a following empty initial.
    for current, following in zip(syllables, syllables[1:]):
        if current.final and not following.initial:
            following.initial = current.final
            current.final = ""

    rendered: List[str] = []
    for index, syllable in enumerate(syllables):
        initial = INITIALS.get(syllable.initial, syllable.initial)
        if index > 0 and initial in VOICED:
            previous = syllables[index - 1]
            if previous.medial in MEDIALS or FINALS.get(previous.final) in _SONORANT_FINALS:
                initial = VOICED[initial]
        medial = MEDIALS.get(syllable.medial, syllable.medial)
        final = FINALS.get(syllable.final, "")
        rendered.append(initial + medial + final)
    return "".join(rendered)


class KoreanG2P(TablePhoneticEngine):
    id = "ko-g2p"
    name = "Korean G2P Processor"
    supported_languages = ("ko",)

    def _convert(self, word: str) -> Optional[str]:
        if _HANGUL.search(word):
            word = hangul_to_romaja(word)
        return romaja_to_ipa(word)


__all__ = [
    "FINALS",
    "INITIALS",
    "KoreanG2P",
    "MEDIALS",
    "Syllable",
    "decompose",
    "hangul_to_romaja",
    "romaja_to_ipa",
]
