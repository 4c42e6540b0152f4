"""Russian engine over the ASCII transliteration of Cyrillic text."""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from anyascii import anyascii

from ..core.engine import TablePhoneticEngine

LETTER_MAP: Dict[str, str] = {
    "a": "a", "e": "e", "i": "i", "o": "o", "u": "u", "y": "ɨ",
    "b": "b", "v": "v", "g": "ɡ", "d": "d", "zh": "ʐ", "z": "z",
    "j": "j", "k": "k", "l": "l", "m": "m", "n": "n", "p": "p",
    "r": "r", "s": "s", "t": "t", "f": "f", "kh": "x", "ts": "ts",
    "ch": "tɕ", "sh": "ʂ", "shch": "ɕː",
    # iotated vowels
    "ya": "ja", "yu": "ju", "yo": "jo",
    # soft sign
    "'": "ʲ",
    # hard sign
    '"': "",
}

VOWEL_KEYS = frozenset({"a", "e", "i", "o", "u", "y", "ya", "yu", "yo"})
SOFT_VOWELS: Tuple[str, ...] = ("yo", "yu", "ya", "e", "i")
# Hard in every position, or soft already.
NEVER_PALATALIZED = frozenset({"j", "ʂ", "ʐ", "ts", "tɕ", "ɕː"})

_KEYS_BY_LENGTH: Tuple[str, ...] = tuple(sorted(LETTER_MAP, key=len, reverse=True))
_CYRILLIC = re.compile(r"[Ѐ-ӿ]")


def latin_to_ipa(text: str) -> str:
    text = text.lower()
    phonemes: List[str] = []
    index = 0
    while index < len(text):
        key = next((k for k in _KEYS_BY_LENGTH if text.startswith(k, index)), None)
        if key is None:
            phonemes.append(text[index])
            index += 1
            continue

        index += len(key)
        phoneme = LETTER_MAP[key]
        if (
            key.isalpha()
            and key not in VOWEL_KEYS
            and phoneme not in NEVER_PALATALIZED
            and text.startswith(SOFT_VOWELS, index)
        ):
            phoneme += "ʲ"
        phonemes.append(phoneme)

    return "".join(phonemes).replace("ʲj", "j")


class RussianG2P(TablePhoneticEngine):
    id = "ru-g2p"
    name = "Russian G2P Processor"
    supported_languages = ("ru",)

    def _convert(self, word: str) -> Optional[str]:
        if _CYRILLIC.search(word):
            word = anyascii(word)
        return latin_to_ipa(word)


__all__ = ["LETTER_MAP", "RussianG2P", "SOFT_VOWELS", "latin_to_ipa"]
