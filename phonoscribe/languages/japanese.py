"""Japanese engine working on Hepburn romaji; kana is romanized first."""

from __future__ import annotations

import re
from typing import Dict, Optional

from anyascii import anyascii

from ..core.engine import TablePhoneticEngine

SYLLABLE_MAP: Dict[str, str] = {
    "a": "a", "i": "i", "u": "ɯ", "e": "e", "o": "o",
    "ka": "ka", "ki": "ki", "ku": "kɯ", "ke": "ke", "ko": "ko",
    "ga": "ɡa", "gi": "ɡi", "gu": "ɡɯ", "ge": "ɡe", "go": "ɡo",
    "sa": "sa", "shi": "ʃi", "su": "sɯ", "se": "se", "so": "so",
    "za": "za", "ji": "dʑi", "zu": "zɯ", "ze": "ze", "zo": "zo",
    "ta": "ta", "chi": "tɕi", "tsu": "tsɯ", "te": "te", "to": "to",
    "da": "da", "de": "de", "do": "do",
    "na": "na", "ni": "ni", "nu": "nɯ", "ne": "nɛ", "no": "no",
    "ha": "ha", "hi": "çi", "fu": "ɸɯ", "he": "hɛ", "ho": "ho",
    "ba": "ba", "bi": "bi", "bu": "bɯ", "be": "be", "bo": "bo",
    "pa": "pa", "pi": "pi", "pu": "pɯ", "pe": "pe", "po": "po",
    "ma": "ma", "mi": "mi", "mu": "mɯ", "me": "mɛ", "mo": "mo",
    "ya": "ja", "yu": "jɯ", "yo": "jo",
    "ra": "ɾa", "ri": "ɾi", "ru": "ɾɯ",
    "wa": "wa", "wo": "o", "n": "n",
    "kya": "kja", "kyu": "kjɯ", "kyo": "kjo",
    "gya": "ɡja", "gyu": "ɡjɯ", "gyo": "ɡjo",
    "sha": "ʃa", "shu": "ʃɯ", "sho": "ʃo",
    "ja": "dʑa", "ju": "dʑɯ", "jo": "dʑo",
    "cha": "tɕa", "chu": "tɕɯ", "cho": "tɕo",
    "nya": "ɲa", "nyu": "ɲɯ", "nyo": "ɲo",
    "hya": "ça", "hyu": "çɯ", "hyo": "ço",
    "ryu": "ɾjɯ",
}

LONG_VOWELS: Dict[str, str] = {"aa": "aː", "ii": "iː", "uu": "uː", "ee": "eː", "oo": "oː"}

# Whole-word particles and greetings whose kana spelling differs from speech.
PARTICLE_READINGS: Dict[str, str] = {
    "ha": "wa",
    "he": "e",
    "wo": "o",
    "konnichiha": "konnichiwa",
    "konbanha": "konbanwa",
}

_SOKUON = "っ"
_MORAIC_N = "ん"
# Doubled consonants other than n mark a sokuon; "nn" is a moraic n before n.
_GEMINATE = re.compile(r"([bcdfghjklmpqrstvwxyz])\1")
_NASAL_BEFORE_CONSONANT = re.compile(r"n(?=[bcdfghjklmpqrstvwxyz])")
_KANA = re.compile(r"[぀-ヿ]")


def romaji_to_ipa(text: str) -> str:
    text = text.lower()
    text = PARTICLE_READINGS.get(text, text)

    text = _GEMINATE.sub(_SOKUON + r"\1", text)
    text = _NASAL_BEFORE_CONSONANT.sub(_MORAIC_N, text)
    for spelling, vowel in LONG_VOWELS.items():
        text = text.replace(spelling, vowel)

    pieces = []
    index = 0
    while index < len(text):
        for width in (3, 2, 1):
            chunk = text[index : index + width]
            if len(chunk) == width and chunk in SYLLABLE_MAP:
                pieces.append(SYLLABLE_MAP[chunk])
                index += width
                break
        else:
            char = text[index]
            pieces.append("n" if char == _MORAIC_N else char)
            index += 1

    # Gemination is only marked while matching; it is not rendered.
    return "".join(pieces).replace(_SOKUON, "")


class JapaneseG2P(TablePhoneticEngine):
    id = "ja-g2p"
    name = "Japanese G2P Processor"
    supported_languages = ("ja",)

    def _convert(self, word: str) -> Optional[str]:
        if _KANA.search(word):
            word = anyascii(word)
        return romaji_to_ipa(word)


__all__ = ["JapaneseG2P", "LONG_VOWELS", "PARTICLE_READINGS", "SYLLABLE_MAP", "romaji_to_ipa"]
