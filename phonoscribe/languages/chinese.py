"""Mandarin engine: Han characters to IPA with Chao tone letters, or to Zhuyin."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from pypinyin import Style, lazy_pinyin

from ..core.engine import TablePhoneticEngine, ZhuyinCapable
from ..core.notation import pinyin_to_zhuyin
from ..utils.observability import get_logger

PINYIN_TO_IPA: Dict[str, str] = {
    # Initials
    "b": "p",
    "p": "pʰ",
    "d": "t",
    "t": "tʰ",
    "g": "k",
    "k": "kʰ",
    "j": "tɕ",
    "q": "tɕʰ",
    "zh": "ʈʂ",
    "ch": "ʈʂʰ",
    "z": "ts",
    "c": "tsʰ",
    "f": "f",
    "x": "ɕ",
    "sh": "ʂ",
    "r": "ʐ",
    "s": "s",
    "h": "x",
    "m": "m",
    "n": "n",
    "l": "l",
    "w": "w",
    "y": "j",
    # Simple finals
    "a": "a",
    "o": "o",
    "e": "ə",
    "i": "i",
    "u": "u",
    "ü": "y",
    "v": "y",
    # Diphthongs
    "ai": "aɪ",
    "ei": "eɪ",
    "ao": "ɑʊ",
    "ou": "oʊ",
    # Nasal finals
    "an": "an",
    "en": "ən",
    "ang": "ɑŋ",
    "eng": "əŋ",
    "ong": "ʊŋ",
    "er": "ɚ",
    # Finals with medials
    "ia": "ia",
    "ie": "iɛ",
    "iao": "iɑʊ",
    "iu": "ioʊ",
    "iou": "ioʊ",
    "ian": "iɛn",
    "in": "in",
    "iang": "iɑŋ",
    "ing": "iŋ",
    "iong": "iʊŋ",
    "ua": "ua",
    "uo": "uɔ",
    "uai": "uaɪ",
    "ui": "ueɪ",
    "uei": "ueɪ",
    "uan": "uan",
    "un": "uən",
    "uen": "uən",
    "uang": "uɑŋ",
    "ueng": "uəŋ",
    "üe": "yɛ",
    "ve": "yɛ",
    "üan": "yɛn",
    "van": "yɛn",
    "ün": "yn",
    "vn": "yn",
    # Apical vowels after sibilants
    "zhi": "ʈʂɨ",
    "chi": "ʈʂʰɨ",
    "shi": "ʂɨ",
    "ri": "ʐɨ",
    "zi": "tsɨ",
    "ci": "tsʰɨ",
    "si": "sɨ",
    # Frequent whole syllables
    "zhong": "ʈʂʊŋ",
    "wen": "wən",
    "hao": "xɑʊ",
    "de": "tə",
    "wo": "wɔ",
    "ta": "tʰa",
    "zhe": "ʈʂə",
    "ge": "kə",
    "le": "lə",
    "yi": "i",
    "san": "san",
    "wu": "wu",
    "liu": "lioʊ",
    "qi": "tɕi",
    "ba": "pa",
    "jiu": "tɕioʊ",
}

TONE_MARKS: Dict[int, str] = {1: "˥˥", 2: "˧˥", 3: "˧˩˧", 4: "˥˩", 5: "˧", 0: ""}

_MULTI_LETTER_INITIALS: Tuple[str, ...] = ("zh", "ch", "sh")
_SINGLE_INITIALS: Tuple[str, ...] = (
    "b", "p", "m", "f", "d", "t", "n", "l", "g", "k",
    "h", "j", "q", "x", "r", "z", "c", "s", "y", "w",
)

# Han blocks: unified ideographs, extensions A to F and compatibility ideographs.
_HAN_RANGES: Tuple[Tuple[int, int], ...] = (
    (0x4E00, 0x9FFF),
    (0x3400, 0x4DBF),
    (0x20000, 0x2A6DF),
    (0x2A700, 0x2B73F),
    (0x2B740, 0x2B81F),
    (0x2B820, 0x2CEAF),
    (0x2CEB0, 0x2EBEF),
    (0xF900, 0xFAFF),
)


def is_han(char: str) -> bool:
    code = ord(char)
    return any(start <= code <= end for start, end in _HAN_RANGES)


@dataclass(frozen=True)
class PinyinReading:
    """Reading of one character of the input."""

    char: str
    pinyin: str
    tone: int
    ipa: str


def split_tone(pinyin: str) -> Tuple[str, int]:
    """Split ``zhong1`` into ``("zhong", 1)``; a missing digit is the neutral tone."""

    if pinyin and pinyin[-1] in "12345" and len(pinyin) > 1:
        return pinyin[:-1], int(pinyin[-1])
    return pinyin, 5


def decompose_pinyin(syllable: str) -> Tuple[str, str]:
    for initial in _MULTI_LETTER_INITIALS + _SINGLE_INITIALS:
        if syllable.startswith(initial):
            return initial, syllable[len(initial) :]
    return "", syllable


def pinyin_syllable_to_ipa(syllable: str, tone: int) -> str:
    direct = PINYIN_TO_IPA.get(syllable)
    if direct:
        return direct + TONE_MARKS.get(tone, "")
    initial, final = decompose_pinyin(syllable)
    return PINYIN_TO_IPA.get(initial, "") + PINYIN_TO_IPA.get(final, final) + TONE_MARKS.get(tone, "")


class ChineseG2P(TablePhoneticEngine, ZhuyinCapable):
    """Mandarin readings from :mod:`pypinyin`, rendered as IPA or Zhuyin."""

    id = "zh-g2p"
    name = "Chinese G2P Processor"
    supported_languages = ("zh",)

    def __init__(self) -> None:
        super().__init__()
        self._logger = get_logger(__name__).bind(component="chinese_g2p")

    def _convert(self, word: str) -> Optional[str]:
        return self.text_to_ipa(word)

    def text_to_ipa(self, text: str) -> str:
        if not text or not text.strip():
            return ""
        return " ".join(reading.ipa for reading in self.readings(text))

    def text_to_zhuyin(self, text: str) -> str:
        if not text or not text.strip():
            return ""
        rendered: List[str] = []
        for reading in self.readings(text):
            if is_han(reading.char):
                rendered.append(pinyin_to_zhuyin(reading.pinyin))
            else:
                rendered.append(reading.char)
        return " ".join(rendered)

    def readings(self, text: str) -> List[PinyinReading]:
        """Return one reading per character of ``text``.

        Characters outside the Han blocks are carried through unchanged.
        """

        han_chars = [char for char in text if is_han(char)]
        syllables = self._pinyin_for(han_chars)

        results: List[PinyinReading] = []
        cursor = 0
        for char in text:
            if not is_han(char):
                results.append(PinyinReading(char, char, 0, char))
                continue
            pinyin = syllables[cursor] if cursor < len(syllables) else char
            cursor += 1
            syllable, tone = split_tone(pinyin)
            results.append(PinyinReading(char, pinyin, tone, pinyin_syllable_to_ipa(syllable, tone)))
        return results

    def _pinyin_for(self, han_chars: List[str]) -> List[str]:
        if not han_chars:
            return []
        try:
            # Converting the whole run keeps pypinyin's phrase-level readings.
            syllables = lazy_pinyin(
                "".join(han_chars), style=Style.TONE3, neutral_tone_with_five=True
            )
            if len(syllables) == len(han_chars):
                return syllables
            return [
                (lazy_pinyin(char, style=Style.TONE3, neutral_tone_with_five=True) or [char])[0]
                for char in han_chars
            ]
        except Exception as exc:
            self._logger.warning(
                "Pinyin conversion failed; keeping characters",
                context={"text": "".join(han_chars), "error": str(exc)},
            )
            return list(han_chars)


__all__ = [
    "ChineseG2P",
    "PINYIN_TO_IPA",
    "PinyinReading",
    "TONE_MARKS",
    "decompose_pinyin",
    "is_han",
    "pinyin_syllable_to_ipa",
    "split_tone",
]
