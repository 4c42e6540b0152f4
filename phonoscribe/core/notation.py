"""Conversion tables and helpers between IPA, ARPABET and Zhuyin notations."""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..utils.observability import get_logger

_LOGGER = get_logger(__name__).bind(component="notation")

PRIMARY_STRESS = "ˈ"
SECONDARY_STRESS = "ˌ"

# Emitted by ``ipa_to_arpabet`` for IPA symbols with no ARPABET counterpart.
UNKNOWN_SYMBOL_PLACEHOLDER = "undefined"

ARPABET_TO_IPA: Dict[str, str] = {
    # Vowels
    "AA": "ɑ",
    "AE": "æ",
    "AH": "ʌ",
    "AO": "ɔ",
    "AX": "ə",
    "AXR": "ɚ",
    "EH": "ɛ",
    "ER": "ɝ",
    "IH": "ɪ",
    "IY": "i",
    "UH": "ʊ",
    "UW": "u",
    # Diphthongs
    "AW": "aʊ",
    "AY": "aɪ",
    "EY": "eɪ",
    "OW": "oʊ",
    "OY": "ɔɪ",
    # Stops and fricatives
    "B": "b",
    "D": "d",
    "G": "ɡ",
    "K": "k",
    "P": "p",
    "T": "t",
    "DH": "ð",
    "F": "f",
    "HH": "h",
    "S": "s",
    "SH": "ʃ",
    "TH": "θ",
    "V": "v",
    "Z": "z",
    "ZH": "ʒ",
    # Affricates
    "CH": "tʃ",
    "JH": "dʒ",
    # Nasals and liquids
    "M": "m",
    "N": "n",
    "NG": "ŋ",
    "EL": "ɫ",
    "L": "l",
    "R": "ɹ",
    # Glides
    "W": "w",
    "Y": "j",
    # Mandarin finals
    "TS": "ts",
    "UO": "uo",
    "YE": "je",
    "UAH": "ua",
    "YEN": "jɛn",
    "YAW": "jaʊ",
    "YOW": "joʊ",
    "WAY": "waɪ",
    "UAHN": "uɑn",
    "UE": "yɛ",
    "UY": "ui",
    "UA": "ua",
    "EN": "ən",
    "IN": "in",
    "UN": "un",
    # Other languages
    "OE": "ø",
    "AR": "ɑr",
    "HL": "ħl",
    "AB": "ɑb",
    "SAW": "ɔ",
    "KH": "kʰ",
    "PH": "pʰ",
    "NY": "ɲ",
}

# Later entries win, so ``ɔ`` maps to ``SAW`` and ``ua`` to ``UA``.
IPA_TO_ARPABET: Dict[str, str] = {ipa: arpabet for arpabet, ipa in ARPABET_TO_IPA.items()}

STRESS_DIGIT_TO_IPA: Dict[str, str] = {"0": "", "1": PRIMARY_STRESS, "2": SECONDARY_STRESS}
IPA_TO_STRESS_DIGIT: Dict[str, str] = {
    marker: digit for digit, marker in STRESS_DIGIT_TO_IPA.items() if marker
}

ARPABET_VOWELS: Set[str] = {
    "AA", "AE", "AH", "AO", "AW", "AX", "AXR", "AY", "EH", "ER",
    "EY", "IH", "IY", "OW", "OY", "UH", "UW",
}

# Consonant clusters (beyond single consonants) that can open an English syllable.
ARPABET_ONSET_CLUSTERS: Set[Tuple[str, ...]] = {
    ("P", "L"), ("P", "R"), ("B", "L"), ("B", "R"), ("T", "R"), ("D", "R"),
    ("K", "L"), ("K", "R"), ("G", "L"), ("G", "R"), ("F", "L"), ("F", "R"),
    ("TH", "R"), ("SH", "R"), ("S", "P"), ("S", "T"), ("S", "K"), ("S", "M"),
    ("S", "N"), ("S", "L"), ("S", "W"), ("S", "F"), ("T", "W"), ("D", "W"),
    ("K", "W"), ("G", "W"), ("TH", "W"), ("P", "Y"), ("B", "Y"), ("K", "Y"),
    ("G", "Y"), ("F", "Y"), ("V", "Y"), ("M", "Y"), ("HH", "Y"),
    ("S", "P", "L"), ("S", "P", "R"), ("S", "T", "R"), ("S", "K", "R"),
    ("S", "K", "W"), ("S", "K", "L"), ("S", "P", "Y"), ("S", "K", "Y"),
}

CHINESE_TONE_TO_ARROW: Dict[str, str] = {
    "˥˥": "→",
    "˧˥": "↗",
    "˧˩˧": "↓↗",
    "˥˩": "↘",
}

PINYIN_INITIALS_TO_ZHUYIN: Dict[str, str] = {
    "b": "ㄅ", "p": "ㄆ", "m": "ㄇ", "f": "ㄈ",
    "d": "ㄉ", "t": "ㄊ", "n": "ㄋ", "l": "ㄌ",
    "g": "ㄍ", "k": "ㄎ", "h": "ㄏ",
    "j": "ㄐ", "q": "ㄑ", "x": "ㄒ",
    "zh": "ㄓ", "ch": "ㄔ", "sh": "ㄕ", "r": "ㄖ",
    "z": "ㄗ", "c": "ㄘ", "s": "ㄙ",
}

PINYIN_FINALS_TO_ZHUYIN: Dict[str, str] = {
    "a": "ㄚ", "o": "ㄛ", "e": "ㄜ", "ê": "ㄝ",
    "ai": "ㄞ", "ei": "ㄟ", "ao": "ㄠ", "ou": "ㄡ",
    "an": "ㄢ", "en": "ㄣ", "ang": "ㄤ", "eng": "ㄥ", "ong": "ㄨㄥ",
    "er": "ㄦ",
    "i": "ㄧ", "ia": "ㄧㄚ", "ie": "ㄧㄝ", "iao": "ㄧㄠ", "iu": "ㄧㄡ", "iou": "ㄧㄡ",
    "ian": "ㄧㄢ", "in": "ㄧㄣ", "iang": "ㄧㄤ", "ing": "ㄧㄥ", "iong": "ㄩㄥ",
    "u": "ㄨ", "ua": "ㄨㄚ", "uo": "ㄨㄛ", "uai": "ㄨㄞ", "ui": "ㄨㄟ", "uei": "ㄨㄟ",
    "uan": "ㄨㄢ", "un": "ㄨㄣ", "uen": "ㄨㄣ", "uang": "ㄨㄤ", "ueng": "ㄨㄥ",
    "ü": "ㄩ", "üe": "ㄩㄝ", "üan": "ㄩㄢ", "ün": "ㄩㄣ",
    "v": "ㄩ", "ve": "ㄩㄝ", "van": "ㄩㄢ", "vn": "ㄩㄣ",
}

# Whole syllables whose spelling does not decompose into initial + final.
PINYIN_SYLLABLES_TO_ZHUYIN: Dict[str, str] = {
    "zhi": "ㄓ", "chi": "ㄔ", "shi": "ㄕ", "ri": "ㄖ",
    "zi": "ㄗ", "ci": "ㄘ", "si": "ㄙ",
    "yi": "ㄧ", "ya": "ㄧㄚ", "yo": "ㄧㄛ", "ye": "ㄧㄝ", "yao": "ㄧㄠ",
    "you": "ㄧㄡ", "yan": "ㄧㄢ", "yin": "ㄧㄣ", "yang": "ㄧㄤ", "ying": "ㄧㄥ",
    "yong": "ㄩㄥ", "yu": "ㄩ", "yue": "ㄩㄝ", "yuan": "ㄩㄢ", "yun": "ㄩㄣ",
    "wu": "ㄨ", "wa": "ㄨㄚ", "wo": "ㄨㄛ", "wai": "ㄨㄞ", "wei": "ㄨㄟ",
    "wan": "ㄨㄢ", "wen": "ㄨㄣ", "wang": "ㄨㄤ", "weng": "ㄨㄥ",
}

_PINYIN_INITIAL_ORDER: Tuple[str, ...] = (
    "zh", "ch", "sh",
    "b", "p", "m", "f", "d", "t", "n", "l", "g", "k", "h",
    "j", "q", "x", "r", "z", "c", "s", "y", "w",
)

_STRESS_MARKERS = re.compile(r"[ˈˌ]")
_ARPABET_STRESS_DIGIT = re.compile(r"[012]$")
_ARPABET_PHONE = re.compile(r"^([A-Z]+)([012])?$")
_TONE_DIGIT = re.compile(r"([1-5])$")


def strip_stress(text: str) -> str:
    """Remove primary and secondary IPA stress markers."""

    return _STRESS_MARKERS.sub("", text)


def _next_phoneme(ipa: str, index: int) -> Optional[Tuple[str, int]]:
    two_char = ipa[index : index + 2]
    if len(two_char) == 2 and two_char in IPA_TO_ARPABET:
        return IPA_TO_ARPABET[two_char], 2
    one_char = ipa[index : index + 1]
    if one_char and one_char in IPA_TO_ARPABET:
        return IPA_TO_ARPABET[one_char], 1
    return None


def ipa_to_arpabet(ipa: Optional[str]) -> str:
    """Convert an IPA string into space separated ARPABET phones.

    A stress marker attaches its digit to the phone that follows it. Symbols
    without an ARPABET counterpart are emitted as ``undefined``.
    """

    if not ipa or not ipa.strip():
        return ""

    result: List[str] = []
    index = 0
    while index < len(ipa):
        char = ipa[index]

        if char in IPA_TO_STRESS_DIGIT:
            digit = IPA_TO_STRESS_DIGIT[char]
            index += 1
            following = _next_phoneme(ipa, index)
            if following is not None:
                phone, length = following
                result.append(phone + digit)
                index += length
            continue

        following = _next_phoneme(ipa, index)
        if following is not None:
            phone, length = following
            result.append(phone)
            index += length
            continue

        if char == " ":
            if result and result[-1] != " ":
                result.append(" ")
        elif char.strip():
            result.append(UNKNOWN_SYMBOL_PLACEHOLDER)
        index += 1

    return re.sub(r"\s+", " ", " ".join(result)).strip()


def arpabet_to_ipa(arpabet: Optional[str]) -> str:
    """Convert ARPABET phones to IPA, prefixing a single stress marker.

    Unknown phones are kept verbatim. The marker is primary when any phone
    carries stress ``1``, otherwise secondary when any carries ``2``.
    """

    if not arpabet or not arpabet.strip():
        return ""

    pieces: List[str] = []
    primary = False
    secondary = False
    for phone in arpabet.split():
        base = _ARPABET_STRESS_DIGIT.sub("", phone)
        ipa = ARPABET_TO_IPA.get(base)
        if ipa is None:
            pieces.append(phone)
            continue
        pieces.append(ipa)
        if phone.endswith("1"):
            primary = True
        elif phone.endswith("2"):
            secondary = True

    rendered = "".join(pieces)
    if primary:
        return PRIMARY_STRESS + rendered
    if secondary:
        return SECONDARY_STRESS + rendered
    return rendered


def _is_valid_onset(consonants: Sequence[str]) -> bool:
    if not consonants:
        return True
    if len(consonants) == 1:
        return consonants[0] != "NG"
    return tuple(consonants) in ARPABET_ONSET_CLUSTERS


def cmu_phones_to_ipa(phones: Sequence[str]) -> str:
    """Render a CMU dictionary pronunciation as IPA with syllable stress marks.

    Stress markers are placed before the largest legal onset of the stressed
    syllable, or before every leading consonant of the word.
    """

    bases: List[str] = []
    stresses: List[str] = []
    symbols: List[str] = []
    for phone in phones:
        match = _ARPABET_PHONE.match(phone)
        if not match:
            bases.append(phone)
            stresses.append("")
            symbols.append(phone.lower())
            continue
        base, digit = match.group(1), match.group(2) or ""
        if base == "AH" and digit == "0":
            ipa = "ə"
        elif base == "ER" and digit == "0":
            ipa = "ɚ"
        else:
            ipa = ARPABET_TO_IPA.get(base, base.lower())
        bases.append(base)
        stresses.append(digit)
        symbols.append(ipa)

    markers: Dict[int, str] = {}
    for index, base in enumerate(bases):
        if base not in ARPABET_VOWELS or stresses[index] not in {"1", "2"}:
            continue
        start = index
        while start > 0 and bases[start - 1] not in ARPABET_VOWELS:
            start -= 1
        if start > 0:
            while start < index and not _is_valid_onset(bases[start:index]):
                start += 1
        markers[start] = STRESS_DIGIT_TO_IPA[stresses[index]]

    rendered: List[str] = []
    for index, symbol in enumerate(symbols):
        marker = markers.get(index)
        if marker:
            rendered.append(marker)
        rendered.append(symbol)
    return "".join(rendered)


def convert_chinese_tones_to_arrows(ipa: str) -> str:
    """Replace Chao tone letters with arrow glyphs, longest contour first."""

    if not ipa:
        return ipa
    result = ipa
    for contour in sorted(CHINESE_TONE_TO_ARROW, key=len, reverse=True):
        result = result.replace(contour, CHINESE_TONE_TO_ARROW[contour])
    return result


def convert_arrows_to_chinese_tones(ipa: str) -> str:
    """Inverse of :func:`convert_chinese_tones_to_arrows`."""

    if not ipa:
        return ipa
    arrows = {arrow: contour for contour, arrow in CHINESE_TONE_TO_ARROW.items()}
    result = ipa
    for arrow in sorted(arrows, key=len, reverse=True):
        result = result.replace(arrow, arrows[arrow])
    return result


def _split_pinyin(syllable: str) -> Tuple[str, str]:
    for initial in _PINYIN_INITIAL_ORDER:
        if syllable.startswith(initial):
            return initial, syllable[len(initial) :]
    return "", syllable


def pinyin_to_zhuyin(pinyin: str) -> str:
    """Convert one tone-numbered pinyin syllable (``zhong1``) to Zhuyin (``ㄓㄨㄥ1``).

    Syllables that cannot be mapped are returned unchanged with the neutral
    tone digit appended.
    """

    if not pinyin or not pinyin.strip():
        return pinyin

    tone_match = _TONE_DIGIT.search(pinyin)
    tone = tone_match.group(1) if tone_match else ""
    syllable = _TONE_DIGIT.sub("", pinyin)

    whole = PINYIN_SYLLABLES_TO_ZHUYIN.get(syllable) or PINYIN_FINALS_TO_ZHUYIN.get(syllable)
    if whole:
        return whole + (tone or "5")

    initial, final = _split_pinyin(syllable)
    # j, q and x are only ever followed by ü, which pinyin spells as u
    if initial in {"j", "q", "x"} and final.startswith("u"):
        final = "ü" + final[1:]

    if final and final in PINYIN_FINALS_TO_ZHUYIN:
        zhuyin = PINYIN_INITIALS_TO_ZHUYIN.get(initial, "") + PINYIN_FINALS_TO_ZHUYIN[final]
    elif final:
        _LOGGER.debug(
            "No Zhuyin mapping for pinyin final",
            context={"pinyin": pinyin, "final": final},
        )
        zhuyin = syllable
    else:
        zhuyin = syllable

    return zhuyin + (tone or "5")


__all__ = [
    "ARPABET_TO_IPA",
    "IPA_TO_ARPABET",
    "CHINESE_TONE_TO_ARROW",
    "PINYIN_INITIALS_TO_ZHUYIN",
    "PINYIN_FINALS_TO_ZHUYIN",
    "PINYIN_SYLLABLES_TO_ZHUYIN",
    "PRIMARY_STRESS",
    "SECONDARY_STRESS",
    "UNKNOWN_SYMBOL_PLACEHOLDER",
    "arpabet_to_ipa",
    "cmu_phones_to_ipa",
    "convert_arrows_to_chinese_tones",
    "convert_chinese_tones_to_arrows",
    "ipa_to_arpabet",
    "pinyin_to_zhuyin",
    "strip_stress",
]
