"""Rule-based English grapheme-to-phoneme engine.

Words are resolved through a fixed priority chain: hyphenated compounds,
homograph and dictionary lookup, morphological analysis, decomposition into
dictionary words, acronym spelling, and finally syllabification with
stress assignment and ordered phoneme rules. Every rule table below is
evaluated top to bottom; their order is part of the behaviour.
"""

from __future__ import annotations

import re
from collections import OrderedDict
from typing import Hashable, List, Optional, Pattern, Tuple

from ..utils.observability import create_counter, get_logger
from .engine import PhoneticEngine, validate_pronunciation
from .lexicon import PronunciationLexicon
from .notation import PRIMARY_STRESS, arpabet_to_ipa

VOWELS = frozenset("aeiouy")
CONSONANTS = frozenset("bcdfghjklmnpqrstvwxyz")
_APOSTROPHES = frozenset("'’‘")

# Consonant clusters allowed to open a syllable (Maximal Onset Principle).
VALID_ONSETS = frozenset(
    {
        "b", "bl", "br", "c", "ch", "cl", "cr", "d", "dr", "dw", "f", "fl", "fr",
        "g", "gl", "gr", "gu", "h", "j", "k", "kl", "kn", "kr", "l", "m", "n",
        "p", "ph", "pl", "pr", "ps", "qu", "r", "rh", "s", "sc", "sch", "scr",
        "sh", "sk", "sl", "sm", "sn", "sp", "sph", "spl", "spr", "st", "str",
        "sv", "sw", "t", "th", "thr", "tr", "ts", "tw", "v", "w", "wh", "wr",
        "x", "y", "z",
    }
)

# ----------------------------------------------------------------------------
# Whole-syllable suffix overrides: (pattern, ipa, attracts_stress)
# ----------------------------------------------------------------------------
SUFFIX_RULES: Tuple[Tuple[Pattern[str], str, bool], ...] = tuple(
    (re.compile(pattern), ipa, attracts)
    for pattern, ipa, attracts in (
        (r"^tion$", "ʃən", False),
        (r"^sion$", "ʒən", False),
        (r"^cial$", "ʃəl", False),
        (r"^tial$", "ʃəl", False),
        (r"^ture$", "tʃɚ", False),
        (r"^sure$", "ʒɚ", False),
        (r"^geous$", "dʒəs", False),
        (r"^cious$", "ʃəs", False),
        (r"^tious$", "ʃəs", False),
        (r"^eous$", "iəs", False),
        (r"^ous$", "əs", False),
        (r"^ious$", "iəs", False),
        (r"^uous$", "juəs", False),
        (r"^able$", "əbəl", False),
        (r"^ible$", "əbəl", False),
        (r"^ance$", "əns", False),
        (r"^ence$", "əns", False),
        (r"^ness$", "nəs", False),
        (r"^ment$", "mənt", False),
        (r"^less$", "ləs", False),
        (r"^ful$", "fəl", False),
        (r"^ly$", "li", False),
        (r"^er$", "ɚ", False),
        (r"^ers$", "ɚz", False),
        (r"^est$", "əst", False),
        (r"^ing$", "ɪŋ", False),
        (r"^ed$", "d", False),
        (r"^es$", "z", False),
        (r"^s$", "z", False),
        (r"^age$", "ɪdʒ", False),
        (r"^ive$", "ɪv", False),
        (r"^ism$", "ɪzəm", False),
        (r"^ist$", "ɪst", False),
        (r"^ity$", "əti", False),
        (r"^al$", "əl", False),
        (r"^ic$", "ɪk", True),
        (r"^ics$", "ɪks", True),
        (r"^lity$", "ləti", False),
        (r"^ity$", "əti", False),
        (r"^ty$", "ti", False),
        (r"^ary$", "ɛri", False),
        (r"^ory$", "ɔri", False),
        (r"^ery$", "ɛri", False),
        (r"^ry$", "ri", False),
        (r"^y$", "i", False),
        (r"^le$", "əl", False),
    )
)

_STRESS_ATTRACTING_SUFFIXES: Tuple[str, ...] = tuple(
    pattern.pattern.strip("^$") for pattern, _, attracts in SUFFIX_RULES if attracts
)

# ----------------------------------------------------------------------------
# Grapheme to phoneme substitutions, consumed left to right within a syllable.
# ----------------------------------------------------------------------------
PHONEME_RULES: Tuple[Tuple[Pattern[str], str], ...] = tuple(
    (re.compile(pattern), ipa)
    for pattern, ipa in (
        # Silent letters
        (r"^pn", "n"),
        (r"^ps", "s"),
        (r"^pt", "t"),
        (r"^kn", "n"),
        (r"^gn", "n"),
        (r"^wr", "ɹ"),
        (r"^mb$", "m"),
        (r"^ght", "t"),
        (r"^gh$", ""),
        (r"^gh", "ɡ"),
        (r"^lm", "m"),
        # Digraphs
        (r"^tsch", "tʃ"),
        (r"^sch", "sk"),
        (r"^she", "ʃi"),
        (r"^he", "hi"),
        (r"^ch", "tʃ"),
        (r"^ck", "k"),
        (r"^ggi", "ɡi"),
        (r"^gge", "ɡe"),
        (r"^ggy", "ɡi"),
        (r"^gg", "ɡ"),
        (r"^dg", "dʒ"),
        (r"^ph", "f"),
        (r"^sh", "ʃ"),
        (r"^thr", "θɹ"),
        (r"^th(?=ink)", "θ"),
        (r"^th(?=ing$)", "θ"),
        (r"^th(?=ick)", "θ"),
        (r"^th(?=orn)", "θ"),
        (r"^th(?=rough)", "θ"),
        (r"^the", "ðə"),
        (r"^th(?=[aeiou])", "ð"),
        (r"^th", "θ"),
        (r"^tch", "tʃ"),
        (r"^wh", "w"),
        (r"^qu", "kw"),
        (r"^ng", "ŋ"),
        # Vowel teams
        (r"^oo", "uː"),
        (r"^ou", "aʊ"),
        (r"^ow(?=[snmk])", "aʊ"),
        (r"^ow", "oʊ"),
        (r"^oy", "ɔɪ"),
        (r"^oi", "ɔɪ"),
        (r"^au", "ɔ"),
        (r"^aw", "ɔ"),
        (r"^ay", "eɪ"),
        (r"^ai", "eɪ"),
        (r"^ea", "i"),
        (r"^ee", "i"),
        (r"^ie", "i"),
        (r"^ei", "eɪ"),
        (r"^ey", "eɪ"),
        (r"^ight", "aɪt"),
        (r"^oa", "oʊ"),
        (r"^ross", "ɹoʊs"),
        (r"^oss", "ɔs"),
        (r"^eu", "ju"),
        (r"^ew", "u"),
        (r"^ue", "u"),
        (r"^ui", "u"),
        # R-coloured vowels
        (r"^arr", "æɹ"),
        (r"^ar", "ɑɹ"),
        (r"^er", "ɚ"),
        (r"^ir", "ɝ"),
        (r"^or", "ɔɹ"),
        (r"^ur", "ɝ"),
        (r"^ear", "ɪɹ"),
        (r"^eer", "ɪɹ"),
        (r"^ier", "ɪɹ"),
        (r"^our", "aʊɹ"),
        (r"^air", "ɛɹ"),
        (r"^are", "ɛɹ"),
        # Soft consonants
        (r"^c(?=[eiy])", "s"),
        (r"^g(?=[eiy])", "dʒ"),
        (r"^s(?=[eiy])", "s"),
        # Clusters
        (r"^spr", "spɹ"),
        (r"^str", "stɹ"),
        (r"^scr", "skɹ"),
        (r"^spl", "spl"),
        (r"^squ", "skw"),
        (r"^shr", "ʃɹ"),
        (r"^bl", "bl"),
        (r"^br", "bɹ"),
        (r"^cl", "kl"),
        (r"^cr", "kɹ"),
        (r"^dr", "dɹ"),
        (r"^fl", "fl"),
        (r"^fr", "fɹ"),
        (r"^gl", "ɡl"),
        (r"^gr", "ɡɹ"),
        (r"^pl", "pl"),
        (r"^pr", "pɹ"),
        (r"^sl", "sl"),
        (r"^sm", "sm"),
        (r"^sn", "sn"),
        (r"^sp", "sp"),
        (r"^st", "st"),
        (r"^sw", "sw"),
        (r"^two", "tu"),
        (r"^tr", "tɹ"),
        (r"^tw", "tw"),
        # Single consonants
        (r"^b", "b"),
        (r"^c", "k"),
        (r"^d", "d"),
        (r"^f", "f"),
        (r"^g", "ɡ"),
        (r"^h", "h"),
        (r"^j", "dʒ"),
        (r"^k", "k"),
        (r"^l", "l"),
        (r"^m", "m"),
        (r"^n", "n"),
        (r"^p", "p"),
        (r"^r", "ɹ"),
        (r"^s", "s"),
        (r"^t", "t"),
        (r"^v", "v"),
        (r"^w", "w"),
        (r"^x", "ks"),
        (r"^y(?=[aeiou])", "j"),
        (r"^y", "aɪ"),
        (r"^z", "z"),
        # Short vowels
        (r"^a", "æ"),
        (r"^e", "ɛ"),
        (r"^i", "ɪ"),
        (r"^o", "ɑ"),
        (r"^u", "ʌ"),
    )
)

# Unstressed, non-final syllables. Diphthongs and ɪ are left alone.
MEDIAL_VOWEL_REDUCTIONS = {"æ": "ə", "ɛ": "ə", "ɑ": "ə", "ʌ": "ə"}
# Unstressed final syllables ("pocket" keeps an ɪ).
FINAL_VOWEL_REDUCTIONS = {"æ": "ə", "ɛ": "ɪ", "ɑ": "ə", "ʌ": "ə"}
# Magic e: cap/cape, bit/bite, hop/hope.
SILENT_E_LENGTHENING = {"æ": "eɪ", "ɛ": "i", "ɪ": "aɪ", "ɑ": "oʊ", "ʌ": "ju"}

_SILENT_E_EXCLUSIONS: Tuple[str, ...] = ("ee", "le", "he", "tte", "ght", "se")
_UNSTRESSED_PREFIXES: Tuple[str, ...] = ("un", "re", "pre", "dis", "mis", "over", "under", "out")
_WEAK_PREFIXES: Tuple[str, ...] = ("be", "de", "re", "un", "in", "ex", "pre")
_HEAVY_VOWEL_DIGRAPHS: Tuple[str, ...] = (
    "aa", "ai", "au", "aw", "ay", "ea", "ee", "ei", "eu",
    "ey", "ie", "oa", "oo", "ou", "ow", "oy", "ue", "ui",
)
COMPOUND_PATTERNS: Tuple[Pattern[str], ...] = tuple(
    re.compile(pattern)
    for pattern in (
        r"\w{4,}wide$",
        r"\w{3,}land$",
        r"\w{3,}work$",
        r"\w{3,}time$",
        r"\w{3,}way$",
        r"\w{3,}ward$",
        r"hundred",
        r"\w{3,}side$",
        r"\w{3,}where$",
    )
)

_DOUBLED_CONSONANT = re.compile(r"([b-df-hj-np-tv-z])\1")
_ACRONYM = re.compile(r"^([A-Z]\.?){2,8}$")
_ARPABET_INPUT = re.compile(r"^[A-Z0-9 ]+$")
_TRAILING_SCHWA = re.compile(r"ə$")

_SIBILANTS = frozenset({"s", "z", "ʃ", "ʒ", "tʃ", "dʒ"})
_VOICELESS_FOR_S = frozenset({"p", "t", "k", "f", "θ"})
_VOICELESS_FOR_ED = frozenset({"p", "k", "s", "ʃ", "tʃ", "f", "θ"})

_MISSING = object()

_RESOLUTIONS = create_counter(
    "phonoscribe_english_resolutions_total",
    "English words resolved, by the stage of the priority chain that answered",
    label_names=("stage",),
)


def _strip_primary(pronunciation: str) -> str:
    return pronunciation.replace(PRIMARY_STRESS, "")


class EnglishG2P(PhoneticEngine):
    """Dominant-language engine combining dictionary lookup with spelling rules."""

    id = "en-g2p"
    name = "English G2P Processor"
    supported_languages = ("en",)

    def __init__(
        self,
        lexicon: Optional[PronunciationLexicon] = None,
        *,
        disable_dict: bool = False,
        max_cache_entries: int = 4096,
    ) -> None:
        self.lexicon = lexicon if lexicon is not None else PronunciationLexicon()
        self.disable_dict = disable_dict

        self._max_cache_entries = max_cache_entries
        self._resolution_cache: OrderedDict[Hashable, str] = OrderedDict()
        self._base_form_cache: OrderedDict[str, Optional[str]] = OrderedDict()
        self._logger = get_logger(__name__).bind(component="english_g2p")

    # Public API ------------------------------------------------------------
    def predict(
        self, word: str, language: Optional[str] = None, pos: Optional[str] = None
    ) -> Optional[str]:
        if not self.handles_language(language):
            _RESOLUTIONS.labels(stage="language_mismatch").inc()
            return None
        return self._predict_internal(word, pos, self.disable_dict)

    def add_pronunciation(self, word: str, pronunciation: str) -> None:
        """Store a pronunciation given in IPA, or in ARPABET when all caps."""

        validate_pronunciation(word, pronunciation)
        if _ARPABET_INPUT.match(pronunciation):
            pronunciation = arpabet_to_ipa(pronunciation)
        self.lexicon.set(word, pronunciation)
        self.clear_cached_results()
        self._logger.info(
            "Custom pronunciation stored",
            context={"word": word.lower(), "pronunciation": pronunciation},
        )

    def clear_cached_results(self) -> None:
        self._resolution_cache.clear()
        self._base_form_cache.clear()

    # Cache helpers ---------------------------------------------------------
    def _cache_get(self, cache: OrderedDict, key: Hashable):
        if key not in cache:
            return _MISSING
        cache.move_to_end(key)
        return cache[key]

    def _cache_put(self, cache: OrderedDict, key: Hashable, value) -> None:
        cache[key] = value
        cache.move_to_end(key)
        while self._max_cache_entries > 0 and len(cache) > self._max_cache_entries:
            cache.popitem(last=False)

    # Priority chain --------------------------------------------------------
    def _predict_internal(self, word: str, pos: Optional[str], disable_dict: bool) -> str:
        key = (word, pos, disable_dict)
        cached = self._cache_get(self._resolution_cache, key)
        if cached is not _MISSING:
            return cached

        stage, result = self._resolve(word, pos, disable_dict)
        _RESOLUTIONS.labels(stage=stage).inc()
        self._cache_put(self._resolution_cache, key, result)
        return result

    def _resolve(self, word: str, pos: Optional[str], disable_dict: bool) -> Tuple[str, str]:
        lower = word.lower()

        if "-" in lower:
            compound = self._resolve_compound(lower, pos, disable_dict)
            if compound:
                return "compound", compound

        if not disable_dict:
            known = self._well_known(lower, pos, skip_morphology=True)
            if known:
                return "lexicon", known

        derived = self._analyze_morphology(lower)
        if derived:
            return "morphology", derived

        parts = self._decompose(lower)
        if parts and len(parts) > 1:
            pronunciations = [self._well_known(part) for part in parts]
            if all(pronunciations):
                return "decomposition", PRIMARY_STRESS + PRIMARY_STRESS.join(
                    _strip_primary(pron) for pron in pronunciations
                )

        spelled = self._spell_acronym(word)
        if spelled:
            return "acronym", spelled

        return "rules", self._synthesize(lower)

    def _resolve_compound(self, lower: str, pos: Optional[str], disable_dict: bool) -> Optional[str]:
        parts = lower.split("-")
        if len(parts) != 2 or not all(parts):
            return None
        first = self._predict_internal(parts[0], pos, disable_dict)
        second = self._predict_internal(parts[1], pos, disable_dict)
        if not first or not second:
            return None

        # Compound stress lands on the second element.
        first = _strip_primary(first)
        marker_at = second.find(PRIMARY_STRESS)
        if marker_at < 0:
            second = PRIMARY_STRESS + second
        else:
            head, tail = second[: marker_at + 1], second[marker_at + 1 :]
            second = head + _strip_primary(tail)
        return first + second

    def _well_known(
        self, word: str, pos: Optional[str] = None, skip_morphology: bool = False
    ) -> Optional[str]:
        if pos:
            variant = self.lexicon.select_homograph(word, pos)
            if variant:
                return variant
        entry = self.lexicon.lookup(word)
        if entry:
            return entry
        if skip_morphology:
            return None
        return self._analyze_morphology(word)

    def _base_or_predicted(self, base: str) -> Optional[str]:
        return self._well_known(base, skip_morphology=True) or self._predict_internal(
            base, None, False
        )

    def _analyze_morphology(self, word: str) -> Optional[str]:
        lower = word.lower()
        cached = self._cache_get(self._base_form_cache, lower)
        if cached is not _MISSING:
            return cached
        result = self._strip_affixes(lower)
        self._cache_put(self._base_form_cache, lower, result)
        return result

    def _strip_affixes(self, lower: str) -> Optional[str]:
        # Plural or third person -s
        if lower.endswith("s") and not lower.endswith("ss") and len(lower) > 2:
            base = self._well_known(lower[:-1])
            if base:
                return base + self._sibilant_suffix(base)

        # Possessive 's
        if lower.endswith("'s") and len(lower) > 3:
            base = self._well_known(lower[:-2])
            if base:
                return base + self._sibilant_suffix(base)

        if lower.endswith("es") and len(lower) > 3:
            base = self._well_known(lower[:-2])
            if base:
                return base + "ɪz"

        if lower.endswith("ed") and len(lower) > 3:
            base = self._well_known(lower[:-2])
            if base:
                last = base[-1]
                if last in {"t", "d"}:
                    return base + "ɪd"
                if last in _VOICELESS_FOR_ED:
                    return base + "t"
                return base + "d"

        if lower.endswith("ing") and len(lower) > 4:
            base = self._well_known(lower[:-3])
            if base:
                return base + "ɪŋ"
            # running -> run
            short = lower[:-4]
            if short and lower[-4] == short[-1]:
                base = self._well_known(short)
                if base:
                    return base + "ɪŋ"

        if lower.endswith("ally") and len(lower) > 4:
            base = self._base_or_predicted(lower[:-2])
            if base:
                return _TRAILING_SCHWA.sub("", base) + "əli"
        if lower.endswith("ly") and not lower.endswith("ally") and len(lower) > 2:
            base = self._base_or_predicted(lower[:-2])
            if base:
                return base + "li"

        if lower.endswith("able") and len(lower) > 5:
            base = self._base_or_predicted(lower[:-4])
            if base:
                return _TRAILING_SCHWA.sub("", base) + "əbəl"
            base = self._base_or_predicted(lower[:-3])
            if base:
                return base + "əbəl"

        if lower.endswith("logy") and len(lower) > 4:
            base = self._base_or_predicted(lower[:-4])
            if base:
                return _TRAILING_SCHWA.sub("", base) + "lədʒi"

        return None

    @staticmethod
    def _sibilant_suffix(base: str) -> str:
        last = base[-1]
        if last in _SIBILANTS:
            return "ɪz"
        if last in _VOICELESS_FOR_S:
            return "s"
        return "z"

    def _decompose(self, word: str) -> Optional[List[str]]:
        """Split ``word`` into the fewest dictionary words, if possible."""

        if len(word) < 8:
            return None

        best: List[Optional[List[str]]] = [None] * (len(word) + 1)
        best[0] = []
        for end in range(1, len(word) + 1):
            for start in range(end):
                prefix = best[start]
                if prefix is None:
                    continue
                chunk = word[start:end]
                if chunk not in self.lexicon:
                    continue
                candidate = prefix + [chunk]
                current = best[end]
                if current is None or len(candidate) < len(current):
                    best[end] = candidate
        return best[len(word)]

    def _spell_acronym(self, word: str) -> Optional[str]:
        if not _ACRONYM.match(word):
            return None
        letters = word.replace(".", "")
        names = [self.lexicon.letter_name(letter) for letter in letters]
        if not all(names):
            return None
        if "." in word:
            return "".join(_strip_primary(name) for name in names)
        return "".join(PRIMARY_STRESS + _strip_primary(name) for name in names)

    # Rule synthesis --------------------------------------------------------
    def _synthesize(self, lower: str) -> str:
        syllables = self.syllabify(lower)
        stressed = self.assign_stress(syllables, lower)
        rendered = [
            self.syllable_to_ipa(syllable, index, index == stressed, index == len(syllables) - 1)
            for index, syllable in enumerate(syllables)
        ]
        if not rendered:
            return lower

        result = "".join(rendered)
        if len(syllables) > 1 and stressed >= 0:
            offset = sum(len(piece) for piece in rendered[:stressed])
            result = result[:offset] + PRIMARY_STRESS + result[offset:]
        return result

    def syllabify(self, word: str) -> List[str]:
        """Split ``word`` into syllables, maximising each onset."""

        if len(word) <= 3:
            return [word]

        chars = word.lower()
        syllables: List[str] = []
        current = ""
        index = 0
        while index < len(chars):
            started_at = index

            nucleus = ""
            while index < len(chars) and chars[index] in VOWELS:
                nucleus += chars[index]
                index += 1

            consonants = ""
            while index < len(chars) and chars[index] in CONSONANTS:
                consonants += chars[index]
                index += 1

            if index == started_at:
                char = chars[index]
                index += 1
                if char in _APOSTROPHES:
                    continue
                if syllables and not current:
                    syllables[-1] += char
                else:
                    current += char
                continue

            if not nucleus:
                current += consonants
            elif not consonants:
                syllables.append(current + nucleus)
                current = ""
            elif len(consonants) == 1:
                syllables.append(current + nucleus)
                current = consonants
            else:
                split = 0
                while split < len(consonants) and consonants[split:] not in VALID_ONSETS:
                    split += 1
                syllables.append(current + nucleus + consonants[:split])
                current = consonants[split:]

        if current:
            syllables.append(current)

        # A trailing lone "e" is silent and belongs to the previous syllable.
        if len(syllables) > 1 and syllables[-1] == "e":
            last = syllables.pop()
            syllables[-1] += last

        for position in range(len(syllables) - 1, 0, -1):
            if all(char in CONSONANTS for char in syllables[position]) and syllables[position - 1]:
                syllables[position - 1] += syllables.pop(position)

        return [syllable for syllable in syllables if syllable]

    def assign_stress(self, syllables: List[str], word: str) -> int:
        """Return the index of the syllable carrying primary stress."""

        count = len(syllables)
        if count <= 1:
            return 0

        lower = word.lower()
        if lower.endswith(_STRESS_ATTRACTING_SUFFIXES):
            return max(0, count - 2)
        if lower.endswith(("tion", "sion", "cial", "tial")):
            return max(0, count - 2)
        if lower.endswith(("ance", "ence")) and count >= 3:
            return 1
        if lower.endswith("ic"):
            return max(0, count - 2)
        if count > 2 and lower.startswith(_UNSTRESSED_PREFIXES):
            return 1

        if count == 2:
            return 1 if lower.startswith(_WEAK_PREFIXES) else 0

        if self._is_likely_compound(lower):
            return 0
        if self._is_heavy(syllables[-2]):
            return count - 2
        return max(0, count - 3)

    @staticmethod
    def _is_heavy(syllable: str) -> bool:
        if any(digraph in syllable for digraph in _HEAVY_VOWEL_DIGRAPHS):
            return True
        vowel_seen = False
        trailing_consonants = 0
        for char in syllable:
            if char in VOWELS:
                vowel_seen = True
                trailing_consonants = 0
            elif vowel_seen and char in CONSONANTS:
                trailing_consonants += 1
        return trailing_consonants >= 1

    @staticmethod
    def _is_likely_compound(word: str) -> bool:
        return any(pattern.search(word) for pattern in COMPOUND_PATTERNS)

    def syllable_to_ipa(
        self, syllable: str, index: int, is_stressed: bool, is_last: bool
    ) -> str:
        for pattern, ipa, _ in SUFFIX_RULES:
            if pattern.match(syllable):
                return ipa

        remaining = _DOUBLED_CONSONANT.sub(r"\1", syllable)

        silent_e = (
            is_last
            and len(syllable) > 1
            and syllable.endswith("e")
            and not syllable.endswith(_SILENT_E_EXCLUSIONS)
            and syllable[-2] in CONSONANTS
        )
        if silent_e:
            remaining = syllable[:-1]

        phonemes: List[str] = []
        while remaining:
            for pattern, ipa in PHONEME_RULES:
                match = pattern.match(remaining)
                if match:
                    phonemes.append(ipa)
                    remaining = remaining[match.end() :]
                    break
            else:
                remaining = remaining[1:]

        if not is_stressed and index > 0 and not is_last:
            phonemes = [MEDIAL_VOWEL_REDUCTIONS.get(p, p) for p in phonemes]
        if not is_stressed and is_last and index > 0:
            phonemes = [FINAL_VOWEL_REDUCTIONS.get(p, p) for p in phonemes]

        if silent_e and is_stressed:
            for position in range(len(phonemes) - 1, -1, -1):
                if phonemes[position] in SILENT_E_LENGTHENING:
                    phonemes[position] = SILENT_E_LENGTHENING[phonemes[position]]
                    break

        return "".join(phonemes)


__all__ = [
    "COMPOUND_PATTERNS",
    "EnglishG2P",
    "PHONEME_RULES",
    "SUFFIX_RULES",
    "VALID_ONSETS",
]
