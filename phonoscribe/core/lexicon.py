"""Pronunciation dictionary and homograph tables for the English engine.

Bundled JSON tables take precedence. Words they do not cover fall back to
the CMU pronouncing dictionary shipped with :mod:`pronouncing`, converted to
IPA on first use.
"""

from __future__ import annotations

import json
import os
from collections import OrderedDict
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import pronouncing

from ..utils.observability import create_counter, get_logger
from .notation import cmu_phones_to_ipa

DICT_PATH_ENV = "PHONOSCRIBE_DICT_PATH"
HOMOGRAPH_PATH_ENV = "PHONOSCRIBE_HOMOGRAPH_PATH"

_DATA_DIR = Path(__file__).resolve().parents[1] / "data"
DEFAULT_DICT_PATH = _DATA_DIR / "en_dict.json"
DEFAULT_HOMOGRAPH_PATH = _DATA_DIR / "en_homographs.json"
DEFAULT_LETTERS_PATH = _DATA_DIR / "en_letters.json"

_MALFORMED_ENTRIES = create_counter(
    "phonoscribe_lexicon_malformed_entries_total",
    "Static table entries skipped while loading the lexicon",
    label_names=("table",),
)


@dataclass(frozen=True)
class HomographVariant:
    """One pronunciation of a homograph and the POS tag that selects it.

    ``trigger`` is either an exact tag (``"VBD"``) or a negation (``"!VBD"``)
    matching any tag except the named one.
    """

    pronunciation: str
    trigger: str

    def matches(self, pos: Optional[str]) -> bool:
        if not pos:
            return False
        if self.trigger.startswith("!"):
            return self.trigger[1:] != pos
        return self.trigger == pos


def _normalize_word(word: str) -> str:
    return word.strip().lower()


def _resolve_path(explicit: Optional[Path | str], env_name: str, default: Path) -> Path:
    if explicit is not None:
        return Path(explicit)
    env_value = os.environ.get(env_name)
    if env_value:
        return Path(env_value)
    return default


class PronunciationLexicon:
    """Lazy loader for the dictionary, homograph and letter-name tables."""

    def __init__(
        self,
        dict_path: Optional[Path | str] = None,
        homograph_path: Optional[Path | str] = None,
        *,
        letters_path: Optional[Path | str] = None,
        entries: Optional[Mapping[str, str]] = None,
        homographs: Optional[Mapping[str, Iterable[Mapping[str, Any]]]] = None,
        letters: Optional[Mapping[str, str]] = None,
        use_cmu: bool = True,
        max_cmu_cache_entries: int = 4096,
    ) -> None:
        self.dict_path: Path = _resolve_path(dict_path, DICT_PATH_ENV, DEFAULT_DICT_PATH)
        self.homograph_path: Path = _resolve_path(
            homograph_path, HOMOGRAPH_PATH_ENV, DEFAULT_HOMOGRAPH_PATH
        )
        self.letters_path: Path = Path(letters_path) if letters_path else DEFAULT_LETTERS_PATH
        self.use_cmu = use_cmu
        self.max_cmu_cache_entries = max_cmu_cache_entries

        self._injected_entries = entries
        self._injected_homographs = homographs
        self._injected_letters = letters

        self._entries: Dict[str, str] = {}
        self._homographs: Dict[str, Tuple[HomographVariant, ...]] = {}
        self._letters: Dict[str, str] = {}
        self._cmu_cache: OrderedDict[str, Optional[str]] = OrderedDict()
        self._malformed: Dict[str, int] = {"dictionary": 0, "homographs": 0, "letters": 0}
        self._loaded: bool = False
        self._logger = get_logger(__name__).bind(component="lexicon")

    # Loading ---------------------------------------------------------------
    def _ensure_loaded(self) -> None:
        if self._loaded:
            return

        raw_entries = (
            self._injected_entries
            if self._injected_entries is not None
            else self._read_json(self.dict_path, "dictionary")
        )
        raw_homographs = (
            self._injected_homographs
            if self._injected_homographs is not None
            else self._read_json(self.homograph_path, "homographs")
        )
        raw_letters = (
            self._injected_letters
            if self._injected_letters is not None
            else self._read_json(self.letters_path, "letters")
        )

        self._entries = self._parse_pronunciations(raw_entries, "dictionary")
        self._letters = self._parse_pronunciations(raw_letters, "letters")
        self._homographs = self._parse_homographs(raw_homographs)
        self._loaded = True

        self._logger.debug(
            "Lexicon tables loaded",
            context={
                "entries": len(self._entries),
                "homographs": len(self._homographs),
                "letters": len(self._letters),
                "malformed": dict(self._malformed),
            },
        )

    def _read_json(self, path: Path, table: str) -> Mapping[str, Any]:
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            self._logger.warning(
                "Lexicon table missing", context={"table": table, "path": str(path)}
            )
            return {}
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            self._logger.warning(
                "Lexicon table unreadable",
                context={"table": table, "path": str(path), "error": str(exc)},
            )
            return {}

        if not isinstance(payload, dict):
            self._logger.warning(
                "Lexicon table is not a JSON object",
                context={"table": table, "path": str(path)},
            )
            return {}
        return payload

    def _skip(self, table: str, word: Any, reason: str) -> None:
        self._malformed[table] += 1
        _MALFORMED_ENTRIES.labels(table=table).inc()
        self._logger.warning(
            "Skipping malformed lexicon entry",
            context={"table": table, "word": word, "reason": reason},
        )

    def _parse_pronunciations(self, raw: Mapping[str, Any], table: str) -> Dict[str, str]:
        parsed: Dict[str, str] = {}
        for word, pronunciation in raw.items():
            if not isinstance(word, str) or not _normalize_word(word):
                self._skip(table, word, "empty word")
                continue
            if not isinstance(pronunciation, str) or not pronunciation.strip():
                self._skip(table, word, "pronunciation must be a non-empty string")
                continue
            parsed[_normalize_word(word)] = pronunciation.strip()
        return parsed

    def _parse_homographs(
        self, raw: Mapping[str, Any]
    ) -> Dict[str, Tuple[HomographVariant, ...]]:
        parsed: Dict[str, Tuple[HomographVariant, ...]] = {}
        for word, variants in raw.items():
            if not isinstance(word, str) or not _normalize_word(word):
                self._skip("homographs", word, "empty word")
                continue
            if not isinstance(variants, (list, tuple)):
                self._skip("homographs", word, "variants must be a list")
                continue

            kept: List[HomographVariant] = []
            for variant in variants:
                if not isinstance(variant, Mapping):
                    self._skip("homographs", word, "variant must be an object")
                    continue
                pronunciation = variant.get("pronunciation")
                trigger = variant.get("pos")
                if not isinstance(pronunciation, str) or not pronunciation.strip():
                    self._skip("homographs", word, "missing pronunciation")
                    continue
                if not isinstance(trigger, str) or not trigger.strip("!").strip():
                    self._skip("homographs", word, "missing pos trigger")
                    continue
                kept.append(HomographVariant(pronunciation.strip(), trigger.strip()))

            if kept:
                parsed[_normalize_word(word)] = tuple(kept)
        return parsed

    # Public API ------------------------------------------------------------
    @property
    def malformed_counts(self) -> Dict[str, int]:
        self._ensure_loaded()
        return dict(self._malformed)

    def lookup(self, word: str) -> Optional[str]:
        """Return the canonical IPA pronunciation of ``word`` if known."""

        normalized = _normalize_word(word)
        if not normalized:
            return None

        self._ensure_loaded()
        entry = self._entries.get(normalized)
        if entry is not None:
            return entry
        if not self.use_cmu:
            return None
        return self._lookup_cmu(normalized)

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        return self.lookup(word) is not None

    def set(self, word: str, pronunciation: str) -> None:
        """Store ``pronunciation`` for ``word``, replacing any existing entry."""

        self._ensure_loaded()
        self._entries[_normalize_word(word)] = pronunciation

    def letter_name(self, letter: str) -> Optional[str]:
        """Return the spoken name of a single letter, used for acronym spelling."""

        normalized = _normalize_word(letter)
        self._ensure_loaded()
        return self._letters.get(normalized) or self.lookup(normalized)

    def homograph_variants(self, word: str) -> Tuple[HomographVariant, ...]:
        self._ensure_loaded()
        return self._homographs.get(_normalize_word(word), ())

    def select_homograph(self, word: str, pos: Optional[str]) -> Optional[str]:
        """Return the first homograph variant whose trigger matches ``pos``."""

        if not pos:
            return None
        for variant in self.homograph_variants(word):
            if variant.matches(pos):
                return variant.pronunciation
        return None

    # Internal helpers ------------------------------------------------------
    def _lookup_cmu(self, normalized: str) -> Optional[str]:
        if normalized in self._cmu_cache:
            self._cmu_cache.move_to_end(normalized)
            return self._cmu_cache[normalized]

        phones = pronouncing.phones_for_word(normalized)
        ipa = cmu_phones_to_ipa(phones[0].split()) if phones else None
        # Misses are cached too; decomposition looks up many non-words.
        self._cmu_cache[normalized] = ipa
        while self.max_cmu_cache_entries > 0 and len(self._cmu_cache) > self.max_cmu_cache_entries:
            self._cmu_cache.popitem(last=False)
        return ipa


__all__ = [
    "DEFAULT_DICT_PATH",
    "DEFAULT_HOMOGRAPH_PATH",
    "DEFAULT_LETTERS_PATH",
    "DICT_PATH_ENV",
    "HOMOGRAPH_PATH_ENV",
    "HomographVariant",
    "PronunciationLexicon",
]
