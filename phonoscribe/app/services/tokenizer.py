"""Tokenizer orchestrating expansion, tagging, engine dispatch and formatting."""

from __future__ import annotations

import re
import string
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Tuple

from anyascii import anyascii

from ...core.engine import ZhuyinCapable
from ...core.errors import OptionsValidationError
from ...core.notation import convert_chinese_tones_to_arrows, ipa_to_arpabet, strip_stress
from ...core.pos_tagger import SimplePOSTagger
from ...core.registry import ProcessorRegistry, detect_language
from ...utils.observability import (
    add_span_attributes,
    create_histogram,
    get_logger,
    record_exception,
    start_span,
)
from .text_expansion import expand_text

FORMATS = ("ipa", "arpabet", "zhuyin")
TONE_FORMATS = ("unicode", "arrow")

PUNCTUATION = frozenset(string.punctuation)

_CJK = "一-鿿㐀-䶿豈-﫿"
_WORD_CHAR = rf"[^\W{_CJK}]"
TOKEN_PATTERN = re.compile(
    rf"([{_CJK}]+|{_WORD_CHAR}+['’]?{_WORD_CHAR}*|[^\w\s{_CJK}])"
)
_WHITESPACE_SPLIT = re.compile(r"(\s+)")
_ARPABET_STRESS = re.compile(r"[012]")

# camelCase spellings accepted by ``TokenizerOptions.from_mapping``.
_OPTION_ALIASES = {
    "stripStress": "strip_stress",
    "anyAscii": "any_ascii",
    "toneFormat": "tone_format",
}

_TOKENIZE_SECONDS = create_histogram(
    "phonoscribe_tokenize_seconds",
    "Latency of a full tokenizer pass over one text",
    label_names=("format",),
)


@dataclass
class TokenizerOptions:
    """Caller options controlling overrides and output notation."""

    homograph: Dict[str, str] = field(default_factory=dict)
    strip_stress: bool = False
    format: str = "ipa"
    separator: str = " "
    any_ascii: bool = False
    tone_format: str = "unicode"

    def __post_init__(self) -> None:
        if self.format not in FORMATS:
            raise OptionsValidationError(
                f"format must be one of {', '.join(FORMATS)}; got {self.format!r}"
            )
        if self.tone_format not in TONE_FORMATS:
            raise OptionsValidationError(
                f"tone_format must be one of {', '.join(TONE_FORMATS)}; got {self.tone_format!r}"
            )
        if not isinstance(self.separator, str):
            raise OptionsValidationError("separator must be a string")
        self.homograph = {
            str(word).lower(): pronunciation
            for word, pronunciation in (self.homograph or {}).items()
        }

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, Any]]) -> "TokenizerOptions":
        """Build options from snake_case or camelCase keys."""

        if not values:
            return cls()
        known = {item.name for item in fields(cls)}
        normalized: Dict[str, Any] = {}
        for key, value in values.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise OptionsValidationError(f"Unknown tokenizer option: {key!r}")
            normalized[name] = value
        return cls(**normalized)


@dataclass(frozen=True)
class PhonemeToken:
    phoneme: str
    word: str
    position: int


@dataclass(frozen=True)
class _Processed:
    phoneme: str
    word: str
    position: int
    is_punctuation: bool


class Tokenizer:
    """Turn text into phoneme strings using engines from a registry."""

    def __init__(
        self,
        options: Optional[TokenizerOptions | Mapping[str, Any]] = None,
        *,
        registry: ProcessorRegistry,
        tagger: Optional[SimplePOSTagger] = None,
    ) -> None:
        if options is None or isinstance(options, TokenizerOptions):
            self.options = options or TokenizerOptions()
        else:
            self.options = TokenizerOptions.from_mapping(options)
        self.registry = registry
        self.tagger = tagger or SimplePOSTagger()
        self._logger = get_logger(__name__).bind(component="tokenizer")

    # Public API ------------------------------------------------------------
    def tokenize(self, text: str) -> List[str]:
        return [item.phoneme for item in self._process(text)]

    def tokenize_to_string(self, text: str) -> str:
        """Join phonemes with the separator, attaching punctuation to its left."""

        joined: List[str] = []
        for item in self._process(text):
            if item.is_punctuation and joined:
                joined[-1] += item.phoneme
            else:
                joined.append(item.phoneme)
        return self.options.separator.join(joined)

    def tokenize_to_tokens(self, text: str) -> List[PhonemeToken]:
        """Return one token per match; punctuation maps to itself."""

        return [
            PhonemeToken(item.phoneme, item.word, item.position)
            for item in self._process(text)
        ]

    # Pipeline --------------------------------------------------------------
    def _process(self, text: str) -> List[_Processed]:
        if not text or not text.strip():
            return []

        output_format = self.options.format
        with _TOKENIZE_SECONDS.labels(format=output_format).time():
            with start_span(
                "phonoscribe.tokenize",
                {"format": output_format, "text.length": len(text)},
            ) as span:
                try:
                    results = self._run(text)
                except Exception as exc:
                    record_exception(span, exc)
                    raise
                add_span_attributes(span, {"token.count": len(results)})

        self._logger.debug(
            "Tokenized text",
            context={"format": output_format, "characters": len(text), "tokens": len(results)},
        )
        return results

    def _run(self, text: str) -> List[_Processed]:
        prepared, language_map = self._preprocess(text)
        expanded = expand_text(prepared)

        matches: List[Tuple[str, int]] = [
            (match.group(1), match.start(1)) for match in TOKEN_PATTERN.finditer(expanded)
        ]
        words = [token for token, _ in matches if not self._is_punctuation(token)]
        tags = [result.pos for result in self.tagger.tag_words(words)]

        results: List[_Processed] = []
        word_index = 0
        for token, position in matches:
            if self._is_punctuation(token):
                results.append(_Processed(token, token, position, True))
                continue

            pos = tags[word_index] if word_index < len(tags) else None
            word_index += 1
            phoneme = self._phonemize_token(token, language_map.get(token.lower()), pos)
            if self.options.separator != " ":
                phoneme = phoneme.replace(" ", self.options.separator)
            results.append(_Processed(phoneme, token, position, False))
        return results

    def _preprocess(self, text: str) -> Tuple[str, Dict[str, str]]:
        """Tag whitespace-separated words with their script language.

        With ``any_ascii`` enabled, foreign words other than Chinese are
        transliterated and the ASCII spelling keeps the language tag.
        """

        chunks = _WHITESPACE_SPLIT.split(text)
        language_map: Dict[str, str] = {}
        for chunk in chunks:
            word = chunk.strip()
            if word and word not in PUNCTUATION:
                language = detect_language(word)
                if language:
                    language_map[word.lower()] = language

        if not self.options.any_ascii:
            return text, language_map

        rebuilt: List[str] = []
        for chunk in chunks:
            word = chunk.strip()
            if not word or word in PUNCTUATION:
                rebuilt.append(chunk)
                continue
            language = language_map.get(word.lower())
            if language == "zh":
                rebuilt.append(chunk)
                continue
            try:
                ascii_word = anyascii(word)
            except Exception as exc:
                self._logger.warning(
                    "Transliteration failed; keeping original word",
                    context={"word": word, "error": str(exc)},
                )
                rebuilt.append(chunk)
                continue
            if language:
                language_map[ascii_word.lower()] = language
            rebuilt.append(chunk.replace(word, ascii_word))
        return "".join(rebuilt), language_map

    def _phonemize_token(self, token: str, language: Optional[str], pos: Optional[str]) -> str:
        override = self.options.homograph.get(token.lower())
        if override:
            return self._post_process(override)

        language = language or detect_language(token)
        if self.options.format == "zhuyin" and language == "zh":
            engine = self.registry.find_best_processor(token, "zh")
            if isinstance(engine, ZhuyinCapable):
                zhuyin = engine.text_to_zhuyin(token)
                if zhuyin and zhuyin.strip():
                    return zhuyin

        predicted = self.registry.predict(token, language, pos)
        if not predicted or not predicted.strip():
            predicted = token
        return self._post_process(predicted)

    def _post_process(self, phonemes: str) -> str:
        if self.options.format == "arpabet":
            phonemes = ipa_to_arpabet(phonemes)
            if self.options.strip_stress:
                phonemes = _ARPABET_STRESS.sub("", phonemes)
            return phonemes

        if self.options.tone_format == "arrow":
            phonemes = convert_chinese_tones_to_arrows(phonemes)
        if self.options.strip_stress:
            phonemes = strip_stress(phonemes)
        return phonemes

    @staticmethod
    def _is_punctuation(token: str) -> bool:
        return len(token) == 1 and token in PUNCTUATION


__all__ = [
    "FORMATS",
    "PUNCTUATION",
    "PhonemeToken",
    "TOKEN_PATTERN",
    "TONE_FORMATS",
    "Tokenizer",
    "TokenizerOptions",
]
