"""Application wiring for phonoscribe."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, List, Mapping, Optional, Union

from ..core.english import EnglishG2P
from ..core.lexicon import PronunciationLexicon
from ..core.pos_tagger import SimplePOSTagger
from ..core.registry import ProcessorRegistry, detect_language
from ..languages import ChineseG2P, JapaneseG2P, KoreanG2P, RussianG2P
from ..utils.logging_config import configure_logging
from ..utils.observability import get_logger
from .services.tokenizer import PhonemeToken, Tokenizer, TokenizerOptions

OptionsLike = Optional[Union[TokenizerOptions, Mapping[str, Any]]]


def create_default_registry(lexicon: Optional[PronunciationLexicon] = None) -> ProcessorRegistry:
    """Register the bundled engines; English first so it is the fallback."""

    registry = ProcessorRegistry()
    registry.register(EnglishG2P(lexicon))
    registry.register(ChineseG2P())
    registry.register(JapaneseG2P())
    registry.register(KoreanG2P())
    registry.register(RussianG2P())
    return registry


def _with_format(options: OptionsLike, output_format: str) -> TokenizerOptions:
    if not isinstance(options, TokenizerOptions):
        options = TokenizerOptions.from_mapping(options)
    return replace(options, format=output_format)


class PhonoscribeApp:
    """High-level facade bundling the registry, tagger and tokenizer."""

    def __init__(
        self,
        *,
        registry: Optional[ProcessorRegistry] = None,
        lexicon: Optional[PronunciationLexicon] = None,
        tagger: Optional[SimplePOSTagger] = None,
        configure_logs: bool = False,
    ) -> None:
        if configure_logs:
            configure_logging()
        self._logger = get_logger(__name__).bind(component="app_facade")

        self.lexicon = lexicon
        self.registry = registry if registry is not None else create_default_registry(lexicon)
        self.tagger = tagger or SimplePOSTagger()

        self._logger.info(
            "Application dependencies wired",
            context={"processors": [engine.id for engine in self.registry]},
        )

    # Engine access ---------------------------------------------------------
    def predict(
        self, word: str, language: Optional[str] = None, pos: Optional[str] = None
    ) -> Optional[str]:
        return self.registry.predict(word, language, pos)

    def add_pronunciation(self, word: str, phoneme: str, language: Optional[str] = None) -> None:
        self.registry.add_pronunciation(word, phoneme, language)

    @staticmethod
    def detect_language(text: str) -> Optional[str]:
        return detect_language(text)

    # Text-level API --------------------------------------------------------
    def create_tokenizer(self, options: OptionsLike = None) -> Tokenizer:
        return Tokenizer(options, registry=self.registry, tagger=self.tagger)

    def phonemize(
        self, text: str, options: OptionsLike = None, return_array: bool = False
    ) -> Union[str, List[PhonemeToken]]:
        tokenizer = self.create_tokenizer(options)
        if return_array:
            return tokenizer.tokenize_to_tokens(text)
        return tokenizer.tokenize_to_string(text)

    def to_ipa(self, text: str, options: OptionsLike = None) -> str:
        return self.create_tokenizer(_with_format(options, "ipa")).tokenize_to_string(text)

    def to_arpabet(self, text: str, options: OptionsLike = None) -> str:
        return self.create_tokenizer(
            _with_format(options, "arpabet")
        ).tokenize_to_string(text)

    def to_zhuyin(self, text: str, options: OptionsLike = None) -> str:
        return self.create_tokenizer(
            _with_format(options, "zhuyin")
        ).tokenize_to_string(text)


_DEFAULT_APP: Optional[PhonoscribeApp] = None


def get_default_app() -> PhonoscribeApp:
    """Return the lazily created process-wide application."""

    global _DEFAULT_APP
    if _DEFAULT_APP is None:
        _DEFAULT_APP = PhonoscribeApp()
    return _DEFAULT_APP


# Convenience layer over the default app ------------------------------------
def phonemize(
    text: str, options: OptionsLike = None, return_array: bool = False
) -> Union[str, List[PhonemeToken]]:
    return get_default_app().phonemize(text, options, return_array)


def to_ipa(text: str, options: OptionsLike = None) -> str:
    return get_default_app().to_ipa(text, options)


def to_arpabet(text: str, options: OptionsLike = None) -> str:
    return get_default_app().to_arpabet(text, options)


def to_zhuyin(text: str, options: OptionsLike = None) -> str:
    return get_default_app().to_zhuyin(text, options)


def predict(word: str, language: Optional[str] = None, pos: Optional[str] = None) -> Optional[str]:
    return get_default_app().predict(word, language, pos)


def add_pronunciation(word: str, phoneme: str, language: Optional[str] = None) -> None:
    get_default_app().add_pronunciation(word, phoneme, language)


def create_tokenizer(options: OptionsLike = None) -> Tokenizer:
    return get_default_app().create_tokenizer(options)


__all__ = [
    "PhonoscribeApp",
    "add_pronunciation",
    "create_default_registry",
    "create_tokenizer",
    "detect_language",
    "get_default_app",
    "phonemize",
    "predict",
    "to_arpabet",
    "to_ipa",
    "to_zhuyin",
]
