"""Contract shared by every phonetic engine the registry can dispatch to."""

from __future__ import annotations

import abc
from typing import Dict, Optional, Sequence

from ..utils.observability import get_logger
from .errors import PronunciationValidationError


def validate_pronunciation(word: str, pronunciation: str) -> None:
    """Reject empty custom pronunciations, which are always caller mistakes."""

    if not isinstance(word, str) or not word.strip():
        raise PronunciationValidationError("word must be a non-empty string")
    if not isinstance(pronunciation, str) or not pronunciation.strip():
        raise PronunciationValidationError(
            f"pronunciation for {word!r} must be a non-empty string"
        )


class PhoneticEngine(abc.ABC):
    """Grapheme-to-phoneme engine for one or more languages."""

    id: str = ""
    name: str = ""
    supported_languages: Sequence[str] = ()

    @abc.abstractmethod
    def predict(
        self, word: str, language: Optional[str] = None, pos: Optional[str] = None
    ) -> Optional[str]:
        """Return the phoneme string for ``word`` or ``None`` when unsupported."""

    @abc.abstractmethod
    def add_pronunciation(self, word: str, pronunciation: str) -> None:
        """Register a custom pronunciation, overwriting any existing one."""

    def handles_language(self, language: Optional[str]) -> bool:
        return not language or language in self.supported_languages

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id!r})"


class ZhuyinCapable(abc.ABC):
    """Optional capability for engines that can render Zhuyin (Bopomofo)."""

    @abc.abstractmethod
    def text_to_zhuyin(self, text: str) -> str:
        """Return space separated Zhuyin syllables with trailing tone digits."""


class TablePhoneticEngine(PhoneticEngine):
    """Base for the table-driven per-language engines.

    Subclasses implement :meth:`_convert`; language gating and the custom
    pronunciation overrides are handled here.
    """

    def __init__(self) -> None:
        self._overrides: Dict[str, str] = {}
        self._logger = get_logger(__name__).bind(component=self.id)

    def predict(
        self, word: str, language: Optional[str] = None, pos: Optional[str] = None
    ) -> Optional[str]:
        if not self.handles_language(language):
            return None
        if not word:
            return None
        override = self._overrides.get(word.lower())
        if override is not None:
            return override
        try:
            return self._convert(word)
        except Exception as exc:
            self._logger.warning(
                "Conversion failed; keeping original text",
                context={"word": word, "error": str(exc)},
            )
            return word

    def add_pronunciation(self, word: str, pronunciation: str) -> None:
        validate_pronunciation(word, pronunciation)
        self._overrides[word.strip().lower()] = pronunciation

    @abc.abstractmethod
    def _convert(self, word: str) -> Optional[str]:
        raise NotImplementedError


__all__ = [
    "PhoneticEngine",
    "TablePhoneticEngine",
    "ZhuyinCapable",
    "validate_pronunciation",
]
