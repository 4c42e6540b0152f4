"""Registry that resolves which phonetic engine handles a word."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from ..utils.observability import get_logger
from .engine import PhoneticEngine, validate_pronunciation

# Unicode blocks of scripts handled by a non-English engine, scanned in order.
SCRIPT_RANGES: Tuple[Tuple[str, Tuple[Tuple[int, int], ...]], ...] = (
    ("zh", ((0x4E00, 0x9FFF), (0x3400, 0x4DBF), (0x20000, 0x2A6DF), (0xF900, 0xFAFF))),
    ("ja", ((0x3040, 0x309F), (0x30A0, 0x30FF))),
    ("ko", ((0xAC00, 0xD7AF), (0x1100, 0x11FF), (0x3130, 0x318F))),
    ("th", ((0x0E00, 0x0E7F),)),
    ("ar", ((0x0600, 0x06FF), (0x0750, 0x077F), (0xFB50, 0xFDFF), (0xFE70, 0xFEFF))),
    ("ru", ((0x0400, 0x04FF),)),
)


def _script_language(char: str) -> Optional[str]:
    code = ord(char)
    for language, ranges in SCRIPT_RANGES:
        for start, end in ranges:
            if start <= code <= end:
                return language
    return None


def detect_language(text: Optional[str]) -> Optional[str]:
    """Return the language of the first non-Latin script character in ``text``.

    ``None`` means no such character was found and the default English engine
    applies.
    """

    if not text:
        return None
    for char in text:
        language = _script_language(char)
        if language:
            return language
    return None


class ProcessorRegistry:
    """Engines indexed by id and by supported language."""

    def __init__(self) -> None:
        self._processors: Dict[str, PhoneticEngine] = {}
        self._by_language: Dict[str, List[PhoneticEngine]] = {}
        self._logger = get_logger(__name__).bind(component="registry")

    def register(self, engine: PhoneticEngine) -> None:
        """Add ``engine`` under its id and under each language it supports.

        Re-registering the same id replaces the id entry but appends to the
        language lists again, so a bucket can hold the engine more than once.
        """

        replaced = engine.id in self._processors
        self._processors[engine.id] = engine
        for language in engine.supported_languages:
            self._by_language.setdefault(language, []).append(engine)

        self._logger.debug(
            "Processor replaced" if replaced else "Processor registered",
            context={"id": engine.id, "languages": list(engine.supported_languages)},
        )

    def get_processor(self, processor_id: str) -> Optional[PhoneticEngine]:
        return self._processors.get(processor_id)

    def get_processors_for_language(self, language: str) -> List[PhoneticEngine]:
        return list(self._by_language.get(language, ()))

    def find_best_processor(
        self, word: str, language: Optional[str] = None
    ) -> Optional[PhoneticEngine]:
        """Pick the engine for ``word``; the word itself does not affect the choice."""

        if language:
            candidates = self._by_language.get(language)
            if candidates:
                return candidates[0]
        return next(iter(self._processors.values()), None)

    def clear(self) -> None:
        self._processors.clear()
        self._by_language.clear()

    def __len__(self) -> int:
        return len(self._processors)

    def __iter__(self) -> Iterator[PhoneticEngine]:
        return iter(list(self._processors.values()))

    # Dispatch --------------------------------------------------------------
    def predict(
        self, word: str, language: Optional[str] = None, pos: Optional[str] = None
    ) -> Optional[str]:
        """Predict phonemes for ``word``, detecting the language when absent."""

        language = language or detect_language(word)
        processor = self.find_best_processor(word, language)
        if processor is None:
            return None
        return processor.predict(word, language, pos)

    def add_pronunciation(
        self, word: str, phoneme: str, language: Optional[str] = None
    ) -> None:
        validate_pronunciation(word, phoneme)
        processor = self.find_best_processor(word, language)
        if processor is None:
            self._logger.warning(
                "No processor available for custom pronunciation",
                context={"word": word, "language": language},
            )
            return
        processor.add_pronunciation(word, phoneme)


__all__ = ["SCRIPT_RANGES", "ProcessorRegistry", "detect_language"]
