"""Core phonetic inference: notation, lexicon, tagging, engines and dispatch."""

from .engine import PhoneticEngine, TablePhoneticEngine, ZhuyinCapable, validate_pronunciation
from .english import EnglishG2P
from .errors import OptionsValidationError, PhonoscribeError, PronunciationValidationError
from .lexicon import HomographVariant, PronunciationLexicon
from .pos_tagger import POSResult, SimplePOSTagger
from .registry import ProcessorRegistry, detect_language

__all__ = [
    "EnglishG2P",
    "HomographVariant",
    "OptionsValidationError",
    "POSResult",
    "PhoneticEngine",
    "PhonoscribeError",
    "ProcessorRegistry",
    "PronunciationLexicon",
    "PronunciationValidationError",
    "SimplePOSTagger",
    "TablePhoneticEngine",
    "ZhuyinCapable",
    "detect_language",
    "validate_pronunciation",
]
