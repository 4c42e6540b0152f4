"""Rule-based grapheme-to-phoneme conversion for English and other scripts."""

from .app.app import (
    PhonoscribeApp,
    add_pronunciation,
    create_default_registry,
    create_tokenizer,
    get_default_app,
    phonemize,
    predict,
    to_arpabet,
    to_ipa,
    to_zhuyin,
)
from .app.services.text_expansion import expand_text
from .app.services.tokenizer import PhonemeToken, Tokenizer, TokenizerOptions
from .core import (
    EnglishG2P,
    OptionsValidationError,
    PhoneticEngine,
    PhonoscribeError,
    POSResult,
    ProcessorRegistry,
    PronunciationLexicon,
    PronunciationValidationError,
    SimplePOSTagger,
    ZhuyinCapable,
    detect_language,
)
from .core.notation import arpabet_to_ipa, ipa_to_arpabet
from .languages import ChineseG2P, JapaneseG2P, KoreanG2P, RussianG2P

__version__ = "0.1.0"

__all__ = [
    "ChineseG2P",
    "EnglishG2P",
    "JapaneseG2P",
    "KoreanG2P",
    "OptionsValidationError",
    "POSResult",
    "PhonemeToken",
    "PhoneticEngine",
    "PhonoscribeApp",
    "PhonoscribeError",
    "ProcessorRegistry",
    "PronunciationLexicon",
    "PronunciationValidationError",
    "RussianG2P",
    "SimplePOSTagger",
    "Tokenizer",
    "TokenizerOptions",
    "ZhuyinCapable",
    "add_pronunciation",
    "arpabet_to_ipa",
    "create_default_registry",
    "create_tokenizer",
    "detect_language",
    "expand_text",
    "get_default_app",
    "ipa_to_arpabet",
    "phonemize",
    "predict",
    "to_arpabet",
    "to_ipa",
    "to_zhuyin",
]
