"""Text-level services built on the core engines."""

from .text_expansion import expand_text
from .tokenizer import PhonemeToken, Tokenizer, TokenizerOptions

__all__ = ["PhonemeToken", "Tokenizer", "TokenizerOptions", "expand_text"]
