"""Exceptions raised for caller misuse.

Linguistic failures (unknown words, unmapped symbols, malformed table rows)
never raise; they degrade to best-effort output instead.
"""


class PhonoscribeError(Exception):
    """Base class for phonoscribe errors."""


class PronunciationValidationError(PhonoscribeError, ValueError):
    """Raised when a custom pronunciation is registered with an empty word or phoneme."""


class OptionsValidationError(PhonoscribeError, ValueError):
    """Raised when tokenizer options name an unknown output or tone format."""


__all__ = [
    "PhonoscribeError",
    "PronunciationValidationError",
    "OptionsValidationError",
]
