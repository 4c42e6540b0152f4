"""Table-driven engines for the non-dominant languages."""

from .chinese import ChineseG2P
from .japanese import JapaneseG2P
from .korean import KoreanG2P
from .russian import RussianG2P

__all__ = ["ChineseG2P", "JapaneseG2P", "KoreanG2P", "RussianG2P"]
