"""Spell out numbers and common abbreviations before tokenization."""

from __future__ import annotations

import re
from typing import Dict, FrozenSet, Match

from num2words import num2words

ABBREVIATIONS: Dict[str, str] = {
    # Titles
    "mr": "mister",
    "mrs": "missus",
    "ms": "miss",
    "dr": "doctor",
    "prof": "professor",
    "sr": "senior",
    "jr": "junior",
    # Time
    "am": "a m",
    "pm": "p m",
    # Common abbreviations
    "etc": "etcetera",
    "vs": "versus",
    "inc": "incorporated",
    "corp": "corporation",
    "ltd": "limited",
    "co": "company",
    "st": "street",
    "ave": "avenue",
    "blvd": "boulevard",
    "rd": "road",
    "apt": "apartment",
    "dept": "department",
    "gov": "government",
    "org": "organization",
    "edu": "education",
    "com": "commercial",
    "net": "network",
    "info": "information",
}

# Abbreviations expanded even without a trailing period. Forms that are also
# ordinary words ("am", "net", "co") need the period.
BARE_ABBREVIATIONS: FrozenSet[str] = frozenset(
    {"mr", "mrs", "ms", "dr", "prof", "sr", "jr", "etc", "vs", "inc", "corp",
     "ltd", "ave", "blvd", "rd", "apt", "dept"}
)

CURRENCIES: Dict[str, tuple] = {
    "$": ("dollar", "dollars", "cent", "cents"),
    "£": ("pound", "pounds", "penny", "pence"),
    "€": ("euro", "euros", "cent", "cents"),
}

_CURRENCY = re.compile(r"([$£€])(\d{1,3}(?:,\d{3})+|\d+)(?:\.(\d{2}))?\b")
_TIME = re.compile(r"\b(\d{1,2}):(\d{2})(?:\s*([ap]m))?\b", re.IGNORECASE)
_PERCENT = re.compile(r"\b(\d+)(?:\.(\d+))?%")
_DECIMAL = re.compile(r"\b(\d+)\.(\d+)\b")
_ORDINAL = re.compile(r"\b(\d+)(?:st|nd|rd|th)\b", re.IGNORECASE)
_PHONE = re.compile(r"(?:\(\d{3}\)\s?|\b\d{3}-)?\b\d{3}-\d{4}\b")
_YEAR = re.compile(r"\b(1[89]\d{2}|20\d{2})\b")
_INTEGER = re.compile(r"\b\d{1,3}(?:,\d{3})+\b|\b\d+\b")
_ABBREVIATION_WITH_PERIOD = re.compile(r"\b([a-z]+)\.", re.IGNORECASE)
_BARE_ABBREVIATION = re.compile(
    r"\b(" + "|".join(sorted(BARE_ABBREVIATIONS, key=len, reverse=True)) + r")\b",
    re.IGNORECASE,
)
_WHITESPACE = re.compile(r"\s+")


def _plain(words: str) -> str:
    """Normalize num2words output to space separated words."""

    words = words.replace("-", " ").replace(",", " ")
    words = re.sub(r"\band\b", " ", words)
    return _WHITESPACE.sub(" ", words).strip()


def number_to_words(value: int) -> str:
    return _plain(num2words(value))


def ordinal_to_words(value: int) -> str:
    return _plain(num2words(value, to="ordinal"))


def year_to_words(value: int) -> str:
    return _plain(num2words(value, to="year"))


def digits_to_words(digits: str) -> str:
    return " ".join(number_to_words(int(digit)) for digit in digits if digit.isdigit())


def _expand_currency(match: Match[str]) -> str:
    singular, plural, minor_singular, minor_plural = CURRENCIES[match.group(1)]
    major = int(match.group(2).replace(",", ""))
    minor = int(match.group(3) or 0)

    parts = []
    if major:
        parts.append(f"{number_to_words(major)} {singular if major == 1 else plural}")
    if minor:
        parts.append(f"{number_to_words(minor)} {minor_singular if minor == 1 else minor_plural}")
    return " ".join(parts) or f"zero {plural}"


def _expand_time(match: Match[str]) -> str:
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours == 0:
        hours = 12
    elif hours > 12:
        hours -= 12

    spoken = number_to_words(hours)
    if minutes == 0:
        spoken += " o'clock"
    elif minutes < 10:
        spoken += " oh " + number_to_words(minutes)
    else:
        spoken += " " + number_to_words(minutes)

    meridiem = match.group(3)
    if meridiem:
        spoken += " " + " ".join(meridiem.lower())
    return spoken


def _expand_percent(match: Match[str]) -> str:
    spoken = number_to_words(int(match.group(1)))
    if match.group(2):
        spoken += " point " + digits_to_words(match.group(2))
    return spoken + " percent"


def _expand_decimal(match: Match[str]) -> str:
    return number_to_words(int(match.group(1))) + " point " + digits_to_words(match.group(2))


def expand_numbers(text: str) -> str:
    text = _CURRENCY.sub(_expand_currency, text)
    text = _TIME.sub(_expand_time, text)
    text = _PERCENT.sub(_expand_percent, text)
    text = _DECIMAL.sub(_expand_decimal, text)
    text = _ORDINAL.sub(lambda m: ordinal_to_words(int(m.group(1))), text)
    text = _PHONE.sub(lambda m: digits_to_words(m.group(0)), text)
    text = _YEAR.sub(lambda m: year_to_words(int(m.group(1))), text)
    text = _INTEGER.sub(lambda m: number_to_words(int(m.group(0).replace(",", ""))), text)
    return text


def _expand_with_period(match: Match[str]) -> str:
    expansion = ABBREVIATIONS.get(match.group(1).lower())
    return expansion if expansion else match.group(0)


def expand_abbreviations(text: str) -> str:
    text = _ABBREVIATION_WITH_PERIOD.sub(_expand_with_period, text)
    return _BARE_ABBREVIATION.sub(lambda m: ABBREVIATIONS[m.group(1).lower()], text)


def expand_text(text: str) -> str:
    """Expand abbreviations, then numbers, and collapse whitespace."""

    if not text:
        return ""
    text = expand_abbreviations(text)
    text = expand_numbers(text)
    return _WHITESPACE.sub(" ", text).strip()


__all__ = [
    "ABBREVIATIONS",
    "BARE_ABBREVIATIONS",
    "digits_to_words",
    "expand_abbreviations",
    "expand_numbers",
    "expand_text",
    "number_to_words",
    "ordinal_to_words",
    "year_to_words",
]
