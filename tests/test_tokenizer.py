from __future__ import annotations

import pytest
from prometheus_client import REGISTRY

from phonoscribe.app.services.tokenizer import PhonemeToken, Tokenizer, TokenizerOptions
from phonoscribe.core.errors import OptionsValidationError
from phonoscribe.core.registry import ProcessorRegistry
from phonoscribe.languages import RussianG2P

from conftest import DummyZhuyinEngine


@pytest.fixture
def multilingual(registry) -> ProcessorRegistry:
    registry.register(DummyZhuyinEngine())
    registry.register(RussianG2P())
    return registry


def test_punctuation_attaches_to_previous_word(registry):
    tokenizer = Tokenizer(registry=registry)

    assert tokenizer.tokenize_to_string("Hello, world!") == "həˈloʊ, ˈwɝld!"
    assert tokenizer.tokenize("Hello, world!") == ["həˈloʊ", ",", "ˈwɝld", "!"]


def test_empty_text(registry):
    tokenizer = Tokenizer(registry=registry)

    assert tokenizer.tokenize_to_string("") == ""
    assert tokenizer.tokenize("   ") == []
    assert tokenizer.tokenize_to_tokens("") == []


def test_context_selects_homograph_variant(registry):
    tokenizer = Tokenizer(registry=registry)

    assert tokenizer.tokenize_to_string("I record the book") == "ˈaɪ ɹɪˈkɔɹd ðə ˈbʊk"
    assert tokenizer.tokenize_to_string("the record") == "ðə ˈɹɛkɚd"


def test_will_read_uses_present_tense(registry):
    tokenizer = Tokenizer(registry=registry)

    assert tokenizer.tokenize_to_string("I will read") == "ˈaɪ ˈwɪl ˈɹid"


def test_homograph_option_overrides_engine(registry):
    tokenizer = Tokenizer({"homograph": {"Read": "ɹɛd"}}, registry=registry)

    assert tokenizer.tokenize_to_string("I will read") == "ˈaɪ ˈwɪl ɹɛd"


def test_arpabet_output(registry):
    tokenizer = Tokenizer(TokenizerOptions(format="arpabet"), registry=registry)

    assert tokenizer.tokenize_to_string("test") == "T1 EH S T"


def test_strip_stress_in_both_notations(registry):
    ipa = Tokenizer(TokenizerOptions(strip_stress=True), registry=registry)
    arpabet = Tokenizer(
        TokenizerOptions(format="arpabet", strip_stress=True), registry=registry
    )

    assert ipa.tokenize_to_string("hello test") == "həloʊ tɛst"
    assert arpabet.tokenize_to_string("test") == "T EH S T"


def test_custom_separator(registry):
    tokenizer = Tokenizer({"separator": "|"}, registry=registry)

    assert tokenizer.tokenize_to_string("hello world") == "həˈloʊ|ˈwɝld"


def test_tokens_carry_word_and_position(registry):
    tokenizer = Tokenizer(registry=registry)

    tokens = tokenizer.tokenize_to_tokens("Hello, world")

    assert tokens == [
        PhonemeToken("həˈloʊ", "Hello", 0),
        PhonemeToken(",", ",", 5),
        PhonemeToken("ˈwɝld", "world", 7),
    ]


def test_punctuation_tokens_map_to_themselves(registry):
    tokenizer = Tokenizer(registry=registry)

    tokens = tokenizer.tokenize_to_tokens("test!")

    assert tokens[-1] == PhonemeToken("!", "!", 4)


def test_positions_refer_to_expanded_text(registry):
    tokenizer = Tokenizer(registry=registry)

    tokens = tokenizer.tokenize_to_tokens("2 cats")

    assert [(token.word, token.position) for token in tokens] == [("two", 0), ("cats", 4)]
    assert tokens[1].phoneme == "ˈkæts"


def test_unhandled_script_falls_back_to_token_text(registry):
    tokenizer = Tokenizer(registry=registry)

    assert tokenizer.tokenize_to_string("مرحبا") == "مرحبا"


def test_zhuyin_format_uses_capable_engine(multilingual):
    tokenizer = Tokenizer({"format": "zhuyin"}, registry=multilingual)

    assert tokenizer.tokenize_to_string("中文 test") == "ㄓㄨㄥ1 ㄨㄣ2 ˈtɛst"


def test_arrow_tones(multilingual):
    tokenizer = Tokenizer({"toneFormat": "arrow"}, registry=multilingual)

    assert tokenizer.tokenize_to_string("中文") == "ʈʂʊŋ→ wən↗"


def test_cyrillic_dispatches_to_russian_engine(multilingual):
    tokenizer = Tokenizer(registry=multilingual)

    assert tokenizer.tokenize_to_string("привет") == "prʲivʲet"


def test_any_ascii_keeps_language_of_transliterated_words(multilingual):
    tokenizer = Tokenizer({"anyAscii": True}, registry=multilingual)

    tokens = tokenizer.tokenize_to_tokens("привет")

    assert tokens == [PhonemeToken("prʲivʲet", "privet", 0)]


def test_tokenize_records_latency(registry):
    labels = {"format": "arpabet"}
    before = REGISTRY.get_sample_value("phonoscribe_tokenize_seconds_count", labels) or 0.0

    Tokenizer({"format": "arpabet"}, registry=registry).tokenize("hello")

    assert REGISTRY.get_sample_value("phonoscribe_tokenize_seconds_count", labels) == before + 1


# Options -------------------------------------------------------------------
def test_options_accept_camel_case_keys():
    options = TokenizerOptions.from_mapping(
        {"stripStress": True, "anyAscii": True, "toneFormat": "arrow", "format": "ipa"}
    )

    assert options.strip_stress is True
    assert options.any_ascii is True
    assert options.tone_format == "arrow"


def test_homograph_keys_are_lowercased():
    assert TokenizerOptions(homograph={"LEAD": "lɛd"}).homograph == {"lead": "lɛd"}


@pytest.mark.parametrize(
    "values",
    [
        {"format": "xml"},
        {"toneFormat": "numbers"},
        {"separator": 3},
        {"unknownOption": True},
    ],
)
def test_invalid_options_are_rejected(values):
    with pytest.raises(OptionsValidationError):
        TokenizerOptions.from_mapping(values)


def test_options_default_when_empty():
    assert TokenizerOptions.from_mapping(None) == TokenizerOptions()
    assert TokenizerOptions.from_mapping({}) == TokenizerOptions()
