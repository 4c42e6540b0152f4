from __future__ import annotations

import pytest
from prometheus_client import REGISTRY

from phonoscribe.core.english import EnglishG2P
from phonoscribe.core.errors import PronunciationValidationError


def _resolutions(stage: str) -> float:
    value = REGISTRY.get_sample_value(
        "phonoscribe_english_resolutions_total", {"stage": stage}
    )
    return value or 0.0


def test_dictionary_words_resolve_directly(english):
    assert english.predict("test") == "ˈtɛst"
    assert english.predict("Hello") == "həˈloʊ"


def test_past_tense_after_t_adds_syllable(english):
    assert english.predict("tested") == "ˈtɛstɪd"


@pytest.mark.parametrize(
    "word, expected",
    [
        ("cats", "ˈkæts"),
        ("dogs", "ˈdɔɡz"),
        ("buses", "ˈbʌsɪz"),
        ("walked", "ˈwɔkt"),
        ("running", "ˈɹʌnɪŋ"),
        ("dog's", "ˈdɔɡz"),
    ],
)
def test_inflections_follow_base_voicing(english, word, expected):
    assert english.predict(word) == expected


def test_ally_adverb_reduces_to_schwa(english):
    result = english.predict("globally")

    assert result.startswith("ˈɡloʊbəl")
    assert result.endswith("əli")


def test_homograph_variant_selected_by_tag(english):
    assert english.predict("read", pos="VBD") == "ˈɹɛd"
    assert english.predict("read", pos="V") == "ˈɹid"
    assert english.predict("record", pos="V") == "ɹɪˈkɔɹd"
    assert english.predict("record", pos="!V") == "ˈɹɛkɚd"


def test_custom_pronunciation_overrides_acronym_spelling(english):
    assert english.predict("ML") == "ˈɛmˈɛl"

    english.add_pronunciation("ML", "ɛmɛl")

    assert english.predict("ML") == "ɛmɛl"
    assert english.predict("ml") == "ɛmɛl"


def test_all_caps_pronunciation_is_read_as_arpabet(english):
    english.add_pronunciation("tomato", "T AH0 M EY1 T OW2")

    assert english.predict("tomato") == "ˈtʌmeɪtoʊ"


@pytest.mark.parametrize("word, pronunciation", [("word", ""), ("word", "   "), ("", "ə")])
def test_empty_custom_pronunciations_are_rejected(english, word, pronunciation):
    with pytest.raises(PronunciationValidationError):
        english.add_pronunciation(word, pronunciation)

    # Also a ValueError for callers that do not import the package errors.
    with pytest.raises(ValueError):
        english.add_pronunciation(word, pronunciation)


def test_acronyms_spelled_with_stress_per_letter(english):
    assert english.predict("BBC") == "ˈbiˈbiˈsi"


def test_dotted_acronyms_drop_stress(english):
    assert english.predict("U.S.") == "juɛs"


def test_lowercase_words_are_not_spelled(english):
    assert english.predict("bbc") != "ˈbiˈbiˈsi"


def test_hyphenated_compound_stresses_second_element(english):
    result = english.predict("well-known")

    assert result == "wɛlˈnoʊn"
    assert result.count("ˈ") == 1


def test_compound_without_stress_on_second_part_gets_marker(english):
    assert english.predict("run-the") == "ɹʌnˈðə"


def test_long_words_decompose_into_dictionary_words(english):
    assert english.predict("sunflower") == "ˈsʌnˈflaʊɚ"


def test_rule_synthesis_marks_one_stress_for_polysyllables(english):
    result = english.predict("banana")

    assert result.count("ˈ") == 1
    assert english.predict("cab").count("ˈ") == 0


def test_disable_dict_skips_lookup_but_not_morphology(lexicon):
    engine = EnglishG2P(lexicon, disable_dict=True)

    assert engine.predict("test") != "ˈtɛst"
    assert engine.predict("tested") == "ˈtɛstɪd"


def test_language_gating(english):
    assert english.predict("test", "en") == "ˈtɛst"
    assert english.predict("test", "zh") is None
    assert english.handles_language(None)


def test_predictions_are_deterministic(english):
    words = ["banana", "construction", "sunflower", "BBC", "well-known", "tested"]
    first = [english.predict(word) for word in words]

    english.clear_cached_results()

    assert [english.predict(word) for word in words] == first
    assert [english.predict(word) for word in words] == first


def test_resolution_cache_is_bounded(lexicon):
    engine = EnglishG2P(lexicon, max_cache_entries=2)

    for word in ("test", "run", "book"):
        engine.predict(word)

    assert len(engine._resolution_cache) == 2
    assert ("test", None, False) not in engine._resolution_cache


def test_resolution_stage_counter(english):
    before = _resolutions("lexicon")

    english.predict("world")
    english.predict("world")

    # The second call is answered from the cache.
    assert _resolutions("lexicon") == before + 1


@pytest.mark.parametrize(
    "word, expected",
    [
        ("cat", ["cat"]),
        ("banana", ["ba", "na", "na"]),
        ("construct", ["con", "struct"]),
        ("garden", ["gar", "den"]),
    ],
)
def test_syllabify_maximises_onsets(english, word, expected):
    assert english.syllabify(word) == expected


@pytest.mark.parametrize(
    "syllables, word, expected",
    [
        (["cat"], "cat", 0),
        (["hap", "py"], "happy", 0),
        (["be", "gin"], "begin", 1),
        (["con", "struc", "tion"], "construction", 1),
        (["e", "co", "nom", "ic"], "economic", 2),
    ],
)
def test_assign_stress(english, syllables, word, expected):
    assert english.assign_stress(syllables, word) == expected


def test_suffix_syllables_use_whole_syllable_overrides(english):
    assert english.syllable_to_ipa("tion", 2, False, True) == "ʃən"
    assert english.syllable_to_ipa("ic", 3, False, True) == "ɪk"
