from __future__ import annotations

import json
import logging

from phonoscribe.core.lexicon import (
    DICT_PATH_ENV,
    HomographVariant,
    PronunciationLexicon,
)


def _write(path, payload) -> str:
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return str(path)


def test_lookup_is_case_insensitive(lexicon):
    assert lexicon.lookup("TEST") == "ˈtɛst"
    assert "Test" in lexicon
    assert "unlisted" not in lexicon
    assert lexicon.lookup("") is None


def test_set_replaces_existing_entry(lexicon):
    lexicon.set("Test", "ˈtɛːst")

    assert lexicon.lookup("test") == "ˈtɛːst"


def test_homograph_trigger_matching():
    exact = HomographVariant("ˈɹɛd", "VBD")
    negated = HomographVariant("ˈɹid", "!VBD")

    assert exact.matches("VBD")
    assert not exact.matches("V")
    assert negated.matches("V")
    assert negated.matches("!V")
    assert not negated.matches("VBD")
    assert not negated.matches(None)


def test_select_homograph_uses_first_matching_variant(lexicon):
    assert lexicon.select_homograph("read", "VBD") == "ˈɹɛd"
    assert lexicon.select_homograph("read", "!V") == "ˈɹid"
    assert lexicon.select_homograph("record", "V") == "ɹɪˈkɔɹd"
    assert lexicon.select_homograph("record", None) is None
    assert lexicon.select_homograph("test", "V") is None


def test_letter_names_fall_back_to_dictionary(lexicon):
    assert lexicon.letter_name("M") == "ˈɛm"
    # "i" is not in the letter table but is a dictionary word
    assert lexicon.letter_name("i") == "ˈaɪ"
    assert lexicon.letter_name("z") is None


def test_malformed_entries_are_skipped_and_logged(tmp_path, caplog):
    dict_path = _write(
        tmp_path / "dict.json",
        {"good": "ˈɡʊd", "blank": "", "number": 3, "   ": "ə"},
    )
    homograph_path = _write(
        tmp_path / "homographs.json",
        {
            "bass": [
                {"pronunciation": "ˈbeɪs", "pos": "!V"},
                {"pronunciation": "ˈbæs"},
                "not a variant",
            ],
            "broken": "ˈbɹoʊkən",
        },
    )
    letters_path = _write(tmp_path / "letters.json", {"a": "ˈeɪ"})

    caplog.set_level(logging.WARNING, logger="phonoscribe.core.lexicon")
    lexicon = PronunciationLexicon(
        dict_path, homograph_path, letters_path=letters_path, use_cmu=False
    )

    assert lexicon.lookup("good") == "ˈɡʊd"
    assert lexicon.lookup("blank") is None
    assert lexicon.homograph_variants("bass") == (HomographVariant("ˈbeɪs", "!V"),)
    assert lexicon.homograph_variants("broken") == ()
    assert lexicon.malformed_counts == {"dictionary": 3, "homographs": 3, "letters": 0}
    assert any("Skipping malformed lexicon entry" in record.message for record in caplog.records)


def test_missing_and_unreadable_tables_load_empty(tmp_path, caplog):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")

    caplog.set_level(logging.WARNING, logger="phonoscribe.core.lexicon")
    lexicon = PronunciationLexicon(
        tmp_path / "missing.json",
        broken,
        letters_path=tmp_path / "also-missing.json",
        use_cmu=False,
    )

    assert lexicon.lookup("anything") is None
    assert lexicon.homograph_variants("read") == ()
    messages = [record.message for record in caplog.records]
    assert any("Lexicon table missing" in message for message in messages)
    assert any("Lexicon table unreadable" in message for message in messages)


def test_dictionary_path_from_environment(tmp_path, monkeypatch):
    dict_path = _write(tmp_path / "env-dict.json", {"envword": "ˈɛnv"})
    monkeypatch.setenv(DICT_PATH_ENV, dict_path)

    lexicon = PronunciationLexicon(entries=None, homographs={}, letters={}, use_cmu=False)

    assert lexicon.lookup("envword") == "ˈɛnv"


def test_bundled_tables_load():
    lexicon = PronunciationLexicon(use_cmu=False)

    assert lexicon.lookup("phoneme") == "ˈfoʊnim"
    assert lexicon.select_homograph("read", "VBD") == "ˈɹɛd"
    assert lexicon.letter_name("b") == "ˈbi"
    assert lexicon.malformed_counts == {"dictionary": 0, "homographs": 0, "letters": 0}


def test_cmu_fallback_converts_to_ipa(monkeypatch):
    import phonoscribe.core.lexicon as lexicon_module

    monkeypatch.setattr(
        lexicon_module.pronouncing,
        "phones_for_word",
        lambda word: ["K AE1 T"] if word == "cat" else [],
    )
    lexicon = PronunciationLexicon(entries={}, homographs={}, letters={})

    assert lexicon.lookup("cat") == "ˈkæt"
    assert lexicon.lookup("zzzz") is None


def test_cmu_cache_is_bounded_and_evicts_oldest(monkeypatch):
    import phonoscribe.core.lexicon as lexicon_module

    calls = []

    def phones_for_word(word):
        calls.append(word)
        return ["K AE1 T"] if word == "cat" else []

    monkeypatch.setattr(lexicon_module.pronouncing, "phones_for_word", phones_for_word)
    lexicon = PronunciationLexicon(
        entries={}, homographs={}, letters={}, max_cmu_cache_entries=2
    )

    for word in ("cat", "abcd", "bcde", "cdef", "cat"):
        lexicon.lookup(word)

    assert len(lexicon._cmu_cache) == 2
    assert list(lexicon._cmu_cache) == ["cdef", "cat"]
    assert calls.count("cat") == 2
