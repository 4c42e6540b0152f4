import pytest

from phonoscribe.core.pos_tagger import (
    ADJECTIVE,
    DETERMINER,
    NON_VERB,
    PAST_VERB,
    VERB,
    POSResult,
    SimplePOSTagger,
)


@pytest.fixture
def tagger():
    return SimplePOSTagger()


def test_determiners_tag_themselves(tagger):
    assert tagger.tag_word("The") == POSResult("The", DETERMINER, 0.9)


@pytest.mark.parametrize(
    "context, expected",
    [
        (["the"], (NON_VERB, 0.95)),
        (["please"], (VERB, 0.9)),
        (["will"], (VERB, 0.9)),
        (["they"], (VERB, 0.85)),
        (["was"], (VERB, 0.8)),
        (["", "the"], (VERB, 0.8)),
        (["", "books"], (VERB, 0.75)),
        (["", "to"], (VERB, 0.7)),
        (["in"], (NON_VERB, 0.7)),
    ],
)
def test_context_rules_in_priority_order(tagger, context, expected):
    result = tagger.tag_word("record", context)

    assert (result.pos, result.confidence) == expected


def test_previous_word_outranks_next_word(tagger):
    result = tagger.tag_word("record", ["the", "the"])

    assert result.pos == NON_VERB


@pytest.mark.parametrize(
    "word, expected",
    [
        ("walked", (PAST_VERB, 0.6)),
        ("running", (VERB, 0.6)),
        ("cats", (VERB, 0.4)),
        ("is", (VERB, 0.5)),
        ("realize", (VERB, 0.5)),
        ("nation", (NON_VERB, 0.5)),
        ("quickly", (ADJECTIVE, 0.6)),
        ("careful", (NON_VERB, 0.5)),
        ("xyz", (NON_VERB, 0.3)),
    ],
)
def test_suffix_fallback(tagger, word, expected):
    result = tagger.tag_word(word)

    assert (result.pos, result.confidence) == expected


def test_first_word_sees_successor_as_predecessor(tagger):
    results = tagger.tag_words(["record", "the", "song"])

    # With no predecessor, "the" occupies the previous-word slot.
    assert results[0].pos == NON_VERB
    assert results[0].confidence == 0.95
    assert results[1].pos == DETERMINER
    assert results[2].pos == NON_VERB


def test_tag_sentence_lowercases_and_splits_on_punctuation(tagger):
    results = tagger.tag_sentence("I read the Book.")

    assert [result.word for result in results] == ["i", "read", "the", "book"]
    assert [result.pos for result in results] == [NON_VERB, VERB, DETERMINER, NON_VERB]


def test_empty_input(tagger):
    assert tagger.tag_words([]) == []
    assert tagger.tag_sentence("  ") == []
