import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from phonoscribe.core.engine import PhoneticEngine, ZhuyinCapable
from phonoscribe.core.english import EnglishG2P
from phonoscribe.core.lexicon import PronunciationLexicon
from phonoscribe.core.registry import ProcessorRegistry

TEST_ENTRIES: Dict[str, str] = {
    "test": "ˈtɛst",
    "global": "ˈɡloʊbəl",
    "run": "ˈɹʌn",
    "hello": "həˈloʊ",
    "world": "ˈwɝld",
    "the": "ðə",
    "i": "ˈaɪ",
    "will": "ˈwɪl",
    "a": "ə",
    "book": "ˈbʊk",
    "well": "ˈwɛl",
    "known": "ˈnoʊn",
    "rain": "ˈɹeɪn",
    "fall": "ˈfɔl",
    "sun": "ˈsʌn",
    "flower": "ˈflaʊɚ",
    "bus": "ˈbʌs",
    "cat": "ˈkæt",
    "dog": "ˈdɔɡ",
    "walk": "ˈwɔk",
}

TEST_HOMOGRAPHS = {
    "read": [
        {"pronunciation": "ˈɹɛd", "pos": "VBD"},
        {"pronunciation": "ˈɹid", "pos": "!VBD"},
    ],
    "record": [
        {"pronunciation": "ɹɪˈkɔɹd", "pos": "V"},
        {"pronunciation": "ˈɹɛkɚd", "pos": "!V"},
    ],
}

TEST_LETTERS: Dict[str, str] = {
    "a": "ˈeɪ",
    "b": "ˈbi",
    "c": "ˈsi",
    "l": "ˈɛl",
    "m": "ˈɛm",
    "n": "ˈɛn",
    "s": "ˈɛs",
    "u": "ˈju",
}


class DummyEngine(PhoneticEngine):
    """Engine stub that records calls and answers from a fixed table."""

    def __init__(
        self,
        engine_id: str,
        languages=("en",),
        answers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.id = engine_id
        self.name = f"Dummy {engine_id}"
        self.supported_languages = tuple(languages)
        self.answers = dict(answers or {})
        self.calls: List[tuple] = []
        self.added: Dict[str, str] = {}

    def predict(self, word, language=None, pos=None):
        self.calls.append((word, language, pos))
        if not self.handles_language(language):
            return None
        return self.answers.get(word.lower())

    def add_pronunciation(self, word, pronunciation):
        self.added[word.lower()] = pronunciation
        self.answers[word.lower()] = pronunciation


class DummyZhuyinEngine(DummyEngine, ZhuyinCapable):
    def __init__(self, engine_id: str = "zh-dummy") -> None:
        super().__init__(engine_id, ("zh",), {"中文": "ʈʂʊŋ˥˥ wən˧˥"})

    def text_to_zhuyin(self, text):
        return "ㄓㄨㄥ1 ㄨㄣ2" if text == "中文" else ""


@pytest.fixture
def lexicon() -> PronunciationLexicon:
    """Small in-memory lexicon with the CMU fallback disabled."""

    return PronunciationLexicon(
        entries=TEST_ENTRIES,
        homographs=TEST_HOMOGRAPHS,
        letters=TEST_LETTERS,
        use_cmu=False,
    )


@pytest.fixture
def english(lexicon) -> EnglishG2P:
    return EnglishG2P(lexicon)


@pytest.fixture
def registry(english) -> ProcessorRegistry:
    registry = ProcessorRegistry()
    registry.register(english)
    return registry
