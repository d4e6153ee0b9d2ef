import sys
from pathlib import Path

import pytest

# Пакет лежит в src/, добавляем путь, чтобы тесты работали и без установки
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from smart_text_analyzer.config import Config
from smart_text_analyzer.components.lexicon_store import LexiconStore
from smart_text_analyzer.components.preprocessor import TextPreprocessor
from smart_text_analyzer.text_analyzer import TextAnalyzer


@pytest.fixture
def temp_directory(tmp_path: Path) -> Path:
    """Временная директория для тестов.

    Возвращает уникальную директорию для каждого теста.
    """
    return tmp_path


@pytest.fixture(scope="session")
def sample_texts():
    """Наборы английских текстов для тестирования."""
    from .fixtures import sample_texts as samples

    return {
        "positive": samples.SAMPLE_POSITIVE_TEXT,
        "negative": samples.SAMPLE_NEGATIVE_TEXT,
        "no_signal": samples.SAMPLE_NO_SIGNAL_TEXT,
        "stopwords": samples.SAMPLE_STOPWORDS_TEXT,
        "three_sentences": samples.SAMPLE_THREE_SENTENCES,
        "long": samples.SAMPLE_LONG_TEXT,
        "html": samples.SAMPLE_HTML_TEXT,
        "review": samples.SAMPLE_REVIEW_TEXT,
    }


@pytest.fixture(scope="session")
def test_config(tmp_path_factory) -> Config:
    """Конфигурация по умолчанию без config.yaml и без настройки логирования."""
    missing = tmp_path_factory.mktemp("cfg") / "config.yaml"
    return Config(config_path=str(missing), configure_logging=False)


@pytest.fixture(scope="session")
def lexicons() -> LexiconStore:
    return LexiconStore.default()


@pytest.fixture
def preprocessor() -> TextPreprocessor:
    return TextPreprocessor()


@pytest.fixture
def offline_analyzer(lexicons, test_config) -> TextAnalyzer:
    """Анализатор без удалённого инференса."""
    return TextAnalyzer(lexicons=lexicons, remote_client=None, cfg=test_config)


@pytest.fixture
def fake_remote():
    """Управляемый клиент удалённого инференса."""
    from .utils.fake_remote import FakeRemoteClient

    return FakeRemoteClient()


def pytest_configure(config):
    """Регистрируем маркеры для проекта."""
    config.addinivalue_line("markers", "integration: интеграционные тесты")
