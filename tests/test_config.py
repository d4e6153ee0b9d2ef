import os
import textwrap

import pytest

from smart_text_analyzer.config import Config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Убираем переменные, которые могут прийти из окружения разработчика."""
    for key in list(os.environ):
        if key.startswith('SMART_TEXT_ANALYZER_'):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv('HUGGINGFACE_API_KEY', raising=False)
    monkeypatch.delenv('HUGGINGFACE_API_TOKEN', raising=False)


def test_config_defaults_when_missing_file(tmp_path):
    """
    Проверяет, что при отсутствии файла конфигурации подставляются дефолтные значения.
    """
    cwd = os.getcwd()
    try:
        os.chdir(tmp_path)
        cfg = Config(configure_logging=False)
        assert cfg.get_remote_timeout() == 30.0
        assert cfg.get_max_keywords() == 15
        assert cfg.get_keyword_min_length() == 3
        assert cfg.get_summary_max_sentences() == 3
        assert cfg.get_heuristic_confidence_cap() == 50.0
        assert cfg.get_results_folder() == "data/results"
        assert cfg.get_remote_models()['summarize'] == 'facebook/bart-large-cnn'
        assert cfg.get_lexicon_path() is None
    finally:
        os.chdir(cwd)


def test_config_overrides_from_yaml(tmp_path):
    """
    Проверяет, что значения из YAML перекрывают дефолты, не затирая соседние ключи.
    """
    yaml_text = textwrap.dedent(
        """
        remote:
          timeout: 5
          models:
            sentiment: "custom/model"
        analysis:
          keywords:
            max_keywords: 10
        """
    ).strip()

    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(yaml_text, encoding="utf-8")

    cfg = Config(config_path=str(cfg_path), configure_logging=False)

    assert cfg.get_remote_timeout() == 5.0
    assert cfg.get_max_keywords() == 10
    assert cfg.get_remote_models()['sentiment'] == "custom/model"
    # Неизменённые значения остаются дефолтными там, где YAML не задаёт
    assert cfg.get_remote_models()['emotion'] == 'j-hartmann/emotion-english-distilroberta-base'
    assert cfg.get_keyword_fallback_count() == 5


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv('SMART_TEXT_ANALYZER_REMOTE__TIMEOUT', '2.5')
    monkeypatch.setenv('SMART_TEXT_ANALYZER_REMOTE__ENABLED', 'false')
    monkeypatch.setenv('SMART_TEXT_ANALYZER_ANALYSIS__SUMMARY__MAX_SENTENCES', '4')

    cfg = Config(config_path=str(tmp_path / "config.yaml"), configure_logging=False)
    assert cfg.get_remote_timeout() == 2.5
    assert cfg.is_remote_enabled() is False
    assert cfg.get_summary_max_sentences() == 4


def test_invalid_limits_reset_to_defaults(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("remote:\n  timeout: -1\nanalysis:\n  keywords:\n    max_keywords: 0\n", encoding="utf-8")

    cfg = Config(config_path=str(cfg_path), configure_logging=False)
    assert cfg.get_remote_timeout() == 30.0
    assert cfg.get_max_keywords() == 15


def test_profile_file_selected(tmp_path, monkeypatch):
    (tmp_path / "config.yaml").write_text("remote:\n  timeout: 10\n", encoding="utf-8")
    (tmp_path / "config.test.yaml").write_text("remote:\n  timeout: 1\n", encoding="utf-8")
    monkeypatch.setenv('SMART_TEXT_ANALYZER_ENV', 'testing')

    cfg = Config(config_path=str(tmp_path / "config.yaml"), configure_logging=False)
    assert cfg.get_remote_timeout() == 1.0


def test_api_key_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv('HUGGINGFACE_API_TOKEN', ' hf_token ')
    cfg = Config(config_path=str(tmp_path / "config.yaml"), configure_logging=False)
    assert cfg.get_huggingface_api_key() == 'hf_token'


def test_logging_file_timestamp(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text('logging:\n  log_file: "logs/smart_text_analyzer_{timestamp}.log"\n', encoding="utf-8")
    cfg = Config(config_path=str(cfg_path), configure_logging=False)
    assert "{timestamp}" not in cfg.get_logging_file()
    assert cfg.get_logging_file().startswith("logs/smart_text_analyzer_")
