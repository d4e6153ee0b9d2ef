"""
Модуль для работы с конфигурацией проекта

Функции:
- Загрузка config.yaml (+ профили: config.prod.yaml, config.test.yaml)
- ENV-переопределения (префикс SMART_TEXT_ANALYZER_, вложенность через __)
- Валидация числовых лимитов
- Настройка логирования
"""

import os
import copy
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional
from dotenv import load_dotenv
import logging
from datetime import datetime

logger = logging.getLogger(__name__)

ENV_PREFIX = 'SMART_TEXT_ANALYZER_'
PROFILE_ENV = 'SMART_TEXT_ANALYZER_ENV'


DEFAULT_CONFIG: Dict[str, Any] = {
    'remote': {
        'enabled': True,
        'provider': 'huggingface',
        'api_url': 'https://api-inference.huggingface.co/models/',
        'whoami_url': 'https://huggingface.co/api/whoami',
        'timeout': 30,
        'min_words_for_summary': 50,
        'models': {
            'sentiment': 'distilbert-base-uncased-finetuned-sst-2-english',
            'keywords': 'yanekyuk/bert-keyword-extractor',
            'emotion': 'j-hartmann/emotion-english-distilroberta-base',
            'summarize': 'facebook/bart-large-cnn',
        },
    },
    'analysis': {
        'lexicon_path': None,
        'sentiment': {
            # Потолок уверенности эвристической стадии
            'heuristic_confidence_cap': 50,
        },
        'keywords': {
            'max_keywords': 15,
            'min_length': 3,
            'fallback_count': 5,
            'fallback_min_length': 4,
        },
        'summary': {
            'max_sentences': 3,
        },
    },
    'limits': {
        'min_text_length': 10,
        'max_text_length': 10000,
    },
    'files': {
        'results_folder': "data/results",
        'results_filename_prefix': "text_analysis",
    },
    'logging': {
        'console_level': "INFO",
        'file_level': "DEBUG",
        'format': "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        'log_to_file': False,
        'log_file': "logs/smart_text_analyzer.log",
        'max_log_files': 10,
    },
}


class Config:
    """Класс для работы с конфигурацией проекта"""

    def __init__(self, config_path: Optional[str] = None, configure_logging: bool = True):
        """
        Инициализация конфигурации

        Args:
            config_path: Путь к файлу конфигурации
            configure_logging: Настраивать ли корневой логгер
        """
        if config_path:
            self.config_path = Path(config_path)
        else:
            # Ищем config.yaml в текущей директории и выше
            current_dir = Path.cwd()
            config_path = current_dir / "config.yaml"

            while not config_path.exists() and current_dir.parent != current_dir:
                current_dir = current_dir.parent
                config_path = current_dir / "config.yaml"

            self.config_path = config_path

        self.config_data: Dict[str, Any] = {}
        self.env_data: Dict[str, Optional[str]] = {}

        self._load_config()
        self._load_env()
        try:
            self._apply_env_overrides()
            self._validate()
        except Exception as e:
            logger.warning(f"Проблема при применении ENV/валидации: {e}")
        if configure_logging:
            self._configure_logging_if_needed()

    # --- Загрузка ---
    def _resolve_config_path(self) -> Path:
        env = os.getenv(PROFILE_ENV, '').lower().strip()
        root = self.config_path.parent
        if env == 'production':
            candidate = root / 'config.prod.yaml'
        elif env == 'testing':
            candidate = root / 'config.test.yaml'
        else:
            return self.config_path
        if candidate.exists():
            return candidate
        return self.config_path

    def _load_config(self) -> None:
        """Загружает конфигурацию из YAML файла поверх значений по умолчанию"""
        self.config_data = self._get_default_config()
        try:
            self.config_path = self._resolve_config_path()
            if self.config_path.exists():
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    loaded = yaml.safe_load(f) or {}
                self._deep_merge(self.config_data, loaded)
                logger.info(f"Конфигурация загружена: {self.config_path}")
            else:
                logger.debug(f"Файл конфигурации {self.config_path} не найден, используются значения по умолчанию")
        except Exception as e:
            logger.error(f"Ошибка загрузки конфигурации: {e}")
            self.config_data = self._get_default_config()

    def _load_env(self) -> None:
        """Загружает переменные окружения из .env файла"""
        try:
            load_dotenv()
            self.env_data = {
                'HUGGINGFACE_API_KEY': os.getenv('HUGGINGFACE_API_KEY') or os.getenv('HUGGINGFACE_API_TOKEN'),
            }
        except Exception as e:
            logger.error(f"Ошибка загрузки переменных окружения: {e}")

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> None:
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _set_nested(self, data: Dict[str, Any], dotted: str, value: Any) -> None:
        cur = data
        keys = dotted.split('.')
        for k in keys[:-1]:
            if k not in cur or not isinstance(cur[k], dict):
                cur[k] = {}
            cur = cur[k]
        cur[keys[-1]] = value

    def _apply_env_overrides(self) -> None:
        """Переопределяет конфиг значениями из ENV (SMART_TEXT_ANALYZER_*)."""
        for key, val in os.environ.items():
            if not key.startswith(ENV_PREFIX) or key == PROFILE_ENV:
                continue
            tail = key[len(ENV_PREFIX):]
            # Вложенность разделяется двойным подчёркиванием
            dotted = tail.replace('__', '.').lower()
            parsed: Any = val
            if val.lower() in ('true', 'false'):
                parsed = (val.lower() == 'true')
            else:
                try:
                    if '.' in val:
                        parsed = float(val)
                    else:
                        parsed = int(val)
                except ValueError:
                    parsed = val
            self._set_nested(self.config_data, dotted, parsed)
        if os.getenv(PROFILE_ENV):
            logger.info(f"Активирован профиль: {os.getenv(PROFILE_ENV)}")

    def _validate(self) -> None:
        """Проверяет числовые лимиты и возвращает дефолты для некорректных."""
        positive_keys = [
            'remote.timeout',
            'analysis.keywords.max_keywords',
            'analysis.keywords.fallback_count',
            'analysis.summary.max_sentences',
            'limits.max_text_length',
        ]
        defaults = self._get_default_config()
        for dotted in positive_keys:
            default = self._lookup(defaults, dotted)
            try:
                value = float(self.get(dotted, default))
                if value <= 0:
                    raise ValueError(dotted)
            except (TypeError, ValueError):
                logger.warning(f"Некорректное значение {dotted} - установлено по умолчанию: {default}")
                self._set_nested(self.config_data, dotted, default)

    def _configure_logging_if_needed(self, force: bool = False) -> None:
        """Инициализирует/переинициализирует базовое логирование по config.

        Повторная конфигурация выполняется, только если изменились уровень,
        формат или файл логирования, либо явно указан force=True.
        """
        root = logging.getLogger()

        console_level_name = str(self.get_console_logging_level()).upper()
        file_level_name = str(self.get_file_logging_level()).upper()
        console_level = getattr(logging, console_level_name, logging.INFO)
        file_level = getattr(logging, file_level_name, logging.DEBUG)

        desired_fmt = self.get_logging_format()
        desired_file = self.get_logging_file() if self.is_logging_to_file_enabled() else None

        if getattr(root, "_smart_text_analyzer_configured", False) and not force:
            if (
                getattr(root, "_smart_text_analyzer_console_level", None) == console_level_name and
                getattr(root, "_smart_text_analyzer_file_level", None) == file_level_name and
                getattr(root, "_smart_text_analyzer_format", None) == desired_fmt and
                getattr(root, "_smart_text_analyzer_file", None) == desired_file
            ):
                return

        handlers: List[logging.Handler] = []
        console = logging.StreamHandler()
        console.setLevel(console_level)
        console.setFormatter(logging.Formatter(desired_fmt))
        handlers.append(console)

        if desired_file:
            self.cleanup_old_log_files()
            log_file = Path(desired_file)
            try:
                log_file.parent.mkdir(parents=True, exist_ok=True)
                fh = logging.FileHandler(log_file, encoding='utf-8')
                fh.setLevel(file_level)
                fh.setFormatter(logging.Formatter(desired_fmt))
                handlers.append(fh)
            except OSError as e:
                logger.debug(f"Не удалось открыть файл лога: {e}")

        root_level = min(console_level, file_level) if desired_file else console_level
        logging.basicConfig(level=root_level, handlers=handlers, format=desired_fmt, force=True)
        setattr(root, "_smart_text_analyzer_configured", True)
        setattr(root, "_smart_text_analyzer_console_level", console_level_name)
        setattr(root, "_smart_text_analyzer_file_level", file_level_name)
        setattr(root, "_smart_text_analyzer_format", desired_fmt)
        setattr(root, "_smart_text_analyzer_file", desired_file)

    def _get_default_config(self) -> Dict[str, Any]:
        """Возвращает конфигурацию по умолчанию"""
        return copy.deepcopy(DEFAULT_CONFIG)

    @staticmethod
    def _lookup(data: Dict[str, Any], key: str, default: Any = None) -> Any:
        try:
            value = data
            for k in key.split('.'):
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def get(self, key: str, default: Any = None) -> Any:
        """
        Получает значение конфигурации по ключу

        Args:
            key: Ключ в формате 'section.subsection.parameter'
            default: Значение по умолчанию

        Returns:
            Значение параметра или default
        """
        return self._lookup(self.config_data, key, default)

    def get_env(self, key: str, default: Any = None) -> Any:
        """Получает значение переменной окружения, загруженной при старте"""
        value = self.env_data.get(key)
        return default if value is None else value

    # --- Remote inference ---
    def get_remote_config(self) -> Dict[str, Any]:
        """Получает конфигурацию удалённого инференса"""
        return self.config_data.get('remote', {})

    def is_remote_enabled(self) -> bool:
        return bool(self.get('remote.enabled', True))

    def get_remote_api_url(self) -> str:
        return self.get('remote.api_url', DEFAULT_CONFIG['remote']['api_url'])

    def get_remote_whoami_url(self) -> str:
        return self.get('remote.whoami_url', DEFAULT_CONFIG['remote']['whoami_url'])

    def get_remote_timeout(self) -> float:
        """Таймаут одной попытки удалённого инференса (секунды)"""
        return float(self.get('remote.timeout', 30))

    def get_remote_models(self) -> Dict[str, str]:
        return dict(self.get('remote.models', DEFAULT_CONFIG['remote']['models']) or {})

    def get_min_words_for_remote_summary(self) -> int:
        return int(self.get('remote.min_words_for_summary', 50))

    def get_huggingface_api_key(self) -> str:
        """Ключ Hugging Face (только из окружения / .env)"""
        return (self.get_env('HUGGINGFACE_API_KEY', '') or '').strip()

    # --- Analysis ---
    def get_analysis_config(self) -> Dict[str, Any]:
        """Получает конфигурацию анализа текста"""
        return self.config_data.get('analysis', {})

    def get_lexicon_path(self) -> Optional[str]:
        return self.get('analysis.lexicon_path')

    def get_heuristic_confidence_cap(self) -> float:
        return float(self.get('analysis.sentiment.heuristic_confidence_cap', 50))

    def get_max_keywords(self) -> int:
        return int(self.get('analysis.keywords.max_keywords', 15))

    def get_keyword_min_length(self) -> int:
        return int(self.get('analysis.keywords.min_length', 3))

    def get_keyword_fallback_count(self) -> int:
        return int(self.get('analysis.keywords.fallback_count', 5))

    def get_keyword_fallback_min_length(self) -> int:
        return int(self.get('analysis.keywords.fallback_min_length', 4))

    def get_summary_max_sentences(self) -> int:
        return int(self.get('analysis.summary.max_sentences', 3))

    # --- Limits (проверяются только внешним слоем: CLI) ---
    def get_min_text_length(self) -> int:
        return int(self.get('limits.min_text_length', 10))

    def get_max_text_length(self) -> int:
        return int(self.get('limits.max_text_length', 10000))

    # --- Files ---
    def get_results_folder(self) -> str:
        """Получает папку для результатов"""
        return self.get('files.results_folder', "data/results")

    def get_results_filename_prefix(self) -> str:
        return self.get('files.results_filename_prefix', "text_analysis")

    # --- Logging ---
    def get_logging_config(self) -> Dict[str, Any]:
        """Получает конфигурацию логирования"""
        return self.config_data.get('logging', {})

    def get_console_logging_level(self) -> str:
        """Получает уровень логирования для консоли"""
        return self.get('logging.console_level', self.get('logging.level', "INFO"))

    def get_file_logging_level(self) -> str:
        """Получает уровень логирования для файла"""
        return self.get('logging.file_level', "DEBUG")

    def get_logging_format(self) -> str:
        return self.get('logging.format', DEFAULT_CONFIG['logging']['format'])

    def is_logging_to_file_enabled(self) -> bool:
        return bool(self.get('logging.log_to_file', False))

    def get_logging_file(self) -> str:
        """Путь к файлу логов; {timestamp} заменяется меткой времени сессии"""
        template = self.get('logging.log_file', "logs/smart_text_analyzer.log")
        if "{timestamp}" in template:
            return template.replace("{timestamp}", datetime.now().strftime("%Y%m%d_%H%M%S"))
        return template

    def get_max_log_files(self) -> int:
        return int(self.get('logging.max_log_files', 10))

    def cleanup_old_log_files(self) -> None:
        """Удаляет старые файлы логов, оставляя только последние max_log_files"""
        logs_dir = Path(self.get_logging_file()).parent
        if not logs_dir.exists():
            return

        log_files = list(logs_dir.glob("smart_text_analyzer*.log"))
        max_files = self.get_max_log_files()
        if len(log_files) <= max_files:
            return

        # Самые новые - последними
        log_files.sort(key=lambda f: f.stat().st_mtime)
        for old_file in log_files[:-max_files]:
            try:
                old_file.unlink()
                logger.debug(f"Удален старый лог файл: {old_file}")
            except OSError as e:
                logger.debug(f"Не удалось удалить лог файл {old_file}: {e}")


# Глобальный экземпляр конфигурации
config = Config()
