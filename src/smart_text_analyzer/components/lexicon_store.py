"""
Хранилище словарей категория → набор терминов.

Загружается один раз при старте процесса и дальше только читается,
поэтому один экземпляр можно разделять между запросами без блокировок.
"""

from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Union
import logging

import yaml

from ..interfaces.analysis import SENTIMENT_CATEGORIES, EMOTION_CATEGORIES
from .lexicon_data import SENTIMENT_LEXICON, EMOTION_LEXICON, STOPWORDS

logger = logging.getLogger(__name__)


def _freeze(table: Mapping[str, Iterable[str]], required: Iterable[str], name: str) -> Mapping[str, FrozenSet[str]]:
    required = tuple(required)
    missing = [category for category in required if category not in table]
    if missing:
        raise ValueError(f"В словаре '{name}' нет категорий: {', '.join(missing)}")
    unknown = [category for category in table if category not in required]
    if unknown:
        raise ValueError(f"В словаре '{name}' неизвестные категории: {', '.join(unknown)}")
    frozen = {
        category: frozenset(term.strip().lower() for term in table[category] if term and term.strip())
        for category in required
    }
    return MappingProxyType(frozen)


class LexiconStore:
    """Неизменяемые таблицы для тональности, эмоций и стоп-слов."""

    def __init__(self,
                 sentiment: Mapping[str, Iterable[str]],
                 emotion: Mapping[str, Iterable[str]],
                 stopwords: Iterable[str]):
        """
        Инициализирует хранилище.

        Args:
            sentiment: Категории positive/negative/neutral → термины
            emotion: Семь категорий эмоций → термины
            stopwords: Стоп-слова для извлечения ключевых слов

        Raises:
            ValueError: если набор категорий не совпадает с ожидаемым
        """
        self._sentiment = _freeze(sentiment, SENTIMENT_CATEGORIES, 'sentiment')
        self._emotion = _freeze(emotion, EMOTION_CATEGORIES, 'emotion')
        self._stopwords = frozenset(word.strip().lower() for word in stopwords if word and word.strip())

    @classmethod
    def default(cls) -> 'LexiconStore':
        """Встроенные словари."""
        return cls(SENTIMENT_LEXICON, EMOTION_LEXICON, STOPWORDS)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> 'LexiconStore':
        """
        Загружает словари из YAML файла.

        Отсутствующие разделы (sentiment, emotion, stopwords) берутся из встроенных.

        Args:
            path: Путь к YAML файлу

        Returns:
            Новое хранилище
        """
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Файл словарей {path} должен содержать словарь разделов")
        store = cls(
            data.get('sentiment') or SENTIMENT_LEXICON,
            data.get('emotion') or EMOTION_LEXICON,
            data.get('stopwords') or STOPWORDS,
        )
        logger.info(f"Словари загружены: {path}")
        return store

    @classmethod
    def from_config(cls, cfg) -> 'LexiconStore':
        """Словари по пути из конфигурации (analysis.lexicon_path) или встроенные."""
        path: Optional[str] = cfg.get_lexicon_path()
        if path:
            return cls.from_yaml(path)
        return cls.default()

    @property
    def sentiment(self) -> Mapping[str, FrozenSet[str]]:
        return self._sentiment

    @property
    def emotion(self) -> Mapping[str, FrozenSet[str]]:
        return self._emotion

    @property
    def stopwords(self) -> FrozenSet[str]:
        return self._stopwords

    def is_stopword(self, word: str) -> bool:
        return word.lower() in self._stopwords

    @staticmethod
    def count_matches(clean_text: str, table: Mapping[str, FrozenSet[str]]) -> Dict[str, int]:
        """
        Считает вхождения терминов каждой категории подстрокой.

        Args:
            clean_text: Очищенный текст в нижнем регистре
            table: Таблица категорий (sentiment или emotion)

        Returns:
            Словарь категория → число совпадений (в порядке категорий таблицы)
        """
        if not clean_text:
            return {category: 0 for category in table}
        return {
            category: sum(clean_text.count(term) for term in terms)
            for category, terms in table.items()
        }

    def get_statistics(self) -> Dict[str, int]:
        """Размеры таблиц."""
        stats = {f"sentiment.{c}": len(t) for c, t in self._sentiment.items()}
        stats.update({f"emotion.{c}": len(t) for c, t in self._emotion.items()})
        stats['stopwords'] = len(self._stopwords)
        return stats
