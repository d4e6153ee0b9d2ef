"""
Компонент для нормализации и токенизации текста.

Отвечает за очистку текста, разбивку на слова и предложения и подсчёт
структурных сигналов (пунктуация, слова капсом), на которых строятся эвристики.
"""

import re
import unicodedata
from dataclasses import dataclass
from typing import List, Optional
from ..interfaces.analysis import NormalizedText, PreprocessorInterface


# Всё, кроме букв/цифр, пробелов и базовой пунктуации, удаляется
_STRIP_PATTERN = re.compile(r'[^\w\s.,!?]')
_WHITESPACE_PATTERN = re.compile(r'\s+')
# Граница предложения: терминальная пунктуация, за которой пробел или заглавная буква
_SENTENCE_BOUNDARY = re.compile(r'(?<=[.!?])\s+|(?<=[.!?])(?=[A-Z])')
# Буквенные токены (любой алфавит, без цифр и подчёркивания)
_LETTER_TOKEN = re.compile(r'[^\W\d_]+')
_ALL_CAPS = re.compile(r'\b[A-Z]{2,}\b')


@dataclass(frozen=True)
class StructuralSignals:
    """Пунктуационные и регистровые сигналы исходного текста."""
    exclamations: int = 0
    questions: int = 0
    ellipses: int = 0
    all_caps: int = 0


class TextPreprocessor(PreprocessorInterface):
    """Нормализатор текста. Не хранит состояния между запросами."""

    def clean(self, text: Optional[str]) -> str:
        """
        Приводит текст к нижнему регистру и удаляет лишние символы.

        Args:
            text: Исходный текст

        Returns:
            Строка в нижнем регистре с одиночными пробелами
        """
        if not text:
            return ""
        text = unicodedata.normalize('NFC', text).lower()
        text = _STRIP_PATTERN.sub('', text)
        text = _WHITESPACE_PATTERN.sub(' ', text)
        return text.strip()

    def split_words(self, clean_text: str) -> List[str]:
        """Разбивает уже очищенный текст на слова по пробелам."""
        if not clean_text:
            return []
        return clean_text.split()

    def split_sentences(self, text: Optional[str]) -> List[str]:
        """
        Разбивает исходный текст на предложения.

        Регистр сохраняется: граница определяется по заглавной букве,
        а реферат цитирует предложения в исходном виде.

        Args:
            text: Исходный текст

        Returns:
            Список непустых предложений
        """
        if not text or not text.strip():
            return []
        collapsed = _WHITESPACE_PATTERN.sub(' ', text).strip()
        return [part.strip() for part in _SENTENCE_BOUNDARY.split(collapsed) if part and part.strip()]

    def tokenize(self, text: Optional[str]) -> List[str]:
        """Буквенные токены в нижнем регистре (без пунктуации и цифр)."""
        if not text:
            return []
        return [token.lower() for token in _LETTER_TOKEN.findall(unicodedata.normalize('NFC', text))]

    def process(self, text: Optional[str]) -> NormalizedText:
        """
        Строит NormalizedText из сырой строки.

        Пустая строка или строка из пробелов даёт пустые списки, а не ошибку.
        """
        raw = text or ""
        clean = self.clean(raw)
        return NormalizedText(
            raw=raw,
            clean=clean,
            words=tuple(self.split_words(clean)),
            sentences=tuple(self.split_sentences(raw)),
        )

    def structural_signals(self, raw: Optional[str]) -> StructuralSignals:
        """
        Подсчитывает сигналы по исходному тексту.

        Returns:
            Количество '!', '?', '...' и слов капсом (2+ заглавных буквы)
        """
        if not raw:
            return StructuralSignals()
        return StructuralSignals(
            exclamations=raw.count('!'),
            questions=raw.count('?'),
            ellipses=raw.count('...'),
            all_caps=len(_ALL_CAPS.findall(raw)),
        )

    def average_sentence_length(self, text: NormalizedText) -> float:
        """Среднее число слов в предложении (0 для пустого текста)."""
        if not text.sentences:
            return 0.0
        return text.word_count / text.sentence_count
