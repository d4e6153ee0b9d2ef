"""
Smart Text Analyzer - детерминированный анализ текста с откатом на локальные методы

Этот модуль предоставляет инструменты для:
- Анализа тональности (POSITIVE / NEGATIVE / NEUTRAL)
- Определения эмоций
- Извлечения ключевых слов (TF-IDF)
- Экстрактивного реферирования
- Экспорта результатов в JSON, CSV и Excel

Удалённый инференс Hugging Face используется, если задан токен; иначе
и при любой его ошибке работают локальные словари и эвристики.
"""

__version__ = "0.1.0"
__author__ = "Sergey"

from .text_analyzer import (
    TextAnalyzer,
    analyze_sentiment,
    extract_keywords,
    detect_emotion,
    summarize_text,
    analyze_all,
)
from .interfaces import (
    SentimentResult,
    EmotionResult,
    KeywordResult,
    SummaryResult,
    CombinedResult,
    BasicResult,
)
from . import cli

__all__ = [
    "TextAnalyzer",
    "analyze_sentiment",
    "extract_keywords",
    "detect_emotion",
    "summarize_text",
    "analyze_all",
    "SentimentResult",
    "EmotionResult",
    "KeywordResult",
    "SummaryResult",
    "CombinedResult",
    "BasicResult",
    "cli",
]
