"""
Интерфейсы и типы результатов для компонентов анализа текста.

Определяет абстрактные базовые классы для всех компонентов,
обеспечивая единообразный API и возможность замены реализаций.
"""

from .analysis import (
    AnalysisMethod,
    NormalizedText,
    RemoteResult,
    SentimentResult,
    EmotionResult,
    Keyword,
    KeywordResult,
    SummaryResult,
    BasicResult,
    CombinedResult,
    SENTIMENT_LABELS,
    SENTIMENT_CATEGORIES,
    EMOTION_CATEGORIES,
    PreprocessorInterface,
    RemoteInferenceClientInterface,
    TaskScorerInterface,
    ResultExporterInterface,
)

__all__ = [
    'AnalysisMethod',
    'NormalizedText',
    'RemoteResult',
    'SentimentResult',
    'EmotionResult',
    'Keyword',
    'KeywordResult',
    'SummaryResult',
    'BasicResult',
    'CombinedResult',
    'SENTIMENT_LABELS',
    'SENTIMENT_CATEGORIES',
    'EMOTION_CATEGORIES',
    'PreprocessorInterface',
    'RemoteInferenceClientInterface',
    'TaskScorerInterface',
    'ResultExporterInterface',
]
