"""
Компоненты для анализа текста.

Каждый компонент отвечает за одну конкретную задачу:
- TextPreprocessor - нормализация и токенизация
- LexiconStore - неизменяемые словари и стоп-слова
- SentimentAnalyzer - тональность
- EmotionAnalyzer - эмоции
- KeywordExtractor - ключевые слова
- Summarizer - экстрактивный реферат
- FallbackPipeline - каскад remote → словари → эвристики
- HuggingFaceClient - удалённый инференс
- ResultExporter - экспорт результатов
"""

from .preprocessor import TextPreprocessor, StructuralSignals
from .lexicon_store import LexiconStore
from .sentiment_analyzer import SentimentAnalyzer
from .emotion_analyzer import EmotionAnalyzer
from .keyword_extractor import KeywordExtractor
from .summarizer import Summarizer
from .fallback_pipeline import FallbackPipeline, CascadeStage, CascadeState
from .remote_client import HuggingFaceClient
from .exporter import ResultExporter

__all__ = [
    'TextPreprocessor',
    'StructuralSignals',
    'LexiconStore',
    'SentimentAnalyzer',
    'EmotionAnalyzer',
    'KeywordExtractor',
    'Summarizer',
    'FallbackPipeline',
    'CascadeStage',
    'CascadeState',
    'HuggingFaceClient',
    'ResultExporter',
]
