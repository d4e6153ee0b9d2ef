"""
Оркестратор анализа текста.

TextAnalyzer собирает четыре каскада (тональность, ключевые слова, эмоции,
реферат) поверх общих словарей и нормализатора, считает статистику текста
и общую оценку качества. Любая строка, включая пустую, даёт корректный
результат с меткой method.
"""

import time
from collections import Counter
from datetime import datetime
from typing import Any, Dict, Optional
import logging

from .components.emotion_analyzer import EmotionAnalyzer
from .components.fallback_pipeline import FallbackPipeline
from .components.keyword_extractor import KeywordExtractor
from .components.lexicon_store import LexiconStore
from .components.preprocessor import TextPreprocessor
from .components.remote_client import HuggingFaceClient
from .components.sentiment_analyzer import SentimentAnalyzer
from .components.summarizer import Summarizer
from .interfaces.analysis import (
    AnyResult,
    BasicResult,
    CombinedResult,
    EmotionResult,
    KeywordResult,
    NormalizedText,
    RemoteInferenceClientInterface,
    SentimentResult,
    SummaryResult,
)

logger = logging.getLogger(__name__)


WORDS_PER_MINUTE = 200

DIAGNOSTICS_SAMPLE_TEXT = (
    "This is an amazing product! I absolutely love how easy it is to use. "
    "The quality is excellent and the customer service was wonderful. "
    "Highly recommended for everyone looking for a great solution."
)

# Нижняя граница оценки → (рейтинг, интерпретация), по убыванию
QUALITY_BANDS = (
    (80, 'Excellent', 'High quality text with positive sentiment and good vocabulary'),
    (60, 'Good', 'Good quality text with generally positive content'),
    (40, 'Average', 'Average quality text, could be improved'),
    (20, 'Poor', 'Below average text quality or negative sentiment'),
    (0, 'Very Poor', 'Poor quality text requiring significant improvement'),
)


class TextAnalyzer:
    """
    Главный класс анализа текста.

    Словари загружаются один раз и дальше только читаются, поэтому один
    экземпляр можно использовать из нескольких потоков.
    """

    def __init__(self,
                 lexicons: Optional[LexiconStore] = None,
                 remote_client: Optional[RemoteInferenceClientInterface] = None,
                 remote_timeout: Optional[float] = None,
                 cfg=None):
        """
        Инициализирует анализатор.

        Args:
            lexicons: Словари (по умолчанию - из конфигурации или встроенные)
            remote_client: Клиент удалённого инференса (None - только локальные стадии)
            remote_timeout: Таймаут удалённой попытки по умолчанию
            cfg: Объект Config (по умолчанию - глобальный config)
        """
        if cfg is None:
            from .config import config as cfg
        self.config = cfg
        self.lexicons = lexicons or LexiconStore.from_config(cfg)
        self.preprocessor = TextPreprocessor()
        self.remote_client = remote_client
        timeout = remote_timeout if remote_timeout is not None else cfg.get_remote_timeout()

        self.sentiment_analyzer = SentimentAnalyzer(
            self.lexicons,
            self.preprocessor,
            heuristic_confidence_cap=cfg.get_heuristic_confidence_cap(),
        )
        self.emotion_analyzer = EmotionAnalyzer(self.lexicons, self.preprocessor)
        self.keyword_extractor = KeywordExtractor(
            self.lexicons,
            self.preprocessor,
            max_keywords=cfg.get_max_keywords(),
            min_length=cfg.get_keyword_min_length(),
            fallback_count=cfg.get_keyword_fallback_count(),
            fallback_min_length=cfg.get_keyword_fallback_min_length(),
        )
        self.summarizer = Summarizer(self.preprocessor, max_sentences=cfg.get_summary_max_sentences())

        self.pipelines: Dict[str, FallbackPipeline] = {
            scorer.task: FallbackPipeline(scorer, self.preprocessor, remote_client, timeout)
            for scorer in (self.sentiment_analyzer, self.keyword_extractor, self.emotion_analyzer, self.summarizer)
        }
        mode = "с удалённым инференсом" if remote_client is not None and remote_client.is_configured else "локально"
        logger.debug(f"TextAnalyzer инициализирован ({mode})")

    @classmethod
    def from_config(cls, cfg=None, offline: bool = False) -> 'TextAnalyzer':
        """
        Создаёт анализатор по конфигурации.

        Args:
            cfg: Объект Config (по умолчанию - глобальный config)
            offline: Не подключать удалённый инференс
        """
        if cfg is None:
            from .config import config as cfg
        client = None if offline else HuggingFaceClient.from_config(cfg)
        return cls(remote_client=client, cfg=cfg)

    # --- Задачи ---
    def analyze_sentiment(self, text: Optional[str], timeout: Optional[float] = None) -> SentimentResult:
        return self.pipelines['sentiment'].run(text, timeout)

    def extract_keywords(self, text: Optional[str], timeout: Optional[float] = None) -> KeywordResult:
        return self.pipelines['keywords'].run(text, timeout)

    def detect_emotion(self, text: Optional[str], timeout: Optional[float] = None) -> EmotionResult:
        return self.pipelines['emotion'].run(text, timeout)

    def summarize_text(self, text: Optional[str], timeout: Optional[float] = None) -> SummaryResult:
        return self.pipelines['summarize'].run(text, timeout)

    def analyze_all(self, text: Optional[str], timeout: Optional[float] = None) -> CombinedResult:
        """
        Все четыре анализа плюс статистика, сложность и общая оценка.

        Args:
            text: Исходный текст
            timeout: Таймаут удалённой попытки для каждой задачи

        Returns:
            CombinedResult
        """
        start = time.perf_counter()
        normalized = self.preprocessor.process(text)

        sentiment = self.analyze_sentiment(text, timeout)
        keywords = self.extract_keywords(text, timeout)
        emotion = self.detect_emotion(text, timeout)
        summary = self.summarize_text(text, timeout)

        complexity = self.text_complexity(normalized)
        return CombinedResult(
            sentiment=sentiment,
            keywords=keywords,
            emotion=emotion,
            summary=summary,
            statistics=self.text_statistics(normalized),
            complexity=complexity,
            overall=self.overall_score(sentiment.label, complexity['lexical_diversity']),
            metadata=self._metadata(normalized, 'advanced', start),
        )

    def basic_analysis(self, text: Optional[str]) -> BasicResult:
        """Базовая статистика без каскада: счётчики, частые слова, время чтения."""
        start = time.perf_counter()
        normalized = self.preprocessor.process(text)
        tokens = self.preprocessor.tokenize(normalized.clean)
        common = Counter(t for t in tokens if not self.lexicons.is_stopword(t))
        return BasicResult(
            word_count=len(tokens),
            unique_words=len(set(tokens)),
            char_count=len(normalized.clean),
            sentence_count=normalized.sentence_count,
            most_common_words=dict(common.most_common(5)),
            reading_time_minutes=round(len(tokens) / WORDS_PER_MINUTE, 2),
            metadata=self._metadata(normalized, 'basic', start),
        )

    def analyze(self, text: Optional[str], analysis_type: str = 'sentiment',
                timeout: Optional[float] = None) -> AnyResult:
        """
        Запускает анализ по имени типа.

        Неизвестный тип даёт базовый анализ.
        """
        handlers = {
            'sentiment': self.analyze_sentiment,
            'keywords': self.extract_keywords,
            'emotion': self.detect_emotion,
            'summarize': self.summarize_text,
            'advanced': self.analyze_all,
        }
        handler = handlers.get(analysis_type)
        if handler is None:
            if analysis_type != 'basic':
                logger.info(f"Неизвестный тип анализа '{analysis_type}', выполняю базовый анализ")
            return self.basic_analysis(text)
        return handler(text, timeout)

    # --- Статистика ---
    def text_statistics(self, text: NormalizedText) -> Dict[str, Any]:
        tokens = self.preprocessor.tokenize(text.clean)
        letters = sum(len(t) for t in tokens)
        return {
            'word_count': text.word_count,
            'char_count': len(text.clean),
            'sentence_count': text.sentence_count,
            'avg_word_length': round(letters / len(tokens), 2) if tokens else 0.0,
            'reading_time_minutes': round(text.word_count / WORDS_PER_MINUTE, 2),
        }

    def text_complexity(self, text: NormalizedText) -> Dict[str, Any]:
        """Лексическое разнообразие: доля уникальных слов в процентах."""
        tokens = self.preprocessor.tokenize(text.clean)
        unique = len(set(tokens))
        diversity = round(unique / len(tokens) * 100, 2) if tokens else 0.0
        return {
            'lexical_diversity': diversity,
            'unique_words': unique,
        }

    @staticmethod
    def overall_score(sentiment_label: str, lexical_diversity: float) -> Dict[str, Any]:
        """
        Общая оценка качества текста.

        База 50; +20 за POSITIVE, −20 за NEGATIVE; +15 при разнообразии > 60%,
        +5 при > 40%, −10 при < 20%; результат в пределах 0..100.
        """
        score = 50
        if sentiment_label == 'POSITIVE':
            score += 20
        elif sentiment_label == 'NEGATIVE':
            score -= 20

        if lexical_diversity > 60:
            score += 15
        elif lexical_diversity > 40:
            score += 5
        elif lexical_diversity < 20:
            score -= 10

        score = max(0, min(100, score))
        for lower, rating, interpretation in QUALITY_BANDS:
            if score >= lower:
                break
        return {'score': score, 'rating': rating, 'interpretation': interpretation}

    # --- Диагностика ---
    def run_diagnostics(self, sample_text: Optional[str] = None) -> Dict[str, Any]:
        """
        Прогоняет все анализаторы на образце текста и проверяет подключение.

        Returns:
            Словарь с total_tests, successful_tests, success_rate, test_results
        """
        sample_text = sample_text or DIAGNOSTICS_SAMPLE_TEXT
        results: Dict[str, Any] = {
            'sentiment': self.analyze_sentiment(sample_text),
            'keywords': self.extract_keywords(sample_text),
            'emotion': self.detect_emotion(sample_text),
            'summarization': self.summarize_text(sample_text),
        }

        if isinstance(self.remote_client, HuggingFaceClient):
            connection = self.remote_client.test_connection()
        else:
            connection = {'connected': False, 'message': 'Remote inference is not configured'}

        successful = sum(1 for result in results.values() if result.method)
        if connection.get('connected'):
            successful += 1
        total = len(results) + 1

        test_results = {name: result.to_dict() for name, result in results.items()}
        test_results['huggingface_connection'] = connection
        return {
            'total_tests': total,
            'successful_tests': successful,
            'success_rate': round(successful / total * 100, 2),
            'test_results': test_results,
            'timestamp': datetime.now().strftime('%Y-%m-%d %H:%M:%S'),
        }

    def close(self) -> None:
        """Закрывает HTTP-сессию удалённого клиента, если она есть."""
        if isinstance(self.remote_client, HuggingFaceClient):
            self.remote_client.close()

    def _metadata(self, text: NormalizedText, analysis_type: str, start: float) -> Dict[str, Any]:
        return {
            'processing_time_ms': round((time.perf_counter() - start) * 1000, 2),
            'text_length': len(text.clean),
            'word_count': text.word_count,
            'analysis_type': analysis_type,
            'timestamp': datetime.now().strftime('%Y-%m-%d %H:%M:%S'),
        }


_default_analyzer: Optional[TextAnalyzer] = None


def get_default_analyzer() -> TextAnalyzer:
    """Ленивый анализатор по глобальной конфигурации."""
    global _default_analyzer
    if _default_analyzer is None:
        _default_analyzer = TextAnalyzer.from_config()
    return _default_analyzer


def analyze_sentiment(text: Optional[str]) -> SentimentResult:
    return get_default_analyzer().analyze_sentiment(text)


def extract_keywords(text: Optional[str]) -> KeywordResult:
    return get_default_analyzer().extract_keywords(text)


def detect_emotion(text: Optional[str]) -> EmotionResult:
    return get_default_analyzer().detect_emotion(text)


def summarize_text(text: Optional[str]) -> SummaryResult:
    return get_default_analyzer().summarize_text(text)


def analyze_all(text: Optional[str]) -> CombinedResult:
    return get_default_analyzer().analyze_all(text)
