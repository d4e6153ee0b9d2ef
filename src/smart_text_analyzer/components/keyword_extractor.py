"""
Компонент для извлечения ключевых слов.

Отвечает за подсчёт частот, фильтрацию стоп-слов и коротких токенов
и ранжирование кандидатов по TF-IDF внутри одного документа.
"""

import math
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional, Tuple
import logging

from ..exceptions import NoLexicalSignal
from ..interfaces.analysis import (
    AnalysisMethod,
    Keyword,
    KeywordResult,
    NormalizedText,
    TaskScorerInterface,
)
from .fallback_pipeline import CascadeStage, CascadeState
from .lexicon_store import LexiconStore
from .preprocessor import TextPreprocessor

logger = logging.getLogger(__name__)


class KeywordExtractor(TaskScorerInterface):
    """Извлечение ключевых слов по TF-IDF с откатом на сырую частотность."""

    task = 'keywords'

    TFIDF_MODEL = 'TF-IDF Keyword Extraction'
    FREQUENCY_MODEL = 'Raw Frequency Fallback'

    def __init__(self,
                 lexicons: LexiconStore,
                 preprocessor: Optional[TextPreprocessor] = None,
                 max_keywords: int = 15,
                 min_length: int = 3,
                 fallback_count: int = 5,
                 fallback_min_length: int = 4):
        """
        Args:
            lexicons: Общие словари (нужны стоп-слова)
            preprocessor: Нормализатор текста
            max_keywords: Максимум ключевых слов в ответе
            min_length: Минимальная длина кандидата (более короткие отбрасываются)
            fallback_count: Сколько слов отдаёт откат по частотности
            fallback_min_length: Минимальная длина слова в откате
        """
        self.lexicons = lexicons
        self.preprocessor = preprocessor or TextPreprocessor()
        self.max_keywords = max_keywords
        self.min_length = min_length
        self.fallback_count = fallback_count
        self.fallback_min_length = fallback_min_length

    def local_stages(self) -> List[CascadeStage]:
        return [
            CascadeStage('tfidf', CascadeState.LOCAL_PATTERN, AnalysisMethod.PATTERN_MATCHING, self.extract_tfidf),
            CascadeStage('frequency', CascadeState.HEURISTIC, AnalysisMethod.HEURISTIC, self.extract_by_frequency),
        ]

    def count_frequency(self, tokens: Iterable[str]) -> Counter:
        """Подсчитывает частоту появления токенов."""
        return Counter(tokens)

    def is_candidate(self, token: str) -> bool:
        """Кандидат: не короче min_length и не стоп-слово."""
        return len(token) >= self.min_length and not self.lexicons.is_stopword(token)

    def tfidf_score(self, frequency: int, total_words: int) -> float:
        """tf × idf × 100, где tf = freq/total, idf = ln(total/(freq+1))."""
        if total_words <= 0:
            return 0.0
        tf = frequency / total_words
        idf = math.log(total_words / (frequency + 1))
        return tf * idf * 100

    def extract_tfidf(self, text: NormalizedText) -> KeywordResult:
        """
        Ключевые слова по TF-IDF после фильтрации стоп-слов.

        Raises:
            NoLexicalSignal: если после фильтрации не осталось кандидатов
        """
        tokens = self.preprocessor.tokenize(text.clean)
        candidates = self.count_frequency(t for t in tokens if self.is_candidate(t))
        if not candidates:
            raise NoLexicalSignal("после фильтрации стоп-слов не осталось кандидатов")

        total_words = len(tokens)
        ranked = self._rank(candidates, total_words)
        return KeywordResult(
            keywords=[self._keyword(word, freq, score) for word, freq, score in ranked[:self.max_keywords]],
            total_keywords=len(candidates),
            word_count=total_words,
            model=self.TFIDF_MODEL,
        )

    def extract_by_frequency(self, text: NormalizedText) -> KeywordResult:
        """
        Откат: самые частые токены без фильтра стоп-слов.

        Берутся токены длиннее трёх символов; если таких нет, то токены не
        короче min_length, чтобы текст из одних стоп-слов не давал пустой
        список. Одно- и двухбуквенные токены в ключевые слова не попадают.
        """
        tokens = self.preprocessor.tokenize(text.clean)
        counts = self.count_frequency(tokens)
        pool = Counter({word: freq for word, freq in counts.items() if len(word) >= self.fallback_min_length})
        if not pool:
            pool = Counter({word: freq for word, freq in counts.items() if len(word) >= self.min_length})

        total_words = len(tokens)
        ordered = sorted(pool.items(), key=lambda item: (-item[1], item[0]))[:self.fallback_count]
        return KeywordResult(
            keywords=[self._keyword(word, freq, self.tfidf_score(freq, total_words)) for word, freq in ordered],
            total_keywords=len(pool),
            word_count=total_words,
            model=self.FREQUENCY_MODEL,
        )

    def empty_result(self, text: NormalizedText) -> KeywordResult:
        return KeywordResult(keywords=[], total_keywords=0, word_count=0)

    def parse_remote(self, payload: Any, text: NormalizedText) -> KeywordResult:
        """
        Разбирает ответ token-classification модели [{"word": ..., "score": ...}].

        Raises:
            ValueError: если в ответе нет ни одного слова
        """
        if isinstance(payload, dict):
            raise ValueError(payload.get('error', 'неожиданный формат ответа'))
        tokens = self.preprocessor.tokenize(text.clean)
        counts = self.count_frequency(tokens)

        best: Dict[str, float] = {}
        for item in payload:
            word = str(item['word']).strip().lower()
            if not word or word.startswith('##'):
                continue
            best[word] = max(best.get(word, 0.0), float(item.get('score', 0.0)) * 100)
        if not best:
            raise ValueError("в ответе нет ключевых слов")

        ordered = sorted(best.items(), key=lambda item: (-item[1], item[0]))
        return KeywordResult(
            keywords=[self._keyword(word, counts.get(word, 0), score) for word, score in ordered[:self.max_keywords]],
            total_keywords=len(best),
            word_count=len(tokens),
        )

    def _rank(self, candidates: Counter, total_words: int) -> List[Tuple[str, int, float]]:
        scored = [(word, freq, self.tfidf_score(freq, total_words)) for word, freq in candidates.items()]
        # Вес по убыванию, затем частота по убыванию, затем по алфавиту
        scored.sort(key=lambda item: (-item[2], -item[1], item[0]))
        return scored

    @staticmethod
    def _keyword(word: str, frequency: int, score: float) -> Keyword:
        return Keyword(word=word.capitalize(), frequency=frequency, score=round(score, 2))
