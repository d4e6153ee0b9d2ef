"""
Компонент для анализа тональности.

Локальные стадии: подсчёт совпадений со словарями positive/negative/neutral,
а если совпадений нет - эвристика по пунктуации и словам капсом.
"""

from typing import Any, Dict, List, Optional
import logging

from ..exceptions import NoLexicalSignal
from ..interfaces.analysis import (
    AnalysisMethod,
    NormalizedText,
    SentimentResult,
    SENTIMENT_CATEGORIES,
    TaskScorerInterface,
)
from .fallback_pipeline import CascadeStage, CascadeState
from .lexicon_store import LexiconStore
from .preprocessor import TextPreprocessor
from .scoring import clamp, normalize_distribution, pick_label

logger = logging.getLogger(__name__)


class SentimentAnalyzer(TaskScorerInterface):
    """Анализатор тональности на словарях и эвристиках."""

    task = 'sentiment'
    # Порядок разрешения ничьих
    PRIORITY = SENTIMENT_CATEGORIES

    PATTERN_MODEL = 'Lexicon-based Sentiment Analysis'
    HEURISTIC_MODEL = 'Punctuation Heuristic Sentiment'

    def __init__(self,
                 lexicons: LexiconStore,
                 preprocessor: Optional[TextPreprocessor] = None,
                 heuristic_confidence_cap: float = 50.0):
        """
        Args:
            lexicons: Общие неизменяемые словари
            preprocessor: Нормализатор (для подсчёта структурных сигналов)
            heuristic_confidence_cap: Потолок уверенности эвристической стадии
        """
        self.lexicons = lexicons
        self.preprocessor = preprocessor or TextPreprocessor()
        self.heuristic_confidence_cap = heuristic_confidence_cap

    def local_stages(self) -> List[CascadeStage]:
        return [
            CascadeStage('lexicon', CascadeState.LOCAL_PATTERN, AnalysisMethod.PATTERN_MATCHING, self.analyze_patterns),
            CascadeStage('heuristic', CascadeState.HEURISTIC, AnalysisMethod.HEURISTIC, self.analyze_heuristics),
        ]

    def analyze_patterns(self, text: NormalizedText) -> SentimentResult:
        """
        Тональность по совпадениям со словарями.

        Raises:
            NoLexicalSignal: если ни один термин не найден
        """
        matches = LexiconStore.count_matches(text.clean, self.lexicons.sentiment)
        if sum(matches.values()) == 0:
            raise NoLexicalSignal("нет совпадений со словарями тональности")

        scores = normalize_distribution(matches, self.PRIORITY)
        category = pick_label(matches, self.PRIORITY)
        return SentimentResult(
            label=category.upper(),
            confidence=scores[category],
            score=self._numeric_score(scores),
            scores=scores,
            matches=matches,
            model=self.PATTERN_MODEL,
        )

    def analyze_heuristics(self, text: NormalizedText) -> SentimentResult:
        """Тональность по '!', '?', '...' и словам капсом."""
        signals = self.preprocessor.structural_signals(text.raw)
        raw_scores = {
            'positive': 0.5 * signals.exclamations + 0.3 * signals.questions,
            'negative': 0.3 * signals.all_caps + 0.2 * signals.ellipses,
            'neutral': 50.0 + (10.0 if text.word_count > 50 else 0.0),
        }
        scores = normalize_distribution(raw_scores, self.PRIORITY)
        category = pick_label(raw_scores, self.PRIORITY)
        return SentimentResult(
            label=category.upper(),
            confidence=min(scores[category], self.heuristic_confidence_cap),
            score=self._numeric_score(scores),
            scores=scores,
            matches={label: 0 for label in self.PRIORITY},
            model=self.HEURISTIC_MODEL,
        )

    def empty_result(self, text: NormalizedText) -> SentimentResult:
        return SentimentResult(
            label='NEUTRAL',
            confidence=50.0,
            score=0.0,
            scores={'positive': 0.0, 'negative': 0.0, 'neutral': 100.0},
            matches={label: 0 for label in self.PRIORITY},
        )

    def parse_remote(self, payload: Any, text: NormalizedText) -> SentimentResult:
        """
        Разбирает ответ классификатора вида [[{"label": ..., "score": ...}]].

        Raises:
            ValueError: если в ответе нет ни одной известной метки
        """
        entries = payload[0] if payload and isinstance(payload[0], list) else payload
        raw_scores: Dict[str, float] = {}
        for item in entries:
            label = str(item['label']).lower()
            if label in self.PRIORITY:
                raw_scores[label] = raw_scores.get(label, 0.0) + float(item['score'])
        if not raw_scores or sum(raw_scores.values()) <= 0:
            raise ValueError("в ответе нет меток тональности")

        full = {label: raw_scores.get(label, 0.0) for label in self.PRIORITY}
        scores = normalize_distribution(full, self.PRIORITY)
        category = pick_label(full, self.PRIORITY)
        return SentimentResult(
            label=category.upper(),
            confidence=scores[category],
            score=self._numeric_score(scores),
            scores=scores,
        )

    @staticmethod
    def _numeric_score(scores: Dict[str, float]) -> float:
        """(positive − negative) в долях × 10, в пределах [-100, 100]."""
        value = (scores.get('positive', 0.0) - scores.get('negative', 0.0)) / 100 * 10
        return round(clamp(value, -100.0, 100.0), 2)
