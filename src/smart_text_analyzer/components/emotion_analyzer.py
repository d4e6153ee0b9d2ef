"""
Компонент для определения эмоций.

Категории фиксированы: joy, sadness, anger, fear, surprise, love, neutral.
Локальные стадии полностью детерминированы: одинаковый текст всегда даёт
одинаковый результат.
"""

from typing import Any, Dict, List, Optional
import logging

from ..exceptions import NoLexicalSignal
from ..interfaces.analysis import (
    AnalysisMethod,
    EmotionResult,
    EMOTION_CATEGORIES,
    NormalizedText,
    TaskScorerInterface,
)
from .fallback_pipeline import CascadeStage, CascadeState
from .lexicon_store import LexiconStore
from .preprocessor import TextPreprocessor
from .scoring import normalize_distribution, pick_label

logger = logging.getLogger(__name__)


# Метки внешних моделей, которых нет в нашем наборе категорий
REMOTE_LABEL_ALIASES = {
    'disgust': 'anger',
    'happiness': 'joy',
    'sad': 'sadness',
}


class EmotionAnalyzer(TaskScorerInterface):
    """Анализатор эмоций на словарях и структурных эвристиках."""

    task = 'emotion'
    PRIORITY = ('joy', 'love', 'surprise', 'anger', 'fear', 'sadness', 'neutral')

    PATTERN_MODEL = 'Lexicon-based Emotion Detection'
    HEURISTIC_MODEL = 'Structural Heuristic Emotion Detection'

    def __init__(self, lexicons: LexiconStore, preprocessor: Optional[TextPreprocessor] = None):
        self.lexicons = lexicons
        self.preprocessor = preprocessor or TextPreprocessor()

    def local_stages(self) -> List[CascadeStage]:
        return [
            CascadeStage('lexicon', CascadeState.LOCAL_PATTERN, AnalysisMethod.PATTERN_MATCHING, self.analyze_patterns),
            CascadeStage('heuristic', CascadeState.HEURISTIC, AnalysisMethod.HEURISTIC, self.analyze_heuristics),
        ]

    def analyze_patterns(self, text: NormalizedText) -> EmotionResult:
        """
        Эмоции по совпадениям со словарями.

        В распределение попадают только категории, у которых есть совпадения.

        Raises:
            NoLexicalSignal: если ни один термин не найден
        """
        matches = LexiconStore.count_matches(text.clean, self.lexicons.emotion)
        matched = {category: count for category, count in matches.items() if count > 0}
        if not matched:
            raise NoLexicalSignal("нет совпадений со словарями эмоций")
        return self._build(matched, self.PATTERN_MODEL)

    def analyze_heuristics(self, text: NormalizedText) -> EmotionResult:
        """Эмоции по длине текста, пунктуации и длине предложений."""
        signals = self.preprocessor.structural_signals(text.raw)
        raw_scores: Dict[str, float] = {category: 0.0 for category in EMOTION_CATEGORIES}
        raw_scores['neutral'] = 50.0
        if text.word_count < 20:
            raw_scores['surprise'] += 15.0
        raw_scores['joy'] += 5.0 * signals.exclamations
        raw_scores['anger'] += 3.0 * signals.exclamations
        raw_scores['surprise'] += 4.0 * signals.questions
        raw_scores['sadness'] += 8.0 * signals.ellipses
        if self.preprocessor.average_sentence_length(text) > 15:
            raw_scores['neutral'] += 10.0
        return self._build(raw_scores, self.HEURISTIC_MODEL)

    def empty_result(self, text: NormalizedText) -> EmotionResult:
        return EmotionResult(primary='neutral', primary_score=100.0, all_scores={'neutral': 100.0})

    def parse_remote(self, payload: Any, text: NormalizedText) -> EmotionResult:
        """
        Разбирает ответ классификатора эмоций [[{"label": ..., "score": ...}]].

        Raises:
            ValueError: если в ответе нет ни одной известной эмоции
        """
        entries = payload[0] if payload and isinstance(payload[0], list) else payload
        raw_scores: Dict[str, float] = {}
        for item in entries:
            label = str(item['label']).lower()
            label = REMOTE_LABEL_ALIASES.get(label, label)
            if label in EMOTION_CATEGORIES:
                raw_scores[label] = raw_scores.get(label, 0.0) + float(item['score'])
        if not raw_scores or sum(raw_scores.values()) <= 0:
            raise ValueError("в ответе нет известных эмоций")
        return self._build(raw_scores, '')

    def _build(self, raw_scores: Dict[str, float], model: str) -> EmotionResult:
        scores = normalize_distribution(raw_scores, self.PRIORITY)
        primary = pick_label(raw_scores, self.PRIORITY)
        # Сначала сильнейшие, при равенстве - в порядке приоритета
        ordered = sorted(scores.items(), key=lambda item: (-item[1], self.PRIORITY.index(item[0])))
        return EmotionResult(
            primary=primary,
            primary_score=scores[primary],
            all_scores=dict(ordered),
            model=model,
        )
