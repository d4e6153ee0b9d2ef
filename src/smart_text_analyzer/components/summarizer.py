"""
Компонент для экстрактивного реферирования.

Реферат состоит только из предложений исходного текста: короткий текст
возвращается как есть, длинный - тремя лучшими предложениями в исходном порядке.
"""

from typing import Any, List, Optional, Tuple
import logging

from ..exceptions import StageNotApplicable
from ..interfaces.analysis import (
    AnalysisMethod,
    NormalizedText,
    SummaryResult,
    TaskScorerInterface,
)
from .fallback_pipeline import CascadeStage, CascadeState
from .preprocessor import TextPreprocessor

logger = logging.getLogger(__name__)


class Summarizer(TaskScorerInterface):
    """Экстрактивный реферат по позиционным и длинностным весам предложений."""

    task = 'summarize'

    EXTRACTIVE_MODEL = 'Extractive Sentence Scoring'
    VERBATIM_MODEL = 'Verbatim Passthrough'

    def __init__(self, preprocessor: Optional[TextPreprocessor] = None, max_sentences: int = 3):
        self.preprocessor = preprocessor or TextPreprocessor()
        self.max_sentences = max_sentences

    def local_stages(self) -> List[CascadeStage]:
        return [
            CascadeStage('verbatim', CascadeState.LOCAL_PATTERN, AnalysisMethod.VERBATIM, self.summarize_verbatim),
            CascadeStage('extractive', CascadeState.HEURISTIC, AnalysisMethod.HEURISTIC, self.summarize_extractive),
        ]

    def summarize_verbatim(self, text: NormalizedText) -> SummaryResult:
        """
        Короткий текст (не больше max_sentences предложений) возвращается как есть.

        Raises:
            StageNotApplicable: если предложений больше max_sentences
        """
        if text.sentence_count > self.max_sentences:
            raise StageNotApplicable(f"{text.sentence_count} предложений - нужен отбор")
        return SummaryResult(
            summary=text.raw,
            original_word_count=text.word_count,
            summary_word_count=text.word_count,
            reduction_pct=0.0,
            sentence_count=text.sentence_count,
            model=self.VERBATIM_MODEL,
        )

    def score_sentence(self, sentence: str, index: int, total: int) -> float:
        """
        Вес предложения.

        +3 первому, +2 последнему, +0.1 за каждое уникальное слово,
        +2 за длину 15–25 слов, −1 за длину меньше 5 слов, +1 за '?' или '!'.
        """
        word_count = len(sentence.split())
        unique_words = set(self.preprocessor.tokenize(sentence))

        score = 0.0
        if index == 0:
            score += 3.0
        if index == total - 1:
            score += 2.0
        score += 0.1 * len(unique_words)
        if 15 <= word_count <= 25:
            score += 2.0
        if word_count < 5:
            score -= 1.0
        if '?' in sentence or '!' in sentence:
            score += 1.0
        return score

    def select_sentences(self, sentences: Tuple[str, ...]) -> List[str]:
        """Лучшие предложения (ничьи - по меньшему индексу) в исходном порядке."""
        total = len(sentences)
        scored = [(self.score_sentence(sentence, i, total), i) for i, sentence in enumerate(sentences)]
        scored.sort(key=lambda item: (-item[0], item[1]))
        chosen = sorted(index for _, index in scored[:self.max_sentences])
        return [sentences[i] for i in chosen]

    def summarize_extractive(self, text: NormalizedText) -> SummaryResult:
        """Отбирает max_sentences предложений с наибольшим весом."""
        summary = ' '.join(self.select_sentences(text.sentences))
        logger.debug(f"Реферат: {self.max_sentences} из {text.sentence_count} предложений")
        return self._build(summary, text, self.EXTRACTIVE_MODEL)

    def empty_result(self, text: NormalizedText) -> SummaryResult:
        return SummaryResult(
            summary=text.raw,
            original_word_count=0,
            summary_word_count=0,
            reduction_pct=0.0,
            sentence_count=0,
        )

    def parse_remote(self, payload: Any, text: NormalizedText) -> SummaryResult:
        """
        Разбирает ответ модели реферирования [{"summary_text": ...}].

        Raises:
            ValueError: если реферат пустой
        """
        entry = payload[0] if isinstance(payload, list) else payload
        summary = str(entry['summary_text']).strip()
        if not summary:
            raise ValueError("пустой реферат в ответе")
        return self._build(summary, text, '')

    @staticmethod
    def reduction_percent(original_words: int, summary_words: int) -> float:
        """round((1 − summary/original) × 100, 2); 0 для пустого оригинала."""
        if original_words == 0:
            return 0.0
        return round((1 - summary_words / original_words) * 100, 2)

    def _build(self, summary: str, text: NormalizedText, model: str) -> SummaryResult:
        summary_words = len(self.preprocessor.split_words(self.preprocessor.clean(summary)))
        return SummaryResult(
            summary=summary,
            original_word_count=text.word_count,
            summary_word_count=summary_words,
            reduction_pct=self.reduction_percent(text.word_count, summary_words),
            sentence_count=text.sentence_count,
            model=model,
        )
