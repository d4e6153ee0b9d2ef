"""
Каскад remote → локальные словари → эвристики, общий для всех задач.

Стадии - упорядоченный список стратегий с одинаковой сигнатурой:
каждая либо возвращает результат, либо бросает AnalysisFallback,
и тогда управление переходит к следующей. Повторных попыток нет.
"""

import time
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional
import logging

from ..exceptions import AnalysisFallback, EmptyInput, RemoteUnavailable
from ..interfaces.analysis import (
    AnalysisMethod,
    NormalizedText,
    PreprocessorInterface,
    RemoteInferenceClientInterface,
    TaskScorerInterface,
)

logger = logging.getLogger(__name__)


class CascadeState(str, Enum):
    """Состояния каскада, одинаковые для всех задач."""
    REMOTE_ATTEMPT = 'REMOTE_ATTEMPT'
    LOCAL_PATTERN = 'LOCAL_PATTERN'
    HEURISTIC = 'HEURISTIC'
    DONE = 'DONE'


@dataclass(frozen=True)
class CascadeStage:
    """Одна стадия каскада: состояние, метка происхождения и сама стратегия."""
    name: str
    state: CascadeState
    method: AnalysisMethod
    run: Callable[[NormalizedText], Any]


class FallbackPipeline:
    """
    Универсальный пайплайн с откатом для одной задачи анализа.

    Порядок: проверка на пустой ввод → удалённый инференс (если клиент
    настроен) → локальные стадии анализатора. Первая стадия, вернувшая
    результат, проставляет method; метаданные добавляются всегда.
    """

    def __init__(self,
                 scorer: TaskScorerInterface,
                 preprocessor: PreprocessorInterface,
                 remote_client: Optional[RemoteInferenceClientInterface] = None,
                 remote_timeout: Optional[float] = None):
        """
        Инициализирует пайплайн.

        Args:
            scorer: Анализатор задачи (локальные стадии, разбор ответа remote)
            preprocessor: Нормализатор текста
            remote_client: Клиент удалённого инференса (None - только локально)
            remote_timeout: Таймаут удалённой попытки по умолчанию (секунды)
        """
        self.scorer = scorer
        self.task = scorer.task
        self.preprocessor = preprocessor
        self.remote_client = remote_client
        self.remote_timeout = remote_timeout
        self._local_stages: List[CascadeStage] = list(scorer.local_stages())
        if not self._local_stages:
            raise ValueError(f"У задачи '{self.task}' нет локальных стадий")

    def run(self, text: Optional[str], timeout: Optional[float] = None) -> Any:
        """
        Прогоняет текст через каскад.

        Args:
            text: Исходный текст (любая строка, в том числе пустая)
            timeout: Таймаут удалённой попытки для этого вызова

        Returns:
            Результат задачи с заполненными method и metadata
        """
        start = time.perf_counter()
        normalized = self.preprocessor.process(text)
        visited: List[str] = []

        try:
            result, method = self._run_stages(normalized, visited, timeout)
        except EmptyInput:
            logger.debug(f"[{self.task}] пустой ввод - возвращаю результат по умолчанию")
            result, method = self.scorer.empty_result(normalized), AnalysisMethod.EMPTY_INPUT

        visited.append(CascadeState.DONE.value)
        result.method = method.value
        result.metadata = self._build_metadata(normalized, visited, start)
        return result

    def stages(self, timeout: Optional[float] = None) -> List[CascadeStage]:
        """Полный список стадий в порядке применения."""
        return [self._remote_stage(timeout)] + self._local_stages

    def _run_stages(self, normalized: NormalizedText, visited: List[str], timeout: Optional[float]):
        if normalized.is_empty:
            raise EmptyInput("во входном тексте нет слов")

        last_error: Optional[AnalysisFallback] = None
        for stage in self.stages(timeout):
            visited.append(stage.state.value)
            try:
                result = stage.run(normalized)
            except EmptyInput:
                raise
            except AnalysisFallback as e:
                logger.debug(f"[{self.task}] стадия '{stage.name}' не дала результата: {e}")
                last_error = e
                continue
            logger.debug(f"[{self.task}] результат получен на стадии '{stage.name}'")
            return result, stage.method

        raise RuntimeError(f"Ни одна стадия задачи '{self.task}' не дала результата") from last_error

    def _remote_stage(self, timeout: Optional[float]) -> CascadeStage:
        effective_timeout = timeout if timeout is not None else self.remote_timeout

        def attempt(text: NormalizedText) -> Any:
            client = self.remote_client
            if client is None or not client.is_configured:
                raise RemoteUnavailable("удалённый инференс не настроен")
            response = client.infer(self.task, self.scorer.remote_input(text), timeout=effective_timeout)
            if not response.success:
                logger.warning(f"[{self.task}] удалённый инференс недоступен: {response.error}")
                raise RemoteUnavailable(response.error or "неизвестная ошибка")
            try:
                result = self.scorer.parse_remote(response.payload, text)
            except (KeyError, IndexError, TypeError, ValueError) as e:
                logger.warning(f"[{self.task}] некорректный ответ удалённого сервиса: {e}")
                raise RemoteUnavailable(f"некорректный ответ: {e}") from e
            if response.model:
                result.model = response.model
            return result

        return CascadeStage('remote', CascadeState.REMOTE_ATTEMPT, AnalysisMethod.REMOTE, attempt)

    def _build_metadata(self, normalized: NormalizedText, visited: List[str], start: float) -> Dict[str, Any]:
        return {
            'processing_time_ms': round((time.perf_counter() - start) * 1000, 2),
            'text_length': len(normalized.clean),
            'word_count': normalized.word_count,
            'analysis_type': self.task,
            'timestamp': datetime.now().strftime('%Y-%m-%d %H:%M:%S'),
            'stages_tried': visited,
        }
