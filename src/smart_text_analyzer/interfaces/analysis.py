"""
Абстрактные интерфейсы и типы результатов для компонентов анализа текста.

Определяет контракты, которые реализуют компоненты, и неизменяемые
структуры данных, которыми они обмениваются.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, asdict
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Any, Tuple, Union


class AnalysisMethod(str, Enum):
    """Метка происхождения результата (какая стадия каскада его дала)."""
    REMOTE = 'remote'
    PATTERN_MATCHING = 'pattern_matching'
    HEURISTIC = 'heuristic'
    EMPTY_INPUT = 'empty_input'
    VERBATIM = 'verbatim'


SENTIMENT_LABELS: Tuple[str, ...] = ('POSITIVE', 'NEGATIVE', 'NEUTRAL')
SENTIMENT_CATEGORIES: Tuple[str, ...] = ('positive', 'negative', 'neutral')
EMOTION_CATEGORIES: Tuple[str, ...] = ('joy', 'sadness', 'anger', 'fear', 'surprise', 'love', 'neutral')


@dataclass(frozen=True)
class NormalizedText:
    """Нормализованный текст. Создаётся один раз на запрос и не меняется."""
    raw: str
    clean: str
    words: Tuple[str, ...]
    sentences: Tuple[str, ...]

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def sentence_count(self) -> int:
        return len(self.sentences)

    @property
    def is_empty(self) -> bool:
        return not self.words


@dataclass
class RemoteResult:
    """Ответ удалённого инференса: успех/неуспех и разобранный JSON."""
    success: bool
    payload: Any = None
    error: Optional[str] = None
    model: Optional[str] = None

    @classmethod
    def failure(cls, error: str, model: Optional[str] = None) -> 'RemoteResult':
        return cls(success=False, error=error, model=model)


@dataclass
class SentimentResult:
    """Результат анализа тональности."""
    label: str
    confidence: float
    score: float
    method: str = ''
    scores: Dict[str, float] = field(default_factory=dict)
    matches: Dict[str, int] = field(default_factory=dict)
    model: str = ''
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class EmotionResult:
    """Результат определения эмоций."""
    primary: str
    primary_score: float
    all_scores: Dict[str, float] = field(default_factory=dict)
    method: str = ''
    model: str = ''
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Keyword:
    """Ключевое слово: поверхностная форма с заглавной буквы, частота, вес."""
    word: str
    frequency: int
    score: float


@dataclass
class KeywordResult:
    """Результат извлечения ключевых слов."""
    keywords: List[Keyword] = field(default_factory=list)
    total_keywords: int = 0
    word_count: int = 0
    method: str = ''
    model: str = ''
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def words(self) -> List[str]:
        return [kw.word for kw in self.keywords]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SummaryResult:
    """Результат экстрактивного реферирования."""
    summary: str
    original_word_count: int
    summary_word_count: int
    reduction_pct: float
    sentence_count: int
    method: str = ''
    model: str = ''
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class BasicResult:
    """Базовая статистика текста без каскада."""
    word_count: int
    unique_words: int
    char_count: int
    sentence_count: int
    most_common_words: Dict[str, int]
    reading_time_minutes: float
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CombinedResult:
    """Сводный результат: четыре анализа, статистика и общая оценка."""
    sentiment: SentimentResult
    keywords: KeywordResult
    emotion: EmotionResult
    summary: SummaryResult
    statistics: Dict[str, Any] = field(default_factory=dict)
    complexity: Dict[str, Any] = field(default_factory=dict)
    overall: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


AnyResult = Union[SentimentResult, EmotionResult, KeywordResult, SummaryResult, BasicResult, CombinedResult]


class PreprocessorInterface(ABC):
    """Интерфейс для нормализации и токенизации текста."""

    @abstractmethod
    def process(self, text: str) -> NormalizedText:
        """Строит NormalizedText из сырой строки."""
        pass

    @abstractmethod
    def clean(self, text: str) -> str:
        """Приводит к нижнему регистру и удаляет лишние символы."""
        pass

    @abstractmethod
    def split_sentences(self, text: str) -> List[str]:
        """Разбивает текст на предложения."""
        pass


class RemoteInferenceClientInterface(ABC):
    """Интерфейс удалённого инференса. Транспорт, авторизация - его забота."""

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Есть ли учётные данные для обращения к сервису."""
        pass

    @abstractmethod
    def infer(self, task: str, text: str, timeout: Optional[float] = None) -> RemoteResult:
        """Один запрос без повторов. Никогда не бросает исключений транспорта."""
        pass


class TaskScorerInterface(ABC):
    """Интерфейс анализатора конкретной задачи для FallbackPipeline."""

    task: str = ''

    @abstractmethod
    def empty_result(self, text: NormalizedText) -> Any:
        """Результат для текста без слов."""
        pass

    @abstractmethod
    def local_stages(self) -> List[Any]:
        """Локальные стадии каскада в порядке применения."""
        pass

    @abstractmethod
    def parse_remote(self, payload: Any, text: NormalizedText) -> Any:
        """Превращает ответ удалённого сервиса в результат задачи."""
        pass

    def remote_input(self, text: NormalizedText) -> str:
        """
        Текст для удалённого инференса: оригинал со схлопнутыми пробелами,
        регистр и пунктуация сохраняются.
        """
        return ' '.join(text.raw.split())


class ResultExporterInterface(ABC):
    """Интерфейс для экспорта результатов."""

    @abstractmethod
    def export_to_excel(self, result: AnyResult, filepath: Union[str, Path]) -> Optional[Path]:
        """Экспортирует результат в Excel формат."""
        pass

    @abstractmethod
    def export_to_csv(self, result: AnyResult, filepath: Union[str, Path]) -> Optional[Path]:
        """Экспортирует результат в CSV формат."""
        pass

    @abstractmethod
    def export_to_json(self, result: AnyResult, filepath: Union[str, Path]) -> Optional[Path]:
        """Экспортирует результат в JSON формат."""
        pass
