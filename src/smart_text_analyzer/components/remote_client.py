"""
Клиент удалённого инференса Hugging Face.

Одна попытка на запрос, таймаут задаёт вызывающая сторона. Ошибки транспорта
не пробрасываются: клиент возвращает RemoteResult с success=False, а решение
об откате принимает каскад.
"""

import threading
from typing import Any, Dict, Optional
import logging

import requests

from ..interfaces.analysis import RemoteInferenceClientInterface, RemoteResult

logger = logging.getLogger(__name__)


DEFAULT_API_URL = 'https://api-inference.huggingface.co/models/'
DEFAULT_WHOAMI_URL = 'https://huggingface.co/api/whoami'

# Дополнительные параметры запроса по задачам
TASK_PARAMETERS: Dict[str, Dict[str, Any]] = {
    'sentiment': {'return_all_scores': True},
    'emotion': {'return_all_scores': True},
    'summarize': {'max_length': 150, 'min_length': 30, 'do_sample': False},
}

# Человекочитаемые названия моделей для поля model результата
MODEL_TITLES: Dict[str, str] = {
    'sentiment': 'DistilBERT Sentiment Analysis',
    'keywords': 'BERT Keyword Extractor',
    'emotion': 'RoBERTa Emotion Detection',
    'summarize': 'BART Summarization',
}


class HuggingFaceClient(RemoteInferenceClientInterface):
    """Клиент Inference API Hugging Face поверх requests.Session."""

    def __init__(self,
                 api_key: Optional[str] = None,
                 models: Optional[Dict[str, str]] = None,
                 api_url: str = DEFAULT_API_URL,
                 whoami_url: str = DEFAULT_WHOAMI_URL,
                 timeout: float = 30,
                 min_words_for_summary: int = 50,
                 enabled: bool = True):
        """
        Инициализация клиента

        Args:
            api_key: Токен Hugging Face (без токена клиент считается ненастроенным)
            models: Задача → идентификатор модели
            api_url: Базовый URL Inference API
            whoami_url: URL проверки токена
            timeout: Таймаут по умолчанию (секунды)
            min_words_for_summary: Минимум слов для удалённого реферирования
            enabled: Глобальный выключатель удалённого инференса
        """
        self.api_key = (api_key or '').strip()
        self.models = dict(models or {})
        self.api_url = api_url if api_url.endswith('/') else api_url + '/'
        self.whoami_url = whoami_url
        self.timeout = timeout
        self.min_words_for_summary = min_words_for_summary
        self.enabled = enabled

        self.session = requests.Session()
        self.session.headers.update({'Content-Type': 'application/json'})
        if self.api_key:
            self.session.headers.update({'Authorization': f'Bearer {self.api_key}'})

        # Счётчики общие для всех потоков, меняются только под блокировкой
        self._stats_lock = threading.Lock()
        self.request_stats = {
            'successful': 0,
            'failed': 0,
            'total_requests': 0,
        }

    @classmethod
    def from_config(cls, cfg) -> 'HuggingFaceClient':
        """Создаёт клиент из объекта Config."""
        return cls(
            api_key=cfg.get_huggingface_api_key(),
            models=cfg.get_remote_models(),
            api_url=cfg.get_remote_api_url(),
            whoami_url=cfg.get_remote_whoami_url(),
            timeout=cfg.get_remote_timeout(),
            min_words_for_summary=cfg.get_min_words_for_remote_summary(),
            enabled=cfg.is_remote_enabled(),
        )

    @property
    def is_configured(self) -> bool:
        return self.enabled and bool(self.api_key)

    def build_payload(self, task: str, text: str) -> Dict[str, Any]:
        payload: Dict[str, Any] = {'inputs': text}
        if task in TASK_PARAMETERS:
            payload['parameters'] = dict(TASK_PARAMETERS[task])
        return payload

    def infer(self, task: str, text: str, timeout: Optional[float] = None) -> RemoteResult:
        """
        Выполняет один запрос к модели задачи.

        Args:
            task: sentiment / keywords / emotion / summarize
            text: Текст для модели
            timeout: Таймаут этой попытки (None - таймаут клиента)

        Returns:
            RemoteResult с разобранным JSON или описанием ошибки
        """
        title = MODEL_TITLES.get(task)
        if not self.is_configured:
            return RemoteResult.failure("удалённый инференс не настроен", model=title)

        model_id = self.models.get(task)
        if not model_id:
            return RemoteResult.failure(f"для задачи '{task}' не задана модель", model=title)

        if task == 'summarize' and len(text.split()) < self.min_words_for_summary:
            return RemoteResult.failure("text too short for summarization", model=title)

        url = f"{self.api_url}{model_id}"
        effective_timeout = timeout if timeout is not None else self.timeout
        self._count('total_requests')

        try:
            logger.debug(f"Запрос к {url} (таймаут {effective_timeout} с)")
            response = self.session.post(url, json=self.build_payload(task, text), timeout=effective_timeout)
            if response.status_code != 200:
                self._count('failed')
                logger.warning(f"Ошибка HTTP {response.status_code} от {model_id}")
                return RemoteResult.failure(f"HTTP {response.status_code}", model=title)
            data = response.json()
        except requests.exceptions.RequestException as e:
            self._count('failed')
            logger.error(f"Ошибка запроса к {model_id}: {e}")
            return RemoteResult.failure(str(e), model=title)
        except ValueError as e:
            self._count('failed')
            logger.error(f"Некорректный JSON от {model_id}: {e}")
            return RemoteResult.failure(f"некорректный JSON: {e}", model=title)

        if isinstance(data, dict) and 'error' in data:
            self._count('failed')
            return RemoteResult.failure(str(data['error']), model=title)

        self._count('successful')
        return RemoteResult(success=True, payload=data, model=title)

    def _count(self, key: str) -> None:
        with self._stats_lock:
            self.request_stats[key] += 1

    def get_request_stats(self) -> Dict[str, int]:
        """Снимок счётчиков запросов."""
        with self._stats_lock:
            return dict(self.request_stats)

    def test_connection(self) -> Dict[str, Any]:
        """
        Проверяет токен через whoami.

        Returns:
            Словарь с ключами connected, message и user/type либо error
        """
        if not self.api_key:
            return {
                'connected': False,
                'error': 'HUGGINGFACE_API_KEY не задан',
                'message': 'Failed to connect to Hugging Face API',
            }
        try:
            response = self.session.get(self.whoami_url, timeout=self.timeout)
            response.raise_for_status()
            user_info = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.warning(f"Проверка подключения к Hugging Face не удалась: {e}")
            return {
                'connected': False,
                'error': str(e),
                'message': 'Failed to connect to Hugging Face API',
            }
        return {
            'connected': True,
            'user': user_info.get('name', 'Unknown'),
            'type': user_info.get('type', 'Unknown'),
            'message': 'Successfully connected to Hugging Face API',
        }

    def close(self) -> None:
        """Закрывает HTTP-сессию"""
        self.session.close()
