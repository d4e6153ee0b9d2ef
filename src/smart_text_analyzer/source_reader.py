"""
Модуль для получения и проверки входного текста

Содержит функции для:
- Чтения текста из аргумента, файла или stdin
- Удаления HTML разметки
- Проверки длины текста (внешний слой, ядро анализа её не требует)
"""

import sys
from pathlib import Path
from typing import Optional, TextIO, Union
import logging

from bs4 import BeautifulSoup

from .exceptions import InputValidationError

logger = logging.getLogger(__name__)

HTML_SUFFIXES = ('.html', '.htm')


def strip_html(text: str) -> str:
    """
    Удаляет HTML теги из текста используя BeautifulSoup

    Args:
        text: HTML текст

    Returns:
        Текст без разметки
    """
    if not text:
        return ""
    soup = BeautifulSoup(text, "html.parser")
    for tag in soup(['script', 'style']):
        tag.decompose()
    return soup.get_text(separator=' ')


def read_text(text: Optional[str] = None,
              file: Optional[Union[str, Path]] = None,
              html: bool = False,
              stdin: Optional[TextIO] = None) -> str:
    """
    Получает текст для анализа.

    Приоритет: явный текст → файл → stdin.

    Args:
        text: Текст из аргумента командной строки
        file: Путь к файлу (.html/.htm обрабатывается как HTML)
        html: Считать источник HTML
        stdin: Поток для чтения (по умолчанию sys.stdin)

    Returns:
        Исходный текст (без HTML разметки, если она удалялась)
    """
    if text is not None:
        raw = text
    elif file is not None:
        path = Path(file)
        raw = path.read_text(encoding='utf-8')
        html = html or path.suffix.lower() in HTML_SUFFIXES
        logger.debug(f"Прочитан файл {path} ({len(raw)} символов)")
    else:
        stream = stdin or sys.stdin
        raw = stream.read()

    if html:
        raw = strip_html(raw)
    return raw


def validate_text(text: Optional[str], min_length: int = 10, max_length: int = 10000) -> str:
    """
    Проверяет длину текста перед анализом.

    Raises:
        InputValidationError: если текст пустой, короче min_length или длиннее max_length
    """
    stripped = (text or '').strip()
    if not stripped:
        raise InputValidationError("Please enter text to analyze")
    if len(stripped) < min_length:
        raise InputValidationError(f"Text must be at least {min_length} characters long")
    if len(stripped) > max_length:
        raise InputValidationError(f"Text cannot exceed {max_length:,} characters")
    return stripped
