"""
Общие функции для карт оценок: нормализация к 100 и выбор метки.
"""

from typing import Dict, Mapping, Optional, Sequence


def pick_label(scores: Mapping[str, float], priority: Sequence[str]) -> str:
    """
    Возвращает категорию с максимальной оценкой.

    При равенстве побеждает категория, стоящая раньше в priority.

    Args:
        scores: Категория → оценка
        priority: Порядок разрешения ничьих

    Returns:
        Имя категории
    """
    candidates = [label for label in priority if label in scores]
    if not candidates:
        raise ValueError("Нет категорий для выбора метки")
    best = max(scores[label] for label in candidates)
    return next(label for label in candidates if scores[label] == best)


def normalize_distribution(scores: Mapping[str, float],
                           priority: Optional[Sequence[str]] = None,
                           decimals: int = 2) -> Dict[str, float]:
    """
    Переводит оценки в проценты, сумма которых ровно 100.

    Остаток округления добавляется к победившей категории, поэтому
    округлённые значения в сумме дают 100 (с точностью до 0.01).

    Args:
        scores: Категория → неотрицательная оценка
        priority: Порядок разрешения ничьих (по умолчанию - порядок scores)
        decimals: Знаков после запятой

    Returns:
        Категория → процент; нули для всех категорий, если сумма оценок 0
    """
    total = sum(scores.values())
    if total <= 0:
        return {label: 0.0 for label in scores}

    normalized = {label: round(value / total * 100, decimals) for label, value in scores.items()}
    residual = round(100 - sum(normalized.values()), decimals)
    if residual:
        target = pick_label(scores, priority or list(scores))
        normalized[target] = round(normalized[target] + residual, decimals)
    return normalized


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))
