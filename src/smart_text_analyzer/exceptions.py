"""
Исключения каскада анализа.

Всё, что наследует AnalysisFallback, - не ошибка для пользователя, а сигнал
пайплайну перейти к следующей стадии. Ядро наружу их не выпускает.
"""


class AnalysisFallback(Exception):
    """Стадия не дала результата, пайплайн переходит к следующей."""
    pass


class RemoteUnavailable(AnalysisFallback):
    """Удалённый инференс недоступен: нет ключа, сеть, таймаут, кривой ответ."""
    pass


class NoLexicalSignal(AnalysisFallback):
    """Ни одного совпадения со словарями (или ни одного кандидата в ключевые слова)."""
    pass


class StageNotApplicable(AnalysisFallback):
    """Предусловия стадии не выполнены (например, текст длиннее порога verbatim)."""
    pass


class EmptyInput(AnalysisFallback):
    """Во входном тексте нет ни одного слова."""
    pass


class InputValidationError(ValueError):
    """Ошибка валидации ввода во внешнем слое (CLI); ядро её не бросает."""
    pass
