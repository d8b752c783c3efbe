"""
Formatting — Группировка разрядов десятичной строки

format_int вставляет разделитель тысяч (апостроф) в десятичную строку,
не создавая числовой объект. Работает только со строкой: вход обычно уже
гарантированно числовой (BoundedInt.string()), но произвольный мусор
отклоняется явной ошибкой.

Примеры:
    "0"        → "0"
    "1234"     → "1'234"
    "-1234567" → "-1'234'567"
    "007"      → "7"
"""

import queue
from contextlib import contextmanager
from typing import Final, Iterator, List

from boundint.core.config import get_settings
from boundint.core.math.errors import EmptyInputError, NonDigitError

# Разделитель тысяч (фиксированный, не зависит от локали)
THOUSAND_SEPARATOR: Final[str] = "'"

_ASCII_DIGITS: Final[frozenset] = frozenset("0123456789")


# =============================================================================
# SCRATCH BUFFER POOL
# =============================================================================


class _BufferPool:
    """
    Пул переиспользуемых буферов (list[str]) для сборки результата.

    Буфер выдаётся эксклюзивно на один вызов и возвращается в пул на любом
    пути выхода, включая исключения. Количество простаивающих буферов
    ограничено format_pool_size из настроек.
    """

    def __init__(self):
        self._idle: "queue.SimpleQueue[List[str]]" = queue.SimpleQueue()

    @contextmanager
    def borrow(self) -> Iterator[List[str]]:
        try:
            buf = self._idle.get_nowait()
        except queue.Empty:
            buf = []
        try:
            yield buf
        finally:
            buf.clear()
            if self._idle.qsize() < get_settings().format_pool_size:
                self._idle.put(buf)

    def idle_count(self) -> int:
        return self._idle.qsize()


_POOL = _BufferPool()


# =============================================================================
# FORMATTER
# =============================================================================


def _has_only_digits(s: str) -> bool:
    return bool(s) and all(ch in _ASCII_DIGITS for ch in s)


def format_int(v: str) -> str:
    """
    Форматирование десятичной строки с разделителем тысяч.

    Алгоритм:
    1. Снять ведущий '-' (запомнить знак)
    2. Снять ведущие нули, оставив минимум одну цифру
    3. Проверить, что остались только ASCII цифры
    4. <= 3 цифр → без изменений
    5. Иначе: первые len % 3 цифр (если есть) + разделитель,
       затем группы по три цифры через разделитель

    Args:
        v: Десятичная строка, например BoundedInt.string()

    Returns:
        Строка с разделителями, например "1'234'567"

    Raises:
        EmptyInputError: Если v пустая
        NonDigitError: Если после снятия знака остались не-цифры
    """
    if not v:
        raise EmptyInputError()

    sign = ""
    if v[0] == "-":
        sign = "-"
        v = v[1:]

    if len(v) > 1:
        v = v.lstrip("0") or "0"

    if not _has_only_digits(v):
        raise NonDigitError(v)

    # 1. Менее 4 цифр форматирования не требуют
    if len(v) <= 3:
        return sign + v

    with _POOL.borrow() as parts:
        # 2. Неполная старшая группа: "12345" → "12'" + "345"
        mod3 = len(v) % 3
        if mod3:
            parts.append(v[:mod3])
            parts.append(THOUSAND_SEPARATOR)
            v = v[mod3:]

        # 3. Остаток кратен трём
        for start in range(0, len(v), 3):
            end = start + 3
            parts.append(v[start:end])
            if end < len(v):
                parts.append(THOUSAND_SEPARATOR)

        return sign + "".join(parts)
