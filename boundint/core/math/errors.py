"""
Errors — Иерархия ошибок для BoundedInt

Две параллельные модели ошибок:
- Recoverable (checked): BoundedIntError и наследники. Возвращаются из
  checked_* операций или выбрасываются декодерами. Вызывающий код,
  валидирующий внешние данные, обязан обрабатывать именно их.
- Fatal (unchecked): InvariantViolation. Нарушение контракта программистом,
  не предназначено для перехвата в бизнес-логике.

Ошибки форматтера (FormatError) независимы от целочисленного типа.
"""

from typing import Optional


# =============================================================================
# RECOVERABLE ERRORS
# =============================================================================


class BoundedIntError(ArithmeticError):
    """Базовый класс recoverable ошибок BoundedInt."""


class IntOverflowError(BoundedIntError):
    """Результат add/sub/mul/scale выходит за MAX_BIT_LEN."""

    def __init__(self, message: str = "integer overflow"):
        super().__init__(message)


class DivideByZeroError(BoundedIntError, ZeroDivisionError):
    """Нулевой делитель в quo/mod."""

    def __init__(self, message: str = "divide by zero"):
        super().__init__(message)


class IntParseError(BoundedIntError, ValueError):
    """
    Текст не является корректной десятичной записью целого.

    Attributes:
        text: Исходный текст (как был получен декодером)
    """

    def __init__(self, text: str, reason: Optional[str] = None):
        self.text = text
        message = f"invalid integer text: {text!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class IntOutOfRangeError(BoundedIntError, ValueError):
    """
    Корректно записанное целое, но по модулю шире MAX_BIT_LEN.

    Attributes:
        text: Исходный текст
        bit_len: Фактическая битовая длина (или её нижняя граница)
        max_bit_len: Допустимый максимум
        bit_len_is_lower_bound: True если запись слишком длинная для точного
            разбора и bit_len только нижняя граница
    """

    def __init__(
        self,
        message: str,
        text: str,
        bit_len: int,
        max_bit_len: int,
        bit_len_is_lower_bound: bool = False,
    ):
        self.text = text
        self.bit_len = bit_len
        self.max_bit_len = max_bit_len
        self.bit_len_is_lower_bound = bit_len_is_lower_bound
        super().__init__(message)


# =============================================================================
# FATAL ERRORS
# =============================================================================


class InvariantViolation(RuntimeError):
    """
    Критическое нарушение инварианта на unchecked пути.

    Выбрасывается unchecked операциями (add, sub, mul, quo, mod, to_int64, ...)
    и aborting-конструкторами (from_big_int, from_scaled_int64, ...).
    Исходная recoverable ошибка (если есть) доступна через __cause__.

    Attributes:
        operation: Имя операции, нарушившей инвариант
    """

    def __init__(self, operation: str, detail: str):
        self.operation = operation
        super().__init__(f"{operation}: {detail}")


# =============================================================================
# FORMATTER ERRORS
# =============================================================================


class FormatError(ValueError):
    """Базовый класс ошибок format_int."""


class EmptyInputError(FormatError):
    """Пустая строка на входе форматтера."""

    def __init__(self):
        super().__init__("cannot format empty string")


class NonDigitError(FormatError):
    """После снятия знака и ведущих нулей остались не-цифры."""

    def __init__(self, digits: str):
        self.digits = digits
        super().__init__(f"expecting only digits 0-9, but got non-digits in {digits!r}")
