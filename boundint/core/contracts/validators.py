"""
JSON Schema Contract Validators

Модуль для валидации JSON представлений BoundedInt и моделей, которые его
переносят. Использует библиотеку jsonschema (Draft 2020-12).

Схемы:
- bounded_int.json: каноническая десятичная JSON строка
- coin.json: {"denom": ..., "amount": <bounded_int>}

Схема проверяет только форму записи. Диапазон (MAX_BIT_LEN) проверяется
кодеками при декодировании.
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются вместе с пакетом в contracts/schema/.
    """

    def __init__(self):
        self._schema_dir = Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'bounded_int')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any):
        return self.validator.iter_errors(data)


class BoundedIntValidator(ContractValidator):
    """Валидатор JSON представления BoundedInt."""

    def __init__(self):
        super().__init__("bounded_int")


class CoinValidator(ContractValidator):
    """Валидатор для coin контракта."""

    def __init__(self):
        super().__init__("coin")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_bounded_int(data: Any) -> None:
    """
    Валидация JSON значения BoundedInt (уже разобранного json.loads).

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    BoundedIntValidator().validate(data)


def validate_coin(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    CoinValidator().validate(data)
