"""
JSON Schema Contract Validators

Снимок состояния калькулятора проверяется по формальному контракту
(JSON Schema Draft 2020-12) до того, как из него строится CalculatorState.

Схемы лежат в каталоге schema/ рядом с модулем (package data):
- calculator_state.json: {schema_version, base, digits, angle_mode, history}

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Схема мета-валидируется при первой загрузке; битая схема -> ValueError
2. Загруженные схемы кэшируются на экземпляр SchemaLoader
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from jsonschema.exceptions import best_match

SCHEMA_SUFFIX = ".json"
STATE_SCHEMA_NAME = "calculator_state"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Чтение схем из каталога с кэшем и мета-валидацией."""

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._cache: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Raises:
            FileNotFoundError: Файла схемы нет
            ValueError: Файл не является корректной JSON Schema
        """
        cached = self._cache.get(schema_name)
        if cached is not None:
            return cached

        path = self._schema_dir / f"{schema_name}{SCHEMA_SUFFIX}"
        if not path.is_file():
            raise FileNotFoundError(f"Schema not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {path.name}: {e.message}") from e

        self._cache[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


def error_path(error: ValidationError) -> str:
    """Путь до нарушения в виде 'history/0/re/digits' ('<root>' для корня)."""
    return "/".join(str(part) for part in error.absolute_path) or "<root>"


class ContractValidator:
    """Проверка документов по одной именованной схеме."""

    def __init__(self, schema_name: str, loader: Optional[SchemaLoader] = None):
        self.schema_name = schema_name
        self.schema = (loader or _SCHEMA_LOADER).load_schema(schema_name)
        self._validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Raises:
            ValidationError: Первое (наиболее значимое) нарушение контракта
        """
        error = best_match(self._validator.iter_errors(data))
        if error is not None:
            raise error

    def describe_errors(self, data: Any) -> List[str]:
        """Все нарушения строками 'путь: сообщение', упорядоченными по пути."""
        errors = sorted(self._validator.iter_errors(data), key=lambda e: list(map(str, e.absolute_path)))
        return [f"{error_path(error)}: {error.message}" for error in errors]


class StateSnapshotValidator(ContractValidator):
    """Контракт снимка CalculatorState."""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        super().__init__(STATE_SCHEMA_NAME, loader)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_state_snapshot(data: Any) -> None:
    """
    Raises:
        ValidationError: Снимок не соответствует контракту calculator_state
    """
    StateSnapshotValidator().validate(data)


def describe_state_snapshot_errors(data: Any) -> List[str]:
    """Пустой список, если снимок соответствует контракту."""
    return StateSnapshotValidator().describe_errors(data)
