"""
JSON Schema Contract Validators

Проверка моделей леджера против формальных JSON Schema контрактов
(contracts/schema/*.json, Draft 2020-12).

Контракт выбирается по типу модели:
- LedgerSnapshot → ledger_snapshot.json
- TransferEvent  → transfer_event.json
- FeeBreakdown   → fee_breakdown.json

Модель сериализуется в JSON-представление (by_alias: "from"/"to" для
Transfer) и проверяется скомпилированным валидатором. Валидаторы
компилируются один раз на схему.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Type

import jsonschema
from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match
from pydantic import BaseModel

from src.core.domain.events import TransferEvent
from src.core.domain.fee_breakdown import FeeBreakdown
from src.core.domain.ledger_state import LedgerSnapshot

_DEFAULT_SCHEMA_DIR = Path(__file__).resolve().parents[3] / "contracts" / "schema"

# Контракт для каждого типа модели
MODEL_CONTRACTS: Dict[Type[BaseModel], str] = {
    LedgerSnapshot: "ledger_snapshot",
    TransferEvent: "transfer_event",
    FeeBreakdown: "fee_breakdown",
}


# =============================================================================
# SCHEMA REGISTRY
# =============================================================================


class SchemaLoader:
    """
    Реестр схем контрактов.

    Хранит загруженные схемы и скомпилированные валидаторы по имени контракта.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or _DEFAULT_SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._validators: Dict[str, Draft202012Validator] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема контракта по имени (без расширения).

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        return self.validator(schema_name).schema

    def validator(self, schema_name: str) -> Draft202012Validator:
        """Скомпилированный валидатор контракта (кэшируется)."""
        cached = self._validators.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.is_file():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e.message}")

        compiled = Draft202012Validator(schema)
        self._validators[schema_name] = compiled
        return compiled


_REGISTRY = SchemaLoader()


# =============================================================================
# VALIDATION
# =============================================================================


def validate_contract(schema_name: str, data: Dict[str, Any]) -> None:
    """
    Проверка JSON-данных против контракта.

    Raises:
        jsonschema.ValidationError: Первое найденное нарушение контракта
    """
    error = best_match(_REGISTRY.validator(schema_name).iter_errors(data))
    if error is not None:
        raise error


def contract_errors(schema_name: str, data: Dict[str, Any]) -> List[str]:
    """
    Все нарушения контракта в виде "<json path>: <message>".

    Пустой список — данные соответствуют контракту.
    """
    return sorted(
        f"{error.json_path}: {error.message}"
        for error in _REGISTRY.validator(schema_name).iter_errors(data)
    )


def contract_name_for(model: BaseModel) -> str:
    """
    Имя контракта для модели.

    Raises:
        ValueError: Если для типа модели нет контракта
    """
    try:
        return MODEL_CONTRACTS[type(model)]
    except KeyError:
        raise ValueError(f"No JSON contract for {type(model).__name__}")


def validate_model(model: BaseModel) -> Dict[str, Any]:
    """
    Сериализация модели и проверка против её контракта.

    Returns:
        JSON-представление модели, прошедшее проверку

    Raises:
        jsonschema.ValidationError: Если представление нарушает контракт
    """
    data = model.model_dump(mode="json", by_alias=True)
    validate_contract(contract_name_for(model), data)
    return data


def validate_ledger_snapshot(data: Dict[str, Any]) -> None:
    validate_contract("ledger_snapshot", data)


def validate_transfer_event(data: Dict[str, Any]) -> None:
    validate_contract("transfer_event", data)


def validate_fee_breakdown(data: Dict[str, Any]) -> None:
    validate_contract("fee_breakdown", data)
