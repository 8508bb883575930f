from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Mapping, Optional

from fastapi.encoders import jsonable_encoder
from sqlalchemy import Column, inspect
from sqlalchemy.orm.interfaces import MANYTOONE

from app.models.registry import ModelAccessor, ModelRegistry

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _field_type(column: Column) -> str:
    python_type = column.type.python_type
    if python_type is bool:
        return "Boolean"
    if python_type in (int, float, Decimal):
        return "Number"
    if python_type is datetime:
        return "Date"
    if python_type is date:
        return "Dateonly"
    return "String"


def _is_required(column: Column) -> bool:
    if column.nullable or column.primary_key:
        return False
    return column.default is None and column.server_default is None


def _check_numeric_range(column: Column, number: Decimal) -> None:
    precision = getattr(column.type, "precision", None)
    scale = getattr(column.type, "scale", None) or 0
    if precision is None:
        return
    # numeric(p, s) guarda no máximo p - s dígitos inteiros
    limit = Decimal(10) ** (precision - scale)
    if abs(number) >= limit or abs(number.quantize(Decimal(1).scaleb(-scale))) >= limit:
        raise ValueError(f"Number out of range for {column.key}: {number}")


def coerce_value(column: Column, raw: Any) -> Any:
    """Converte valores vindos de query string/JSON para o tipo da coluna."""
    if raw is None:
        return None
    python_type = column.type.python_type
    label = column.key
    if isinstance(raw, (list, dict)):
        raise ValueError(f"Invalid value for {label}: {raw!r}")

    if python_type is bool:
        if isinstance(raw, bool):
            return raw
        normalized = str(raw).strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False
        raise ValueError(f"Invalid boolean for {label}: {raw!r}")

    if python_type is datetime:
        if isinstance(raw, datetime):
            return raw
        return datetime.fromisoformat(str(raw))

    if python_type is date:
        if isinstance(raw, date) and not isinstance(raw, datetime):
            return raw
        return date.fromisoformat(str(raw))

    if python_type is Decimal:
        try:
            number = Decimal(str(raw))
        except InvalidOperation as exc:
            raise ValueError(f"Invalid number for {label}: {raw!r}") from exc
        if not number.is_finite():
            raise ValueError(f"Invalid number for {label}: {raw!r}")
        _check_numeric_range(column, number)
        return number

    if python_type is int:
        if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
            raise ValueError(f"Invalid integer for {label}: {raw!r}")
        try:
            return int(str(raw).strip()) if isinstance(raw, str) else int(raw)
        except (TypeError, ValueError, OverflowError) as exc:
            raise ValueError(f"Invalid integer for {label}: {raw!r}") from exc

    return python_type(raw)


def serialize_row(row: Any) -> Dict[str, Any]:
    mapper = inspect(row).mapper
    return {attr.key: jsonable_encoder(getattr(row, attr.key)) for attr in mapper.column_attrs}


class Collection:
    def __init__(self, name: str, accessor: ModelAccessor, registry: ModelRegistry) -> None:
        self.name = name
        self.accessor = accessor
        self._registry = registry

    @property
    def primary_key(self) -> str:
        return self.accessor.primary_key.key

    def _column(self, field: str) -> Column:
        column = self.accessor.columns.get(field)
        if column is None:
            raise ValueError(f"Unknown field for {self.name}: {field}")
        return column

    def coerce_id(self, raw: Any) -> Any:
        return coerce_value(self.accessor.primary_key, raw)

    def coerce_values(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        return {field: coerce_value(self._column(field), raw) for field, raw in values.items()}

    def schema(self) -> Dict[str, Any]:
        fields = []
        for column in self.accessor.columns.values():
            reference = None
            for fk in column.foreign_keys:
                reference = f"{fk.column.table.name}.{fk.column.name}"
            fields.append(
                {
                    "field": column.key,
                    "type": _field_type(column),
                    "isPrimaryKey": bool(column.primary_key),
                    "isRequired": _is_required(column),
                    "reference": reference,
                }
            )

        relations = []
        for key, rel in sorted(self.accessor.relationships.items()):
            many_to_one = rel.direction is MANYTOONE
            fk_columns = rel.local_columns if many_to_one else rel.remote_side
            relations.append(
                {
                    "field": key,
                    "type": "ManyToOne" if many_to_one else "OneToMany",
                    "target": self._registry.name_for_model(rel.mapper.class_),
                    "foreignKey": sorted(column.key for column in fk_columns)[0],
                }
            )

        return {
            "name": self.name,
            "primaryKey": self.primary_key,
            "fields": fields,
            "relations": relations,
        }

    def list(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        sort: Optional[Iterable[str]] = None,
        page_number: int = 1,
        page_size: int = 15,
    ) -> List[Dict[str, Any]]:
        typed_filters = self.coerce_values(filters or {})
        rows = self.accessor.list(
            typed_filters,
            order_by=sort,
            offset=(page_number - 1) * page_size,
            limit=page_size,
        )
        return [serialize_row(row) for row in rows]

    def count(self, filters: Optional[Mapping[str, Any]] = None) -> int:
        return self.accessor.count(self.coerce_values(filters or {}))

    def get(self, record_id: Any) -> Optional[Dict[str, Any]]:
        row = self.accessor.get(self.coerce_id(record_id))
        return serialize_row(row) if row is not None else None

    def create(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        return serialize_row(self.accessor.create(self.coerce_values(values)))

    def update(self, record_id: Any, values: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        row = self.accessor.update(self.coerce_id(record_id), self.coerce_values(values))
        return serialize_row(row) if row is not None else None

    def delete(self, record_id: Any) -> bool:
        return self.accessor.delete(self.coerce_id(record_id))

    def related(self, record_id: Any, relation: str) -> Dict[str, Any]:
        value = self.accessor.related(self.coerce_id(record_id), relation)
        if isinstance(value, list):
            return {"data": [serialize_row(row) for row in value], "count": len(value)}
        return {"data": serialize_row(value) if value is not None else None}


class SqlAlchemyDatasource:
    """Expõe as entidades do registry como coleções para o agente admin."""

    def __init__(self, registry: ModelRegistry) -> None:
        self.registry = registry
        self.collections: Dict[str, Collection] = {
            name: Collection(name, accessor, registry) for name, accessor in registry.items()
        }

    def schema(self) -> List[Dict[str, Any]]:
        return [collection.schema() for collection in self.collections.values()]
