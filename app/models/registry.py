from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any, Iterable

from sqlalchemy import func, inspect, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import RelationshipProperty, Session, sessionmaker

from app.core.database import Base
from app.models import Address, City, Country, Customer, Payment, Staff

logger = logging.getLogger(__name__)

STOREFRONT_MODELS: dict[str, type[Base]] = {
    "country": Country,
    "city": City,
    "address": Address,
    "customer": Customer,
    "staff": Staff,
    "payment": Payment,
}


class ModelAccessor:
    """Leitura/escrita de uma entidade do storefront.

    Cada operação abre a própria sessão; os objetos retornados ficam
    desanexados, com as colunas já carregadas.
    """

    def __init__(self, name: str, model: type[Base], session_factory: sessionmaker) -> None:
        self.name = name
        self.model = model
        self._session_factory = session_factory
        mapper = inspect(model)
        self.columns = {column.key: column for column in mapper.columns}
        self.relationships: dict[str, RelationshipProperty] = {rel.key: rel for rel in mapper.relationships}
        self.primary_key = mapper.primary_key[0]

    def __repr__(self) -> str:
        return f"ModelAccessor({self.name!r})"

    def _ensure_fields(self, fields: Iterable[str]) -> None:
        unknown = sorted(set(fields) - set(self.columns))
        if unknown:
            raise ValueError(f"Unknown field(s) for {self.name}: {', '.join(unknown)}")

    def _apply_filters(self, stmt, filters: Mapping[str, Any] | None):
        if not filters:
            return stmt
        self._ensure_fields(filters)
        for field, value in filters.items():
            column = getattr(self.model, field)
            stmt = stmt.where(column.is_(None) if value is None else column == value)
        return stmt

    def _order_clauses(self, order_by: Iterable[str] | None) -> list:
        clauses = []
        for raw in order_by or ():
            descending = raw.startswith("-")
            field = raw.lstrip("-")
            self._ensure_fields([field])
            column = getattr(self.model, field)
            clauses.append(column.desc() if descending else column.asc())
        if not clauses:
            clauses.append(getattr(self.model, self.primary_key.key).asc())
        return clauses

    def get(self, pk: Any) -> Base | None:
        with self._session_factory() as session:
            return session.get(self.model, pk)

    def list(
        self,
        filters: Mapping[str, Any] | None = None,
        order_by: Iterable[str] | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Base]:
        stmt = self._apply_filters(select(self.model), filters)
        stmt = stmt.order_by(*self._order_clauses(order_by)).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        with self._session_factory() as session:
            return list(session.scalars(stmt).all())

    def count(self, filters: Mapping[str, Any] | None = None) -> int:
        stmt = self._apply_filters(select(func.count()).select_from(self.model), filters)
        with self._session_factory() as session:
            return int(session.scalar(stmt) or 0)

    def create(self, values: Mapping[str, Any]) -> Base:
        self._ensure_fields(values)
        instance = self.model(**values)
        with self._session_factory() as session:
            session.add(instance)
            session.commit()
            session.refresh(instance)
        logger.info("created %s pk=%s", self.name, getattr(instance, self.primary_key.key))
        return instance

    def update(self, pk: Any, values: Mapping[str, Any]) -> Base | None:
        self._ensure_fields(values)
        if self.primary_key.key in values:
            raise ValueError(f"Primary key of {self.name} cannot be updated")
        with self._session_factory() as session:
            instance = session.get(self.model, pk)
            if instance is None:
                return None
            for field, value in values.items():
                setattr(instance, field, value)
            session.commit()
            session.refresh(instance)
        logger.info("updated %s pk=%s fields=%s", self.name, pk, ",".join(sorted(values)))
        return instance

    def delete(self, pk: Any) -> bool:
        with self._session_factory() as session:
            instance = session.get(self.model, pk)
            if instance is None:
                return False
            session.delete(instance)
            session.commit()
        logger.info("deleted %s pk=%s", self.name, pk)
        return True

    def related(self, pk: Any, relation: str) -> Base | list[Base] | None:
        """Segue uma associação a partir da linha ``pk``.

        Many-to-one retorna a linha referenciada (ou None); one-to-many
        retorna a lista de linhas que apontam para ``pk``.
        """
        if relation not in self.relationships:
            raise ValueError(f"Unknown relation for {self.name}: {relation}")
        with self._session_factory() as session:
            instance = session.get(self.model, pk)
            if instance is None:
                raise LookupError(f"{self.name} {pk} not found")
            value = getattr(instance, relation)
            if isinstance(value, list):
                return list(value)
            return value


class ModelRegistry(Mapping[str, ModelAccessor]):
    def __init__(self, accessors: dict[str, ModelAccessor]) -> None:
        self._accessors = accessors

    def __getitem__(self, name: str) -> ModelAccessor:
        return self._accessors[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._accessors)

    def __len__(self) -> int:
        return len(self._accessors)

    def name_for_model(self, model: type[Base]) -> str | None:
        for name, accessor in self._accessors.items():
            if accessor.model is model:
                return name
        return None


def build_model_registry(engine: Engine) -> ModelRegistry:
    session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, class_=Session)
    accessors = {
        name: ModelAccessor(name, model, session_factory)
        for name, model in STOREFRONT_MODELS.items()
    }
    logger.info("model registry built entities=%s", ",".join(accessors))
    return ModelRegistry(accessors)
