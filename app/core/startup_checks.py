from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from app.core.config import IS_TEST
from app.models.registry import STOREFRONT_MODELS

logger = logging.getLogger(__name__)
SCHEMA_PREFIX = "[SCHEMA]"


def ensure_storefront_schema(*, engine: Engine) -> None:
    """Confere se as tabelas/colunas declaradas existem no schema real."""
    if IS_TEST:
        logger.info("%s skipped schema check in test environment", SCHEMA_PREFIX)
        return

    with engine.connect() as connection:
        inspector = inspect(connection)
        existing_tables = set(inspector.get_table_names())
        problems: list[str] = []
        for model in STOREFRONT_MODELS.values():
            table = model.__table__
            if table.name not in existing_tables:
                problems.append(table.name)
                continue
            live_columns = {column["name"] for column in inspector.get_columns(table.name)}
            problems.extend(
                f"{table.name}.{column.name}" for column in table.columns if column.name not in live_columns
            )

    if problems:
        logger.critical("%s declared schema not found missing=%s", SCHEMA_PREFIX, ",".join(problems))
        raise RuntimeError(f"Storefront schema mismatch: {', '.join(problems)}")

    logger.info("%s storefront schema verified", SCHEMA_PREFIX)
