import logging
import os
import sys

from tests.fixtures_data import STOREFRONT_ROWS, TEST_AUTH_SECRET, TEST_ENV_SECRET

# Ambiente de teste precisa estar definido antes de qualquer import de app.*
os.environ["NODE_ENV"] = "test"
os.environ["POSTGRESQL_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["FOREST_AUTH_SECRET"] = TEST_AUTH_SECRET
os.environ["FOREST_ENV_SECRET"] = TEST_ENV_SECRET
os.environ["FOREST_SERVER_URL"] = "https://admin-server.test"

import pytest  # noqa: E402

from app.core.database import Base, build_engine  # noqa: E402
from app.core.logging_setup import JsonFormatter, configure_logging  # noqa: E402
from app.models.registry import build_model_registry  # noqa: E402


@pytest.fixture()
def engine():
    test_engine = build_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture()
def registry(engine):
    return build_model_registry(engine)


@pytest.fixture()
def seeded_registry(registry):
    for name, rows in STOREFRONT_ROWS:
        for row in rows:
            registry[name].create(row)
    return registry


class _CurrentStderr:
    """Resolve sys.stderr at write time so capsys (activated after fixture setup) captures output."""

    def write(self, data):
        return sys.stderr.write(data)

    def flush(self):
        sys.stderr.flush()


@pytest.fixture()
def json_logging(capsys):
    root_logger = logging.getLogger()
    saved_level = root_logger.level
    configure_logging("INFO")
    for handler in root_logger.handlers:
        if isinstance(handler.formatter, JsonFormatter) and isinstance(handler, logging.StreamHandler):
            handler.setStream(_CurrentStderr())
    yield
    for handler in list(root_logger.handlers):
        if isinstance(handler.formatter, JsonFormatter):
            root_logger.removeHandler(handler)
    root_logger.setLevel(saved_level)
