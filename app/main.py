import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from app.admin_agent import SqlAlchemyDatasource, create_agent
from app.core.config import (
    FOREST_AUTH_SECRET,
    FOREST_ENV_SECRET,
    FOREST_HEARTBEAT_SECONDS,
    FOREST_LOGGER_LEVEL,
    FOREST_SERVER_URL,
    HOST,
    IS_PRODUCTION,
    PORT,
)
from app.core.database import engine
from app.core.logging_setup import configure_logging
from app.core.shutdown import install_interrupt_handler
from app.core.startup_checks import ensure_storefront_schema
from app.middleware.observability import ObservabilityMiddleware
from app.models.registry import build_model_registry

configure_logging()

logger = logging.getLogger(__name__)
AGENT_NAME = "forest-admin"

logger.info("Booting %s agent", AGENT_NAME)


def _startup_tasks() -> None:
    ensure_storefront_schema(engine=engine)


@asynccontextmanager
async def lifespan(_: FastAPI):
    install_interrupt_handler(HOST, PORT)
    try:
        _startup_tasks()
        await agent.start()
    except Exception:
        logger.exception("startup failed")
        raise
    logger.info("Running on http://%s:%s", HOST, PORT)
    try:
        yield
    finally:
        await agent.stop()


app = FastAPI(title="Storefront Admin", lifespan=lifespan)

registry = build_model_registry(engine)

# O agente precisa ser montado ANTES de qualquer outra rota da app
agent = (
    create_agent(
        auth_secret=FOREST_AUTH_SECRET,
        env_secret=FOREST_ENV_SECRET,
        is_production=IS_PRODUCTION,
        logger_level=FOREST_LOGGER_LEVEL,
        server_url=FOREST_SERVER_URL,
        heartbeat_interval=FOREST_HEARTBEAT_SECONDS,
    )
    .add_datasource(SqlAlchemyDatasource(registry))
    .mount_on_fastapi(app)
)

app.add_middleware(ObservabilityMiddleware)


# Healthcheck para o load balancer
@app.get("/", response_class=PlainTextResponse)
def root():
    return "ping"
