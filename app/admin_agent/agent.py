from __future__ import annotations

import asyncio
from typing import Any, Dict, Mapping, Optional

import httpx
from fastapi import FastAPI
from fastapi.routing import APIRoute
from pydantic import ValidationError

from app.admin_agent.datasource import Collection, SqlAlchemyDatasource
from app.admin_agent.errors import AgentConfigurationError, AgentStartupError, SchemaSyncError
from app.admin_agent.options import AgentLogger, AgentOptions
from app.admin_agent.routes import build_router
from app.admin_agent.sync import build_schema_document, synchronize_schema

# Rotas que o FastAPI registra sozinho (docs/openapi)
_FRAMEWORK_PATHS = {"/openapi.json", "/docs", "/docs/oauth2-redirect", "/redoc"}


class AdminAgent:
    """Agente do painel admin acoplado a uma app FastAPI.

    Uso::

        agent = create_agent(options)
        agent.add_datasource(SqlAlchemyDatasource(registry)).mount_on_fastapi(app)
        await agent.start()  # no lifespan da app
    """

    def __init__(self, options: AgentOptions) -> None:
        self.options = options
        self.log = AgentLogger(options)
        self.collections: Dict[str, Collection] = {}
        self._datasources: list[SqlAlchemyDatasource] = []
        self._app: Optional[FastAPI] = None
        self._client: Optional[httpx.AsyncClient] = None
        self._heartbeat_task: Optional[asyncio.Task] = None

    @property
    def is_mounted(self) -> bool:
        return self._app is not None

    @property
    def is_running(self) -> bool:
        return self._heartbeat_task is not None and not self._heartbeat_task.done()

    def add_datasource(self, datasource: SqlAlchemyDatasource) -> "AdminAgent":
        duplicated = sorted(set(datasource.collections) & set(self.collections))
        if duplicated:
            raise AgentConfigurationError(f"Collections already registered: {', '.join(duplicated)}")
        self._datasources.append(datasource)
        self.collections.update(datasource.collections)
        self.log("Debug", f"datasource added collections={','.join(datasource.collections)}")
        return self

    def mount_on_fastapi(self, app: FastAPI) -> "AdminAgent":
        if self._app is not None:
            raise AgentConfigurationError("Agent is already mounted")
        earlier = [
            route.path
            for route in app.router.routes
            if isinstance(route, APIRoute) and route.path not in _FRAMEWORK_PATHS
        ]
        if earlier:
            self.log(
                "Warn",
                f"agent mounted after {len(earlier)} route(s); they take precedence over {self.options.prefix}",
            )
        app.include_router(build_router(self))
        self._app = app
        self.log("Info", f"agent mounted on {self.options.prefix}")
        return self

    def schema(self) -> Dict[str, Any]:
        collections = [schema for datasource in self._datasources for schema in datasource.schema()]
        return build_schema_document(collections)

    async def start(self) -> None:
        if self.is_running:
            return
        if not self.is_mounted:
            self.log("Warn", "agent started without being mounted on an app")

        self._client = httpx.AsyncClient(
            base_url=self.options.server_url,
            timeout=self.options.http_timeout,
            transport=self.options.http_transport,
        )
        try:
            sent = await synchronize_schema(
                self._client,
                env_secret=self.options.env_secret,
                document=self.schema(),
            )
        except SchemaSyncError as exc:
            self.log("Error", f"agent startup failed: {exc}")
            await self._close_client()
            raise AgentStartupError(str(exc)) from exc

        self.log("Info", "schema sent to admin server" if sent else "schema already up to date")
        self._heartbeat_task = asyncio.create_task(self._heartbeat())
        self.log(
            "Info",
            f"agent started production={self.options.is_production} collections={len(self.collections)}",
        )

    async def stop(self) -> None:
        task, self._heartbeat_task = self._heartbeat_task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        await self._close_client()
        self.log("Debug", "agent stopped")

    async def _close_client(self) -> None:
        client, self._client = self._client, None
        if client is not None:
            await client.aclose()

    async def _heartbeat(self) -> None:
        while True:
            await asyncio.sleep(self.options.heartbeat_interval)
            try:
                sent = await synchronize_schema(
                    self._client,
                    env_secret=self.options.env_secret,
                    document=self.schema(),
                )
            except SchemaSyncError as exc:
                # sem retry aqui: a próxima batida tenta de novo
                self.log("Warn", f"heartbeat failed: {exc}")
                continue
            except Exception as exc:
                self.log("Error", f"heartbeat error: {exc!r}")
                continue
            self.log("Debug", "heartbeat schema sent" if sent else "heartbeat ok")


def create_agent(options: AgentOptions | Mapping[str, Any] | None = None, **kwargs: Any) -> AdminAgent:
    """Valida as opções e cria o agente; segredos ausentes interrompem o boot."""
    if isinstance(options, AgentOptions):
        if not kwargs:
            return AdminAgent(options)
        options = options.model_dump()
    try:
        validated = AgentOptions(**{**dict(options or {}), **kwargs})
    except ValidationError as exc:
        fields = sorted({".".join(str(part) for part in error["loc"]) for error in exc.errors()})
        raise AgentConfigurationError(f"Invalid admin agent options: {', '.join(fields)}") from exc
    return AdminAgent(validated)
