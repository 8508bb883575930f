from __future__ import annotations

import hashlib
import json
import platform
from typing import Any, Dict

import httpx

from app.admin_agent.errors import SchemaSyncError

AGENT_NAME = "storefront-admin-agent"
AGENT_VERSION = "1.0.0"

HASHCHECK_PATH = "/forest/apimaps/hashcheck"
APIMAPS_PATH = "/forest/apimaps"


def build_schema_document(collections: list[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "collections": sorted(collections, key=lambda item: item["name"]),
        "meta": {
            "liana": AGENT_NAME,
            "liana_version": AGENT_VERSION,
            "stack": {
                "engine": "python",
                "engine_version": platform.python_version(),
            },
        },
    }


def schema_hash(document: Dict[str, Any]) -> str:
    # engine_version fica fora do hash para não reenviar o schema a cada upgrade do Python
    hashed = {"collections": document["collections"], "liana_version": document["meta"]["liana_version"]}
    raw = json.dumps(hashed, sort_keys=True, separators=(",", ":"))
    return hashlib.sha1(raw.encode("utf-8")).hexdigest()


async def _post(client: httpx.AsyncClient, path: str, env_secret: str, payload: Dict[str, Any]) -> httpx.Response:
    headers = {"forest-secret-key": env_secret, "Content-Type": "application/json"}
    try:
        response = await client.post(path, headers=headers, json=payload)
    except httpx.HTTPError as exc:
        raise SchemaSyncError(f"Admin server unreachable at {path}: {exc}") from exc

    if not 200 <= response.status_code < 300:
        raise SchemaSyncError(
            f"Admin server rejected {path} with status {response.status_code}",
            status_code=response.status_code,
            body_text=response.text,
        )
    return response


async def synchronize_schema(
    client: httpx.AsyncClient,
    *,
    env_secret: str,
    document: Dict[str, Any],
) -> bool:
    """Faz o hashcheck e envia o schema quando o servidor pedir.

    Retorna True quando o schema foi enviado.
    """
    digest = schema_hash(document)
    response = await _post(client, HASHCHECK_PATH, env_secret, {"schemaFileHash": digest})
    try:
        body = response.json()
    except ValueError:
        body = None
    send_schema = isinstance(body, dict) and bool(body.get("sendSchema", False))

    if not send_schema:
        return False

    await _post(client, APIMAPS_PATH, env_secret, {**document, "schemaFileHash": digest})
    return True
