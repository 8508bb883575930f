from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.exc import DataError, IntegrityError

from app.admin_agent.auth import admin_user_dependency
from app.admin_agent.datasource import Collection

if TYPE_CHECKING:
    from app.admin_agent.agent import AdminAgent

FILTER_PARAM = re.compile(r"^filter\[(?P<field>[A-Za-z0-9_]+)\]$")
DEFAULT_PAGE_SIZE = 15
MAX_PAGE_SIZE = 100
MAX_PAGE_NUMBER = 1_000_000


def _extract_filters(request: Request) -> Dict[str, str]:
    filters: Dict[str, str] = {}
    for key, value in request.query_params.multi_items():
        match = FILTER_PARAM.match(key)
        if match:
            filters[match.group("field")] = value
    return filters


def _parse_page_param(name: str, raw: str, upper: int) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid {name}: {raw!r}") from exc
    if not 1 <= value <= upper:
        raise ValueError(f"{name} must be between 1 and {upper}")
    return value


def _extract_attributes(payload: Dict[str, Any]) -> Dict[str, Any]:
    # Aceita o formato JSON:API do painel ({"data": {"attributes": {...}}}) ou um objeto plano
    data = payload.get("data")
    if isinstance(data, dict) and isinstance(data.get("attributes"), dict):
        return data["attributes"]
    return payload


def build_router(agent: "AdminAgent") -> APIRouter:
    router = APIRouter(prefix=agent.options.prefix, tags=["admin-agent"])
    require_admin = admin_user_dependency(agent.options.auth_secret)

    def _collection(name: str) -> Collection:
        collection = agent.collections.get(name)
        if collection is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Coleção não encontrada")
        return collection

    def _run(operation, *args):
        try:
            return operation(*args)
        except LookupError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
        except (ValueError, OverflowError) as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
        except DataError as exc:
            agent.log("Warn", f"value rejected by database: {exc.orig}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Valor inválido para a coluna",
            ) from exc
        except IntegrityError as exc:
            agent.log("Warn", f"integrity violation: {exc.orig}")
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Violação de integridade (chave estrangeira ou única)",
            ) from exc

    @router.get("", status_code=status.HTTP_204_NO_CONTENT)
    def agent_healthcheck():
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.get("/{collection_name}")
    def list_records(
        collection_name: str,
        request: Request,
        raw_page_number: str = Query("1", alias="page[number]"),
        raw_page_size: str = Query(str(DEFAULT_PAGE_SIZE), alias="page[size]"),
        sort: str | None = Query(None),
        _admin: Dict[str, Any] = Depends(require_admin),
    ):
        collection = _collection(collection_name)
        page_number = _run(_parse_page_param, "page[number]", raw_page_number, MAX_PAGE_NUMBER)
        page_size = _run(_parse_page_param, "page[size]", raw_page_size, MAX_PAGE_SIZE)
        sort_fields = [item.strip() for item in sort.split(",") if item.strip()] if sort else None
        records = _run(collection.list, _extract_filters(request), sort_fields, page_number, page_size)
        return {"data": records, "page": {"number": page_number, "size": page_size}}

    @router.get("/{collection_name}/count")
    def count_records(
        collection_name: str,
        request: Request,
        _admin: Dict[str, Any] = Depends(require_admin),
    ):
        collection = _collection(collection_name)
        return {"count": _run(collection.count, _extract_filters(request))}

    @router.get("/{collection_name}/{record_id}")
    def get_record(
        collection_name: str,
        record_id: str,
        _admin: Dict[str, Any] = Depends(require_admin),
    ):
        collection = _collection(collection_name)
        record = _run(collection.get, record_id)
        if record is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Registro não encontrado")
        return {"data": record}

    @router.post("/{collection_name}", status_code=status.HTTP_201_CREATED)
    def create_record(
        collection_name: str,
        payload: Dict[str, Any] = Body(...),
        admin: Dict[str, Any] = Depends(require_admin),
    ):
        collection = _collection(collection_name)
        record = _run(collection.create, _extract_attributes(payload))
        agent.log("Info", f"{admin.get('email')} created {collection_name} {record.get(collection.primary_key)}")
        return {"data": record}

    @router.put("/{collection_name}/{record_id}")
    def update_record(
        collection_name: str,
        record_id: str,
        payload: Dict[str, Any] = Body(...),
        admin: Dict[str, Any] = Depends(require_admin),
    ):
        collection = _collection(collection_name)
        record = _run(collection.update, record_id, _extract_attributes(payload))
        if record is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Registro não encontrado")
        agent.log("Info", f"{admin.get('email')} updated {collection_name} {record_id}")
        return {"data": record}

    @router.delete("/{collection_name}/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_record(
        collection_name: str,
        record_id: str,
        admin: Dict[str, Any] = Depends(require_admin),
    ):
        collection = _collection(collection_name)
        if not _run(collection.delete, record_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Registro não encontrado")
        agent.log("Info", f"{admin.get('email')} deleted {collection_name} {record_id}")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.get("/{collection_name}/{record_id}/relationships/{relation}")
    def related_records(
        collection_name: str,
        record_id: str,
        relation: str,
        _admin: Dict[str, Any] = Depends(require_admin),
    ):
        collection = _collection(collection_name)
        return _run(collection.related, record_id, relation)

    return router
