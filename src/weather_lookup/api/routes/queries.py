from typing import Any, Dict, Union

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response

from src.weather_lookup.api.dependencies import ServiceContainer, get_services
from src.weather_lookup.api.responses import handle_error
from src.weather_lookup.exceptions import ValidationError
from src.weather_lookup.schemas.saved_query import (
    SavedQueryCreate,
    SavedQueryOut,
    SavedQuerySummary,
    SavedQueryUpdate,
    dump_camel,
)
from src.weather_lookup.services.export_service import (
    export_query,
    validate_export_format,
)

router = APIRouter(prefix="/queries", tags=["queries"])

QUERY_NOT_FOUND = "Query not found"

QueryResponse = Union[Dict[str, Any], JSONResponse]


def parse_query_id(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValidationError("Invalid query ID") from None


@router.get("", response_model=None)
async def list_queries(
    services: ServiceContainer = Depends(get_services),
) -> QueryResponse:
    try:
        records = await services.store.list_queries()
        return {
            "success": True,
            "queries": [
                dump_camel(SavedQuerySummary.model_validate(r))
                for r in records
            ],
        }
    except Exception as e:
        return handle_error(e, "Failed to fetch saved queries")


@router.post("", response_model=None)
async def create_query(
    body: SavedQueryCreate,
    services: ServiceContainer = Depends(get_services),
) -> QueryResponse:
    try:
        record = await services.store.create_query(body.model_dump())
        return {
            "success": True,
            "query": dump_camel(SavedQueryOut.model_validate(record)),
        }
    except Exception as e:
        return handle_error(e, "Failed to save query")


@router.get("/{query_id}", response_model=None)
async def get_query(
    query_id: str, services: ServiceContainer = Depends(get_services)
) -> QueryResponse:
    try:
        record = await services.store.get_query(parse_query_id(query_id))
        return {
            "success": True,
            "query": dump_camel(SavedQueryOut.model_validate(record)),
        }
    except Exception as e:
        return handle_error(e, "Failed to fetch query", QUERY_NOT_FOUND)


@router.put("/{query_id}", response_model=None)
async def update_query(
    query_id: str,
    body: SavedQueryUpdate,
    services: ServiceContainer = Depends(get_services),
) -> QueryResponse:
    try:
        record = await services.store.update_label(
            parse_query_id(query_id), body.label
        )
        return {
            "success": True,
            "query": dump_camel(SavedQueryOut.model_validate(record)),
        }
    except Exception as e:
        return handle_error(e, "Failed to update query", QUERY_NOT_FOUND)


@router.delete("/{query_id}", response_model=None)
async def delete_query(
    query_id: str, services: ServiceContainer = Depends(get_services)
) -> QueryResponse:
    try:
        await services.store.delete_query(parse_query_id(query_id))
        return {"success": True, "message": "Query deleted successfully"}
    except Exception as e:
        return handle_error(e, "Failed to delete query", QUERY_NOT_FOUND)


@router.get("/{query_id}/export", response_model=None)
async def export(
    query_id: str,
    format: str = Query(default="json"),
    services: ServiceContainer = Depends(get_services),
) -> Response:
    """Download a saved query as a JSON or CSV attachment."""
    try:
        qid = parse_query_id(query_id)
        fmt = validate_export_format(format)
        record = await services.store.get_query(qid)
        exported = export_query(record, fmt)
        return Response(
            content=exported.content,
            media_type=exported.media_type,
            headers={
                "Content-Disposition": (
                    f'attachment; filename="{exported.filename}"'
                )
            },
        )
    except Exception as e:
        return handle_error(e, "Failed to export query", QUERY_NOT_FOUND)
