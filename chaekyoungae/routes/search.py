from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, Response

from chaekyoungae.application import SearchService
from chaekyoungae.core.errors import ClientError, SearchError, UpstreamError

router = APIRouter(tags=["search"])


def get_search_service(request: Request) -> SearchService:
    """Return the service instance built at application start-up."""

    return request.app.state.search_service


@router.get("/search")
async def search_work(
    q: str | None = Query(default=None),
    service: SearchService = Depends(get_search_service),
) -> dict:
    """Classify a title and recommend a reading/viewing order."""
    if not q:
        raise ClientError("Query parameter required")

    try:
        result = await service.search(q)
    except SearchError:
        raise
    except Exception as exc:
        raise UpstreamError(str(exc)) from exc
    return result.to_payload()


@router.options("/search", include_in_schema=False)
async def search_preflight() -> Response:
    return Response(status_code=200)
