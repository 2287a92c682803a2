"""
감사 이벤트 API 라우터

GET /api/events - 최근 이벤트 (actor 필터)
GET /api/events/tx/{tx_id} - 트랜잭션별 이벤트
"""

from fastapi import APIRouter, Depends, Query

from vault.service import VaultService
from web.dependencies import get_vault
from web.models.responses import EventListResponse
from web.services.view_service import ViewService

router = APIRouter(prefix="/api/events", tags=["Events"])


@router.get("", response_model=EventListResponse)
async def get_events(
    actor: str | None = Query(default=None, description="호출자 주소 필터"),
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    vault: VaultService = Depends(get_vault),
) -> EventListResponse:
    """최근 이벤트 목록 (최신순)"""
    events = await vault.get_events(actor=actor, limit=limit, offset=offset)
    return EventListResponse(
        events=[ViewService.event(e) for e in events],
        limit=limit,
        offset=offset,
    )


@router.get("/tx/{tx_id}", response_model=EventListResponse)
async def get_events_by_tx(
    tx_id: str,
    vault: VaultService = Depends(get_vault),
) -> EventListResponse:
    """트랜잭션별 이벤트 (seq 순)"""
    events = await vault.get_events_by_tx(tx_id)
    return EventListResponse(
        events=[ViewService.event(e) for e in events],
        limit=len(events),
        offset=0,
    )
