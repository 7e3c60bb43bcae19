"""qm_drop REST endpoints.

GET  /drops                        — every catalog drop with live status
GET  /drops/{product_id}           — status of one drop
POST /drops/{product_id}/view      — pay to reveal, or join the queue
POST /drops/{product_id}/cancel    — release the caller's lock
POST /drops/{product_id}/buy       — settle the sale at the live price
POST /drops/reset                  — re-initialize all drops (ALLOW_RESET only)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from config.settings import settings
from src.qm_common.errors import ResetNotAllowedError
from src.qm_common.response import ApiResponse, success_response
from src.qm_drop.application.schemas import BuyRequest, ViewRequest
from src.qm_drop.application.service import DropApplicationService

router = APIRouter(prefix="/drops", tags=["drops"])


def get_drop_service(request: Request) -> DropApplicationService:
    return request.app.state.drop_service


DropService = Annotated[DropApplicationService, Depends(get_drop_service)]


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


@router.get("")
async def list_drops(request: Request, service: DropService) -> ApiResponse:
    result = await service.list_drops()
    return success_response(result.model_dump(), _request_id(request))


@router.post("/reset")
async def reset_drops(request: Request, service: DropService) -> ApiResponse:
    if not settings.ALLOW_RESET:
        raise ResetNotAllowedError()
    await service.reset()
    return success_response({"reset": True}, _request_id(request))


@router.get("/{product_id}")
async def get_drop(product_id: str, request: Request, service: DropService) -> ApiResponse:
    result = await service.get_status(product_id)
    return success_response(result.model_dump(), _request_id(request))


@router.post("/{product_id}/view")
async def view_drop(
    product_id: str, req: ViewRequest, request: Request, service: DropService
) -> ApiResponse:
    result = await service.view(product_id, req.viewer_id)
    return success_response(result.model_dump(mode="json"), _request_id(request))


@router.post("/{product_id}/cancel")
async def cancel_view(
    product_id: str, req: ViewRequest, request: Request, service: DropService
) -> ApiResponse:
    result = await service.cancel(product_id, req.viewer_id)
    return success_response(result.model_dump(), _request_id(request))


@router.post("/{product_id}/buy")
async def buy_drop(
    product_id: str, req: BuyRequest, request: Request, service: DropService
) -> ApiResponse:
    result = await service.buy(product_id, req.buyer_id)
    return success_response(result.model_dump(), _request_id(request))
