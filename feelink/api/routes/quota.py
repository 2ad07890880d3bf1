"""
Quota endpoint
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...core.config import get_settings
from ...core.exceptions import StorageError
from ...domain.services.gateway import RemoteClassifierGateway
from ..dependencies import get_gateway, get_quota_store
from ..schemas import QuotaResponse

router = APIRouter(prefix="/v1/quota", tags=["quota"])


@router.get("", response_model=QuotaResponse)
async def current_quota(
    gateway: RemoteClassifierGateway = Depends(get_gateway),
) -> QuotaResponse:
    """Remote classifier usage for the current month"""
    key = gateway.current_key()
    try:
        used = await get_quota_store().get(key)
    except StorageError as e:
        return JSONResponse(status_code=503, content={"error": e.message})

    return QuotaResponse(
        key=key,
        used=used,
        limit=get_settings().huggingface.monthly_limit,
        enabled=gateway.enabled,
    )
