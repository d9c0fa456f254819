"""
app/api/send_message.py

Purpose: Lead message endpoint

- Receives the lead form payload as JSON
- Hands it to the dispatch service
- Translates the DispatchResult into a JSON response and status code
"""

from functools import lru_cache

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.core.config import settings, ProviderConfig
from app.core.logging import get_logger
from app.schemas.dispatch import DispatchRequest
from app.schemas.response import SendErrorResponse, SendOkResponse
from app.services.dispatch_service import DispatchService
from app.services.twilio_service import TwilioService

logger = get_logger(__name__)
router = APIRouter()


@lru_cache
def get_dispatch_service() -> DispatchService:
    """
    Builds the process-wide dispatch service from settings.
    Provider config is read once and reused for every request.
    """
    config = ProviderConfig.from_settings(settings)
    return DispatchService(config=config, provider=TwilioService(config))


@router.post(
    "/send-message",
    response_model=SendOkResponse,
    responses={400: {"model": SendErrorResponse}, 500: {"model": SendErrorResponse}},
)
async def send_message(
    payload: DispatchRequest,
    service: DispatchService = Depends(get_dispatch_service),
):
    """
    Sends one personalized WhatsApp message to a lead.

    Returns {"ok": true} on success, otherwise {"error": "..."} with 400
    for input problems and 500 for configuration or provider failures.
    """
    result = await service.dispatch(payload)

    if result.ok:
        return SendOkResponse()

    logger.info(f"Send failed: category={result.category.value} status={result.status_code}")
    return JSONResponse(
        status_code=result.status_code,
        content=SendErrorResponse(error=result.reason).model_dump()
    )
