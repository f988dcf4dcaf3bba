import logging

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from eunoia.services import ServiceManager
from eunoia.shared.models import VoiceRequest
from ..dependencies import get_services, get_user_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/voice", tags=["voice"])


@router.post("")
async def process_voice(body: VoiceRequest, services: ServiceManager = Depends(get_services),
                        user_id: str = Depends(get_user_id)):
    """Interpret a transcript and, when `apply` is set, carry out the intent"""
    result = await services.insights.voice_input(body.transcribed_text)
    response = {"interpretation": result.model_dump(mode="json"), "action": None}

    if body.apply:
        action = await run_in_threadpool(services.voice_actions.apply, user_id, result)
        logger.info(f"Voice intent {action.intent} for user {user_id}, created={action.created}")
        response["action"] = action.to_dict()

    return response
