from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from eunoia.services import ServiceManager
from eunoia.shared.models import GratitudeCreate, NoteCreate, NoteUpdate, ReframingCreate
from ..dependencies import get_services, get_user_id, not_found
from .common import register_crud

router = APIRouter(prefix="/api/notes", tags=["notes"])
wellness_router = APIRouter(prefix="/api/wellness", tags=["wellness"])


@router.post("", response_model=Dict[str, Any], status_code=201)
def create_note(body: NoteCreate, services: ServiceManager = Depends(get_services),
                user_id: str = Depends(get_user_id)):
    return services.notes.create_note(user_id, **body.model_dump()).to_dict()


register_crud(router, "Note", lambda services: services.notes, NoteUpdate)

# ===== WELLNESS =====

@wellness_router.get("/gratitude", response_model=List[Dict[str, Any]])
def list_gratitude(services: ServiceManager = Depends(get_services), user_id: str = Depends(get_user_id)):
    return [entry.to_dict() for entry in services.wellness.list_gratitude(user_id)]


@wellness_router.post("/gratitude", response_model=Dict[str, Any], status_code=201)
def add_gratitude(body: GratitudeCreate, services: ServiceManager = Depends(get_services),
                  user_id: str = Depends(get_user_id)):
    return services.wellness.add_gratitude(user_id, body.text).to_dict()


@wellness_router.delete("/gratitude/{entry_id}", status_code=204)
def delete_gratitude(entry_id: str, services: ServiceManager = Depends(get_services),
                     user_id: str = Depends(get_user_id)):
    if not services.wellness.delete_gratitude(user_id, entry_id):
        raise not_found("Gratitude entry", entry_id)


@wellness_router.get("/reframing", response_model=List[Dict[str, Any]])
def list_reframing(services: ServiceManager = Depends(get_services), user_id: str = Depends(get_user_id)):
    return [entry.to_dict() for entry in services.wellness.list_reframing(user_id)]


@wellness_router.post("/reframing", response_model=Dict[str, Any], status_code=201)
def add_reframing(body: ReframingCreate, services: ServiceManager = Depends(get_services),
                  user_id: str = Depends(get_user_id)):
    return services.wellness.add_reframing(user_id, body.negative_thought, body.positive_reframing).to_dict()


@wellness_router.delete("/reframing/{entry_id}", status_code=204)
def delete_reframing(entry_id: str, services: ServiceManager = Depends(get_services),
                     user_id: str = Depends(get_user_id)):
    if not services.wellness.delete_reframing(user_id, entry_id):
        raise not_found("Reframing entry", entry_id)
