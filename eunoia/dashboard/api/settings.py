from typing import Any, Dict

from fastapi import APIRouter, Depends

from eunoia.core.models import AppSettings
from eunoia.services import ServiceManager
from eunoia.shared.models import SettingsPayload
from ..dependencies import get_services, get_user_id

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("", response_model=Dict[str, Any])
def get_settings(services: ServiceManager = Depends(get_services), user_id: str = Depends(get_user_id)):
    return services.settings.load(user_id).to_dict()


@router.put("", response_model=Dict[str, Any])
def replace_settings(body: SettingsPayload, services: ServiceManager = Depends(get_services),
                     user_id: str = Depends(get_user_id)):
    """Replace every group; omitted groups and fields go back to defaults"""
    settings = AppSettings.from_dict(body.model_dump())
    return services.settings.save(user_id, settings).to_dict()


@router.patch("", response_model=Dict[str, Any])
def update_settings(body: SettingsPayload, services: ServiceManager = Depends(get_services),
                    user_id: str = Depends(get_user_id)):
    return services.settings.update(user_id, body.changes()).to_dict()


@router.post("/reset", response_model=Dict[str, Any])
def reset_settings(services: ServiceManager = Depends(get_services), user_id: str = Depends(get_user_id)):
    return services.settings.reset(user_id).to_dict()
