from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from eunoia.services import ServiceManager
from eunoia.shared.models import DataModeResponse
from ..dependencies import get_services, get_user_id

router = APIRouter(prefix="/api/data", tags=["data"])


@router.get("/mode", response_model=DataModeResponse)
def get_mode(services: ServiceManager = Depends(get_services), user_id: str = Depends(get_user_id)):
    return DataModeResponse(data_mode=services.data.get_data_mode(user_id))


@router.post("/user-mode", response_model=DataModeResponse)
def switch_to_user_mode(services: ServiceManager = Depends(get_services), user_id: str = Depends(get_user_id)):
    """Start from a clean slate with the user's own data"""
    return DataModeResponse(data_mode=services.data.switch_to_user_mode(user_id))


@router.post("/mock-mode", response_model=DataModeResponse)
def reset_to_mock_mode(services: ServiceManager = Depends(get_services), user_id: str = Depends(get_user_id)):
    """Drop user data and settings, then show sample data again"""
    return DataModeResponse(data_mode=services.data.reset_to_mock_mode(user_id))


@router.delete("", response_model=Dict[str, int])
def clear_data(services: ServiceManager = Depends(get_services), user_id: str = Depends(get_user_id)):
    return {"cleared": services.data.clear_user_data(user_id)}


@router.get("/snapshot", response_model=Dict[str, List[Dict[str, Any]]])
def snapshot(services: ServiceManager = Depends(get_services), user_id: str = Depends(get_user_id)):
    """Every collection as the current data mode sees it"""
    data = services.data.snapshot(user_id)
    return {key: [record.to_dict() for record in records] for key, records in data.items()}
