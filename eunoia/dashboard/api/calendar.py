from datetime import datetime
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query

from eunoia.services import ServiceManager
from eunoia.shared.models import EventCreate, EventUpdate, ReminderCreate, ReminderUpdate
from ..dependencies import get_services, get_user_id
from .common import register_crud

router = APIRouter(prefix="/api/events", tags=["calendar"])
reminders_router = APIRouter(prefix="/api/reminders", tags=["reminders"])


@router.post("", response_model=Dict[str, Any], status_code=201)
def create_event(body: EventCreate, services: ServiceManager = Depends(get_services),
                 user_id: str = Depends(get_user_id)):
    return services.calendar.create_event(user_id, **body.model_dump()).to_dict()


@router.get("/range", response_model=List[Dict[str, Any]])
def events_in_range(start: datetime = Query(...), end: datetime = Query(...),
                    services: ServiceManager = Depends(get_services), user_id: str = Depends(get_user_id)):
    """Events overlapping [start, end]"""
    return [event.to_dict() for event in services.calendar.events_between(user_id, start, end)]


@reminders_router.post("", response_model=Dict[str, Any], status_code=201)
def create_reminder(body: ReminderCreate, services: ServiceManager = Depends(get_services),
                    user_id: str = Depends(get_user_id)):
    return services.reminders.create_reminder(user_id, **body.model_dump()).to_dict()


@reminders_router.get("/upcoming", response_model=List[Dict[str, Any]])
def upcoming_reminders(within_hours: int = Query(24, ge=1, le=24 * 30),
                       services: ServiceManager = Depends(get_services), user_id: str = Depends(get_user_id)):
    """Reminders due in the next `within_hours` hours, soonest first"""
    return [r.to_dict() for r in services.reminders.get_upcoming(user_id, within_hours=within_hours)]


register_crud(router, "Event", lambda services: services.calendar, EventUpdate)
register_crud(reminders_router, "Reminder", lambda services: services.reminders, ReminderUpdate)
