from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from eunoia.services import ServiceManager
from eunoia.shared.models import GoalCreate, GoalUpdate, HabitCreate, HabitUpdate
from ..dependencies import get_services, get_user_id, not_found
from .common import register_crud

router = APIRouter(prefix="/api/goals", tags=["goals"])
habits_router = APIRouter(prefix="/api/habits", tags=["habits"])


@router.post("", response_model=Dict[str, Any], status_code=201)
def create_goal(body: GoalCreate, services: ServiceManager = Depends(get_services),
                user_id: str = Depends(get_user_id)):
    return services.goals.create_goal(user_id, **body.model_dump()).to_dict()


@habits_router.post("", response_model=Dict[str, Any], status_code=201)
def create_habit(body: HabitCreate, services: ServiceManager = Depends(get_services),
                 user_id: str = Depends(get_user_id)):
    return services.habits.create_habit(user_id, **body.model_dump()).to_dict()


@habits_router.post("/{habit_id}/complete", response_model=Dict[str, Any])
def complete_habit(habit_id: str, services: ServiceManager = Depends(get_services),
                   user_id: str = Depends(get_user_id)):
    """Count today's completion; 409 when today is already counted"""
    if services.habits.get(user_id, habit_id) is None:
        raise not_found("Habit", habit_id)

    habit = services.habits.mark_complete(user_id, habit_id)
    if habit is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Habit already completed today")
    return habit.to_dict()


register_crud(router, "Goal", lambda services: services.goals, GoalUpdate)
register_crud(habits_router, "Habit", lambda services: services.habits, HabitUpdate)
