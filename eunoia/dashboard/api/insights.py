"""
AI insight endpoints

Every endpoint answers 200 with either the model's result or the
deterministic fallback; provider failures never surface as 5xx here.
"""

from datetime import datetime
from typing import Any, Dict, Literal, Optional

from fastapi import APIRouter, Depends, Query

from eunoia.services import ServiceManager
from eunoia.shared.models import DateRangeRequest, ProductivityRequest, ReflectionRequest, SuggestionsRequest
from ..dependencies import get_services, get_user_id

router = APIRouter(prefix="/api/insights", tags=["insights"])


def _dump(result) -> Dict[str, Any]:
    return result.model_dump(mode="json")


@router.post("/life-balance")
async def life_balance(body: DateRangeRequest, services: ServiceManager = Depends(get_services),
                       user_id: str = Depends(get_user_id)):
    return _dump(await services.insights.life_balance(user_id, body.start_date, body.end_date))


@router.get("/burnout-risk")
async def burnout_risk(days: int = Query(14, ge=1, le=90), services: ServiceManager = Depends(get_services),
                       user_id: str = Depends(get_user_id)):
    return _dump(await services.insights.burnout_risk(user_id, days))


@router.post("/attention")
async def attention_patterns(body: DateRangeRequest, services: ServiceManager = Depends(get_services),
                             user_id: str = Depends(get_user_id)):
    return _dump(await services.insights.attention_patterns(user_id, body.start_date, body.end_date))


@router.post("/expenses")
async def expense_trends(body: DateRangeRequest, services: ServiceManager = Depends(get_services),
                         user_id: str = Depends(get_user_id)):
    return _dump(await services.insights.expense_trends(user_id, body.start_date, body.end_date))


@router.post("/productivity")
async def productivity_patterns(body: ProductivityRequest, services: ServiceManager = Depends(get_services),
                                user_id: str = Depends(get_user_id)):
    result = await services.insights.productivity_patterns(
        user_id, body.start_date, body.end_date, additional_context=body.additional_context
    )
    return _dump(result)


@router.post("/sentiment")
async def sentiment_trends(body: DateRangeRequest, services: ServiceManager = Depends(get_services),
                           user_id: str = Depends(get_user_id)):
    return _dump(await services.insights.sentiment_trends(user_id, body.start_date, body.end_date))


@router.post("/task-completion")
async def task_completion(body: DateRangeRequest, services: ServiceManager = Depends(get_services),
                          user_id: str = Depends(get_user_id)):
    return _dump(await services.insights.task_completion(user_id, body.start_date, body.end_date))


@router.get("/daily-plan")
async def daily_plan(target_date: Optional[datetime] = Query(None), services: ServiceManager = Depends(get_services),
                     user_id: str = Depends(get_user_id)):
    return _dump(await services.insights.daily_plan(user_id, target_date))


@router.post("/suggestions")
async def daily_suggestions(body: SuggestionsRequest, services: ServiceManager = Depends(get_services),
                            user_id: str = Depends(get_user_id)):
    result = await services.insights.daily_suggestions(
        user_id, user_location=body.user_location, weather_condition=body.weather_condition
    )
    return _dump(result)


@router.post("/reflection")
async def weekly_reflection(body: ReflectionRequest, services: ServiceManager = Depends(get_services),
                            user_id: str = Depends(get_user_id)):
    result = await services.insights.weekly_reflection(
        user_id, body.start_date, body.end_date,
        previous_reflection=body.previous_reflection, user_response=body.user_response,
    )
    return _dump(result)


@router.get("/diary-summary")
async def diary_summary(frequency: Literal["weekly", "monthly"] = Query("weekly"),
                        services: ServiceManager = Depends(get_services), user_id: str = Depends(get_user_id)):
    return _dump(await services.insights.diary_summary(user_id, frequency))
