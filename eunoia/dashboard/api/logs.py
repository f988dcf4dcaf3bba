from typing import Any, Dict

from fastapi import APIRouter, Depends

from eunoia.services import ServiceManager
from eunoia.shared.models import ExpenseCreate, ExpenseUpdate, LogCreate, LogUpdate
from ..dependencies import get_services, get_user_id
from .common import register_crud

router = APIRouter(prefix="/api/logs", tags=["logs"])
expenses_router = APIRouter(prefix="/api/expenses", tags=["expenses"])


@router.post("", response_model=Dict[str, Any], status_code=201)
def create_log(body: LogCreate, services: ServiceManager = Depends(get_services),
               user_id: str = Depends(get_user_id)):
    return services.logs.create_log(user_id, **body.model_dump()).to_dict()


@expenses_router.post("", response_model=Dict[str, Any], status_code=201)
def create_expense(body: ExpenseCreate, services: ServiceManager = Depends(get_services),
                   user_id: str = Depends(get_user_id)):
    return services.expenses.create_expense(user_id, **body.model_dump()).to_dict()


register_crud(router, "Log", lambda services: services.logs, LogUpdate)
register_crud(expenses_router, "Expense", lambda services: services.expenses, ExpenseUpdate)
