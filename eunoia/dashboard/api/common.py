"""
Shared CRUD routes for resource routers
"""

from typing import Any, Callable, Dict, List, Type

from fastapi import APIRouter, Depends

from eunoia.services import ServiceManager
from eunoia.services.resource_service import ResourceService
from eunoia.shared.models import RequestModel
from ..dependencies import get_services, get_user_id, not_found

ServiceGetter = Callable[[ServiceManager], ResourceService]


def register_crud(router: APIRouter, label: str, get_service: ServiceGetter,
                  update_model: Type[RequestModel]) -> None:
    """Add list, get, update and delete routes; create stays with each router"""

    @router.get("", response_model=List[Dict[str, Any]])
    def list_records(services: ServiceManager = Depends(get_services), user_id: str = Depends(get_user_id)):
        return [record.to_dict() for record in get_service(services).list(user_id)]

    @router.get("/{record_id}", response_model=Dict[str, Any])
    def get_record(record_id: str, services: ServiceManager = Depends(get_services),
                   user_id: str = Depends(get_user_id)):
        record = get_service(services).get(user_id, record_id)
        if record is None:
            raise not_found(label, record_id)
        return record.to_dict()

    @router.patch("/{record_id}", response_model=Dict[str, Any])
    def update_record(record_id: str, body: update_model, services: ServiceManager = Depends(get_services),
                      user_id: str = Depends(get_user_id)):
        record = get_service(services).update(user_id, record_id, **body.changes())
        if record is None:
            raise not_found(label, record_id)
        return record.to_dict()

    @router.delete("/{record_id}", status_code=204)
    def delete_record(record_id: str, services: ServiceManager = Depends(get_services),
                      user_id: str = Depends(get_user_id)):
        if not get_service(services).delete(user_id, record_id):
            raise not_found(label, record_id)
