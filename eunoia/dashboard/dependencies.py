#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - Dashboard Dependencies
Dependency providers for the FastAPI routers

Version: 1.0.0
"""

import logging

from fastapi import Header, HTTPException, status

from eunoia.services import ServiceManager, get_service_manager

logger = logging.getLogger(__name__)

DEFAULT_USER_ID = "local"

# ===== PROVIDERS =====

def get_services() -> ServiceManager:
    """The process-wide ServiceManager"""
    return get_service_manager()


def get_user_id(x_user_id: str = Header(DEFAULT_USER_ID)) -> str:
    """Caller identity from the X-User-Id header"""
    user_id = x_user_id.strip()
    if not user_id or not all(c.isalnum() or c in "-_" for c in user_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-User-Id may contain only letters, digits, '-' and '_'"
        )
    return user_id


def not_found(resource: str, record_id: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{resource} {record_id} not found")


__all__ = ['get_services', 'get_user_id', 'not_found', 'DEFAULT_USER_ID']
