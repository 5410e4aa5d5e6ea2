"""Users — CRUD endpoints over UserRecordService.

Invariants:
    - create: normalize → validate(create) → hash → insert
    - update: normalize → validate(update) → hash → column patch → re-read
    - user_id path parameter bounded to the unsigned 32-bit range
    - AccountsError propagates to the global handler (no per-route mapping)

Design Decisions:
    - Service built per request from the request's AsyncSession
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from accounts.config import get_settings
from accounts.core.domain_types import USER_ID_MAX, UserId, ValidationMode
from accounts.infrastructure.database import get_db
from accounts.schemas.user import (
    DeleteResponse, UserListResponse, UserResponse, UserWrite,
)
from accounts.services.factory import build_user_record_service
from accounts.services.user_record_service import UserRecordService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])

UserIdPath = Annotated[int, Path(ge=1, le=USER_ID_MAX)]


def get_user_service(
    db: AsyncSession = Depends(get_db),
) -> UserRecordService:
    return build_user_record_service(db, get_settings())


@router.post(
    "", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserWrite, service: UserRecordService = Depends(get_user_service),
):
    record = service.normalize(body.to_record())
    service.validate(record, ValidationMode.CREATE)
    stored = await service.create(record)
    return UserResponse.from_record(stored)


@router.get("", response_model=UserListResponse)
async def list_users(service: UserRecordService = Depends(get_user_service)):
    users = await service.find_all()
    return UserListResponse(users=[UserResponse.from_record(u) for u in users])


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UserIdPath,
    service: UserRecordService = Depends(get_user_service),
):
    return UserResponse.from_record(await service.find_by_id(UserId(user_id)))


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    body: UserWrite,
    user_id: UserIdPath,
    service: UserRecordService = Depends(get_user_service),
):
    record = service.normalize(body.to_record())
    service.validate(record, ValidationMode.UPDATE)
    updated = await service.update(UserId(user_id), record)
    return UserResponse.from_record(updated)


@router.delete("/{user_id}", response_model=DeleteResponse)
async def delete_user(
    user_id: UserIdPath,
    service: UserRecordService = Depends(get_user_service),
):
    rows = await service.delete(UserId(user_id))
    return DeleteResponse(rows_affected=rows)
