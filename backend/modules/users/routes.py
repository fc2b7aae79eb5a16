"""
User API endpoints.

Two routers:
- ``router``: admin user management, mounted at /api/users
- ``me_router``: the current user's own profile, mounted at /api/me
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional

from api.dependencies import get_user_service
from api.middleware.auth import get_current_claims, require_admin
from shared.models import TokenClaims

from .interfaces import IUserService
from .models import (
    UserPublic,
    UserListResponse,
    CreateUserRequest,
    UpdateUserRequest,
    UpdateProfileRequest,
    ChangePasswordRequest,
    CurrentUserResponse,
)

router = APIRouter(dependencies=[Depends(require_admin)])
me_router = APIRouter()


@router.post("", response_model=UserPublic, status_code=201)
async def create_user(
    request: CreateUserRequest,
    service: IUserService = Depends(get_user_service),
) -> UserPublic:
    return await service.create_user(request)


@router.get("", response_model=UserListResponse)
async def list_users(
    limit: int = Query(default=10, ge=1, le=100, description="Page size"),
    offset: int = Query(default=0, ge=0, description="Rows to skip"),
    role_id: Optional[int] = Query(default=None, description="Filter by role"),
    service: IUserService = Depends(get_user_service),
) -> UserListResponse:
    """List users ordered by id, with the total count for pagination."""
    return await service.list_users(limit, offset, role_id)


@router.get("/{user_id}", response_model=UserPublic)
async def get_user(
    user_id: int,
    service: IUserService = Depends(get_user_service),
) -> UserPublic:
    return await service.get_user(user_id)


@router.put("/{user_id}", response_model=UserPublic)
async def update_user(
    user_id: int,
    request: UpdateUserRequest,
    service: IUserService = Depends(get_user_service),
) -> UserPublic:
    """
    Update a user. Omitted fields are left unchanged.

    Demoting or deactivating the only active admin is rejected.
    """
    return await service.update_user(user_id, request)


@router.delete("/{user_id}", status_code=204)
async def delete_user(
    user_id: int,
    service: IUserService = Depends(get_user_service),
) -> None:
    """Soft-delete a user and revoke their refresh tokens."""
    await service.delete_user(user_id)


@me_router.get("", response_model=CurrentUserResponse)
async def get_me(
    claims: TokenClaims = Depends(get_current_claims),
    service: IUserService = Depends(get_user_service),
) -> CurrentUserResponse:
    """The current user's profile and the workspaces they belong to."""
    return await service.get_current_user(claims.user_id)


@me_router.put("", response_model=UserPublic)
async def update_me(
    request: UpdateProfileRequest,
    claims: TokenClaims = Depends(get_current_claims),
    service: IUserService = Depends(get_user_service),
) -> UserPublic:
    return await service.update_current_user(claims.user_id, request)


@me_router.put("/password", status_code=204)
async def change_password(
    request: ChangePasswordRequest,
    claims: TokenClaims = Depends(get_current_claims),
    service: IUserService = Depends(get_user_service),
) -> None:
    await service.change_password(
        claims.user_id, request.old_password, request.new_password
    )
