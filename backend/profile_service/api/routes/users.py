"""User Routes — list, get, create, update and delete user profiles.

Invariants:
    - Every handler runs parse → validate → operation → respond, in that order
    - Raw path/query/body maps go through validate_input; nothing reaches an
      operation unvalidated, and a validation failure never touches the store
    - Validation failures return early; operation outcomes are matched on the
      Ok | Err tag and an Err goes to error_response (the same responder the
      global handlers use)
    - Routes never contain business logic (delegate to UserOperations)

Design Decisions:
    - Raw dict/str parameters instead of typed FastAPI parameters: validation is
      owned by the named schemas, so every 400 carries the same violation format
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status

from profile_service.api.dependencies import (
    authenticate, authorize, get_user_operations,
)
from profile_service.api.error_handlers import error_response
from profile_service.core.outcome import Err, Ok
from profile_service.core.validate_input import validate_input
from profile_service.schemas.user import (
    DeleteUserResponse, ErrorResponse, PageMeta, UserListResponse, UserResponse,
)
from profile_service.services.user_operations import UserOperations

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/users", tags=["users"], dependencies=[Depends(authenticate)],
)

_BAD_REQUEST = {400: {"model": ErrorResponse}}
_NOT_FOUND = {404: {"model": ErrorResponse}}
_CONFLICT = {409: {"model": ErrorResponse}}


@router.get(
    "", response_model=UserListResponse, responses=_BAD_REQUEST,
)
async def list_users(
    request: Request,
    operations: UserOperations = Depends(get_user_operations),
):
    """List users, newest first, one page at a time."""
    parsed = validate_input("pagination", dict(request.query_params))
    if isinstance(parsed, Err):
        return error_response(request, parsed.error)
    window = parsed.value

    match await operations.list_users(window):
        case Ok(page):
            return UserListResponse(
                data=[UserResponse.model_validate(u) for u in page["data"]],
                pagination=PageMeta(**page["pagination"]),
            )
        case Err(error):
            return error_response(request, error)


@router.get(
    "/{user_id}", response_model=UserResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
)
async def get_user(
    user_id: str,
    request: Request,
    operations: UserOperations = Depends(get_user_operations),
):
    """Get one user by id."""
    parsed = validate_input("idParam", {"id": user_id})
    if isinstance(parsed, Err):
        return error_response(request, parsed.error)
    params = parsed.value

    match await operations.get_user(params.id):
        case Ok(user):
            return UserResponse.model_validate(user)
        case Err(error):
            return error_response(request, error)


@router.post(
    "", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
    responses={**_BAD_REQUEST, **_CONFLICT},
)
async def create_user(
    request: Request,
    payload: dict[str, Any] = Body(...),
    operations: UserOperations = Depends(get_user_operations),
):
    """Create a user. The id and timestamps are assigned by the service."""
    parsed = validate_input("createUser", payload)
    if isinstance(parsed, Err):
        return error_response(request, parsed.error)
    data = parsed.value

    match await operations.create_user(data):
        case Ok(user):
            return UserResponse.model_validate(user)
        case Err(error):
            return error_response(request, error)


@router.put(
    "/{user_id}", response_model=UserResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_CONFLICT},
)
async def update_user(
    user_id: str,
    request: Request,
    payload: dict[str, Any] | None = Body(None),
    operations: UserOperations = Depends(get_user_operations),
):
    """Partially update a user; only the supplied fields change."""
    parsed = validate_input("idParam", {"id": user_id})
    if isinstance(parsed, Err):
        return error_response(request, parsed.error)
    params = parsed.value
    parsed = validate_input("updateUser", payload)
    if isinstance(parsed, Err):
        return error_response(request, parsed.error)
    data = parsed.value

    match await operations.update_user(params.id, data):
        case Ok(user):
            return UserResponse.model_validate(user)
        case Err(error):
            return error_response(request, error)


@router.delete(
    "/{user_id}", response_model=DeleteUserResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    dependencies=[Depends(authorize("admin"))],
)
async def delete_user(
    user_id: str,
    request: Request,
    operations: UserOperations = Depends(get_user_operations),
):
    """Hard-delete a user."""
    parsed = validate_input("idParam", {"id": user_id})
    if isinstance(parsed, Err):
        return error_response(request, parsed.error)
    params = parsed.value

    match await operations.delete_user(params.id):
        case Ok(result):
            return DeleteUserResponse(**result)
        case Err(error):
            return error_response(request, error)
