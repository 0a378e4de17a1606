from __future__ import annotations

import uuid

from fastapi import APIRouter, Body, Depends, Response, status

from user_management.auth import require_api_key
from user_management.deps import get_user_store
from user_management.errors import NotFound
from user_management.models import ErrorResponse, UserRequest, UserResponse
from user_management.user_store import InMemoryUserStore

# Store errors propagate to the handlers registered in user_management.main.
router = APIRouter(
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(require_api_key)],
    responses={401: {"model": ErrorResponse}},
)


def _parse_user_id(user_id: str) -> str:
    # Any spelling uuid.UUID accepts (upper case, braces, no hyphens) maps to the stored form.
    try:
        return str(uuid.UUID(user_id))
    except ValueError:
        raise NotFound(user_id) from None


@router.get("", response_model=list[UserResponse])
def list_users(store: InMemoryUserStore = Depends(get_user_store)) -> list[UserResponse]:
    return [UserResponse.from_user(u) for u in store.list()]


@router.get("/{user_id}", response_model=UserResponse, responses={404: {"model": ErrorResponse}})
def get_user(user_id: str, store: InMemoryUserStore = Depends(get_user_store)) -> UserResponse:
    return UserResponse.from_user(store.get(_parse_user_id(user_id)))


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def create_user(
    response: Response,
    payload: UserRequest = Body(...),
    store: InMemoryUserStore = Depends(get_user_store),
) -> UserResponse:
    """Create a user. Any `id` in the body is ignored; the store assigns one."""
    user = store.create(name=payload.name, username=payload.username, email=payload.email)
    response.headers["Location"] = f"/users/{user.id}"
    return UserResponse.from_user(user)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def update_user(
    user_id: str,
    payload: UserRequest = Body(...),
    store: InMemoryUserStore = Depends(get_user_store),
) -> UserResponse:
    """Replace name, username and email of an existing user, keeping its id."""
    user = store.update(_parse_user_id(user_id), name=payload.name, username=payload.username, email=payload.email)
    return UserResponse.from_user(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
def delete_user(user_id: str, store: InMemoryUserStore = Depends(get_user_store)) -> Response:
    store.delete(_parse_user_id(user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
