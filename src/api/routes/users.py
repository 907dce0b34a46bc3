"""User API routes for user CRUD operations.

Endpoints:
- GET /api/users: List all users
- GET /api/users/filter?name=: Get a user by login name
- GET /api/users/{id}: Get a user by ID
- POST /api/users: Create a user
- PUT /api/users/{id}: Update a user
- DELETE /api/users/{id}: Delete a user
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request, Response, status

from api.dependencies import get_user_service
from api.models import MAX_USER_ID, ErrorResponse, UserDto
from domain.model.errors import DuplicateError, NotFoundError
from port.user_service import UserOperations

UserId = Annotated[int, Path(ge=1, le=MAX_USER_ID, description="User ID")]

router = APIRouter(prefix="/api/users", tags=["users"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "No user with the given ID or name"}}
_BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Validation failed or login name already taken"}}


def _upsert(service: UserOperations, request: UserDto) -> UserDto:
    """Shared create/update path: map to domain, upsert, map back."""
    try:
        user = service.upsert(request.to_domain())
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DuplicateError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return UserDto.from_domain(user)


@router.get("", response_model=list[UserDto])
async def get_all_users(service: UserOperations = Depends(get_user_service)):
    """Get all users."""
    return [UserDto.from_domain(user) for user in service.get_all()]


@router.get("/filter", response_model=UserDto, responses=_NOT_FOUND)
async def filter_users(
    name: str = Query(..., description="Login name to look up"),
    service: UserOperations = Depends(get_user_service),
):
    """Get a user by login name."""
    try:
        return UserDto.from_domain(service.get_by_name(name))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{user_id}", response_model=UserDto, responses=_NOT_FOUND)
async def get_user(user_id: UserId, service: UserOperations = Depends(get_user_service)):
    """Get a user by ID."""
    try:
        return UserDto.from_domain(service.get_by_id(user_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=UserDto, status_code=status.HTTP_201_CREATED, responses=_BAD_REQUEST)
async def create_user(
    request: UserDto,
    http_request: Request,
    response: Response,
    service: UserOperations = Depends(get_user_service),
):
    """Create a new user.

    Any ID in the body is ignored. The Location header points at the new user.
    """
    created = _upsert(service, request.model_copy(update={"id": None}))
    response.headers["Location"] = str(http_request.url_for("get_user", user_id=created.id))
    return created


@router.put("/{user_id}", response_model=UserDto, responses={**_BAD_REQUEST, **_NOT_FOUND})
async def update_user(
    user_id: UserId,
    request: UserDto,
    service: UserOperations = Depends(get_user_service),
):
    """Update an existing user. The ID in the path must match the ID in the body."""
    if request.id != user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User ID in path and body do not match",
        )

    return _upsert(service, request)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_NOT_FOUND)
async def delete_user(user_id: UserId, service: UserOperations = Depends(get_user_service)):
    """Delete a user by ID."""
    try:
        service.delete(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return Response(status_code=status.HTTP_204_NO_CONTENT)
