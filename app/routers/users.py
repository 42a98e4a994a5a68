from fastapi import APIRouter, Depends, HTTPException, Request, Response

from app.dependencies import get_user_service, read_json_body
from app.schemas import (
    USER_REQUIRED_FIELDS,
    USER_UPDATABLE_FIELDS,
    USER_UPDATE_MESSAGE,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from app.services.user_service import UserService
from app.validation import coerce, pick_fields, require_fields

router = APIRouter(prefix="/api/users", tags=["users"])

NOT_FOUND = "User doesn't exist"


@router.get("", response_model=list[UserResponse])
async def list_users(users: UserService = Depends(get_user_service)):
    return await users.get_all()


@router.get("/{user_id:int}", response_model=UserResponse)
async def get_user(user_id: int, users: UserService = Depends(get_user_service)):
    user = await users.get_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return user


@router.post("", status_code=201, response_model=UserResponse)
async def create_user(
    request: Request,
    response: Response,
    users: UserService = Depends(get_user_service),
):
    body = await read_json_body(request)
    fields = coerce(UserCreate, require_fields(body, USER_REQUIRED_FIELDS))
    user = await users.insert(fields)
    response.headers["Location"] = request.app.url_path_for("get_user", user_id=user["id"])
    return user


@router.patch("/{user_id:int}", status_code=204)
async def update_user(
    user_id: int,
    request: Request,
    users: UserService = Depends(get_user_service),
):
    if not await users.get_by_id(user_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    body = await read_json_body(request)
    fields = coerce(UserUpdate, pick_fields(body, USER_UPDATABLE_FIELDS, USER_UPDATE_MESSAGE))
    await users.update(user_id, fields)


@router.delete("/{user_id:int}")
async def delete_user(user_id: int, users: UserService = Depends(get_user_service)):
    """Users cannot be deleted; a missing id still reports the missing user."""
    if not await users.get_by_id(user_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    raise HTTPException(
        status_code=405, detail="Method Not Allowed", headers={"Allow": "GET, PATCH"}
    )
