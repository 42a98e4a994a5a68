from fastapi import APIRouter, Depends, HTTPException, Request, Response

from app.dependencies import get_comment_service, read_json_body
from app.schemas import (
    COMMENT_REQUIRED_FIELDS,
    COMMENT_UPDATABLE_FIELDS,
    COMMENT_UPDATE_MESSAGE,
    CommentCreate,
    CommentResponse,
    CommentUpdate,
)
from app.services.comment_service import CommentService
from app.validation import coerce, pick_fields, require_fields

router = APIRouter(prefix="/api/comments", tags=["comments"])

NOT_FOUND = "Comment doesn't exist"


@router.get("", response_model=list[CommentResponse])
async def list_comments(comments: CommentService = Depends(get_comment_service)):
    return await comments.get_all()


@router.get("/{comment_id:int}", response_model=CommentResponse)
async def get_comment(comment_id: int, comments: CommentService = Depends(get_comment_service)):
    comment = await comments.get_by_id(comment_id)
    if not comment:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return comment


@router.post("", status_code=201, response_model=CommentResponse)
async def create_comment(
    request: Request,
    response: Response,
    comments: CommentService = Depends(get_comment_service),
):
    body = await read_json_body(request)
    fields = coerce(CommentCreate, require_fields(body, COMMENT_REQUIRED_FIELDS))
    comment = await comments.insert(fields)
    response.headers["Location"] = request.app.url_path_for(
        "get_comment", comment_id=comment["id"]
    )
    return comment


@router.patch("/{comment_id:int}", status_code=204)
async def update_comment(
    comment_id: int,
    request: Request,
    comments: CommentService = Depends(get_comment_service),
):
    if not await comments.get_by_id(comment_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    body = await read_json_body(request)
    fields = coerce(
        CommentUpdate, pick_fields(body, COMMENT_UPDATABLE_FIELDS, COMMENT_UPDATE_MESSAGE)
    )
    await comments.update(comment_id, fields)


@router.delete("/{comment_id:int}", status_code=204)
async def delete_comment(comment_id: int, comments: CommentService = Depends(get_comment_service)):
    if not await comments.get_by_id(comment_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    await comments.delete(comment_id)
