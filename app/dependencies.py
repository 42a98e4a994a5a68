import json

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.services.article_service import ArticleService
from app.services.comment_service import CommentService
from app.services.user_service import UserService


async def read_json_body(request: Request) -> dict:
    """
    Return the request body as a dict.

    Routers take the raw JSON object rather than a Pydantic model so that
    missing or unknown fields can be reported with the API's own messages
    (see ``app.validation``).  An empty body reads as ``{}``.

    Handlers call this themselves, after the target row has been resolved,
    so a missing row is reported as 404 whatever the body holds.
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        body = None
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")
    return body


# ---------------------------------------------------------------------------
# Service providers — override these in tests to inject a double.
# ---------------------------------------------------------------------------

async def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


async def get_article_service(db: AsyncSession = Depends(get_db)) -> ArticleService:
    return ArticleService(db)


async def get_comment_service(db: AsyncSession = Depends(get_db)) -> CommentService:
    return CommentService(db)
