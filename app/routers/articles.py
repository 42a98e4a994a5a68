from fastapi import APIRouter, Depends, HTTPException, Request, Response

from app.dependencies import get_article_service, read_json_body
from app.schemas import (
    ARTICLE_REQUIRED_FIELDS,
    ARTICLE_UPDATABLE_FIELDS,
    ARTICLE_UPDATE_MESSAGE,
    ArticleCreate,
    ArticleResponse,
    ArticleUpdate,
)
from app.services.article_service import ArticleService
from app.validation import coerce, pick_fields, require_fields

router = APIRouter(prefix="/api/articles", tags=["articles"])

NOT_FOUND = "Article doesn't exist"


@router.get("", response_model=list[ArticleResponse])
async def list_articles(articles: ArticleService = Depends(get_article_service)):
    return await articles.get_all()


@router.get("/{article_id:int}", response_model=ArticleResponse)
async def get_article(article_id: int, articles: ArticleService = Depends(get_article_service)):
    article = await articles.get_by_id(article_id)
    if not article:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return article


@router.post("", status_code=201, response_model=ArticleResponse)
async def create_article(
    request: Request,
    response: Response,
    articles: ArticleService = Depends(get_article_service),
):
    body = await read_json_body(request)
    fields = coerce(ArticleCreate, require_fields(body, ARTICLE_REQUIRED_FIELDS))
    article = await articles.insert(fields)
    response.headers["Location"] = request.app.url_path_for(
        "get_article", article_id=article["id"]
    )
    return article


@router.patch("/{article_id:int}", status_code=204)
async def update_article(
    article_id: int,
    request: Request,
    articles: ArticleService = Depends(get_article_service),
):
    if not await articles.get_by_id(article_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    body = await read_json_body(request)
    fields = coerce(
        ArticleUpdate, pick_fields(body, ARTICLE_UPDATABLE_FIELDS, ARTICLE_UPDATE_MESSAGE)
    )
    await articles.update(article_id, fields)


@router.delete("/{article_id:int}", status_code=204)
async def delete_article(article_id: int, articles: ArticleService = Depends(get_article_service)):
    if not await articles.get_by_id(article_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    await articles.delete(article_id)
