from datetime import datetime

from pydantic import BaseModel, ConfigDict


# --- User ---

USER_REQUIRED_FIELDS = ("name", "writer", "admin", "password")
USER_UPDATABLE_FIELDS = ("name", "admin", "writer", "password")
USER_UPDATE_MESSAGE = (
    "Request body must contain one of: 'name', 'admin', 'writer', or 'password'"
)


class UserCreate(BaseModel):
    name: str
    writer: bool
    admin: bool
    password: str


class UserUpdate(BaseModel):
    name: str | None = None
    admin: bool | None = None
    writer: bool | None = None
    password: str | None = None


class UserResponse(BaseModel):
    id: int
    name: str
    writer: bool
    admin: bool
    password: str
    date_created: datetime
    model_config = ConfigDict(from_attributes=True)


# --- Article ---

ARTICLE_REQUIRED_FIELDS = ("title", "authorid", "content", "modified")
ARTICLE_UPDATABLE_FIELDS = ("title", "modified", "content")
ARTICLE_UPDATE_MESSAGE = (
    "Request body must contain one of: 'title', 'modified' or 'content'"
)


class ArticleCreate(BaseModel):
    title: str
    authorid: int
    content: str
    modified: datetime


class ArticleUpdate(BaseModel):
    title: str | None = None
    modified: datetime | None = None
    content: str | None = None


class ArticleResponse(BaseModel):
    id: int
    title: str
    content: str
    modified: datetime
    authorid: int
    model_config = ConfigDict(from_attributes=True)


# --- Comment ---

COMMENT_REQUIRED_FIELDS = ("content", "commentorid", "articleid")
COMMENT_UPDATABLE_FIELDS = ("content",)
# Published client-facing wording; comments have no 'modified' column.
COMMENT_UPDATE_MESSAGE = "Request body must contain one of: 'modified' or 'content'"


class CommentCreate(BaseModel):
    content: str
    commentorid: int
    articleid: int


class CommentUpdate(BaseModel):
    content: str | None = None


class CommentResponse(BaseModel):
    id: int
    content: str
    articleid: int
    commentorid: int
    date_created: datetime
    model_config = ConfigDict(from_attributes=True)


# --- Health ---

class HealthResponse(BaseModel):
    status: str
    version: str
