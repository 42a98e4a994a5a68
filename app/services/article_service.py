"""
Article service — rows of the ``articles`` table.

``modified`` is supplied by the client on create and update; the
``authorid`` foreign key is enforced by the database, not here.
"""
from app.models import Article
from app.services.base import TableService


class ArticleService(TableService[Article]):
    model = Article
