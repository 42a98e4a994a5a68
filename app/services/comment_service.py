"""
Comment service — rows of the ``comments`` table.

``date_created`` is assigned by the database at insert time.  Both
foreign keys (``articleid``, ``commentorid``) are enforced by the engine;
deleting an article or user cascades to its comments.
"""
from app.models import Comment
from app.services.base import TableService


class CommentService(TableService[Comment]):
    model = Comment
