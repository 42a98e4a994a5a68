"""
User service — rows of the ``users`` table.

Users have no delete endpoint; ``delete`` is inherited from
``TableService`` but no route exposes it.
"""
from app.models import User
from app.services.base import TableService


class UserService(TableService[User]):
    model = User
