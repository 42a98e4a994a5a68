# Services package.
#
# Each module exposes one TableService subclass bound to a single table:
#
#   user_service     — UserService over ``users``
#   article_service  — ArticleService over ``articles``
#   comment_service  — CommentService over ``comments``
#
# A service receives its AsyncSession when it is constructed (see
# ``app.dependencies``) so that the router layer controls the transaction
# boundary via the ``get_db`` dependency.
