"""ORM models. Importing this package registers every table on Base.metadata."""

from blog.models.category import Category
from blog.models.post import Post

__all__ = ["Category", "Post"]
