"""
Pressroom Backend — ORM Models
================================

Importing this package registers every table on `Base.metadata`.
"""

from pressroom.models.article import Article
from pressroom.models.author import Author
from pressroom.models.category import Category
from pressroom.models.photo import Photo

__all__ = ["Article", "Author", "Category", "Photo"]
