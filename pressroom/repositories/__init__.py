"""
Pressroom Backend — Repositories
==================================

What:  Explicit persistence layer: one repository per entity, each bound to
       the request's AsyncSession at construction.
Why:   Keeps load/save concerns out of the ORM entities and gives the services
       a small, typed surface (find / get / add / save / delete).
"""

from pressroom.repositories.base import Relation, Repository
from pressroom.repositories.entities import (
    ArticleRepository,
    AuthorRepository,
    CategoryRepository,
    PhotoRepository,
)

__all__ = [
    "Relation",
    "Repository",
    "ArticleRepository",
    "AuthorRepository",
    "CategoryRepository",
    "PhotoRepository",
]
