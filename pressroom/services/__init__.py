"""
Pressroom Backend — Services Layer
====================================

What:  Resource controllers sitting between routes (HTTP) and repositories.

Service Inventory:
    - ResourceService: generic list/create/show/update/destroy pattern
    - CategoryService, AuthorService: ResourceService + delete guards
    - ArticleService: ResourceService + photo upload/replace/remove flow
    - PhotoService: read-only access to photo rows
    - BlobStore: file validation, storage and removal for uploaded photos

Services are constructed per request with the request's AsyncSession
(see pressroom.dependencies); none of them holds global database state.
"""
