"""
Pressroom Backend — API Routes Package
========================================

Route Inventory:
    - categories.py: GET/POST /categories, GET/PUT/DELETE /categories/{id}
    - authors.py:    GET/POST /authors,    GET/PUT/DELETE /authors/{id}
    - articles.py:   GET/POST /articles,   GET/PUT/DELETE /articles/{id}
                     (multipart form; optional `photo` file)
    - photos.py:     GET /photos, GET /photos/{id}
    - files.py:      GET /files/{path}     (stored blobs)
    - health.py:     GET /health

Design Principle:
    Routes are THIN: they pick the status code, pull data out of the request
    and hand it to a service. Errors are raised, never returned; the global
    handlers in main.py format them.
"""
