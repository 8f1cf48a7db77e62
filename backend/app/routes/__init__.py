# Routes package init
"""
Postboard Backend: API Routes Package
======================================

Route Inventory:
    - posts.py:   GET    /api/posts                      (list all)
                  GET    /api/posts/category/{category}  (list by category)
                  GET    /api/posts/tag/{tag}            (list by tag)
                  GET    /api/posts/{slug}               (single post)
                  POST   /api/posts                      (add)
                  PUT    /api/posts, POST /api/posts/update  (update, id in body)
                  DELETE /api/posts, POST /api/posts/delete  (delete, id in body)
    - health.py:  GET    /health                         (service health check)

Routes stay thin: decode input, make one service call, map its outcome.
"""
