# Routes package init
"""
Postboard Backend — API Routes Package
========================================

Route Inventory:
    - users.py:   POST /register, POST /login, GET /users, GET /users/{id}
    - posts.py:   POST/GET /posts, GET/PUT/DELETE /posts/{id}
    - health.py:  GET /health
    - deps.py:    service and authentication dependencies

Routes stay thin: bind input, call one service operation, shape the
response. Failures are raised as application exceptions and turned into
JSON by the handlers registered in `postboard.main`.
"""
