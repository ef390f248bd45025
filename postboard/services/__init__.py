# Services package init
"""
Postboard Backend — Services Layer
====================================

What:  The query layer between routes (HTTP) and the store.
How:   Each service method runs one parameterized statement and raises an
       application exception on failure.

Service Inventory:
    - UserService: register, lookup by name/id, list
    - PostService: create, get, list, update, delete (ownership policy)
    - AuthService: login → signed access token

Services are built once per app by `create_app()` from its Settings and
reached from handlers through the dependencies in `postboard.routes.deps`.
"""
