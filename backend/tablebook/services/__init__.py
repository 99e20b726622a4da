# Services package init
"""
TableBook Backend — Services Layer
====================================

What:  Business logic layer sitting between routes (HTTP) and the database pool.
How:   Services receive the injected `Database` handle on every call, validate
       input, execute one statement inside `db.session()`, and return Pydantic
       records or raise exceptions from `tablebook.exceptions`.

Service Inventory:
    - UserService:    user lookup and registration
    - BookingService: reservation listing, creation, update and deletion

Services are stateless; the module-level instances are shared by all requests.
"""
