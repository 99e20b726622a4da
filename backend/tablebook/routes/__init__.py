# Routes package init
"""
TableBook Backend — API Routes Package
========================================

Route Inventory:
    - users.py:         GET    /users/{id}          (user lookup)
                        POST   /signup              (user registration)
    - reservations.py:  GET    /reservation         (all bookings)
                        GET    /reservation/{id}    (bookings of one user)
                        POST   /reservation         (create booking)
                        PUT    /reservation         (update booking)
                        DELETE /reservation/{id}    (delete booking)
    - landing.py:       GET    /                    (static landing page)
    - health.py:        GET    /health              (service health check)

Routes are thin: extract parameters, call the service with the injected
Database, return the record or envelope. Error statuses come from the global
exception handler in main.py.
"""
