"""
Service layer for the development backend.

Each service encapsulates the SQL for one domain so the routers only
deal with HTTP concerns.
"""
