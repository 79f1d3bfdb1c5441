"""
HTTP routes of the development backend.

``router`` in :mod:`.router` aggregates the per-domain routers under
``api/endpoints``.
"""
