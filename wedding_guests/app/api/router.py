"""
Top-level router of the development backend.

Paths are served at the root (``/auth/login``, ``/convidados``) because
that is where the admin client expects them.
"""

from fastapi import APIRouter

from .endpoints import auth, guests

router = APIRouter()

router.include_router(auth.router, tags=["auth"])
router.include_router(guests.router, tags=["convidados"])
