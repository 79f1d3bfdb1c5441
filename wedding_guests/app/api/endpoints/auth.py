"""
Login endpoint.

Accepts the OAuth2 password form (``username``, ``password``, ``scope``)
and returns a bearer token for valid admin credentials.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from ....core.security import create_access_token
from ....schemas.auth import Token
from ...services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth")


@router.post("/login", response_model=Token)
async def login(form: OAuth2PasswordRequestForm = Depends()) -> Token:
    """Authenticate an admin and return an access token.

    The requested scopes are accepted but not enforced; every admin
    account may manage the whole list.
    """
    user = await UserService.authenticate(form.username, form.password)
    if not user:
        logger.warning("Failed login for %s", form.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    token = create_access_token({"sub": user["email"]})
    return Token(access_token=token, token_type="bearer")
