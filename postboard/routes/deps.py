"""
Postboard Backend — Route Dependencies
========================================

What:  FastAPI dependencies that hand handlers their services and the
       authenticated caller.
Why:   Handlers never reach for module-level singletons; everything comes
       from the app that `create_app()` assembled (`request.app.state`).

Authentication:
    `get_current_user` is attached to the post mutation routes. When
    AUTH_REQUIRED is on it demands a valid bearer token and returns its
    claims; when off it returns None and the routes behave as an open
    surface.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from postboard.config import Settings
from postboard.exceptions import ForbiddenError, UnauthorizedError
from postboard.security import TokenClaims, TokenIssuer
from postboard.services.auth_service import AuthService
from postboard.services.post_service import PostService
from postboard.services.user_service import UserService

_bearer = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_post_service(request: Request) -> PostService:
    return request.app.state.post_service


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


async def get_current_user(
    settings: Settings = Depends(get_settings),
    tokens: TokenIssuer = Depends(get_token_issuer),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> Optional[TokenClaims]:
    """
    Resolve the bearer token into claims.

    Raises:
        UnauthorizedError: auth is required and the token is missing, expired or invalid
    """
    if not settings.auth_required:
        return None
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthorizedError(message="Missing bearer token")
    return tokens.decode(credentials.credentials)


def ensure_acting_user(claims: Optional[TokenClaims], user_id: int) -> None:
    """
    The body's user_id must be the token's subject.

    Raises:
        ForbiddenError: a valid token tries to act as another user
    """
    if claims is not None and claims.user_id != user_id:
        raise ForbiddenError(context={"token_user_id": claims.user_id, "body_user_id": user_id})
