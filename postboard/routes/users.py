"""
Postboard Backend — User Route Handlers
=========================================

What:  POST /register, POST /login, GET /users, GET /users/{id}.
How:   Bind the body through a schema, call one service operation, shape
       the response. Errors are raised and mapped by the global handlers.

Login failures:
    Unknown user and wrong password both produce 401 with the same body, so
    a client cannot probe which user names exist.

Ids:
    Path ids must be >= 1 (generated ids start at 1); 0 and negatives are a
    400 validation error rather than a 404 lookup.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db_session
from postboard.routes.deps import get_auth_service, get_user_service
from postboard.schemas.common import ErrorResponse
from postboard.schemas.user import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
)
from postboard.services.auth_service import AuthService
from postboard.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


@router.post(
    "/register",
    status_code=201,
    response_model=RegisterResponse,
    responses={
        400: {"description": "Invalid input", "model": ErrorResponse},
        500: {"description": "Registration failed", "model": ErrorResponse},
    },
    summary="Register a new user",
)
async def register_user(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> RegisterResponse:
    """
    Create a user with a bcrypt-hashed password.

    A taken user_name and an unhashable password give the same
    500 "Registration failed" response.
    """
    user = await users.register(db, username=body.user_name, password=body.password)
    return RegisterResponse(id=user.id, user_name=user.username)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "Invalid input", "model": ErrorResponse},
        401: {"description": "Invalid username or password", "model": ErrorResponse},
    },
    summary="Exchange credentials for an access token",
)
async def login_user(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
    auth: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    result = await auth.login(db, username=body.user_name, password=body.password)
    return LoginResponse(
        access_token=result.token.access_token,
        expires_at=result.token.expires_at,
        id=result.user.id,
        user_name=result.user.username,
    )


@router.get(
    "/users",
    response_model=List[UserResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all users",
)
async def list_users(
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> List[UserResponse]:
    return [UserResponse.from_model(user) for user in await users.list_all(db)]


@router.get(
    "/users/{user_id}",
    response_model=UserResponse,
    responses={
        400: {"description": "Invalid user ID", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
    },
    summary="Get a single user by ID",
)
async def get_user(
    user_id: int = Path(ge=1, description="User ID"),
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    user = await users.get_by_id(db, user_id)
    return UserResponse.from_model(user)
