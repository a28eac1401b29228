"""
Authentication router.

Endpoints:
- POST /auth/login     exchange credentials for an access token
- POST /auth/register  create a user in the in-memory store
- GET  /auth/me        decoded token payload of the caller
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status

from movie_catalog.auth.guards import get_current_user
from movie_catalog.auth.users import AccessToken, AuthService, UserCredentials, UserOut

router = APIRouter(prefix="/auth", tags=["auth"])


def get_auth_service(request: Request) -> AuthService:
    """Dependency returning the application's auth service."""
    return request.app.state.auth_service


@router.post(
    "/login",
    name="auth.login",
    response_model=AccessToken,
    status_code=status.HTTP_201_CREATED,
)
async def login(
    credentials: UserCredentials,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Login and receive an access token."""
    return auth_service.login(credentials.username, credentials.password)


@router.post(
    "/register",
    name="auth.register",
    response_model=Dict[str, UserOut],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    credentials: UserCredentials,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Register a new user (in-memory)."""
    user = auth_service.register(credentials.username, credentials.password)
    return {"user": user}


@router.get("/me", name="auth.me", response_model=Dict[str, Any])
async def me(user: Dict[str, Any] = Depends(get_current_user)):
    """Return the caller's identity as carried by the token."""
    return user
