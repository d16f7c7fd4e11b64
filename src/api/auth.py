"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import CurrentPrincipal, get_auth_service
from src.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from src.services.auth import AuthService

router = APIRouter(tags=["auth"])

# Sync handlers: bcrypt and the database block, so they run on the threadpool


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user."""
    result = service.register(user_data.email, user_data.password)
    return AuthResponse(token=result.token, user=UserResponse.model_validate(result.user))


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Login with email and password."""
    result = service.login(credentials.email, credentials.password)
    return AuthResponse(token=result.token, user=UserResponse.model_validate(result.user))


@router.get("/auth/me", response_model=UserResponse)
def get_me(
    principal: CurrentPrincipal,
    service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Get the user identified by the gateway."""
    return service.get_user(principal.user_id)
