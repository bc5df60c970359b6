"""Signup and login endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_settings
from core.config import Settings
from schemas.auth import AuthRequest, TokenResponse
from services import auth_service
from services.exceptions import ConflictError, UnauthorizedError

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=TokenResponse, status_code=201)
async def signup(
    data: AuthRequest,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> TokenResponse:
    """Register a new account and return an access token."""
    try:
        token = await auth_service.signup(db, data, settings)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=e.message)
    return TokenResponse(access_token=token)


@router.post("/login", response_model=TokenResponse, status_code=200)
async def login(
    data: AuthRequest,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> TokenResponse:
    """Exchange email and password for an access token."""
    try:
        token = await auth_service.login(db, data, settings)
    except UnauthorizedError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return TokenResponse(access_token=token)
