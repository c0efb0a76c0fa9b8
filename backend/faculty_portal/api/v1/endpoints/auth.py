from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from faculty_portal.core.database import get_db
from faculty_portal.core.rate_limiter import auth_rate_limit
from faculty_portal.schemas.auth import UserRegister, UserLogin, UserPublic, AuthResponse
from faculty_portal.services.auth_service import AuthService

router = APIRouter()


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@auth_rate_limit()
async def register(
    request: Request,
    user_data: UserRegister,
    db: AsyncSession = Depends(get_db)
):
    """Create an account and sign it in"""
    user, token = await AuthService(db).register(user_data, client_ip=_client_ip(request))
    return AuthResponse(
        message="User created successfully",
        token=token,
        user=UserPublic.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
@auth_rate_limit()
async def login(
    request: Request,
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    user, token = await AuthService(db).login(credentials, client_ip=_client_ip(request))
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserPublic.model_validate(user),
    )
