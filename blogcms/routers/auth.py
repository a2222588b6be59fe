from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from pydantic import BaseModel
from sqlmodel import Session

from blogcms.core.config import Settings, get_settings
from blogcms.core.rate_limit import RateLimiter, RateLimitExceeded, client_key
from blogcms.core.security import decode_access_token
from blogcms.db.session import get_session
from blogcms.models.user import UserPublic
from blogcms.services.auth import AuthService

router = APIRouter()

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/login", auto_error=False)


class LoginRequest(BaseModel):
    # Either the username or the email address
    username: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    message: str
    token: str
    user: UserPublic


class TokenUser(BaseModel):
    """Identity decoded from a bearer token."""
    id: int
    username: str
    role: str


def get_auth_service(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(session, settings)


def login_rate_limit(request: Request) -> None:
    limiter: RateLimiter = request.app.state.auth_limiter
    try:
        limiter.consume(client_key(request))
    except RateLimitExceeded as e:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="登录尝试过于频繁，请15分钟后再试",
            headers={"Retry-After": str(e.retry_after)},
        )


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    settings: Settings = Depends(get_settings),
) -> TokenUser:
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="访问令牌缺失",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = decode_access_token(token, settings.JWT_SECRET, settings.ALGORITHM)
        return TokenUser(
            id=int(payload["sub"]),
            username=payload.get("username", ""),
            role=payload.get("role", ""),
        )
    except (JWTError, KeyError, TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="无效的访问令牌")


@router.post("/login", response_model=LoginResponse, dependencies=[Depends(login_rate_limit)])
def login(data: LoginRequest, service: AuthService = Depends(get_auth_service)):
    if not data.username or not data.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="用户名和密码不能为空")

    user = service.authenticate_user(data.username, data.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="用户名或密码错误")

    return LoginResponse(
        message="登录成功",
        token=service.create_token_for(user),
        user=UserPublic.model_validate(user, from_attributes=True),
    )


@router.get("/me")
def read_current_user(
    current_user: TokenUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    """
    Get current user.
    """
    user = service.get_user_by_id(current_user.id)
    if not user:
        raise HTTPException(status_code=404, detail="用户不存在")

    return {
        "user": {
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "role": user.role,
            "created_at": user.created_at,
        }
    }
