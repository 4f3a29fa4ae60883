"""
인증 포트

요청마다 한 번만 주체(Principal)를 결정해서 라우트에 주입한다.

- Authorization: Bearer <JWT> 가 유효하면 AuthenticatedUser
- 토큰이 없거나 유효하지 않으면 AnonymousUser
- REQUIRE_AUTH=true 이면 익명 접근은 401
"""

from dataclasses import dataclass
from typing import Literal

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import settings
from app.core.context import bind_user
from app.core.exceptions import UnauthorizedError
from app.core.logging import get_logger

logger = get_logger(__name__)

ANONYMOUS_USER_ID = "anonymous"

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthenticatedUser:
    id: str
    email: str = ""
    name: str = ""
    kind: Literal["authenticated"] = "authenticated"

    @property
    def is_anonymous(self) -> bool:
        return False


@dataclass(frozen=True)
class AnonymousUser:
    id: str = ANONYMOUS_USER_ID
    email: str = "anonymous@example.com"
    name: str = "Anonymous User"
    kind: Literal["anonymous"] = "anonymous"

    @property
    def is_anonymous(self) -> bool:
        return True


Principal = AuthenticatedUser | AnonymousUser


def create_access_token(user_id: str, email: str = "", name: str = "") -> str:
    """HS256 액세스 토큰 발급 (테스트 및 내부 도구용)"""
    payload = {"sub": user_id, "email": email, "name": name}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_principal(token: str | None) -> Principal:
    """토큰을 검증해서 주체로 변환, 실패 시 익명 사용자"""
    if not token or not settings.jwt_secret:
        return AnonymousUser()

    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.PyJWTError as e:
        logger.info("토큰 검증 실패, 익명 처리", error=type(e).__name__)
        return AnonymousUser()

    user_id = payload.get("sub")
    if not user_id:
        return AnonymousUser()

    return AuthenticatedUser(
        id=str(user_id),
        email=payload.get("email") or "",
        name=payload.get("name") or "",
    )


async def get_principal(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Principal:
    """요청 주체 결정 의존성"""
    principal = decode_principal(credentials.credentials if credentials else None)

    if principal.is_anonymous and settings.require_auth:
        raise UnauthorizedError()

    bind_user(principal.id)
    request.state.principal = principal
    return principal
