"""
会话令牌解析
令牌由登录接口签发并写入Cookie，本服务只负责校验和读取身份
"""

import logging
from typing import Any, Dict, Optional

import jwt
from fastapi import Request

from storefront.core.config import settings
from storefront.api.exceptions import UnauthorizedException, ForbiddenException

logger = logging.getLogger(__name__)


def decode_token(raw_token: str) -> Dict[str, Any]:
    """校验并解码JWT，失败时抛出 jwt.InvalidTokenError"""
    return jwt.decode(raw_token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])


def _read_claims(request: Request) -> Optional[Dict[str, Any]]:
    raw_token = request.cookies.get(settings.auth_cookie_name)
    if not raw_token:
        return None

    try:
        return decode_token(raw_token)
    except jwt.InvalidTokenError as e:
        # 无效令牌按游客处理
        logger.debug(f"会话令牌无效: {e}")
        return None


async def get_optional_user_id(request: Request) -> Optional[str]:
    """获取当前登录用户ID，游客返回None"""
    claims = _read_claims(request)
    if not claims:
        return None

    user_id = claims.get("userId") or claims.get("id")
    return str(user_id) if user_id else None


async def require_admin(request: Request) -> Dict[str, Any]:
    """后台接口权限校验"""
    claims = _read_claims(request)
    if not claims:
        raise UnauthorizedException("Unauthorized")

    if claims.get("role") != "admin":
        raise ForbiddenException("Forbidden")

    return claims
