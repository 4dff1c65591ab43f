from fastapi import Header, Depends
from typing import Optional
import jwt

from careerquest.config import Settings, get_settings
from careerquest.errors import AuthError
from careerquest.middleware.correlation import request_user_id_var
from careerquest.utils.logger import logger


def user_id_from_jwt(token: str, settings: Settings) -> str:
    """
    Validate a bearer token issued by the auth service and return its user ID.

    Tokens are HS256-signed with the shared JWT secret; the user ID is read
    from 'sub', falling back to a 'userId' claim.
    """
    if not settings.jwt_secret:
        raise AuthError("Bearer tokens are not accepted: JWT secret not configured")

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=["HS256"],
            options={"verify_exp": True, "verify_aud": False},
        )
    except jwt.ExpiredSignatureError:
        raise AuthError("Token expired. Please sign in again.")
    except jwt.InvalidTokenError as e:
        raise AuthError(f"Invalid token: {str(e)}")

    user_id = payload.get("sub") or payload.get("userId")
    if not user_id:
        raise AuthError("Invalid token: missing user ID")
    return str(user_id)


async def get_user_id(
    authorization: Optional[str] = Header(None),
    x_user_id: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Identity of the requesting user (required for every saved-item endpoint)

    Priority: Authorization: Bearer <jwt>, then X-User-ID. A bearer token that
    fails validation is rejected rather than falling through to X-User-ID.

    Usage:
        @router.get("/endpoint")
        async def endpoint(user_id: str = Depends(get_user_id)):
            # Filter data by user_id
    """
    if authorization:
        parts = authorization.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise AuthError("Invalid authorization header format. Expected: Bearer <token>")
        user_id = user_id_from_jwt(parts[1], settings)
        request_user_id_var.set(user_id)
        return user_id

    if x_user_id and x_user_id.strip():
        return x_user_id.strip()

    logger.info("[Auth] Request without user identity rejected")
    raise AuthError("Unauthorized")
