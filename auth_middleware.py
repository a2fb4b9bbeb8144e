import jwt
import logging
from fastapi import HTTPException, Request
from config import config

logger = logging.getLogger(__name__)

async def get_user_id_from_token(request: Request) -> str:
    """
    Extracts and verifies the user_id from a Supabase JWT token.
    Verifies the signature, expiration and audience.
    """
    auth_header = request.headers.get("Authorization")

    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(
            status_code=401,
            detail="Missing or invalid Authorization header"
        )

    token = auth_header.replace("Bearer ", "", 1)

    if not config.SUPABASE_JWT_SECRET:
        raise HTTPException(
            status_code=500,
            detail="Server misconfiguration: JWT secret not found"
        )

    try:
        # Supabase signs access tokens with HS256
        decoded = jwt.decode(
            token,
            config.SUPABASE_JWT_SECRET,
            algorithms=["HS256"],
            audience="authenticated"
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token has expired")
    except jwt.InvalidTokenError as e:
        raise HTTPException(status_code=401, detail=f"Invalid token: {str(e)}")

    user_id = decoded.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token: no user_id")

    return user_id

async def get_current_user_id(request: Request) -> str:
    """
    Resolve the calling user: JWT bearer token first, then the X-User-ID
    header outside production, then a demo user in development.
    """
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        user_id = await get_user_id_from_token(request)
        logger.debug(f"Authenticated user via JWT: {user_id[:8]}...")
        return user_id

    if config.is_production():
        raise HTTPException(
            status_code=401,
            detail="Authentication required. Provide an Authorization Bearer token"
        )

    user_id = request.headers.get("X-User-ID")
    if user_id:
        logger.debug(f"Using X-User-ID header: {user_id[:8]}...")
        return user_id

    if config.ENVIRONMENT == "development":
        logger.warning("⚠️ No authentication provided, using 'demo-user' for development")
        return "demo-user"

    raise HTTPException(
        status_code=401,
        detail="Authentication required. Provide Authorization Bearer token or X-User-ID header"
    )

def get_bearer_token(request: Request) -> str:
    """Raw access token, for calls that must act on the user's own session"""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing or invalid Authorization header")
    return auth_header.replace("Bearer ", "", 1)
