import logging
from typing import Dict, Optional
from supabase import AuthError
from supabase_config import supabase_config

logger = logging.getLogger(__name__)

class AuthServiceError(Exception):
    """Raised when Supabase Auth rejects a request"""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

def _serialize_user(user) -> Optional[Dict]:
    if user is None:
        return None
    return {
        "id": str(user.id),
        "email": getattr(user, "email", None),
        "user_metadata": getattr(user, "user_metadata", None) or {}
    }

def _serialize_session(session) -> Optional[Dict]:
    if session is None:
        return None
    return {
        "access_token": session.access_token,
        "refresh_token": session.refresh_token,
        "expires_at": getattr(session, "expires_at", None),
        "token_type": getattr(session, "token_type", "bearer")
    }

class AuthService:
    """Thin wrapper around Supabase Auth (GoTrue)"""

    def _get_auth(self):
        if not supabase_config or not supabase_config.is_configured():
            raise ConnectionError("Supabase is not configured. Check environment variables.")
        return supabase_config.get_client().auth

    def sign_up(self, email: str, password: str, full_name: str = "") -> Dict:
        auth = self._get_auth()
        try:
            response = auth.sign_up({
                "email": email,
                "password": password,
                "options": {"data": {"full_name": full_name}}
            })
        except AuthError as e:
            logger.warning(f"Sign-up rejected for {email}: {e}")
            raise AuthServiceError(str(e))

        logger.info(f"✅ User signed up: {email}")
        return {"user": _serialize_user(response.user), "session": _serialize_session(response.session)}

    def sign_in(self, email: str, password: str) -> Dict:
        auth = self._get_auth()
        try:
            response = auth.sign_in_with_password({"email": email, "password": password})
        except AuthError as e:
            logger.warning(f"Sign-in rejected for {email}: {e}")
            raise AuthServiceError("Invalid email or password", status_code=401)

        return {"user": _serialize_user(response.user), "session": _serialize_session(response.session)}

    def sign_out(self, access_token: str) -> None:
        auth = self._get_auth()
        try:
            auth.admin.sign_out(access_token)
        except AuthError as e:
            raise AuthServiceError(str(e))

    def get_current_user(self, access_token: str) -> Dict:
        auth = self._get_auth()
        try:
            response = auth.get_user(access_token)
        except AuthError as e:
            raise AuthServiceError(str(e), status_code=401)

        if response is None or response.user is None:
            raise AuthServiceError("User not found", status_code=401)
        return _serialize_user(response.user)

    def reset_password(self, email: str) -> None:
        auth = self._get_auth()
        try:
            auth.reset_password_for_email(email)
        except AuthError as e:
            raise AuthServiceError(str(e))
        logger.info(f"Password reset requested for {email}")

    def update_password(self, user_id: str, new_password: str) -> Dict:
        auth = self._get_auth()
        try:
            response = auth.admin.update_user_by_id(user_id, {"password": new_password})
        except AuthError as e:
            raise AuthServiceError(str(e))
        return _serialize_user(response.user)

# Global instance for app-wide use
auth_service = AuthService()
