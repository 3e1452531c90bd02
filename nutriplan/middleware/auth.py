"""
NutriPlan API - Authentication Middleware.

JWT verification for protected routes.
"""

from typing import Optional

from fastapi import Request, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from nutriplan.services.auth import verify_token, is_token_blacklisted


class JWTBearer(HTTPBearer):
    """
    JWT Bearer token authentication.

    Custom HTTPBearer that validates access tokens and rejects tokens
    revoked through logout. The user id is also stored on
    ``request.state`` so rate limits can be keyed per user.
    """

    def __init__(self, auto_error: bool = True):
        # Missing credentials are rejected below with 403, whatever status
        # HTTPBearer itself would use.
        super().__init__(auto_error=False)
        self.reject = auto_error

    def _fail(self, status_code: int, detail: str) -> None:
        if self.reject:
            raise HTTPException(status_code=status_code, detail=detail)

    async def __call__(self, request: Request) -> Optional[str]:
        """
        Verify JWT token from Authorization header.

        Returns:
            Optional[str]: User ID from token if valid.

        Raises:
            HTTPException: 403 if token is invalid or missing, 401 if revoked.
        """
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)

        if not credentials:
            self._fail(status.HTTP_403_FORBIDDEN, "Not authenticated")
            return None

        if credentials.scheme.lower() != "bearer":
            self._fail(status.HTTP_403_FORBIDDEN, "Invalid authentication scheme")
            return None

        # Logged-out tokens
        if await is_token_blacklisted(credentials.credentials):
            self._fail(status.HTTP_401_UNAUTHORIZED, "Token has been revoked")
            return None

        payload = verify_token(credentials.credentials)
        if not payload:
            self._fail(status.HTTP_403_FORBIDDEN, "Invalid or expired token")
            return None

        user_id = payload.get("sub")
        if not user_id:
            self._fail(status.HTTP_403_FORBIDDEN, "Invalid token payload")
            return None

        request.state.user_id = user_id
        return user_id


# Global JWT bearer instance for dependency injection
jwt_bearer = JWTBearer()
