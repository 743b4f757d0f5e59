"""
Utilitaires partages entre les routers API.
"""
import logging
from fastapi import Depends, Request, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from slowapi import Limiter
from slowapi.util import get_remote_address
from jose import JWTError, jwt as jose_jwt

from healthpoints.auth.jwt import jwt_manager
from healthpoints.auth.security import CurrentUser
from healthpoints.core.settings import get_settings

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


async def security(request: Request) -> HTTPAuthorizationCredentials:
    """Extrait le JWT depuis le header Bearer."""
    creds = await _bearer_scheme(request)
    if creds:
        return creds

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(token: HTTPAuthorizationCredentials = Depends(security)) -> CurrentUser:
    """Principal authentifie (login + autorisations) porte par le token"""
    token_data = jwt_manager.verify_token(extract_token_from_credentials(token))
    return CurrentUser(login=token_data.login, authorities=token_data.authorities)


def _extract_token_from_request(request: Request) -> str | None:
    """Extrait le JWT brut depuis le header (pour le rate limiter)."""
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:]
    return None


def _get_user_or_ip(request: Request) -> str:
    """Key function pour le rate limiter : retourne le login JWT si present, sinon l'IP."""
    token = _extract_token_from_request(request)
    if token:
        try:
            settings = get_settings()
            payload = jose_jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
            login = payload.get("sub")
            if login:
                return f"user:{login}"
        except JWTError:
            pass
    return get_remote_address(request)


limiter = Limiter(
    key_func=_get_user_or_ip,
    default_limits=["100/minute"],
    headers_enabled=True,
    enabled=get_settings().RATE_LIMIT_ENABLED,
)


def extract_token_from_credentials(token_credentials) -> str:
    """Extrait le token de l'objet credentials"""
    if hasattr(token_credentials, 'credentials'):
        return token_credentials.credentials
    return str(token_credentials)
