"""
Utilitaires de sécurité : principal courant et contrôle des rôles.
"""
from typing import List, Optional
from pydantic import BaseModel


class AuthoritiesConstants:
    """Noms des rôles connus"""
    ADMIN = "ROLE_ADMIN"
    USER = "ROLE_USER"
    ANONYMOUS = "ROLE_ANONYMOUS"


class CurrentUser(BaseModel):
    """Principal authentifié extrait du token"""
    login: str
    authorities: List[str] = []


def get_current_user_login(user: Optional[CurrentUser]) -> Optional[str]:
    """Login du principal courant, None si anonyme"""
    if user is None:
        return None
    return user.login


def is_current_user_in_role(user: Optional[CurrentUser], authority: str) -> bool:
    """Vrai si le principal courant possède l'autorisation donnée"""
    return user is not None and authority in user.authorities
