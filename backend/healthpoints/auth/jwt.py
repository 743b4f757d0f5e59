"""
Gestion des tokens JWT pour l'authentification
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, List
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import HTTPException, status
from pydantic import BaseModel

from healthpoints.core.settings import get_settings

settings = get_settings()

# Configuration du hashage des mots de passe
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

AUTHORITIES_KEY = "auth"


class TokenData(BaseModel):
    """Données contenues dans un token"""
    login: str
    authorities: List[str]
    exp: datetime


class TokenResponse(BaseModel):
    """Réponse d'authentification"""
    id_token: str


class JWTManager:
    """Gestionnaire des tokens JWT"""

    def __init__(self):
        self.secret_key = settings.JWT_SECRET_KEY
        self.algorithm = settings.JWT_ALGORITHM
        self.token_validity_seconds = settings.JWT_TOKEN_VALIDITY_SECONDS
        self.token_validity_seconds_remember_me = settings.JWT_TOKEN_VALIDITY_SECONDS_FOR_REMEMBER_ME

    def create_token(self, login: str, authorities: List[str], remember_me: bool = False) -> str:
        """Crée un token JWT signé pour un login et ses autorisations"""
        validity = self.token_validity_seconds_remember_me if remember_me else self.token_validity_seconds
        expire = datetime.now(timezone.utc) + timedelta(seconds=validity)
        to_encode = {
            "sub": login,
            AUTHORITIES_KEY: ",".join(authorities),
            "exp": expire,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> TokenData:
        """Vérifie et décode un token JWT"""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])

            login: Optional[str] = payload.get("sub")
            if login is None:
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Invalid token payload"
                )

            raw_authorities = payload.get(AUTHORITIES_KEY) or ""
            authorities = [name for name in raw_authorities.split(",") if name]
            exp = datetime.fromtimestamp(payload.get("exp"))

            return TokenData(login=login, authorities=authorities, exp=exp)

        except JWTError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Could not validate credentials",
                headers={"WWW-Authenticate": "Bearer"},
            )


class PasswordManager:
    """Gestionnaire des mots de passe"""

    @staticmethod
    def hash_password(password: str) -> str:
        """Hashe un mot de passe"""
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Vérifie un mot de passe"""
        return pwd_context.verify(plain_password, hashed_password)


# Instances globales
jwt_manager = JWTManager()
password_manager = PasswordManager()
