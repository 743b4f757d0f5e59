"""
Entité User - Domain Layer
Représente un compte de l'application 21 Points et ses autorisations
"""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import DateTime
from pydantic import field_validator
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime, timezone
import re

if TYPE_CHECKING:
    from .points import Points


LOGIN_PATTERN = r'^[_.@A-Za-z0-9-]+$'
EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'


class UserAuthority(SQLModel, table=True):
    """Table d'association user <-> authority"""
    __tablename__ = "user_authority"

    user_id: Optional[int] = Field(default=None, foreign_key="user.id", primary_key=True)
    authority_name: Optional[str] = Field(default=None, foreign_key="authority.name", primary_key=True)


class Authority(SQLModel, table=True):
    """Rôle attribuable à un utilisateur (ROLE_ADMIN, ROLE_USER)"""
    name: str = Field(primary_key=True, max_length=50)

    users: List["User"] = Relationship(back_populates="authorities", link_model=UserAuthority)


class UserBase(SQLModel):
    """Modèle de base pour User"""
    login: str = Field(unique=True, index=True, min_length=1, max_length=50)
    email: Optional[str] = Field(default=None, unique=True, max_length=254)
    first_name: Optional[str] = Field(default=None, max_length=50)
    last_name: Optional[str] = Field(default=None, max_length=50)
    activated: bool = Field(default=True)

    @field_validator('login')
    @classmethod
    def validate_login(cls, v: str) -> str:
        if not re.match(LOGIN_PATTERN, v):
            raise ValueError('Invalid login format')
        return v.lower()

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not re.match(EMAIL_PATTERN, v):
            raise ValueError('Invalid email format')
        return v.lower()


class User(UserBase, table=True):
    """Entité User complète pour la base de données"""
    id: Optional[int] = Field(default=None, primary_key=True)
    hashed_password: str = Field(max_length=60)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
    )

    # Relations
    authorities: List[Authority] = Relationship(back_populates="users", link_model=UserAuthority)
    points: List["Points"] = Relationship(back_populates="user")

    @property
    def authority_names(self) -> List[str]:
        return sorted(authority.name for authority in self.authorities)


class UserCreate(UserBase):
    """Schéma d'inscription d'un utilisateur"""
    password: str = Field(min_length=4, max_length=100)


class UserRead(UserBase):
    """Schéma pour lire un compte (réponse API)"""
    id: int
    created_at: datetime
    authorities: List[str] = []


class UserRef(SQLModel):
    """Référence vers le propriétaire d'un enregistrement (id ou login)"""
    id: Optional[int] = None
    login: Optional[str] = None


def to_user_read(user: User) -> UserRead:
    """Construit la représentation API d'un compte avec ses autorisations"""
    return UserRead(
        id=user.id,
        login=user.login,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        activated=user.activated,
        created_at=user.created_at,
        authorities=user.authority_names,
    )
