"""
Entité Points - Domain Layer
Représente les compteurs bien-être saisis par un utilisateur pour une journée
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING
import datetime as dt

from .user import UserRef

if TYPE_CHECKING:
    from .user import User


class PointsBase(SQLModel):
    """Modèle de base pour Points"""
    date: dt.date = Field(index=True)
    exercise: Optional[int] = Field(default=None, ge=0, le=10)
    meals: Optional[int] = Field(default=None, ge=0, le=10)
    alcohol: Optional[int] = Field(default=None, ge=0, le=10)
    notes: Optional[str] = Field(default=None, max_length=140)


class Points(PointsBase, table=True):
    """Entité Points complète pour la base de données"""
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)

    # Relations
    user: "User" = Relationship(back_populates="points")

    @property
    def total(self) -> int:
        """Somme des trois compteurs, un compteur absent vaut 0"""
        return (self.exercise or 0) + (self.meals or 0) + (self.alcohol or 0)

    def __repr__(self) -> str:
        return (
            f"Points(id={self.id}, date={self.date}, exercise={self.exercise}, "
            f"meals={self.meals}, alcohol={self.alcohol}, user_id={self.user_id})"
        )


class PointsWrite(PointsBase):
    """Payload de création / mise à jour (l'id est contrôlé par la ressource)"""
    id: Optional[int] = None
    user: Optional[UserRef] = None


class PointsRead(PointsBase):
    """Schéma pour lire un enregistrement Points (réponse API)"""
    id: int
    user: Optional[UserRef] = None


class PointsPerWeek(SQLModel):
    """Vue dérivée, non persistée : total des points d'une semaine"""
    week: dt.date
    points: int


def to_points_read(points: Points) -> PointsRead:
    """Construit la représentation API d'un enregistrement"""
    owner = UserRef(id=points.user.id, login=points.user.login) if points.user else None
    return PointsRead(
        id=points.id,
        date=points.date,
        exercise=points.exercise,
        meals=points.meals,
        alcohol=points.alcohol,
        notes=points.notes,
        user=owner,
    )
