"""
Initialisation des entités du domaine
Résout les imports circulaires entre les modèles
"""

# Import des modèles dans l'ordre correct pour éviter les imports circulaires
from .user import User, UserCreate, UserRead, UserRef, Authority, UserAuthority, to_user_read
from .points import Points, PointsWrite, PointsRead, PointsPerWeek, to_points_read

__all__ = [
    "User", "UserCreate", "UserRead", "UserRef", "Authority", "UserAuthority", "to_user_read",
    "Points", "PointsWrite", "PointsRead", "PointsPerWeek", "to_points_read",
]
