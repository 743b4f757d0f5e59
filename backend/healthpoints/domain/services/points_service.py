"""
Service Points : accès aux enregistrements, attribution du propriétaire, total hebdomadaire.
"""
import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlmodel import Session, select, func

from healthpoints.api.pagination import Page, Pageable
from healthpoints.auth.security import AuthoritiesConstants, CurrentUser, is_current_user_in_role
from healthpoints.domain.entities import Points, PointsPerWeek, PointsWrite, User, UserRef

logger = logging.getLogger(__name__)


def week_window(anchor: date) -> Tuple[date, date]:
    """Lundi et dimanche de la semaine ISO contenant `anchor` (bornes incluses)"""
    monday = anchor - timedelta(days=anchor.weekday())
    return monday, monday + timedelta(days=6)


def today_in_timezone(timezone: Optional[str] = None) -> date:
    """Date du jour dans le fuseau demandé, ou en heure locale du serveur"""
    if timezone is None:
        return date.today()
    try:
        zone = ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        raise ValueError(f"Unknown time zone: {timezone}")
    return datetime.now(zone).date()


class PointsService:

    SORTABLE_FIELDS = {
        "id": Points.id,
        "date": Points.date,
        "exercise": Points.exercise,
        "meals": Points.meals,
        "alcohol": Points.alcohol,
        "notes": Points.notes,
    }

    # ---- Accès aux données ----

    def find_page(
        self, session: Session, pageable: Pageable, owner_login: Optional[str] = None
    ) -> Page[Points]:
        """Page d'enregistrements, restreinte à un propriétaire si `owner_login` est fourni"""
        query = select(Points)
        count_query = select(func.count()).select_from(Points)
        if owner_login is not None:
            query = query.join(User).where(User.login == owner_login)
            count_query = count_query.join(User).where(User.login == owner_login)

        for prop, descending in pageable.sort:
            column = self.SORTABLE_FIELDS.get(prop)
            if column is None:
                raise ValueError(f"Unknown sort property: {prop}")
            query = query.order_by(column.desc() if descending else column.asc())
        # Ordre stable entre les pages
        query = query.order_by(Points.id.asc())

        total = session.exec(count_query).one()
        content = session.exec(query.offset(pageable.offset).limit(pageable.size)).all()
        return Page(content=list(content), number=pageable.page, size=pageable.size, total_elements=total)

    def find_all(self, session: Session, pageable: Pageable) -> Page[Points]:
        return self.find_page(session, pageable)

    def find_by_user_login(self, session: Session, login: str, pageable: Pageable) -> Page[Points]:
        return self.find_page(session, pageable, owner_login=login)

    def find_all_by_date_between_and_user_login(
        self, session: Session, start: date, end: date, login: Optional[str]
    ) -> List[Points]:
        query = (
            select(Points)
            .join(User)
            .where(Points.date >= start, Points.date <= end, User.login == login)
            .order_by(Points.date.asc())
        )
        return list(session.exec(query).all())

    def find_by_id(self, session: Session, points_id: int) -> Optional[Points]:
        return session.get(Points, points_id)

    def save(self, session: Session, points: Points) -> Points:
        session.add(points)
        session.flush()
        session.refresh(points)
        return points

    def delete_by_id(self, session: Session, points_id: int) -> bool:
        points = session.get(Points, points_id)
        if points is None:
            return False
        session.delete(points)
        session.flush()
        return True

    # ---- Propriétaire ----

    def _find_user(self, session: Session, ref: UserRef) -> Optional[User]:
        if ref.id is not None:
            return session.get(User, ref.id)
        return session.exec(select(User).where(User.login == ref.login.lower())).first()

    def resolve_owner(
        self,
        session: Session,
        current_user: CurrentUser,
        requested: Optional[UserRef],
        default: Optional[User] = None,
    ) -> User:
        """Propriétaire effectif : seul un administrateur peut désigner un autre compte"""
        if is_current_user_in_role(current_user, AuthoritiesConstants.ADMIN):
            if requested is not None and (requested.id is not None or requested.login):
                owner = self._find_user(session, requested)
                if owner is None:
                    raise ValueError("Owner not found")
                return owner
            if default is not None:
                return default

        logger.debug(f"No user passed in, using current user: {current_user.login}")
        owner = session.exec(select(User).where(User.login == current_user.login)).first()
        if owner is None:
            raise ValueError("Current user not found")
        return owner

    # ---- CRUD ----

    def create(self, session: Session, current_user: CurrentUser, payload: PointsWrite) -> Points:
        owner = self.resolve_owner(session, current_user, payload.user)
        points = Points(
            date=payload.date,
            exercise=payload.exercise,
            meals=payload.meals,
            alcohol=payload.alcohol,
            notes=payload.notes,
            user_id=owner.id,
        )
        return self.save(session, points)

    def update(self, session: Session, current_user: CurrentUser, payload: PointsWrite) -> Optional[Points]:
        """Remplacement complet ; None si l'id n'existe pas"""
        points = self.find_by_id(session, payload.id)
        if points is None:
            return None

        owner = self.resolve_owner(session, current_user, payload.user, default=points.user)
        points.date = payload.date
        points.exercise = payload.exercise
        points.meals = payload.meals
        points.alcohol = payload.alcohol
        points.notes = payload.notes
        points.user_id = owner.id
        return self.save(session, points)

    # ---- Totaux hebdomadaires ----

    def points_for_week(self, session: Session, login: Optional[str], anchor: date) -> PointsPerWeek:
        """Total exercise + meals + alcohol sur la semaine lundi-dimanche contenant `anchor`"""
        start_of_week, end_of_week = week_window(anchor)
        logger.debug(f"Looking for points between: {start_of_week} and {end_of_week}")

        points = self.find_all_by_date_between_and_user_login(session, start_of_week, end_of_week, login)
        return PointsPerWeek(week=start_of_week, points=sum(p.total for p in points))

    def points_this_week(
        self, session: Session, login: Optional[str], timezone: Optional[str] = None
    ) -> PointsPerWeek:
        return self.points_for_week(session, login, today_in_timezone(timezone))


points_service = PointsService()
