"""
Tests pour PointsService : requêtes, attribution du propriétaire, totaux.
"""
import pytest
from datetime import date

from healthpoints.api.pagination import Pageable
from healthpoints.auth.security import AuthoritiesConstants, CurrentUser
from healthpoints.domain.entities import Points, PointsWrite, UserRef
from healthpoints.domain.services.points_service import points_service

ADMIN = CurrentUser(login="admin", authorities=[AuthoritiesConstants.ADMIN, AuthoritiesConstants.USER])
USER = CurrentUser(login="user", authorities=[AuthoritiesConstants.USER])


def _add(session, user_id, day, exercise=None, meals=None, alcohol=None):
    return points_service.save(
        session,
        Points(date=day, exercise=exercise, meals=meals, alcohol=alcohol, user_id=user_id),
    )


class TestResolveOwner:
    def test_user_ignores_requested_owner(self, session, user_id, other_user_id):
        owner = points_service.resolve_owner(session, USER, UserRef(id=other_user_id))
        assert owner.id == user_id

    def test_admin_by_id_and_login(self, session, admin_id, other_user_id):
        assert points_service.resolve_owner(session, ADMIN, UserRef(id=other_user_id)).login == "other"
        assert points_service.resolve_owner(session, ADMIN, UserRef(login="OTHER")).id == other_user_id

    def test_admin_empty_reference_defaults_to_self(self, session, admin_id):
        assert points_service.resolve_owner(session, ADMIN, UserRef()).id == admin_id

    def test_admin_unknown_owner(self, session, admin_id):
        with pytest.raises(ValueError):
            points_service.resolve_owner(session, ADMIN, UserRef(id=999))

    def test_caller_without_account(self, session):
        with pytest.raises(ValueError):
            points_service.resolve_owner(session, CurrentUser(login="ghost"), None)


class TestFindPage:
    def test_owner_filter(self, session, user_id, other_user_id):
        _add(session, user_id, date(2026, 10, 19), 1, 1, 1)
        _add(session, other_user_id, date(2026, 10, 19), 1, 1, 1)

        everyone = points_service.find_all(session, Pageable(page=0, size=20))
        own = points_service.find_by_user_login(session, "user", Pageable(page=0, size=20))

        assert everyone.total_elements == 2
        assert own.total_elements == 1
        assert own.content[0].user_id == user_id

    def test_page_beyond_last(self, session, user_id):
        _add(session, user_id, date(2026, 10, 19))

        page = points_service.find_all(session, Pageable(page=3, size=20))

        assert page.content == []
        assert page.total_elements == 1

    def test_unknown_sort(self, session):
        with pytest.raises(ValueError):
            points_service.find_all(session, Pageable(sort=[("hashed_password", False)]))


class TestWeeklyTotals:
    def test_sum_over_inclusive_window(self, session, user_id):
        _add(session, user_id, date(2026, 10, 19), exercise=2, meals=1, alcohol=0)
        _add(session, user_id, date(2026, 10, 25), exercise=0, meals=0, alcohol=1)
        _add(session, user_id, date(2026, 10, 26), exercise=1, meals=1, alcohol=1)

        result = points_service.points_for_week(session, "user", date(2026, 10, 21))

        assert result.week == date(2026, 10, 19)
        assert result.points == 4

    def test_null_counters(self, session, user_id):
        _add(session, user_id, date(2026, 10, 19), exercise=1)

        assert points_service.points_for_week(session, "user", date(2026, 10, 19)).points == 1

    def test_anonymous_login_has_no_points(self, session, user_id):
        _add(session, user_id, date(2026, 10, 19), exercise=1, meals=1, alcohol=1)

        assert points_service.points_for_week(session, None, date(2026, 10, 19)).points == 0


class TestCreateAndDelete:
    def test_create_assigns_id_and_owner(self, session, user_id):
        payload = PointsWrite(date=date(2026, 10, 19), exercise=1, meals=0, alcohol=0)

        points = points_service.create(session, USER, payload)

        assert points.id is not None
        assert points.user_id == user_id

    def test_delete_missing(self, session):
        assert points_service.delete_by_id(session, 404) is False

    def test_delete_existing(self, session, user_id):
        points = _add(session, user_id, date(2026, 10, 19))

        assert points_service.delete_by_id(session, points.id) is True
        assert points_service.find_by_id(session, points.id) is None
