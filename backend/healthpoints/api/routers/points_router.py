"""
Routes Points : CRUD, liste paginee, totaux hebdomadaires.
Routes = validation + delegation au service. Pas de logique metier ici.
"""
import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlmodel import Session

from healthpoints.core.database import get_session
from healthpoints.core.settings import get_settings
from healthpoints.auth.security import (
    AuthoritiesConstants,
    CurrentUser,
    get_current_user_login,
    is_current_user_in_role,
)
from healthpoints.domain.entities import PointsPerWeek, PointsRead, PointsWrite, to_points_read
from healthpoints.domain.services.points_service import points_service
from healthpoints.api.errors import (
    BadRequestAlertException,
    create_entity_creation_alert,
    create_entity_deletion_alert,
    create_entity_update_alert,
)
from healthpoints.api.pagination import Pageable, get_pageable, generate_pagination_headers
from healthpoints.api.routers._shared import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter()

ENTITY_NAME = "points"


@router.post("/points", response_model=PointsRead, status_code=status.HTTP_201_CREATED)
async def create_points(
    points: PointsWrite,
    response: Response,
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session, scope="function")
):
    """Cree un nouvel enregistrement ; un non-administrateur en est toujours le proprietaire"""
    logger.debug(f"REST request to save Points : {points}")
    if points.id is not None:
        raise BadRequestAlertException("A new points cannot already have an ID", ENTITY_NAME, "idexists")

    try:
        result = points_service.create(session, current_user, points)
    except ValueError as e:
        raise BadRequestAlertException(str(e), ENTITY_NAME, "usernotfound")

    response.headers["Location"] = f"/api/points/{result.id}"
    response.headers.update(
        create_entity_creation_alert(get_settings().APPLICATION_NAME, ENTITY_NAME, str(result.id))
    )
    return to_points_read(result)


@router.put("/points", response_model=PointsRead)
async def update_points(
    points: PointsWrite,
    response: Response,
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session, scope="function")
):
    """Met a jour un enregistrement existant (remplacement complet)"""
    logger.debug(f"REST request to update Points : {points}")
    if points.id is None:
        raise BadRequestAlertException("Invalid id", ENTITY_NAME, "idnull")

    try:
        result = points_service.update(session, current_user, points)
    except ValueError as e:
        raise BadRequestAlertException(str(e), ENTITY_NAME, "usernotfound")
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Points not found")

    response.headers.update(
        create_entity_update_alert(get_settings().APPLICATION_NAME, ENTITY_NAME, str(points.id))
    )
    return to_points_read(result)


@router.get("/points", response_model=List[PointsRead])
async def get_all_points(
    request: Request,
    response: Response,
    pageable: Pageable = Depends(get_pageable),
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session, scope="function")
):
    """Page d'enregistrements : tous pour un administrateur, les siens sinon"""
    logger.debug("REST request to get a page of Points")
    owner_login = None
    if not is_current_user_in_role(current_user, AuthoritiesConstants.ADMIN):
        owner_login = get_current_user_login(current_user)

    try:
        page = points_service.find_page(session, pageable, owner_login=owner_login)
    except ValueError as e:
        raise BadRequestAlertException(str(e), ENTITY_NAME, "sortinvalid")

    response.headers.update(generate_pagination_headers(request.url, page))
    return [to_points_read(p) for p in page.content]


@router.get("/points/{points_id}", response_model=PointsRead)
async def get_points(
    points_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session, scope="function")
):
    """Recupere un enregistrement"""
    logger.debug(f"REST request to get Points : {points_id}")
    points = points_service.find_by_id(session, points_id)
    if points is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Points not found")
    return to_points_read(points)


@router.delete("/points/{points_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_points(
    points_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session, scope="function")
):
    """Supprime un enregistrement"""
    logger.debug(f"REST request to delete Points : {points_id}")
    points_service.delete_by_id(session, points_id)
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers=create_entity_deletion_alert(get_settings().APPLICATION_NAME, ENTITY_NAME, str(points_id)),
    )


@router.get("/points-this-week", response_model=PointsPerWeek)
async def get_points_this_week(
    tz: Optional[str] = Query(None),
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session, scope="function")
):
    """Total des points de la semaine courante (lundi-dimanche) pour l'utilisateur"""
    try:
        return points_service.points_this_week(session, get_current_user_login(current_user), tz)
    except ValueError as e:
        raise BadRequestAlertException(str(e), ENTITY_NAME, "invalidtimezone")


@router.get("/points-by-week/{start_date}", response_model=PointsPerWeek)
async def get_points_by_week(
    start_date: date,
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session, scope="function")
):
    """Total des points de la semaine (lundi-dimanche) contenant la date donnee"""
    return points_service.points_for_week(session, get_current_user_login(current_user), start_date)
