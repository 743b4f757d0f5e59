"""
Routes des comptes : authentification JWT, inscription, compte courant.
Routes = validation + delegation au service. Pas de logique metier ici.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlmodel import Session

from healthpoints.core.database import get_session
from healthpoints.auth.security import CurrentUser
from healthpoints.domain.entities import UserCreate, UserRead, to_user_read
from healthpoints.domain.services.account_service import account_service
from healthpoints.api.errors import BadRequestAlertException
from healthpoints.api.routers._shared import get_current_user, limiter

logger = logging.getLogger(__name__)

router = APIRouter()


class LoginVM(BaseModel):
    """Identifiants envoyes par le formulaire de connexion"""
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=100)
    rememberMe: bool = False


@router.post("/authenticate")
@limiter.limit("5/minute")
async def authorize(
    request: Request,
    login_vm: LoginVM,
    session: Session = Depends(get_session, scope="function")
):
    """Connexion utilisateur, retourne un token JWT"""
    try:
        token = account_service.authenticate(session, login_vm.username, login_vm.password, login_vm.rememberMe)
    except ValueError as e:
        logger.info(f"Echec d'authentification pour {login_vm.username}: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    return JSONResponse(
        content=token.model_dump(),
        headers={"Authorization": f"Bearer {token.id_token}"},
    )


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
@limiter.limit("3/hour")
async def register_account(
    request: Request,
    user_data: UserCreate,
    response: Response,
    session: Session = Depends(get_session, scope="function")
):
    """Inscription d'un nouvel utilisateur"""
    try:
        user = account_service.register(session, user_data)
    except ValueError as e:
        error_key = "emailexists" if "Email" in str(e) else "userexists"
        raise BadRequestAlertException(str(e), "userManagement", error_key)
    return to_user_read(user)


@router.get("/account", response_model=UserRead)
async def get_account(
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session, scope="function")
):
    """Compte de l'utilisateur authentifie"""
    user = account_service.get_user_by_login(session, current_user.login)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User could not be found")
    return to_user_read(user)
