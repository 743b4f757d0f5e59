"""
Service des comptes : inscription, authentification, création d'utilisateurs.
"""
import logging
from typing import Iterable, Optional
from sqlmodel import Session, select

from healthpoints.auth.jwt import jwt_manager, password_manager, TokenResponse
from healthpoints.auth.security import AuthoritiesConstants
from healthpoints.domain.entities import Authority, User, UserCreate

logger = logging.getLogger(__name__)


class AccountService:

    def get_user_by_login(self, session: Session, login: str) -> Optional[User]:
        return session.exec(select(User).where(User.login == login.lower())).first()

    def get_authority(self, session: Session, name: str) -> Authority:
        """Retourne l'autorisation, en la créant si besoin"""
        authority = session.get(Authority, name)
        if authority is None:
            authority = Authority(name=name)
            session.add(authority)
        return authority

    def create_user(
        self,
        session: Session,
        user_data: UserCreate,
        authorities: Iterable[str] = (AuthoritiesConstants.USER,),
    ) -> User:
        if self.get_user_by_login(session, user_data.login):
            raise ValueError("Login name already used")
        if user_data.email and session.exec(select(User).where(User.email == user_data.email)).first():
            raise ValueError("Email is already in use")

        db_user = User(
            login=user_data.login,
            email=user_data.email,
            first_name=user_data.first_name,
            last_name=user_data.last_name,
            activated=user_data.activated,
            hashed_password=password_manager.hash_password(user_data.password),
        )
        db_user.authorities = [self.get_authority(session, name) for name in authorities]
        session.add(db_user)
        session.flush()
        session.refresh(db_user)
        logger.info(f"Created Information for User: {db_user.login}")
        return db_user

    def register(self, session: Session, user_data: UserCreate) -> User:
        """Inscription publique : toujours un simple ROLE_USER activé"""
        user_data.activated = True
        return self.create_user(session, user_data)

    def authenticate(
        self, session: Session, login: str, password: str, remember_me: bool = False
    ) -> TokenResponse:
        user = self.get_user_by_login(session, login)

        if not user or not password_manager.verify_password(password, user.hashed_password):
            raise ValueError("Incorrect login or password")

        if not user.activated:
            raise ValueError("User was not activated")

        token = jwt_manager.create_token(user.login, user.authority_names, remember_me)
        return TokenResponse(id_token=token)


account_service = AccountService()
