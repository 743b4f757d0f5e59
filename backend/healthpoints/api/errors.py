"""
Erreurs API et headers d'alerte consommés par le frontend.
"""
import logging
from typing import Dict

from fastapi import Request
from fastapi.responses import JSONResponse

from healthpoints.core.settings import get_settings

logger = logging.getLogger(__name__)

PROBLEM_BASE_URL = "https://www.jhipster.tech/problem"
PROBLEM_WITH_MESSAGE = f"{PROBLEM_BASE_URL}/problem-with-message"


class BadRequestAlertException(Exception):
    """Erreur de validation métier renvoyée en 400 avec une alerte structurée"""

    def __init__(self, title: str, entity_name: str, error_key: str):
        super().__init__(title)
        self.title = title
        self.entity_name = entity_name
        self.error_key = error_key


def create_alert(application_name: str, message: str, param: str) -> Dict[str, str]:
    return {
        f"X-{application_name}-alert": message,
        f"X-{application_name}-params": param,
    }


def create_entity_creation_alert(application_name: str, entity_name: str, param: str) -> Dict[str, str]:
    return create_alert(application_name, f"{application_name}.{entity_name}.created", param)


def create_entity_update_alert(application_name: str, entity_name: str, param: str) -> Dict[str, str]:
    return create_alert(application_name, f"{application_name}.{entity_name}.updated", param)


def create_entity_deletion_alert(application_name: str, entity_name: str, param: str) -> Dict[str, str]:
    return create_alert(application_name, f"{application_name}.{entity_name}.deleted", param)


def create_failure_alert(application_name: str, entity_name: str, error_key: str) -> Dict[str, str]:
    return {
        f"X-{application_name}-error": f"error.{error_key}",
        f"X-{application_name}-params": entity_name,
    }


async def bad_request_alert_handler(request: Request, exc: BadRequestAlertException) -> JSONResponse:
    """Transforme une BadRequestAlertException en réponse problem+json"""
    settings = get_settings()
    logger.debug(f"Requete invalide sur {exc.entity_name}: {exc.error_key}")
    return JSONResponse(
        status_code=400,
        media_type="application/problem+json",
        content={
            "type": PROBLEM_WITH_MESSAGE,
            "title": exc.title,
            "status": 400,
            "entityName": exc.entity_name,
            "errorKey": exc.error_key,
            "message": f"error.{exc.error_key}",
            "params": exc.entity_name,
        },
        headers=create_failure_alert(settings.APPLICATION_NAME, exc.entity_name, exc.error_key),
    )
