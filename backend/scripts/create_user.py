#!/usr/bin/env python3
"""
Script de création de comptes 21 Points
Utile pour initialiser le premier administrateur d'une nouvelle base
"""
import argparse
import getpass
import logging
import sys
from pathlib import Path

# Ajouter le répertoire parent au path pour les imports
sys.path.append(str(Path(__file__).parent.parent))

from healthpoints.auth.security import AuthoritiesConstants
from healthpoints.core.database import create_db_and_tables, session_scope
from healthpoints.domain.entities import UserCreate
from healthpoints.domain.services.account_service import account_service

# Configuration du logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    """Point d'entrée principal du script CLI"""
    parser = argparse.ArgumentParser(
        description="Création d'un compte utilisateur 21 Points",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exemples d'utilisation:
  python create_user.py admin --admin --email admin@example.com
  python create_user.py user --password user
        """
    )
    parser.add_argument('login', help='Login du compte')
    parser.add_argument('--email', help='Adresse email (optionnelle)')
    parser.add_argument('--first-name', help='Prénom')
    parser.add_argument('--last-name', help='Nom')
    parser.add_argument('--password', help='Mot de passe (demandé si absent)')
    parser.add_argument(
        '--admin',
        action='store_true',
        help='Ajouter le rôle ROLE_ADMIN en plus de ROLE_USER'
    )
    args = parser.parse_args()

    password = args.password or getpass.getpass("Mot de passe: ")
    authorities = [AuthoritiesConstants.USER]
    if args.admin:
        authorities.append(AuthoritiesConstants.ADMIN)

    create_db_and_tables()
    try:
        with session_scope() as session:
            user = account_service.create_user(
                session,
                UserCreate(
                    login=args.login,
                    email=args.email,
                    first_name=args.first_name,
                    last_name=args.last_name,
                    password=password,
                ),
                authorities=authorities,
            )
            logger.info(f"✅ Compte créé: {user.login} ({', '.join(user.authority_names)})")
    except ValueError as e:
        logger.error(f"❌ Création impossible: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
