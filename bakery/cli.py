import argparse
import logging
import sys

from pydantic import ValidationError

from bakery.config import Settings, get_settings
from bakery.core.errors import ServiceError
from bakery.core.logging import setup_logging
from bakery.database import Database

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="bakery-api", description="Bakery management API.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP server.")
    serve.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    subparsers.add_parser("init-db", help="Create database tables and exit.")

    admin = subparsers.add_parser("create-admin", help="Create an administrator account.")
    admin.add_argument("--name", required=True)
    admin.add_argument("--email", required=True)
    admin.add_argument("--password", required=True)
    return parser.parse_args(argv)


def load_settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as exc:
        logging.basicConfig(level=logging.ERROR)
        for error in exc.errors():
            logger.error("Invalid configuration for %s: %s", ".".join(map(str, error["loc"])), error["msg"])
        sys.exit(1)


def serve(settings: Settings, host: str, port: int) -> None:
    import uvicorn

    from bakery.main import create_app

    uvicorn.run(create_app(settings), host=host, port=port, log_config=None)


def init_db(settings: Settings) -> None:
    database = Database.from_settings(settings)
    try:
        database.create_all()
        logger.info("Database tables created.")
    finally:
        database.dispose()


def create_admin(settings: Settings, name: str, email: str, password: str) -> int:
    from bakery.schemas.user import UserCreate
    from bakery.services.user_service import register_user

    try:
        payload = UserCreate(name=name, email=email, password=password)
    except ValidationError as exc:
        for error in exc.errors():
            logger.error("%s: %s", ".".join(map(str, error["loc"])), error["msg"])
        return 1

    database = Database.from_settings(settings)
    try:
        database.create_all()
        with database.session() as db:
            user = register_user(db, payload, settings, role="admin")
    except ServiceError as exc:
        logger.error(exc.message)
        return 1
    finally:
        database.dispose()
    logger.info("Created admin %s (%s)", user.email, user.id)
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = load_settings()
    setup_logging(settings)

    if args.command == "serve":
        serve(settings, args.host, args.port)
        return 0
    if args.command == "init-db":
        init_db(settings)
        return 0
    return create_admin(settings, args.name, args.email, args.password)


if __name__ == "__main__":
    sys.exit(main())
