import click
import uvicorn

from app.core.logging import get_logger

logger = get_logger(__name__)


@click.group()
def cli():
    """Marketplace CLI"""
    pass


@cli.command()
@click.option("--host", default="0.0.0.0")
@click.option("--port", default=8000)
@click.option("--workers", default=1)
@click.option("--production", is_flag=True, help="Run in production mode")
def serve(host, port, workers, production):
    """Start the API server"""
    reload = not production  # Auto-reload unless production mode

    uvicorn.run(
        "app.api.web_app:app",
        host=host,
        port=port,
        reload=reload,
        workers=workers if production else 1,
        log_level="info" if production else "debug",
    )


@cli.command("init-db")
def init_db():
    """Create all tables directly (use alembic upgrade head for managed databases)"""
    from app.db.base import Base, engine
    import app.db.models  # noqa: F401  registers the models on Base.metadata

    Base.metadata.create_all(bind=engine)
    click.echo(f"Created tables: {', '.join(sorted(Base.metadata.tables))}")


@cli.command("create-user")
@click.option("--email", required=True, help="Email of the new user")
@click.option(
    "--role",
    type=click.Choice(["customer", "provider", "admin"]),
    default="customer",
    help="Role of the new user",
)
@click.option("--first-name", default=None)
@click.option("--last-name", default=None)
def create_user(email, role, first_name, last_name):
    """Create a user and print their API key"""
    from app.core.errors import DomainError
    from app.db.base import SessionLocal
    from app.services.user_service import UserService

    db_session = SessionLocal()
    try:
        registration = UserService(db_session).create_user(
            email=email, role=role, first_name=first_name, last_name=last_name
        )
    except DomainError as e:
        raise click.ClickException(e.message)
    finally:
        db_session.close()

    logger.info(f"Created {role} user {registration.user.id} from the CLI")
    click.echo(f"User ID: {registration.user.id}")
    click.echo(f"Role: {registration.user.role}")
    click.echo(f"API key (shown once): {registration.api_key}")


if __name__ == "__main__":
    cli()
