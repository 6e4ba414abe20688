"""Command line entry point for the Inventory API.

Usage:
    python -m inventory_api --host localhost --port 8080 --cache ./cache
    python -m inventory_api --storage database      # use DATABASE_URL

Options fall back to the HOST, PORT, PHOTO_DIR and STORAGE_BACKEND
environment variables.
"""

from __future__ import annotations

import logging
from typing import Optional

import typer
import uvicorn

from inventory_api.config import Settings
from inventory_api.main import create_app

cli = typer.Typer(name="inventory-api", help="Inventory tracking HTTP service", add_completion=False)
logger = logging.getLogger(__name__)


@cli.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Host address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", min=1, max=65535, help="Server port"),
    cache: Optional[str] = typer.Option(None, "--cache", "-c", help="Directory for uploaded photos"),
    storage: Optional[str] = typer.Option(None, "--storage", "-s", help="Storage backend: memory or database"),
) -> None:
    """Run the inventory HTTP service."""
    try:
        settings = Settings(host=host, port=port, photo_dir=cache, storage_backend=storage)
    except ValueError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(1)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        app = create_app(settings)
    except Exception as e:
        logger.error(f"error: {e}")
        raise typer.Exit(1)

    logger.info(f"server is running at {settings.base_url}")
    uvicorn.run(app, host=settings.host, port=settings.port)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
