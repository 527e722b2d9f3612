# bookshelf/main.py
from typing import Optional

from fastapi import FastAPI, Request

from .catalog import BookCatalog, catalog_router
from .config import Settings
from .storage import FileStorage


def create_app(
    catalog: Optional[BookCatalog] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the API around one catalogue instance.

    The catalogue lives on ``app.state``. When neither a catalogue nor
    settings are given it is loaded lazily on the first request.
    """
    app = FastAPI(
        title="Bookshelf",
        description="Personal library catalogue persisted to a flat file.",
        version="1.0.0",
    )
    if catalog is None and settings is not None:
        catalog = BookCatalog(FileStorage(settings.path_to_file))
    app.state.catalog = catalog

    @app.get("/")
    def health_check(request: Request):
        current = request.app.state.catalog
        return {"status": "ok", "books": len(current) if current is not None else None}

    app.include_router(catalog_router)
    return app


app = create_app()
