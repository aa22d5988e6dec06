# campsite_booking/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from campsite_booking.config import Settings, settings as default_settings
from campsite_booking.database import Database
from campsite_booking.errors import register_error_handlers
from campsite_booking.locks import SpotLocks
from campsite_booking.routes import auth, availability, bookings, reviews, spots, users
from campsite_booking.storage import FileStore

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    database = Database(settings.DATABASE_URL)
    file_store = FileStore(settings.UPLOAD_DIR)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Schema migrations run once, before the first request
        database.open()
        logger.info("Camping spot booking API ready")
        yield
        database.close()

    app = FastAPI(
        title="Camping Spot Booking",
        description="Owners list camping spots, renters book date ranges and leave reviews",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.database = database
    app.state.spot_locks = SpotLocks()
    app.state.file_store = file_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Registering Routers
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(spots.router)
    app.include_router(bookings.router)
    app.include_router(availability.router)
    app.include_router(reviews.router)

    app.mount(file_store.url_prefix, StaticFiles(directory=str(file_store.directory)), name="uploads")

    @app.get("/", tags=["Root"])
    def read_root():
        return {"message": "Welcome to the Camping Spot Booking API"}

    return app
