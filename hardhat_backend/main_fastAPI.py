import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.database import Database
from config.logging_config import configure_logging
from config.security import api_key_middleware, require_api_key
from config.settings import DEFAULT_HAT_ID, Settings
from models.errors import HardHatAPIError, StorageFailure
from models.request_models import HardHatUpdate, ImpactReading
from models.response_models import (
    ClearEventsResponse,
    EventSnapshot,
    EventWithOwner,
    HardHatUpdatedResponse,
    HealthResponse,
    ImpactRecordedResponse,
)
from services.event_service import EventService
from services.hardhat_service import HardHatService

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_event_service(db: Database = Depends(get_database)) -> EventService:
    return EventService(db)


def get_hardhat_service(db: Database = Depends(get_database)) -> HardHatService:
    return HardHatService(db)


api = APIRouter(prefix="/api", dependencies=[Depends(require_api_key)])


@api.post("/impact", status_code=201, response_model=ImpactRecordedResponse)
def record_impact(reading: Optional[ImpactReading] = None,
                  service: EventService = Depends(get_event_service)):
    return service.record_event(DEFAULT_HAT_ID, reading or ImpactReading())


LATEST_RESPONSES = {
    200: {"model": EventSnapshot, "description": "Most recent event, or an empty object before the first one"},
}


# The voice assistant calls /api/impact/latest; /api/latest is kept for older skills.
@api.get("/impact/latest", responses=LATEST_RESPONSES)
@api.get("/latest", responses=LATEST_RESPONSES)
def get_latest_impact(service: EventService = Depends(get_event_service)) -> JSONResponse:
    snapshot = service.get_latest(DEFAULT_HAT_ID)
    return JSONResponse(content=snapshot.model_dump(mode="json") if snapshot else {})


@api.delete("/events", response_model=ClearEventsResponse)
def clear_events(all_hats: bool = False, service: EventService = Depends(get_event_service)):
    deleted = service.clear_events(DEFAULT_HAT_ID, all_hats=all_hats)
    return ClearEventsResponse(message="Helmet impact history cleared", deleted=deleted)


@api.put("/hardhat", response_model=HardHatUpdatedResponse)
def update_hardhat(update: Optional[HardHatUpdate] = None,
                   service: HardHatService = Depends(get_hardhat_service)):
    return HardHatUpdatedResponse(
        updated=service.update_hat(DEFAULT_HAT_ID, update or HardHatUpdate())
    )


@api.get("/events", response_model=List[EventWithOwner])
def list_events(hat_id: Optional[int] = None, service: EventService = Depends(get_event_service)):
    return service.list_events_with_owner(hat_id)


async def handle_api_error(request: Request, exc: HardHatAPIError) -> JSONResponse:
    if isinstance(exc, StorageFailure):
        logger.error("%s %s: %s (%s)", request.method, request.url.path,
                     exc.message, exc.detail, exc_info=exc)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Invalid request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request"})


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    if not settings.api_key:
        logger.warning("API_KEY is not set; every /api request will be rejected")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        app.state.database.close()

    app = FastAPI(
        title="Smart Hard Hat API",
        description="Impact and light telemetry from the hard hat, served to the voice assistant",
        version=VERSION,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.database = database or Database(settings)

    app.middleware("http")(api_key_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_exception_handler(HardHatAPIError, handle_api_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    @app.get("/")
    def root():
        return {"status": "Smart Hard Hat API running"}

    @app.get("/health", response_model=HealthResponse)
    def health_check(db: Database = Depends(get_database)):
        db_healthy = db.test_connection()
        return HealthResponse(
            status="healthy" if db_healthy else "unhealthy",
            database="connected" if db_healthy else "disconnected",
            version=VERSION
        )

    app.include_router(api)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
