import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import Session

from dritu.core.exceptions import DrituError, RecordNotFoundError, ValidationError
from dritu.server.api import data, quotation_document, quotations, system, tenders
from dritu.server.api.crud import build_entity_routers
from dritu.server.db.session import engine, init_db
from dritu.server.settings.config import settings
from dritu.services.seed import seed_database

logger = logging.getLogger(__name__)


def configure_logging(level: str = settings.log_level) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("Initialising database (%s)", settings.database_url)
    init_db()
    if settings.seed_on_startup:
        with Session(engine) as session:
            seed_database(session)
    yield
    logger.info("Shutting down")


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==============================
# ERRORS
# ==============================

_STATUS = {
    RecordNotFoundError: 404,
    ValidationError: 400,
}


@app.exception_handler(DrituError)
async def dritu_error_handler(request: Request, exc: DrituError):
    status_code = _STATUS.get(type(exc), 500)
    if status_code >= 500:
        logger.error("Unhandled application error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": exc.message, "code": exc.code})


# ==============================
# ROUTERS
# ==============================

app.include_router(system.router)
app.include_router(tenders.router)               # /emds/summary must precede /emds/{item_id}
for entity_router in build_entity_routers():
    app.include_router(entity_router)            # /products, /companies, ...
app.include_router(quotations.router)            # /quotations...
app.include_router(quotation_document.router)    # /quotations/{id}/document
app.include_router(data.router)                  # /import/local-storage, /export.xlsx
