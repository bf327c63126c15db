# app/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.core.database import Base, engine
from app.core.exceptions import AuthRequired, InvalidRecord, RecordNotFound
from app.core.logging import configure_logging, get_logger
from app.ticket.routes import router as ticket_router

settings = get_settings()
configure_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)

Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESC,
    version=settings.APP_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidRecord)
def invalid_record_handler(request: Request, exc: InvalidRecord):
    return JSONResponse(status_code=422, content={"detail": str(exc), "errors": exc.errors})


@app.exception_handler(RecordNotFound)
def record_not_found_handler(request: Request, exc: RecordNotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(AuthRequired)
def auth_required_handler(request: Request, exc: AuthRequired):
    logger.info("rejected %s %s: %s", request.method, request.url.path, exc.reason)
    return JSONResponse(
        status_code=401,
        content={"detail": exc.reason},
        headers={"WWW-Authenticate": "Bearer"},
    )


# Routers
app.include_router(ticket_router)

@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}
