import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .database import Base, engine
from .routers import assistant, bookings, bus, complaints, system

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="AMTS Connect API", version="0.1.0")


@app.on_event("startup")
def on_startup():
    if settings.store_backend != "sql":
        logger.info(f"Using {settings.store_backend} key-value store")
        return
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database OK, kv_store table ready")
    except Exception as e:
        logger.warning(f"Database not ready: {e}. Start PostgreSQL and restart.")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"] if p != "body")
        problems.append(f"{field}: {err['msg']}" if field else err["msg"])
    logger.info(f"Rejected {request.method} {request.url.path}: {problems}")
    return JSONResponse(status_code=400, content={"success": False, "error": "; ".join(problems)})


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for r in (system, bookings, complaints, bus, assistant):
    app.include_router(r.router, prefix=settings.api_prefix)


@app.get("/")
def root():
    return {"message": "AMTS Connect API is running"}
