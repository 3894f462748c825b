# apps/api/app/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.errors import SchedulingError
from app.db.base import Base
from app.db.session import engine

# MODELS
import app.models.org
import app.db.models_scheduling
import app.db.models_requests

# ROUTERS
from app.api.routes_auth import router as auth_router
from app.api.routes_org import router as org_router
from app.api.routes_availability import router as availability_router
from app.api.routes_schedule import router as schedule_router
from app.api.routes_shifts import router as shifts_router
from app.api.routes_requests import router as requests_router
from app.api.routes_notifications import router as notifications_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger("app")

app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)
logger.info("[cors] allow_origins=%s", settings.cors_origins)

# create tables
Base.metadata.create_all(bind=engine)


# ---------------- Error mapping ----------------
@app.exception_handler(SchedulingError)
def scheduling_error_handler(request: Request, exc: SchedulingError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

@app.exception_handler(RequestValidationError)
def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
    msg = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=400,
        content={"detail": f"{field}: {msg}" if field else msg, "errors": jsonable_errors(errors)},
    )

@app.exception_handler(Exception)
def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("[unhandled] %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})

def jsonable_errors(errors):
    return [{"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")} for e in errors]


@app.get("/healthz")
def healthz():
    return {"ok": True}

@app.get("/_routes")
def list_routes():
    return sorted({f"{getattr(r, 'methods', {'GET'})} {getattr(r, 'path', getattr(r, 'path_regex', ''))}" for r in app.router.routes})

# Router registration
app.include_router(auth_router)
app.include_router(org_router)
app.include_router(availability_router)
app.include_router(schedule_router)
app.include_router(shifts_router)
app.include_router(requests_router)
app.include_router(notifications_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=False, log_level=settings.LOG_LEVEL.lower())
