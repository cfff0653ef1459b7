import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import get_settings
from .routers import api_router
from .services.validation import get_rule_set

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
log = logging.getLogger("login_form")

STATIC_DIR = Path(__file__).resolve().parent / "static"


@asynccontextmanager
async def lifespan(_app: FastAPI):
    rules = get_rule_set()               # fail fast on a broken rule table
    log.info("Serving login form with rules for: %s", ", ".join(rules))
    yield


app = FastAPI(title=settings.app_title, lifespan=lifespan)
app.include_router(api_router)
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


# unknown paths and wrong methods answer in plain text like /login does
@app.exception_handler(StarletteHTTPException)
async def _plain_http_error(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    detail = "Not found" if exc.status_code == 404 else str(exc.detail)
    return PlainTextResponse(detail, status_code=exc.status_code, headers=exc.headers)
