from pathlib import Path
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from .config import settings
from .routes import api as api_routes
from .routes import pages as pages_routes
from .session import store

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    description="Sends text and a tone to an N8N webhook and shows the generated reply.",
    version="0.1.0",
)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.secret_key,
    session_cookie=settings.session_cookie,
)

base_path = Path(__file__).resolve().parent
static_dir = base_path / "static"
templates = Jinja2Templates(directory=str(base_path / "templates"))
templates.env.globals["app_name"] = settings.app_name
app.mount("/static", StaticFiles(directory=static_dir), name="static")


def _wants_html(request: Request) -> bool:
    if request.url.path.startswith("/api/"):
        return False
    accept = request.headers.get("accept", "")
    return "text/html" in accept or "*/*" in accept


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if _wants_html(request):
        template_name = "errors/404.html" if exc.status_code == 404 else "errors/generic.html"
        return templates.TemplateResponse(
            request,
            template_name,
            {"detail": exc.detail, "status_code": exc.status_code},
            status_code=exc.status_code,
        )
    return JSONResponse({"detail": exc.detail}, status_code=exc.status_code)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled application error", exc_info=exc)
    if _wants_html(request):
        return templates.TemplateResponse(
            request,
            "errors/generic.html",
            {"detail": "Internal server error", "status_code": 500},
            status_code=500,
        )
    return JSONResponse({"detail": "Internal server error"}, status_code=500)


@app.get("/health")
def health_check():
    """Liveness probe."""
    return {"status": "healthy", "active_sessions": len(store)}


app.include_router(api_routes.router)
app.include_router(pages_routes.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("tone_reply.main:app", reload=True)
