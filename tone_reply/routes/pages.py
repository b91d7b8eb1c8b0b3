from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from .. import notifier
from ..config import settings
from ..render import build_view
from ..session import (
    FormSession,
    SubmissionInProgress,
    current_form_session,
    existing_or_transient_session,
    store,
)
from ..webhook import WebhookClient, get_webhook_client

router = APIRouter(tags=["pages"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))
templates.env.globals["app_name"] = settings.app_name


def _render(request: Request, session: FormSession, status_code: int = 200) -> HTMLResponse:
    view = build_view(session, session.pop_notifications())
    return templates.TemplateResponse(
        request,
        "index.html",
        {"view": view, "page_title": settings.app_name},
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse)
def index(request: Request, session: FormSession = Depends(existing_or_transient_session)):
    return _render(request, session)


@router.post("/generate", response_class=HTMLResponse)
async def generate(
    request: Request,
    session: FormSession = Depends(current_form_session),
    client: WebhookClient = Depends(get_webhook_client),
):
    form = await request.form()
    try:
        outcome = await session.submit(
            client,
            input_text=form.get("input_text") or "",
            tone=form.get("tone"),
            webhook_url=form.get("webhook_url") or "",
        )
    except SubmissionInProgress as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))

    if outcome in (notifier.MISSING_TEXT, notifier.MISSING_URL):
        return _render(request, session, status_code=status.HTTP_400_BAD_REQUEST)

    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


@router.post("/reset")
def reset(request: Request):
    form_id = request.session.get("form_id")
    if form_id:
        store.discard(form_id)
    request.session.clear()
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
