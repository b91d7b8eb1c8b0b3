from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from .. import notifier, schemas
from ..session import FormSession, SubmissionInProgress, existing_or_transient_session
from ..tones import DEFAULT_TONE_ID, TONES
from ..webhook import WebhookClient, get_webhook_client

router = APIRouter(prefix="/api", tags=["api"])

_STATUS_BY_KIND = {
    notifier.MISSING_TEXT.kind: status.HTTP_400_BAD_REQUEST,
    notifier.MISSING_URL.kind: status.HTTP_400_BAD_REQUEST,
    notifier.CALL_FAILED.kind: status.HTTP_502_BAD_GATEWAY,
    notifier.SUCCESS.kind: status.HTTP_200_OK,
}


@router.get("/tones", response_model=schemas.ToneList)
def list_tones():
    return schemas.ToneList(
        tones=[schemas.ToneOut(id=t.id, label=t.label, description=t.description) for t in TONES],
        default=DEFAULT_TONE_ID,
    )


@router.post(
    "/generate",
    response_model=schemas.GenerateResponse,
    responses={
        400: {"model": schemas.GenerateResponse},
        409: {"description": "A submission is already in flight"},
        502: {"model": schemas.GenerateResponse},
    },
)
async def generate(
    payload: schemas.GenerateRequest,
    session: FormSession = Depends(existing_or_transient_session),
    client: WebhookClient = Depends(get_webhook_client),
):
    """Same flow as the form, for scripted callers.

    The notification is returned in the body instead of being queued for the
    next page render.
    """
    try:
        outcome = await session.submit(
            client,
            input_text=payload.input_text,
            tone=payload.tone,
            webhook_url=payload.webhook_url,
        )
    except SubmissionInProgress as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    session.pop_notifications()

    body = schemas.GenerateResponse(
        response=session.response_text or None,
        notification=schemas.NotificationOut(**outcome.as_dict()),
        loading=session.is_loading,
    )
    return JSONResponse(body.model_dump(), status_code=_STATUS_BY_KIND[outcome.kind])
