import enum
import logging
import uuid
from collections import OrderedDict
from typing import Callable, List, Optional

from fastapi import Request

from . import notifier
from .config import settings
from .notifier import Notification
from .tones import DEFAULT_TONE_ID
from .webhook import WebhookClient, WebhookError

logger = logging.getLogger(__name__)


class FormState(str, enum.Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"


class SubmissionInProgress(Exception):
    """Raised when a second submission starts while one is still in flight."""


def validate_input(input_text: str, webhook_url: str) -> Optional[Notification]:
    """Return the notification for the first missing field, or None."""
    if not (input_text or "").strip():
        return notifier.MISSING_TEXT
    if not (webhook_url or "").strip():
        return notifier.MISSING_URL
    return None


StateListener = Callable[[FormState], None]


class FormSession:
    """In-memory state of one browser session's form."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        self.input_text = ""
        self.selected_tone = DEFAULT_TONE_ID
        self.webhook_url = ""
        self.response_text = ""
        self.response_tone: Optional[str] = None
        self.state = FormState.IDLE
        self.notifications: List[Notification] = []
        self.listeners: List[StateListener] = []

    @property
    def is_loading(self) -> bool:
        return self.state is FormState.SUBMITTING

    def update_input(
        self,
        input_text: Optional[str] = None,
        tone: Optional[str] = None,
        webhook_url: Optional[str] = None,
    ) -> None:
        if input_text is not None:
            self.input_text = input_text
        if tone:
            self.selected_tone = tone
        if webhook_url is not None:
            self.webhook_url = webhook_url

    def _set_state(self, state: FormState) -> None:
        self.state = state
        for listener in self.listeners:
            listener(state)

    def notify(self, notification: Notification) -> Notification:
        self.notifications.append(notification)
        return notification

    def pop_notifications(self) -> List[Notification]:
        pending, self.notifications = self.notifications, []
        return pending

    async def submit(
        self,
        client: WebhookClient,
        input_text: Optional[str] = None,
        tone: Optional[str] = None,
        webhook_url: Optional[str] = None,
    ) -> Notification:
        """Validate, call the webhook once and record the outcome.

        New form values are applied only once the submission is accepted, so
        a rejected resubmission leaves the in-flight inputs alone. Returns the
        single notification produced by this submission.
        """
        if self.is_loading:
            raise SubmissionInProgress("A response is already being generated.")
        self.update_input(input_text=input_text, tone=tone, webhook_url=webhook_url)

        missing = validate_input(self.input_text, self.webhook_url)
        if missing:
            return self.notify(missing)

        tone_id = self.selected_tone
        self._set_state(FormState.SUBMITTING)
        self.response_text = ""
        self.response_tone = None
        try:
            text = await client.generate(self.webhook_url, self.input_text, tone_id)
        except WebhookError as exc:
            logger.error("Erro ao gerar resposta: %s", exc)
            return self.notify(notifier.CALL_FAILED)
        except Exception as exc:
            logger.exception("Webhook call failed unexpectedly", exc_info=exc)
            return self.notify(notifier.CALL_FAILED)
        finally:
            self._set_state(FormState.IDLE)

        self.response_text = text
        self.response_tone = tone_id
        return self.notify(notifier.SUCCESS)


class SessionStore:
    """Process-local registry of form sessions keyed by cookie id.

    Holds at most ``max_sessions``; the least recently used one is evicted
    when a new session would exceed the cap.
    """

    def __init__(self, max_sessions: int = 1000):
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, FormSession]" = OrderedDict()

    def get(self, session_id: Optional[str]) -> Optional[FormSession]:
        if not session_id:
            return None
        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions.move_to_end(session_id)
        return session

    def create(self) -> FormSession:
        session = FormSession(uuid.uuid4().hex)
        self._sessions[session.session_id] = session
        while len(self._sessions) > self.max_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.debug("Evicted form session %s", evicted_id)
        return session

    def discard(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)


store = SessionStore(max_sessions=settings.max_sessions)


def current_form_session(request: Request) -> FormSession:
    """Session for this browser, created and bound to the cookie if missing."""
    session = store.get(request.session.get("form_id"))
    if session is None:
        session = store.create()
        request.session["form_id"] = session.session_id
    return session


def existing_or_transient_session(request: Request) -> FormSession:
    """Session for this browser, or an unstored blank one for cookieless callers."""
    session = store.get(request.session.get("form_id"))
    if session is None:
        session = FormSession(uuid.uuid4().hex)
    return session
