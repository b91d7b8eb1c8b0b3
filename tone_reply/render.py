from dataclasses import dataclass, field
from typing import List, Optional

from .notifier import Notification
from .session import FormSession
from .tones import TONES, get_tone


@dataclass(frozen=True)
class ToneOption:
    id: str
    label: str
    description: str
    checked: bool


@dataclass(frozen=True)
class FormView:
    input_text: str
    webhook_url: str
    tones: List[ToneOption]
    submit_label: str
    submit_disabled: bool
    show_response: bool
    response_text: str
    response_tone_label: Optional[str] = None
    notifications: List[Notification] = field(default_factory=list)


def build_view(session: FormSession, notifications: Optional[List[Notification]] = None) -> FormView:
    """Map the current session state to what the page shows."""
    generated_with = get_tone(session.response_tone) if session.response_tone else None
    return FormView(
        input_text=session.input_text,
        webhook_url=session.webhook_url,
        tones=[
            ToneOption(t.id, t.label, t.description, checked=t.id == session.selected_tone)
            for t in TONES
        ],
        submit_label="Gerando..." if session.is_loading else "Gerar Resposta",
        submit_disabled=session.is_loading,
        show_response=bool(session.response_text),
        response_text=session.response_text,
        response_tone_label=generated_with.label if generated_with else None,
        notifications=list(notifications or []),
    )
