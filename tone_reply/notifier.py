from dataclasses import asdict, dataclass
from typing import Dict

DEFAULT = "default"
DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    """A transient toast shown once on the next render."""

    kind: str
    title: str
    description: str
    variant: str = DEFAULT

    def as_dict(self) -> Dict[str, str]:
        return asdict(self)


MISSING_TEXT = Notification(
    kind="missing_text",
    title="Erro",
    description="Por favor, digite o texto que recebeu",
    variant=DESTRUCTIVE,
)

MISSING_URL = Notification(
    kind="missing_url",
    title="Erro",
    description="Por favor, configure a URL do webhook do N8N",
    variant=DESTRUCTIVE,
)

CALL_FAILED = Notification(
    kind="call_failed",
    title="Erro",
    description="Falha ao gerar resposta. Verifique a URL do webhook e tente novamente.",
    variant=DESTRUCTIVE,
)

SUCCESS = Notification(
    kind="success",
    title="Sucesso",
    description="Resposta gerada com sucesso!",
)
