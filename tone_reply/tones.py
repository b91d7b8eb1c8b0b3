from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class Tone:
    id: str
    label: str
    description: str


TONES: Tuple[Tone, ...] = (
    Tone("formal", "Formal", "Resposta profissional e educada"),
    Tone("informal", "Informal", "Resposta casual e descontraída"),
    Tone("humor", "Com Humor", "Resposta engraçada e divertida"),
    Tone("exagerado", "Exagerado", "Resposta dramática e intensa"),
    Tone("sarcastico", "Sarcástico", "Resposta irônica e espirituosa"),
    Tone("diplomatico", "Diplomático", "Resposta equilibrada e cuidadosa"),
)

DEFAULT_TONE_ID = "formal"

_BY_ID: Dict[str, Tone] = {tone.id: tone for tone in TONES}


def get_tone(tone_id: str) -> Optional[Tone]:
    return _BY_ID.get(tone_id)
