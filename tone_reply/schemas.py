from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class GenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    input_text: str = Field(default="", alias="inputText")
    tone: Optional[str] = None
    webhook_url: str = Field(default="", alias="webhookUrl")


class NotificationOut(BaseModel):
    kind: str
    title: str
    description: str
    variant: str


class GenerateResponse(BaseModel):
    response: Optional[str] = None
    notification: NotificationOut
    loading: bool = False


class ToneOut(BaseModel):
    id: str
    label: str
    description: str


class ToneList(BaseModel):
    tones: List[ToneOut]
    default: str
