from pydantic import BaseModel
from typing import List
from commission_tracker.schemas.parse import ParsedResult


class AssistantRequest(BaseModel):
    message: str
    results: List[ParsedResult] = []


class AssistantReply(BaseModel):
    reply: str
