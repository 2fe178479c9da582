# myschool_backend/api/chat.py

import uuid
from typing import Dict, List, Literal, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from myschool_backend.llm.orchestrator import (
    ChatAssistant,
    ChatReply,
    get_chat_assistant,
)
from myschool_backend.search.priority_search import PrioritySearchEngine, get_engine


# ================================
# CONFIG
# ================================

AUTOCOMPLETE_MIN_LENGTH = 2
AUTOCOMPLETE_LIMIT = 4

router = APIRouter(prefix="/chat", tags=["Chat"])


# ================================
# REQUEST MODELS
# ================================

class HistoryTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    message: str
    session_id: Optional[str] = None
    language: Optional[str] = None
    history: List[HistoryTurn] = Field(default_factory=list)


class ChatResponse(ChatReply):
    session_id: str


# ================================
# CHAT
# ================================

@router.post("", response_model=ChatResponse)
def chat(
    req: ChatRequest,
    assistant: ChatAssistant = Depends(get_chat_assistant),
):
    session_id = req.session_id or str(uuid.uuid4())
    history: List[Dict[str, str]] = [t.model_dump() for t in req.history]

    reply = assistant.handle(req.message, history=history, language=req.language)

    return ChatResponse(session_id=session_id, **reply.model_dump())


# ================================
# AUTOCOMPLETE
# ================================

@router.get("/autocomplete")
def autocomplete(
    query: str = Query(""),
    engine: PrioritySearchEngine = Depends(get_engine),
):
    if len(query.strip()) < AUTOCOMPLETE_MIN_LENGTH:
        return {"resources": []}

    results = engine.suggest(query, limit=AUTOCOMPLETE_LIMIT)

    return {
        "resources": [
            {
                "name": r.name,
                "description": r.description,
                "url": r.url,
                "category": r.category,
                "confidence": r.confidence,
            }
            for r in results
        ]
    }
