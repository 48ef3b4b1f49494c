import logging

from fastapi import APIRouter, Depends, HTTPException

from ..schemas.chat import ChatReply, ChatRequest
from ..services.assistant import reply_to
from ..services.errors import StoreError
from ..services.kv_store import KVStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["assistant"])


@router.post("/chat", response_model=ChatReply)
def chat(payload: ChatRequest, store: KVStore = Depends(get_store)):
    try:
        reply = reply_to(payload.message, store)
    except StoreError as e:
        logger.error(f"Error answering chat message: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to answer message: {e}")
    return ChatReply(reply=reply)
