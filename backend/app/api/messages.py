"""
Messages API - Endpoints for chat messages

Implements:
- Message history
- Text, voice, and media message creation
- Reactions
"""
import logging
import os
import uuid
from typing import List, Optional

import aiofiles
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Request, UploadFile

from app.api.deps import get_message_service
from app.config.constants import (
    DEFAULT_MESSAGE_LIST_LIMIT,
    PERSONA_LOCALES,
    UPLOAD_CHUNK_BYTES,
    UPLOAD_MAX_FILE_BYTES,
    UPLOAD_MAX_FILES,
)
from app.schemas.messages import ReactionRequest, TextMessageRequest
from app.services.exceptions import ChatServiceError
from app.services.message_service import MessageService, UploadedMedia

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/messages", tags=["messages"])


def _require_persona(persona_id: Optional[str]) -> str:
    if persona_id not in PERSONA_LOCALES:
        raise HTTPException(status_code=400, detail="persona_id is required")
    return persona_id


def _media_type_for(mime_type: str) -> str:
    if mime_type.startswith("video"):
        return "video"
    if mime_type.startswith("audio"):
        return "audio"
    return "image"


def _discard(*paths: str):
    """Remove stored uploads that will not be referenced by any message."""
    for path in paths:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove upload {path}: {e}")


async def _save_upload(media_root: str, upload: UploadFile) -> str:
    """Write an upload under ``media_root`` with a uuid filename."""
    os.makedirs(media_root, exist_ok=True)

    ext = os.path.splitext(upload.filename or "")[1] or ".bin"
    file_path = os.path.join(media_root, f"{uuid.uuid4()}{ext}")

    written = 0
    try:
        async with aiofiles.open(file_path, "wb") as f:
            while content := await upload.read(UPLOAD_CHUNK_BYTES):
                written += len(content)
                if written > UPLOAD_MAX_FILE_BYTES:
                    raise HTTPException(status_code=413, detail="File too large")
                await f.write(content)
    except HTTPException:
        _discard(file_path)
        raise
    except OSError as e:
        _discard(file_path)
        raise HTTPException(status_code=500, detail=f"Failed to save file: {str(e)}")

    return file_path


@router.get("")
async def list_messages(
    limit: int = Query(DEFAULT_MESSAGE_LIST_LIMIT, ge=1, le=200),
    offset: int = Query(0, ge=0),
    service: MessageService = Depends(get_message_service),
):
    messages = await service.list_messages(limit, offset)
    return {"messages": [m.to_dict() for m in messages]}


@router.post("/text", status_code=201)
async def create_text_message(
    req: TextMessageRequest,
    service: MessageService = Depends(get_message_service),
):
    """
    Translate and send a text message.

    Fails with 502 when no translation provider could translate it.
    """
    message = await service.create_text_message(req.persona_id, req.text)
    return {"message": message.to_dict()}


@router.post("/voice", status_code=201)
async def create_voice_message(
    request: Request,
    persona_id: Optional[str] = Form(None),
    audio: Optional[UploadFile] = File(None),
    service: MessageService = Depends(get_message_service),
):
    """
    Upload a voice message.

    Returns the placeholder immediately; transcription and translation
    arrive later as a ``message:updated`` event.
    """
    persona_id = _require_persona(persona_id)
    if audio is None:
        raise HTTPException(status_code=400, detail="audio file missing")

    audio_path = await _save_upload(request.app.state.media_root, audio)
    try:
        message = await service.create_voice_message(persona_id, audio_path)
    except ChatServiceError:
        _discard(audio_path)
        raise
    return {"message": message.to_dict()}


@router.post("/media", status_code=201)
async def create_media_message(
    request: Request,
    persona_id: Optional[str] = Form(None),
    caption: Optional[str] = Form(None),
    files: Optional[List[UploadFile]] = File(None),
    service: MessageService = Depends(get_message_service),
):
    persona_id = _require_persona(persona_id)
    if not files:
        raise HTTPException(status_code=400, detail="files missing")
    if len(files) > UPLOAD_MAX_FILES:
        raise HTTPException(status_code=400, detail=f"At most {UPLOAD_MAX_FILES} files allowed")

    uploaded = []
    try:
        for upload in files:
            path = await _save_upload(request.app.state.media_root, upload)
            mime_type = upload.content_type or "application/octet-stream"
            uploaded.append(UploadedMedia(path=path, mime_type=mime_type, media_type=_media_type_for(mime_type)))

        message = await service.create_media_message(persona_id, uploaded, caption)
    except (HTTPException, ChatServiceError):
        _discard(*(f.path for f in uploaded))
        raise
    return {"message": message.to_dict()}


@router.post("/{message_id}/reactions", status_code=201)
async def add_reaction(
    message_id: str,
    req: ReactionRequest,
    service: MessageService = Depends(get_message_service),
):
    reaction = await service.add_reaction(message_id, req.persona_id, req.emoji)
    return {"reaction": reaction.to_dict()}
