from fastapi import APIRouter, Depends

from app.api.deps import get_message_service
from app.schemas.messages import PersonaActivateRequest
from app.services.message_service import MessageService

router = APIRouter(prefix="/persona", tags=["persona"])


@router.post("/activate")
async def activate_persona(
    req: PersonaActivateRequest,
    service: MessageService = Depends(get_message_service),
):
    """Announce that a persona came online."""
    await service.activate_persona(req.persona_id)
    return {"ok": True}
