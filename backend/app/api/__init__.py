from fastapi import APIRouter

from app.api import analytics
from app.api import messages
from app.api import persona

router = APIRouter()

# Include messages, persona, analytics routers
router.include_router(messages.router)
router.include_router(persona.router)
router.include_router(analytics.router)
