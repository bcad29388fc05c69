"""
Analytics API - translation provider selection statistics
"""
from fastapi import APIRouter, Depends

from app.api.deps import get_analytics_recorder
from app.services.analytics import AnalyticsRecorder

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/translation-providers")
async def translation_providers(recorder: AnalyticsRecorder = Depends(get_analytics_recorder)):
    """Selection count and average latency per provider, ordered by provider."""
    summaries = await recorder.list()
    return {"providers": [s.to_dict() for s in summaries]}
