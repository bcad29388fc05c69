"""
Request dependencies.

Collaborators are built once in the application lifespan and stored on
``app.state``; these helpers hand them to the routes.
"""
from fastapi import Request

from app.services.analytics import AnalyticsRecorder
from app.services.message_service import MessageService


def get_message_service(request: Request) -> MessageService:
    return request.app.state.message_service


def get_analytics_recorder(request: Request) -> AnalyticsRecorder:
    return request.app.state.analytics_recorder
