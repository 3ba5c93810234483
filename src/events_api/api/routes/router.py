from fastapi import APIRouter

from src.events_api.api.routes import events, messaging, password_reset, profile_images, users

api_router = APIRouter()
api_router.include_router(users.router)
api_router.include_router(password_reset.router)
api_router.include_router(events.router)
api_router.include_router(profile_images.router)
api_router.include_router(messaging.router)
