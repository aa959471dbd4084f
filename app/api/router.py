from fastapi import APIRouter
from app.core.responses import EnvelopeRoute, api_response
from app.modules.users.router import router as users_router
from app.modules.videos.router import router as videos_router

api_router = APIRouter(route_class=EnvelopeRoute)
api_router.include_router(users_router, prefix="/users", tags=["users"])
api_router.include_router(videos_router, prefix="/videos", tags=["videos"])

@api_router.get("/health", tags=["health"])
async def health():
    return api_response(200, {"status": "ok"}, "Healthy")
