from typing import Annotated
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from app.core.db import get_database
from app.core.responses import EnvelopeRoute, api_response
from app.core.security import get_principal, Principal
from app.modules.videos.repository import VideoRepository
from app.modules.videos.schemas import VideoSearchParams, VideoPublish, VideoUpdate
from app.modules.videos.service import VideoService
from app.platform.provider_registry import get_media_store
from app.platform.staging import staged_files

router = APIRouter(route_class=EnvelopeRoute, dependencies=[Depends(get_principal)])

def get_video_repository(db = Depends(get_database)) -> VideoRepository:
    return VideoRepository(db)

def svc(repo: VideoRepository = Depends(get_video_repository), media = Depends(get_media_store)) -> VideoService:
    return VideoService(repo, media)

@router.get("")
async def list_videos(params: Annotated[VideoSearchParams, Query()], service: VideoService = Depends(svc)):
    videos = await service.list(params)
    return api_response(200, videos, "Fetched all videos")

@router.post("")
async def publish_video(
    title: str | None = Form(None),
    description: str | None = Form(None),
    videoFile: UploadFile | None = File(None),
    thumbnail: UploadFile | None = File(None),
    principal: Principal = Depends(get_principal),
    service: VideoService = Depends(svc),
):
    async with staged_files(videoFile, thumbnail) as (video_path, thumbnail_path):
        video = await service.publish(principal, VideoPublish(title=title, description=description), video_path, thumbnail_path)
    return api_response(200, video, "Video published")

@router.patch("/toggle/publish/{video_id}")
async def toggle_publish_status(video_id: str, principal: Principal = Depends(get_principal), service: VideoService = Depends(svc)):
    video = await service.toggle_publish(video_id, principal)
    return api_response(200, video, "Video publish status modified")

@router.get("/{video_id}")
async def get_video(video_id: str, service: VideoService = Depends(svc)):
    video = await service.get(video_id)
    return api_response(200, video, "Video fetched")

@router.patch("/{video_id}")
async def update_video(
    video_id: str,
    title: str | None = Form(None),
    description: str | None = Form(None),
    thumbnail: UploadFile | None = File(None),
    principal: Principal = Depends(get_principal),
    service: VideoService = Depends(svc),
):
    async with staged_files(thumbnail) as (thumbnail_path,):
        video = await service.update(video_id, principal, VideoUpdate(title=title, description=description), thumbnail_path)
    return api_response(200, video, "Video details updated")

@router.delete("/{video_id}")
async def delete_video(video_id: str, principal: Principal = Depends(get_principal), service: VideoService = Depends(svc)):
    await service.delete(video_id, principal)
    return api_response(200, {}, "Video deleted successfully")
