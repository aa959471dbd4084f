import asyncio
import logging
from pathlib import Path
from bson import ObjectId
from app.core.errors import ValidationError, AuthorizationError, NotFoundError, UpstreamFailure
from app.core.security import Principal
from app.modules.videos.models import new_video_document, is_owned_by
from app.modules.videos.repository import VideoRepository
from app.modules.videos.schemas import VideoSearchParams, VideoPublish, VideoUpdate
from app.modules.videos.search import build_search_pipeline
from app.platform.ports.media_store import MediaStorePort
from app.platform.upload_scope import UploadScope

log = logging.getLogger(__name__)

def parse_video_id(video_id: str) -> ObjectId:
    if not ObjectId.is_valid(video_id):
        raise ValidationError("Invalid video id")
    return ObjectId(video_id)

class VideoService:
    def __init__(self, repo: VideoRepository, media: MediaStorePort):
        self.repo = repo
        self.media = media

    async def list(self, params: VideoSearchParams) -> list[dict]:
        if params.userId and not ObjectId.is_valid(params.userId):
            raise ValidationError("Invalid user id")
        return await self.repo.aggregate(build_search_pipeline(params))

    async def publish(self, principal: Principal, payload: VideoPublish, video_path: Path | None, thumbnail_path: Path | None) -> dict:
        if payload.is_empty:
            raise ValidationError("Title or description is required")
        if not video_path:
            raise ValidationError("No video file found")
        if not thumbnail_path:
            raise ValidationError("No thumbnail file found")

        async with UploadScope(self.media) as uploads:
            video_file = await uploads.upload(video_path)
            if video_file is None or not video_file.url:
                raise UpstreamFailure("Error while uploading video file")
            thumbnail = await uploads.upload(thumbnail_path)
            if thumbnail is None or not thumbnail.url:
                raise UpstreamFailure("Error while uploading thumbnail")

            video = await self.repo.create(new_video_document(
                title=payload.title,
                description=payload.description,
                video_file=video_file.url,
                thumbnail=thumbnail.url,
                duration=video_file.duration,
                owner=principal.oid,
            ))
            if not video:
                raise UpstreamFailure("Error while publishing the video")

        log.info("user %s published video %s", principal.user_id, video["_id"])
        return video

    async def get(self, video_id: str) -> dict:
        video = await self.repo.get(parse_video_id(video_id))
        if not video:
            raise NotFoundError("Video not found")
        return video

    async def _get_owned(self, video_id: str, principal: Principal, denied: str) -> dict:
        video = await self.get(video_id)
        if not is_owned_by(video, principal.user_id):
            raise AuthorizationError(denied)
        return video

    async def update(self, video_id: str, principal: Principal, payload: VideoUpdate, thumbnail_path: Path | None) -> dict:
        video = await self._get_owned(video_id, principal, "You are not allowed to update this video")
        if not payload.is_complete:
            raise ValidationError("Provide updated title and description")
        if not thumbnail_path:
            raise ValidationError("Provide thumbnail file")

        # old thumbnail goes first; a failure after this leaves the video without one
        removed = await self.media.delete(video["thumbnail"])
        if not removed.ok:
            raise UpstreamFailure("Error while deleting old thumbnail")

        async with UploadScope(self.media) as uploads:
            thumbnail = await uploads.upload(thumbnail_path)
            if thumbnail is None or not thumbnail.url:
                raise UpstreamFailure("Error while uploading new thumbnail")
            updated = await self.repo.update(video["_id"], {
                "title": payload.title.strip(),
                "description": payload.description.strip(),
                "thumbnail": thumbnail.url,
            })
            if not updated:
                raise UpstreamFailure("Error while updating the video")
        return updated

    async def delete(self, video_id: str, principal: Principal) -> None:
        video = await self._get_owned(video_id, principal, "You are not allowed to delete this video")

        video_file, thumbnail = await asyncio.gather(
            self.media.delete(video["videoFile"]),
            self.media.delete(video["thumbnail"]),
        )
        if not (video_file.ok and thumbnail.ok):
            log.error("media cleanup for video %s: videoFile=%s thumbnail=%s", video["_id"], video_file.result, thumbnail.result)
            raise UpstreamFailure("Error while deleting video files from the media store")

        await self.repo.delete(video["_id"])
        log.info("user %s deleted video %s", principal.user_id, video["_id"])

    async def toggle_publish(self, video_id: str, principal: Principal) -> dict:
        video = await self._get_owned(video_id, principal, "You are not allowed to change the publish status of this video")
        updated = await self.repo.update(video["_id"], {"isPublished": not video.get("isPublished", False)})
        if not updated:
            raise UpstreamFailure("Error while updating publish status")
        return updated
