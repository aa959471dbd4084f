"""Video documents as stored in the ``videos`` collection."""
from datetime import datetime, timezone
from bson import ObjectId


def new_video_document(*, title: str | None, description: str | None, video_file: str, thumbnail: str, duration: float | None, owner: ObjectId) -> dict:
    now = datetime.now(timezone.utc)
    return {
        "title": (title or "").strip(),
        "description": (description or "").strip(),
        "videoFile": video_file,
        "thumbnail": thumbnail,
        "duration": duration or 0,
        "views": 0,
        "isPublished": True,
        "owner": owner,
        "createdAt": now,
        "updatedAt": now,
    }


def is_owned_by(video: dict, user_id: str) -> bool:
    return str(video.get("owner")) == str(user_id)
