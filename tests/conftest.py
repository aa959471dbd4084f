import copy
from datetime import datetime, timezone
from pathlib import Path

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from app.core.config import settings
from app.core.security import create_access_token
from app.main import app
from app.modules.users.router import get_user_repository
from app.modules.videos.models import new_video_document
from app.modules.videos.router import get_video_repository
from app.platform.ports.media_store import UploadedMedia, DeleteResult
from app.platform.provider_registry import get_media_store


class FakeMediaStore:
    def __init__(self):
        self.stored: set[str] = set()
        self.deleted: list[str] = []
        self.fail_uploads: set[str] = set()
        self.raise_uploads: set[str] = set()
        self.fail_deletes: set[str] = set()
        self._n = 0

    def add(self, url: str) -> str:
        self.stored.add(url)
        return url

    async def upload(self, local_path):
        if not local_path:
            return None
        path = Path(local_path)
        try:
            if any(path.name.endswith(name) for name in self.raise_uploads):
                raise RuntimeError("media store unavailable")
            if not path.exists() or any(path.name.endswith(name) for name in self.fail_uploads):
                return None
            self._n += 1
            is_video = path.suffix == ".mp4"
            url = f"https://media.test/{self._n}{path.suffix}"
            self.stored.add(url)
            return UploadedMedia(
                url=url,
                public_id=str(self._n),
                resource_type="video" if is_video else "image",
                bytes=path.stat().st_size,
                duration=12.5 if is_video else None,
            )
        finally:
            path.unlink(missing_ok=True)

    async def delete(self, url):
        if url in self.fail_deletes or url not in self.stored:
            return DeleteResult(result="not found")
        self.stored.discard(url)
        self.deleted.append(url)
        return DeleteResult(result="ok")


class FakeUserRepository:
    def __init__(self):
        self.docs: dict[ObjectId, dict] = {}
        self.lose_writes = False

    async def find_by_username_or_email(self, username, email):
        for doc in self.docs.values():
            if doc["username"] == username or doc["email"] == email:
                return copy.deepcopy(doc)
        return None

    async def create(self, doc):
        _id = ObjectId()
        if not self.lose_writes:
            self.docs[_id] = {"_id": _id, **doc}
        return _id

    async def get_public(self, user_id):
        doc = self.docs.get(user_id)
        if doc is None:
            return None
        return {k: v for k, v in doc.items() if k not in ("password", "refreshToken")}


class FakeVideoRepository:
    def __init__(self):
        self.docs: dict[ObjectId, dict] = {}
        self.pipelines: list[list[dict]] = []
        self.results: list[dict] = []
        self.lose_writes = False

    def seed(self, owner: str, **overrides) -> dict:
        doc = new_video_document(
            title=overrides.pop("title", "A video"),
            description=overrides.pop("description", "Some description"),
            video_file=overrides.pop("video_file", "https://media.test/seed.mp4"),
            thumbnail=overrides.pop("thumbnail", "https://media.test/seed.png"),
            duration=overrides.pop("duration", 30.0),
            owner=ObjectId(owner),
        )
        doc.update(overrides)
        doc["_id"] = ObjectId()
        self.docs[doc["_id"]] = doc
        return copy.deepcopy(doc)

    async def aggregate(self, pipeline):
        self.pipelines.append(pipeline)
        return copy.deepcopy(self.results)

    async def get(self, video_id):
        doc = self.docs.get(video_id)
        return copy.deepcopy(doc) if doc else None

    async def create(self, doc):
        if self.lose_writes:
            return None
        _id = ObjectId()
        self.docs[_id] = {"_id": _id, **doc}
        return copy.deepcopy(self.docs[_id])

    async def update(self, video_id, fields):
        doc = self.docs.get(video_id)
        if doc is None:
            return None
        doc.update(fields)
        doc["updatedAt"] = datetime.now(timezone.utc)
        return copy.deepcopy(doc)

    async def delete(self, video_id):
        return self.docs.pop(video_id, None) is not None


@pytest.fixture(autouse=True)
def _temp_upload_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_TEMP_DIR", str(tmp_path / "temp"))
    yield


@pytest.fixture()
def media():
    return FakeMediaStore()


@pytest.fixture()
def users():
    return FakeUserRepository()


@pytest.fixture()
def videos():
    return FakeVideoRepository()


@pytest.fixture()
def client(media, users, videos):
    app.dependency_overrides[get_media_store] = lambda: media
    app.dependency_overrides[get_user_repository] = lambda: users
    app.dependency_overrides[get_video_repository] = lambda: videos
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture()
def auth():
    return auth_headers
