import asyncio

from app.platform.adapters.media_local import LocalFilesystemMediaStore
from app.platform.ports.media_store import UploadedMedia, DeleteResult
from app.platform.upload_scope import UploadScope


def make_store(tmp_path):
    return LocalFilesystemMediaStore(root=str(tmp_path / "media"), base_url="http://cdn.test/media")


def test_local_upload_and_delete(tmp_path):
    store = make_store(tmp_path)
    staged = tmp_path / "avatar.png"
    staged.write_bytes(b"\x89PNG data")

    media = asyncio.run(store.upload(staged))
    assert media.url.startswith("http://cdn.test/media/image/")
    assert media.resource_type == "image"
    assert media.bytes == len(b"\x89PNG data")
    assert not staged.exists()

    assert asyncio.run(store.delete(media.url)).ok
    assert asyncio.run(store.delete(media.url)).result == "not found"


def test_local_upload_without_path_or_file(tmp_path):
    store = make_store(tmp_path)
    assert asyncio.run(store.upload(None)) is None
    assert asyncio.run(store.upload(tmp_path / "missing.png")) is None


def test_local_delete_foreign_url(tmp_path):
    store = make_store(tmp_path)
    assert asyncio.run(store.delete("https://elsewhere.test/x.png")).result == "not found"


class RecordingStore:
    def __init__(self):
        self.deleted = []

    async def upload(self, local_path):
        return UploadedMedia(url=f"mem://{local_path}", public_id=str(local_path), resource_type="raw", bytes=0)

    async def delete(self, url):
        self.deleted.append(url)
        if url.endswith("boom"):
            raise RuntimeError("store unavailable")
        return DeleteResult(result="ok")


def test_upload_scope_keeps_assets_on_success():
    store = RecordingStore()

    async def run():
        async with UploadScope(store) as uploads:
            await uploads.upload("a")

    asyncio.run(run())
    assert store.deleted == []


def test_upload_scope_discards_assets_and_reraises():
    store = RecordingStore()

    async def run():
        async with UploadScope(store) as uploads:
            await uploads.upload("a")
            await uploads.upload("boom")
            raise ValueError("db write failed")

    try:
        asyncio.run(run())
    except ValueError as e:
        assert str(e) == "db write failed"
    else:
        raise AssertionError("expected ValueError")
    assert sorted(store.deleted) == ["mem://a", "mem://boom"]


class FailingS3Client:
    def __init__(self, exc):
        self.exc = exc

    def upload_file(self, *args, **kwargs):
        raise self.exc


def test_s3_upload_failures_return_none(tmp_path):
    from boto3.exceptions import S3UploadFailedError
    from botocore.exceptions import EndpointConnectionError
    from app.platform.adapters.media_s3 import S3MediaStore

    store = S3MediaStore()
    for exc in (
        S3UploadFailedError("Failed to upload: NoSuchBucket"),
        EndpointConnectionError(endpoint_url="http://127.0.0.1:9"),
    ):
        store.s3 = FailingS3Client(exc)
        staged = tmp_path / "cover.png"
        staged.write_bytes(b"img")
        assert asyncio.run(store.upload(staged)) is None
        assert not staged.exists()


def test_local_upload_copy_error_returns_none(tmp_path, monkeypatch):
    import shutil

    def broken_copy(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(shutil, "copyfile", broken_copy)
    store = make_store(tmp_path)
    staged = tmp_path / "avatar.png"
    staged.write_bytes(b"img")
    assert asyncio.run(store.upload(staged)) is None
    assert not staged.exists()
