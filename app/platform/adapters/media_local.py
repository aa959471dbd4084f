import asyncio
import logging
import os
import shutil
import uuid
from pathlib import Path
from app.platform.ports.media_store import MediaStorePort, UploadedMedia, DeleteResult
from app.platform.media_probe import probe_duration, resource_type_for
from app.core.config import settings

log = logging.getLogger("media.local")

class LocalFilesystemMediaStore(MediaStorePort):
    def __init__(self, root: str | None = None, base_url: str | None = None):
        self.root = os.path.abspath(root or settings.LOCAL_STORAGE_ROOT)
        self.base_url = (base_url or settings.MEDIA_BASE_URL).rstrip("/")
        os.makedirs(self.root, exist_ok=True)

    def _path(self, key: str) -> str:
        safe = key.strip("/").replace("..", "")
        return os.path.join(self.root, safe)

    def _key_for(self, url: str) -> str | None:
        prefix = self.base_url + "/"
        if not url or not url.startswith(prefix):
            return None
        return url[len(prefix):]

    async def upload(self, local_path: str | Path | None) -> UploadedMedia | None:
        if not local_path:
            return None
        src = Path(local_path)
        try:
            if not src.is_file():
                log.warning("staged file %s is missing", src)
                return None
            resource_type = resource_type_for(src)
            key = f"{resource_type}/{uuid.uuid4().hex}{src.suffix.lower()}"
            duration = await probe_duration(src) if resource_type == "video" else None
            dest = self._path(key)
            os.makedirs(os.path.dirname(dest), exist_ok=True)
            try:
                await asyncio.to_thread(shutil.copyfile, src, dest)
            except OSError as e:
                log.error("could not store %s: %s", src.name, e)
                return None
            size = os.path.getsize(dest)
            log.info("stored %s as %s (%d bytes)", src.name, key, size)
            return UploadedMedia(
                url=f"{self.base_url}/{key}",
                public_id=key,
                resource_type=resource_type,
                bytes=size,
                duration=duration,
            )
        finally:
            src.unlink(missing_ok=True)

    async def delete(self, url: str) -> DeleteResult:
        key = self._key_for(url)
        if key is None:
            return DeleteResult(result="not found")
        path = self._path(key)
        if not os.path.exists(path):
            return DeleteResult(result="not found")
        await asyncio.to_thread(os.remove, path)
        log.info("deleted %s", key)
        return DeleteResult(result="ok")
