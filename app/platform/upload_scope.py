import asyncio
import logging
from pathlib import Path
from app.platform.ports.media_store import MediaStorePort, UploadedMedia

log = logging.getLogger(__name__)

class UploadScope:
    """Tracks assets uploaded while handling one request.

    If the ``async with`` block raises, every asset uploaded inside it is
    deleted (best effort) before the exception propagates.
    """

    def __init__(self, store: MediaStorePort):
        self.store = store
        self.uploaded: list[UploadedMedia] = []

    async def upload(self, local_path: str | Path | None) -> UploadedMedia | None:
        media = await self.store.upload(local_path)
        if media is not None and media.url:
            self.uploaded.append(media)
        return media

    async def __aenter__(self) -> "UploadScope":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None and self.uploaded:
            await self._discard()
        return False

    async def _discard(self):
        urls = [m.url for m in self.uploaded]
        results = await asyncio.gather(*(self.store.delete(u) for u in urls), return_exceptions=True)
        for url, res in zip(urls, results):
            if isinstance(res, BaseException):
                log.warning("cleanup of %s failed: %s", url, res)
            elif not res.ok:
                log.warning("cleanup of %s returned %s", url, res.result)
            else:
                log.info("rolled back upload %s", url)
        self.uploaded.clear()
