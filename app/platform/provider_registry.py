from app.core.config import settings
from app.platform.ports.media_store import MediaStorePort
from app.platform.adapters.media_local import LocalFilesystemMediaStore

class ProviderRegistry:
    _media_store: MediaStorePort | None = None

    @classmethod
    def media_store(cls) -> MediaStorePort:
        if cls._media_store is None:
            if settings.MEDIA_STORE_PROVIDER == "s3":
                from app.platform.adapters.media_s3 import S3MediaStore
                cls._media_store = S3MediaStore()
            else:
                cls._media_store = LocalFilesystemMediaStore(settings.LOCAL_STORAGE_ROOT)
        return cls._media_store

registry = ProviderRegistry()

def get_media_store() -> MediaStorePort:
    return registry.media_store()
