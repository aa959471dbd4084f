from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol, runtime_checkable

ResourceType = Literal["image", "video", "raw"]

@dataclass(frozen=True)
class UploadedMedia:
    url: str
    public_id: str
    resource_type: ResourceType
    bytes: int
    duration: float | None = None

@dataclass(frozen=True)
class DeleteResult:
    result: str  # "ok" | "not found"

    @property
    def ok(self) -> bool:
        return self.result == "ok"

@runtime_checkable
class MediaStorePort(Protocol):
    async def upload(self, local_path: str | Path | None) -> UploadedMedia | None: ...
    async def delete(self, url: str) -> DeleteResult: ...
