import asyncio
import logging
import os
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator
from fastapi import UploadFile
from app.core.config import settings

log = logging.getLogger(__name__)

def _write(dest: Path, data: bytes):
    with open(dest, "wb") as f:
        f.write(data)

async def stage_upload(file: UploadFile | None, temp_dir: str | None = None) -> Path | None:
    """Write a multipart file to the temp dir and return its local path."""
    if file is None or not file.filename:
        return None
    root = Path(temp_dir or settings.UPLOAD_TEMP_DIR)
    root.mkdir(parents=True, exist_ok=True)
    name = os.path.basename(file.filename).replace(" ", "_")
    dest = root / f"{uuid.uuid4().hex}-{name}"
    data = await file.read()
    await asyncio.to_thread(_write, dest, data)
    return dest

@asynccontextmanager
async def staged_files(*files: UploadFile | None) -> AsyncIterator[list[Path | None]]:
    """Stage the given uploads; whatever the media store did not consume is
    removed when the block exits."""
    paths: list[Path | None] = []
    try:
        for f in files:
            paths.append(await stage_upload(f))
        yield paths
    finally:
        for p in paths:
            if p is not None and p.exists():
                p.unlink(missing_ok=True)
                log.debug("removed leftover staged file %s", p.name)
