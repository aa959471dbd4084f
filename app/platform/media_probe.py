import asyncio
import logging
import mimetypes
import shutil
from pathlib import Path
from app.platform.ports.media_store import ResourceType

log = logging.getLogger(__name__)

def resource_type_for(path: Path) -> ResourceType:
    mime, _ = mimetypes.guess_type(path.name)
    if mime and mime.startswith("video/"):
        return "video"
    if mime and mime.startswith("image/"):
        return "image"
    return "raw"

async def probe_duration(path: Path) -> float | None:
    """Duration in seconds as reported by ffprobe, or None when unknown."""
    if shutil.which("ffprobe") is None:
        log.debug("ffprobe not installed, skipping duration probe for %s", path.name)
        return None
    proc = await asyncio.create_subprocess_exec(
        "ffprobe", "-v", "error", "-show_entries", "format=duration",
        "-of", "default=noprint_wrappers=1:nokey=1", str(path),
        stdout=asyncio.subprocess.PIPE, stderr=asyncio.subprocess.STDOUT,
    )
    out, _ = await proc.communicate()
    output = out.decode().strip()
    try:
        return float(output)
    except ValueError:
        log.warning("could not read duration of %s: %s", path.name, output[:200])
        return None
