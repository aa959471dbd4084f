import asyncio
import logging
import mimetypes
import os
import uuid
from pathlib import Path
import boto3
from botocore.client import Config
from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import BotoCoreError, ClientError
from app.platform.ports.media_store import MediaStorePort, UploadedMedia, DeleteResult
from app.platform.media_probe import probe_duration, resource_type_for
from app.core.config import settings

log = logging.getLogger("media.s3")

class S3MediaStore(MediaStorePort):
    def __init__(self):
        session = boto3.session.Session(
            aws_access_key_id=settings.S3_ACCESS_KEY,
            aws_secret_access_key=settings.S3_SECRET_KEY,
            region_name=settings.S3_REGION,
        )
        self.s3 = session.client(
            "s3",
            endpoint_url=settings.S3_ENDPOINT_URL,
            config=Config(signature_version="s3v4"),
        )
        self.bucket = settings.S3_BUCKET
        if settings.S3_PUBLIC_BASE_URL:
            self.base_url = settings.S3_PUBLIC_BASE_URL.rstrip("/")
        elif settings.S3_ENDPOINT_URL:
            self.base_url = f"{settings.S3_ENDPOINT_URL.rstrip('/')}/{self.bucket}"
        else:
            self.base_url = f"https://{self.bucket}.s3.{settings.S3_REGION}.amazonaws.com"

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
            content_type = mimetypes.guess_type(src.name)[0] or "application/octet-stream"
            duration = await probe_duration(src) if resource_type == "video" else None
            try:
                await asyncio.to_thread(
                    self.s3.upload_file, str(src), self.bucket, key,
                    ExtraArgs={"ContentType": content_type},
                )
            except (ClientError, BotoCoreError, S3UploadFailedError) as e:
                log.error("upload of %s to s3://%s failed: %s", src.name, self.bucket, e)
                return None
            return UploadedMedia(
                url=f"{self.base_url}/{key}",
                public_id=key,
                resource_type=resource_type,
                bytes=os.path.getsize(src),
                duration=duration,
            )
        finally:
            src.unlink(missing_ok=True)

    async def delete(self, url: str) -> DeleteResult:
        key = self._key_for(url)
        if key is None:
            return DeleteResult(result="not found")
        try:
            await asyncio.to_thread(self.s3.head_object, Bucket=self.bucket, Key=key)
        except ClientError:
            return DeleteResult(result="not found")
        await asyncio.to_thread(self.s3.delete_object, Bucket=self.bucket, Key=key)
        return DeleteResult(result="ok")
