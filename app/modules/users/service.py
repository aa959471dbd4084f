import logging
from pathlib import Path
from pymongo.errors import DuplicateKeyError
from app.core.errors import ValidationError, ConflictError, UpstreamFailure
from app.modules.users.models import new_user_document
from app.modules.users.repository import UserRepository
from app.modules.users.schemas import UserRegister
from app.platform.ports.media_store import MediaStorePort
from app.platform.upload_scope import UploadScope

log = logging.getLogger(__name__)

class UserService:
    def __init__(self, repo: UserRepository, media: MediaStorePort):
        self.repo = repo
        self.media = media

    async def register(self, payload: UserRegister, avatar_path: Path | None, cover_image_path: Path | None = None) -> dict:
        if payload.blank_fields():
            raise ValidationError("All fields are required", errors=payload.blank_fields())

        username = payload.username.strip().lower()
        email = payload.email.strip()

        if await self.repo.find_by_username_or_email(username, email):
            raise ConflictError("User with this email or username already exists")

        if not avatar_path:
            raise ValidationError("Avatar file is required")

        async with UploadScope(self.media) as uploads:
            avatar = await uploads.upload(avatar_path)
            if avatar is None or not avatar.url:
                raise ValidationError("Avatar file is required")
            cover_image = None
            if cover_image_path:
                try:
                    cover_image = await uploads.upload(cover_image_path)
                except Exception as e:
                    log.warning("cover image upload raised for %s: %s", username, e)
            if cover_image_path and cover_image is None:
                log.warning("cover image upload failed for %s, storing empty value", username)

            doc = new_user_document(
                full_name=payload.fullName.strip(),
                username=username,
                email=email,
                password=payload.password,
                avatar=avatar.url,
                cover_image=cover_image.url if cover_image else "",
            )
            try:
                user_id = await self.repo.create(doc)
            except DuplicateKeyError:
                # lost a race against a concurrent registration
                raise ConflictError("User with this email or username already exists")

            created = await self.repo.get_public(user_id)
            if not created:
                raise UpstreamFailure("Something went wrong while registering the user")

        log.info("registered user %s (%s)", username, user_id)
        return created
