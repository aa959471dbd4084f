from fastapi import APIRouter, Depends, File, Form, UploadFile
from app.core.db import get_database
from app.core.responses import EnvelopeRoute, api_response
from app.modules.users.repository import UserRepository
from app.modules.users.schemas import UserRegister
from app.modules.users.service import UserService
from app.platform.provider_registry import get_media_store
from app.platform.staging import staged_files

router = APIRouter(route_class=EnvelopeRoute)

def get_user_repository(db = Depends(get_database)) -> UserRepository:
    return UserRepository(db)

def svc(repo: UserRepository = Depends(get_user_repository), media = Depends(get_media_store)) -> UserService:
    return UserService(repo, media)

@router.post("/register", status_code=201)
async def register_user(
    fullName: str | None = Form(None),
    username: str | None = Form(None),
    email: str | None = Form(None),
    password: str | None = Form(None),
    avatar: UploadFile | None = File(None),
    coverImage: UploadFile | None = File(None),
    service: UserService = Depends(svc),
):
    payload = UserRegister(fullName=fullName, username=username, email=email, password=password)
    async with staged_files(avatar, coverImage) as (avatar_path, cover_image_path):
        user = await service.register(payload, avatar_path, cover_image_path)
    return api_response(201, user, "User registered successfully")
