from bson import ObjectId
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from pydantic import BaseModel
from app.core.config import settings
from app.core.errors import UnauthorizedError

http_bearer = HTTPBearer(auto_error=False)

class Principal(BaseModel):
    user_id: str

    @property
    def oid(self) -> ObjectId:
        return ObjectId(self.user_id)

def _decode_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG], audience=settings.REQUIRED_AUDIENCE)
        return payload
    except JWTError as e:
        raise UnauthorizedError(f"Invalid token: {e}")

def create_access_token(user_id: str, **claims) -> str:
    payload = {"sub": user_id, **claims}
    if settings.REQUIRED_AUDIENCE:
        payload.setdefault("aud", settings.REQUIRED_AUDIENCE)
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)

async def get_principal(creds: HTTPAuthorizationCredentials | None = Depends(http_bearer)) -> Principal:
    if creds is None:
        raise UnauthorizedError("Missing token")

    data = _decode_token(creds.credentials)
    user_id = str(data.get("sub") or data.get("_id") or "")
    if not ObjectId.is_valid(user_id):
        raise UnauthorizedError("Invalid token subject")
    return Principal(user_id=user_id)
