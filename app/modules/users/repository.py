from bson import ObjectId
from pymongo.asynchronous.database import AsyncDatabase
from app.core.db import USERS
from app.modules.users.models import PRIVATE_FIELDS

class UserRepository:
    def __init__(self, db: AsyncDatabase):
        self.col = db[USERS]

    async def find_by_username_or_email(self, username: str, email: str) -> dict | None:
        return await self.col.find_one({"$or": [{"username": username}, {"email": email}]})

    async def create(self, doc: dict) -> ObjectId:
        res = await self.col.insert_one(doc)
        return res.inserted_id

    async def get_public(self, user_id: ObjectId) -> dict | None:
        return await self.col.find_one({"_id": user_id}, projection={f: 0 for f in PRIVATE_FIELDS})
