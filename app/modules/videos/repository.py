from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from app.core.db import VIDEOS

class VideoRepository:
    def __init__(self, db: AsyncDatabase):
        self.col = db[VIDEOS]

    async def aggregate(self, pipeline: list[dict]) -> list[dict]:
        cursor = await self.col.aggregate(pipeline)
        return await cursor.to_list(None)

    async def get(self, video_id: ObjectId) -> dict | None:
        return await self.col.find_one({"_id": video_id})

    async def create(self, doc: dict) -> dict | None:
        res = await self.col.insert_one(doc)
        return await self.col.find_one({"_id": res.inserted_id})

    async def update(self, video_id: ObjectId, fields: dict) -> dict | None:
        return await self.col.find_one_and_update(
            {"_id": video_id},
            {"$set": fields, "$currentDate": {"updatedAt": True}},
            return_document=ReturnDocument.AFTER,
        )

    async def delete(self, video_id: ObjectId) -> bool:
        res = await self.col.delete_one({"_id": video_id})
        return res.deleted_count == 1
