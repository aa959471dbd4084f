"""Aggregation pipeline behind the video listing.

Stages: text filter -> owner join -> sort -> skip/limit -> projection.
The owner join is an inner join: videos whose owner no longer exists are
dropped from the results.
"""
import re
from bson import ObjectId
from app.core.db import USERS
from app.modules.videos.schemas import VideoSearchParams

LIST_PROJECTION = {
    "thumbnail": 1,
    "videoFile": 1,
    "title": 1,
    "description": 1,
    "createdBy": {
        "fullName": 1,
        "username": 1,
        "avatar": 1,
    },
}


def build_match(params: VideoSearchParams) -> dict:
    match: dict = {}
    if params.query:
        pattern = {"$regex": re.escape(params.query), "$options": "i"}
        match["$or"] = [{"title": pattern}, {"description": pattern}]
    if params.userId:
        match["owner"] = ObjectId(params.userId)
    return match


def build_search_pipeline(params: VideoSearchParams) -> list[dict]:
    direction = 1 if params.ascending else -1
    pipeline: list[dict] = []
    match = build_match(params)
    if match:
        pipeline.append({"$match": match})
    pipeline += [
        {
            "$lookup": {
                "from": USERS,
                "localField": "owner",
                "foreignField": "_id",
                "as": "createdBy",
            }
        },
        {"$unwind": "$createdBy"},
        # _id keeps page boundaries stable when sort keys tie
        {"$sort": {params.sortBy: direction, "_id": direction}},
        {"$skip": (params.page - 1) * params.limit},
        {"$limit": params.limit},
        {"$project": LIST_PROJECTION},
    ]
    return pipeline
