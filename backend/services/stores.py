"""
Donor and blood-request stores.
Thin wrappers over the Mongo collections; every driver error is logged and
re-raised as PersistenceError.
"""
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from models import Donor, DonorCreate, BloodRequest, BloodRequestCreate, RequestStatus
from .errors import PersistenceError, NotFoundError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _storage(operation: str):
    try:
        yield
    except PyMongoError as e:
        logger.error("Storage failure during %s: %s", operation, e)
        raise PersistenceError(f"Storage unavailable during {operation}") from e


class DonorStore:
    def __init__(self, db):
        self.collection = db.donors

    async def create(self, data: DonorCreate) -> Donor:
        donor = Donor(**data.model_dump())
        async with _storage("donor create"):
            await self.collection.insert_one(donor.model_dump(mode="json"))
        logger.info("Registered donor %s (%s)", donor.id, donor.blood_group.value)
        return donor

    async def list(self) -> List[Donor]:
        async with _storage("donor list"):
            docs = await self.collection.find({}, {"_id": 0}).sort("created_at", -1).to_list(None)
        return [Donor.model_validate(doc) for doc in docs]

    async def find(self, query: dict, limit: int) -> List[Donor]:
        async with _storage("donor search"):
            cursor = self.collection.find(query, {"_id": 0}).sort("created_at", -1).limit(limit)
            docs = await cursor.to_list(limit)
        return [Donor.model_validate(doc) for doc in docs]

    async def count_by(self, field: str) -> dict:
        pipeline = [{"$group": {"_id": f"${field}", "count": {"$sum": 1}}}]
        async with _storage("donor aggregate"):
            rows = await self.collection.aggregate(pipeline).to_list(None)
        return {row["_id"]: row["count"] for row in rows if row["_id"]}

    async def delete(self, donor_id: str) -> Donor:
        async with _storage("donor delete"):
            doc = await self.collection.find_one_and_delete({"id": donor_id}, projection={"_id": 0})
        if not doc:
            raise NotFoundError("Donor not found")
        return Donor.model_validate(doc)


class RequestStore:
    def __init__(self, db):
        self.collection = db.blood_requests

    async def create(self, data: BloodRequestCreate) -> BloodRequest:
        request = BloodRequest(**data.model_dump())
        async with _storage("request create"):
            await self.collection.insert_one(request.model_dump(mode="json"))
        logger.info("Stored blood request %s (%s, %s)", request.id, request.blood_group.value, request.city)
        return request

    async def list(self) -> List[BloodRequest]:
        async with _storage("request list"):
            docs = await self.collection.find({}, {"_id": 0}).sort("created_at", -1).to_list(None)
        return [BloodRequest.model_validate(doc) for doc in docs]

    async def get(self, request_id: str) -> Optional[BloodRequest]:
        async with _storage("request lookup"):
            doc = await self.collection.find_one({"id": request_id}, {"_id": 0})
        return BloodRequest.model_validate(doc) if doc else None

    async def approve(self, request_id: str) -> BloodRequest:
        # Setting an already approved request to Approved again is a no-op.
        async with _storage("request approve"):
            doc = await self.collection.find_one_and_update(
                {"id": request_id},
                {"$set": {"status": RequestStatus.APPROVED.value}},
                projection={"_id": 0},
                return_document=ReturnDocument.AFTER,
            )
        if not doc:
            raise NotFoundError("Request not found")
        return BloodRequest.model_validate(doc)

    async def delete(self, request_id: str) -> BloodRequest:
        async with _storage("request delete"):
            doc = await self.collection.find_one_and_delete({"id": request_id}, projection={"_id": 0})
        if not doc:
            raise NotFoundError("Request not found")
        return BloodRequest.model_validate(doc)
