import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import List, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from wanderlust.models.listing import ListingCreate, ListingUpdate
from wanderlust.models.review import ReviewCreate
from wanderlust.utils.errors import NotFoundError, StoreError

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(action: str):
    """Translate driver failures into StoreError so they reach the error page"""
    try:
        yield
    except PyMongoError:
        logger.exception("Store failure while %s", action)
        raise StoreError(f"Error {action}")


# ---------- Listings ----------

async def find_all_listings(db) -> List[dict]:
    with store_errors("fetching listings"):
        return await db.listings.find({}).to_list(length=None)


async def find_listing(db, listing_id: ObjectId) -> dict:
    with store_errors("fetching listing"):
        listing = await db.listings.find_one({"_id": listing_id})
    if not listing:
        raise NotFoundError("Listing not found")
    return listing


async def find_listing_with_reviews(db, listing_id: ObjectId) -> dict:
    """Fetch a listing and replace its review ids with the review documents"""
    listing = await find_listing(db, listing_id)
    review_ids = listing.get("reviews", [])

    with store_errors("fetching reviews"):
        reviews = await db.reviews.find({"_id": {"$in": review_ids}}).to_list(length=None)

    # $in does not keep order; follow the listing's reference order
    by_id = {r["_id"]: r for r in reviews}
    listing["reviews"] = [by_id[rid] for rid in review_ids if rid in by_id]
    return listing


async def insert_listing(db, data: ListingCreate) -> ObjectId:
    doc = data.model_dump()
    doc["reviews"] = []

    with store_errors("creating listing"):
        result = await db.listings.insert_one(doc)

    logger.info("Created listing %s", result.inserted_id)
    return result.inserted_id


async def update_listing(db, listing_id: ObjectId, data: ListingUpdate) -> dict:
    changes = data.changes()
    if not changes:
        return await find_listing(db, listing_id)

    with store_errors("updating listing"):
        listing = await db.listings.find_one_and_update(
            {"_id": listing_id},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
    if not listing:
        raise NotFoundError("Listing not found")
    return listing


async def delete_listing(db, listing_id: ObjectId) -> int:
    """Delete a listing, then its reviews. Returns how many reviews went with it."""
    with store_errors("deleting listing"):
        listing = await db.listings.find_one_and_delete({"_id": listing_id})
    if not listing:
        raise NotFoundError("Listing not found")

    removed = await cascade_delete_reviews(db, listing)
    logger.info("Deleted listing %s and %d review(s)", listing_id, removed)
    return removed


async def cascade_delete_reviews(db, listing: Optional[dict]) -> int:
    """Remove every review referenced by an already-deleted listing document"""
    if not listing:
        return 0
    review_ids = listing.get("reviews", [])
    if not review_ids:
        return 0

    with store_errors("deleting reviews"):
        result = await db.reviews.delete_many({"_id": {"$in": review_ids}})
    return result.deleted_count


# ---------- Reviews ----------

async def add_review(db, listing_id: ObjectId, data: ReviewCreate) -> ObjectId:
    await find_listing(db, listing_id)

    review = {
        "rating": data.rating,
        "comment": data.comment,
        "created_at": datetime.now(timezone.utc),
    }

    with store_errors("saving review"):
        result = await db.reviews.insert_one(review)
        await db.listings.update_one(
            {"_id": listing_id},
            {"$push": {"reviews": result.inserted_id}},
        )
    return result.inserted_id


async def remove_review(db, listing_id: ObjectId, review_id: ObjectId) -> None:
    # Both steps are no-ops when the review is already gone. The document is
    # kept while another listing still references it.
    with store_errors("deleting review"):
        await db.listings.update_one(
            {"_id": listing_id},
            {"$pull": {"reviews": review_id}},
        )
        if await db.listings.find_one({"reviews": review_id}) is None:
            await db.reviews.delete_one({"_id": review_id})
