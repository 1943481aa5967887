from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from wanderlust.database import get_db
from wanderlust.models.review import ReviewPayload
from wanderlust.services import listings as store
from wanderlust.utils.documents import parse_oid
from wanderlust.utils.validation import validate_review

router = APIRouter(prefix="/listings/{listing_id}/reviews", tags=["Reviews"])


@router.post("")
async def create_review(
    listing_id: str,
    payload: ReviewPayload = Depends(validate_review),
    db=Depends(get_db),
):
    """Attach a review to an existing listing"""
    oid = parse_oid(listing_id)
    await store.add_review(db, oid, payload.review)
    return RedirectResponse(url=f"/listings/{oid}", status_code=status.HTTP_303_SEE_OTHER)


@router.delete("/{review_id}")
async def delete_review(listing_id: str, review_id: str, db=Depends(get_db)):
    oid = parse_oid(listing_id)
    await store.remove_review(db, oid, parse_oid(review_id, "Review"))
    return RedirectResponse(url=f"/listings/{oid}", status_code=status.HTTP_303_SEE_OTHER)
