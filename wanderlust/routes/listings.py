from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse
from typing import Optional

from wanderlust.database import get_db
from wanderlust.models.listing import ListingCreate, ListingUpdate
from wanderlust.services import listings as store
from wanderlust.utils.documents import parse_oid, to_view
from wanderlust.utils.templates import render
from wanderlust.utils.validation import validate_listing, validate_listing_update

router = APIRouter(prefix="/listings", tags=["Listings"])


def _see_other(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


@router.get("")
async def index(request: Request, db=Depends(get_db)):
    """Display all listings"""
    all_listings = [to_view(doc) for doc in await store.find_all_listings(db)]
    return render(request, "listings/index.html", {"all_listings": all_listings})


@router.get("/new")
async def new_form(request: Request):
    return render(request, "listings/new.html")


@router.get("/error")
async def error_page(request: Request, message: Optional[str] = None):
    """Stand-alone error view; the message travels in the query string"""
    err = {"status_code": 400, "message": message or "Something went wrong"}
    return render(request, "error.html", {"err": err})


@router.get("/{listing_id}")
async def show(listing_id: str, request: Request, db=Depends(get_db)):
    listing = to_view(await store.find_listing_with_reviews(db, parse_oid(listing_id)))
    listing["reviews"] = [to_view(r) for r in listing["reviews"]]
    return render(request, "listings/show.html", {"listing": listing})


@router.post("")
async def create(data: ListingCreate = Depends(validate_listing), db=Depends(get_db)):
    new_id = await store.insert_listing(db, data)
    return _see_other(f"/listings/{new_id}")


@router.get("/{listing_id}/edit")
async def edit_form(listing_id: str, request: Request, db=Depends(get_db)):
    listing = await store.find_listing(db, parse_oid(listing_id))
    return render(request, "listings/edit.html", {"listing": to_view(listing)})


@router.put("/{listing_id}")
async def update(
    listing_id: str,
    data: ListingUpdate = Depends(validate_listing_update),
    db=Depends(get_db),
):
    oid = parse_oid(listing_id)
    await store.update_listing(db, oid, data)
    return _see_other(f"/listings/{oid}")


@router.delete("/{listing_id}")
async def destroy(listing_id: str, db=Depends(get_db)):
    await store.delete_listing(db, parse_oid(listing_id))
    return _see_other("/listings")
