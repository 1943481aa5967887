import html

from bson import ObjectId

from conftest import add_review, create_listing


def test_post_review_appends_and_redirects(client, db, run):
    listing_id = create_listing(client)

    r = client.post(
        f"/listings/{listing_id}/reviews",
        json={"review": {"comment": "Great stay", "rating": 5}},
    )
    assert r.status_code == 303
    assert r.headers["location"] == f"/listings/{listing_id}"

    listing = run(db.listings.find_one({"_id": ObjectId(listing_id)}))
    assert len(listing["reviews"]) == 1
    review = run(db.reviews.find_one({"_id": listing["reviews"][0]}))
    assert review["comment"] == "Great stay"
    assert review["rating"] == 5
    assert review["created_at"] is not None


def test_post_review_from_form_fields(client, db, run):
    listing_id = create_listing(client)

    r = client.post(
        f"/listings/{listing_id}/reviews",
        data={"review[comment]": "Lovely host", "review[rating]": "4"},
    )
    assert r.status_code == 303
    assert run(db.reviews.find_one({}))["rating"] == 4


def test_post_review_to_unknown_listing_creates_nothing(client, db, run):
    r = client.post(
        f"/listings/{ObjectId()}/reviews",
        json={"review": {"comment": "Great stay", "rating": 5}},
    )
    assert r.status_code == 404
    assert run(db.reviews.count_documents({})) == 0


def test_post_review_trims_listing_id(client, db, run):
    listing_id = create_listing(client)

    r = client.post(
        f"/listings/%20{listing_id}%20/reviews",
        json={"review": {"comment": "Great stay", "rating": 5}},
    )
    assert r.status_code == 303
    assert r.headers["location"] == f"/listings/{listing_id}"


def test_post_review_out_of_range_rating(client, db, run):
    listing_id = create_listing(client)

    r = client.post(
        f"/listings/{listing_id}/reviews",
        json={"review": {"comment": "Too good", "rating": 6}},
    )
    assert r.status_code == 400
    assert '"review.rating"' in html.unescape(r.text)
    assert run(db.reviews.count_documents({})) == 0


def test_post_review_without_review_object(client):
    listing_id = create_listing(client)

    r = client.post(f"/listings/{listing_id}/reviews", json={"comment": "x", "rating": 3})
    assert r.status_code == 400
    assert '"review" Field required' in html.unescape(r.text)


def test_show_page_lists_reviews_in_order(client):
    listing_id = create_listing(client)
    add_review(client, listing_id, comment="first visit")
    add_review(client, listing_id, comment="second visit")

    page = client.get(f"/listings/{listing_id}").text
    assert page.index("first visit") < page.index("second visit")


def test_delete_review_twice_is_harmless(client, db, run):
    listing_id = create_listing(client)
    add_review(client, listing_id, comment="to delete")
    add_review(client, listing_id, comment="to keep")

    listing = run(db.listings.find_one({"_id": ObjectId(listing_id)}))
    doomed, kept = listing["reviews"]

    for _ in range(2):
        r = client.delete(f"/listings/{listing_id}/reviews/{doomed}")
        assert r.status_code == 303
        assert r.headers["location"] == f"/listings/{listing_id}"

    listing = run(db.listings.find_one({"_id": ObjectId(listing_id)}))
    assert listing["reviews"] == [kept]
    assert run(db.reviews.find_one({"_id": doomed})) is None
    assert run(db.reviews.find_one({"_id": kept}))["comment"] == "to keep"


def test_delete_review_through_form_method_override(client, db, run):
    listing_id = create_listing(client)
    add_review(client, listing_id)
    review_id = run(db.reviews.find_one({}))["_id"]

    r = client.post(f"/listings/{listing_id}/reviews/{review_id}?_method=DELETE")
    assert r.status_code == 303
    assert run(db.reviews.count_documents({})) == 0


def test_delete_review_with_malformed_id(client):
    listing_id = create_listing(client)

    r = client.delete(f"/listings/{listing_id}/reviews/bogus")
    assert r.status_code == 404
    assert "Review not found" in r.text


def test_delete_review_through_other_listing_keeps_its_document(client, db, run):
    owner = create_listing(client, title="Owner")
    other = create_listing(client, title="Other")
    add_review(client, owner, comment="belongs to owner")
    review_id = run(db.listings.find_one({"_id": ObjectId(owner)}))["reviews"][0]

    r = client.delete(f"/listings/{other}/reviews/{review_id}")
    assert r.status_code == 303
    assert r.headers["location"] == f"/listings/{other}"

    listing = run(db.listings.find_one({"_id": ObjectId(owner)}))
    assert listing["reviews"] == [review_id]
    assert run(db.reviews.find_one({"_id": review_id}))["comment"] == "belongs to owner"
