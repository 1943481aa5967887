from bson import ObjectId
from bson.errors import InvalidId
from wanderlust.utils.errors import NotFoundError


def serialize_objectid(value):
    if isinstance(value, ObjectId):
        return str(value)
    elif isinstance(value, list):
        return [serialize_objectid(v) for v in value]
    elif isinstance(value, dict):
        return {k: serialize_objectid(v) for k, v in value.items()}
    return value


def to_view(doc):
    """Turn a stored document into a template-friendly dict with a string `id`"""
    doc = serialize_objectid(doc)
    doc["id"] = doc.pop("_id", doc.get("id"))
    return doc


def parse_oid(val: str, what: str = "Listing") -> ObjectId:
    """Malformed ids can never match a document, so they read as not found"""
    try:
        return ObjectId(val.strip())
    except (InvalidId, TypeError):
        raise NotFoundError(f"{what} not found")
