import re
from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from wanderlust.models.listing import ListingCreate, ListingUpdate
from wanderlust.models.review import ReviewPayload
from wanderlust.utils.errors import ValidationError

SCHEMAS = {
    "listing": ListingCreate,
    "listing_update": ListingUpdate,
    "review": ReviewPayload,
}

_KEY_PARTS = re.compile(r"[^\[\]]+")


def format_errors(exc: PydanticValidationError) -> str:
    """Join every field error into one message, e.g. '"price" Field required,"title" ...'"""
    parts = []
    for err in exc.errors():
        path = ".".join(str(p) for p in err["loc"])
        parts.append(f'"{path}" {err["msg"]}')
    return ",".join(parts)


def validate(kind: str, payload) -> BaseModel:
    schema = SCHEMAS[kind]
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(format_errors(e))


def expand_form(items) -> dict:
    """Nest bracketed form keys: review[rating]=5 -> {"review": {"rating": "5"}}"""
    body = {}
    for key, value in items:
        if key == "_method":
            continue
        parts = _KEY_PARTS.findall(key) or [key]
        target = body
        for part in parts[:-1]:
            nested = target.get(part)
            if not isinstance(nested, dict):
                nested = target[part] = {}
            target = nested
        target[parts[-1]] = value
    return body


async def read_body(request: Request) -> dict:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise ValidationError("Request body is not valid JSON")
        if not isinstance(body, dict):
            raise ValidationError("Request body must be an object")
        return body

    form = await request.form()
    return expand_form(form.multi_items())


# Dependencies used by the routers; they run before the handler touches the store

async def validate_listing(request: Request) -> ListingCreate:
    return validate("listing", await read_body(request))


async def validate_listing_update(request: Request) -> ListingUpdate:
    return validate("listing_update", await read_body(request))


async def validate_review(request: Request) -> ReviewPayload:
    return validate("review", await read_body(request))
