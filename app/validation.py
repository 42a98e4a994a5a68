"""
Request-body validation shared by the resource routers.

Bodies arrive as plain dicts (see ``dependencies.read_json_body``) so that
every 400 carries a field-named message instead of FastAPI's 422 payload.
Presence is checked first, in the resource's declared field order, and only
then are the accepted values coerced through the resource's Pydantic model.
"""
from fastapi import HTTPException
from pydantic import BaseModel, ValidationError


def require_fields(body: dict, fields: tuple[str, ...]) -> dict:
    """
    Return the values of *fields* taken from *body*.

    Raises a 400 naming the first field (in declared order) that is absent
    or null.  Keys outside *fields* are ignored.
    """
    for field in fields:
        if body.get(field) is None:
            raise HTTPException(status_code=400, detail=f"Missing '{field}' in request body")
    return {field: body[field] for field in fields}


def pick_fields(body: dict, fields: tuple[str, ...], message: str) -> dict:
    """
    Return the subset of *body* restricted to *fields*, dropping nulls.

    Raises a 400 with *message* when nothing is left to update.
    """
    picked = {field: body[field] for field in fields if body.get(field) is not None}
    if not picked:
        raise HTTPException(status_code=400, detail=message)
    return picked


def coerce(schema: type[BaseModel], values: dict) -> dict:
    """
    Validate *values* against *schema* and return the coerced values that
    were supplied.  A type mismatch is reported as a 400 naming the field.
    """
    try:
        model = schema.model_validate(values)
    except ValidationError as exc:
        loc = exc.errors()[0]["loc"]
        field = loc[0] if loc else "body"
        raise HTTPException(status_code=400, detail=f"Invalid '{field}' in request body") from exc
    return model.model_dump(exclude_unset=True)
