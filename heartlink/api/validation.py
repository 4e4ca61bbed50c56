from flask import current_app, request
from pydantic import ValidationError
from werkzeug.exceptions import RequestEntityTooLarge

from heartlink.errors import ValidationFailed


def _details(exc, location):
    details = []
    for err in exc.errors():
        details.append({
            "field": ".".join(str(part) for part in err["loc"]) or None,
            "msg": err["msg"],
            "location": location,
        })
    return details


def parse(model, data, location="body"):
    """Validate `data` against `model`, raising ValidationFailed with itemized errors."""
    if not isinstance(data, dict):
        data = {}
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ValidationFailed(_details(e, location))


def json_body():
    """The request's JSON object, enforcing the JSON body ceiling."""
    limit = current_app.config["MAX_JSON_BYTES"]
    if request.content_length is not None and request.content_length > limit:
        raise RequestEntityTooLarge()
    # Bounds bodies sent without a Content-Length as well
    request.max_content_length = limit
    return request.get_json(silent=True)


def parse_body(model):
    return parse(model, json_body(), "body")


def parse_query(model):
    return parse(model, request.args.to_dict(), "query")
