import re

from pydantic import ValidationError

from .errors import ResourceValidationError
from .models.main import Resource


def _camel(segment: str) -> str:
    return re.sub(r"_([a-z0-9])", lambda m: m.group(1).upper(), segment)


def error_path(loc: tuple) -> str:
    """``('funding_references', 0, 'funder_identifier_type')`` ->
    ``fundingReferences.0.funderIdentifierType``"""
    return ".".join(_camel(str(part)) for part in loc) or "resource"


def _message(msg: str) -> str:
    return msg.removeprefix("Value error, ")


def validate_resource_payload(payload: dict) -> Resource:
    """Strict save-time validation of an editor payload"""
    try:
        return Resource.model_validate(payload)
    except ValidationError as exc:
        errors = {}
        for err in exc.errors():
            errors.setdefault(error_path(err["loc"]), _message(err["msg"]))
        raise ResourceValidationError(errors) from exc
