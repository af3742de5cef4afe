"""Shared schema building blocks and the response envelope."""

import uuid
from typing import Annotated, Any

from pydantic import AfterValidator, AnyHttpUrl, BaseModel, ConfigDict, TypeAdapter
from pydantic.alias_generators import to_camel

_URL_ADAPTER: TypeAdapter[AnyHttpUrl] = TypeAdapter(AnyHttpUrl)


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python, strings trimmed."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


def _check_http_url(value: str) -> str:
    try:
        _URL_ADAPTER.validate_python(value)
    except ValueError:
        raise ValueError("must be a valid URL") from None
    # Stored exactly as sent; AnyHttpUrl would add a trailing slash
    return value


def _check_document_id(value: str) -> str:
    try:
        return str(uuid.UUID(value))
    except ValueError:
        raise ValueError("must be a valid id") from None


HttpUrlStr = Annotated[str, AfterValidator(_check_http_url)]
DocumentId = Annotated[str, AfterValidator(_check_document_id)]


def envelope(data: Any = None, message: str | None = None) -> dict[str, Any]:
    """Success envelope: {success: true, message?, data?}."""
    body: dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body


def dump(model: BaseModel) -> dict[str, Any]:
    """Serialize a response schema with camelCase keys and JSON-safe values."""
    return model.model_dump(by_alias=True, mode="json")
