r"""Typed JSON records exchanged with the service.

Records are ``pydantic`` models. ``encode_record`` and ``decode_record``
convert between records and UTF-8 JSON bodies and report every failure
as ``SerializationError``. Fields absent from a body decode to their
declared defaults and unknown fields are ignored.
"""

from __future__ import annotations

__all__ = [
    "JsonAuthenticationRequest",
    "JsonAuthenticationResponse",
    "JsonRecord",
    "decode_record",
    "encode_record",
]

from functools import lru_cache
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError
from pydantic.errors import PydanticSchemaGenerationError
from pydantic_core import PydanticSerializationError

from aresproxy.exceptions import SerializationError

T = TypeVar("T")


class JsonRecord(BaseModel):
    """Base class of the JSON records sent to and received from the service."""

    model_config = ConfigDict(extra="ignore")


class JsonAuthenticationRequest(JsonRecord):
    """Credentials posted to ``/authenticate``."""

    email: str = ""
    password: str = ""


class JsonAuthenticationResponse(JsonRecord):
    """Answer of ``/authenticate`` carrying the session token."""

    token: str = ""


@lru_cache(maxsize=128)
def _adapter(record_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(record_type)


def _type_name(record_type: Any) -> str:
    return getattr(record_type, "__name__", repr(record_type))


def encode_record(record: Any, record_type: Any = None) -> bytes:
    r"""Encode a record as a UTF-8 JSON body.

    Args:
        record: The record to encode, usually a ``JsonRecord``.
        record_type: The declared type of the record. Defaults to the
            type of ``record``.

    Returns:
        The JSON body.

    Raises:
        SerializationError: If the record cannot be serialized.

    Example:
        ```pycon
        >>> from aresproxy.records import JsonAuthenticationRequest, encode_record
        >>> encode_record(JsonAuthenticationRequest(email="a@b.c", password="pw"))
        b'{"email":"a@b.c","password":"pw"}'

        ```
    """
    record_type = type(record) if record_type is None else record_type
    try:
        return _adapter(record_type).dump_json(record)
    except (PydanticSerializationError, PydanticSchemaGenerationError, ValidationError) as exc:
        raise SerializationError(
            f"cannot encode {_type_name(record_type)}: {exc}",
            type_name=_type_name(record_type),
            cause=exc,
        ) from exc


def decode_record(body: bytes | str, record_type: type[T]) -> T:
    r"""Decode a JSON body into a record.

    Args:
        body: The JSON body.
        record_type: The type to decode into.

    Returns:
        The decoded record.

    Raises:
        SerializationError: If the body is not valid JSON or does not
            match the shape of ``record_type``.

    Example:
        ```pycon
        >>> from aresproxy.records import JsonAuthenticationResponse, decode_record
        >>> decode_record(b'{"token": "abc"}', JsonAuthenticationResponse).token
        'abc'
        >>> decode_record(b"{}", JsonAuthenticationResponse).token
        ''

        ```
    """
    try:
        return _adapter(record_type).validate_json(body)
    except (PydanticSchemaGenerationError, ValidationError) as exc:
        raise SerializationError(
            f"cannot decode {_type_name(record_type)}: {exc}",
            type_name=_type_name(record_type),
            cause=exc,
        ) from exc
