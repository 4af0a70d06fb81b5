from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from bson import ObjectId
from bson.errors import BSONError
from pydantic import BaseModel, ConfigDict, Field
from pymongo.errors import DuplicateKeyError, PyMongoError

from notestore.errors import InvalidIdentifierError, QueryFailureError, QueryTimeoutError, SerializationError

logger = structlog.get_logger(__name__)


class MongoModel(BaseModel):
    id: ObjectId = Field(alias="_id", serialization_alias="id")

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )


def parse_object_id(raw: str) -> ObjectId:
    """Parse a 24-character hex string into an ObjectId."""
    # ObjectId also accepts 12 raw bytes, which is never a valid identifier here
    if not isinstance(raw, str) or not ObjectId.is_valid(raw):
        raise InvalidIdentifierError(raw)
    return ObjectId(raw)


def duplicate_key_fields(exc: DuplicateKeyError) -> set[str]:
    """Return the indexed field names that a duplicate key error was raised for."""
    details: dict[str, Any] = exc.details or {}
    key_pattern = details.get("keyPattern") or details.get("keyValue") or {}
    return set(key_pattern)


@contextmanager
def translate_store_errors(operation: str) -> Iterator[None]:
    """Re-raise driver and BSON exceptions as storage errors."""
    try:
        yield
    except (BSONError, OverflowError, UnicodeEncodeError) as exc:
        # the encoder raises the builtin errors for out-of-range ints and lone surrogates
        logger.warning("bson_encoding_failed", operation=operation, error=str(exc))
        raise SerializationError(f"{operation}: {exc}") from exc
    except PyMongoError as exc:
        logger.warning("mongo_operation_failed", operation=operation, error=str(exc), timeout=exc.timeout)
        if exc.timeout:
            raise QueryTimeoutError(f"{operation}: {exc}") from exc
        raise QueryFailureError(f"{operation}: {exc}") from exc
