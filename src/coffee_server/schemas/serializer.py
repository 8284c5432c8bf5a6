from typing import Any, Optional

from bson import ObjectId
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult

from ..models.documents import DeleteAck, InsertAck, UpdateAck


def _serial_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: _serial_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_serial_value(item) for item in value]
    return value


def individual_serial(document: Optional[dict]) -> Optional[dict]:
    """Turn a raw BSON document into a JSON-safe dict, ObjectIds as hex strings."""
    if document is None:
        return None
    return _serial_value(document)


def list_serial(documents: list[dict]) -> list[dict]:
    return [individual_serial(document) for document in documents]


def _id_or_none(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def insert_serial(result: InsertOneResult) -> InsertAck:
    return InsertAck(
        acknowledged = result.acknowledged,
        inserted_id  = _id_or_none(result.inserted_id),
    )


def delete_serial(result: DeleteResult) -> DeleteAck:
    return DeleteAck(
        acknowledged  = result.acknowledged,
        deleted_count = result.deleted_count,
    )


def update_serial(result: UpdateResult) -> UpdateAck:
    upserted_id = result.upserted_id
    return UpdateAck(
        acknowledged   = result.acknowledged,
        matched_count  = result.matched_count,
        modified_count = result.modified_count,
        upserted_count = 0 if upserted_id is None else 1,
        upserted_id    = _id_or_none(upserted_id),
    )
