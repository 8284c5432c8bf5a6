from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


#---------------------------
# *      Coffee
#---------------------------

COFFEE_FIELDS = ("name", "supplier", "taste", "category", "details", "photo")


class CoffeeItem(BaseModel):
    """A coffee document as posted by a client. Unknown fields are kept."""
    model_config = ConfigDict(extra="allow")

    name:     Optional[str] = None
    supplier: Optional[str] = None
    taste:    Optional[str] = None
    category: Optional[str] = None
    details:  Optional[str] = None
    photo:    Optional[str] = None  # free-form URI

    def to_document(self) -> Dict[str, Any]:
        """Fields the client actually sent, extras included, without any `_id`."""
        document = self.model_dump(exclude_unset=True)
        document.update(self.model_extra or {})
        document.pop("_id", None)
        return document


class CoffeeUpdate(BaseModel):
    """
    Replacement values for the six known coffee fields.

    Missing fields are written as null and anything else in the body is dropped,
    so an update never touches fields outside COFFEE_FIELDS.
    """
    model_config = ConfigDict(extra="ignore")

    name:     Optional[str] = None
    supplier: Optional[str] = None
    taste:    Optional[str] = None
    category: Optional[str] = None
    details:  Optional[str] = None
    photo:    Optional[str] = None

    def to_set_fields(self) -> Dict[str, Optional[str]]:
        return {field: getattr(self, field) for field in COFFEE_FIELDS}


#---------------------------
# *      Users
#---------------------------

class User(BaseModel):
    """A user document. There is no fixed schema, every field is kept."""
    model_config = ConfigDict(extra="allow")

    def to_document(self) -> Dict[str, Any]:
        document = dict(self.model_extra or {})
        document.pop("_id", None)
        return document


#---------------------------
# *      Acknowledgments
#---------------------------

class StoreAck(BaseModel):
    """Operation metadata reported by the store, serialized with camelCase names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    acknowledged: bool = True


class InsertAck(StoreAck):
    inserted_id: Optional[str] = None


class DeleteAck(StoreAck):
    deleted_count: int = 0


class UpdateAck(StoreAck):
    matched_count: int = 0
    modified_count: int = 0
    upserted_count: int = 0
    upserted_id: Optional[str] = None
