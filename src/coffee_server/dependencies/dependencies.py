from typing import Optional
from typing_extensions import Annotated

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Header, Path, Request

from ..database.base_repo import BaseRepository
from ..exceptions.store_exceptions import DatabaseUnavailableError, InvalidIdentifierError
from ..common.log import log_invalid_identifier, set_request_context


def get_repo(request: Request) -> "BaseRepository":
    """Return the gateway created by the application lifespan."""
    repo = getattr(request.app.state, "repo", None)
    if repo is None:
        raise DatabaseUnavailableError(message="Database gateway has not been initialised")
    return repo


def parse_object_id(value: str) -> ObjectId:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        log_invalid_identifier(value)
        raise InvalidIdentifierError(value)


async def valid_object_id(id: Annotated[str, Path()]) -> ObjectId:
    """Parse the `{id}` path segment before any store operation runs."""
    return parse_object_id(id)


async def request_context(x_request_id: Annotated[Optional[str], Header()] = None) -> str:
    return set_request_context(x_request_id)
