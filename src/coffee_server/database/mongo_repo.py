from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from bson import ObjectId
from pymongo import AsyncMongoClient
from pymongo.errors import ConnectionFailure, PyMongoError
from pymongo.server_api import ServerApi

from .base_repo import BaseRepository
from ..config import app_config, redact_uri
from ..exceptions.store_exceptions import DatabaseOperationError, DatabaseUnavailableError
from ..common.log import (
    log_database_connected, log_database_connection_failed, log_database_disconnected,
    log_database_error, log_database_ping_failed, log_database_ping_success,
    log_database_result, Logger
)

T = TypeVar("T")


class MongoRepository(BaseRepository):
    """
    Gateway to the MongoDB deployment.

    One instance is created at startup and shared by every request. All driver
    errors are translated into StoreError subclasses here, so callers never see
    a raw PyMongoError.
    """

    def __init__(
        self,
        db_name: str = app_config.DB_NAME,
        coffee_collection: str = app_config.COFFEE_COLLECTION,
        user_collection: str = app_config.USER_COLLECTION,
        timeout_ms: int = app_config.DB_TIMEOUT_MS,
    ) -> None:
        self.uri = None
        self.db_name = db_name
        self.coffee_collection = coffee_collection
        self.user_collection = user_collection
        self.timeout_ms = timeout_ms

        self.client = None
        self.db = None
        self.coffee = None
        self.users = None
        self.logger = Logger("MongoRepository")

    #---------------------------
    #     Connection
    #---------------------------

    async def connect(self, uri: str) -> None:
        self.uri = uri

        try:
            self.client = AsyncMongoClient(
                uri,
                server_api = ServerApi("1", strict=True, deprecation_errors=True),
                serverSelectionTimeoutMS = self.timeout_ms,
            )
        except PyMongoError as e:
            log_database_connection_failed(str(e))
            raise

        self.db = self.client[self.db_name]
        self.coffee = self.db[self.coffee_collection]
        self.users = self.db[self.user_collection]
        log_database_connected(redact_uri(uri))

    async def close(self) -> None:
        try:
            if self.client is not None:
                await self.client.close()
            log_database_disconnected()
        except Exception as e:
            log_database_error("close_connection", str(e))
        finally:
            self.client = None
            self.db = None
            self.coffee = None
            self.users = None

    async def ping(self) -> bool:
        if self.client is None:
            log_database_ping_failed("client is not connected")
            return False
        try:
            await self.client.admin.command({"ping": 1})
        except PyMongoError as e:
            log_database_ping_failed(str(e))
            return False
        log_database_ping_success()
        return True

    #---------------------------
    #     Helper Methods
    #---------------------------

    def _require(self, collection: Any, operation: str) -> Any:
        if collection is None:
            raise DatabaseUnavailableError(operation, "Database client is not connected")
        return collection

    async def _execute(self, operation: str, collection_name: str, call: Callable[[], Awaitable[T]]) -> T:
        try:
            result = await call()
        except ConnectionFailure as e:
            # ServerSelectionTimeoutError and NetworkTimeout are both ConnectionFailures
            log_database_error(operation, str(e), {"collection": collection_name})
            raise DatabaseUnavailableError(operation) from e
        except PyMongoError as e:
            log_database_error(operation, str(e), {"collection": collection_name})
            raise DatabaseOperationError(operation) from e

        log_database_result(operation, collection_name, result)
        return result

    #---------------------------
    #     Access Database
    #---------------------------

    ### Coffee ###

    async def find_all_coffee(self) -> List[Dict[str, Any]]:
        coffee = self._require(self.coffee, "find_all_coffee")
        return await self._execute(
            "find_all_coffee", self.coffee_collection,
            lambda: coffee.find({}).to_list()
        )

    async def find_coffee_by_id(self, id: ObjectId) -> Optional[Dict[str, Any]]:
        coffee = self._require(self.coffee, "find_coffee_by_id")
        document = await self._execute(
            "find_coffee_by_id", self.coffee_collection,
            lambda: coffee.find_one({"_id": id})
        )
        if document is None:
            self.logger.debug("No coffee found", id=id)
        return document

    async def insert_coffee(self, document: Dict[str, Any]):
        coffee = self._require(self.coffee, "insert_coffee")
        return await self._execute(
            "insert_coffee", self.coffee_collection,
            lambda: coffee.insert_one(document)
        )

    async def delete_coffee(self, id: ObjectId):
        coffee = self._require(self.coffee, "delete_coffee")
        return await self._execute(
            "delete_coffee", self.coffee_collection,
            lambda: coffee.delete_one({"_id": id})
        )

    async def upsert_coffee(self, id: ObjectId, fields: Dict[str, Any]):
        """Overwrite the given fields of one coffee, creating the record when no id matches."""
        coffee = self._require(self.coffee, "upsert_coffee")
        return await self._execute(
            "upsert_coffee", self.coffee_collection,
            lambda: coffee.update_one({"_id": id}, {"$set": fields}, upsert=True)
        )

    ### Users ###

    async def find_all_users(self) -> List[Dict[str, Any]]:
        users = self._require(self.users, "find_all_users")
        return await self._execute(
            "find_all_users", self.user_collection,
            lambda: users.find({}).to_list()
        )

    async def insert_user(self, document: Dict[str, Any]):
        users = self._require(self.users, "insert_user")
        return await self._execute(
            "insert_user", self.user_collection,
            lambda: users.insert_one(document)
        )

    async def delete_user(self, id: ObjectId):
        users = self._require(self.users, "delete_user")
        return await self._execute(
            "delete_user", self.user_collection,
            lambda: users.delete_one({"_id": id})
        )
