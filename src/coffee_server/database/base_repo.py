from abc import ABC, abstractmethod
from typing import List, Optional, Any, Dict

from bson import ObjectId
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult

class BaseRepository(ABC):
    @abstractmethod
    async def connect(self, uri: str) -> None:
        pass

    @abstractmethod
    async def close(self) -> None:
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Run a no-op admin command, True if the database answered."""
        pass

    ### Coffee

    @abstractmethod
    async def find_all_coffee(self) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    async def find_coffee_by_id(self, id: ObjectId) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    async def insert_coffee(self, document: Dict[str, Any]) -> InsertOneResult:
        pass

    @abstractmethod
    async def delete_coffee(self, id: ObjectId) -> DeleteResult:
        pass

    @abstractmethod
    async def upsert_coffee(self, id: ObjectId, fields: Dict[str, Any]) -> UpdateResult:
        pass

    ### Users

    @abstractmethod
    async def find_all_users(self) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    async def insert_user(self, document: Dict[str, Any]) -> InsertOneResult:
        pass

    @abstractmethod
    async def delete_user(self, id: ObjectId) -> DeleteResult:
        pass
