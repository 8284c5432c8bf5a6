from typing import Any, Dict, List

from bson import ObjectId
from fastapi import APIRouter, Depends
from fastapi_utils.cbv import cbv

from ..models.documents import DeleteAck, InsertAck, User
from ..schemas.serializer import delete_serial, insert_serial, list_serial
from ..dependencies.dependencies import get_repo, request_context, valid_object_id
from ..database.base_repo import BaseRepository
from ..common.log import log_api_payload, log_api_request

### NOTE: users have no update route, only create, list and delete

router = APIRouter(
    tags=["users"],
    dependencies=[Depends(request_context)],
)

@cbv(router)
class UsersViews:
    repo: BaseRepository = Depends(get_repo)

    @router.post("/users", response_model = InsertAck)
    async def create_user(self, user: User):
        log_api_request("/users", "POST")
        document = user.to_document()
        log_api_payload("/users", document)
        return insert_serial(await self.repo.insert_user(document))

    @router.get("/users")
    async def get_users(self) -> List[Dict[str, Any]]:
        log_api_request("/users", "GET")
        return list_serial(await self.repo.find_all_users())

    @router.delete("/users/{id}", response_model = DeleteAck)
    async def delete_user(self, oid: ObjectId = Depends(valid_object_id)):
        log_api_request(f"/users/{oid}", "DELETE")
        return delete_serial(await self.repo.delete_user(oid))
