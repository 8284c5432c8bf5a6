from typing import Any, Dict, List, Optional

from bson import ObjectId
from fastapi import APIRouter, Depends
from fastapi_utils.cbv import cbv

from ..models.documents import CoffeeItem, CoffeeUpdate, DeleteAck, InsertAck, UpdateAck
from ..schemas.serializer import delete_serial, individual_serial, insert_serial, list_serial, update_serial
from ..dependencies.dependencies import get_repo, request_context, valid_object_id
from ..database.base_repo import BaseRepository
from ..common.log import log_api_payload, log_api_request

# cbv re-includes its routes without a prefix and an empty path is rejected,
# so the full paths are spelled out here.
router = APIRouter(
    tags=["coffee"],
    dependencies=[Depends(request_context)],
)

@cbv(router)
class CoffeeViews:
    repo: BaseRepository = Depends(get_repo)

    @router.get("/addCoffee")
    async def get_all_coffee(self) -> List[Dict[str, Any]]:
        log_api_request("/addCoffee", "GET")
        return list_serial(await self.repo.find_all_coffee())

    @router.get("/addCoffee/{id}")
    async def get_coffee(self, oid: ObjectId = Depends(valid_object_id)) -> Optional[Dict[str, Any]]:
        log_api_request(f"/addCoffee/{oid}", "GET")
        return individual_serial(await self.repo.find_coffee_by_id(oid))

    @router.post("/addCoffee", response_model = InsertAck)
    async def add_coffee(self, coffee: CoffeeItem):
        log_api_request("/addCoffee", "POST")
        document = coffee.to_document()
        log_api_payload("/addCoffee", document)
        return insert_serial(await self.repo.insert_coffee(document))

    @router.delete("/addCoffee/{id}", response_model = DeleteAck)
    async def delete_coffee(self, oid: ObjectId = Depends(valid_object_id)):
        log_api_request(f"/addCoffee/{oid}", "DELETE")
        return delete_serial(await self.repo.delete_coffee(oid))

    @router.put("/addCoffee/{id}", response_model = UpdateAck)
    async def update_coffee(self, coffee: Optional[CoffeeUpdate] = None, oid: ObjectId = Depends(valid_object_id)):
        log_api_request(f"/addCoffee/{oid}", "PUT")
        # a missing body behaves like {}: all six fields are cleared
        fields = (coffee if coffee is not None else CoffeeUpdate()).to_set_fields()
        log_api_payload(f"/addCoffee/{oid}", fields)
        return update_serial(await self.repo.upsert_coffee(oid, fields))
