"""Role-gated CRUD resources.

A resource ties one repository to a gate dependency and the request and
response models of its endpoints. Every endpoint runs the same sequence:
the gate resolves the caller, the body or query is validated, one
repository operation runs, and the result is serialized through the
response model. Bodies are read by a dependency declared after the gate, so
a rejected caller never has its body parsed. Subclasses override the
``*_record`` hooks where a resource needs more than the plain repository
call.
"""

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from backend.auth.dependencies import Caller
from backend.core.errors import MALFORMED_BODY_MESSAGE, ValidationFailed, describe_validation_errors
from backend.database import get_db
from backend.repositories.base import Repository
from backend.schemas import MessageResponse


def json_body(model: type[BaseModel]):
    """Dependency that parses the request body into ``model``.

    Declare it after the gate so an unauthenticated or forbidden caller is
    rejected before the body is looked at.
    """

    async def parse_body(request: Request):
        try:
            payload = await request.json()
        except ValueError as exc:
            raise ValidationFailed(MALFORMED_BODY_MESSAGE) from exc
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise ValidationFailed(describe_validation_errors(exc.errors())) from exc

    return parse_body


class RoleGatedResource:
    label = 'Record'
    repository_class: type[Repository] = Repository

    def __init__(
        self,
        *,
        gate,
        response_model: type[BaseModel],
        create_model: type[BaseModel] | None = None,
        update_model: type[BaseModel] | None = None,
    ):
        self.gate = gate
        self.response_model = response_model
        self.create_model = create_model
        self.update_model = update_model

    def repository(self, db: Session) -> Repository:
        return self.repository_class(db)

    def list_records(self, repository: Repository, caller: Caller):
        return repository.list()

    def get_record(self, repository: Repository, caller: Caller, record_id: int):
        return repository.get(record_id)

    def create_fields(self, data: BaseModel, caller: Caller) -> dict:
        return data.model_dump()

    def create_record(self, repository: Repository, caller: Caller, data: BaseModel):
        return repository.create(**self.create_fields(data, caller))

    def update_fields(self, data: BaseModel) -> dict:
        return data.model_dump(exclude_unset=True, exclude={'id'})

    def update_record(self, repository: Repository, caller: Caller, data: BaseModel):
        return repository.update(data.id, **self.update_fields(data))

    def delete_record(self, repository: Repository, caller: Caller, record_id: int) -> None:
        repository.delete(record_id)

    def deleted_message(self) -> str:
        return f'{self.label} deleted successfully'

    def build_router(self, *, tags: list[str]) -> APIRouter:
        router = APIRouter(tags=tags)
        resource = self
        gate = self.gate
        response_model = self.response_model
        create_model = self.create_model
        update_model = self.update_model

        @router.get('', response_model=list[response_model])
        def list_resource(caller: Caller = Depends(gate), db: Session = Depends(get_db)):
            return resource.list_records(resource.repository(db), caller)

        @router.get('/{record_id}', response_model=response_model)
        def get_resource(record_id: int, caller: Caller = Depends(gate), db: Session = Depends(get_db)):
            return resource.get_record(resource.repository(db), caller, record_id)

        if create_model is not None:
            @router.post('', response_model=response_model, status_code=status.HTTP_201_CREATED)
            def create_resource(
                caller: Caller = Depends(gate),
                data: BaseModel = Depends(json_body(create_model)),
                db: Session = Depends(get_db),
            ):
                return resource.create_record(resource.repository(db), caller, data)

        if update_model is not None:
            @router.put('', response_model=response_model)
            def update_resource(
                caller: Caller = Depends(gate),
                data: BaseModel = Depends(json_body(update_model)),
                db: Session = Depends(get_db),
            ):
                return resource.update_record(resource.repository(db), caller, data)

        @router.delete('', response_model=MessageResponse)
        def delete_resource(
            record_id: int = Query(..., alias='id'),
            caller: Caller = Depends(gate),
            db: Session = Depends(get_db),
        ):
            resource.delete_record(resource.repository(db), caller, record_id)
            return MessageResponse(message=resource.deleted_message())

        return router
