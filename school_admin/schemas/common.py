from typing import Generic, List, Type, TypeVar
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import inspect

T = TypeVar("T")
SchemaT = TypeVar("SchemaT", bound=BaseModel)


class PaginationMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    page: int
    limit: int
    total_pages: int = Field(alias="totalPages")


class Page(BaseModel, Generic[T]):
    """Envelope returned by every list endpoint."""
    data: List[T]
    meta: PaginationMeta


class MessageResponse(BaseModel):
    message: str


def orm_to_schema(record, schema: Type[SchemaT]) -> SchemaT:
    """
    Build a response schema from an ORM record without triggering lazy loads.

    Relationships that were not eager-loaded are left unset, so endpoints using
    response_model_exclude_unset only emit the relations that were populated.
    """
    unloaded = inspect(record).unloaded
    data = {
        name: getattr(record, name)
        for name in schema.model_fields
        if name not in unloaded and hasattr(record, name)
    }
    return schema.model_validate(data, from_attributes=True)
