"""
Shared response schemas for document store write results.

Field names go over the wire in camelCase (``insertedId``, ``matchedCount``)
so clients see the same shape the document driver reports.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InsertResultResponse(CamelModel):
    acknowledged: bool = True
    inserted_id: Optional[str] = None

    @classmethod
    def from_result(cls, result) -> "InsertResultResponse":
        return cls(acknowledged=result.acknowledged, inserted_id=str(result.inserted_id))


class UpdateResultResponse(CamelModel):
    acknowledged: bool = True
    matched_count: int = 0
    modified_count: int = 0
    upserted_count: int = 0
    upserted_id: Optional[str] = None

    @classmethod
    def from_result(cls, result) -> "UpdateResultResponse":
        upserted_id = result.upserted_id
        return cls(
            acknowledged=result.acknowledged,
            matched_count=result.matched_count,
            modified_count=result.modified_count,
            upserted_count=0 if upserted_id is None else 1,
            upserted_id=None if upserted_id is None else str(upserted_id),
        )


class DeleteResultResponse(CamelModel):
    acknowledged: bool = True
    deleted_count: int = 0

    @classmethod
    def from_result(cls, result) -> "DeleteResultResponse":
        return cls(acknowledged=result.acknowledged, deleted_count=result.deleted_count)
