# tests/base/query/test_schema.py

from dataclasses import dataclass
from typing import Annotated, ClassVar, List, Optional

import pytest
from pydantic import BaseModel, Field

from qbuilder import NullInt, QueryBuilder, Tags, param_field
from qbuilder.base.schema import (
    _SCHEMA_CACHE,
    ParamField,
    get_param_fields,
    is_record,
)


# --- Test Records ---
@dataclass
class DataclassParam:
    id: NullInt = param_field("id", "id", default=NullInt())
    name: Annotated[str, Tags("name__neq", "product_name")] = ""
    status: List[str] = param_field("status__nin", "status", default_factory=list)
    untagged: str = "ignored"
    page: int = param_field("page", default=1)
    sort_by: List[str] = param_field("short_by", default_factory=list)


class PydanticParam(BaseModel):
    id: NullInt = Field(NullInt(), json_schema_extra={"param": "id", "db": "id"})
    name: Annotated[str, Tags("name__neq", "product_name")] = ""
    status: List[str] = Field([], json_schema_extra={"param": "status__nin", "db": "status"})
    untagged: str = "ignored"
    page: int = Field(1, json_schema_extra={"param": "page"})
    sort_by: List[str] = Field([], json_schema_extra={"param": "short_by"})


class PlainParam:
    id: Annotated[NullInt, Tags("id", "id")]
    name: Annotated[str, Tags("name__neq", "product_name")]
    status: Annotated[List[str], Tags("status__nin", "status")]
    untagged: str
    page: Annotated[int, Tags("page")]
    sort_by: Annotated[List[str], Tags("short_by")]
    registry: ClassVar[dict] = {}
    _private: int = 0

    def __init__(self, id=None, name="", status=None, page=1, sort_by=None):
        self.id = id or NullInt()
        self.name = name
        self.status = status or []
        self.untagged = "ignored"
        self.page = page
        self.sort_by = sort_by or []


EXPECTED_FIELDS = (
    ParamField("id", "id", "id"),
    ParamField("name", "name__neq", "product_name"),
    ParamField("status", "status__nin", "status"),
    ParamField("untagged", "", ""),
    ParamField("page", "page", ""),
    ParamField("sort_by", "short_by", ""),
)


# --- Tests ---
@pytest.mark.parametrize("model_cls", [DataclassParam, PydanticParam, PlainParam])
def test_param_fields_in_declared_order(model_cls):
    assert get_param_fields(model_cls) == EXPECTED_FIELDS


@pytest.mark.parametrize("model_cls", [DataclassParam, PydanticParam, PlainParam])
def test_record_styles_build_identically(model_cls):
    record = model_cls(
        id=NullInt(5, True), name="shoe", status=["DELETED"], page=2, sort_by=["-id"]
    )
    clause, args = QueryBuilder().build(record)
    assert clause == (
        " WHERE 1=1 AND id = ? AND product_name != ? AND status NOT IN (?)"
        " ORDER BY id DESC LIMIT 10, 20"
    )
    assert args == [5, "shoe", "DELETED"]


def test_param_fields_are_cached():
    fields = get_param_fields(DataclassParam)
    assert _SCHEMA_CACHE[DataclassParam] is fields
    assert get_param_fields(DataclassParam) is fields


def test_inherited_fields_come_first():
    @dataclass
    class Base:
        tenant_id: int = param_field("tenant_id", "tenant_id", default=0)

    @dataclass
    class Child(Base):
        name: str = param_field("name", "name", default="")

    assert [f.name for f in get_param_fields(Child)] == ["tenant_id", "name"]
    clause, args = QueryBuilder().build(Child(tenant_id=3, name="a"))
    assert clause == " WHERE 1=1 AND tenant_id = ? AND name LIKE ? LIMIT 0, 10"
    assert args == [3, "a"]


def test_param_field_keeps_other_metadata():
    @dataclass
    class WithMetadata:
        name: str = param_field("name", "name", default="", metadata={"doc": "x"})

    (f,) = [f for f in WithMetadata.__dataclass_fields__.values()]
    assert dict(f.metadata) == {"doc": "x", "param": "name", "db": "name"}


def test_unresolvable_annotation_falls_back():
    @dataclass
    class Forward:
        name: "Missing" = param_field("name", "name", default="x")  # noqa: F821

    assert get_param_fields(Forward) == (ParamField("name", "name", "name"),)


def test_missing_attribute_reads_as_none():
    class Sparse:
        name: Annotated[Optional[str], Tags("name", "name")]

    clause, args = QueryBuilder().build(Sparse())
    assert clause == " WHERE 1=1 LIMIT 0, 10"
    assert args == []


@pytest.mark.parametrize(
    "obj, expected",
    [
        (DataclassParam(), True),
        (PydanticParam(), True),
        (PlainParam(), True),
        (None, False),
        (DataclassParam, False),
        (PydanticParam, False),
        ({"a": 1}, False),
        ([1], False),
        ("text", False),
        (3, False),
        (object(), False),
    ],
)
def test_is_record(obj, expected):
    assert is_record(obj) is expected
