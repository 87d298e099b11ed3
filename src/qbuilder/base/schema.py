# src/qbuilder/base/schema.py
"""
Parameter record introspection.

A parameter record is any dataclass, pydantic model, or annotated plain class
whose fields carry two tags: `param` (the request parameter identity, possibly
with an operand suffix) and `db` (the destination column). Tags can be given as:

    @dataclass
    class ProductParam:
        id: NullInt = param_field("id", "id", default=NullInt())
        name: Annotated[str, Tags("name__neq", "name")] = ""

    class ProductQuery(BaseModel):
        status: List[str] = Field([], json_schema_extra={"param": "status", "db": "status"})

The per-class list of tagged fields is computed once and cached.
"""

import dataclasses
import logging
from dataclasses import dataclass, is_dataclass
from typing import (
    Annotated,
    Any,
    ClassVar,
    Dict,
    List,
    Mapping,
    Optional,
    Tuple,
    Type,
    get_args,
    get_origin,
    get_type_hints,
)

from pydantic import BaseModel

log = logging.getLogger(__name__)

PARAM_TAG = "param"
DB_TAG = "db"


@dataclass(frozen=True)
class Tags:
    """Annotated marker carrying a field's `param` and `db` tags."""

    param: str = ""
    db: str = ""


@dataclass(frozen=True)
class ParamField:
    """One tagged attribute of a parameter record class."""

    name: str
    param: str
    db: str


def param_field(param: str = "", db: str = "", **kwargs: Any) -> Any:
    """
    `dataclasses.field()` with `param`/`db` tags stored in its metadata.

    Any other keyword (default, default_factory, repr, ...) is passed through.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[PARAM_TAG] = param
    metadata[DB_TAG] = db
    return dataclasses.field(metadata=metadata, **kwargs)


def _tags_from_annotation(type_hint: Any) -> Optional[Tags]:
    if get_origin(type_hint) is not Annotated:
        return None
    for extra in get_args(type_hint)[1:]:
        if isinstance(extra, Tags):
            return extra
    return None


def _tags_from_mapping(mapping: Optional[Mapping[str, Any]]) -> Optional[Tags]:
    if not mapping or (PARAM_TAG not in mapping and DB_TAG not in mapping):
        return None
    return Tags(param=mapping.get(PARAM_TAG) or "", db=mapping.get(DB_TAG) or "")


def _resolve_annotations(model_cls: Type) -> Dict[str, Any]:
    try:
        return get_type_hints(model_cls, include_extras=True)
    except (TypeError, NameError) as e:
        log.warning(
            f"get_type_hints failed for {model_cls.__name__}: {e}. "
            f"Falling back to __annotations__."
        )
        return dict(getattr(model_cls, "__annotations__", {}))


def _dataclass_fields(model_cls: Type) -> List[Tuple[str, Optional[Tags]]]:
    annotations = _resolve_annotations(model_cls)
    result = []
    for f in dataclasses.fields(model_cls):
        tags = _tags_from_annotation(annotations.get(f.name))
        if tags is None:
            tags = _tags_from_mapping(f.metadata)
        result.append((f.name, tags))
    return result


def _pydantic_fields(model_cls: Type[BaseModel]) -> List[Tuple[str, Optional[Tags]]]:
    result = []
    for name, info in model_cls.model_fields.items():
        tags = next((m for m in info.metadata if isinstance(m, Tags)), None)
        if tags is None and isinstance(info.json_schema_extra, dict):
            tags = _tags_from_mapping(info.json_schema_extra)
        result.append((name, tags))
    return result


def _annotated_fields(model_cls: Type) -> List[Tuple[str, Optional[Tags]]]:
    result = []
    for name, type_hint in _resolve_annotations(model_cls).items():
        if name.startswith("_") or get_origin(type_hint) is ClassVar:
            continue
        result.append((name, _tags_from_annotation(type_hint)))
    return result


# --- Schema Cache ---
_SCHEMA_CACHE: Dict[Type, Tuple[ParamField, ...]] = {}


def get_param_fields(model_cls: Type) -> Tuple[ParamField, ...]:
    """Returns the tagged fields of a record class in declared order (cached per class)."""
    if model_cls in _SCHEMA_CACHE:
        log.debug(f"Returning cached param fields for {model_cls.__name__}")
        return _SCHEMA_CACHE[model_cls]

    log.debug(f"Generating param fields for {model_cls.__name__}")
    try:
        if is_dataclass(model_cls):
            raw_fields = _dataclass_fields(model_cls)
        elif issubclass(model_cls, BaseModel):
            raw_fields = _pydantic_fields(model_cls)
        else:
            raw_fields = _annotated_fields(model_cls)
    except Exception as e:
        log.error(
            f"Failed param field generation for {model_cls.__name__}", exc_info=True
        )
        raise TypeError(
            f"Could not read parameter fields of {model_cls.__name__}"
        ) from e

    param_fields = tuple(
        ParamField(name=name, param=tags.param, db=tags.db)
        if tags
        else ParamField(name=name, param="", db="")
        for name, tags in raw_fields
    )
    _SCHEMA_CACHE[model_cls] = param_fields
    log.debug(
        f"Param fields for {model_cls.__name__}: "
        f"{[(f.name, f.param, f.db) for f in param_fields]}"
    )
    return param_fields


def is_record(obj: Any) -> bool:
    """True for dataclass instances, pydantic model instances and annotated class instances."""
    if obj is None or isinstance(obj, type):
        return False
    if is_dataclass(obj) or isinstance(obj, BaseModel):
        return True
    return any(
        getattr(klass, "__annotations__", None)
        for klass in type(obj).__mro__
        if klass is not object
    )
