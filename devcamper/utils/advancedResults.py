"""Listing helper shared by the public collection routes.

Turns query strings such as ``?tuition[gte]=1000&sort=-tuition&limit=2``
into a filtered, sorted, paginated query and shapes the rows into the
``{success, count, pagination, data}`` envelope.
"""
import re
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel
from pydantic.alias_generators import to_snake
from sqlalchemy.orm import Session

from devcamper.utils.errorResponse import ValidationFailed

RESERVED_PARAMS = ("select", "sort", "page", "limit")
DEFAULT_LIMIT = 25
FIELD_OPERATOR = re.compile(r"^(?P<field>[\w.]+)\[(?P<op>gt|gte|lt|lte|in)\]$")

# response field name -> column name, where the two differ
DEFAULT_ALIASES = {"user": "user_id", "bootcamp": "bootcamp_id"}

Populate = Tuple[str, Callable[[Session, Any], Any]]


def _pairs(query_params) -> Iterable[Tuple[str, str]]:
    if hasattr(query_params, "multi_items"):
        return query_params.multi_items()
    if isinstance(query_params, dict):
        return query_params.items()
    return query_params


def _single(query_params, key: str) -> Optional[str]:
    for k, v in _pairs(query_params):
        if k == key:
            return v
    return None


def _column(model, field: str, aliases: Dict[str, str]):
    name = aliases.get(field) or DEFAULT_ALIASES.get(field) or to_snake(field)
    if name not in model.__table__.columns:
        raise ValidationFailed(f"Invalid query field: {field}")
    return getattr(model, name), model.__table__.columns[name]


def _coerce(column, field: str, raw: str):
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return raw

    try:
        if python_type is bool:
            if raw.lower() not in ("true", "false"):
                raise ValueError(raw)
            return raw.lower() == "true"
        if python_type is int:
            return int(raw)
        if python_type is float:
            return float(raw)
        if python_type is datetime:
            return datetime.fromisoformat(raw)
    except ValueError:
        raise ValidationFailed(f"Invalid value {raw!r} for field {field}")
    return raw


def _split(raw: str) -> List[str]:
    return [value.strip() for value in raw.split(",") if value.strip()]


def build_filters(
    model,
    query_params,
    aliases: Optional[Dict[str, str]] = None,
    list_fields: Optional[Dict[str, Tuple[Any, Any]]] = None,
) -> list:
    """Translate non-reserved query params into SQLAlchemy criteria.

    ``list_fields`` maps a field held in a child table to a
    ``(relationship, child column)`` pair; equality and ``in`` on such a
    field mean "contains any of".
    """
    aliases = aliases or {}
    list_fields = list_fields or {}
    criteria = []

    for key, raw in _pairs(query_params):
        if key in RESERVED_PARAMS:
            continue

        match = FIELD_OPERATOR.match(key)
        field, op = (match.group("field"), match.group("op")) if match else (key, "eq")

        if field in list_fields:
            relationship, child_column = list_fields[field]
            if op not in ("eq", "in"):
                raise ValidationFailed(f"Operator {op} is not supported on {field}")
            criteria.append(relationship.any(child_column.in_(_split(raw))))
            continue

        attribute, column = _column(model, field, aliases)

        if op == "in":
            criteria.append(attribute.in_([_coerce(column, field, v) for v in _split(raw)]))
            continue

        value = _coerce(column, field, raw)
        if op == "eq":
            criteria.append(attribute == value)
        elif op == "gt":
            criteria.append(attribute > value)
        elif op == "gte":
            criteria.append(attribute >= value)
        elif op == "lt":
            criteria.append(attribute < value)
        elif op == "lte":
            criteria.append(attribute <= value)

    return criteria


def build_ordering(model, sort: Optional[str], aliases: Optional[Dict[str, str]] = None) -> list:
    if not sort:
        return [model.created_at.desc(), model.id.desc()]

    ordering = []
    for field in _split(sort):
        descending = field.startswith("-")
        attribute, _ = _column(model, field.lstrip("-"), aliases or {})
        ordering.append(attribute.desc() if descending else attribute.asc())
    ordering.append(model.id.asc())
    return ordering


def _positive_int(raw: Optional[str], name: str, default: int) -> int:
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationFailed(f"{name} must be a positive integer")
    if value < 1:
        raise ValidationFailed(f"{name} must be a positive integer")
    return value


def serialize(schema: type[BaseModel], instance) -> Dict[str, Any]:
    return schema.model_validate(instance).model_dump(by_alias=True, mode="json")


def project(document: Dict[str, Any], select: Optional[str]) -> Dict[str, Any]:
    if not select:
        return document
    fields = set(_split(select)) | {"id"}
    return {k: v for k, v in document.items() if k in fields}


def advanced_results(
    db: Session,
    model,
    schema: type[BaseModel],
    query_params,
    base_filters: Iterable = (),
    populate: Optional[Populate] = None,
    aliases: Optional[Dict[str, str]] = None,
    list_fields: Optional[Dict[str, Tuple[Any, Any]]] = None,
) -> Dict[str, Any]:
    criteria = list(base_filters) + build_filters(model, query_params, aliases, list_fields)
    query = db.query(model).filter(*criteria)

    page = _positive_int(_single(query_params, "page"), "page", 1)
    limit = _positive_int(_single(query_params, "limit"), "limit", DEFAULT_LIMIT)
    start_index = (page - 1) * limit
    end_index = page * limit

    total = query.count()
    rows = (
        query.order_by(*build_ordering(model, _single(query_params, "sort"), aliases))
        .offset(start_index)
        .limit(limit)
        .all()
    )

    select = _single(query_params, "select")
    data = []
    for row in rows:
        document = project(serialize(schema, row), select)
        if populate is not None:
            key, loader = populate
            document[key] = loader(db, row)
        data.append(document)

    pagination: Dict[str, Any] = {"total": total}
    if end_index < total:
        pagination["next"] = {"page": page + 1, "limit": limit}
    if start_index > 0:
        pagination["prev"] = {"page": page - 1, "limit": limit}

    return {"success": True, "count": len(data), "pagination": pagination, "data": data}
