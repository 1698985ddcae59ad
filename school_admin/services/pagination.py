"""
Shared list-query contract for every resource.

A list request carries `page`, `limit`, `sort` and `populate` query parameters.
They are validated here, before any storage access, and turned into one
count query plus one bounded fetch:

    ?page=2&limit=5&sort=desc&populate=courseId

    offset 5, limit 5, ORDER BY created_at DESC, id DESC,
    eager-loading the relation mapped to "courseId"

The count and the fetch are separate statements with no snapshot between
them. A row deleted in between can leave `meta.total` one ahead of what the
last page actually holds; that is accepted.
"""

import enum
import math
from dataclasses import dataclass, field
from typing import AbstractSet, Any, Callable, FrozenSet, Generic, List, Mapping, Optional, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from school_admin.core.config import settings
from school_admin.core.database import storage_errors
from school_admin.core.exceptions import BadRequestException

T = TypeVar("T")


class SortOrder(str, enum.Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class ListQuery:
    page: int = 1
    limit: int = 10
    sort: SortOrder = SortOrder.ASC
    populate: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class PageResult(Generic[T]):
    items: List[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)


def _parse_positive_int(value: Any, default: int) -> Optional[int]:
    if value is None or value == "":
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def parse_populate(raw: Optional[str], valid_relations: AbstractSet[str]) -> FrozenSet[str]:
    """
    Split a comma-separated populate value and check it against the relations
    the resource declares. Every unknown name is reported in a single error.
    """
    if not raw:
        return frozenset()
    requested = [name.strip() for name in raw.split(",") if name.strip()]
    invalid = [name for name in requested if name not in valid_relations]
    if invalid:
        raise BadRequestException(
            f"Invalid populate values: {', '.join(invalid)}",
            details={"invalid": invalid, "allowed": sorted(valid_relations)},
        )
    return frozenset(requested)


def parse_list_query(
    raw: Mapping[str, Any],
    valid_relations: AbstractSet[str],
    max_limit: Optional[int] = None,
    default_limit: Optional[int] = None,
) -> ListQuery:
    """Validate raw list parameters. Raises BadRequestException."""
    max_limit = max_limit or settings.MAX_PAGE_LIMIT
    default_limit = default_limit or settings.DEFAULT_PAGE_LIMIT

    limit = _parse_positive_int(raw.get("limit"), default_limit)
    page = _parse_positive_int(raw.get("page"), 1)
    if limit is None or page is None:
        raise BadRequestException("Limit and page must be positive integers.")
    if limit > max_limit:
        raise BadRequestException(f"Limit must not exceed {max_limit}.")

    sort = (raw.get("sort") or SortOrder.ASC.value).upper()
    if sort not in SortOrder.__members__:
        raise BadRequestException('Invalid sort value. Use "asc" or "desc".')

    populate = parse_populate(raw.get("populate"), valid_relations)
    return ListQuery(page=page, limit=limit, sort=SortOrder(sort), populate=populate)


def paginate(
    db: Session,
    model,
    query: ListQuery,
    relation_loaders: Mapping[str, Callable[[], Any]],
) -> PageResult:
    """
    Count every row of `model`, then fetch one page ordered by creation time.

    `relation_loaders` maps populate names to loader-option factories, e.g.
    {"courseId": lambda: selectinload(Student.courses)}.
    """
    if query.sort is SortOrder.DESC:
        order_by = (model.created_at.desc(), model.id.desc())
    else:
        order_by = (model.created_at.asc(), model.id.asc())

    stmt = (
        select(model)
        .order_by(*order_by)
        .offset(query.offset)
        .limit(query.limit)
    )
    for name in sorted(query.populate):
        stmt = stmt.options(relation_loaders[name]())

    with storage_errors(db, f"list {model.__tablename__}"):
        total = db.scalar(select(func.count()).select_from(model)) or 0
        # Past the last row; also keeps huge offsets away from the driver
        if query.offset >= total:
            items = []
        else:
            items = list(db.scalars(stmt).all())

    return PageResult(items=items, total=total, page=query.page, limit=query.limit)
