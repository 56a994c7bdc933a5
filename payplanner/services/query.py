"""
Filter -> sort -> paginate pipeline shared by the payments, cases and clients list endpoints
"""

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import asc, desc, case, or_

from payplanner.config import config_manager
from payplanner.models import Client, ClientCase, ClientCaseStatus, Payment
from payplanner.utils.validators import (
    SQL_INTEGER_MAX, is_blank, parse_bool, parse_datetime, parse_enum, parse_int
)

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class FilterSpec:
    """One optional equality/range clause driven by a query parameter"""
    param: str
    column: Any
    parser: Callable[[Any, str], Any]
    op: str = 'eq'

    def apply(self, query, value):
        if self.op == 'gte':
            return query.filter(self.column >= value)
        if self.op == 'lte':
            return query.filter(self.column <= value)
        return query.filter(self.column == value)

@dataclass(frozen=True)
class EntityQuerySpec:
    """Per-entity configuration: filters, search whitelist and sort whitelist"""
    name: str
    model: Any
    filters: Tuple[FilterSpec, ...]
    search_fields: Tuple[Any, ...]
    sort_fields: Dict[str, Any]
    default_sort: str

    def sort_column(self, sort_by: Optional[str]):
        key = (sort_by or '').strip().lower()
        column = self.sort_fields.get(key)
        if column is None:
            if key:
                logger.debug("Unknown sortBy '%s' for %s, using '%s'", sort_by, self.name, self.default_sort)
            column = self.sort_fields[self.default_sort]
        return _ordering_expression(column)

@dataclass
class PagedResult:
    items: List[Any]
    total: int
    page: int
    page_size: int

    def to_dict(self, serializer: Callable[[Any], Dict] = None) -> Dict:
        serializer = serializer or (lambda item: item.to_dict())
        return {
            'items': [serializer(item) for item in self.items],
            'total': self.total,
            'page': self.page,
            'pageSize': self.page_size,
        }

def _ordering_expression(column):
    """Enum columns are stored by name; order them by their declared value instead"""
    enum_class = getattr(getattr(column, 'type', None), 'enum_class', None)
    if enum_class is not None and issubclass(enum_class, enum.Enum):
        return case(*[(column == member, member.value) for member in enum_class])
    return column

def _parse_date_param(value, field_name):
    return parse_datetime(value, field_name)

def _parse_case_status(value, field_name):
    return parse_enum(value, ClientCaseStatus, field_name)

# Sort keys are matched lower-cased
PAYMENT_QUERY = EntityQuerySpec(
    name='payments',
    model=Payment,
    filters=(
        FilterSpec('from', Payment.date, _parse_date_param, 'gte'),
        FilterSpec('to', Payment.date, _parse_date_param, 'lte'),
        FilterSpec('clientId', Payment.client_id, parse_int),
        FilterSpec('caseId', Payment.client_case_id, parse_int),
    ),
    search_fields=(Payment.description, Payment.notes, Payment.account),
    sort_fields={'date': Payment.date, 'amount': Payment.amount, 'createdat': Payment.created_at},
    default_sort='date',
)

CASE_QUERY = EntityQuerySpec(
    name='cases',
    model=ClientCase,
    filters=(
        FilterSpec('clientId', ClientCase.client_id, parse_int),
        FilterSpec('status', ClientCase.status, _parse_case_status),
    ),
    search_fields=(ClientCase.title, ClientCase.description),
    sort_fields={'createdat': ClientCase.created_at, 'title': ClientCase.title, 'status': ClientCase.status},
    default_sort='createdat',
)

CLIENT_QUERY = EntityQuerySpec(
    name='clients',
    model=Client,
    filters=(
        FilterSpec('isActive', Client.is_active, parse_bool),
    ),
    search_fields=(Client.name, Client.email, Client.phone, Client.company, Client.address),
    sort_fields={'name': Client.name, 'createdat': Client.created_at},
    default_sort='name',
)

def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally"""
    return term.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')

class QueryPipeline:
    """Builds filtered, sorted and optionally paginated views for one entity"""

    def __init__(self, spec: EntityQuerySpec):
        self.spec = spec

    def apply_filters(self, query, args: Mapping[str, Any]):
        """Apply every present filter plus the search clause (conjunctive)"""
        for filter_spec in self.spec.filters:
            raw = args.get(filter_spec.param)
            if is_blank(raw):
                continue
            query = filter_spec.apply(query, filter_spec.parser(raw, filter_spec.param))

        search = args.get('search')
        if not is_blank(search):
            pattern = f"%{escape_like(search.strip())}%"
            query = query.filter(or_(*[
                column.ilike(pattern, escape='\\') for column in self.spec.search_fields
            ]))
        return query

    def apply_sort(self, query, sort_by: Optional[str], sort_dir: Optional[str]):
        """Order by a whitelisted key; id is the tie-breaker"""
        descending = (sort_dir or '').strip().lower() == 'desc'
        direction = desc if descending else asc
        column = self.spec.sort_column(sort_by)
        return query.order_by(direction(column), direction(self.spec.model.id))

    def build(self, args: Mapping[str, Any], base_query=None):
        """Filtered and sorted query, not yet paginated"""
        query = base_query if base_query is not None else self.spec.model.query
        query = self.apply_filters(query, args)
        return self.apply_sort(query, args.get('sortBy'), args.get('sortDir'))

    def list(self, args: Mapping[str, Any], base_query=None) -> List[Any]:
        """All matching rows (v1 list endpoints)"""
        return self.build(args, base_query).all()

    def page(self, args: Mapping[str, Any], base_query=None) -> PagedResult:
        """One page of matching rows plus the filtered total (v2 list endpoints)"""
        page, page_size = self.resolve_paging(args)
        query = self.build(args, base_query)

        # Count and page share the same filtered query
        total = query.order_by(None).count()
        offset = (page - 1) * page_size
        # Pages past the driver integer range are necessarily empty
        items = [] if offset > SQL_INTEGER_MAX else query.offset(offset).limit(page_size).all()
        return PagedResult(items=items, total=total, page=page, page_size=page_size)

    @staticmethod
    def resolve_paging(args: Mapping[str, Any]) -> Tuple[int, int]:
        """page floored at 1, pageSize clamped into the configured range"""
        page = parse_int(args.get('page'), 'page')
        page_size = parse_int(args.get('pageSize'), 'pageSize')

        page = 1 if page is None else max(1, page)
        if page_size is None:
            page_size = config_manager.get_app_config('DEFAULT_PAGE_SIZE')
        return page, config_manager.clamp_page_size(page_size)

payment_pipeline = QueryPipeline(PAYMENT_QUERY)
case_pipeline = QueryPipeline(CASE_QUERY)
client_pipeline = QueryPipeline(CLIENT_QUERY)
