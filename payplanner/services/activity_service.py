"""
User activity service: serialized audit writes and audit log queries
"""

import json
import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from flask import has_request_context, request, session as flask_session
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from payplanner.config import config_manager
from payplanner.models import db, UserActivityLog, UserActivityStatus
from payplanner.services.query import PagedResult, escape_like
from payplanner.utils.formatters import fit_column
from payplanner.utils.validators import (
    SQL_INTEGER_MAX, is_blank, normalize_optional_string, parse_datetime, parse_enum, parse_int, require
)

logger = logging.getLogger(__name__)

# One writer at a time across the process
_write_lock = threading.Lock()

@dataclass
class ActivityEntry:
    """Audit record to be written; request and actor fields are filled in on write"""
    category: str
    action: str
    section: Optional[str] = None
    object_type: Optional[str] = None
    object_id: Optional[str] = None
    description: Optional[str] = None
    status: UserActivityStatus = UserActivityStatus.Info
    http_status_code: Optional[int] = None
    duration_ms: Optional[int] = None
    metadata: Any = None
    user_id: Optional[int] = None
    user_email: Optional[str] = None
    user_full_name: Optional[str] = None

def client_ip() -> Optional[str]:
    """First X-Forwarded-For entry, else the socket address"""
    forwarded = request.headers.get('X-Forwarded-For', '')
    first = forwarded.split(',')[0].strip()
    return first or request.remote_addr

def current_actor() -> Dict[str, Any]:
    """Actor identity from the session when one is present"""
    if not has_request_context():
        return {}
    return {
        'user_id': flask_session.get('user_id'),
        'user_email': flask_session.get('user_email'),
        'user_full_name': flask_session.get('user_name'),
    }

class UserActivityService:
    """Writes and reads user activity logs"""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory

    def _new_session(self) -> Session:
        if self._session_factory is not None:
            return self._session_factory()
        return Session(bind=db.engine, expire_on_commit=False)

    def try_write(self, entry: ActivityEntry) -> Optional[UserActivityLog]:
        """Persist an entry in its own session; failures are logged, never raised"""
        try:
            log = self._build_log(entry)
        except Exception:
            logger.exception("Failed to build activity log for %s.%s", entry.category, entry.action)
            return None

        with _write_lock:
            audit_session = None
            try:
                audit_session = self._new_session()
                audit_session.add(log)
                audit_session.commit()
                return log
            except Exception:
                if audit_session is not None:
                    audit_session.rollback()
                logger.error("Failed to write activity log for %s.%s",
                             entry.category, entry.action, exc_info=True)
                return None
            finally:
                if audit_session is not None:
                    audit_session.close()

    def _build_log(self, entry: ActivityEntry) -> UserActivityLog:
        actor = current_actor()
        log = UserActivityLog(
            user_id=entry.user_id if entry.user_id is not None else actor.get('user_id'),
            user_email=entry.user_email or actor.get('user_email'),
            user_full_name=entry.user_full_name or actor.get('user_full_name'),
            category=fit_column(entry.category, 128),
            action=fit_column(entry.action, 160),
            section=fit_column(entry.section, 160),
            object_type=fit_column(entry.object_type, 160),
            object_id=fit_column(entry.object_id, 160),
            description=fit_column(entry.description, 1000),
            status=entry.status,
            http_status_code=entry.http_status_code,
            duration_ms=entry.duration_ms,
            metadata_json=self._dump_metadata(entry.metadata),
        )

        if has_request_context():
            log.ip_address = fit_column(client_ip(), 64)
            log.user_agent = fit_column(request.headers.get('User-Agent'), 512)
            log.http_method = request.method
            log.path = fit_column(request.path, 512)
            query_string = request.query_string.decode('utf-8', 'replace')
            log.query_string = fit_column('?' + query_string, 512) if query_string else None

        return log

    @staticmethod
    def _dump_metadata(metadata) -> Optional[str]:
        if metadata is None:
            return None
        if isinstance(metadata, str):
            return metadata
        return json.dumps(metadata, default=str, ensure_ascii=False)

    # Reads

    def page(self, args: Mapping[str, Any]) -> PagedResult:
        """Newest-first page of audit records"""
        page = parse_int(args.get('page'), 'page')
        page_size = parse_int(args.get('pageSize'), 'pageSize')
        page = 1 if page is None else max(1, page)
        if page_size is None:
            page_size = config_manager.get_app_config('ACTIVITY_DEFAULT_PAGE_SIZE')
        page_size = max(config_manager.get_app_config('ACTIVITY_MIN_PAGE_SIZE'),
                        min(config_manager.get_app_config('ACTIVITY_MAX_PAGE_SIZE'), page_size))

        query = self._filtered(args)
        total = query.count()
        offset = (page - 1) * page_size
        items = []
        if offset <= SQL_INTEGER_MAX:
            items = query.order_by(UserActivityLog.created_at.desc(), UserActivityLog.id.desc()) \
                .offset(offset).limit(page_size).all()
        return PagedResult(items=items, total=total, page=page, page_size=page_size)

    def _filtered(self, args: Mapping[str, Any]):
        query = UserActivityLog.query

        date_from = parse_datetime(args.get('from'), 'from')
        if date_from is not None:
            query = query.filter(UserActivityLog.created_at >= date_from)
        date_to = parse_datetime(args.get('to'), 'to')
        if date_to is not None:
            query = query.filter(UserActivityLog.created_at <= date_to)

        user_id = parse_int(args.get('userId'), 'userId')
        if user_id is not None:
            query = query.filter(UserActivityLog.user_id == user_id)

        for param, column in (('category', UserActivityLog.category),
                              ('action', UserActivityLog.action),
                              ('section', UserActivityLog.section)):
            value = normalize_optional_string(args.get(param))
            if value is not None:
                query = query.filter(column == value)

        method = normalize_optional_string(args.get('httpMethod'))
        if method is not None:
            query = query.filter(UserActivityLog.http_method == method.upper())

        status = parse_enum(args.get('status'), UserActivityStatus, 'status')
        if status is not None:
            query = query.filter(UserActivityLog.status == status)

        search = args.get('search')
        if not is_blank(search):
            pattern = f"%{escape_like(search.strip())}%"
            query = query.filter(or_(*[
                column.ilike(pattern, escape='\\') for column in (
                    UserActivityLog.description, UserActivityLog.user_email,
                    UserActivityLog.user_full_name, UserActivityLog.path,
                    UserActivityLog.object_id)
            ]))
        return query

    def filter_options(self) -> Dict[str, List]:
        """Distinct values available for the read filters"""
        def distinct(column) -> List:
            rows = db.session.query(column).filter(column.isnot(None)).distinct().order_by(column).all()
            return [row[0] for row in rows if row[0] != '']

        actors = db.session.query(
            UserActivityLog.user_id,
            func.max(UserActivityLog.user_email),
            func.max(UserActivityLog.user_full_name),
        ).filter(UserActivityLog.user_id.isnot(None)) \
            .group_by(UserActivityLog.user_id).order_by(UserActivityLog.user_id).all()

        return {
            'categories': distinct(UserActivityLog.category),
            'actions': distinct(UserActivityLog.action),
            'sections': distinct(UserActivityLog.section),
            'httpMethods': distinct(UserActivityLog.http_method),
            'statuses': [status.name for status in UserActivityStatus],
            'users': [
                {'userId': user_id, 'userEmail': email, 'userFullName': name}
                for user_id, email, name in actors
            ],
        }

    def record_client_event(self, data: Dict) -> Optional[UserActivityLog]:
        """Write a client-supplied record (category and action are required)"""
        data = data or {}
        entry = ActivityEntry(
            category=require(normalize_optional_string(data.get('category')), 'category'),
            action=require(normalize_optional_string(data.get('action')), 'action'),
            section=normalize_optional_string(data.get('section')),
            object_type=normalize_optional_string(data.get('objectType')),
            object_id=normalize_optional_string(data.get('objectId')),
            description=normalize_optional_string(data.get('description')),
            status=parse_enum(data.get('status'), UserActivityStatus, 'status') or UserActivityStatus.Info,
            metadata=data.get('metadata'),
        )
        return self.try_write(entry)
