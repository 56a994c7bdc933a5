"""
Activity logging for API view functions
Each wrapped call produces one audit entry; the wrapped call's outcome is never changed
"""

import functools
import logging
import time
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from flask import request
from werkzeug.exceptions import HTTPException

from payplanner.config import config_manager
from payplanner.models import UserActivityStatus
from payplanner.services.activity_service import ActivityEntry, UserActivityService
from payplanner.utils.formatters import truncate_text

logger = logging.getLogger(__name__)

ACTIVITY_PAYLOAD_PLACEHOLDER = 'UserActivityPayload'
_PASSTHROUGH_TYPES = (bool, int, float, Decimal, datetime, date, uuid.UUID)

@dataclass
class CallContext:
    """What is known about a call before the handler runs"""
    controller: str
    action: str
    object_id: Optional[str]
    metadata: Any

def status_for(http_status_code: Optional[int]) -> UserActivityStatus:
    """Map an HTTP status code to an audit status"""
    if http_status_code is None:
        return UserActivityStatus.Info
    if http_status_code >= 500:
        return UserActivityStatus.Failure
    if http_status_code >= 400:
        return UserActivityStatus.Warning
    if http_status_code >= 200:
        return UserActivityStatus.Success
    return UserActivityStatus.Info

def build_description(controller: str, action: str, object_id: Optional[str] = None,
                      http_status_code: Optional[int] = None, error: Optional[BaseException] = None) -> str:
    parts = [f"{controller}.{action}"]
    if object_id:
        parts.append(f"Id={object_id}")
    if http_status_code is not None:
        parts.append(f"HTTP {http_status_code}")
    if error is not None:
        parts.append(f"Error: {type(error).__name__} {error}")
    return ' | '.join(parts)

def simplify(value, max_string: int = None):
    """Reduce a value to something safe and small enough to store as metadata"""
    max_string = max_string or config_manager.get_app_config('ACTIVITY_METADATA_MAX_STRING')
    if value is None:
        return None
    if isinstance(value, str):
        return truncate_text(value, max_string)
    if isinstance(value, _PASSTHROUGH_TYPES):
        return value
    if isinstance(value, dict):
        return {str(key): simplify(item, max_string) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [simplify(item, max_string) for item in value]
    return type(value).__name__

def simplify_payload(body):
    """Request bodies: credentials keep only the email, activity payloads become a placeholder"""
    if isinstance(body, dict):
        keys = {key.lower() for key in body if isinstance(key, str)}
        if 'password' in keys:
            email = next((item for key, item in body.items() if str(key).lower() == 'email'), None)
            return {'email': simplify(email)}
        if {'category', 'action'} <= keys:
            return ACTIVITY_PAYLOAD_PLACEHOLDER
    return simplify(body)

class ActivityLogger:
    """Decorator factory that records controller calls as user activity logs"""

    def __init__(self, app, activity_service: UserActivityService = None):
        self.app = app
        self.activity_service = activity_service or UserActivityService()
        self.excluded_prefix = config_manager.get_app_config('ACTIVITY_EXCLUDED_PREFIX')
        app.extensions['activity_logger'] = self

    def should_log(self) -> bool:
        path = request.path
        if request.method == 'OPTIONS':
            return False
        if not (path == '/api' or path.startswith('/api/')):
            return False
        if path == self.excluded_prefix or path.startswith(self.excluded_prefix + '/'):
            return False
        return True

    def wrap(self, view_func: Callable, controller: str, action: str) -> Callable:
        """Wrap a view; the audit entry is written after it returns or raises"""
        @functools.wraps(view_func)
        def logged(*args, **kwargs):
            if not self.should_log():
                return view_func(*args, **kwargs)

            context = self.before(controller, action, kwargs)
            started = time.perf_counter()
            try:
                result = view_func(*args, **kwargs)
            except Exception as error:
                self.after(context, time.perf_counter() - started, error=error)
                raise

            response = self.app.make_response(result)
            self.after(context, time.perf_counter() - started, response=response)
            return response
        return logged

    def before(self, controller: str, action: str, view_args: Dict) -> CallContext:
        object_id = None
        metadata = None
        try:
            object_id = self._object_id(view_args)
            metadata = self._snapshot(view_args)
        except Exception:
            logger.warning("Could not capture activity metadata for %s.%s", controller, action, exc_info=True)
        return CallContext(controller=controller, action=action, object_id=object_id, metadata=metadata)

    def after(self, context: CallContext, elapsed: float, response=None, error: BaseException = None) -> None:
        try:
            if error is not None:
                code = error.code if isinstance(error, HTTPException) else 500
                status = UserActivityStatus.Failure
            else:
                code = response.status_code
                status = status_for(code)

            entry = ActivityEntry(
                category=context.controller,
                action=context.action,
                section=context.controller,
                object_type=context.controller,
                object_id=context.object_id,
                description=build_description(context.controller, context.action,
                                              context.object_id, code, error),
                status=status,
                http_status_code=code,
                duration_ms=int(elapsed * 1000),
                metadata=context.metadata,
            )
            self.activity_service.try_write(entry)
        except Exception:
            logger.error("Activity logging failed for %s.%s", context.controller, context.action, exc_info=True)

    @staticmethod
    def _object_id(view_args: Dict) -> Optional[str]:
        if view_args.get('id') is not None:
            return str(view_args['id'])
        return None

    @staticmethod
    def _snapshot(view_args: Dict) -> Optional[Dict]:
        snapshot = {name: simplify(value) for name, value in view_args.items()}
        for name, value in request.args.items():
            snapshot.setdefault(name, simplify(value))

        body = request.get_json(silent=True) if request.is_json else None
        if body is not None:
            snapshot['body'] = simplify_payload(body)
        return snapshot or None
