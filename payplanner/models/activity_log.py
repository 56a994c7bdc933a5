"""
User activity log model (audit trail of API calls)
"""

import json
import logging
from payplanner.models import db
from payplanner.models.base import BaseModel
from payplanner.models.enums import UserActivityStatus

logger = logging.getLogger(__name__)

class UserActivityLog(BaseModel):
    """Immutable audit record; written once per logged request"""
    __tablename__ = 'user_activity_logs'

    user_id = db.Column(db.Integer, nullable=True, index=True)
    user_email = db.Column(db.String(256))
    user_full_name = db.Column(db.String(256))
    category = db.Column(db.String(128), nullable=False, default='', index=True)
    action = db.Column(db.String(160), nullable=False, default='')
    section = db.Column(db.String(160))
    object_type = db.Column(db.String(160))
    object_id = db.Column(db.String(160))
    description = db.Column(db.String(1000))
    status = db.Column(db.Enum(UserActivityStatus), nullable=False, default=UserActivityStatus.Info)
    ip_address = db.Column(db.String(64))
    user_agent = db.Column(db.String(512))
    http_method = db.Column(db.String(16))
    path = db.Column(db.String(512))
    query_string = db.Column(db.String(512))
    http_status_code = db.Column(db.Integer)
    duration_ms = db.Column(db.Integer)
    metadata_json = db.Column(db.Text)

    @property
    def metadata_value(self):
        """Parsed metadata; raw text if it is not valid JSON"""
        if not self.metadata_json:
            return None
        try:
            return json.loads(self.metadata_json)
        except ValueError:
            logger.debug("Activity log %s has non-JSON metadata", self.id)
            return self.metadata_json

    def to_dict(self):
        data = super().to_dict()
        data.pop('metadataJson', None)
        data['metadata'] = self.metadata_value
        return data
