"""
User activity log routes
Requests to these routes are not themselves audited
"""

from flask import request, jsonify

from payplanner.controllers.base import BaseController
from payplanner.services import UserActivityService

class UserActivityController(BaseController):
    """Handles /api/user-activity routes"""

    name = 'UserActivity'

    def __init__(self, app):
        self.activity_service = UserActivityService()
        super().__init__(app)

    def register_routes(self):
        """Register activity log routes"""
        self.app.add_url_rule('/api/user-activity', 'user_activity.list',
                              self.logged(self.list_logs, 'list'), methods=['GET'])
        self.app.add_url_rule('/api/user-activity/filters', 'user_activity.filters',
                              self.logged(self.get_filters, 'filters'), methods=['GET'])
        self.app.add_url_rule('/api/user-activity', 'user_activity.create',
                              self.logged(self.create_log, 'create'), methods=['POST'])

    def list_logs(self):
        return jsonify(self.activity_service.page(request.args).to_dict())

    def get_filters(self):
        return jsonify(self.activity_service.filter_options())

    def create_log(self):
        log = self.activity_service.record_client_event(self.get_json_body())
        if log is None:
            return jsonify({'error': 'Failed to write activity log'}), 500
        return jsonify(log.to_dict()), 201
