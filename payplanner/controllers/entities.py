"""
Versioned CRUD controllers for payments, cases and clients
v1 lists return a plain array, v2 lists return a paged envelope
"""

from flask import request, jsonify, url_for

from payplanner.controllers.base import BaseController
from payplanner.services import CaseService, ClientService, PaymentService
from payplanner.utils.validators import SQL_INTEGER_MAX

class EntityController(BaseController):
    """CRUD routes for one entity under /api/<version>/<resource>"""

    resource = None

    def __init__(self, app, version: str):
        self.version = version
        self.service = self.create_service()
        super().__init__(app)

    def create_service(self):
        raise NotImplementedError

    def serialize(self, item):
        return item.to_dict()

    def serialize_detail(self, item):
        return item.to_dict()

    def endpoint(self, action: str) -> str:
        return f"{self.version}.{self.resource}.{action}"

    def register_routes(self):
        """Register entity routes"""
        base = f"/api/{self.version}/{self.resource}"
        item_rule = f"{base}/<int(max={SQL_INTEGER_MAX}):id>"
        self.app.add_url_rule(base, self.endpoint('list'),
                              self.logged(self.list_items, 'list'), methods=['GET'])
        self.app.add_url_rule(base, self.endpoint('create'),
                              self.logged(self.create_item, 'create'), methods=['POST'])
        self.app.add_url_rule(item_rule, self.endpoint('get'),
                              self.logged(self.get_item, 'get'), methods=['GET'])
        self.app.add_url_rule(item_rule, self.endpoint('update'),
                              self.logged(self.update_item, 'update'), methods=['PUT'])
        self.app.add_url_rule(item_rule, self.endpoint('delete'),
                              self.logged(self.delete_item, 'delete'), methods=['DELETE'])

    def list_items(self):
        if self.version == 'v1':
            return jsonify([self.serialize(item) for item in self.service.list(request.args)])
        return jsonify(self.service.page(request.args).to_dict(self.serialize))

    def get_item(self, id):
        return jsonify(self.serialize_detail(self.service.get(id)))

    def create_item(self):
        item = self.service.create(self.get_json_body())
        return self.created(self.serialize(item), url_for(self.endpoint('get'), id=item.id))

    def update_item(self, id):
        item = self.service.update(id, self.get_json_body())
        return jsonify(self.serialize(item))

    def delete_item(self, id):
        self.service.delete(id)
        return self.no_content()

class PaymentsController(EntityController):
    name = 'Payments'
    resource = 'payments'

    def create_service(self):
        return PaymentService()

    def serialize_detail(self, item):
        return item.to_dict(include_lookups=True)

class CasesController(EntityController):
    name = 'Cases'
    resource = 'cases'

    def create_service(self):
        return CaseService()

    def serialize_detail(self, item):
        return item.to_dict(include_payments=True, include_client=True)

class ClientsController(EntityController):
    name = 'Clients'
    resource = 'clients'

    def create_service(self):
        return ClientService()

    def serialize_detail(self, item):
        return item.to_dict(include_cases=True)
