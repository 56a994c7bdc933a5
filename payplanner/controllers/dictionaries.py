"""
Lookup table routes
"""

from flask import request, jsonify, url_for

from payplanner.controllers.base import BaseController
from payplanner.services import DictionaryService

class DictionariesController(BaseController):
    """Handles /api/dictionaries routes"""

    name = 'Dictionaries'

    def __init__(self, app):
        self.dictionary_service = DictionaryService()
        super().__init__(app)

    def register_routes(self):
        """Register dictionary routes"""
        kinds = ', '.join(f"'{kind}'" for kind in DictionaryService.MODELS)
        self.app.add_url_rule(f"/api/dictionaries/<any({kinds}):kind>", 'dictionaries.list',
                              self.logged(self.list_dictionary, 'list'), methods=['GET'])
        self.app.add_url_rule('/api/dictionaries/income-types', 'dictionaries.create_income_type',
                              self.logged(self.create_income_type, 'create_income_type'), methods=['POST'])

    def list_dictionary(self, kind):
        items = self.dictionary_service.list(kind, request.args)
        return jsonify([item.to_dict() for item in items])

    def create_income_type(self):
        income_type = self.dictionary_service.create_income_type(self.get_json_body())
        return self.created(income_type.to_dict(),
                            url_for('dictionaries.list', kind='income-types'))
