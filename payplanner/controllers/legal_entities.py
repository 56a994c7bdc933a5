"""
Legal-entity suggestion route (DaData proxy)
"""

from flask import jsonify

from payplanner.controllers.base import BaseController
from payplanner.exceptions import DataValidationError
from payplanner.services import LegalEntityEnrichmentService
from payplanner.utils.validators import is_blank

class LegalEntitiesController(BaseController):
    """Handles /api/legal-entities routes"""

    name = 'LegalEntities'

    def __init__(self, app):
        self.enrichment_service = LegalEntityEnrichmentService.from_config(app.config)
        super().__init__(app)

    def register_routes(self):
        self.app.add_url_rule('/api/legal-entities/suggest', 'legal_entities.suggest',
                              self.logged(self.suggest, 'suggest'), methods=['POST'])

    def suggest(self):
        body = self.get_json_body()
        query, inn = body.get('query'), body.get('inn')
        if is_blank(query) and is_blank(inn):
            raise DataValidationError("Query or INN is required")

        suggestions = self.enrichment_service.suggest(query=query, inn=inn, limit=body.get('limit'))
        return jsonify(suggestions)
