"""
Controllers package
Exports all route controllers and registration function
"""

import logging
from .entities import PaymentsController, CasesController, ClientsController
from .dictionaries import DictionariesController
from .legal_entities import LegalEntitiesController
from .user_activity import UserActivityController
from .health import HealthController

logger = logging.getLogger(__name__)

API_VERSIONS = ('v1', 'v2')

def register_controllers(app):
    """Register all controllers with the Flask app"""
    for version in API_VERSIONS:
        PaymentsController(app, version)
        CasesController(app, version)
        ClientsController(app, version)
    DictionariesController(app)
    LegalEntitiesController(app)
    UserActivityController(app)
    HealthController(app)
    logger.debug("All controllers registered")

__all__ = [
    'register_controllers',
    'PaymentsController', 'CasesController', 'ClientsController',
    'DictionariesController', 'LegalEntitiesController',
    'UserActivityController', 'HealthController'
]
