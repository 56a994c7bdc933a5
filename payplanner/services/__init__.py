"""
Business logic services package
"""

from .query import QueryPipeline, EntityQuerySpec, FilterSpec, PagedResult
from .payment_service import PaymentService
from .case_service import CaseService
from .client_service import ClientService
from .dictionary_service import DictionaryService
from .activity_service import UserActivityService, ActivityEntry
from .dadata import LegalEntityEnrichmentService
from .database import DatabaseService

__all__ = [
    'QueryPipeline', 'EntityQuerySpec', 'FilterSpec', 'PagedResult',
    'PaymentService', 'CaseService', 'ClientService', 'DictionaryService',
    'UserActivityService', 'ActivityEntry', 'LegalEntityEnrichmentService',
    'DatabaseService'
]
