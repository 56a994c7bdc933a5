"""
Client case service
"""

import logging
from typing import Dict

from sqlalchemy.orm import selectinload

from payplanner.exceptions import DataValidationError, NotFoundError
from payplanner.models import db, Client, ClientCase, ClientCaseStatus, Payment
from payplanner.services.query import case_pipeline
from payplanner.utils.validators import normalize_string, parse_enum, parse_int, require

logger = logging.getLogger(__name__)

class CaseService:
    """Service for client case CRUD"""

    def __init__(self):
        self.pipeline = case_pipeline

    def list(self, args):
        return self.pipeline.list(args)

    def page(self, args):
        return self.pipeline.page(args)

    def get(self, case_id: int) -> ClientCase:
        """Get a case with its client and payments"""
        client_case = ClientCase.query.options(
            selectinload(ClientCase.client),
            selectinload(ClientCase.payments),
        ).filter(ClientCase.id == case_id).first()
        if client_case is None:
            raise NotFoundError('Case', case_id)
        return client_case

    def create(self, data: Dict) -> ClientCase:
        values = self._parse_payload(data)
        client_case = ClientCase(**values)
        db.session.add(client_case)
        db.session.commit()
        logger.info("Created case %s for client %s", client_case.id, client_case.client_id)
        return client_case

    def update(self, case_id: int, data: Dict) -> ClientCase:
        client_case = db.session.get(ClientCase, case_id)
        if client_case is None:
            raise NotFoundError('Case', case_id)

        values = self._parse_payload(data)
        for field in ClientCase.EDITABLE_FIELDS:
            setattr(client_case, field, values[field])
        db.session.commit()
        return client_case

    def delete(self, case_id: int) -> int:
        """Detach linked payments and remove the case in one transaction"""
        client_case = db.session.get(ClientCase, case_id)
        if client_case is None:
            raise NotFoundError('Case', case_id)

        try:
            detached = Payment.query.filter(Payment.client_case_id == case_id).update(
                {Payment.client_case_id: None}, synchronize_session='fetch')
            db.session.delete(client_case)
            db.session.commit()
        except Exception:
            db.session.rollback()
            logger.exception("Failed to delete case %s", case_id)
            raise

        logger.info("Deleted case %s, detached %s payments", case_id, detached)
        return detached

    def _parse_payload(self, data: Dict) -> Dict:
        data = data or {}
        title = normalize_string(require(data.get('title'), 'title'))
        if len(title) > 200:
            raise DataValidationError("'title' must be at most 200 characters", 'title', title)

        client_id = parse_int(require(data.get('clientId'), 'clientId'), 'clientId')
        if db.session.get(Client, client_id) is None:
            raise DataValidationError("Unknown ClientId", 'clientId', client_id)

        return {
            'title': title,
            'description': normalize_string(data.get('description')),
            'status': parse_enum(data.get('status'), ClientCaseStatus, 'status') or ClientCaseStatus.Open,
            'client_id': client_id,
        }
