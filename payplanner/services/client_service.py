"""
Client service
"""

import logging
from typing import Dict

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from payplanner.exceptions import NotFoundError
from payplanner.models import db, Client, ClientCase, Payment
from payplanner.services.query import client_pipeline
from payplanner.utils.validators import normalize_string, parse_bool, require

logger = logging.getLogger(__name__)

class ClientService:
    """Service for client CRUD"""

    def __init__(self):
        self.pipeline = client_pipeline

    def list(self, args):
        return self.pipeline.list(args)

    def page(self, args):
        return self.pipeline.page(args)

    def get(self, client_id: int) -> Client:
        """Get a client with its cases"""
        client = Client.query.options(selectinload(Client.cases)).filter(Client.id == client_id).first()
        if client is None:
            raise NotFoundError('Client', client_id)
        return client

    def create(self, data: Dict) -> Client:
        client = Client(**self._parse_payload(data))
        db.session.add(client)
        db.session.commit()
        logger.info("Created client %s", client.id)
        return client

    def update(self, client_id: int, data: Dict) -> Client:
        client = db.session.get(Client, client_id)
        if client is None:
            raise NotFoundError('Client', client_id)

        values = self._parse_payload(data)
        for field in Client.EDITABLE_FIELDS:
            setattr(client, field, values[field])
        db.session.commit()
        return client

    def delete(self, client_id: int) -> Dict:
        """Detach payments, remove the client's cases, then the client; one transaction"""
        client = db.session.get(Client, client_id)
        if client is None:
            raise NotFoundError('Client', client_id)

        case_ids = select(ClientCase.id).where(ClientCase.client_id == client_id)
        try:
            detached = Payment.query.filter(Payment.client_id == client_id).update(
                {Payment.client_id: None, Payment.client_case_id: None}, synchronize_session='fetch')
            # Payments of this client's cases that point at another client keep that link
            detached += Payment.query.filter(Payment.client_case_id.in_(case_ids)).update(
                {Payment.client_case_id: None}, synchronize_session='fetch')
            removed_cases = ClientCase.query.filter(ClientCase.client_id == client_id).delete(
                synchronize_session='fetch')
            db.session.delete(client)
            db.session.commit()
        except Exception:
            db.session.rollback()
            logger.exception("Failed to delete client %s", client_id)
            raise

        logger.info("Deleted client %s: %s payments detached, %s cases removed",
                    client_id, detached, removed_cases)
        return {'detached_payments': detached, 'removed_cases': removed_cases}

    def _parse_payload(self, data: Dict) -> Dict:
        data = data or {}
        is_active = parse_bool(data.get('isActive'), 'isActive')
        return {
            'name': normalize_string(require(data.get('name'), 'name')),
            'email': normalize_string(data.get('email')),
            'phone': normalize_string(data.get('phone')),
            'company': normalize_string(data.get('company')),
            'address': normalize_string(data.get('address')),
            'notes': normalize_string(data.get('notes')),
            'is_active': True if is_active is None else is_active,
        }
