"""Client management use cases."""

from __future__ import annotations

from dashboard.core.utils import clean
from dashboard.domain.models import Client
from dashboard.repositories.entity_repository import ClientRepository
from dashboard.services.validation import NotFoundError, ValidationError, key_taken


class ClientService:
    def __init__(self, clients: ClientRepository) -> None:
        self.clients = clients

    def list(self) -> list[Client]:
        return self.clients.list()

    def get(self, client_id: str) -> Client:
        client = self.clients.get_by_id(client_id)
        if not client:
            raise NotFoundError("Cliente", client_id)
        return client

    def save(self, *, nit: str, name: str, detail: str, client_id: str = "") -> Client:
        nit, name, detail = clean(nit), clean(name), clean(detail)
        with self.clients.store.lock:
            if client_id:
                self.get(client_id)
            if not nit or not name or not detail:
                raise ValidationError("Todos los campos son obligatorios.")
            if key_taken(self.clients.list(), lambda c: c.nit, nit, exclude_id=client_id):
                raise ValidationError("Ya existe un cliente con este NIT.")
            return self.clients.save(Client(id=client_id, nit=nit, name=name, detail=detail))

    def delete(self, client_id: str) -> None:
        self.clients.delete(client_id)
