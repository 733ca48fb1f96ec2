"""
Service catalog use cases (type, value, detail and up to three images).

Images are opaque references: either an inline `data:image/...;base64,` value
or an http(s) URL. Nothing is uploaded anywhere; the reference is stored as is.
"""

from __future__ import annotations

import math
import re
from typing import Iterable

from dashboard.core.utils import clean
from dashboard.domain.models import MAX_SERVICE_IMAGES, Service, ServiceType
from dashboard.repositories.entity_repository import ServiceRepository
from dashboard.services.validation import NotFoundError, ValidationError

DATA_URI_RE = re.compile(r"^data:image/[a-z0-9.+-]+;base64,[A-Za-z0-9+/=\s]+$", re.IGNORECASE)


def is_image_reference(value: str) -> bool:
    """Return True for base64 image data URIs and http(s) URLs."""
    if not value:
        return False
    if value.startswith("http://") or value.startswith("https://"):
        return len(value) > len("https://")
    return bool(DATA_URI_RE.match(value))


def parse_value(raw) -> float:
    if isinstance(raw, bool):
        raise ValidationError("El valor debe ser un número válido.")
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = clean(raw)
        if not text:
            raise ValidationError("Todos los campos obligatorios (tipo, valor, detalle) deben ser completados.")
        try:
            value = float(text)
        except ValueError:
            raise ValidationError("El valor debe ser un número válido.")
    if math.isnan(value) or math.isinf(value):
        raise ValidationError("El valor debe ser un número válido.")
    if value < 0:
        raise ValidationError("El valor no puede ser negativo.")
    return value


class CatalogService:
    def __init__(self, services: ServiceRepository) -> None:
        self.services = services

    def list(self) -> list[Service]:
        return self.services.list()

    def get(self, service_id: str) -> Service:
        service = self.services.get_by_id(service_id)
        if not service:
            raise NotFoundError("Servicio", service_id)
        return service

    def save(
        self,
        *,
        type: str | ServiceType,
        value,
        detail: str,
        image_urls: Iterable[str] = (),
        service_id: str = "",
    ) -> Service:
        if service_id:
            self.get(service_id)
        service_type = ServiceType.parse(type)
        detail = clean(detail)
        if not clean(type) or not detail:
            raise ValidationError("Todos los campos obligatorios (tipo, valor, detalle) deben ser completados.")
        if service_type is None:
            raise ValidationError(f"Tipo de servicio desconocido: {type}")
        amount = parse_value(value)

        images = [clean(u) for u in (image_urls or []) if clean(u)]
        if len(images) > MAX_SERVICE_IMAGES:
            raise ValidationError(f"Máximo {MAX_SERVICE_IMAGES} imágenes por servicio.")
        for ref in images:
            if not is_image_reference(ref):
                raise ValidationError("No se pudo cargar la imagen.")

        service = Service(id=service_id, type=service_type, value=amount, detail=detail, image_urls=images)
        return self.services.save(service)

    def delete(self, service_id: str) -> None:
        self.services.delete(service_id)
