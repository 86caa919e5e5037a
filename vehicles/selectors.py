# vehicles/selectors.py
"""
Leituras por página (o "view model" de cada tela).

Cada função devolve um `QueryResult` com os dados ou uma mensagem de erro
amigável; o detalhe técnico vai só para o log. Nada fica guardado entre
requisições: toda página busca a lista de novo no Supabase.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from django.templatetags.static import static

from .backend import BackendError
from .entities import VEHICLE_IMAGES_TABLE, VEHICLES_TABLE, Vehicle, VehicleImage

logger = logging.getLogger(__name__)

FEATURED_LIMIT = 3
PLACEHOLDER_IMAGE = "vehicles/placeholder.svg"

LOAD_ERROR = "Não foi possível carregar os veículos. Tente novamente mais tarde."


@dataclass
class QueryResult:
    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class VehicleDetail:
    vehicle: Vehicle
    images: List[str] = field(default_factory=list)


def _vehicle_list(gateway, page: str, limit: Optional[int] = None) -> QueryResult:
    try:
        rows = gateway.select(VEHICLES_TABLE, order_by="created_at", ascending=False, limit=limit)
    except BackendError:
        logger.warning("falha ao carregar lista de veículos (%s)", page, exc_info=True)
        return QueryResult(data=[], error=LOAD_ERROR)
    return QueryResult(data=[Vehicle.from_row(r) for r in rows])


def featured_vehicles(gateway) -> QueryResult:
    return _vehicle_list(gateway, "home", limit=FEATURED_LIMIT)


def inventory(gateway) -> QueryResult:
    return _vehicle_list(gateway, "estoque")


def admin_vehicles(gateway) -> QueryResult:
    return _vehicle_list(gateway, "admin")


def vehicle_detail(gateway, vehicle_id: str) -> QueryResult:
    """
    Veículo + galeria. A galeria segue `display_order` crescente; sem fotos
    extras, usa a imagem principal ou o placeholder.
    """
    try:
        row = gateway.select_one(VEHICLES_TABLE, vehicle_id)
        if row is None:
            return QueryResult(data=None)
        image_rows = gateway.select(
            VEHICLE_IMAGES_TABLE,
            filters={"vehicle_id": vehicle_id},
            order_by="display_order",
            ascending=True,
        )
    except BackendError:
        logger.warning("falha ao carregar veículo id=%s", vehicle_id, exc_info=True)
        return QueryResult(data=None, error=LOAD_ERROR)

    vehicle = Vehicle.from_row(row)
    images = sorted((VehicleImage.from_row(r) for r in image_rows), key=lambda img: img.display_order)
    gallery = [img.image_url for img in images if img.image_url]
    if not gallery:
        gallery = [vehicle.image_url or static(PLACEHOLDER_IMAGE)]
    return QueryResult(data=VehicleDetail(vehicle=vehicle, images=gallery))


def vehicle_for_edit(gateway, vehicle_id: str) -> QueryResult:
    try:
        row = gateway.select_one(VEHICLES_TABLE, vehicle_id)
    except BackendError:
        logger.warning("falha ao carregar veículo id=%s para edição", vehicle_id, exc_info=True)
        return QueryResult(data=None, error=LOAD_ERROR)
    return QueryResult(data=Vehicle.from_row(row) if row else None)
