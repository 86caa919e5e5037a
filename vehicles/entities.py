# vehicles/entities.py
"""
Formas dos registros como o site os enxerga.

A fonte da verdade (tipos, constraints) são as tabelas no Supabase; aqui só
convertemos as linhas (dicts) que voltam da API em objetos simples para as
views e templates.
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

VEHICLES_TABLE = "vehicles"
VEHICLE_IMAGES_TABLE = "vehicle_images"
PROPOSALS_TABLE = "vehicle_proposals"
SALE_REQUESTS_TABLE = "vehicle_sale_requests"

PROPOSAL_PURCHASE = "purchase"
PROPOSAL_FINANCING = "financing"
PROPOSAL_TYPES = (PROPOSAL_PURCHASE, PROPOSAL_FINANCING)


def _to_decimal(value: Any) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError):
        return Decimal("0")


def _to_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not value:
        return None
    try:
        # PostgREST devolve ISO 8601, às vezes com "Z"
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


@dataclass
class Vehicle:
    id: str
    name: str
    model: str
    brand: str
    year: int
    km: int
    price: Decimal
    description: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Vehicle":
        return cls(
            id=str(row.get("id", "")),
            name=row.get("name") or "",
            model=row.get("model") or "",
            brand=row.get("brand") or "",
            year=int(row.get("year") or 0),
            km=int(row.get("km") or 0),
            price=_to_decimal(row.get("price", 0)),
            description=row.get("description") or None,
            image_url=row.get("image_url") or None,
            created_at=_to_datetime(row.get("created_at")),
        )

    def form_initial(self) -> Dict[str, Any]:
        """Valores para pré-preencher o formulário de edição."""
        return {
            "name": self.name,
            "model": self.model,
            "brand": self.brand,
            "year": self.year,
            "km": self.km,
            "price": self.price,
            "description": self.description or "",
        }

    def __str__(self):
        return f"{self.name} {self.model} {self.year}"


@dataclass
class VehicleImage:
    id: str
    vehicle_id: str
    image_url: str
    display_order: int = 0

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "VehicleImage":
        return cls(
            id=str(row.get("id", "")),
            vehicle_id=str(row.get("vehicle_id", "")),
            image_url=row.get("image_url") or "",
            display_order=int(row.get("display_order") or 0),
        )


@dataclass
class Proposal:
    vehicle_id: str
    type: str
    customer_name: str
    customer_email: str
    customer_phone: str
    message: str

    def to_row(self) -> Dict[str, Any]:
        return {
            "vehicle_id": self.vehicle_id,
            "type": self.type,
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "customer_phone": self.customer_phone,
            "message": self.message,
        }


@dataclass
class SaleRequest:
    seller_name: str
    seller_email: str
    seller_phone: str
    vehicle_name: str
    vehicle_km: int
    desired_price: Decimal
    observation: Optional[str] = None
    images: List[str] = field(default_factory=list)

    def to_row(self) -> Dict[str, Any]:
        return {
            "seller_name": self.seller_name,
            "seller_email": self.seller_email,
            "seller_phone": self.seller_phone,
            "vehicle_name": self.vehicle_name,
            "vehicle_km": self.vehicle_km,
            "desired_price": float(self.desired_price),
            "observation": self.observation,
            "images": list(self.images),
        }


@dataclass(frozen=True)
class BackendUser:
    id: Optional[str]
    email: str = ""

    @property
    def is_authenticated(self) -> bool:
        return self.id is not None


ANONYMOUS = BackendUser(id=None)


@dataclass(frozen=True)
class BackendSession:
    access_token: str
    refresh_token: str
    user: BackendUser
