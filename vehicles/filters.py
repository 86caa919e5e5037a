# vehicles/filters.py
"""
Filtros da página de estoque.

Tudo aqui é puro: recebe a lista de veículos já carregada e os filtros
escolhidos, devolve o subconjunto que atende a TODOS os critérios.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Mapping

ALL = "all"

# Ano
YEAR_NEW = "new"
YEAR_USED = "used"
NEW_FROM_YEAR = 2022

# Preço
PRICE_LOW = "low"
PRICE_MID = "mid"
PRICE_HIGH = "high"
PRICE_MID_FROM = Decimal("50000")
PRICE_HIGH_FROM = Decimal("100000")

YEAR_CHOICES = [
    (ALL, "Todos os anos"),
    (YEAR_NEW, f"{NEW_FROM_YEAR} ou mais novo"),
    (YEAR_USED, f"Antes de {NEW_FROM_YEAR}"),
]
PRICE_CHOICES = [
    (ALL, "Todos os preços"),
    (PRICE_LOW, "Até R$ 50.000"),
    (PRICE_MID, "R$ 50.000 - R$ 100.000"),
    (PRICE_HIGH, "Acima de R$ 100.000"),
]


def classify_year(year: int) -> str:
    return YEAR_NEW if year >= NEW_FROM_YEAR else YEAR_USED


def classify_price(price) -> str:
    value = Decimal(str(price))
    if value < PRICE_MID_FROM:
        return PRICE_LOW
    if value < PRICE_HIGH_FROM:
        return PRICE_MID
    return PRICE_HIGH


@dataclass(frozen=True)
class InventoryFilters:
    term: str = ""
    brand: str = ALL
    year: str = ALL
    price: str = ALL

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> "InventoryFilters":
        """
        Lê os parâmetros da querystring (q, marca, ano, preco).
        Valores desconhecidos de faixa viram "all".
        """
        year = params.get("ano") or ALL
        price = params.get("preco") or ALL
        return cls(
            term=(params.get("q") or "").strip(),
            brand=params.get("marca") or ALL,
            year=year if year in dict(YEAR_CHOICES) else ALL,
            price=price if price in dict(PRICE_CHOICES) else ALL,
        )

    @property
    def is_active(self) -> bool:
        return bool(self.term) or any(v != ALL for v in (self.brand, self.year, self.price))


def _matches_term(vehicle, term: str) -> bool:
    if not term:
        return True
    needle = term.lower()
    return any(needle in (value or "").lower() for value in (vehicle.name, vehicle.model, vehicle.brand))


def matches(vehicle, filters: InventoryFilters) -> bool:
    return (
        _matches_term(vehicle, filters.term)
        and (filters.brand == ALL or vehicle.brand == filters.brand)
        and (filters.year == ALL or classify_year(vehicle.year) == filters.year)
        and (filters.price == ALL or classify_price(vehicle.price) == filters.price)
    )


def filter_vehicles(vehicles: Iterable, filters: InventoryFilters) -> List:
    return [v for v in vehicles if matches(v, filters)]


def brand_options(vehicles: Iterable) -> List[str]:
    return sorted({v.brand for v in vehicles})
