# vehicles/management/commands/seed_vehicles.py
from django.core.management.base import BaseCommand, CommandError
from faker import Faker
from decimal import Decimal
import random

from vehicles.backend import AuthenticationError, BackendError, build_gateway
from vehicles.entities import VEHICLES_TABLE

BRANDS = [
    ("Volkswagen", ["Polo", "T-Cross", "Nivus", "Jetta"]),
    ("Chevrolet", ["Onix", "Tracker", "S10", "Cruze"]),
    ("Toyota", ["Corolla", "Yaris", "Hilux", "RAV4"]),
    ("Honda", ["Civic", "City", "HR-V", "Accord"]),
    ("BMW", ["320i", "X1", "X3", "M3"]),
    ("Mercedes-Benz", ["C 200", "GLA 200", "GLC 300", "A 200"]),
    ("Audi", ["A3", "A4", "Q3", "Q5"]),
]

VERSIONS = ["Sport", "Premium", "Comfort", "Limited", "Touring", "Highline"]


def fake_vehicle(fake: Faker) -> dict:
    brand, models = random.choice(BRANDS)
    model = random.choice(models)
    return {
        "name": f"{brand} {model}",
        "model": f"{model} {random.choice(VERSIONS)}",
        "brand": brand,
        "year": random.randint(2012, 2025),
        "km": random.randint(0, 150_000),
        "price": float(Decimal(f"{random.uniform(35_000, 450_000):.2f}")),
        "description": fake.paragraph(nb_sentences=3),
    }


class Command(BaseCommand):
    help = "Popula o Supabase com veículos fake."

    def add_arguments(self, parser):
        parser.add_argument("--min", "--n", dest="n", type=int, default=20,
                            help="Quantidade de veículos a criar (alias: --min, --n)")
        parser.add_argument("--email", help="Conta admin usada para passar pelas regras de RLS")
        parser.add_argument("--password", help="Senha da conta admin")

    def handle(self, *args, **options):
        fake = Faker("pt_BR")
        gateway = build_gateway()

        if options.get("email"):
            try:
                gateway.sign_in(options["email"], options.get("password") or "")
            except AuthenticationError as exc:
                raise CommandError(f"Falha no login: {exc.message}") from exc

        created = 0
        for _ in range(options["n"]):
            try:
                gateway.insert(VEHICLES_TABLE, fake_vehicle(fake))
            except BackendError as exc:
                raise CommandError(f"Erro ao inserir veículo ({created} criados): {exc.message}") from exc
            created += 1

        self.stdout.write(self.style.SUCCESS(f"Veículos criados: {created}"))
