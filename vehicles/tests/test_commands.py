from io import StringIO
from unittest.mock import patch

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase

from vehicles.tests.fakes import FakeGateway


class SeedVehiclesCommandTests(SimpleTestCase):
    """`seed_vehicles` grava veículos fake direto no Supabase."""

    def setUp(self):
        self.gateway = FakeGateway()
        patcher = patch("vehicles.management.commands.seed_vehicles.build_gateway", return_value=self.gateway)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_creates_requested_amount(self):
        out = StringIO()
        call_command("seed_vehicles", "--n", "5", stdout=out)

        rows = self.gateway.tables["vehicles"]
        self.assertEqual(len(rows), 5)
        for row in rows:
            self.assertTrue(2012 <= row["year"] <= 2025)
            self.assertGreaterEqual(row["price"], 0)
            self.assertIn(row["brand"], row["name"])
        self.assertIn("Veículos criados: 5", out.getvalue())

    def test_signs_in_first_when_email_given(self):
        call_command("seed_vehicles", "--n", "1", "--email", "admin@primemotors.com", "--password", "segredo123",
                     stdout=StringIO())
        self.assertEqual(self.gateway.ops(), ["sign_in", "insert"])

    def test_backend_error_aborts(self):
        self.gateway.fail_on.add("insert")
        with self.assertRaises(CommandError):
            call_command("seed_vehicles", "--n", "3", stdout=StringIO())
