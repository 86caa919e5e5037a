from django.test import SimpleTestCase

from vehicles import selectors
from vehicles.tests.fakes import FakeGateway, vehicle_row


class SelectorTests(SimpleTestCase):
    """
    Leituras por página: listas lidas a cada página e página de detalhe
    com a galeria ordenada por `display_order`.
    """

    def setUp(self):
        self.gateway = FakeGateway(
            vehicles=[
                vehicle_row(id="v1", created_at="2025-01-01T00:00:00+00:00"),
                vehicle_row(id="v2", name="Civic", brand="Honda", created_at="2025-03-01T00:00:00+00:00"),
                vehicle_row(id="v3", name="X1", brand="BMW", image_url=None, created_at="2025-02-01T00:00:00+00:00"),
                vehicle_row(id="v4", name="Onix", brand="Chevrolet", created_at="2024-12-01T00:00:00+00:00"),
            ],
            images=[
                {"id": "i1", "vehicle_id": "v1", "image_url": "https://cdn.test/c.jpg", "display_order": 3},
                {"id": "i2", "vehicle_id": "v1", "image_url": "https://cdn.test/a.jpg", "display_order": 1},
                {"id": "i3", "vehicle_id": "v1", "image_url": "https://cdn.test/b.jpg", "display_order": 2},
            ],
        )

    def test_featured_is_three_newest(self):
        result = selectors.featured_vehicles(self.gateway)
        self.assertTrue(result.ok)
        self.assertEqual([v.id for v in result.data], ["v2", "v3", "v1"])

    def test_every_page_load_fetches_again(self):
        """Escrita feita fora deste processo aparece já na próxima leitura."""
        first = selectors.inventory(self.gateway)
        self.gateway.tables["vehicles"].append(
            vehicle_row(id="v5", name="Kicks", brand="Nissan", created_at="2025-04-01T00:00:00+00:00")
        )
        second = selectors.inventory(self.gateway)

        self.assertNotIn("v5", [v.id for v in first.data])
        self.assertEqual([v.id for v in second.data], ["v5", "v2", "v3", "v1", "v4"])
        self.assertEqual(self.gateway.ops(), ["select", "select"])

    def test_list_failure_returns_friendly_error(self):
        self.gateway.fail_on.add("select")
        result = selectors.admin_vehicles(self.gateway)
        self.assertFalse(result.ok)
        self.assertEqual(result.data, [])
        self.assertEqual(result.error, selectors.LOAD_ERROR)

    def test_gallery_sorted_by_display_order(self):
        result = selectors.vehicle_detail(self.gateway, "v1")
        self.assertEqual(
            result.data.images,
            ["https://cdn.test/a.jpg", "https://cdn.test/b.jpg", "https://cdn.test/c.jpg"],
        )

    def test_gallery_falls_back_to_primary_image_then_placeholder(self):
        self.assertEqual(
            selectors.vehicle_detail(self.gateway, "v2").data.images,
            ["https://cdn.test/vehicle-images/atual.jpg"],
        )
        images = selectors.vehicle_detail(self.gateway, "v3").data.images
        self.assertEqual(len(images), 1)
        self.assertTrue(images[0].endswith("vehicles/placeholder.svg"))

    def test_unknown_vehicle(self):
        result = selectors.vehicle_detail(self.gateway, "nao-existe")
        self.assertIsNone(result.data)
        self.assertIsNone(result.error)
