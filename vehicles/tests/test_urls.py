from django.test import SimpleTestCase
from django.urls import reverse, resolve
from vehicles import views


class VehiclesURLsTests(SimpleTestCase):
    """
    Testes unitários para o roteamento (URLs) do app `vehicles`.

    Objetivo:
    - Garantir que cada URL nomeada resolve (ou seja, aponta) para a view certa.

    Observação:
    - Só roteamento, sem backend; por isso `SimpleTestCase`.
    """

    def test_named_urls_resolve(self):
        """
        Para cada nome de rota:
        1. `reverse` monta o caminho a partir do nome definido em `urls.py`;
        2. `resolve` devolve a view chamada para esse caminho;
        3. a view deve ser a esperada.
        """
        cases = [
            ("home", {}, "/", views.home_view),
            ("inventory", {}, "/estoque/", views.inventory_view),
            ("vehicle_detail", {"vehicle_id": "abc"}, "/veiculos/abc/", views.vehicle_detail_view),
            ("about", {}, "/sobre/", views.about_view),
            ("sell_vehicle", {}, "/vender/", views.sell_vehicle_view),
            ("auth", {}, "/auth/", views.auth_view),
            ("admin_panel", {}, "/admin/", views.admin_panel_view),
            ("admin_vehicle_create", {}, "/admin/veiculos/novo/", views.admin_vehicle_create_view),
            ("admin_vehicle_edit", {"vehicle_id": "abc"}, "/admin/veiculos/abc/editar/", views.admin_vehicle_edit_view),
            ("admin_vehicle_delete", {"vehicle_id": "abc"}, "/admin/veiculos/abc/excluir/", views.admin_vehicle_delete_view),
            ("logout", {}, "/admin/sair/", views.logout_view),
        ]
        for name, kwargs, path, view in cases:
            with self.subTest(name=name):
                url = reverse(name, kwargs=kwargs)
                self.assertEqual(url, path)
                self.assertEqual(resolve(url).func, view)
