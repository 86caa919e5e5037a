# vehicles/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path("", views.home_view, name="home"),
    path("estoque/", views.inventory_view, name="inventory"),
    path("veiculos/<str:vehicle_id>/", views.vehicle_detail_view, name="vehicle_detail"),
    path("sobre/", views.about_view, name="about"),
    path("vender/", views.sell_vehicle_view, name="sell_vehicle"),
    path("auth/", views.auth_view, name="auth"),
    path("admin/", views.admin_panel_view, name="admin_panel"),
    path("admin/veiculos/novo/", views.admin_vehicle_create_view, name="admin_vehicle_create"),
    path("admin/veiculos/<str:vehicle_id>/editar/", views.admin_vehicle_edit_view, name="admin_vehicle_edit"),
    path("admin/veiculos/<str:vehicle_id>/excluir/", views.admin_vehicle_delete_view, name="admin_vehicle_delete"),
    path("admin/sair/", views.logout_view, name="logout"),
]
