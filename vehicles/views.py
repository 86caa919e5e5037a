# vehicles/views.py
import logging

from django.contrib import messages
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils import timezone
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from . import selectors, services
from .auth import admin_required, clear_session, store_session
from .backend import AuthenticationError
from .entities import PROPOSAL_TYPES
from .filters import PRICE_CHOICES, YEAR_CHOICES, InventoryFilters, brand_options, filter_vehicles
from .forms import CredentialsForm, ProposalForm, SaleRequestForm, VehicleForm

logger = logging.getLogger(__name__)

PROPOSAL_TITLES = {
    "purchase": "Enviar Proposta de Compra",
    "financing": "Solicitar Financiamento",
}


def _notify(request, outcome) -> None:
    if outcome.ok:
        messages.success(request, outcome.message)
    else:
        messages.error(request, outcome.message)


###############################################################################
#                               PÁGINAS PÚBLICAS                              #
###############################################################################
@require_GET
def home_view(request):
    result = selectors.featured_vehicles(request.backend)
    return render(request, "vehicles/home.html", {"vehicles": result.data, "load_error": result.error})


@require_GET
def inventory_view(request):
    """
    Estoque com busca livre + filtros de marca, ano e preço.
    A lista vem inteira do backend e é filtrada aqui (filters.py).
    """
    result = selectors.inventory(request.backend)
    filters = InventoryFilters.from_params(request.GET)
    filtered = filter_vehicles(result.data, filters)
    return render(
        request,
        "vehicles/inventory.html",
        {
            "vehicles": filtered,
            "total": len(filtered),
            "brands": brand_options(result.data),
            "filters": filters,
            "year_choices": YEAR_CHOICES,
            "price_choices": PRICE_CHOICES,
            "load_error": result.error,
        },
    )


@require_http_methods(["GET", "POST"])
def vehicle_detail_view(request, vehicle_id):
    result = selectors.vehicle_detail(request.backend, vehicle_id)
    if result.data is None:
        return render(request, "vehicles/vehicle_not_found.html", {"load_error": result.error}, status=404)

    # ?proposta=purchase|financing abre o formulário correspondente
    proposal_type = request.GET.get("proposta")
    form = None

    if request.method == "POST":
        outcome = services.submit_proposal(request.backend, vehicle_id, request.POST)
        _notify(request, outcome)
        if outcome.ok:
            return redirect("vehicle_detail", vehicle_id=vehicle_id)
        form = outcome.form
        proposal_type = request.POST.get("type")

    if proposal_type not in PROPOSAL_TYPES:
        proposal_type = None
        form = None
    elif form is None:
        form = ProposalForm(initial={"type": proposal_type})

    return render(
        request,
        "vehicles/vehicle_detail.html",
        {
            "vehicle": result.data.vehicle,
            "images": result.data.images,
            "proposal_form": form,
            "proposal_type": proposal_type,
            "proposal_title": PROPOSAL_TITLES.get(proposal_type, ""),
        },
    )


@require_GET
def about_view(request):
    return render(request, "vehicles/about.html")


@require_http_methods(["GET", "POST"])
def sell_vehicle_view(request):
    form = SaleRequestForm()
    if request.method == "POST":
        outcome = services.submit_sale_request(request.backend, request.POST, request.FILES.getlist("images"))
        _notify(request, outcome)
        if outcome.ok:
            return redirect("sell_vehicle")
        form = outcome.form
    return render(request, "vehicles/sell_vehicle.html", {"form": form})


###############################################################################
#                                    LOGIN                                    #
###############################################################################
@require_http_methods(["GET", "POST"])
def auth_view(request):
    """
    Dois estados: login <-> cadastro, trocados por link (?modo=cadastro).
    Os dois passam pela mesma validação antes de qualquer chamada ao backend.
    """
    if request.backend_user.is_authenticated:
        return redirect("admin_panel")

    if request.method == "POST":
        mode = services.MODE_REGISTER if request.POST.get("mode") == services.MODE_REGISTER else services.MODE_LOGIN
    else:
        mode = services.MODE_REGISTER if request.GET.get("modo") == "cadastro" else services.MODE_LOGIN

    form = CredentialsForm()
    if request.method == "POST":
        outcome = services.authenticate(
            request.backend,
            mode,
            request.POST,
            redirect_to=request.build_absolute_uri(reverse("admin_panel")),
        )
        _notify(request, outcome)
        if outcome.ok:
            if mode == services.MODE_LOGIN:
                store_session(request, outcome.payload)
                return redirect("admin_panel")
            # conta criada: volta para o modo login
            return redirect("auth")
        form = outcome.form

    return render(
        request,
        "vehicles/auth.html",
        {"form": form, "mode": mode, "is_login": mode == services.MODE_LOGIN},
    )


@require_POST
def logout_view(request):
    if request.backend_user.is_authenticated:
        try:
            request.backend.sign_out()
        except AuthenticationError as exc:
            logger.info("sign out falhou no backend: %s", exc.message)
    clear_session(request)
    return redirect("home")


###############################################################################
#                               PAINEL ADMIN                                  #
###############################################################################
def _render_admin(request, form=None, editing=None):
    result = selectors.admin_vehicles(request.backend)
    return render(
        request,
        "vehicles/admin_panel.html",
        {
            "vehicles": result.data,
            "load_error": result.error,
            "form": form,
            "editing": editing,
        },
    )


@admin_required
@require_GET
def admin_panel_view(request):
    return _render_admin(request)


@admin_required
@require_http_methods(["GET", "POST"])
def admin_vehicle_create_view(request):
    if request.method == "POST":
        outcome = services.save_vehicle(request.backend, request.POST, request.FILES)
        _notify(request, outcome)
        if outcome.ok:
            return redirect("admin_panel")
        return _render_admin(request, form=outcome.form)

    form = VehicleForm(initial={"year": timezone.localdate().year, "km": 0, "price": 0})
    return _render_admin(request, form=form)


@admin_required
@require_http_methods(["GET", "POST"])
def admin_vehicle_edit_view(request, vehicle_id):
    loaded = selectors.vehicle_for_edit(request.backend, vehicle_id)
    if loaded.data is None:
        messages.error(request, loaded.error or "Veículo não encontrado")
        return redirect("admin_panel")

    if request.method == "POST":
        outcome = services.save_vehicle(request.backend, request.POST, request.FILES, vehicle_id=vehicle_id)
        _notify(request, outcome)
        if outcome.ok:
            return redirect("admin_panel")
        return _render_admin(request, form=outcome.form, editing=loaded.data)

    return _render_admin(request, form=VehicleForm(initial=loaded.data.form_initial()), editing=loaded.data)


@admin_required
@require_http_methods(["GET", "POST"])
def admin_vehicle_delete_view(request, vehicle_id):
    """GET pede confirmação; só o POST remove."""
    if request.method == "POST":
        _notify(request, services.delete_vehicle(request.backend, vehicle_id))
        return redirect("admin_panel")

    loaded = selectors.vehicle_for_edit(request.backend, vehicle_id)
    if loaded.data is None:
        messages.error(request, loaded.error or "Veículo não encontrado")
        return redirect("admin_panel")
    return render(request, "vehicles/admin_confirm_delete.html", {"vehicle": loaded.data})
