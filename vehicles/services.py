# vehicles/services.py
"""
Controladores dos formulários (admin, proposta, venda, login).

Fluxo comum:
1) valida o rascunho com o form correspondente (sem tocar na rede);
2) sobe as imagens escolhidas, se houver;
3) faz UMA escrita no Supabase.

As listas não ficam guardadas: a próxima página já lê o estado novo.

Nada aqui levanta exceção para falha esperada: o retorno é sempre um
`Outcome` com a mensagem que vai para o usuário.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from django import forms
from django.conf import settings

from .backend import AuthenticationError, BackendError
from .entities import (
    PROPOSALS_TABLE,
    SALE_REQUESTS_TABLE,
    VEHICLES_TABLE,
    Proposal,
    SaleRequest,
)
from .forms import IMAGE_ERROR, CredentialsForm, ProposalForm, SaleRequestForm, VehicleForm, first_error, is_image

logger = logging.getLogger(__name__)

MODE_LOGIN = "login"
MODE_REGISTER = "register"

SAVE_ERROR = "Erro ao salvar veículo"
DELETE_ERROR = "Erro ao remover veículo"
SEND_ERROR = "Tente novamente mais tarde."
AUTH_ERROR = "Erro ao processar. Tente novamente."

AUTH_ERROR_MESSAGES = {
    "Invalid login credentials": "Email ou senha incorretos",
    "User already registered": "Este email já está cadastrado",
}


@dataclass(frozen=True)
class Outcome:
    ok: bool
    message: str = ""
    payload: Any = None
    form: Optional[forms.Form] = None

    @classmethod
    def success(cls, message: str = "", payload: Any = None, form: Optional[forms.Form] = None) -> "Outcome":
        return cls(ok=True, message=message, payload=payload, form=form)

    @classmethod
    def failure(cls, message: str, form: Optional[forms.Form] = None) -> "Outcome":
        return cls(ok=False, message=message, form=form)


def validate(form_class, data, files=None) -> Outcome:
    form = form_class(data, files)
    if form.is_valid():
        return Outcome.success(payload=form.cleaned_data, form=form)
    return Outcome.failure(first_error(form), form=form)


def random_filename(original_name: str) -> str:
    """Nome aleatório preservando a extensão do arquivo enviado."""
    ext = original_name.rsplit(".", 1)[-1].lower() if "." in original_name else ""
    stem = uuid.uuid4().hex
    return f"{stem}.{ext}" if ext else stem


def upload_file(gateway, bucket: str, upload) -> str:
    """Sobe um arquivo com nome aleatório e devolve o caminho no bucket."""
    return gateway.upload(
        bucket,
        random_filename(upload.name),
        upload.read(),
        getattr(upload, "content_type", None),
    )


def _discard_uploads(gateway, bucket: str, paths: Iterable[str]) -> None:
    """
    Upload + escrita não é transacional: se a escrita falhar, removemos o que
    já subiu. Se a remoção também falhar, fica registrado no log.
    """
    paths = list(paths)
    if not paths:
        return
    try:
        gateway.remove(bucket, paths)
    except BackendError:
        logger.warning("arquivos órfãos em %s: %s", bucket, paths, exc_info=True)


# -----------------------------
# Admin: veículos
# -----------------------------
def save_vehicle(gateway, data, files=None, vehicle_id: Optional[str] = None) -> Outcome:
    result = validate(VehicleForm, data, files)
    if not result.ok:
        return result

    form = result.form
    row = form.payload()
    bucket = settings.VEHICLE_IMAGES_BUCKET
    uploaded: List[str] = []

    try:
        image = form.cleaned_data.get("image")
        if image:
            path = upload_file(gateway, bucket, image)
            uploaded.append(path)
            # Sem imagem nova o campo nem vai no payload (não apaga a atual)
            row["image_url"] = gateway.public_url(bucket, path)

        if vehicle_id:
            gateway.update(VEHICLES_TABLE, vehicle_id, row)
        else:
            gateway.insert(VEHICLES_TABLE, row)
    except BackendError:
        logger.warning("falha ao salvar veículo id=%s", vehicle_id, exc_info=True)
        _discard_uploads(gateway, bucket, uploaded)
        return Outcome.failure(SAVE_ERROR, form=form)

    return Outcome.success("Veículo atualizado!" if vehicle_id else "Veículo adicionado!", payload=row)


def delete_vehicle(gateway, vehicle_id: str) -> Outcome:
    try:
        gateway.delete(VEHICLES_TABLE, vehicle_id)
    except BackendError:
        logger.warning("falha ao remover veículo id=%s", vehicle_id, exc_info=True)
        return Outcome.failure(DELETE_ERROR)
    return Outcome.success("Veículo removido!")


# -----------------------------
# Público: proposta e venda
# -----------------------------
def submit_proposal(gateway, vehicle_id: str, data) -> Outcome:
    result = validate(ProposalForm, data)
    if not result.ok:
        return result

    cleaned = result.payload
    proposal = Proposal(
        vehicle_id=vehicle_id,
        type=cleaned["type"],
        customer_name=cleaned["name"],
        customer_email=cleaned["email"],
        customer_phone=cleaned["phone"],
        message=cleaned["message"],
    )
    try:
        gateway.insert(PROPOSALS_TABLE, proposal.to_row())
    except BackendError:
        logger.warning("falha ao enviar proposta do veículo id=%s", vehicle_id, exc_info=True)
        return Outcome.failure(SEND_ERROR, form=result.form)
    return Outcome.success("Proposta enviada! Entraremos em contato em breve.", payload=proposal)


def submit_sale_request(gateway, data, images=()) -> Outcome:
    result = validate(SaleRequestForm, data)
    if not result.ok:
        return result

    images = list(images)
    if not all(is_image(image) for image in images):
        return Outcome.failure(IMAGE_ERROR, form=result.form)

    cleaned = result.payload
    bucket = settings.SALE_IMAGES_BUCKET
    uploaded: List[str] = []
    image_urls: List[str] = []
    try:
        for image in images:
            path = upload_file(gateway, bucket, image)
            uploaded.append(path)
            image_urls.append(gateway.public_url(bucket, path))

        sale_request = SaleRequest(
            seller_name=cleaned["name"],
            seller_email=cleaned["email"],
            seller_phone=cleaned["phone"],
            vehicle_name=cleaned["vehicle_name"],
            vehicle_km=cleaned["vehicle_km"],
            desired_price=cleaned["desired_price"],
            observation=cleaned.get("observation") or None,
            images=image_urls,
        )
        gateway.insert(SALE_REQUESTS_TABLE, sale_request.to_row())
    except BackendError:
        logger.warning("falha ao enviar solicitação de venda", exc_info=True)
        _discard_uploads(gateway, bucket, uploaded)
        return Outcome.failure(SEND_ERROR, form=result.form)
    return Outcome.success("Solicitação enviada! Entraremos em contato em breve.", payload=sale_request)


# -----------------------------
# Login / cadastro
# -----------------------------
def auth_error_message(raw: str) -> str:
    for needle, friendly in AUTH_ERROR_MESSAGES.items():
        if needle in (raw or ""):
            return friendly
    return AUTH_ERROR


def authenticate(gateway, mode: str, data, redirect_to: str = "") -> Outcome:
    """
    `login`: entra com email/senha e devolve a sessão no payload.
    `register`: cria a conta; o usuário volta para o modo login.
    """
    result = validate(CredentialsForm, data)
    if not result.ok:
        return result

    email = result.payload["email"]
    password = result.payload["password"]
    try:
        if mode == MODE_REGISTER:
            gateway.sign_up(email, password, redirect_to)
            return Outcome.success("Conta criada! Faça login para continuar.")
        session = gateway.sign_in(email, password)
    except AuthenticationError as exc:
        logger.info("falha de autenticação (%s): %s", mode, exc.message)
        return Outcome.failure(auth_error_message(exc.message), form=result.form)
    return Outcome.success("Login realizado com sucesso!", payload=session)
