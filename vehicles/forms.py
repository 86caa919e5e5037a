# vehicles/forms.py
from django import forms

from .entities import PROPOSAL_TYPES

IMAGE_ERROR = "Envie apenas arquivos de imagem"


def first_error(form: forms.Form) -> str:
    """
    Mensagem do primeiro campo inválido, na ordem em que os campos foram
    declarados. É o que vai para o aviso (toast) da página.
    """
    for name in form.fields:
        errors = form.errors.get(name)
        if errors:
            return errors[0]
    non_field = form.non_field_errors()
    return non_field[0] if non_field else ""


def is_image(upload) -> bool:
    """O `accept` do input é só dica para o navegador; aqui vale o content-type."""
    return (getattr(upload, "content_type", "") or "").startswith("image/")


def _messages(required=None, invalid=None, **by_code):
    msgs = dict(by_code)
    if required:
        msgs["required"] = required
    if invalid:
        msgs["invalid"] = invalid
    return msgs


class VehicleForm(forms.Form):
    name = forms.CharField(
        label="Nome",
        max_length=100,
        error_messages=_messages(
            required="Nome é obrigatório",
            max_length="Nome deve ter no máximo 100 caracteres",
        ),
    )
    model = forms.CharField(
        label="Modelo",
        max_length=100,
        error_messages=_messages(
            required="Modelo é obrigatório",
            max_length="Modelo deve ter no máximo 100 caracteres",
        ),
    )
    brand = forms.CharField(
        label="Marca",
        max_length=50,
        error_messages=_messages(
            required="Marca é obrigatória",
            max_length="Marca deve ter no máximo 50 caracteres",
        ),
    )
    year = forms.IntegerField(
        label="Ano",
        min_value=1900,
        max_value=2030,
        error_messages=_messages(
            required="Ano é obrigatório",
            invalid="Ano inválido",
            min_value="Ano deve estar entre 1900 e 2030",
            max_value="Ano deve estar entre 1900 e 2030",
        ),
    )
    km = forms.IntegerField(
        label="Quilometragem",
        min_value=0,
        error_messages=_messages(
            required="Quilometragem é obrigatória",
            invalid="Quilometragem inválida",
            min_value="Quilometragem não pode ser negativa",
        ),
    )
    price = forms.DecimalField(
        label="Preço (R$)",
        min_value=0,
        max_digits=12,
        decimal_places=2,
        error_messages=_messages(
            required="Preço é obrigatório",
            invalid="Preço inválido",
            min_value="Preço não pode ser negativo",
        ),
    )
    description = forms.CharField(
        label="Descrição",
        required=False,
        max_length=1000,
        widget=forms.Textarea(attrs={"rows": 3}),
        error_messages=_messages(max_length="Descrição deve ter no máximo 1000 caracteres"),
    )
    image = forms.FileField(
        label="Imagem do Veículo",
        required=False,
        widget=forms.ClearableFileInput(attrs={"accept": "image/*"}),
    )

    def clean_image(self):
        image = self.cleaned_data.get("image")
        if image and not is_image(image):
            raise forms.ValidationError(IMAGE_ERROR, code="invalid_image")
        return image

    def payload(self) -> dict:
        """Linha para o Supabase, sem o arquivo de imagem."""
        data = self.cleaned_data
        return {
            "name": data["name"],
            "model": data["model"],
            "brand": data["brand"],
            "year": data["year"],
            "km": data["km"],
            "price": float(data["price"]),
            "description": data.get("description") or None,
        }


class ProposalForm(forms.Form):
    name = forms.CharField(
        label="Seu Nome",
        min_length=3,
        error_messages=_messages(
            required="Nome deve ter pelo menos 3 caracteres",
            min_length="Nome deve ter pelo menos 3 caracteres",
        ),
    )
    email = forms.EmailField(
        label="Seu Email",
        error_messages=_messages(required="Email inválido", invalid="Email inválido"),
    )
    phone = forms.CharField(
        label="Seu Telefone",
        min_length=10,
        error_messages=_messages(required="Telefone inválido", min_length="Telefone inválido"),
    )
    message = forms.CharField(
        label="Mensagem",
        min_length=10,
        widget=forms.Textarea(attrs={"rows": 4}),
        error_messages=_messages(required="Mensagem muito curta", min_length="Mensagem muito curta"),
    )
    type = forms.ChoiceField(
        choices=[(t, t) for t in PROPOSAL_TYPES],
        widget=forms.HiddenInput,
        error_messages=_messages(required="Tipo de proposta inválido", invalid_choice="Tipo de proposta inválido"),
    )


class SaleRequestForm(forms.Form):
    name = forms.CharField(
        label="Seu Nome",
        min_length=3,
        max_length=100,
        error_messages=_messages(
            required="Nome deve ter pelo menos 3 caracteres",
            min_length="Nome deve ter pelo menos 3 caracteres",
            max_length="Nome deve ter no máximo 100 caracteres",
        ),
    )
    email = forms.EmailField(
        label="Seu Email",
        error_messages=_messages(required="Email inválido", invalid="Email inválido"),
    )
    phone = forms.CharField(
        label="Seu Telefone",
        min_length=10,
        error_messages=_messages(required="Telefone inválido", min_length="Telefone inválido"),
    )
    vehicle_name = forms.CharField(
        label="Veículo",
        min_length=3,
        widget=forms.TextInput(attrs={"placeholder": "Ex: Chevrolet Onix LTZ 2020"}),
        error_messages=_messages(
            required="Nome do veículo é obrigatório",
            min_length="Nome do veículo é obrigatório",
        ),
    )
    vehicle_km = forms.IntegerField(
        label="KM do Veículo",
        min_value=0,
        error_messages=_messages(required="KM inválido", invalid="KM inválido", min_value="KM inválido"),
    )
    desired_price = forms.DecimalField(
        label="Valor Desejado",
        min_value=0,
        max_digits=12,
        decimal_places=2,
        error_messages=_messages(required="Valor inválido", invalid="Valor inválido", min_value="Valor inválido"),
    )
    observation = forms.CharField(
        label="Observação",
        required=False,
        max_length=500,
        widget=forms.Textarea(attrs={"rows": 4}),
        error_messages=_messages(max_length="Observação deve ter no máximo 500 caracteres"),
    )


class CredentialsForm(forms.Form):
    email = forms.EmailField(
        label="Email",
        max_length=255,
        widget=forms.EmailInput(attrs={"placeholder": "admin@primemotors.com"}),
        error_messages=_messages(
            required="Email inválido",
            invalid="Email inválido",
            max_length="Email inválido",
        ),
    )
    password = forms.CharField(
        label="Senha",
        min_length=6,
        max_length=100,
        strip=False,
        widget=forms.PasswordInput(attrs={"placeholder": "••••••••"}),
        error_messages=_messages(
            required="Senha deve ter no mínimo 6 caracteres",
            min_length="Senha deve ter no mínimo 6 caracteres",
            max_length="Senha deve ter no máximo 100 caracteres",
        ),
    )
