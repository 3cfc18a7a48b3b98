from __future__ import annotations

from flask import request
from flask_wtf import FlaskForm
from werkzeug.datastructures import MultiDict

SUBMIT_METHODS = ("POST", "PUT", "PATCH", "DELETE")


def _as_formvalue(value):
    # bool antes de int: True é instância de int
    if isinstance(value, bool):
        return "y" if value else ""
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


class ApiForm(FlaskForm):
    """
    Form validado a partir do corpo JSON.
    O token CSRF vem no header X-CSRFToken (CSRFProtect global).

    Valores escalares do JSON viram texto antes de chegar aos campos;
    listas/objetos invalidam o campo, corpo que não é objeto invalida o form.
    """

    class Meta:
        csrf = False

    def __init__(self, *args, **kwargs):
        self._bad_body = False
        self._bad_keys = []
        if "formdata" not in kwargs and request.method in SUBMIT_METHODS and request.is_json:
            kwargs["formdata"] = self._json_formdata()
        super().__init__(*args, **kwargs)

    def _json_formdata(self) -> MultiDict:
        data = request.get_json(silent=True)
        if data is None:
            return MultiDict()
        if not isinstance(data, dict):
            self._bad_body = True
            return MultiDict()

        out = MultiDict()
        for key, value in data.items():
            if value is None:
                continue
            converted = _as_formvalue(value)
            if converted is None:
                self._bad_keys.append(key)
                continue
            out.add(key, converted)
        return out

    def validate(self, extra_validators=None) -> bool:
        ok = super().validate(extra_validators=extra_validators)
        if self._bad_body:
            self.form_errors.append("Corpo da requisição inválido.")
            ok = False
        for key in self._bad_keys:
            if key in self._fields:
                self._fields[key].errors.insert(0, "Valor inválido.")
                ok = False
        return ok


def first_error(form: FlaskForm) -> str:
    for field_name, errors in form.errors.items():
        if not errors:
            continue
        if field_name is None:
            return errors[0]
        label = getattr(form, field_name).label.text if hasattr(form, field_name) else field_name
        return f"{label}: {errors[0]}"
    return "Dados inválidos"


def json_body() -> dict:
    """Corpo JSON como dict; vazio vira {}. Lista, número etc. => ValueError."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Corpo da requisição inválido.")
    return data


def optional_text(data: dict, key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"Campo {key} deve ser texto.")
    return value
