from wtforms import StringField, TextAreaField, BooleanField, SelectField
from wtforms.validators import DataRequired, Length, Optional, Email

from ...models.user import ROLE_CHOICES
from ...utils.forms import ApiForm


class ActivityForm(ApiForm):
    name = StringField("Nome", validators=[DataRequired(), Length(max=200)])
    description = TextAreaField("Descrição", validators=[Optional(), Length(max=4000)])
    is_duty_activity = BooleanField("Atividade de plantão")
    is_monthly_conference = BooleanField("Conferência mensal")


class UserUpdateForm(ApiForm):
    full_name = StringField("Nome completo", validators=[Optional(), Length(max=120)])
    email = StringField("E-mail", validators=[Optional(), Email(), Length(max=180)])
    role = SelectField("Permissão", choices=[(r, r) for r in ROLE_CHOICES], validators=[Optional()])
