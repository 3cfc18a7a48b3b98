from wtforms import IntegerField, TextAreaField, SelectField
from wtforms.validators import DataRequired, Optional, Length

from ...models.pending_item import REQUEST_TYPES, REQUEST_TYPE_LABELS
from ...utils.forms import ApiForm


class SpecialRequestForm(ApiForm):
    request_type = SelectField(
        "Tipo",
        choices=[(t, REQUEST_TYPE_LABELS[t]) for t in REQUEST_TYPES],
        validators=[DataRequired()],
    )
    description = TextAreaField("Descrição", validators=[Optional(), Length(max=4000)])
    action_taken = TextAreaField("Ação tomada", validators=[Optional(), Length(max=4000)])


class ResolveForm(ApiForm):
    justification = TextAreaField("Justificativa", validators=[Optional(), Length(max=4000)])
    action_taken = TextAreaField("Ação tomada", validators=[Optional(), Length(max=4000)])


class AssignForm(ApiForm):
    user_id = IntegerField("Usuário", validators=[DataRequired()])
