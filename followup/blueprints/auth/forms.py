from wtforms import StringField, PasswordField
from wtforms.validators import DataRequired, Length, Optional, Email

from ...utils.forms import ApiForm


class LoginForm(ApiForm):
    email = StringField("E-mail", validators=[DataRequired(), Length(min=3, max=180)])
    password = PasswordField("Senha", validators=[DataRequired(), Length(min=4, max=128)])


class RegisterForm(ApiForm):
    email = StringField("E-mail", validators=[DataRequired(), Email(), Length(max=180)])
    full_name = StringField("Nome completo", validators=[Optional(), Length(max=120)])
    password = PasswordField("Senha", validators=[DataRequired(), Length(min=6, max=128)])
