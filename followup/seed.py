from __future__ import annotations
import click
from flask import Flask
from .extensions import db
from .models import Activity, User, UserActivity

DEMO_PASSWORD = "followup123"

DEMO_ACTIVITIES = (
    ("Conferência de e-mails", "Verificar caixa de entrada da operação", False, False),
    ("Relatório de ocorrências", "Consolidar ocorrências do turno", False, False),
    ("Plantão CCO", "Cobertura de plantão", True, False),
    ("Conferência mensal de RDO", "Conferir RDOs do mês", False, True),
)


def register_seed_command(app: Flask):
    @app.cli.command("seed")
    def seed():
        """Cria usuários, atividades e atribuições de demonstração."""
        created = 0

        def upsert_user(email, full_name, role):
            nonlocal created
            u = User.query.filter_by(email=email).first()
            if not u:
                u = User(email=email)
                u.set_password(DEMO_PASSWORD)
                db.session.add(u)
                created += 1
            u.full_name = full_name
            u.role = role
            u.approval_status = "approved"
            return u

        def upsert_activity(name, description, duty, monthly):
            a = Activity.query.filter_by(name=name).first()
            if not a:
                a = Activity(name=name)
                db.session.add(a)
            a.description = description
            a.is_duty_activity = duty
            a.is_monthly_conference = monthly
            return a

        upsert_user("supervisor@followup.com.br", "Supervisor", "supervisor")
        operators = [
            upsert_user("operador1@followup.com.br", "Operador Um", "operador"),
            upsert_user("operador2@followup.com.br", "Operador Dois", "operador_12_36_diurno"),
        ]
        activities = [upsert_activity(*row) for row in DEMO_ACTIVITIES]
        db.session.commit()

        assigned = 0
        for op in operators:
            for a in activities:
                if not UserActivity.query.filter_by(user_id=op.id, activity_id=a.id).first():
                    db.session.add(UserActivity(user_id=op.id, activity_id=a.id))
                    assigned += 1
        db.session.commit()

        click.echo(f"Seed concluído. Usuários criados: {created}. Atribuições novas: {assigned}")
        click.echo(f"Senha dos usuários de demonstração: {DEMO_PASSWORD}")
