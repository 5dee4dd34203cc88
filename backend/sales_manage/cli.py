# Overview: Flask CLI command groups for bootstrap, inspection, and maintenance.

# backend/sales_manage/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init
#   Idempotent bootstrap: creates missing tables and seed users, tax rates, staff and a sample customer.
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# User inspection/bootstrap:
# - python -m flask users list
#   List all users.
# - python -m flask users create --email someone@example.com --password "password123"
#   Register a user with the next free user_id (prompts if options are omitted).

import click
from flask.cli import with_appcontext

from .extensions import db
from .services import auth_service, seed_service
from .validation import ConflictError, ValidationError


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init')
@with_appcontext
def init_system():
    """
    Initialize the database: schema plus seed data.

    Safe to run repeatedly; existing rows are never modified.

    Creates (when absent):
    - Users: 00001/user1@example.com, 00002/user2@example.com
      (passwords "password1" / "password2")
    - Tax rates: 10%, 8%(軽減税率), 8%(経過措置), 非課税, 対象外
    - Staff 00001-00003 and one sample customer (only into empty tables)

    SECURITY: Change the seed passwords in any shared environment!
    """
    click.echo("START Initializing database...")

    counts = seed_service.initialize_database()

    for table, created in counts.items():
        click.echo(f"PASS {table}: {created} created")

    click.echo("DONE Database initialized")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()
    click.echo("BUILD Creating tables...")
    db.create_all()
    click.echo("DONE Database reset. Run 'flask system init' to add seed data.")


@click.group('users')
def users_group():
    """User inspection and bootstrap commands."""


@users_group.command('list')
@with_appcontext
def list_users():
    """List all users."""
    users = auth_service.list_users()

    if not users:
        click.echo("No users found.")
        return

    click.echo("\n" + "="*60)
    click.echo(f"{'User ID':<10} {'Email':<35} {'Created'}")
    click.echo("="*60)

    for user in users:
        created = user.created_at.strftime("%Y-%m-%d") if user.created_at else "-"
        click.echo(f"{user.user_id:<10} {user.email:<35} {created}")

    click.echo("="*60 + "\n")


@users_group.command('create')
@click.option('--email', prompt=True, help='Email address (unique)')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True, help='Password (8+ characters)')
@with_appcontext
def create_user_cli(email, password):
    """Register a user; the user_id is assigned automatically."""
    try:
        user = auth_service.create_user(email, password)
    except (ValidationError, ConflictError) as e:
        raise click.ClickException(str(e))

    click.echo(f"PASS Created user {user.user_id} ({user.email})")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(users_group)
