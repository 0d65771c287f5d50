# Overview: Flask CLI command groups for provisioning, user management and inspection.

# backend/app/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py and DATABASE_URL to the target database.
# - Use: python -m flask <group> <command> [options]
#
# Bootstrap:
# - python -m flask db-init
#   Create all tables for local use (production uses `flask db upgrade`).
# - python -m flask provision owner [--email owner@example.com --password "..."]
#   Create or promote the owner account to admin. Defaults come from
#   OWNER_EMAIL / OWNER_EXTERNAL_ID / OWNER_PASSWORD / OWNER_NAME.
#
# User inspection/bootstrap:
# - python -m flask users list
#   List all users with role and login method.
# - python -m flask users create --email manager@example.com --password "..." --role user
#   Create a local email/password user (prompts if options are omitted).
#
# Station inspection:
# - python -m flask stations list

import click
from flask import current_app
from flask.cli import with_appcontext

from .extensions import StorageUnavailableError, db
from .models import USER_ROLES
from .services.auth_service import create_user, list_users
from .services.station_service import list_stations
from .services.provisioning_service import OwnerIdentity, ProvisioningError, provision_owner
from .validation import ConflictError, ValidationError


@click.command('db-init')
@with_appcontext
def db_init():
    """Create all tables that do not exist yet."""
    click.echo("BUILD  Creating all tables...")
    db.create_all()
    click.echo("PASS Database schema ready.")


@click.group('provision')
def provision_group():
    """First-run provisioning commands."""


@provision_group.command('owner')
@click.option('--email', default=None, help='Owner email (defaults to OWNER_EMAIL)')
@click.option('--external-id', default=None, help='Identity provider subject (defaults to OWNER_EXTERNAL_ID)')
@click.option('--password', default=None, help='Password for a local account (defaults to OWNER_PASSWORD)')
@click.option('--name', default=None, help='Display name (defaults to OWNER_NAME)')
@with_appcontext
def provision_owner_cli(email, external_id, password, name):
    """
    Create the owner account with role admin, or promote it if it exists.

    Idempotent: running it again reports the existing account.
    """
    configured = current_app.extensions.get("owner_identity") or OwnerIdentity()
    identity = OwnerIdentity(
        email=(email or configured.email or "").strip().lower() or None,
        external_id=external_id or configured.external_id,
        password=password or configured.password,
        name=name or configured.name,
    )

    try:
        user, created = provision_owner(identity)
    except (ProvisioningError, ValidationError, StorageUnavailableError) as e:
        click.echo(f"FAIL Could not provision owner: {str(e)}")
        return

    if created:
        click.echo(f"PASS Created owner account: {user.email or user.external_id} (ID: {user.id})")
    else:
        click.echo(f"PASS Owner account already present: {user.email or user.external_id} (role: {user.role})")


@click.group('users')
def users_group():
    """User inspection and bootstrap commands."""


@users_group.command('create')
@click.option('--email', prompt=True, help='Email address')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True, help='Password')
@click.option('--name', default=None, help='Display name')
@click.option('--role', type=click.Choice(list(USER_ROLES)), default='user', show_default=True, help='Role')
@with_appcontext
def create_user_cli(email, password, name, role):
    """
    Create a local email/password user.

    Password must be at least 8 characters.
    """
    try:
        user = create_user(email=email, password=password, name=name, role=role)
    except (ValidationError, ConflictError, StorageUnavailableError) as e:
        click.echo(f"FAIL Failed to create user: {str(e)}")
        return

    click.echo(f"PASS Created user: {user.email} with role '{user.role}'")
    click.echo("SECURITY Password securely hashed with bcrypt")


@users_group.command('list')
@with_appcontext
def list_users_cli():
    """List all users with their roles."""
    users = list_users()

    if not users:
        click.echo("No users found.")
        return

    click.echo("\n" + "="*100)
    click.echo(f"{'ID':<38} {'Email':<32} {'Role':<8} {'Login'}")
    click.echo("="*100)

    for user in users:
        click.echo(f"{user.id:<38} {(user.email or '-'):<32} {user.role:<8} {user.login_method}")

    click.echo("="*100 + "\n")


@click.group('stations')
def stations_group():
    """Gas station inspection commands."""


@stations_group.command('list')
@with_appcontext
def list_stations_cli():
    """List all gas stations."""
    stations = list_stations()

    if not stations:
        click.echo("No stations found.")
        return

    for station in stations:
        click.echo(f"{station.id}  {station.name:<30} {station.city}, {station.state} {station.zip_code}")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(db_init)
    app.cli.add_command(provision_group)
    app.cli.add_command(users_group)
    app.cli.add_command(stations_group)
