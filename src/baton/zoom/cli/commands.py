"""Connector CLI commands.

Commands:
    baton-zoom sync [--output snapshot.yaml]
    baton-zoom validate
    baton-zoom create-account --email ... --first-name ... --last-name ... --display-name ...
    baton-zoom delete-account <user-id>
    baton-zoom grant|revoke --resource-type group --resource-id <id> --entitlement member --user-id <id>
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Annotated, Any, Optional, TypeVar

import structlog
import typer

from baton.zoom.api.client import ZoomClient
from baton.zoom.config import ZoomSettings
from baton.zoom.connector.connector import ZoomConnector
from baton.zoom.connector.group import GroupSyncer
from baton.zoom.connector.role import RoleSyncer
from baton.zoom.connector.user import UserSyncer
from baton.zoom.errors import ZoomAuthError, ZoomError
from baton.zoom.logs import configure_logging
from baton.zoom.models import Entitlement, Grant, Resource, ResourceId
from baton.zoom.sync import run_sync, write_snapshot

logger = structlog.get_logger()

T = TypeVar("T")

app = typer.Typer(
    name="baton-zoom",
    help="Sync users, groups, roles and contact groups from Zoom",
    add_completion=False,
)

AccountIdOpt = Annotated[
    Optional[str],
    typer.Option("--account-id", help="Account ID used to generate token providing access to Zoom API"),
]
ClientIdOpt = Annotated[
    Optional[str],
    typer.Option("--client-id", help="Client ID used to generate token providing access to Zoom API"),
]
ClientSecretOpt = Annotated[
    Optional[str],
    typer.Option("--client-secret", help="Client Secret used to generate token providing access to Zoom API"),
]
VerboseOpt = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable verbose output"),
]


def _build_settings(
    account_id: str | None,
    client_id: str | None,
    client_secret: str | None,
    verbose: bool,
) -> ZoomSettings:
    """Build settings from environment and CLI overrides, then set up logging."""
    settings = ZoomSettings().with_overrides(
        account_id=account_id,
        client_id=client_id,
        client_secret=client_secret,
    )
    configure_logging(
        log_level="DEBUG" if verbose else settings.log_level,
        json_format=settings.log_json,
    )

    missing = settings.missing_credentials()
    if missing:
        typer.secho(f"Error: {', '.join(missing)} is missing", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    return settings


@asynccontextmanager
async def open_connector(settings: ZoomSettings) -> AsyncIterator[ZoomConnector]:
    async with ZoomClient(settings) as client:
        yield ZoomConnector(client)


def _run(coro: Awaitable[T], verbose: bool) -> T:
    """Run a coroutine, turning connector errors into a non-zero exit."""
    try:
        return asyncio.run(coro)
    except ZoomAuthError as e:
        typer.secho(f"Authentication failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    except ZoomError as e:
        typer.secho(f"Zoom error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    except Exception as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        if verbose:
            import traceback

            traceback.print_exc()
        raise typer.Exit(1)


@app.command("sync")
def sync(
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the synced graph to this YAML file"),
    ] = None,
    account_id: AccountIdOpt = None,
    client_id: ClientIdOpt = None,
    client_secret: ClientSecretOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Sync all resource types and print a summary.

    Example:
        baton-zoom sync --output zoom.yaml
    """
    settings = _build_settings(account_id, client_id, client_secret, verbose)

    async def _async_sync():
        async with open_connector(settings) as connector:
            return await run_sync(connector)

    typer.echo(f"Syncing from Zoom: {settings.base_url}")
    result = _run(_async_sync(), verbose)

    if output:
        write_snapshot(output, result)
        typer.echo(f"Snapshot written to: {output}")

    typer.echo("\n" + result.summary())


@app.command("validate")
def validate(
    account_id: AccountIdOpt = None,
    client_id: ClientIdOpt = None,
    client_secret: ClientSecretOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Check the credentials can be used by the connector."""
    settings = _build_settings(account_id, client_id, client_secret, verbose)

    async def _async_validate():
        async with open_connector(settings) as connector:
            await connector.validate()

    _run(_async_validate(), verbose)
    typer.secho("✓ Credentials are valid", fg=typer.colors.GREEN)


def _user_syncer(connector: ZoomConnector) -> UserSyncer:
    syncer = connector.syncer(connector.catalog.user.id)
    if not isinstance(syncer, UserSyncer):
        raise ZoomError(f"{connector.catalog.user.id} does not support account provisioning")
    return syncer


@app.command("create-account")
def create_account(
    email: Annotated[str, typer.Option("--email", help="Login e-mail of the new user")] = "",
    first_name: Annotated[str, typer.Option("--first-name")] = "",
    last_name: Annotated[str, typer.Option("--last-name")] = "",
    display_name: Annotated[str, typer.Option("--display-name")] = "",
    account_id: AccountIdOpt = None,
    client_id: ClientIdOpt = None,
    client_secret: ClientSecretOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Create a Zoom user; Zoom e-mails them an activation link."""
    settings = _build_settings(account_id, client_id, client_secret, verbose)
    profile = {
        "email": email,
        "first_name": first_name,
        "last_name": last_name,
        "display_name": display_name,
    }

    async def _async_create() -> Resource:
        async with open_connector(settings) as connector:
            return await _user_syncer(connector).create_account(profile)

    resource = _run(_async_create(), verbose)
    typer.secho(f"✓ Created user: {resource.display_name} ({resource.id.resource})", fg=typer.colors.GREEN)


@app.command("delete-account")
def delete_account(
    user_id: Annotated[str, typer.Argument(help="Zoom user ID")],
    account_id: AccountIdOpt = None,
    client_id: ClientIdOpt = None,
    client_secret: ClientSecretOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Delete a Zoom user and confirm it is gone."""
    settings = _build_settings(account_id, client_id, client_secret, verbose)

    async def _async_delete() -> None:
        async with open_connector(settings) as connector:
            await _user_syncer(connector).delete(ResourceId(resource_type=connector.catalog.user.id, resource=user_id))

    _run(_async_delete(), verbose)
    typer.secho(f"✓ Deleted user: {user_id}", fg=typer.colors.GREEN)


def _membership(
    connector: ZoomConnector,
    resource_type: str,
    resource_id: str,
    entitlement: str,
    user_id: str,
) -> tuple[Any, Entitlement, Resource]:
    syncer = connector.syncer(resource_type)
    if not isinstance(syncer, (GroupSyncer, RoleSyncer)):
        raise ZoomError(f"{resource_type} does not support provisioning")

    target = Resource(
        id=ResourceId(resource_type=resource_type, resource=resource_id),
        display_name=resource_id,
    )
    principal = Resource(id=ResourceId(resource_type=connector.catalog.user.id, resource=user_id))
    return syncer, Entitlement(resource=target, slug=entitlement), principal


ResourceTypeOpt = Annotated[str, typer.Option("--resource-type", help="group or role")]
ResourceIdOpt = Annotated[str, typer.Option("--resource-id", help="Group or role ID")]
EntitlementOpt = Annotated[str, typer.Option("--entitlement", help="member or admin")]
UserIdOpt = Annotated[str, typer.Option("--user-id", help="Zoom user ID")]


@app.command("grant")
def grant(
    resource_type: ResourceTypeOpt = "group",
    resource_id: ResourceIdOpt = "",
    entitlement: EntitlementOpt = "member",
    user_id: UserIdOpt = "",
    account_id: AccountIdOpt = None,
    client_id: ClientIdOpt = None,
    client_secret: ClientSecretOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Grant a group or role entitlement to a user."""
    settings = _build_settings(account_id, client_id, client_secret, verbose)

    async def _async_grant() -> None:
        async with open_connector(settings) as connector:
            syncer, ent, principal = _membership(connector, resource_type, resource_id, entitlement, user_id)
            await syncer.grant(principal, ent)

    _run(_async_grant(), verbose)
    typer.secho(f"✓ Granted {resource_type}:{resource_id}:{entitlement} to {user_id}", fg=typer.colors.GREEN)


@app.command("revoke")
def revoke(
    resource_type: ResourceTypeOpt = "group",
    resource_id: ResourceIdOpt = "",
    entitlement: EntitlementOpt = "member",
    user_id: UserIdOpt = "",
    account_id: AccountIdOpt = None,
    client_id: ClientIdOpt = None,
    client_secret: ClientSecretOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Revoke a group or role entitlement from a user."""
    settings = _build_settings(account_id, client_id, client_secret, verbose)

    async def _async_revoke() -> None:
        async with open_connector(settings) as connector:
            syncer, ent, principal = _membership(connector, resource_type, resource_id, entitlement, user_id)
            await syncer.revoke(Grant(entitlement=ent, principal=principal.id))

    _run(_async_revoke(), verbose)
    typer.secho(f"✓ Revoked {resource_type}:{resource_id}:{entitlement} from {user_id}", fg=typer.colors.GREEN)
