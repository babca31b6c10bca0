"""Full sync of every resource type.

Walks each syncer the way the access-governance platform does: list all
resources page by page, then fetch entitlements and all grant pages for each
resource. Calls are made one at a time; the first error aborts the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog
import yaml

from baton.zoom.connector.base import ResourceSyncer
from baton.zoom.connector.connector import ZoomConnector
from baton.zoom.models import Entitlement, Grant, Page, RateLimitDescription, Resource

logger = structlog.get_logger()


@dataclass
class ResourceTypeResult:
    """Everything synced for one resource type."""

    resource_type: str
    traits: tuple[str, ...] = ()
    resources: list[Resource] = field(default_factory=list)
    entitlements: list[Entitlement] = field(default_factory=list)
    grants: list[Grant] = field(default_factory=list)
    pages: int = 0


@dataclass
class SyncResult:
    """Result of a full sync."""

    results: dict[str, ResourceTypeResult] = field(default_factory=dict)
    rate_limit: RateLimitDescription | None = None
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: datetime | None = None

    def summary(self) -> str:
        """Get a human-readable summary of the result."""
        lines = []

        for type_id, result in self.results.items():
            lines.append(
                f"{type_id}: {len(result.resources)} resources, "
                f"{len(result.entitlements)} entitlements, "
                f"{len(result.grants)} grants ({result.pages} pages)"
            )

        if self.rate_limit is not None:
            lines.append(
                f"Rate limit: {self.rate_limit.remaining}/{self.rate_limit.limit} remaining"
            )

        if not lines:
            lines.append("Nothing synced")

        return "\n".join(lines)


def _observe(result: SyncResult, page: Page[Any]) -> None:
    if page.annotations:
        result.rate_limit = page.annotations[-1]


async def _sync_type(syncer: ResourceSyncer, result: SyncResult) -> ResourceTypeResult:
    type_result = ResourceTypeResult(
        resource_type=syncer.resource_type.id,
        traits=tuple(trait.value for trait in syncer.resource_type.traits),
    )

    token = ""
    while True:
        page = await syncer.list(None, token)
        _observe(result, page)
        type_result.pages += 1
        type_result.resources.extend(page.items)
        if not page.has_more:
            break
        token = page.next_token

    for resource in type_result.resources:
        entitlements = await syncer.entitlements(resource)
        type_result.entitlements.extend(entitlements.items)

        token = ""
        while True:
            page = await syncer.grants(resource, token)
            _observe(result, page)
            type_result.pages += 1
            type_result.grants.extend(page.items)
            if not page.has_more:
                break
            token = page.next_token

    logger.info(
        "Synced resource type",
        resource_type=type_result.resource_type,
        resources=len(type_result.resources),
        grants=len(type_result.grants),
    )
    return type_result


async def run_sync(connector: ZoomConnector) -> SyncResult:
    """Sync every resource type the connector exposes."""
    result = SyncResult()

    for syncer in connector.resource_syncers():
        result.results[syncer.resource_type.id] = await _sync_type(syncer, result)

    result.finished_at = datetime.now(timezone.utc)
    return result


def write_snapshot(path: Path, result: SyncResult) -> None:
    """Write the synced graph to a YAML file."""
    data: dict[str, Any] = {
        "started_at": result.started_at.isoformat(),
        "finished_at": result.finished_at.isoformat() if result.finished_at else None,
        "resource_types": {},
    }

    for type_id, type_result in result.results.items():
        data["resource_types"][type_id] = {
            "traits": list(type_result.traits),
            "resources": [r.model_dump(mode="json", exclude_none=True) for r in type_result.resources],
            "entitlements": [
                {"id": e.id, "slug": e.slug, "purpose": e.purpose.value, "grantable_to": list(e.grantable_to)}
                for e in type_result.entitlements
            ],
            "grants": [
                {"id": g.id, "entitlement": g.entitlement.id, "principal": str(g.principal)}
                for g in type_result.grants
            ],
        }

    path.write_text(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
    logger.info("Wrote sync snapshot", path=str(path))
