"""Move prerequisites out of the legacy ``prerequisites`` collection."""
from __future__ import annotations

import logging
from typing import Callable, Optional

from services.common.config import LEGACY_PREREQS_COLLECTION, SOLUTION_PREREQS_COLLECTION
from services.common.store import DocumentStore, Result

logger = logging.getLogger(__name__)


def migrate_legacy_prerequisites(
    store: DocumentStore,
    delete_legacy: bool = False,
    on_copy: Optional[Callable[[dict], None]] = None,
) -> Result:
    """Copy every legacy prerequisite into ``solutionPrerequisites``.

    ``createdAt`` is kept when the legacy document has one; ``updatedAt`` is
    refreshed. Legacy documents are only deleted when ``delete_legacy`` is
    set and every copy succeeded. ``item`` carries the counts.
    """
    legacy = store.list(LEGACY_PREREQS_COLLECTION)
    if not legacy.success:
        return legacy

    counts = {"legacy": len(legacy.items), "migrated": 0, "deleted": 0, "current": 0}
    if not legacy.items:
        current = store.list(SOLUTION_PREREQS_COLLECTION)
        if not current.success:
            return current
        counts["current"] = len(current.items)
        return Result.ok(item=counts, message=f'No prerequisites found in "{LEGACY_PREREQS_COLLECTION}" collection')

    copied = []
    for record in legacy.items:
        fields = {k: v for k, v in record.items() if k not in ("id", "createdAt", "updatedAt")}
        res = store.add(SOLUTION_PREREQS_COLLECTION, fields, created_at=record.get("createdAt"))
        if not res.success:
            logger.error("Migration stopped at legacy prerequisite %s: %s", record["id"], res.error)
            return Result.fail(res.error or "Failed to copy prerequisite", item=counts)
        if on_copy:
            on_copy(record)
        copied.append((LEGACY_PREREQS_COLLECTION, record["id"]))
        counts["migrated"] += 1

    if delete_legacy:
        res = store.delete_many(copied)
        if not res.success:
            return Result.fail(res.error or "Failed to delete legacy prerequisites", item=counts)
        counts["deleted"] = len(copied)

    current = store.list(SOLUTION_PREREQS_COLLECTION)
    counts["current"] = len(current.items) if current.success else 0
    logger.info("Migrated legacy prerequisites: %s", counts)
    return Result.ok(item=counts, message=f"Successfully migrated {counts['migrated']} prerequisites")
