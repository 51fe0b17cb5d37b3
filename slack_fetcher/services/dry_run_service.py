"""No-op Google API services for dry-run mode.

Mirror the method-chain interface of the real Cloud Storage and Firestore
services (e.g. ``storage.objects().insert(...).execute()``) but log instead
of making real API calls. Return values match the shapes that callers
actually read from real responses.
"""

from __future__ import annotations

import logging
from typing import Any

from slack_fetcher.utils.logging import log_with_context

# ---------------------------------------------------------------------------
# Leaf request object; every chain terminates with .execute()
# ---------------------------------------------------------------------------


class DryRunRequest:
    """Mock API request that returns preset data on ``execute()``."""

    def __init__(self, data: dict[str, Any]) -> None:
        self._data = data

    def execute(self) -> dict[str, Any]:
        return self._data


# ---------------------------------------------------------------------------
# Cloud Storage
# ---------------------------------------------------------------------------


class DryRunObjects:
    """Stub for ``objects()``."""

    def insert(self, **kwargs: Any) -> DryRunRequest:
        bucket = kwargs.get("bucket", "")
        name = kwargs.get("name", "")
        log_with_context(
            logging.INFO, f"[DRY RUN] Would upload gs://{bucket}/{name}"
        )
        return DryRunRequest({"bucket": bucket, "name": name, "size": "0"})


class DryRunStorageService:
    """Drop-in replacement for the Cloud Storage API service."""

    def __init__(self) -> None:
        self._objects = DryRunObjects()

    def objects(self) -> DryRunObjects:
        return self._objects


# ---------------------------------------------------------------------------
# Firestore
# ---------------------------------------------------------------------------


class DryRunDocuments:
    """Stub for ``projects().databases().documents()``."""

    def __init__(self) -> None:
        self.commit_count = 0

    def commit(self, **kwargs: Any) -> DryRunRequest:
        writes = kwargs.get("body", {}).get("writes", [])
        self.commit_count += 1
        log_with_context(
            logging.INFO,
            f"[DRY RUN] Would commit {len(writes)} document writes to {kwargs.get('database', '')}",
        )
        return DryRunRequest(
            {
                "writeResults": [{} for _ in writes],
                "commitTime": "1970-01-01T00:00:00Z",
            }
        )


class DryRunDatabases:
    """Stub for ``projects().databases()``."""

    def __init__(self) -> None:
        self._documents = DryRunDocuments()

    def documents(self) -> DryRunDocuments:
        return self._documents


class DryRunProjects:
    """Stub for ``projects()``."""

    def __init__(self) -> None:
        self._databases = DryRunDatabases()

    def databases(self) -> DryRunDatabases:
        return self._databases


class DryRunFirestoreService:
    """Drop-in replacement for the Firestore API service."""

    def __init__(self) -> None:
        self._projects = DryRunProjects()

    def projects(self) -> DryRunProjects:
        return self._projects
