"""Typed adapter for the Cloud Firestore REST API.

Wraps ``projects.databases.documents.commit`` and converts plain Python
values into Firestore's typed ``Value`` JSON.
"""

from __future__ import annotations

import random
import string
from typing import Any

from slack_fetcher.constants import (
    FIRESTORE_AUTO_ID_LENGTH,
    FIRESTORE_DEFAULT_DATABASE,
)

_AUTO_ID_ALPHABET = string.ascii_letters + string.digits
_random = random.SystemRandom()


def auto_id() -> str:
    """Return a 20-character document id, in the style of Firestore's client libraries."""
    return "".join(
        _random.choice(_AUTO_ID_ALPHABET) for _ in range(FIRESTORE_AUTO_ID_LENGTH)
    )


def encode_value(value: Any) -> dict[str, Any]:
    """Convert a JSON-compatible Python value into a Firestore ``Value``."""
    if value is None:
        return {"nullValue": None}
    # bool before int: bool is a subclass of int
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        # int64 travels as a decimal string
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, dict):
        return {"mapValue": {"fields": encode_fields(value)}}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(v) for v in value]}}
    raise TypeError(f"Cannot encode {type(value).__name__} as a Firestore value")


def encode_fields(data: dict[str, Any]) -> dict[str, Any]:
    """Encode a mapping as the ``fields`` of a Firestore document or map."""
    return {str(key): encode_value(value) for key, value in data.items()}


class FirestoreAdapter:
    """Thin typed wrapper around the Firestore API service."""

    def __init__(
        self,
        service: Any,
        project_id: str,
        database: str = FIRESTORE_DEFAULT_DATABASE,
    ) -> None:
        self._svc = service
        self.project_id = project_id
        self.database = database

    @property
    def database_path(self) -> str:
        return f"projects/{self.project_id}/databases/{self.database}"

    def document_path(self, *segments: str) -> str:
        """Full resource name of a document given its collection/document segments."""
        return "/".join([self.database_path, "documents", *segments])

    def create_write(self, path: str, data: dict[str, Any]) -> dict[str, Any]:
        """Build a write that creates the document at ``path``.

        The ``exists: false`` precondition makes the commit fail instead of
        overwriting when the id is already taken.
        """
        return {
            "update": {"name": path, "fields": encode_fields(data)},
            "currentDocument": {"exists": False},
        }

    def commit(self, writes: list[dict[str, Any]]) -> dict[str, Any]:
        """Apply ``writes`` atomically in one commit.

        Returns:
            The commit response (``writeResults`` and ``commitTime``).
        """
        return (
            self._svc.projects()
            .databases()
            .documents()
            .commit(database=self.database_path, body={"writes": writes})
            .execute()
        )
