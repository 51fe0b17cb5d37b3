"""Typed adapter for the Google Cloud Storage JSON API.

Replaces raw ``storage.objects().insert(...).execute()`` chains with explicit
method calls that are easier to mock, test, and type-check.
"""

from __future__ import annotations

from typing import Any

from googleapiclient.http import MediaFileUpload

from slack_fetcher.constants import JSON_MIME_TYPE


class StorageAdapter:
    """Thin typed wrapper around the Cloud Storage API service."""

    def __init__(self, service: Any) -> None:
        self._svc = service

    def upload_file(
        self,
        bucket: str,
        destination: str,
        local_path: str,
        mime_type: str = JSON_MIME_TYPE,
    ) -> dict[str, Any]:
        """Upload a local file as ``gs://bucket/destination``.

        An existing object with the same name is replaced.

        Args:
            bucket: Bucket name.
            destination: Object name inside the bucket.
            local_path: File to upload.
            mime_type: Content type recorded on the object.

        Returns:
            The object resource returned by the API.
        """
        media = MediaFileUpload(local_path, mimetype=mime_type, resumable=False)
        return (
            self._svc.objects()
            .insert(bucket=bucket, name=destination, media_body=media)
            .execute()
        )
