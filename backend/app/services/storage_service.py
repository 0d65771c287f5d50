# Overview: Object storage backends for uploaded employee documents.

"""
Storage backends.

HttpObjectStorage talks to a hosted object store over HTTP:
- PUT object:  POST {base_url}/storage/v1/object/{bucket}/{key}  (x-upsert)
- public URL:  {base_url}/storage/v1/object/public/{bucket}/{key}

LocalStorage writes under the Flask instance folder and serves files back
from /uploads/<key>; it is used when no object store is configured.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import httpx
from flask import current_app


class StorageError(Exception):
    """Raised when an object cannot be stored."""
    pass


@dataclass(frozen=True)
class StoredObject:
    key: str
    url: str


class HttpObjectStorage:
    def __init__(self, base_url: str, api_key: str, bucket: str, *, timeout: float = 10.0, transport: httpx.BaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.bucket = bucket
        self.timeout = timeout
        self.transport = transport

    def public_url(self, key: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{key}"

    def put(self, key: str, data: bytes, content_type: str | None = None) -> StoredObject:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "apikey": self.api_key,
            "x-upsert": "true",
            "Content-Type": content_type or "application/octet-stream",
        }
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(
                    f"{self.base_url}/storage/v1/object/{self.bucket}/{key}",
                    content=data,
                    headers=headers,
                )
        except httpx.HTTPError as exc:
            current_app.logger.warning("Object store unreachable: %s", exc)
            raise StorageError("Failed to upload file: object store unavailable") from exc

        if response.status_code >= 400:
            current_app.logger.warning("Object store rejected upload %s: %s", key, response.text[:200])
            raise StorageError(f"Failed to upload file: {response.status_code}")

        return StoredObject(key=key, url=self.public_url(key))


class LocalStorage:
    def __init__(self, root: str | os.PathLike, url_prefix: str = "/uploads"):
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")

    def path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root.resolve() not in path.parents:
            raise StorageError("Invalid storage key")
        return path

    def put(self, key: str, data: bytes, content_type: str | None = None) -> StoredObject:
        path = self.path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            current_app.logger.warning("Local storage write failed for %s: %s", key, exc)
            raise StorageError("Failed to upload file") from exc
        return StoredObject(key=key, url=f"{self.url_prefix}/{key}")


def init_storage(app) -> None:
    url = app.config.get("OBJECT_STORE_URL")
    key = app.config.get("OBJECT_STORE_KEY")
    if url and key:
        app.extensions["object_storage"] = HttpObjectStorage(
            url,
            key,
            app.config.get("OBJECT_STORE_BUCKET", "employee-documents"),
            timeout=app.config.get("HTTP_TIMEOUT_SECONDS", 10.0),
        )
        return

    root = app.config.get("UPLOAD_FOLDER") or os.path.join(app.instance_path, "uploads")
    app.config["UPLOAD_FOLDER"] = root
    app.extensions["object_storage"] = LocalStorage(root)


def get_storage():
    return current_app.extensions["object_storage"]
