# Overview: Client for the optional external identity provider (password grant over HTTP).

from __future__ import annotations

from dataclasses import dataclass

import httpx
from flask import current_app


class IdentityProviderError(Exception):
    """Sign-in rejected by the provider or the provider could not be reached."""
    pass


@dataclass(frozen=True)
class ExternalIdentity:
    subject: str
    email: str | None
    name: str | None


class IdentityProvider:
    """
    Password sign-in against a hosted auth service.

    POST {base_url}/auth/v1/token?grant_type=password with the project's
    public key; the response carries the authenticated user.
    """

    def __init__(self, base_url: str, api_key: str, *, timeout: float = 10.0, transport: httpx.BaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
            headers={"apikey": self.api_key, "Authorization": f"Bearer {self.api_key}"},
        )

    def sign_in(self, email: str, password: str) -> ExternalIdentity:
        try:
            with self._client() as client:
                response = client.post(
                    "/auth/v1/token",
                    params={"grant_type": "password"},
                    json={"email": email, "password": password},
                )
        except httpx.HTTPError as exc:
            current_app.logger.warning("Identity provider unreachable: %s", exc)
            raise IdentityProviderError("Identity provider unavailable") from exc

        if response.status_code != 200:
            raise IdentityProviderError(f"Sign-in rejected ({response.status_code})")

        try:
            payload = response.json()
        except ValueError as exc:
            raise IdentityProviderError("Malformed identity provider response") from exc

        user = payload.get("user") or {}
        subject = user.get("id")
        if not subject:
            raise IdentityProviderError("Identity provider response missing user id")

        metadata = user.get("user_metadata") or {}
        return ExternalIdentity(
            subject=str(subject),
            email=user.get("email"),
            name=metadata.get("name") or metadata.get("full_name"),
        )


def get_identity_provider() -> IdentityProvider | None:
    """Return the provider bound to the current app, or None when not configured."""
    return current_app.extensions.get("identity_provider")


def init_identity_provider(app) -> None:
    url = app.config.get("IDENTITY_PROVIDER_URL")
    key = app.config.get("IDENTITY_PROVIDER_ANON_KEY")
    if url and key:
        app.extensions["identity_provider"] = IdentityProvider(
            url, key, timeout=app.config.get("HTTP_TIMEOUT_SECONDS", 10.0)
        )
    else:
        app.extensions["identity_provider"] = None
