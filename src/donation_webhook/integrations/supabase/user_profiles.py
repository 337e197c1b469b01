from __future__ import annotations

import logging
from datetime import datetime

import requests

from donation_webhook.core.errors import StoreUpdateFailed
from donation_webhook.core.stripe_events import PAYING_STATUS_DONATED

logger = logging.getLogger(__name__)


def to_iso_utc(dt: datetime) -> str:
    # Same shape as JS Date.toISOString(): 2024-05-01T12:00:00.000Z
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SupabaseUserStore:
    """
    user_profiles over Supabase's PostgREST endpoint.

    One PATCH per call, filtered by email. A filter matching no rows is still
    a 2xx from PostgREST and is not treated as an error.
    """

    def __init__(
        self,
        url: str,
        service_role_key: str,
        *,
        table: str = "user_profiles",
        timeout: float = 10.0,
    ) -> None:
        self.endpoint = f"{url.rstrip('/')}/rest/v1/{table}"
        self.timeout = timeout
        self._headers = {
            "apikey": service_role_key,
            "Authorization": f"Bearer {service_role_key}",
            "Content-Type": "application/json",
            "Prefer": "return=minimal",
        }

    def mark_donated(self, email: str, donated_at: datetime) -> None:
        body = {
            "paying_status": PAYING_STATUS_DONATED,
            "donation_date": to_iso_utc(donated_at),
        }

        try:
            resp = requests.patch(
                self.endpoint,
                params={"email": f"eq.{email}"},
                json=body,
                headers=self._headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise StoreUpdateFailed(email, str(e)) from e

        if resp.status_code >= 400:
            raise StoreUpdateFailed(email, f"{resp.status_code} {resp.text}")
