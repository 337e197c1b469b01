from __future__ import annotations

import requests

RESEND_API_URL = "https://api.resend.com/emails"


class ResendNotifier:
    def __init__(self, api_key: str, sender: str, *, timeout: float = 10.0) -> None:
        self.api_key = api_key
        self.sender = sender
        self.timeout = timeout

    def send(self, to: str, subject: str, html: str) -> str:
        """
        Send one email through Resend and return the message id.

        Raises RuntimeError on a non-2xx answer; transport errors propagate as-is.
        """
        resp = requests.post(
            RESEND_API_URL,
            json={
                "from": self.sender,
                "to": [to],
                "subject": subject,
                "html": html,
            },
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout=self.timeout,
        )
        if resp.status_code >= 400:
            raise RuntimeError(f"Resend send failed: {resp.status_code} {resp.text}")

        try:
            return str(resp.json().get("id", ""))
        except ValueError:
            return ""
