# src/delivery/email.py
from __future__ import annotations

import base64
import logging
from typing import Any, Dict, List, Optional

import requests

from src.service.errors import EmailDeliveryError

log = logging.getLogger(__name__)


def html_attachment(filename: str, html: str) -> Dict[str, str]:
    """Resend attachment entry with the document base64-encoded."""
    return {
        "filename": filename,
        "content": base64.b64encode(html.encode("utf-8")).decode("ascii"),
        "type": "text/html",
    }


def _json_object(r: requests.Response) -> Dict[str, Any]:
    """Response body when it is a JSON object, else an empty dict."""
    try:
        body = r.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


class ResendClient:
    """
    Minimal client for the Resend transactional-email API.

    One POST per message, bearer-token auth, no retries. Any non-2xx
    response or transport error becomes EmailDeliveryError with the
    provider's message when it sent one.
    """

    def __init__(self, api_key: str, sender: str,
                 api_url: str = "https://api.resend.com/emails", timeout: float = 20.0):
        self.api_key = api_key
        self.sender = sender
        self.api_url = api_url
        self.timeout = timeout

    def _payload(self, to: List[str], subject: str, html: str,
                 attachments: Optional[List[Dict[str, str]]]) -> Dict[str, Any]:
        body: Dict[str, Any] = {"from": self.sender, "to": list(to), "subject": subject, "html": html}
        if attachments:
            body["attachments"] = list(attachments)
        return body

    def send(self, to: List[str], subject: str, html: str,
             attachments: Optional[List[Dict[str, str]]] = None) -> Optional[str]:
        if not to:
            raise EmailDeliveryError("No recipients given")
        try:
            r = requests.post(
                self.api_url,
                json=self._payload(to, subject, html, attachments),
                headers={"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise EmailDeliveryError(f"Resend request failed: {e}") from e

        if not 200 <= r.status_code < 300:
            body = _json_object(r)
            detail = body.get("message") or r.text[:200] or r.status_code
            log.error("Resend rejected message (status=%s): %s", r.status_code, detail)
            raise EmailDeliveryError(f"Resend API error: {detail}", status_code=r.status_code)

        message_id = _json_object(r).get("id")
        log.info("Email sent via Resend id=%s recipients=%s", message_id, ", ".join(to))
        return message_id
