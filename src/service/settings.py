# src/service/settings.py
"""
Service configuration.

Non-secret values come from params.yaml (path from PARAMS_PATH); the
Resend API key comes from RESEND_API_KEY. Both are read once, at startup,
by `load_settings()`. `require_api_key()` is the only place the key is
checked; it raises ConfigError when the key is absent or malformed.
"""
from __future__ import annotations
import os
import logging
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .errors import ConfigError

log = logging.getLogger(__name__)

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))
DEFAULT_PARAMS_PATH = os.path.join(PROJECT_ROOT, "params.yaml")


class EmailSettings(BaseModel):
    api_url: str = "https://api.resend.com/emails"
    sender: str = "onboarding@resend.dev"
    internal_recipients: List[str] = Field(default_factory=list)
    api_key_prefix: str = "re_"
    api_key: Optional[str] = Field(default=None, repr=False)

    @field_validator("api_key")
    @classmethod
    def strip_key(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if isinstance(v, str) else v


class CrmSettings(BaseModel):
    base_url: str = "https://api.hsforms.com/submissions/v3/integration/submit"
    portal_id: str = ""
    form_guid: str = ""
    enabled: bool = True

    @property
    def submit_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.portal_id}/{self.form_guid}"


class ReportSettings(BaseModel):
    target_utilization: float = 85.0
    brand: str = "Facile"
    logo_url: str = ""


class Settings(BaseModel):
    email: EmailSettings = Field(default_factory=EmailSettings)
    crm: CrmSettings = Field(default_factory=CrmSettings)
    report: ReportSettings = Field(default_factory=ReportSettings)
    timeout_seconds: float = Field(20.0, gt=0)
    min_token_length: int = Field(10, ge=1)


def load_params(path: str = DEFAULT_PARAMS_PATH) -> dict:
    if not os.path.exists(path):
        log.warning("params file not found at %s; using built-in defaults", path)
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_settings(params_path: Optional[str] = None, env: Optional[dict] = None) -> Settings:
    env = os.environ if env is None else env
    P = load_params(params_path or env.get("PARAMS_PATH") or DEFAULT_PARAMS_PATH)
    email = dict(P.get("email", {}) or {})
    email["api_key"] = env.get("RESEND_API_KEY")
    return Settings(
        email=EmailSettings(**email),
        crm=CrmSettings(**(P.get("crm", {}) or {})),
        report=ReportSettings(**(P.get("report", {}) or {})),
        timeout_seconds=float((P.get("http", {}) or {}).get("timeout_seconds", 20)),
        min_token_length=int((P.get("download", {}) or {}).get("min_token_length", 10)),
    )


def require_api_key(settings: Settings) -> str:
    key = settings.email.api_key
    if not key:
        raise ConfigError("RESEND_API_KEY environment variable is empty or not set")
    prefix = settings.email.api_key_prefix
    if prefix and not key.startswith(prefix):
        raise ConfigError(f"Invalid Resend API key format. API key should start with '{prefix}'")
    return key
