from __future__ import annotations

import os
from typing import Tuple

from dotenv import load_dotenv

from .client import BASE_URL, ClickUpClient

API_TOKEN_ENV = "CLICKUP_API_TOKEN"
BASE_URL_ENV = "CLICKUP_BASE_URL"
WEBHOOK_SECRET_ENV = "CLICKUP_WEBHOOK_SECRET"


def load_env_config(*, use_dotenv: bool = True) -> Tuple[str, str]:
    """Load the API token and base URL from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    api_token = os.getenv(API_TOKEN_ENV, "").strip()
    base_url = os.getenv(BASE_URL_ENV, "").strip() or BASE_URL
    return api_token, base_url


def load_webhook_secret(*, use_dotenv: bool = True) -> str:
    if use_dotenv:
        load_dotenv()
    return os.getenv(WEBHOOK_SECRET_ENV, "").strip()


def create_client_from_env(**kwargs) -> ClickUpClient:
    """Create a ClickUpClient authenticated with CLICKUP_API_TOKEN."""
    api_token, base_url = load_env_config()
    if not api_token:
        raise ValueError(f"Missing {API_TOKEN_ENV} in environment.")
    kwargs.setdefault("base_url", base_url)
    return ClickUpClient(api_token=api_token, **kwargs)


__all__ = [
    "load_env_config",
    "load_webhook_secret",
    "create_client_from_env",
    "API_TOKEN_ENV",
    "BASE_URL_ENV",
    "WEBHOOK_SECRET_ENV",
]
