from __future__ import annotations

import json
from typing import Union

from pydantic import ValidationError

from clickup_client.core.client import ClickUpClient
from clickup_client.core.errors import (
    ClickUpModelValidationError,
    ClickUpParseError,
    ClickUpValidationError,
)
from clickup_client.models import (
    CreateWebhookRequest,
    CreateWebhookResponse,
    UpdateWebhookRequest,
    WebhookEventMessage,
    WebhooksQueryResponse,
)


async def create_webhook(
    client: ClickUpClient, workspace_id: str, webhook: CreateWebhookRequest
) -> CreateWebhookResponse:
    """
    Register a webhook for a workspace.

    Scope it to a space, folder, list or task by setting the matching id on
    ``webhook``. Keep ``response.webhook.secret``: deliveries are signed with
    it (see verify_webhook_signature).
    """
    if not workspace_id:
        raise ClickUpValidationError(
            "must provide workspace id to create webhook."
        )
    return await client.post(
        f"/team/{workspace_id}/webhook",
        json=webhook,
        model=CreateWebhookResponse,
        tool="webhooks",
    )


async def update_webhook(
    client: ClickUpClient, webhook: UpdateWebhookRequest
) -> CreateWebhookResponse:
    if not webhook.id:
        raise ClickUpValidationError("must provide a webhook id.")
    return await client.put(
        f"/webhook/{webhook.id}",
        json=webhook,
        model=CreateWebhookResponse,
        tool="webhooks",
    )


async def delete_webhook(client: ClickUpClient, webhook_id: str) -> None:
    if not webhook_id:
        raise ClickUpValidationError("must provide a webhook id to delete.")
    await client.delete(f"/webhook/{webhook_id}", tool="webhooks")


async def webhooks_for(
    client: ClickUpClient, workspace_id: str
) -> WebhooksQueryResponse:
    """All webhooks registered for a workspace."""
    if not workspace_id:
        raise ClickUpValidationError(
            "must provide a workspace id to get webhooks."
        )
    return await client.get(
        f"/team/{workspace_id}/webhook",
        model=WebhooksQueryResponse,
        tool="webhooks",
    )


def parse_webhook_event(body: Union[bytes, str]) -> WebhookEventMessage:
    """Decode a (verified) webhook delivery body."""
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise ClickUpParseError(f"webhook body is not valid JSON: {exc}") from exc
    try:
        return WebhookEventMessage.model_validate(payload)
    except ValidationError as exc:
        raise ClickUpModelValidationError(
            f"webhook body did not match WebhookEventMessage: {exc}"
        ) from exc


__all__ = [
    "create_webhook",
    "update_webhook",
    "delete_webhook",
    "webhooks_for",
    "parse_webhook_event",
]
