"""
Resource wrappers for the ClickUp API.

Each function takes a ClickUpClient as its first argument and maps its
parameters onto one or more client.call() requests.
"""

from .tasks import (
    TaskQueryOptions,
    bulk_task_time_in_status,
    bulk_task_time_in_status_chunked,
    iter_tasks_for_list,
    task_by_id,
    task_time_in_status,
    tasks_for_list,
)
from .webhooks import (
    create_webhook,
    delete_webhook,
    parse_webhook_event,
    update_webhook,
    webhooks_for,
)

__all__ = [
    "TaskQueryOptions",
    "task_by_id",
    "tasks_for_list",
    "iter_tasks_for_list",
    "task_time_in_status",
    "bulk_task_time_in_status",
    "bulk_task_time_in_status_chunked",
    "create_webhook",
    "update_webhook",
    "delete_webhook",
    "webhooks_for",
    "parse_webhook_event",
]
