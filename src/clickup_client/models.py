from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _Payload(BaseModel):
    """
    Base for response payloads.
    The API adds fields freely and is loose about nulls, so unknown keys are
    ignored and most fields default.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# --- Users / statuses ---


class TeamUser(_Payload):
    id: int = 0
    username: Optional[str] = None
    email: Optional[str] = None
    color: Optional[str] = None
    initials: Optional[str] = None
    profile_picture: Optional[str] = Field(default=None, alias="profilePicture")


class TaskStatus(_Payload):
    id: Optional[str] = None
    status: str = ""
    color: Optional[str] = None
    orderindex: int = 0
    type: Optional[str] = None


# --- Time in status ---


class TotalTime(_Payload):
    by_minute: int = 0
    # unix epoch milliseconds, sent as a string
    since: str = ""


class CurrentStatus(_Payload):
    status: str = ""
    color: Optional[str] = None
    total_time: TotalTime = Field(default_factory=TotalTime)


class StatusHistoryEntry(_Payload):
    status: str = ""
    color: Optional[str] = None
    type: Optional[str] = None
    total_time: TotalTime = Field(default_factory=TotalTime)
    orderindex: int = 0


class TaskTimeInStatus(_Payload):
    current_status: CurrentStatus = Field(default_factory=CurrentStatus)
    status_history: List[StatusHistoryEntry] = Field(default_factory=list)


# --- Tasks ---


class Task(_Payload):
    id: str
    custom_id: Optional[str] = None
    name: str = ""
    text_content: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    orderindex: Optional[str] = None
    date_created: Optional[str] = None
    date_updated: Optional[str] = None
    date_closed: Optional[str] = None
    archived: bool = False
    creator: Optional[TeamUser] = None
    assignees: List[TeamUser] = Field(default_factory=list)
    watchers: List[TeamUser] = Field(default_factory=list)
    parent: Optional[str] = None
    priority: Optional[dict] = None
    due_date: Optional[str] = None
    start_date: Optional[str] = None
    url: Optional[str] = None


class GetTasksResponse(_Payload):
    tasks: List[Task] = Field(default_factory=list)


class OrderBy(str, Enum):
    ID = "id"
    CREATED = "created"
    UPDATED = "updated"
    DUE_DATE = "due_date"


# --- Webhooks ---


class WebhookEvent(str, Enum):
    ALL = "*"
    TASK_CREATED = "taskCreated"
    TASK_UPDATED = "taskUpdated"
    TASK_DELETED = "taskDeleted"
    TASK_PRIORITY_UPDATED = "taskPriorityUpdated"
    TASK_STATUS_UPDATED = "taskStatusUpdated"
    TASK_ASSIGNEE_UPDATED = "taskAssigneeUpdated"
    TASK_DUE_DATE_UPDATED = "taskDueDateUpdated"
    TASK_TAG_UPDATED = "taskTagUpdated"
    TASK_MOVED = "taskMoved"
    TASK_COMMENT_POSTED = "taskCommentPosted"
    TASK_COMMENT_UPDATED = "taskCommentUpdated"
    TASK_TIME_ESTIMATE_UPDATED = "taskTimeEstimateUpdated"
    TASK_TIME_TRACKED_UPDATED = "taskTimeTrackedUpdated"
    LIST_CREATED = "listCreated"
    LIST_UPDATED = "listUpdated"
    LIST_DELETED = "listDeleted"
    FOLDER_CREATED = "folderCreated"
    FOLDER_UPDATED = "folderUpdated"
    FOLDER_DELETED = "folderDeleted"
    SPACE_CREATED = "spaceCreated"
    SPACE_UPDATED = "spaceUpdated"
    SPACE_DELETED = "spaceDeleted"
    GOAL_CREATED = "goalCreated"
    GOAL_UPDATED = "goalUpdated"
    GOAL_DELETED = "goalDeleted"
    KEY_RESULT_CREATED = "keyResultCreated"
    KEY_RESULT_UPDATED = "keyResultUpdated"
    KEY_RESULT_DELETED = "keyResultDeleted"


class WebhookHealth(_Payload):
    status: str = ""
    fail_count: int = 0


class Webhook(_Payload):
    id: str
    userid: Optional[int] = None
    team_id: Optional[int] = None
    endpoint: str = ""
    client_id: Optional[str] = None
    # kept as plain strings: the service may add event names before we do
    events: List[str] = Field(default_factory=list)
    task_id: Optional[Union[int, str]] = None
    list_id: Optional[Union[int, str]] = None
    folder_id: Optional[Union[int, str]] = None
    space_id: Optional[Union[int, str]] = None
    health: Optional[WebhookHealth] = None
    secret: Optional[str] = None


class WebhooksQueryResponse(_Payload):
    webhooks: List[Webhook] = Field(default_factory=list)


class CreateWebhookResponse(_Payload):
    id: str
    webhook: Webhook


class CreateWebhookRequest(BaseModel):
    endpoint: str
    events: List[WebhookEvent] = Field(default_factory=lambda: [WebhookEvent.ALL])
    task_id: Optional[str] = None
    list_id: Optional[str] = None
    folder_id: Optional[str] = None
    space_id: Optional[str] = None

    model_config = ConfigDict(extra="forbid", use_enum_values=True)


class UpdateWebhookRequest(BaseModel):
    id: str
    endpoint: Optional[str] = None
    events: Optional[List[WebhookEvent]] = None
    task_id: Optional[str] = None
    list_id: Optional[str] = None
    folder_id: Optional[str] = None
    # "active" re-enables a webhook the service suspended after failures
    status: Optional[str] = None

    model_config = ConfigDict(extra="forbid", use_enum_values=True)


class HistoryItem(_Payload):
    id: str = ""
    type: Optional[int] = None
    date: Optional[str] = None
    field: Optional[str] = None
    parent_id: Optional[str] = None
    user: Optional[TeamUser] = None
    # before/after are status objects for status changes, but other fields
    # carry scalars or null here
    before: Optional[Any] = None
    after: Optional[Any] = None


class WebhookEventMessage(_Payload):
    event: str
    history_items: List[HistoryItem] = Field(default_factory=list)
    task_id: Optional[str] = None
    webhook_id: Optional[str] = None


__all__ = [
    "TeamUser",
    "TaskStatus",
    "TotalTime",
    "CurrentStatus",
    "StatusHistoryEntry",
    "TaskTimeInStatus",
    "Task",
    "GetTasksResponse",
    "OrderBy",
    "WebhookEvent",
    "WebhookHealth",
    "Webhook",
    "WebhooksQueryResponse",
    "CreateWebhookResponse",
    "CreateWebhookRequest",
    "UpdateWebhookRequest",
    "HistoryItem",
    "WebhookEventMessage",
]
