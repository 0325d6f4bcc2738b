from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from clickup_client.core.chunking import (
    MAX_BULK_IDS,
    MIN_BULK_IDS,
    chunk_ids,
    merge_chunk_results,
    validate_bulk_size,
)
from clickup_client.core.client import ClickUpClient
from clickup_client.core.errors import ClickUpValidationError
from clickup_client.core.observability import elapsed_ms, log_event
from clickup_client.core.pagination import MAX_PAGE_SIZE, Paginator
from clickup_client.models import (
    GetTasksResponse,
    OrderBy,
    Task,
    TaskTimeInStatus,
)

BulkTimeInStatus = Dict[str, TaskTimeInStatus]


@dataclass
class TaskQueryOptions:
    """Filters for tasks_for_list(); zero/empty values are left off the query."""

    page: int = 0
    order_by: Optional[OrderBy] = None
    reverse: bool = False
    include_archived: bool = False
    include_subtasks: bool = False
    include_closed: bool = False
    statuses: List[str] = field(default_factory=list)
    assignees: List[str] = field(default_factory=list)
    due_date_gt: int = 0
    due_date_lt: int = 0
    date_created_gt: int = 0
    date_created_lt: int = 0
    date_updated_gt: int = 0
    date_updated_lt: int = 0

    def to_params(self) -> List[Tuple[str, Any]]:
        params: List[Tuple[str, Any]] = [("page", self.page)]
        if self.include_archived:
            params.append(("archived", True))
        if self.include_subtasks:
            params.append(("subtasks", True))
        if self.include_closed:
            params.append(("include_closed", True))
        if self.reverse:
            params.append(("reverse", True))
        params.extend(("statuses[]", s) for s in self.statuses)
        params.extend(("assignees[]", a) for a in self.assignees)
        for name in (
            "due_date_gt",
            "due_date_lt",
            "date_created_gt",
            "date_created_lt",
            "date_updated_gt",
            "date_updated_lt",
        ):
            value = getattr(self, name)
            if value > 0:
                params.append((name, value))
        if self.order_by is not None:
            params.append(("order_by", OrderBy(self.order_by).value))
        return params


def _require_workspace(workspace_id: str, use_custom_task_ids: bool) -> None:
    if use_custom_task_ids and not workspace_id:
        raise ClickUpValidationError(
            "workspace_id must be provided if querying by custom task id."
        )


def _custom_id_params(
    workspace_id: str, use_custom_task_ids: bool
) -> List[Tuple[str, Any]]:
    return [("custom_task_ids", use_custom_task_ids), ("team_id", workspace_id)]


async def task_by_id(
    client: ClickUpClient,
    task_id: str,
    workspace_id: str = "",
    use_custom_task_ids: bool = False,
    include_subtasks: bool = False,
) -> Task:
    _require_workspace(workspace_id, use_custom_task_ids)
    if not task_id:
        raise ClickUpValidationError("task_id must be provided.")

    params = _custom_id_params(workspace_id, use_custom_task_ids)
    params.append(("include_subtasks", include_subtasks))
    return await client.get(
        f"/task/{task_id}/", params=params, model=Task, tool="tasks"
    )


async def tasks_for_list(
    client: ClickUpClient,
    list_id: str,
    options: Optional[TaskQueryOptions] = None,
) -> GetTasksResponse:
    """
    One page of tasks in a list.

    Pages hold at most MAX_PAGE_SIZE tasks; a full page means another page
    may follow. iter_tasks_for_list() does the page walking.
    """
    if not list_id:
        raise ClickUpValidationError("list_id must be provided.")
    opts = options or TaskQueryOptions()
    return await client.get(
        f"/list/{list_id}/task/",
        params=opts.to_params(),
        model=GetTasksResponse,
        tool="tasks",
    )


def iter_tasks_for_list(
    client: ClickUpClient,
    list_id: str,
    options: Optional[TaskQueryOptions] = None,
) -> Paginator[Task]:
    """Every task in a list, fetched lazily page by page starting at options.page."""
    base = options or TaskQueryOptions()

    async def fetch(page: int) -> List[Task]:
        opts = TaskQueryOptions(**{**base.__dict__, "page": page})
        resp = await tasks_for_list(client, list_id, opts)
        return resp.tasks

    return Paginator(fetch, page_size=MAX_PAGE_SIZE, first_page=base.page)


async def task_time_in_status(
    client: ClickUpClient,
    task_id: str,
    workspace_id: str = "",
    use_custom_task_ids: bool = False,
) -> TaskTimeInStatus:
    """Status history of a single task."""
    _require_workspace(workspace_id, use_custom_task_ids)
    if not task_id:
        raise ClickUpValidationError("task_id must be provided.")

    params: List[Tuple[str, Any]] = [("task_id", task_id)]
    params.extend(_custom_id_params(workspace_id, use_custom_task_ids))
    return await client.get(
        f"/task/{task_id}/time_in_status/",
        params=params,
        model=TaskTimeInStatus,
        tool="time_in_status",
    )


async def bulk_task_time_in_status(
    client: ClickUpClient,
    task_ids: Sequence[str],
    workspace_id: str = "",
    use_custom_task_ids: bool = False,
) -> BulkTimeInStatus:
    """
    Status history for 2 to 100 tasks in one request, keyed by task id.

    Out-of-range batches raise ClickUpValidationError before anything is sent;
    use bulk_task_time_in_status_chunked() for longer lists.
    """
    _require_workspace(workspace_id, use_custom_task_ids)
    validate_bulk_size(task_ids)

    params = _custom_id_params(workspace_id, use_custom_task_ids)
    params.extend(("task_ids", task_id) for task_id in task_ids)
    return await client.get(
        "/task/bulk_time_in_status/task_ids/",
        params=params,
        model=BulkTimeInStatus,
        tool="time_in_status",
    )


async def bulk_task_time_in_status_chunked(
    client: ClickUpClient,
    task_ids: Sequence[str],
    workspace_id: str = "",
    use_custom_task_ids: bool = False,
    *,
    chunk_size: int = MAX_BULK_IDS,
) -> BulkTimeInStatus:
    """
    Status history for two or more tasks, without the bulk upper bound.

    The ids are split into contiguous chunks of at most ``chunk_size`` and
    fetched one chunk at a time; results are merged into one mapping. The
    first failing chunk aborts the whole lookup and nothing is returned.
    At least MIN_BULK_IDS ids are required. A trailing chunk left with a
    single id (e.g. the last of 101) goes through the single-task endpoint.
    """
    _require_workspace(workspace_id, use_custom_task_ids)
    if len(task_ids) < MIN_BULK_IDS:
        raise ClickUpValidationError(
            f"must provide at least {MIN_BULK_IDS} ids, got {len(task_ids)}."
        )
    if chunk_size > MAX_BULK_IDS:
        raise ClickUpValidationError(
            f"chunk_size may not exceed {MAX_BULK_IDS}, got {chunk_size}."
        )

    chunks = chunk_ids(task_ids, chunk_size)
    results: List[BulkTimeInStatus] = []
    for index, chunk in enumerate(chunks):
        start = time.perf_counter()
        if len(chunk) == 1:
            single = await task_time_in_status(
                client, chunk[0], workspace_id, use_custom_task_ids
            )
            results.append({chunk[0]: single})
        else:
            results.append(
                await bulk_task_time_in_status(
                    client, chunk, workspace_id, use_custom_task_ids
                )
            )
        log_event(
            "bulk_chunk",
            client.log,
            request_id=client.request_id,
            tool="time_in_status",
            chunk=index + 1,
            chunks=len(chunks),
            ids=len(chunk),
            duration_ms=elapsed_ms(start),
        )

    return merge_chunk_results(results)


__all__ = [
    "TaskQueryOptions",
    "task_by_id",
    "tasks_for_list",
    "iter_tasks_for_list",
    "task_time_in_status",
    "bulk_task_time_in_status",
    "bulk_task_time_in_status_chunked",
]
