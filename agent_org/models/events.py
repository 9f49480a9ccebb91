"""オーケストレーションイベントの種類とペイロード。"""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import ConfigDict, Field

from agent_org.models.agent import AgentStatus
from agent_org.models.board import BoardItemType
from agent_org.models.common import CamelModel
from agent_org.models.task import TaskStatus


class EventKind(str, Enum):
    """イベントの種類。種類ごとに購読チャネルが分かれる。"""

    AGENT_CREATED = "agent_created"
    AGENT_STATUS_CHANGED = "agent_status_changed"
    AGENT_UPDATED = "agent_updated"
    AGENT_DELETED = "agent_deleted"
    TASK_CREATED = "task_created"
    TASK_STATUS_CHANGED = "task_status_changed"
    TASK_UPDATED = "task_updated"
    MESSAGE_CREATED = "message_created"
    BOARD_ITEM_CREATED = "board_item_created"
    ORG_CHANGED = "org_changed"
    AGENT_STREAM_EVENT = "agent_stream_event"


class EventPayload(CamelModel):
    """イベントペイロードの基底クラス。発行後は変更できない。"""

    model_config = ConfigDict(frozen=True)


class AgentCreated(EventPayload):
    agent_name: str


class AgentStatusChanged(EventPayload):
    agent_name: str
    status: AgentStatus


class AgentUpdated(EventPayload):
    agent_name: str


class AgentDeleted(EventPayload):
    agent_name: str


class TaskCreated(EventPayload):
    task_id: str
    assignee: str
    delegator: str | None = None


class TaskStatusChanged(EventPayload):
    task_id: str
    status: TaskStatus


class TaskUpdated(EventPayload):
    task_id: str


class MessageCreated(EventPayload):
    message_id: str
    from_agent: str | None = Field(default=None, alias="from")
    to_agent: str = Field(..., alias="to")
    thread_id: str


class BoardItemCreated(EventPayload):
    item_type: BoardItemType
    author: str
    path: Path


class OrgChanged(EventPayload):
    pass


class AgentStreamEvent(EventPayload):
    """実行中エージェントの出力ストリーム。event の中身は実行側が決める。"""

    agent_name: str
    task_id: str
    event: Any = None


EVENT_PAYLOAD_TYPES: dict[EventKind, type[EventPayload]] = {
    EventKind.AGENT_CREATED: AgentCreated,
    EventKind.AGENT_STATUS_CHANGED: AgentStatusChanged,
    EventKind.AGENT_UPDATED: AgentUpdated,
    EventKind.AGENT_DELETED: AgentDeleted,
    EventKind.TASK_CREATED: TaskCreated,
    EventKind.TASK_STATUS_CHANGED: TaskStatusChanged,
    EventKind.TASK_UPDATED: TaskUpdated,
    EventKind.MESSAGE_CREATED: MessageCreated,
    EventKind.BOARD_ITEM_CREATED: BoardItemCreated,
    EventKind.ORG_CHANGED: OrgChanged,
    EventKind.AGENT_STREAM_EVENT: AgentStreamEvent,
}
