"""データモデルモジュール。"""

from .agent import AgentConfig, AgentLevel, AgentStatus
from .board import BOARD_TYPE_TO_FOLDER, BoardItem, BoardItemType
from .common import CamelModel, Timestamp, format_timestamp, utc_now
from .events import (
    EVENT_PAYLOAD_TYPES,
    AgentCreated,
    AgentDeleted,
    AgentStatusChanged,
    AgentStreamEvent,
    AgentUpdated,
    BoardItemCreated,
    EventKind,
    EventPayload,
    MessageCreated,
    OrgChanged,
    TaskCreated,
    TaskStatusChanged,
    TaskUpdated,
)
from .message import Message, MessageStatus, MessageType
from .org import OrgNode, OrgTree
from .task import (
    TERMINAL_STATUSES,
    KanbanColumn,
    PendingResult,
    TaskState,
    TaskStatus,
    TaskTag,
    TaskTelemetry,
)

__all__ = [
    "AgentConfig",
    "AgentCreated",
    "AgentDeleted",
    "AgentLevel",
    "AgentStatus",
    "AgentStatusChanged",
    "AgentStreamEvent",
    "AgentUpdated",
    "BOARD_TYPE_TO_FOLDER",
    "BoardItem",
    "BoardItemCreated",
    "BoardItemType",
    "CamelModel",
    "EVENT_PAYLOAD_TYPES",
    "EventKind",
    "EventPayload",
    "KanbanColumn",
    "Message",
    "MessageCreated",
    "MessageStatus",
    "MessageType",
    "OrgChanged",
    "OrgNode",
    "OrgTree",
    "PendingResult",
    "TERMINAL_STATUSES",
    "TaskCreated",
    "TaskState",
    "TaskStatus",
    "TaskStatusChanged",
    "TaskTag",
    "TaskTelemetry",
    "TaskUpdated",
    "Timestamp",
    "format_timestamp",
    "utc_now",
]
