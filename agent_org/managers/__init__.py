"""マネージャーモジュール。"""

from .agent_storage import AgentStorage
from .board_storage import BoardStorage
from .delegation import handle_child_completion, read_pending_results
from .engine import OrchestrationEngine, RunningAgent, SpawnedAgent
from .event_bus import EventBus, HandlerError
from .message_storage import MessageStorage
from .org_manager import OrgManager
from .task_storage import TaskStorage

__all__ = [
    "AgentStorage",
    "BoardStorage",
    "EventBus",
    "HandlerError",
    "MessageStorage",
    "OrchestrationEngine",
    "OrgManager",
    "RunningAgent",
    "SpawnedAgent",
    "TaskStorage",
    "handle_child_completion",
    "read_pending_results",
]
