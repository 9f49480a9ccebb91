"""タスク関連のモデル定義。"""

import uuid
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from agent_org.models.common import CamelModel, Timestamp, utc_now


class TaskStatus(str, Enum):
    """タスクの状態。"""

    PENDING = "pending"
    """未着手"""

    RUNNING = "running"
    """実行中"""

    REVIEW = "review"
    """レビュー待ち"""

    COMPLETED = "completed"
    """完了"""

    FAILED = "failed"
    """失敗"""

    BLOCKED = "blocked"
    """ブロック"""

    @property
    def is_terminal(self) -> bool:
        """終了状態かどうか。"""
        return self in TERMINAL_STATUSES

    @property
    def column(self) -> "KanbanColumn":
        """カンバン上の列。"""
        return _STATUS_TO_COLUMN[self]


class KanbanColumn(str, Enum):
    """カンバンボードの列。"""

    BACKLOG = "backlog"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    DONE = "done"


TERMINAL_STATUSES = frozenset(
    {TaskStatus.COMPLETED, TaskStatus.FAILED, TaskStatus.BLOCKED}
)

_STATUS_TO_COLUMN = {
    TaskStatus.PENDING: KanbanColumn.BACKLOG,
    TaskStatus.RUNNING: KanbanColumn.IN_PROGRESS,
    TaskStatus.REVIEW: KanbanColumn.REVIEW,
    TaskStatus.COMPLETED: KanbanColumn.DONE,
    TaskStatus.FAILED: KanbanColumn.DONE,
    TaskStatus.BLOCKED: KanbanColumn.BACKLOG,
}


class TaskTag(BaseModel):
    """タスクに付ける表示用タグ。"""

    label: str = Field(..., description="ラベル")
    color: str = Field(default="", description="文字色")
    bg: str = Field(default="", description="背景色")


class TaskTelemetry(BaseModel):
    """タスク完了時に記録する実行メトリクス。"""

    cost_usd: float | None = Field(default=None, description="コスト（USD）")
    duration_ms: int | None = Field(default=None, description="実行時間（ミリ秒）")
    num_turns: int | None = Field(default=None, description="ターン数")


class PendingResult(BaseModel):
    """受信箱に届いている子タスクの結果。"""

    child_task_id: str = Field(..., description="子タスクID")
    result: str = Field(..., description="結果ファイルの内容")
    path: Path | None = Field(default=None, description="結果ファイルのパス")


def generate_task_id() -> str:
    """タスクIDを生成する。"""
    return str(uuid.uuid4())


class TaskState(CamelModel):
    """タスクの状態。

    tasks/<id>.json に保存される。
    started_at は pending を離れた時点で、completed_at は終了状態で設定される。
    """

    id: str = Field(default_factory=generate_task_id, description="タスクID")
    parent_task_id: str | None = Field(default=None, description="委譲元タスクID")
    assignee_id: str = Field(..., description="担当エージェント名")
    delegator_id: str | None = Field(default=None, description="委譲したエージェント名")
    prompt: str = Field(..., description="タスク内容")
    context: str | None = Field(default=None, description="補足コンテキスト")
    priority: int = Field(default=0, description="優先度（大きいほど緊急）")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="状態")
    tags: list[TaskTag] = Field(default_factory=list, description="表示用タグ")
    result: str | None = Field(default=None, description="実行結果")
    cost_usd: float | None = Field(default=None, description="コスト（USD）")
    duration_ms: int | None = Field(default=None, description="実行時間（ミリ秒）")
    num_turns: int | None = Field(default=None, description="ターン数")
    created_at: Timestamp = Field(default_factory=utc_now, description="作成日時")
    started_at: Timestamp | None = Field(default=None, description="開始日時")
    completed_at: Timestamp | None = Field(default=None, description="完了日時")

    @property
    def is_terminal(self) -> bool:
        """終了状態かどうか。"""
        return self.status.is_terminal

    @property
    def column(self) -> KanbanColumn:
        """カンバン上の列。"""
        return self.status.column

    def apply_telemetry(self, telemetry: TaskTelemetry | None) -> None:
        """指定されたメトリクスだけを反映する。"""
        if telemetry is None:
            return
        if telemetry.cost_usd is not None:
            self.cost_usd = telemetry.cost_usd
        if telemetry.duration_ms is not None:
            self.duration_ms = telemetry.duration_ms
        if telemetry.num_turns is not None:
            self.num_turns = telemetry.num_turns
