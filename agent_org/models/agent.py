"""エージェント関連のモデル定義。"""

from enum import Enum

from pydantic import Field

from agent_org.models.common import CamelModel, Timestamp, utc_now


class AgentLevel(str, Enum):
    """エージェントの職位（ランク順）。"""

    IC = "ic"
    """個人貢献者"""

    LEAD = "lead"
    """リード"""

    MANAGER = "manager"
    """マネージャー"""

    VP = "vp"
    """VP"""

    C_SUITE = "c-suite"
    """経営層"""

    @property
    def rank(self) -> int:
        """職位の序列（ic が 0）。"""
        return list(AgentLevel).index(self)


class AgentStatus(str, Enum):
    """エージェントの状態。"""

    IDLE = "idle"
    """待機中"""

    RUNNING = "running"
    """タスク実行中"""

    ERROR = "error"
    """エラー状態"""

    OFFLINE = "offline"
    """オフライン"""


class AgentConfig(CamelModel):
    """エージェントの設定と状態。

    agents/<name>/config.json に保存される。
    current_task_id は status が running のときだけ値を持つ。
    """

    name: str = Field(..., description="エージェント名（一意のキー）")
    display_name: str = Field(..., description="表示名")
    role: str = Field(..., description="役割")
    department: str = Field(..., description="部署")
    personality: str = Field(default="", description="人格・振る舞いの説明")
    level: AgentLevel = Field(default=AgentLevel.IC, description="職位")
    status: AgentStatus = Field(default=AgentStatus.IDLE, description="現在の状態")
    current_task_id: str | None = Field(default=None, description="実行中のタスクID")
    avatar_color: str | None = Field(default=None, description="アバターの表示色")
    created_at: Timestamp = Field(default_factory=utc_now, description="作成日時")
    updated_at: Timestamp = Field(default_factory=utc_now, description="更新日時")

    @property
    def is_running(self) -> bool:
        """タスク実行中かどうか。"""
        return self.status == AgentStatus.RUNNING
