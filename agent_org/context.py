"""アプリケーションコンテキストの定義。

MCP サーバーは 1 つの実行中エージェント（agent_name, task_id）を代理する。
ツールはこのコンテキスト経由でエンジンを呼び出す。
"""

from dataclasses import dataclass

from agent_org.config.settings import Settings
from agent_org.managers.engine import OrchestrationEngine


@dataclass
class AppContext:
    """アプリケーションコンテキスト。"""

    engine: OrchestrationEngine
    agent_name: str
    """ツールを呼び出しているエージェント名"""

    task_id: str | None = None
    """エージェントが実行中のタスクID"""

    settings: Settings | None = None

    @property
    def board_query_default_limit(self) -> int:
        """query_board の既定取得件数。"""
        settings = self.settings or self.engine.settings
        return settings.board_query_default_limit
