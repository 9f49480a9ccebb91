"""オーケストレーション例外の定義。

「見つからない」は例外ではなく None / 空リストで返す。
ここに定義するのは呼び出し側が分岐したい業務上の拒否だけ。
"""


class OrchestrationError(Exception):
    """オーケストレーション処理の基底例外。"""


class ConcurrencyLimitError(OrchestrationError):
    """同時実行数の上限に達しているため spawn できない。

    キューイングもリトライもしない。呼び出し側が任意のタイミングで再試行する。
    """

    def __init__(self, limit: int, agent_name: str) -> None:
        self.limit = limit
        self.agent_name = agent_name
        super().__init__(
            f"同時実行数の上限（{limit}）に達しています。エージェント {agent_name} を起動できません"
        )


class AgentBusyError(OrchestrationError):
    """エージェントが既に別タスクを実行中。"""


class AgentRunningError(OrchestrationError):
    """実行中のエージェントに対して許可されない操作。"""


class AgentNotFoundError(OrchestrationError, LookupError):
    """操作対象のエージェントが存在しない。"""


class TaskNotFoundError(OrchestrationError, LookupError):
    """操作対象のタスクが存在しない。"""


class InvalidTransitionError(OrchestrationError, ValueError):
    """タスク状態遷移が許可されていない。"""


class OrgCycleError(OrchestrationError, ValueError):
    """org ツリーに循環を作る親子付け。"""

    def __init__(self, agent_name: str, parent_agent_name: str) -> None:
        self.agent_name = agent_name
        self.parent_agent_name = parent_agent_name
        super().__init__(
            f"{parent_agent_name} は {agent_name} 自身または配下のため親に設定できません"
        )
