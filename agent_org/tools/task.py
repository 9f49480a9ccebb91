"""タスク委譲・完了ツール。"""

from mcp.server.fastmcp import Context, FastMCP

from agent_org.models.task import TaskStatus
from agent_org.tools.helpers import get_app_context, tool_error

# finish_task で指定できる終了状態
FINISH_STATUSES = (TaskStatus.COMPLETED, TaskStatus.BLOCKED, TaskStatus.FAILED)


def register_tools(mcp: FastMCP) -> None:
    """タスク関連ツールを登録する。"""

    @mcp.tool()
    async def delegate_task(
        target_agent: str,
        prompt: str,
        context: str,
        priority: int = 0,
        ctx: Context = None,
    ) -> str:
        """別のエージェントに名前を指定して作業を委譲する。

        Args:
            target_agent: 委譲先のエージェント名（slug）
            prompt: 依頼内容
            context: 関連するコンテキスト
            priority: 優先度（大きいほど緊急）

        Returns:
            作成したタスクIDを含むメッセージ
        """
        try:
            app_ctx = get_app_context(ctx)
            task = await app_ctx.engine.delegate_task(
                app_ctx.agent_name,
                target_agent,
                prompt,
                context=context,
                parent_task_id=app_ctx.task_id,
                priority=priority,
            )
            return f"{target_agent} に委譲しました。タスク {task.id} をキューに追加しました。"
        except Exception as e:
            return tool_error("delegate_task", e)

    @mcp.tool()
    async def finish_task(
        status: str,
        result: str,
        ctx: Context = None,
    ) -> str:
        """実行中のタスクを completed / blocked / failed にして結果を報告する。

        Args:
            status: 終了状態（completed, blocked, failed）
            result: 結果の要約、またはブロック・失敗の理由

        Returns:
            更新結果のメッセージ
        """
        try:
            app_ctx = get_app_context(ctx)
            if not app_ctx.task_id:
                raise ValueError("このエージェントには実行中のタスクがありません")
            task_status = TaskStatus(status)
            if task_status not in FINISH_STATUSES:
                raise ValueError(
                    f"status は {', '.join(s.value for s in FINISH_STATUSES)} のいずれかを指定してください"
                )
            await app_ctx.engine.finish_task(app_ctx.task_id, task_status, result)
            return f"タスク {app_ctx.task_id} を {task_status.value} にしました。"
        except Exception as e:
            return tool_error("finish_task", e)
