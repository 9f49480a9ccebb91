"""エージェント・組織管理ツール。"""

from mcp.server.fastmcp import Context, FastMCP

from agent_org.models.agent import AgentLevel, AgentStatus
from agent_org.tools.helpers import get_app_context, to_json_text, tool_error


def register_tools(mcp: FastMCP) -> None:
    """エージェント管理ツールを登録する。"""

    @mcp.tool()
    async def list_agents(
        department: str | None = None,
        status: str | None = None,
        ctx: Context = None,
    ) -> str:
        """組織内の全エージェントを一覧表示する。

        Args:
            department: 部署で絞り込む
            status: 状態で絞り込む（idle, running, error, offline）

        Returns:
            エージェント一覧（JSON）
        """
        try:
            engine = get_app_context(ctx).engine
            status_filter = AgentStatus(status) if status else None
            agents = [
                a
                for a in engine.list_agents()
                if (not department or a.department == department)
                and (status_filter is None or a.status == status_filter)
            ]
            return to_json_text(
                [
                    {
                        "name": a.name,
                        "displayName": a.display_name,
                        "role": a.role,
                        "department": a.department,
                        "level": a.level.value,
                        "status": a.status.value,
                        "currentTaskId": a.current_task_id,
                        "parentAgentName": engine.get_org_parent(a.name),
                        "directReports": [c.agent_name for c in engine.get_org_children(a.name)],
                    }
                    for a in agents
                ]
            )
        except Exception as e:
            return tool_error("list_agents", e)

    @mcp.tool()
    async def create_agent(
        name: str,
        display_name: str,
        role: str,
        department: str,
        level: str,
        personality: str | None = None,
        ctx: Context = None,
    ) -> str:
        """組織に新しいエージェントを作成する。

        Args:
            name: 一意な slug 名（英小文字・数字・ハイフン）
            display_name: 表示名
            role: 役割
            department: 部署
            level: 職位（ic, lead, manager, vp, c-suite）
            personality: 人格・振る舞いの説明

        Returns:
            作成したエージェント（JSON）
        """
        try:
            agent = await get_app_context(ctx).engine.create_agent(
                name,
                display_name,
                role,
                department,
                level=AgentLevel(level),
                personality=personality or "",
            )
            return to_json_text({"name": agent.name, "displayName": agent.display_name})
        except Exception as e:
            return tool_error("create_agent", e)

    @mcp.tool()
    async def update_agent(
        agent_name: str,
        display_name: str | None = None,
        role: str | None = None,
        department: str | None = None,
        personality: str | None = None,
        ctx: Context = None,
    ) -> str:
        """エージェントのプロパティを更新する。

        Args:
            agent_name: 対象エージェント名
            display_name: 新しい表示名
            role: 新しい役割
            department: 新しい部署
            personality: 新しい人格・振る舞いの説明

        Returns:
            更新結果のメッセージ
        """
        try:
            changed = await get_app_context(ctx).engine.update_agent(
                agent_name,
                display_name=display_name,
                role=role,
                department=department,
                personality=personality,
            )
            if not changed:
                return "更新するフィールドがありません。"
            return f"エージェント {agent_name} を更新しました。"
        except Exception as e:
            return tool_error("update_agent", e)

    @mcp.tool()
    async def delete_agent(agent_name: str, ctx: Context = None) -> str:
        """組織からエージェントを削除する。

        Args:
            agent_name: 削除するエージェント名

        Returns:
            削除結果のメッセージ
        """
        try:
            await get_app_context(ctx).engine.delete_agent(agent_name)
            return f"エージェント {agent_name} を削除しました。"
        except Exception as e:
            return tool_error("delete_agent", e)

    @mcp.tool()
    async def set_org_parent(
        agent_name: str,
        parent_agent_name: str | None = None,
        ctx: Context = None,
    ) -> str:
        """組織図上のエージェントの上長を設定・変更する。

        Args:
            agent_name: 移動するエージェント名
            parent_agent_name: 上長のエージェント名（省略でルート）

        Returns:
            更新結果のメッセージ
        """
        try:
            parent_placed = await get_app_context(ctx).engine.set_org_parent(
                agent_name, parent_agent_name
            )
            if parent_agent_name:
                message = f"{agent_name} の上長を {parent_agent_name} にしました。"
                if parent_placed:
                    message += (
                        f" {parent_agent_name} は組織図に未配置だったため、ルートとして配置しました。"
                    )
                return message
            return f"{agent_name} をルート（上長なし）にしました。"
        except Exception as e:
            return tool_error("set_org_parent", e)
