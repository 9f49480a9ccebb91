"""作業メモリ（context.md）ツール。"""

from mcp.server.fastmcp import Context, FastMCP

from agent_org.tools.helpers import get_app_context, tool_error


def register_tools(mcp: FastMCP) -> None:
    """作業メモリツールを登録する。"""

    @mcp.tool()
    async def update_context(content: str, ctx: Context = None) -> str:
        """自分の context.md（作業メモリ）を書き換える。

        Args:
            content: context.md の新しい内容

        Returns:
            更新結果のメッセージ
        """
        try:
            app_ctx = get_app_context(ctx)
            await app_ctx.engine.update_context(app_ctx.agent_name, content)
            return f"{app_ctx.agent_name} の context.md を更新しました。"
        except Exception as e:
            return tool_error("update_context", e)
