"""共有ボードツール。"""

from mcp.server.fastmcp import Context, FastMCP

from agent_org.models.board import BoardItemType
from agent_org.models.common import format_timestamp
from agent_org.tools.helpers import get_app_context, to_json_text, tool_error


def register_tools(mcp: FastMCP) -> None:
    """ボードツールを登録する。"""

    @mcp.tool()
    async def query_board(
        type: str | None = None,
        author: str | None = None,
        limit: int | None = None,
        ctx: Context = None,
    ) -> str:
        """最新のボード投稿（進捗・ブロッカー・発見・依頼）を読む。

        Args:
            type: 種類で絞り込む（status_update, blocker, finding, request）
            author: 投稿者で絞り込む
            limit: 最大件数（既定 10）

        Returns:
            ボード投稿一覧（JSON）
        """
        try:
            app_ctx = get_app_context(ctx)
            items = app_ctx.engine.list_board_items(
                item_type=BoardItemType(type) if type else None,
                author=author,
                limit=limit or app_ctx.board_query_default_limit,
            )
            return to_json_text(
                [
                    {
                        "id": i.id,
                        "type": i.type.value,
                        "author": i.author,
                        "summary": i.summary,
                        "body": i.body,
                        "createdAt": format_timestamp(i.created_at),
                    }
                    for i in items
                ]
            )
        except Exception as e:
            return tool_error("query_board", e)

    @mcp.tool()
    async def post_to_board(
        type: str,
        summary: str,
        body: str,
        ctx: Context = None,
    ) -> str:
        """共有ボードに進捗・ブロッカー・発見・依頼を投稿する。

        Args:
            type: 投稿種類（status_update, blocker, finding, request）
            summary: 1 行の要約
            body: 本文

        Returns:
            投稿結果のメッセージ
        """
        try:
            app_ctx = get_app_context(ctx)
            item = await app_ctx.engine.post_board_item(
                BoardItemType(type), app_ctx.agent_name, summary, body
            )
            return f"ボードに投稿しました: [{item.type.value}] {item.summary}"
        except Exception as e:
            return tool_error("post_to_board", e)
