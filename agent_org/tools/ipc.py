"""エージェント間メッセージングツール。"""

from mcp.server.fastmcp import Context, FastMCP

from agent_org.models.common import format_timestamp
from agent_org.tools.helpers import get_app_context, to_json_text, tool_error


def register_tools(mcp: FastMCP) -> None:
    """メッセージングツールを登録する。"""

    @mcp.tool()
    async def send_message(
        to_agent: str,
        body: str,
        subject: str | None = None,
        thread_id: str | None = None,
        ctx: Context = None,
    ) -> str:
        """別のエージェントにダイレクトメッセージを送る。

        Args:
            to_agent: 宛先エージェント名
            body: 本文
            subject: 件名
            thread_id: 返信先のスレッドID（省略時は新規スレッド）

        Returns:
            送信結果のメッセージ
        """
        try:
            app_ctx = get_app_context(ctx)
            message = await app_ctx.engine.send_message(
                app_ctx.agent_name,
                to_agent,
                body,
                subject=subject,
                thread_id=thread_id,
            )
            return f"{to_agent} にメッセージを送信しました（スレッド {message.thread_id[:8]}）。"
        except Exception as e:
            return tool_error("send_message", e)

    @mcp.tool()
    async def read_messages(thread_id: str | None = None, ctx: Context = None) -> str:
        """スレッドのメッセージ、または自分宛の未読メッセージを読む。

        スレッドを指定した場合、自分宛の未読メッセージは既読になる。

        Args:
            thread_id: 読むスレッドID（省略時は全スレッドの未読）

        Returns:
            メッセージ一覧（JSON）
        """
        try:
            app_ctx = get_app_context(ctx)
            if thread_id:
                messages = await app_ctx.engine.read_thread(thread_id, app_ctx.agent_name)
                return to_json_text(
                    [
                        {
                            "id": m.id,
                            "from": m.from_agent_id,
                            "to": m.to_agent_id,
                            "subject": m.subject,
                            "body": m.body,
                            "createdAt": format_timestamp(m.created_at),
                            "status": m.status.value,
                        }
                        for m in messages
                    ]
                )

            unread = app_ctx.engine.get_unread_messages(app_ctx.agent_name)
            return to_json_text(
                [
                    {
                        "id": m.id,
                        "from": m.from_agent_id,
                        "threadId": m.thread_id,
                        "subject": m.subject,
                        "body": m.body,
                        "createdAt": format_timestamp(m.created_at),
                    }
                    for m in unread
                ]
            )
        except Exception as e:
            return tool_error("read_messages", e)
