"""MCP Tools モジュール。"""

from mcp.server.fastmcp import FastMCP

from agent_org.tools import agent, board, ipc, memory, task


def register_all_tools(mcp: FastMCP) -> None:
    """全ツールをMCPサーバーに登録する。

    Args:
        mcp: FastMCPインスタンス
    """
    # タスク委譲・完了
    task.register_tools(mcp)

    # エージェント・組織管理
    agent.register_tools(mcp)

    # 作業メモリ
    memory.register_tools(mcp)

    # メッセージング
    ipc.register_tools(mcp)

    # 共有ボード
    board.register_tools(mcp)
