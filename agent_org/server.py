"""Agent Org MCP Server エントリーポイント。

1 つの実行中エージェントを代理し、オーケストレーションツールを stdio で提供する。
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from mcp.server.fastmcp import FastMCP

from agent_org.config.settings import Settings
from agent_org.context import AppContext
from agent_org.managers.engine import OrchestrationEngine
from agent_org.tools import register_all_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "orchestration"


def create_orchestration_server(
    engine: OrchestrationEngine,
    agent_name: str,
    task_id: str | None = None,
) -> FastMCP:
    """エージェント用の MCP サーバーを作成する。

    Args:
        engine: オーケストレーションエンジン
        agent_name: ツールを呼び出すエージェント名
        task_id: エージェントが実行中のタスクID

    Returns:
        ツール登録済みの FastMCP インスタンス
    """

    @asynccontextmanager
    async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
        """サーバーのライフサイクルを管理する。"""
        logger.info(f"MCP サーバーを起動します: agent={agent_name}, task={task_id}")
        yield AppContext(
            engine=engine,
            agent_name=agent_name,
            task_id=task_id,
            settings=engine.settings,
        )
        logger.info(f"MCP サーバーを停止しました: agent={agent_name}")

    mcp = FastMCP(SERVER_NAME, lifespan=app_lifespan)
    register_all_tools(mcp)
    return mcp


def main() -> None:
    """MCPサーバーを起動する。"""
    settings = Settings()
    # ログ設定（stderrに出力）
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if not settings.agent_name:
        raise SystemExit("AGENT_ORG_AGENT_NAME を設定してください")

    engine = OrchestrationEngine(settings.workspace_path, settings=settings)
    engine.initialize()
    mcp = create_orchestration_server(engine, settings.agent_name, settings.task_id)
    mcp.run()


if __name__ == "__main__":
    main()
