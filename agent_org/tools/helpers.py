"""ツール共通のヘルパー関数。"""

import json
import logging
from typing import Any

from mcp.server.fastmcp import Context

from agent_org.context import AppContext
from agent_org.models.common import CamelModel

logger = logging.getLogger(__name__)


def get_app_context(ctx: Context) -> AppContext:
    """MCP Context から AppContext を取り出す。"""
    return ctx.request_context.lifespan_context


def tool_error(tool_name: str, error: Exception) -> str:
    """ツールのエラーをエージェント向けのテキストにする。"""
    logger.warning(f"{tool_name} に失敗しました: {error}")
    return f"{tool_name} failed: {error}"


def to_json_text(data: Any) -> str:
    """ツール応答用に JSON テキストを生成する。"""
    if isinstance(data, CamelModel):
        data = data.to_record()
    return json.dumps(data, ensure_ascii=False, indent=2, default=str)
