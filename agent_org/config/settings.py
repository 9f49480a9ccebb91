"""設定管理モジュール。"""

import os
import re
from pathlib import Path

from pydantic import ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings

# エージェント名（slug）の形式
AGENT_NAME_PATTERN = re.compile(r"^[a-z0-9-]+$")

# ワークスペース直下の設定ディレクトリ名
CONFIG_DIR_NAME = ".agent-org"


def resolve_workspace_env_file(workspace_dir: str | os.PathLike[str] | None) -> str | None:
    """指定したワークスペースから .env ファイルを解決する。

    Args:
        workspace_dir: ワークスペースのルートパス

    Returns:
        .env ファイルのパス（存在する場合）、または None
    """
    if not workspace_dir:
        return None

    env_file = Path(workspace_dir) / CONFIG_DIR_NAME / ".env"
    if env_file.exists():
        return str(env_file)
    return None


def get_workspace_env_file() -> str | None:
    """ワークスペース別 .env ファイルのパスを取得。

    AGENT_ORG_WORKSPACE_DIR 環境変数が設定されている場合、
    {workspace_dir}/.agent-org/.env を返す。

    Returns:
        .env ファイルのパス（存在する場合）、または None
    """
    return resolve_workspace_env_file(os.getenv("AGENT_ORG_WORKSPACE_DIR"))


class Settings(BaseSettings):
    """オーケストレーションの設定。

    環境変数で上書き可能。プレフィックスは AGENT_ORG_。
    例: AGENT_ORG_CONCURRENCY_LIMIT=5

    優先順位:
    1. 環境変数（最優先）
    2. ワークスペース別 .env ファイル（{workspace}/.agent-org/.env）
    3. デフォルト値
    """

    model_config = ConfigDict(
        env_prefix="AGENT_ORG_",
        env_file=get_workspace_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    workspace_dir: str = CONFIG_DIR_NAME
    """ワークスペースのルート（agents/, tasks/, messages/, board/, org.json を配置）"""

    # 同時実行設定
    concurrency_limit: int = Field(default=3, description="同時実行エージェント数の上限")
    """同時に running にできるエージェント数（デフォルト: 3）"""

    # ボード設定
    board_query_default_limit: int = Field(
        default=10, description="query_board の既定取得件数"
    )
    """query_board で limit 未指定時に返す件数"""

    recent_board_items_limit: int = Field(
        default=5, description="システムプロンプトに含める最新ボード件数"
    )
    """システムプロンプトの System Briefing に載せるボード件数"""

    # MCP サーバーのバインド先
    agent_name: str | None = Field(default=None, description="ツールを呼び出すエージェント名")
    """MCP サーバーが代理するエージェント名"""

    task_id: str | None = Field(default=None, description="エージェントが実行中のタスクID")
    """MCP サーバーが代理するタスクID"""

    log_level: str = "INFO"
    """ログレベル"""

    @field_validator("concurrency_limit", "board_query_default_limit", "recent_board_items_limit")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        """件数系の設定は 1 以上に制限する。"""
        if value < 1:
            raise ValueError(f"1 以上を指定してください: {value}")
        return value

    @field_validator("agent_name")
    @classmethod
    def validate_agent_name(cls, value: str | None) -> str | None:
        """エージェント名を slug 形式に制限する。"""
        if value is None:
            return None
        candidate = value.strip()
        if not AGENT_NAME_PATTERN.match(candidate):
            raise ValueError(
                f"AGENT_ORG_AGENT_NAME は英小文字・数字・ハイフンのみ使用できます: {value}"
            )
        return candidate

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """ログレベル名を正規化する。"""
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"不明なログレベルです: {value}")
        return level

    @property
    def workspace_path(self) -> Path:
        """ワークスペースのルートを Path で返す。"""
        return Path(self.workspace_dir).expanduser()


def load_settings_for_workspace(workspace_dir: str | os.PathLike[str] | None) -> Settings:
    """指定ワークスペースの .env を優先して Settings を生成する。

    優先順位:
    1. プロセス環境変数 AGENT_ORG_*
    2. {workspace_dir}/.agent-org/.env
    3. デフォルト値

    Args:
        workspace_dir: ワークスペースのルートパス

    Returns:
        読み込み済み Settings インスタンス
    """
    env_file = resolve_workspace_env_file(workspace_dir)
    if env_file:
        settings = Settings(_env_file=env_file)
    else:
        # model_config 側の env_file を使わず、環境変数 + デフォルトのみで構築
        settings = Settings(_env_file=None)
    if workspace_dir and "AGENT_ORG_WORKSPACE_DIR" not in os.environ:
        settings.workspace_dir = str(workspace_dir)
    return settings
