"""エージェント設定の永続化モジュール。

保存先: {workspace}/agents/{name}/config.json
作業メモリ: {workspace}/agents/{name}/context.md
委譲結果の受信箱: {workspace}/agents/{name}/results/
"""

import logging
import shutil
from pathlib import Path

from agent_org.managers.persistence import (
    atomic_write_json,
    atomic_write_text,
    list_subdirs,
    read_json,
    read_text,
)
from agent_org.models.agent import AgentConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"
CONTEXT_FILENAME = "context.md"
RESULTS_DIRNAME = "results"


class AgentStorage:
    """エージェント設定をディレクトリ単位で管理するクラス。"""

    def __init__(self, base_path: str | Path) -> None:
        """AgentStorageを初期化する。

        Args:
            base_path: ワークスペースのルート
        """
        self.agents_dir = Path(base_path) / "agents"

    def get_agent_dir(self, name: str) -> Path:
        """エージェントのディレクトリを取得する。"""
        return self.agents_dir / name

    def get_results_dir(self, name: str) -> Path:
        """エージェントの委譲結果受信箱を取得する。"""
        return self.get_agent_dir(name) / RESULTS_DIRNAME

    def ensure_agent_dir(self, name: str) -> Path:
        """エージェントのディレクトリを作成して返す。"""
        agent_dir = self.get_agent_dir(name)
        agent_dir.mkdir(parents=True, exist_ok=True)
        return agent_dir

    def save(self, agent: AgentConfig) -> None:
        """エージェント設定を保存する。"""
        agent_dir = self.ensure_agent_dir(agent.name)
        atomic_write_json(agent_dir / CONFIG_FILENAME, agent.to_record())

    def get(self, name: str) -> AgentConfig | None:
        """エージェント設定を取得する。存在しない場合は None。"""
        data = read_json(self.get_agent_dir(name) / CONFIG_FILENAME)
        if data is None:
            return None
        return AgentConfig.model_validate(data)

    def list(self) -> list[AgentConfig]:
        """全エージェントを名前順で取得する。"""
        agents = []
        for agent_dir in list_subdirs(self.agents_dir):
            agent = self.get(agent_dir.name)
            if agent:
                agents.append(agent)
        return sorted(agents, key=lambda a: a.name)

    def delete(self, name: str) -> None:
        """エージェントのディレクトリごと削除する。存在しなくてもエラーにしない。"""
        agent_dir = self.get_agent_dir(name)
        if agent_dir.exists():
            shutil.rmtree(agent_dir)
            logger.info(f"エージェントを削除しました: {name}")

    def exists(self, name: str) -> bool:
        """エージェントが存在するかどうか。"""
        return self.get(name) is not None

    def read_context(self, name: str) -> str | None:
        """作業メモリ（context.md）を読み込む。"""
        return read_text(self.get_agent_dir(name) / CONTEXT_FILENAME)

    def write_context(self, name: str, content: str) -> Path:
        """作業メモリ（context.md）を書き換える。"""
        path = self.ensure_agent_dir(name) / CONTEXT_FILENAME
        atomic_write_text(path, content)
        return path
