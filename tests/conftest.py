"""pytest設定とフィクスチャ。"""

import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from agent_org.config.settings import Settings
from agent_org.context import AppContext
from agent_org.managers.agent_storage import AgentStorage
from agent_org.managers.board_storage import BoardStorage
from agent_org.managers.engine import OrchestrationEngine
from agent_org.managers.event_bus import EventBus
from agent_org.managers.message_storage import MessageStorage
from agent_org.managers.org_manager import OrgManager
from agent_org.managers.task_storage import TaskStorage
from agent_org.models.agent import AgentConfig, AgentLevel

def _make_agent(name: str, level: AgentLevel, display_name: str, role: str) -> AgentConfig:
    """テスト用のエージェントを作成する。"""
    return AgentConfig(
        name=name,
        display_name=display_name,
        role=role,
        department="Executive",
        level=level,
    )


@pytest.fixture
def temp_dir():
    """一時ディレクトリを作成する。"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def settings(temp_dir):
    """テスト用の設定を作成する。"""
    return Settings(
        _env_file=None,
        workspace_dir=str(temp_dir),
        concurrency_limit=3,
    )


@pytest.fixture
def engine(temp_dir, settings):
    """初期化済みの OrchestrationEngine を作成する。"""
    engine = OrchestrationEngine(temp_dir, settings=settings)
    engine.initialize()
    return engine


@pytest.fixture
def agent_storage(temp_dir):
    """AgentStorageインスタンスを作成する。"""
    return AgentStorage(temp_dir)


@pytest.fixture
def task_storage(temp_dir):
    """TaskStorageインスタンスを作成する。"""
    return TaskStorage(temp_dir)


@pytest.fixture
def message_storage(temp_dir):
    """MessageStorageインスタンスを作成する。"""
    return MessageStorage(temp_dir)


@pytest.fixture
def board_storage(temp_dir):
    """BoardStorageインスタンスを作成する。"""
    return BoardStorage(temp_dir)


@pytest.fixture
def org_manager(temp_dir):
    """OrgManagerインスタンスを作成する。"""
    return OrgManager(temp_dir)


@pytest.fixture
def event_bus():
    """EventBusインスタンスを作成する。"""
    return EventBus()


@pytest.fixture
def app_ctx(engine, settings):
    """ceo として動く AppContext を作成する。"""
    engine.agents.save(_make_agent("ceo", AgentLevel.C_SUITE, "CEO", "Chief Executive"))
    return AppContext(engine=engine, agent_name="ceo", task_id=None, settings=settings)


@pytest.fixture
def mock_ctx(app_ctx):
    """MCP Context のモック。"""
    mock = MagicMock()
    mock.request_context.lifespan_context = app_ctx
    return mock
