"""オーケストレーションエンジン。

ストレージ・組織ツリー・イベントバス・委譲配送をまとめ、
タスクとエージェントの状態遷移（spawn / complete）を管理する。

実行中エージェントの登録簿はメモリ上だけに持つ。プロセスが落ちると
「実行中」の追跡は失われるが、ディスク上のレコードはそのまま残る。
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from agent_org.config.prompt_builder import (
    ManagerInfo,
    OrgReport,
    PromptParams,
    build_agent_system_prompt,
)
from agent_org.config.settings import AGENT_NAME_PATTERN, Settings
from agent_org.errors import (
    AgentBusyError,
    AgentNotFoundError,
    AgentRunningError,
    ConcurrencyLimitError,
    InvalidTransitionError,
    OrgCycleError,
    TaskNotFoundError,
)
from agent_org.managers.agent_storage import AgentStorage
from agent_org.managers.board_storage import BoardStorage
from agent_org.managers.delegation import handle_child_completion, read_pending_results
from agent_org.managers.event_bus import EventBus, Handler, HandlerError, Unsubscribe
from agent_org.managers.message_storage import MessageStorage
from agent_org.managers.org_manager import OrgManager
from agent_org.managers.task_storage import TaskStorage
from agent_org.models.agent import AgentConfig, AgentLevel, AgentStatus
from agent_org.models.board import BoardItem, BoardItemType
from agent_org.models.common import utc_now
from agent_org.models.events import (
    EVENT_PAYLOAD_TYPES,
    AgentCreated,
    AgentDeleted,
    AgentStatusChanged,
    AgentStreamEvent,
    AgentUpdated,
    BoardItemCreated,
    EventKind,
    EventPayload,
    MessageCreated,
    OrgChanged,
    TaskCreated,
    TaskStatusChanged,
    TaskUpdated,
)
from agent_org.models.message import Message, MessageStatus, MessageType
from agent_org.models.org import OrgNode, OrgTree
from agent_org.models.task import TaskState, TaskStatus, TaskTag, TaskTelemetry

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY_LIMIT = 3

# update_agent で変更できるフィールド
UPDATABLE_AGENT_FIELDS = ("display_name", "role", "department", "personality", "level", "avatar_color")


@dataclass
class RunningAgent:
    """実行中エージェントの登録情報。"""

    name: str
    task_id: str
    cancel_event: asyncio.Event = field(default_factory=asyncio.Event)
    """キャンセル要求。set された後の扱いは実行側が決める"""

    started_at: datetime = field(default_factory=utc_now)

    @property
    def cancelled(self) -> bool:
        """キャンセル要求済みかどうか。"""
        return self.cancel_event.is_set()


@dataclass
class SpawnedAgent:
    """spawn_agent の結果。実行側はこのプロンプトでエージェントを動かす。"""

    agent_name: str
    task_id: str
    system_prompt: str


class OrchestrationEngine:
    """エージェント組織のオーケストレーションを行うファサード。"""

    def __init__(
        self,
        base_path: str | Path,
        settings: Settings | None = None,
    ) -> None:
        """OrchestrationEngineを初期化する。

        Args:
            base_path: ワークスペースのルート
            settings: 設定（省略時は既定値）
        """
        self.base_path = Path(base_path)
        self.settings = settings or Settings(_env_file=None)
        self.agents = AgentStorage(self.base_path)
        self.tasks = TaskStorage(self.base_path)
        self.messages = MessageStorage(self.base_path)
        self.board = BoardStorage(self.base_path)
        self.org = OrgManager(self.base_path)
        self.event_bus = EventBus()
        self._running_agents: dict[str, RunningAgent] = {}
        self._concurrency_limit = self.settings.concurrency_limit

    def initialize(self) -> None:
        """ワークスペースのディレクトリを作成する。"""
        for name in ("agents", "tasks", "messages", "board"):
            (self.base_path / name).mkdir(parents=True, exist_ok=True)
        logger.info(f"ワークスペースを初期化しました: {self.base_path}")

    # ========== イベント ==========

    def subscribe(self, kind: EventKind | str, handler: Handler) -> Unsubscribe:
        """イベントを購読する。解除用の関数を返す。"""
        return self.event_bus.subscribe(kind, handler)

    def emit(self, kind: EventKind | str, payload: EventPayload) -> list[HandlerError]:
        """イベントを発行する。

        Raises:
            TypeError: ペイロードの型がイベント種類と一致しない
        """
        kind = EventKind(kind)
        expected = EVENT_PAYLOAD_TYPES[kind]
        if not isinstance(payload, expected):
            raise TypeError(
                f"{kind.value} のペイロードは {expected.__name__} です: {type(payload).__name__}"
            )
        return self.event_bus.publish(kind, payload)

    def emit_stream_event(self, agent_name: str, task_id: str, event: Any) -> list[HandlerError]:
        """実行中エージェントの出力を購読者に中継する。"""
        return self.emit(
            EventKind.AGENT_STREAM_EVENT,
            AgentStreamEvent(agent_name=agent_name, task_id=task_id, event=event),
        )

    # ========== エージェントのライフサイクル ==========

    async def spawn_agent(self, agent_name: str, task_id: str) -> SpawnedAgent:
        """エージェントにタスクを割り当てて running にする。

        ストレージを変更する前に全ての検査とプロンプト生成を行うため、
        拒否された場合や失敗した場合は何も書き込まない。

        Args:
            agent_name: 起動するエージェント名
            task_id: 実行するタスクID

        Returns:
            システムプロンプトを含む起動情報

        Raises:
            AgentNotFoundError: エージェントが存在しない
            TaskNotFoundError: タスクが存在しない
            AgentBusyError: エージェントが既に実行中
            ConcurrencyLimitError: 同時実行数の上限に達している
            InvalidTransitionError: タスクが pending ではない
        """
        agent = self.agents.get(agent_name)
        if agent is None:
            raise AgentNotFoundError(f"エージェントが見つかりません: {agent_name}")
        task = self.tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(f"タスクが見つかりません: {task_id}")
        if agent_name in self._running_agents:
            running = self._running_agents[agent_name]
            raise AgentBusyError(
                f"エージェント {agent_name} はタスク {running.task_id} を実行中です"
            )
        if len(self._running_agents) >= self._concurrency_limit:
            raise ConcurrencyLimitError(self._concurrency_limit, agent_name)
        if task.status != TaskStatus.PENDING:
            raise InvalidTransitionError(
                f"タスク {task_id} は {task.status.value} のため開始できません"
            )
        system_prompt = self.build_system_prompt(agent, task)

        now = utc_now()
        agent.status = AgentStatus.RUNNING
        agent.current_task_id = task.id
        agent.updated_at = now
        self.agents.save(agent)
        self.emit(
            EventKind.AGENT_STATUS_CHANGED,
            AgentStatusChanged(agent_name=agent.name, status=AgentStatus.RUNNING),
        )

        task.status = TaskStatus.RUNNING
        task.started_at = now
        self.tasks.save(task)
        self.emit(
            EventKind.TASK_STATUS_CHANGED,
            TaskStatusChanged(task_id=task.id, status=TaskStatus.RUNNING),
        )

        self._running_agents[agent.name] = RunningAgent(name=agent.name, task_id=task.id)
        logger.info(
            f"エージェント {agent.name} を起動しました: タスク {task.id} "
            f"（実行中 {len(self._running_agents)}/{self._concurrency_limit}）"
        )

        return SpawnedAgent(
            agent_name=agent.name,
            task_id=task.id,
            system_prompt=system_prompt,
        )

    async def complete_agent(
        self,
        agent_name: str,
        task_id: str,
        status: TaskStatus | str,
        result: str | None,
        telemetry: TaskTelemetry | None = None,
    ) -> None:
        """エージェントの実行終了を記録し、スロットを解放する。

        タスクが見つからなくてもエージェントは idle に戻し、その逆も同様。
        finish_task で既に終了状態になっているタスクは結果を上書きせず、
        委譲結果も再配送しない（メトリクスだけを反映する）。
        検査はストレージを変更する前に行う。

        Args:
            agent_name: 終了したエージェント名
            task_id: 実行していたタスクID
            status: 終了状態（completed / failed / blocked）
            result: 実行結果
            telemetry: 実行メトリクス

        Raises:
            InvalidTransitionError: 終了状態以外が指定された、エージェントが別のタスクを
                実行中、タスクの担当者が異なる、またはタスクが running でも終了状態でもない
        """
        status = self._require_terminal(status)

        agent = self.agents.get(agent_name)
        running = self._running_agents.get(agent_name)
        for held_task_id in (
            running.task_id if running else None,
            agent.current_task_id if agent else None,
        ):
            if held_task_id is not None and held_task_id != task_id:
                raise InvalidTransitionError(
                    f"エージェント {agent_name} が実行中のタスクは {held_task_id} です"
                    f"（指定: {task_id}）"
                )

        task = self.tasks.get(task_id)
        if task is not None:
            if task.assignee_id != agent_name:
                raise InvalidTransitionError(
                    f"タスク {task_id} の担当は {task.assignee_id} です（指定: {agent_name}）"
                )
            if not task.is_terminal and task.status != TaskStatus.RUNNING:
                raise InvalidTransitionError(
                    f"タスク {task_id} は {task.status.value} のため終了できません"
                )

        if task is None:
            logger.warning(f"タスクが見つからないため状態更新をスキップします: {task_id}")
        elif task.is_terminal:
            if telemetry is not None:
                task.apply_telemetry(telemetry)
                self.tasks.save(task)
                self.emit(EventKind.TASK_UPDATED, TaskUpdated(task_id=task.id))
            logger.info(
                f"タスク {task_id} は既に {task.status.value} のためメトリクスのみ記録しました"
            )
        else:
            self._finish(task, status, result, telemetry)

        if agent is None:
            logger.warning(f"エージェントが見つからないため状態更新をスキップします: {agent_name}")
        else:
            agent.status = AgentStatus.IDLE
            agent.current_task_id = None
            agent.updated_at = utc_now()
            self.agents.save(agent)
            self.emit(
                EventKind.AGENT_STATUS_CHANGED,
                AgentStatusChanged(agent_name=agent_name, status=AgentStatus.IDLE),
            )

        self._running_agents.pop(agent_name, None)
        logger.info(
            f"エージェント {agent_name} が終了しました: タスク {task_id} -> {status.value}"
            f"（実行中 {len(self._running_agents)}/{self._concurrency_limit}）"
        )

    async def finish_task(
        self,
        task_id: str,
        status: TaskStatus | str,
        result: str | None,
        telemetry: TaskTelemetry | None = None,
    ) -> TaskState:
        """タスクを終了状態にする（エージェントのスロットは解放しない）。

        Raises:
            InvalidTransitionError: 終了状態以外が指定された、またはタスクが running ではない
            TaskNotFoundError: タスクが存在しない
        """
        status = self._require_terminal(status)
        task = self.tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(f"タスクが見つかりません: {task_id}")
        if task.is_terminal:
            raise InvalidTransitionError(
                f"タスク {task_id} は既に {task.status.value} です"
            )
        if task.status != TaskStatus.RUNNING:
            raise InvalidTransitionError(
                f"タスク {task_id} は {task.status.value} のため終了できません"
            )
        self._finish(task, status, result, telemetry)
        return task

    def _finish(
        self,
        task: TaskState,
        status: TaskStatus,
        result: str | None,
        telemetry: TaskTelemetry | None,
    ) -> None:
        """終了状態への遷移と委譲結果の配送を行う。"""
        now = utc_now()
        task.status = status
        task.result = result
        task.completed_at = now
        task.apply_telemetry(telemetry)
        self.tasks.save(task)
        self.emit(
            EventKind.TASK_STATUS_CHANGED,
            TaskStatusChanged(task_id=task.id, status=status),
        )

        if task.parent_task_id and task.delegator_id:
            parent_task = self.tasks.get(task.parent_task_id)
            if parent_task is None:
                logger.warning(
                    f"親タスク {task.parent_task_id} が見つからないため結果を配送しません: {task.id}"
                )
                return
            handle_child_completion(
                self.base_path,
                task.id,
                result,
                status,
                task.parent_task_id,
                parent_task.assignee_id,
                completed_at=now,
            )

    @staticmethod
    def _require_terminal(status: TaskStatus | str) -> TaskStatus:
        try:
            status = TaskStatus(status)
        except ValueError as e:
            raise InvalidTransitionError(f"不明なタスク状態です: {status}") from e
        if not status.is_terminal:
            raise InvalidTransitionError(
                f"終了状態（completed / failed / blocked）を指定してください: {status.value}"
            )
        return status

    def is_agent_running(self, agent_name: str) -> bool:
        """エージェントが実行中かどうか。"""
        return agent_name in self._running_agents

    def get_running_agent_count(self) -> int:
        """実行中のエージェント数を返す。"""
        return len(self._running_agents)

    def get_running_agent(self, agent_name: str) -> RunningAgent | None:
        """実行中エージェントの登録情報を返す。"""
        return self._running_agents.get(agent_name)

    def cancel_agent(self, agent_name: str) -> bool:
        """実行中エージェントにキャンセルを要求する。実行中でなければ False。"""
        running = self._running_agents.get(agent_name)
        if running is None:
            return False
        running.cancel_event.set()
        logger.info(f"エージェント {agent_name} にキャンセルを要求しました")
        return True

    @property
    def concurrency_limit(self) -> int:
        """同時実行数の上限。"""
        return self._concurrency_limit

    def set_concurrency_limit(self, limit: int) -> None:
        """同時実行数の上限を変更する。実行中のエージェントには影響しない。"""
        if limit < 1:
            raise ValueError(f"同時実行数の上限は 1 以上を指定してください: {limit}")
        self._concurrency_limit = limit
        logger.info(f"同時実行数の上限を変更しました: {limit}")

    # ========== タスク ==========

    async def create_task(
        self,
        assignee: str,
        prompt: str,
        context: str | None = None,
        delegator: str | None = None,
        parent_task_id: str | None = None,
        priority: int = 0,
        tags: list[TaskTag] | None = None,
    ) -> TaskState:
        """pending のタスクを作成する。"""
        task = TaskState(
            assignee_id=assignee,
            prompt=prompt,
            context=context,
            delegator_id=delegator,
            parent_task_id=parent_task_id,
            priority=priority,
            tags=tags or [],
        )
        self.tasks.save(task)
        self.emit(
            EventKind.TASK_CREATED,
            TaskCreated(task_id=task.id, assignee=assignee, delegator=delegator),
        )
        logger.info(f"タスクを作成しました: {task.id} -> {assignee}")
        return task

    async def delegate_task(
        self,
        delegator: str,
        target: str,
        prompt: str,
        context: str | None = None,
        parent_task_id: str | None = None,
        priority: int = 0,
    ) -> TaskState:
        """別のエージェントにタスクを委譲する。

        Raises:
            AgentNotFoundError: 委譲元または委譲先が存在しない
        """
        if not self.agents.exists(delegator):
            raise AgentNotFoundError(f"委譲元のエージェントが見つかりません: {delegator}")
        if not self.agents.exists(target):
            raise AgentNotFoundError(f"委譲先のエージェントが見つかりません: {target}")
        return await self.create_task(
            target,
            prompt,
            context=context,
            delegator=delegator,
            parent_task_id=parent_task_id,
            priority=priority,
        )

    # ========== エージェント管理 ==========

    async def create_agent(
        self,
        name: str,
        display_name: str,
        role: str,
        department: str,
        level: AgentLevel | str = AgentLevel.IC,
        personality: str = "",
        avatar_color: str | None = None,
    ) -> AgentConfig:
        """エージェントを作成する。

        Raises:
            ValueError: 名前が slug 形式でない、または既に存在する
        """
        if not AGENT_NAME_PATTERN.match(name):
            raise ValueError(f"エージェント名は英小文字・数字・ハイフンのみ使用できます: {name}")
        if self.agents.exists(name):
            raise ValueError(f"エージェントは既に存在します: {name}")

        agent = AgentConfig(
            name=name,
            display_name=display_name,
            role=role,
            department=department,
            level=AgentLevel(level),
            personality=personality,
            avatar_color=avatar_color,
        )
        self.agents.save(agent)
        self.emit(EventKind.AGENT_CREATED, AgentCreated(agent_name=name))
        logger.info(f"エージェントを作成しました: {name}")
        return agent

    async def update_agent(self, agent_name: str, **changes: Any) -> bool:
        """エージェントのプロパティを更新する。

        Args:
            agent_name: 対象エージェント名
            **changes: 変更するフィールド（None は変更なし扱い）

        Returns:
            変更があった場合 True

        Raises:
            AgentNotFoundError: エージェントが存在しない
            ValueError: 変更できないフィールドが指定された
        """
        unknown = set(changes) - set(UPDATABLE_AGENT_FIELDS)
        if unknown:
            raise ValueError(f"変更できないフィールドです: {', '.join(sorted(unknown))}")

        agent = self.agents.get(agent_name)
        if agent is None:
            raise AgentNotFoundError(f"エージェントが見つかりません: {agent_name}")

        updates = {key: value for key, value in changes.items() if value is not None}
        if "level" in updates:
            updates["level"] = AgentLevel(updates["level"])
        if not updates:
            return False

        for key, value in updates.items():
            setattr(agent, key, value)
        agent.updated_at = utc_now()
        self.agents.save(agent)
        self.emit(EventKind.AGENT_UPDATED, AgentUpdated(agent_name=agent_name))
        logger.info(f"エージェントを更新しました: {agent_name} ({', '.join(updates)})")
        return True

    async def delete_agent(self, agent_name: str) -> None:
        """エージェントを削除し、組織ツリーから外す。

        Raises:
            AgentNotFoundError: エージェントが存在しない
            AgentRunningError: エージェントが実行中
        """
        agent = self.agents.get(agent_name)
        if agent is None:
            raise AgentNotFoundError(f"エージェントが見つかりません: {agent_name}")
        if agent.is_running or self.is_agent_running(agent_name):
            raise AgentRunningError(
                f"エージェント {agent_name} はタスク {agent.current_task_id} を実行中のため削除できません。"
                "タスクの完了を待つか、キャンセルしてください"
            )

        self.agents.delete(agent_name)
        self.org.remove_agent(agent_name)
        self.emit(EventKind.AGENT_DELETED, AgentDeleted(agent_name=agent_name))
        self.emit(EventKind.ORG_CHANGED, OrgChanged())

    async def set_org_parent(self, agent_name: str, parent_agent_name: str | None) -> bool:
        """エージェントの上長を設定する。

        上長がまだ組織図に居ない場合は、先に上長をルートとして配置する。

        Returns:
            上長をルートとして自動配置した場合 True

        Raises:
            AgentNotFoundError: エージェントまたは上長が存在しない
            OrgCycleError: 循環を作る親子付け
        """
        if not self.agents.exists(agent_name):
            raise AgentNotFoundError(f"エージェントが見つかりません: {agent_name}")
        parent_placed = False
        if parent_agent_name is not None:
            if parent_agent_name == agent_name:
                raise OrgCycleError(agent_name, parent_agent_name)
            if not self.agents.exists(parent_agent_name):
                raise AgentNotFoundError(f"上長のエージェントが見つかりません: {parent_agent_name}")
            if not self.org.contains(parent_agent_name):
                self.org.set_parent(parent_agent_name, None)
                parent_placed = True
                logger.info(f"上長 {parent_agent_name} を組織図のルートに配置しました")

        self.org.set_parent(agent_name, parent_agent_name)
        self.emit(EventKind.ORG_CHANGED, OrgChanged())
        return parent_placed

    # ========== 作業メモリ ==========

    def get_agent_context(self, agent_name: str) -> str | None:
        """エージェントの作業メモリ（context.md）を取得する。"""
        return self.agents.read_context(agent_name)

    async def update_context(self, agent_name: str, content: str) -> Path:
        """エージェントの作業メモリ（context.md）を書き換える。"""
        path = self.agents.write_context(agent_name, content)
        logger.info(f"context.md を更新しました: {agent_name}")
        return path

    # ========== メッセージ ==========

    async def send_message(
        self,
        from_agent: str | None,
        to_agent: str,
        body: str,
        subject: str | None = None,
        thread_id: str | None = None,
        message_type: MessageType | str = MessageType.DIRECT,
    ) -> Message:
        """メッセージを送信する。thread_id 省略時は新しいスレッドを作る。"""
        message = Message(
            thread_id=thread_id or str(uuid.uuid4()),
            from_agent_id=from_agent,
            to_agent_id=to_agent,
            subject=subject,
            body=body,
            type=MessageType(message_type),
            status=MessageStatus.DELIVERED,
        )
        self.messages.save(message)
        self.emit(
            EventKind.MESSAGE_CREATED,
            MessageCreated(
                message_id=message.id,
                from_agent=from_agent,
                to_agent=to_agent,
                thread_id=message.thread_id,
            ),
        )
        return message

    async def read_thread(self, thread_id: str, reader: str) -> list[Message]:
        """スレッドを読み、reader 宛の未読メッセージを既読にする。

        返すメッセージは既読化前の状態。
        """
        messages = self.messages.list_thread(thread_id)
        for message in messages:
            if message.to_agent_id == reader and message.status != MessageStatus.READ:
                self.messages.mark_read(message.id, thread_id)
        return messages

    def get_unread_messages(self, agent_name: str) -> list[Message]:
        """エージェント宛の未読メッセージを取得する。"""
        return self.messages.get_unread(agent_name)

    # ========== ボード ==========

    async def post_board_item(
        self,
        item_type: BoardItemType | str,
        author: str,
        summary: str,
        body: str,
    ) -> BoardItem:
        """ボードに投稿する。"""
        item = BoardItem(type=BoardItemType(item_type), author=author, summary=summary, body=body)
        item.path = self.board.save(item)
        self.emit(
            EventKind.BOARD_ITEM_CREATED,
            BoardItemCreated(item_type=item.type, author=author, path=item.path),
        )
        logger.info(f"ボードに投稿しました: [{item.type.value}] {author}")
        return item

    def list_board_items(
        self,
        item_type: BoardItemType | str | None = None,
        author: str | None = None,
        limit: int | None = None,
    ) -> list[BoardItem]:
        """ボード投稿を新しい順で取得する。"""
        return self.board.list(item_type=item_type, author=author, limit=limit)

    # ========== 参照系 ==========

    def get_agent(self, name: str) -> AgentConfig | None:
        """エージェントを取得する。"""
        return self.agents.get(name)

    def list_agents(self) -> list[AgentConfig]:
        """全エージェントを取得する。"""
        return self.agents.list()

    def get_task(self, task_id: str) -> TaskState | None:
        """タスクを取得する。"""
        return self.tasks.get(task_id)

    def list_tasks(
        self,
        assignee_id: str | None = None,
        status: TaskStatus | str | None = None,
    ) -> list[TaskState]:
        """タスクを新しい順で取得する。"""
        return self.tasks.list(assignee_id=assignee_id, status=status)

    def get_org_tree(self) -> OrgTree:
        """組織ツリー全体を取得する。"""
        return self.org.get()

    def get_org_children(self, agent_name: str) -> list[OrgNode]:
        """直属の部下を取得する。"""
        return self.org.get_children(agent_name)

    def get_org_parent(self, agent_name: str) -> str | None:
        """上長のエージェント名を取得する。"""
        return self.org.get_parent(agent_name)

    # ========== システムプロンプト ==========

    def build_system_prompt(self, agent: AgentConfig, task: TaskState) -> str:
        """エージェントとタスクからシステムプロンプトを生成する。"""
        delegator_display_name = None
        if task.delegator_id:
            delegator = self.agents.get(task.delegator_id)
            if delegator:
                delegator_display_name = delegator.display_name

        params = PromptParams(
            agent=agent,
            task=task,
            manager=self._get_manager(agent.name),
            org_reports=self._get_org_reports(agent.name),
            pending_results=read_pending_results(self.base_path, agent.name),
            context_md=self.get_agent_context(agent.name),
            recent_board_items=self.board.list(limit=self.settings.recent_board_items_limit),
            delegator_display_name=delegator_display_name,
        )
        return build_agent_system_prompt(params)

    def _get_manager(self, agent_name: str) -> ManagerInfo | None:
        parent_name = self.org.get_parent(agent_name)
        if not parent_name:
            return None
        parent = self.agents.get(parent_name)
        if parent is None:
            return None
        return ManagerInfo(name=parent.display_name, role=parent.role, status=parent.status)

    def _get_org_reports(self, agent_name: str) -> list[OrgReport]:
        reports = []
        for child in self.org.get_children(agent_name):
            agent = self.agents.get(child.agent_name)
            if agent:
                reports.append(
                    OrgReport(
                        name=agent.name,
                        role=agent.role,
                        status=agent.status,
                        current_task=agent.current_task_id,
                    )
                )
        return reports
