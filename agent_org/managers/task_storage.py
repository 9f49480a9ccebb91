"""タスク状態の永続化モジュール。

保存先: {workspace}/tasks/{id}.json
"""

import logging
from pathlib import Path

from agent_org.managers.persistence import atomic_write_json, list_files, read_json, remove_file
from agent_org.models.task import TaskState, TaskStatus

logger = logging.getLogger(__name__)


class TaskStorage:
    """タスク状態を 1 タスク 1 ファイルで管理するクラス。"""

    def __init__(self, base_path: str | Path) -> None:
        """TaskStorageを初期化する。

        Args:
            base_path: ワークスペースのルート
        """
        self.tasks_dir = Path(base_path) / "tasks"

    def _get_task_path(self, task_id: str) -> Path:
        return self.tasks_dir / f"{task_id}.json"

    def save(self, task: TaskState) -> None:
        """タスクを保存する。"""
        atomic_write_json(self._get_task_path(task.id), task.to_record())

    def get(self, task_id: str) -> TaskState | None:
        """タスクを取得する。存在しない場合は None。"""
        data = read_json(self._get_task_path(task_id))
        if data is None:
            return None
        return TaskState.model_validate(data)

    def list(
        self,
        assignee_id: str | None = None,
        status: TaskStatus | str | None = None,
    ) -> list[TaskState]:
        """タスク一覧を作成日時の新しい順で取得する。

        Args:
            assignee_id: 担当エージェントで絞り込む
            status: 状態で絞り込む

        Returns:
            タスクのリスト
        """
        status_filter = TaskStatus(status) if status is not None else None
        tasks = []
        for path in list_files(self.tasks_dir, ".json"):
            task = self.get(path.stem)
            if task is None:
                continue
            if assignee_id is not None and task.assignee_id != assignee_id:
                continue
            if status_filter is not None and task.status != status_filter:
                continue
            tasks.append(task)
        return sorted(tasks, key=lambda t: t.created_at, reverse=True)

    def delete(self, task_id: str) -> bool:
        """タスクを削除する。削除した場合 True。"""
        return remove_file(self._get_task_path(task_id))
