"""委譲結果の配送モジュール。

子タスクが終了したら、結果を親タスク担当者の受信箱
{workspace}/agents/{parent}/results/{ts}-{childTaskId}.md に書き出す。
"""

import logging
import re
from datetime import datetime
from enum import Enum
from pathlib import Path

from agent_org.managers.persistence import atomic_write_text, list_files
from agent_org.models.common import format_timestamp, utc_now
from agent_org.models.task import PendingResult

logger = logging.getLogger(__name__)

NO_RESULT_PLACEHOLDER = "(no result provided)"

_TASK_ID_LINE = re.compile(r"^\*\*Task ID\*\*: (.+)$", re.MULTILINE)


def get_results_dir(base_path: str | Path, agent_name: str) -> Path:
    """エージェントの受信箱ディレクトリを返す。"""
    return Path(base_path) / "agents" / agent_name / "results"


def build_result_document(
    child_task_id: str,
    child_result: str | None,
    child_status: str,
    completed_at: str,
) -> str:
    """結果ファイルの本文を組み立てる。"""
    result = (child_result or "").strip() or NO_RESULT_PLACEHOLDER
    return (
        "# Child Task Result\n"
        "\n"
        f"**Task ID**: {child_task_id}\n"
        f"**Status**: {child_status}\n"
        f"**Completed**: {completed_at}\n"
        "\n"
        "---\n"
        "\n"
        f"{result}\n"
    )


def _unique_path(directory: Path, stem: str) -> Path:
    """既存ファイルを上書きしないパスを返す。"""
    path = directory / f"{stem}.md"
    counter = 1
    while path.exists():
        path = directory / f"{stem}-{counter}.md"
        counter += 1
    return path


def handle_child_completion(
    base_path: str | Path,
    child_task_id: str,
    child_result: str | None,
    child_status: str | Enum,
    parent_task_id: str,
    parent_agent_name: str,
    completed_at: datetime | None = None,
) -> Path:
    """子タスクの結果を親タスク担当者の受信箱に書き出す。

    Args:
        base_path: ワークスペースのルート
        child_task_id: 終了した子タスクのID
        child_result: 子タスクの結果（None なら定型文を書く）
        child_status: 子タスクの終了状態
        parent_task_id: 親タスクのID
        parent_agent_name: 親タスクの担当エージェント名
        completed_at: 完了日時（省略時は現在時刻）

    Returns:
        書き出した結果ファイルのパス
    """
    timestamp = format_timestamp(completed_at or utc_now())
    status = getattr(child_status, "value", child_status)

    results_dir = get_results_dir(base_path, parent_agent_name)
    results_dir.mkdir(parents=True, exist_ok=True)
    stem = f"{re.sub(r'[:.]', '-', timestamp)}-{child_task_id}"
    path = _unique_path(results_dir, stem)

    atomic_write_text(
        path, build_result_document(child_task_id, child_result, status, timestamp)
    )
    logger.info(
        f"子タスク {child_task_id} の結果を {parent_agent_name} に配送しました"
        f"（親タスク: {parent_task_id}）: {path.name}"
    )
    return path


def read_pending_results(base_path: str | Path, agent_name: str) -> list[PendingResult]:
    """受信箱の結果を到着順（ファイル名順）で読み込む。"""
    results = []
    for path in list_files(get_results_dir(base_path, agent_name), ".md"):
        content = path.read_text(encoding="utf-8")
        match = _TASK_ID_LINE.search(content)
        child_task_id = match.group(1).strip() if match else path.stem
        results.append(PendingResult(child_task_id=child_task_id, result=content, path=path))
    return results
