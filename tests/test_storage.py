"""ストレージ（エージェント・タスク・メッセージ・ボード）のテスト。"""

import json
import os
from datetime import datetime, timedelta, timezone

import pytest

from agent_org.managers.board_storage import build_board_document, parse_board_document
from agent_org.managers.persistence import atomic_write_text
from agent_org.models.agent import AgentConfig, AgentStatus
from agent_org.models.board import BoardItem, BoardItemType
from agent_org.models.message import Message, MessageStatus
from agent_org.models.task import TaskState, TaskStatus

BASE_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def _at(seconds: int) -> datetime:
    return BASE_TIME + timedelta(seconds=seconds)


def _agent(name: str) -> AgentConfig:
    return AgentConfig(name=name, display_name=name.title(), role="Engineer", department="Eng")


class TestAtomicWrite:
    """アトミック書き込みのテスト。"""

    def test_write_creates_parent_and_leaves_no_temp(self, temp_dir):
        """親ディレクトリを作成し、一時ファイルを残さないことをテスト。"""
        path = temp_dir / "a" / "b" / "file.txt"
        atomic_write_text(path, "hello")

        assert path.read_text(encoding="utf-8") == "hello"
        assert [p.name for p in path.parent.iterdir()] == ["file.txt"]

    def test_failed_replace_keeps_old_content(self, temp_dir, monkeypatch):
        """rename に失敗した場合に旧内容が残り、一時ファイルも消えることをテスト。"""
        path = temp_dir / "file.txt"
        atomic_write_text(path, "old")

        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", fail_replace)
        with pytest.raises(OSError, match="disk full"):
            atomic_write_text(path, "new")

        assert path.read_text(encoding="utf-8") == "old"
        assert [p.name for p in temp_dir.iterdir()] == ["file.txt"]


class TestAgentStorage:
    """AgentStorageのテスト。"""

    def test_save_and_get(self, agent_storage, temp_dir):
        """保存と取得をテスト。"""
        agent = _agent("eng")
        agent_storage.save(agent)

        loaded = agent_storage.get("eng")
        assert loaded == agent
        data = json.loads((temp_dir / "agents" / "eng" / "config.json").read_text())
        assert data["displayName"] == "Eng"

    def test_json_is_two_space_indented(self, agent_storage, temp_dir):
        """JSON が 2 スペースでインデントされることをテスト。"""
        agent_storage.save(_agent("eng"))
        text = (temp_dir / "agents" / "eng" / "config.json").read_text()
        assert '\n  "name": "eng"' in text

    def test_get_missing_returns_none(self, agent_storage):
        """存在しないエージェントは None になることをテスト。"""
        assert agent_storage.get("ghost") is None
        assert not agent_storage.exists("ghost")

    def test_list_empty_when_dir_missing(self, agent_storage):
        """ディレクトリが無い場合は空リストになることをテスト。"""
        assert agent_storage.list() == []

    def test_list_sorted_by_name(self, agent_storage):
        """名前順で返ることをテスト。"""
        for name in ("zeta", "alpha", "mid"):
            agent_storage.save(_agent(name))
        assert [a.name for a in agent_storage.list()] == ["alpha", "mid", "zeta"]

    def test_list_skips_dirs_without_config(self, agent_storage):
        """config.json の無いディレクトリを無視することをテスト。"""
        agent_storage.ensure_agent_dir("empty")
        agent_storage.save(_agent("eng"))
        assert [a.name for a in agent_storage.list()] == ["eng"]

    def test_delete_removes_directory(self, agent_storage):
        """削除でディレクトリごと消えることをテスト。"""
        agent_storage.save(_agent("eng"))
        agent_storage.write_context("eng", "memo")
        agent_storage.delete("eng")

        assert agent_storage.get("eng") is None
        assert not agent_storage.get_agent_dir("eng").exists()
        agent_storage.delete("eng")

    def test_corrupt_json_propagates(self, agent_storage):
        """壊れた JSON はエラーとして伝播することをテスト。"""
        agent_dir = agent_storage.ensure_agent_dir("bad")
        (agent_dir / "config.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            agent_storage.get("bad")

    def test_context_read_write(self, agent_storage):
        """context.md の読み書きをテスト。"""
        assert agent_storage.read_context("eng") is None
        agent_storage.write_context("eng", "# Notes\n")
        assert agent_storage.read_context("eng") == "# Notes\n"

    def test_status_round_trip(self, agent_storage):
        """状態と実行中タスクが保存されることをテスト。"""
        agent = _agent("eng")
        agent.status = AgentStatus.RUNNING
        agent.current_task_id = "T1"
        agent_storage.save(agent)

        loaded = agent_storage.get("eng")
        assert loaded.status == AgentStatus.RUNNING
        assert loaded.current_task_id == "T1"


class TestTaskStorage:
    """TaskStorageのテスト。"""

    def test_save_and_get(self, task_storage, temp_dir):
        """保存と取得をテスト。"""
        task = TaskState(id="T1", assignee_id="eng", prompt="Fix", created_at=_at(0))
        task_storage.save(task)

        assert task_storage.get("T1") == task
        assert (temp_dir / "tasks" / "T1.json").exists()

    def test_get_missing_returns_none(self, task_storage):
        """存在しないタスクは None になることをテスト。"""
        assert task_storage.get("nope") is None
        assert task_storage.list() == []

    def test_list_sorted_newest_first(self, task_storage):
        """作成日時の新しい順で返ることをテスト。"""
        for i, task_id in enumerate(["a", "b", "c"]):
            task_storage.save(
                TaskState(id=task_id, assignee_id="eng", prompt="p", created_at=_at(i))
            )
        assert [t.id for t in task_storage.list()] == ["c", "b", "a"]

    def test_list_filters(self, task_storage):
        """担当者と状態で絞り込めることをテスト。"""
        task_storage.save(TaskState(id="1", assignee_id="eng", prompt="p", created_at=_at(0)))
        task_storage.save(
            TaskState(
                id="2",
                assignee_id="eng",
                prompt="p",
                status=TaskStatus.RUNNING,
                created_at=_at(1),
            )
        )
        task_storage.save(TaskState(id="3", assignee_id="ops", prompt="p", created_at=_at(2)))

        assert [t.id for t in task_storage.list(assignee_id="eng")] == ["2", "1"]
        assert [t.id for t in task_storage.list(status="pending")] == ["3", "1"]
        assert [
            t.id for t in task_storage.list(assignee_id="eng", status=TaskStatus.RUNNING)
        ] == ["2"]

    def test_list_ignores_temp_files(self, task_storage, temp_dir):
        """一時ファイルを一覧に含めないことをテスト。"""
        task_storage.save(TaskState(id="T1", assignee_id="eng", prompt="p"))
        (temp_dir / "tasks" / "leftover.json.tmp").write_text("{", encoding="utf-8")
        assert [t.id for t in task_storage.list()] == ["T1"]

    def test_delete(self, task_storage):
        """削除をテスト。"""
        task_storage.save(TaskState(id="T1", assignee_id="eng", prompt="p"))
        assert task_storage.delete("T1") is True
        assert task_storage.delete("T1") is False


class TestMessageStorage:
    """MessageStorageのテスト。"""

    def _message(self, message_id: str, thread_id: str, to: str, seconds: int, **kwargs):
        return Message(
            id=message_id,
            thread_id=thread_id,
            from_agent_id=kwargs.pop("from_agent_id", "ceo"),
            to_agent_id=to,
            body=f"body {message_id}",
            status=kwargs.pop("status", MessageStatus.DELIVERED),
            created_at=_at(seconds),
        )

    def test_save_and_get(self, message_storage, temp_dir):
        """保存と取得をテスト。"""
        message = self._message("m1", "th1", "eng", 0)
        message_storage.save(message)

        assert message_storage.get("m1", "th1") == message
        assert (temp_dir / "messages" / "th1" / "m1.json").exists()
        assert message_storage.get("m1", "other") is None

    def test_list_thread_oldest_first(self, message_storage):
        """スレッド内が古い順で返ることをテスト。"""
        message_storage.save(self._message("b", "th", "eng", 2))
        message_storage.save(self._message("a", "th", "eng", 5))
        message_storage.save(self._message("c", "th", "eng", 1))

        assert [m.id for m in message_storage.list_thread("th")] == ["c", "b", "a"]
        assert message_storage.list_thread("missing") == []

    def test_list_threads(self, message_storage):
        """スレッド一覧をテスト。"""
        assert message_storage.list_threads() == []
        message_storage.save(self._message("m1", "th1", "eng", 0))
        message_storage.save(self._message("m2", "th2", "eng", 1))
        assert sorted(message_storage.list_threads()) == ["th1", "th2"]

    def test_get_unread_across_threads(self, message_storage):
        """全スレッドの未読が古い順に集まることをテスト。"""
        message_storage.save(self._message("late", "th1", "eng", 10))
        message_storage.save(self._message("early", "th2", "eng", 1))
        message_storage.save(self._message("other", "th2", "ops", 2))
        message_storage.save(self._message("done", "th1", "eng", 3, status=MessageStatus.READ))

        assert [m.id for m in message_storage.get_unread("eng")] == ["early", "late"]

    def test_mark_read(self, message_storage):
        """既読化をテスト。"""
        message_storage.save(self._message("m1", "th", "eng", 0))
        message_storage.mark_read("m1", "th")

        loaded = message_storage.get("m1", "th")
        assert loaded.status == MessageStatus.READ
        assert loaded.read_at is not None
        assert message_storage.get_unread("eng") == []

    def test_mark_read_missing_is_noop(self, message_storage):
        """存在しないメッセージの既読化は何もしないことをテスト。"""
        assert message_storage.mark_read("ghost", "th") is None
        assert message_storage.list_threads() == []

    def test_delete(self, message_storage):
        """削除と空スレッドの片付けをテスト。"""
        message_storage.save(self._message("m1", "th", "eng", 0))
        message_storage.save(self._message("m2", "th", "eng", 1))

        assert message_storage.delete("m1", "th") is True
        assert [m.id for m in message_storage.list_thread("th")] == ["m2"]
        assert message_storage.delete("m1", "th") is False

        assert message_storage.delete("m2", "th") is True
        assert message_storage.list_threads() == []


class TestBoardStorage:
    """BoardStorageのテスト。"""

    def _item(self, item_id: str, item_type=BoardItemType.FINDING, seconds=0, **kwargs):
        return BoardItem(
            id=item_id,
            type=item_type,
            author=kwargs.pop("author", "eng"),
            summary=kwargs.pop("summary", f"summary {item_id}"),
            body=kwargs.pop("body", "details"),
            created_at=_at(seconds),
        )

    def test_save_writes_front_matter(self, board_storage, temp_dir):
        """Front Matter 形式で保存されることをテスト。"""
        path = board_storage.save(self._item("b1", BoardItemType.BLOCKER, summary="need help"))

        assert path == temp_dir / "board" / "blockers" / "b1.md"
        assert path.read_text(encoding="utf-8") == (
            "---\n"
            "id: b1\n"
            "type: blocker\n"
            "author: eng\n"
            "summary: need help\n"
            "createdAt: 2025-01-01T12:00:00.000Z\n"
            "---\n"
            "\n"
            "details\n"
        )

    def test_get_sets_path(self, board_storage):
        """読み込み元パスが設定されることをテスト。"""
        path = board_storage.save(self._item("b1"))
        item = board_storage.get("finding", "b1")
        assert item.path == path
        assert item.body == "details"

    def test_summary_with_colons_round_trips(self, board_storage):
        """コロンを含む summary がそのまま復元されることをテスト。"""
        summary = "Deploy: step 1: done at 12:30"
        board_storage.save(self._item("b1", summary=summary))
        assert board_storage.get(BoardItemType.FINDING, "b1").summary == summary

    def test_multiline_body_trailing_whitespace_trimmed(self, board_storage):
        """複数行の本文が末尾空白を除いて復元されることをテスト。"""
        board_storage.save(self._item("b1", body="line 1\n\nline 2\n\n\n"))
        assert board_storage.get("finding", "b1").body == "line 1\n\nline 2"

    def test_path_not_written_to_file(self, board_storage):
        """path がファイルに書き込まれないことをテスト。"""
        path = board_storage.save(self._item("b1"))
        assert "path" not in path.read_text(encoding="utf-8")

    def test_delete(self, board_storage):
        """削除をテスト。"""
        board_storage.save(self._item("b1"))

        assert board_storage.delete(BoardItemType.FINDING, "b1") is True
        assert board_storage.get(BoardItemType.FINDING, "b1") is None
        assert board_storage.delete("finding", "b1") is False
        assert board_storage.delete("gossip", "b1") is False

    def test_get_missing_or_unknown_type(self, board_storage):
        """存在しない投稿・不明な種類は None になることをテスト。"""
        assert board_storage.get("finding", "ghost") is None
        assert board_storage.get("gossip", "b1") is None

    def test_malformed_document_is_skipped(self, board_storage, temp_dir):
        """形式が不正な投稿は無視されることをテスト。"""
        board_storage.save(self._item("ok"))
        bad = temp_dir / "board" / "findings" / "bad.md"
        bad.write_text("no front matter here\n", encoding="utf-8")

        assert board_storage.get("finding", "bad") is None
        assert [i.id for i in board_storage.list()] == ["ok"]

    def test_list_newest_first_with_filters_and_limit(self, board_storage):
        """新しい順・絞り込み・件数制限をテスト。"""
        board_storage.save(self._item("old", BoardItemType.FINDING, seconds=0, author="eng"))
        board_storage.save(self._item("mid", BoardItemType.BLOCKER, seconds=5, author="ops"))
        board_storage.save(self._item("new", BoardItemType.REQUEST, seconds=9, author="eng"))

        assert [i.id for i in board_storage.list()] == ["new", "mid", "old"]
        assert [i.id for i in board_storage.list(item_type="blocker")] == ["mid"]
        assert [i.id for i in board_storage.list(author="eng")] == ["new", "old"]
        assert [i.id for i in board_storage.list(limit=2)] == ["new", "mid"]

    def test_list_empty_when_dir_missing(self, board_storage):
        """ディレクトリが無い場合は空リストになることをテスト。"""
        assert board_storage.list() == []

    def test_parse_document_directly(self):
        """Markdown の組み立てと解析が対応することをテスト。"""
        item = self._item("b1", summary="a: b")
        parsed = parse_board_document(build_board_document(item))
        assert parsed.model_dump(exclude={"path"}) == item.model_dump(exclude={"path"})

    def test_newlines_in_summary_collapsed(self, board_storage):
        """summary の改行が空白にまとめられることをテスト。"""
        board_storage.save(self._item("b1", summary="first\nsecond"))
        assert board_storage.get("finding", "b1").summary == "first second"
