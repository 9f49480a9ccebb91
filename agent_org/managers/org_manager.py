"""組織ツリー管理モジュール。

保存先: {workspace}/org.json
形式: {"roots": [{agentName, parentAgentName, children: [...], position}]}

メモリ上では名前をキーにしたフラットな表（親・子の名前リスト・position）と
ルート名のリストで扱い、保存時に入れ子の JSON に戻す。
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from agent_org.errors import OrgCycleError
from agent_org.managers.persistence import atomic_write_json, read_json
from agent_org.models.org import OrgNode, OrgTree

logger = logging.getLogger(__name__)

ORG_FILENAME = "org.json"


@dataclass
class _OrgEntry:
    """フラット表の 1 ノード。"""

    parent: str | None
    position: int
    children: list[str] = field(default_factory=list)


@dataclass
class _OrgTable:
    """組織ツリーのフラット表現。"""

    entries: dict[str, _OrgEntry] = field(default_factory=dict)
    roots: list[str] = field(default_factory=list)

    def siblings_of(self, parent: str | None) -> list[str]:
        """指定した親の子リスト（None ならルートリスト）を返す。"""
        if parent is None:
            return self.roots
        return self.entries[parent].children

    def detach(self, name: str) -> None:
        """ノードを兄弟リストから外す。部下はそのまま保持する。"""
        self.siblings_of(self.entries[name].parent).remove(name)

    def attach(self, name: str, parent: str | None) -> None:
        """ノードを親の末尾（またはルート末尾）に追加する。"""
        entry = self.entries[name]
        entry.parent = parent
        siblings = self.siblings_of(parent)
        entry.position = len(siblings)
        siblings.append(name)

    def is_self_or_descendant(self, name: str, candidate: str) -> bool:
        """candidate が name 自身、または name の配下かどうか。"""
        current: str | None = candidate
        while current is not None:
            if current == name:
                return True
            current = self.entries[current].parent
        return False

    def build_node(self, name: str) -> OrgNode:
        """入れ子の OrgNode を組み立てる。"""
        entry = self.entries[name]
        return OrgNode(
            agent_name=name,
            parent_agent_name=entry.parent,
            children=[self.build_node(child) for child in entry.children],
            position=entry.position,
        )


class OrgManager:
    """組織ツリー（上長と部下の関係）を管理するクラス。"""

    def __init__(self, base_path: str | Path) -> None:
        """OrgManagerを初期化する。

        Args:
            base_path: ワークスペースのルート
        """
        self.file_path = Path(base_path) / ORG_FILENAME

    def get(self) -> OrgTree:
        """組織ツリー全体を取得する。ファイルが無い場合は空のツリー。"""
        return self._to_tree(self._load())

    def save(self, tree: OrgTree) -> None:
        """組織ツリー全体を保存する。"""
        atomic_write_json(self.file_path, tree.to_record())

    def contains(self, agent_name: str) -> bool:
        """ツリーにエージェントが含まれるかどうか。"""
        return agent_name in self._load().entries

    def set_parent(self, agent_name: str, parent_agent_name: str | None) -> None:
        """エージェントの上長を設定する。

        エージェントは配下ごと移動する。上長がツリーに存在しない場合はルートになる。

        Args:
            agent_name: 対象エージェント名
            parent_agent_name: 上長のエージェント名（None でルート）

        Raises:
            OrgCycleError: 上長が自分自身または自分の配下の場合
        """
        if parent_agent_name == agent_name:
            raise OrgCycleError(agent_name, parent_agent_name)

        table = self._load()
        if parent_agent_name is not None and parent_agent_name not in table.entries:
            logger.warning(
                f"上長 {parent_agent_name} がツリーに存在しないため {agent_name} をルートに配置します"
            )
            parent_agent_name = None

        if agent_name in table.entries:
            if parent_agent_name is not None and table.is_self_or_descendant(
                agent_name, parent_agent_name
            ):
                raise OrgCycleError(agent_name, parent_agent_name)
            table.detach(agent_name)
        else:
            table.entries[agent_name] = _OrgEntry(parent=None, position=0)

        table.attach(agent_name, parent_agent_name)
        self._save(table)
        logger.info(f"組織ツリーを更新しました: {agent_name} -> {parent_agent_name or '(root)'}")

    def get_parent(self, agent_name: str) -> str | None:
        """上長のエージェント名を取得する。"""
        entry = self._load().entries.get(agent_name)
        return entry.parent if entry else None

    def get_children(self, agent_name: str) -> list[OrgNode]:
        """直属の部下を並び順で取得する。"""
        table = self._load()
        entry = table.entries.get(agent_name)
        if entry is None:
            return []
        return [table.build_node(child) for child in entry.children]

    def remove_agent(self, agent_name: str) -> None:
        """エージェントをツリーから削除する。

        直属の部下は順番を保ったまま、削除したエージェントの上長
        （ルートだった場合はルート）の末尾に付け替える。孫以下はそのまま。
        """
        table = self._load()
        if agent_name not in table.entries:
            return

        table.detach(agent_name)
        removed = table.entries.pop(agent_name)
        for child in removed.children:
            table.attach(child, removed.parent)

        self._save(table)
        logger.info(f"組織ツリーから削除しました: {agent_name}")

    def _load(self) -> _OrgTable:
        data = read_json(self.file_path)
        table = _OrgTable()
        if data is None:
            return table

        tree = OrgTree.model_validate(data)
        # (node, 構造上の親) を深さ優先で走査する
        stack: list[tuple[OrgNode, str | None]] = [(n, None) for n in reversed(tree.roots)]
        while stack:
            node, parent = stack.pop()
            if node.agent_name in table.entries:
                logger.warning(f"org.json に重複したエージェントがあるため無視します: {node.agent_name}")
                continue
            table.entries[node.agent_name] = _OrgEntry(parent=parent, position=node.position)
            table.siblings_of(parent).append(node.agent_name)
            stack.extend((child, node.agent_name) for child in reversed(node.children))
        return table

    def _save(self, table: _OrgTable) -> None:
        self.save(self._to_tree(table))

    @staticmethod
    def _to_tree(table: _OrgTable) -> OrgTree:
        return OrgTree(roots=[table.build_node(name) for name in table.roots])
