"""OrgManagerのテスト。"""

import json

import pytest

from agent_org.errors import OrgCycleError
from agent_org.models.org import OrgNode, OrgTree


def _names(nodes: list[OrgNode]) -> list[str]:
    return [n.agent_name for n in nodes]


class TestOrgManager:
    """OrgManagerのテスト。"""

    def test_empty_tree_when_file_missing(self, org_manager):
        """org.json が無い場合は空のツリーになることをテスト。"""
        assert org_manager.get() == OrgTree()
        assert org_manager.get_parent("a") is None
        assert org_manager.get_children("a") == []

    def test_set_parent_basic(self, org_manager):
        """ルート登録と親子付けをテスト。"""
        org_manager.set_parent("a", None)
        org_manager.set_parent("b", "a")

        assert org_manager.get_parent("b") == "a"
        assert _names(org_manager.get_children("a")) == ["b"]
        assert org_manager.get_parent("a") is None

    def test_nested_document_format(self, org_manager, temp_dir):
        """org.json が入れ子の camelCase 形式で保存されることをテスト。"""
        org_manager.set_parent("a", None)
        org_manager.set_parent("b", "a")

        data = json.loads((temp_dir / "org.json").read_text(encoding="utf-8"))
        assert data == {
            "roots": [
                {
                    "agentName": "a",
                    "parentAgentName": None,
                    "children": [
                        {
                            "agentName": "b",
                            "parentAgentName": "a",
                            "children": [],
                            "position": 0,
                        }
                    ],
                    "position": 0,
                }
            ]
        }

    def test_positions_are_sibling_counts(self, org_manager):
        """position が挿入時の兄弟数になることをテスト。"""
        org_manager.set_parent("root", None)
        for name in ("x", "y", "z"):
            org_manager.set_parent(name, "root")

        children = org_manager.get_children("root")
        assert _names(children) == ["x", "y", "z"]
        assert [c.position for c in children] == [0, 1, 2]

    def test_unknown_parent_becomes_root(self, org_manager):
        """上長がツリーに無い場合はルートになることをテスト。"""
        org_manager.set_parent("a", "ghost")

        assert org_manager.get_parent("a") is None
        assert _names(org_manager.get().roots) == ["a"]

    def test_move_keeps_subtree(self, org_manager):
        """移動時に配下ごと移ることをテスト。"""
        org_manager.set_parent("ceo", None)
        org_manager.set_parent("vp1", "ceo")
        org_manager.set_parent("vp2", "ceo")
        org_manager.set_parent("eng", "vp1")

        org_manager.set_parent("vp1", "vp2")

        assert org_manager.get_parent("vp1") == "vp2"
        assert org_manager.get_parent("eng") == "vp1"
        assert _names(org_manager.get_children("ceo")) == ["vp2"]
        assert _names(org_manager.get_children("vp2")) == ["vp1"]
        assert _names(org_manager.get_children("vp1")) == ["eng"]

    def test_self_parent_rejected(self, org_manager):
        """自分自身を上長にできないことをテスト。"""
        org_manager.set_parent("a", None)
        with pytest.raises(OrgCycleError):
            org_manager.set_parent("a", "a")

    def test_cycle_rejected_without_write(self, org_manager, temp_dir):
        """配下を上長にしようとすると拒否され、ファイルが変わらないことをテスト。"""
        org_manager.set_parent("a", None)
        org_manager.set_parent("b", "a")
        org_manager.set_parent("c", "b")
        before = (temp_dir / "org.json").read_text(encoding="utf-8")

        with pytest.raises(OrgCycleError):
            org_manager.set_parent("a", "c")

        assert (temp_dir / "org.json").read_text(encoding="utf-8") == before

    def test_each_name_appears_once(self, org_manager):
        """同じ名前を再設定しても重複しないことをテスト。"""
        org_manager.set_parent("a", None)
        org_manager.set_parent("b", None)
        org_manager.set_parent("b", "a")
        org_manager.set_parent("b", "a")

        names = _names(org_manager.get().walk())
        assert sorted(names) == ["a", "b"]

    def test_remove_reparents_children_to_grandparent(self, org_manager):
        """削除したノードの部下が上長に付け替わることをテスト。"""
        org_manager.set_parent("ceo", None)
        org_manager.set_parent("existing", "ceo")
        org_manager.set_parent("vp", "ceo")
        org_manager.set_parent("e1", "vp")
        org_manager.set_parent("e2", "vp")
        org_manager.set_parent("intern", "e1")

        org_manager.remove_agent("vp")

        children = org_manager.get_children("ceo")
        assert _names(children) == ["existing", "e1", "e2"]
        assert [c.parent_agent_name for c in children] == ["ceo", "ceo", "ceo"]
        assert [c.position for c in children] == [0, 1, 2]
        assert org_manager.get_parent("intern") == "e1"
        assert "vp" not in _names(org_manager.get().walk())

    def test_remove_root_promotes_children(self, org_manager):
        """ルートを削除すると部下がルートになることをテスト。"""
        org_manager.set_parent("ceo", None)
        org_manager.set_parent("a", "ceo")
        org_manager.set_parent("b", "ceo")

        org_manager.remove_agent("ceo")

        roots = org_manager.get().roots
        assert _names(roots) == ["a", "b"]
        assert all(r.parent_agent_name is None for r in roots)

    def test_remove_absent_is_noop(self, org_manager, temp_dir):
        """存在しないノードの削除は何もしないことをテスト。"""
        org_manager.remove_agent("ghost")
        assert not (temp_dir / "org.json").exists()

    def test_loads_existing_document(self, org_manager, temp_dir):
        """既存の org.json を読み込めることをテスト。"""
        (temp_dir / "org.json").write_text(
            json.dumps(
                {
                    "roots": [
                        {
                            "agentName": "ceo",
                            "parentAgentName": None,
                            "children": [
                                {
                                    "agentName": "cto",
                                    "parentAgentName": "ceo",
                                    "children": [],
                                    "position": 0,
                                }
                            ],
                            "position": 0,
                        }
                    ]
                }
            ),
            encoding="utf-8",
        )

        assert org_manager.get_parent("cto") == "ceo"
        assert org_manager.contains("ceo")
        assert not org_manager.contains("ghost")

    def test_save_and_get_round_trip(self, org_manager):
        """ツリー全体の保存と取得をテスト。"""
        tree = OrgTree(
            roots=[
                OrgNode(
                    agent_name="a",
                    children=[OrgNode(agent_name="b", parent_agent_name="a")],
                )
            ]
        )
        org_manager.save(tree)
        assert org_manager.get() == tree
