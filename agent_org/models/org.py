"""組織ツリーのモデル定義。"""

from pydantic import Field

from agent_org.models.common import CamelModel


class OrgNode(CamelModel):
    """組織ツリーのノード。"""

    agent_name: str = Field(..., description="エージェント名")
    parent_agent_name: str | None = Field(default=None, description="上長のエージェント名")
    children: list["OrgNode"] = Field(default_factory=list, description="直属の部下")
    position: int = Field(default=0, description="兄弟内の挿入位置")


class OrgTree(CamelModel):
    """org.json に保存される組織ツリー全体。"""

    roots: list[OrgNode] = Field(default_factory=list, description="ルートノード")

    def walk(self) -> list[OrgNode]:
        """全ノードを深さ優先・兄弟順で返す。"""
        nodes: list[OrgNode] = []
        stack = list(reversed(self.roots))
        while stack:
            node = stack.pop()
            nodes.append(node)
            stack.extend(reversed(node.children))
        return nodes


OrgNode.model_rebuild()
