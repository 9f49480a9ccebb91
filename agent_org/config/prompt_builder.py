"""エージェントのシステムプロンプト生成。

組織内の位置、委譲結果、作業メモリ、最新のボード投稿からプロンプトを組み立てる。
プロンプト本文はエージェントに渡すため英語で書く。
"""

from dataclasses import dataclass, field
from datetime import datetime

from agent_org.models.agent import AgentConfig, AgentStatus
from agent_org.models.board import BoardItem
from agent_org.models.common import format_timestamp, utc_now
from agent_org.models.task import PendingResult, TaskState


@dataclass
class OrgReport:
    """直属の部下の概要。"""

    name: str
    role: str
    status: AgentStatus
    current_task: str | None = None


@dataclass
class ManagerInfo:
    """上長の概要。"""

    name: str
    """上長の表示名"""

    role: str
    status: AgentStatus


@dataclass
class PromptParams:
    """システムプロンプトの入力。"""

    agent: AgentConfig
    task: TaskState
    manager: ManagerInfo | None = None
    org_reports: list[OrgReport] = field(default_factory=list)
    pending_results: list[PendingResult] = field(default_factory=list)
    context_md: str | None = None
    recent_board_items: list[BoardItem] = field(default_factory=list)
    delegator_display_name: str | None = None
    generated_at: datetime | None = None
    """生成日時（省略時は現在時刻）"""


_RULES_AND_TOOLS = """## Communication & Delegation Rules
You follow corporate chain-of-command:
- Only delegate tasks to your direct reports (use `list_agents` to see who they are)
- Only finish tasks that are assigned to you — do not finish other agents' tasks
- Return results upward by calling `finish_task` when done
- Post updates, blockers, and findings to the shared board via `post_to_board`
- For cross-department communication, escalate through your reporting chain
- If you encounter a blocker, post it to the board as a "blocker" type item before calling `finish_task`

## Task Status Transitions
Tasks follow this lifecycle — always transition correctly:
- **pending** → **running** (system sets this when you start)
- **running** → **completed** (you call `finish_task` with status "completed")
- **running** → **blocked** (you call `finish_task` with status "blocked")
- **running** → **failed** (you call `finish_task` with status "failed")
Do not skip states. If you cannot complete a task, finish with "blocked" or "failed" — never leave tasks unfinished.

## Before Finishing a Task
Before calling `finish_task`, always:
1. Update your context.md to reflect current state via `update_context`
2. If you are blocked, post a "blocker" board item explaining what you need
3. Provide a clear result summary — never leave the result empty

## Available Tools
Orchestration tools available to you:

**Task Management**
- `delegate_task` — Assign work to an agent
- `finish_task` — Mark your task as completed, blocked, or failed (provide status + result)

**Organization**
- `list_agents` — List all agents in the org
- `create_agent` — Create a new agent
- `update_agent` — Update an agent's properties
- `delete_agent` — Remove an agent
- `set_org_parent` — Set/change an agent's manager in the org chart

**Board**
- `query_board` — Search the shared board
- `post_to_board` — Post a status update, blocker, finding, or request

**Messaging**
- `send_message` — Send a message to another agent
- `read_messages` — Read messages in a thread

**Context**
- `update_context` — Update your own context.md working memory
"""


def _status_value(status: AgentStatus | str) -> str:
    return getattr(status, "value", status)


def _position_lines(params: PromptParams) -> list[str]:
    agent = params.agent
    lines = [
        f"- **Agent**: {agent.display_name} ({agent.name})",
        f"- **Level**: {agent.level.value}",
    ]
    if params.manager:
        manager = params.manager
        lines.append(
            f"- **Reports to**: {manager.name} ({manager.role}, {_status_value(manager.status)})"
        )
    else:
        lines.append("- **Reports to**: none (you are the top of your chain)")

    if params.org_reports:
        reports = ", ".join(
            f"{r.name} ({r.role}, {_status_value(r.status)})" for r in params.org_reports
        )
        lines.append(f"- **Direct reports**: {reports}")
    else:
        lines.append("- **Direct reports**: none")
    return lines


def build_agent_system_prompt(params: PromptParams) -> str:
    """エージェントのシステムプロンプトを生成する。

    Args:
        params: プロンプトの入力

    Returns:
        Markdown 形式のシステムプロンプト
    """
    agent = params.agent
    task = params.task
    generated_at = format_timestamp(params.generated_at or utc_now())

    if params.delegator_display_name:
        sender = params.delegator_display_name
    elif task.delegator_id:
        sender = "Another agent"
    else:
        sender = "Human (via chat)"
    context = (task.context or "").strip() or "(none provided)"

    sections = [
        "# Agent Identity",
        "",
        f"You are **{agent.role}** in the **{agent.department}** department.",
        "",
        "## Your Role",
        agent.personality,
        "",
        "## Your Position",
        *_position_lines(params),
        "",
        _RULES_AND_TOOLS,
        "---",
        "",
        "# System Briefing",
        f"Generated: {generated_at}",
        "",
        "## Your Current Task",
        f"**Task ID**: {task.id}",
        f"**From**: {sender}",
        f"**Priority**: {task.priority}",
        f"**Prompt**: {task.prompt}",
        "",
        "## Context from delegator",
        context,
    ]

    if params.pending_results:
        sections += [
            "",
            "## Pending Results from Delegated Work",
            "The following child tasks have completed and their results are available:",
            "",
            "\n\n".join(
                f"### Child Task {r.child_task_id}\n{r.result}" for r in params.pending_results
            ),
        ]

    if params.recent_board_items:
        sections += [
            "",
            "## Recent Board Activity",
            *(
                f"- **[{item.type.value}]** {item.author}: {item.summary}"
                f" ({format_timestamp(item.created_at)})"
                for item in params.recent_board_items
            ),
        ]

    if params.context_md:
        sections += ["", "---", "", "# Working Memory", params.context_md]

    return "\n".join(sections) + "\n"
