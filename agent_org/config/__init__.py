"""設定モジュール。"""

from .prompt_builder import ManagerInfo, OrgReport, PromptParams, build_agent_system_prompt
from .settings import AGENT_NAME_PATTERN, Settings, load_settings_for_workspace

__all__ = [
    "AGENT_NAME_PATTERN",
    "ManagerInfo",
    "OrgReport",
    "PromptParams",
    "Settings",
    "build_agent_system_prompt",
    "load_settings_for_workspace",
]
