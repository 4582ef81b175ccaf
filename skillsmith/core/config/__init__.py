"""配置模块

包含配置查找、加载和合并功能
"""

from skillsmith.core.config.config_manager import (
    ConfigManager,
    find_config_files,
    get_user_config_dir,
    load_config_from_file,
    parse_skills_config,
    resolve_workspace_dir,
)
from skillsmith.core.config.models import Config, ConfigMeta, SkillsSection

__all__ = [
    "Config",
    "ConfigManager",
    "ConfigMeta",
    "SkillsSection",
    "find_config_files",
    "get_user_config_dir",
    "load_config_from_file",
    "parse_skills_config",
    "resolve_workspace_dir",
]
