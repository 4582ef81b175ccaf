"""配置管理模块

负责查找和加载配置文件，支持从项目目录或用户目录读取配置
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from skillsmith.core.config.models import Config, ConfigMeta, SkillsSection
from skillsmith.core.constants import (
    CONFIG_FILE,
    SKILLSMITH_DIR,
    WORKSPACE_SEARCH_MAX_DEPTH,
)
from skillsmith.core.utils.logger import logger


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """深度合并两个配置字典

    字典递归合并，其他类型由 override 覆盖 base

    Args:
        base: 基础配置字典，用户配置
        override: 覆盖配置字典，项目配置

    Returns:
        Dict[str, Any]: 合并后的配置字典
    """
    result = base.copy()

    for key, override_value in override.items():
        if isinstance(result.get(key), dict) and isinstance(override_value, dict):
            result[key] = _deep_merge(result[key], override_value)
        else:
            result[key] = override_value

    return result


def resolve_workspace_dir() -> Path:
    """解析工作区目录

    从当前目录向上最多查找指定级数，找到含有 .skillsmith 目录（且不是用户目录）的路径即为工作区，
    找不到时返回当前执行路径

    Returns:
        Path: 工作区目录路径
    """
    initial_cwd = Path.cwd().resolve()
    current_dir = initial_cwd
    user_home = Path.home().resolve()

    for _ in range(WORKSPACE_SEARCH_MAX_DEPTH):
        if (current_dir / SKILLSMITH_DIR).is_dir() and current_dir != user_home:
            return current_dir
        if current_dir.parent == current_dir:
            break
        current_dir = current_dir.parent

    return initial_cwd


def get_user_config_dir() -> Path:
    """获取用户配置目录

    Returns:
        Path: 用户配置目录路径 (~/.skillsmith)
    """
    return Path.home() / SKILLSMITH_DIR


def find_config_files() -> tuple[Optional[Path], Optional[Path], Path]:
    """查找配置文件

    Returns:
        tuple[Optional[Path], Optional[Path], Path]:
            (用户配置路径, 项目配置路径, 工作区目录)
    """
    user_config_path = get_user_config_dir() / CONFIG_FILE
    if not user_config_path.is_file():
        user_config_path = None

    workspace_dir = resolve_workspace_dir()
    project_config_path = workspace_dir / SKILLSMITH_DIR / CONFIG_FILE
    if not project_config_path.is_file():
        project_config_path = None

    return user_config_path, project_config_path, workspace_dir


def load_config_from_file(config_path: Path) -> dict:
    """从 YAML 文件加载配置

    Args:
        config_path: 配置文件路径

    Returns:
        dict: 配置字典

    Raises:
        FileNotFoundError: 如果文件不存在
        yaml.YAMLError: 如果 YAML 解析失败
    """
    if not config_path.exists():
        raise FileNotFoundError(f"配置文件不存在: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        logger.warning(f"配置文件顶层不是字典类型: {config_path}，忽略该文件")
        return {}
    return data


def parse_skills_config(config_data: dict) -> SkillsSection:
    """解析技能配置

    配置缺失或不合法时返回默认配置

    Args:
        config_data: 配置字典

    Returns:
        SkillsSection: 技能配置
    """
    skills_section = config_data.get("skills")
    if skills_section is None:
        return SkillsSection()
    if isinstance(skills_section, bool):
        # 允许简写 skills: false
        return SkillsSection(enabled=skills_section)
    if not isinstance(skills_section, dict):
        logger.warning(f"skills 配置不是字典类型: {type(skills_section)}，使用默认配置")
        return SkillsSection()

    try:
        return SkillsSection.model_validate(skills_section)
    except ValidationError as e:
        logger.warning(f"skills 配置不合法: {e}，使用默认配置")
        return SkillsSection()


class ConfigManager:
    """全局配置管理器单例

    懒加载配置，首次访问时自动加载
    """

    _instance: Optional["ConfigManager"] = None

    def __init__(self):
        """初始化配置管理器"""
        self.config: Optional[Config] = None

    @classmethod
    def get_instance(cls) -> "ConfigManager":
        """获取单例实例

        Returns:
            ConfigManager: 单例实例
        """
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """重置单例实例（主要用于测试）"""
        cls._instance = None

    def _load_config(self) -> Config:
        """加载并合并配置

        1. 用户目录配置 (~/.skillsmith/config.yaml) 作为基础
        2. 项目目录配置与用户配置合并，项目配置优先
        3. 都没有时使用默认配置

        Returns:
            Config: 配置对象，source 标识配置来源
        """
        user_config_path, project_config_path, workspace_dir = find_config_files()

        config_data: Dict[str, Any] = {}
        config_file_path: Optional[Path] = None
        source = "default"

        if user_config_path:
            try:
                config_data = load_config_from_file(user_config_path)
                config_file_path = user_config_path
                source = "user"
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"加载用户配置文件失败: {e}")

        if project_config_path:
            try:
                project_config_data = load_config_from_file(project_config_path)
                config_data = _deep_merge(config_data, project_config_data)
                config_file_path = project_config_path
                source = "project"
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"加载项目配置文件失败: {e}")

        config = Config(
            skills=parse_skills_config(config_data),
            meta=ConfigMeta(
                workspace_dir=workspace_dir,
                config_file_path=config_file_path,
                source=source,
            ),
        )
        logger.info(f"配置加载完成，来源: {source}")
        return config

    def load(self) -> Config:
        """强制重新加载配置

        Returns:
            Config: 配置对象
        """
        self.config = self._load_config()
        return self.config

    def get_config(self) -> Config:
        """获取配置，未加载时自动加载

        Returns:
            Config: 配置对象
        """
        if self.config is None:
            return self.load()
        return self.config
