"""配置模型（Pydantic）"""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from skillsmith.core.constants import (
    DEFAULT_MATCH_WINDOW,
    DEFAULT_SYSTEM_VERSION,
    DESCRIPTION_PREVIEW_LENGTH,
    SKILLS_DIR,
    SKILLSMITH_DIR,
)


class SkillsSection(BaseModel):
    enabled: bool = True
    match_window: int = Field(default=DEFAULT_MATCH_WINDOW, ge=1)
    description_preview_length: int = Field(default=DESCRIPTION_PREVIEW_LENGTH, ge=1)
    # 为真时按每个技能自己的 scan_depth 取匹配窗口
    honor_scan_depth: bool = False
    skills_dir: Optional[str] = None


class ConfigMeta(BaseModel):
    workspace_dir: Path
    config_file_path: Optional[Path] = None
    source: Literal["user", "project", "default"] = "default"
    system_version: str = DEFAULT_SYSTEM_VERSION


class Config(BaseModel):
    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    skills: Optional[SkillsSection] = Field(default_factory=SkillsSection)
    meta: ConfigMeta

    @property
    def skills_enabled(self) -> bool:
        return bool(self.skills and self.skills.enabled)

    @property
    def skills_config(self) -> SkillsSection:
        return self.skills or SkillsSection(enabled=False)

    @property
    def skills_dir(self) -> Path:
        """技能目录，相对路径基于工作区目录解析"""
        configured = self.skills.skills_dir if self.skills else None
        if not configured:
            return self.workspace_dir / SKILLSMITH_DIR / SKILLS_DIR
        path = Path(configured).expanduser()
        return path if path.is_absolute() else self.workspace_dir / path

    @property
    def workspace_dir(self) -> Path:
        return self.meta.workspace_dir

    @property
    def config_file_path(self) -> Optional[Path]:
        return self.meta.config_file_path

    @property
    def source(self) -> str:
        return self.meta.source

    @property
    def system_version(self) -> str:
        return self.meta.system_version
