"""Skills 模块

提供技能系统功能，包括：
- SKILL.md 解析
- 触发判断
- 提示词注入和 Skills Advisor
- 技能目录与本地加载
"""

from skillsmith.core.skills.catalog import SkillCatalog
from skillsmith.core.skills.errors import SkillError, SkillLoadError, SkillNotFoundError
from skillsmith.core.skills.injector import (
    SKILL_CONTEXT_END,
    SKILL_CONTEXT_START,
    SkillsInjector,
    merge_skills_prompt_content,
)
from skillsmith.core.skills.loader import SkillLoader
from skillsmith.core.skills.models import Skill, SkillSource, TriggerMode
from skillsmith.core.skills.parser import parse_skill_md, split_front_matter
from skillsmith.core.skills.skills_advisor import SkillsAdvisor
from skillsmith.core.skills.trigger import should_trigger

__all__ = [
    # 模型
    "Skill",
    "SkillSource",
    "TriggerMode",
    # 解析与触发
    "parse_skill_md",
    "split_front_matter",
    "should_trigger",
    # 注入
    "SKILL_CONTEXT_START",
    "SKILL_CONTEXT_END",
    "SkillsInjector",
    "SkillsAdvisor",
    "merge_skills_prompt_content",
    # 目录与加载
    "SkillCatalog",
    "SkillLoader",
    # 异常
    "SkillError",
    "SkillLoadError",
    "SkillNotFoundError",
]
