"""
Skillsmith - 技能文档解析与提示词注入

把可复用的技能文档挂载到对话中，并按请求决定展开哪些技能
"""

from skillsmith.core.skills import (
    Skill,
    SkillCatalog,
    SkillsAdvisor,
    SkillsInjector,
    SkillSource,
    TriggerMode,
    parse_skill_md,
    should_trigger,
)

__all__ = [
    "Skill",
    "SkillCatalog",
    "SkillsAdvisor",
    "SkillsInjector",
    "SkillSource",
    "TriggerMode",
    "parse_skill_md",
    "should_trigger",
]
