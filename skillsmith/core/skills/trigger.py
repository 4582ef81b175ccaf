"""技能触发判断"""

import re

from skillsmith.core.skills.models import Skill, TriggerMode
from skillsmith.core.utils.logger import logger


def _keyword_matches(skill: Skill, keyword: str, context: str) -> bool:
    if skill.use_regex:
        flags = 0 if skill.case_sensitive else re.IGNORECASE
        try:
            return re.search(keyword, context, flags) is not None
        except (re.error, OverflowError, RecursionError) as e:
            # 无效或无法编译的正则只影响当前关键词
            logger.debug(f"技能 {skill.name} 的正则关键词无效: {keyword!r}, 错误: {e}")
            return False

    if skill.case_sensitive:
        return keyword in context
    return keyword.casefold() in context.casefold()


def should_trigger(skill: Skill, context: str) -> bool:
    """检查技能是否应该被触发

    Args:
        skill: 技能记录
        context: 用于匹配的上下文文本

    Returns:
        bool: always 恒为真，never 恒为假，keyword 在任一关键词命中时为真
    """
    if skill.trigger_mode is TriggerMode.ALWAYS:
        return True
    if skill.trigger_mode is TriggerMode.NEVER:
        return False

    if not skill.trigger_keywords:
        return False
    return any(
        _keyword_matches(skill, keyword, context)
        for keyword in skill.trigger_keywords
    )
