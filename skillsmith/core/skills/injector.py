"""技能提示词注入

1. 在系统提示词后注入所有选中技能的元信息（name + description）
2. 关键词触发的技能，在匹配时把详细内容注入到最新消息之前
"""

from typing import AbstractSet, Iterable, List, Optional, Sequence
from uuid import UUID

from skillsmith.core.constants import DEFAULT_MATCH_WINDOW, DESCRIPTION_PREVIEW_LENGTH
from skillsmith.core.llm.protocol import Message, TextPart
from skillsmith.core.skills.models import Skill, TriggerMode
from skillsmith.core.skills.trigger import should_trigger
from skillsmith.core.utils.logger import logger

SKILL_CONTEXT_START = "[Skill Context Activated]"
SKILL_CONTEXT_END = "[End of Skill Context]"


def select_skills(enabled_skill_ids: AbstractSet[UUID], catalog: Iterable[Skill]) -> List[Skill]:
    """按目录顺序筛选出被选中且启用的技能"""
    return [
        skill for skill in catalog
        if skill.id in enabled_skill_ids and skill.enabled
    ]


def build_matching_context(messages: Sequence[Message], window: int) -> str:
    """拼接最近 window 条消息的文本"""
    if window <= 0:
        return ""
    return "\n".join(message.text for message in messages[-window:])


def merge_skills_prompt_content(skills: Iterable[Skill], skill_ids: AbstractSet[UUID]) -> str:
    """合并所有选中技能的完整内容

    不做触发判断的简单注入方式，每个技能以 <!-- Skill: name --> 开头
    """
    return "\n\n".join(
        f"<!-- Skill: {skill.name} -->\n{skill.content}"
        for skill in select_skills(skill_ids, skills)
    )


class SkillsInjector:
    """技能注入器

    无状态，每次 transform 都基于输入快照构造新的消息列表，不修改任何输入
    """

    def __init__(
        self,
        match_window: int = DEFAULT_MATCH_WINDOW,
        description_preview_length: int = DESCRIPTION_PREVIEW_LENGTH,
        honor_scan_depth: bool = False,
    ):
        """初始化技能注入器

        Args:
            match_window: 参与关键词匹配的最近消息条数
            description_preview_length: 元信息中描述的最大展示长度
            honor_scan_depth: 为真时每个技能使用自己的 scan_depth 作为匹配窗口
        """
        self.match_window = match_window
        self.description_preview_length = description_preview_length
        self.honor_scan_depth = honor_scan_depth

    def build_meta_summary(self, skills: Sequence[Skill]) -> str:
        """构建技能元信息（列出所有可用技能）"""
        if not skills:
            return ""

        lines = [
            "--- Agent Skills ---",
            "The following skills are available for this assistant:",
            "",
        ]
        for skill in skills:
            line = f"• **{skill.name}**"
            if skill.has_description:
                limit = self.description_preview_length
                line += f": {skill.description[:limit]}"
                if len(skill.description) > limit:
                    line += "..."
            lines.append(line)
        lines.append("")
        lines.append("The detailed skill content will be injected when relevant.")
        lines.append("---")
        return "\n".join(lines).strip()

    def build_triggered_content(self, skills: Sequence[Skill]) -> str:
        """构建被触发技能的详细内容块"""
        if not skills:
            return ""

        sections = []
        for skill in skills:
            lines = [f"### Skill: {skill.name}"]
            if skill.has_description:
                lines.append(f"*{skill.description}*")
                lines.append("")
            if skill.content.strip():
                lines.append(skill.content.strip())
            sections.append("\n".join(lines).strip())

        body = "\n\n---\n\n".join(sections).strip()
        return f"{SKILL_CONTEXT_START}\n{body}\n{SKILL_CONTEXT_END}"

    def find_triggered_skills(self, skills: Sequence[Skill], messages: Sequence[Message]) -> List[Skill]:
        """找出需要展开详细内容的技能

        只有 keyword 模式的技能会展开，always 模式只注入元信息
        """
        context = build_matching_context(messages, self.match_window)
        triggered = []
        for skill in skills:
            if skill.trigger_mode is not TriggerMode.KEYWORD:
                continue
            skill_context = context
            if self.honor_scan_depth:
                skill_context = build_matching_context(messages, skill.scan_depth)
            if should_trigger(skill, skill_context):
                triggered.append(skill)
        return triggered

    def _append_to_system_message(self, message: Message, addition: str) -> Message:
        """在系统消息文本末尾追加内容，非文本 part 原样保留"""
        new_text = message.text
        if addition.strip():
            new_text = f"{new_text}\n\n{addition}"

        parts = []
        text_written = False
        for part in message.parts:
            if isinstance(part, TextPart):
                # 所有文本 part 合并到第一个文本 part 的位置
                if not text_written:
                    parts.append(TextPart(text=new_text))
                    text_written = True
                continue
            parts.append(part)
        if not text_written:
            parts.insert(0, TextPart(text=new_text))

        return message.model_copy(update={"parts": parts})

    def transform(
        self,
        enabled_skill_ids: AbstractSet[UUID],
        catalog: Sequence[Skill],
        messages: Sequence[Message],
    ) -> List[Message]:
        """注入技能提示词

        Args:
            enabled_skill_ids: 助手选中的技能 id 集合
            catalog: 技能目录
            messages: 原始消息序列

        Returns:
            List[Message]: 新的消息列表
        """
        result = list(messages)

        selected = select_skills(enabled_skill_ids, catalog)
        if not selected:
            return result

        meta_summary = self.build_meta_summary(selected)
        triggered = self.find_triggered_skills(selected, messages)
        triggered_content = self.build_triggered_content(triggered)

        system_index: Optional[int] = next(
            (i for i, message in enumerate(result) if message.role == "system"),
            None,
        )
        if system_index is not None:
            result[system_index] = self._append_to_system_message(result[system_index], meta_summary)
        elif meta_summary.strip():
            result.insert(0, Message.system(meta_summary))

        if triggered_content.strip():
            # 插入到最后一条消息之前，空序列时直接追加
            insert_index = max(len(result) - 1, 0)
            result.insert(insert_index, Message.system(triggered_content))

        logger.debug(
            f"技能注入完成: selected={[s.name for s in selected]}, "
            f"triggered={[s.name for s in triggered]}"
        )
        return result
