"""SKILL.md 解析器

将原始技能文档解析为 Skill 记录：
- 可选的 frontmatter（由单独一行 --- 包裹）
- Markdown 正文

解析永不失败，任何缺失或格式错误的字段都回退到默认值
"""

import re
from typing import List, Optional, Tuple

from skillsmith.core.constants import (
    DEFAULT_SCAN_DEPTH,
    DEFAULT_SKILL_NAME,
    DEFAULT_SKILL_VERSION,
)
from skillsmith.core.skills.models import Skill, TriggerMode
from skillsmith.core.utils.logger import logger

# 开头的分隔符行
OPENING_DELIMITER_PATTERN = re.compile(r"---[ \t\r]*(?:\n|$)")
# 结束分隔符行，必须独占一行
CLOSING_DELIMITER_PATTERN = re.compile(r"^---[ \t\r]*$", re.MULTILINE)

# 第一个 Markdown 标题
HEADING_PATTERN = re.compile(r"^#+[ \t]+(.+)$", re.MULTILINE)


def split_front_matter(raw: str) -> Tuple[Optional[str], str]:
    """拆分 frontmatter 和正文

    正文直接从原文切片，保留其中的换行符和其他字符

    Args:
        raw: 原始文档内容

    Returns:
        Tuple[Optional[str], str]: (frontmatter 文本, 正文)
            没有完整的 frontmatter 时返回 (None, 去除首尾空白的全文)
    """
    trimmed = raw.strip()
    opening = OPENING_DELIMITER_PATTERN.match(trimmed)
    if not opening:
        return None, trimmed

    closing = CLOSING_DELIMITER_PATTERN.search(trimmed, opening.end())
    if not closing:
        # 缺少结束分隔符，按无 frontmatter 处理
        logger.debug("frontmatter 缺少结束分隔符，整篇作为正文")
        return None, trimmed

    front_matter = trimmed[opening.end():closing.start()]
    front_matter = front_matter.replace("\r\n", "\n").rstrip("\n")
    body = trimmed[closing.end():].strip()
    return front_matter, body


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _extract_scalar(front_matter: str, key: str) -> Optional[str]:
    """提取 key: value 形式的标量值，空值视为缺失"""
    pattern = re.compile(rf"^{re.escape(key)}:[ \t]*(.*)$", re.MULTILINE)
    match = pattern.search(front_matter)
    if not match:
        return None
    value = _unquote(match.group(1).strip())
    return value if value.strip() else None


def _extract_list(front_matter: str, key: str) -> List[str]:
    """提取列表值，先尝试块格式，再尝试行内 [a, b] 格式"""
    # key:
    #   - item1
    #   - item2
    block_pattern = re.compile(
        rf"^{re.escape(key)}:[ \t]*\n((?:[ \t]*-[^\n]*(?:\n|$))+)", re.MULTILINE
    )
    match = block_pattern.search(front_matter)
    if match:
        items = []
        for line in match.group(1).splitlines():
            line = line.strip()
            if not line.startswith("-"):
                continue
            item = _unquote(line[1:].strip())
            if item.strip():
                items.append(item)
        return items

    inline_pattern = re.compile(rf"^{re.escape(key)}:[ \t]*\[(.*?)\]", re.MULTILINE)
    match = inline_pattern.search(front_matter)
    if match:
        items = [_unquote(item.strip()) for item in match.group(1).split(",")]
        return [item for item in items if item.strip()]

    return []


def _extract_first_heading(body: str) -> Optional[str]:
    match = HEADING_PATTERN.search(body)
    if not match:
        return None
    heading = match.group(1).strip()
    return heading or None


def _parse_trigger_mode(value: Optional[str]) -> TriggerMode:
    if value is None:
        return TriggerMode.ALWAYS
    try:
        return TriggerMode(value.strip().lower())
    except ValueError:
        logger.debug(f"未知的 triggerMode: {value}，使用 always")
        return TriggerMode.ALWAYS


def _parse_bool(value: Optional[str]) -> bool:
    # 只有字面量 true 视为真，其余一律为假
    return value is not None and value.strip().lower() == "true"


def _parse_scan_depth(value: Optional[str]) -> int:
    if value is None:
        return DEFAULT_SCAN_DEPTH
    try:
        depth = int(value.strip())
    except ValueError:
        logger.debug(f"scanDepth 不是整数: {value}，使用默认值 {DEFAULT_SCAN_DEPTH}")
        return DEFAULT_SCAN_DEPTH
    return depth if depth >= 1 else DEFAULT_SCAN_DEPTH


def parse_skill_md(raw: str) -> Skill:
    """解析技能文档

    格式示例::

        ---
        name: Code Review Expert
        description: Helps review code
        triggerMode: keyword
        triggerKeywords:
          - review
          - code
        ---

        # Code Review Expert
        You are an expert code reviewer...

    Args:
        raw: 原始文档内容

    Returns:
        Skill: 解析得到的技能记录，来源默认为 local
    """
    front_matter, body = split_front_matter(raw or "")
    front_matter = front_matter or ""

    name = (
        _extract_scalar(front_matter, "name")
        or _extract_first_heading(body)
        or DEFAULT_SKILL_NAME
    )

    skill = Skill(
        name=name,
        description=_extract_scalar(front_matter, "description") or "",
        content=body,
        author=_extract_scalar(front_matter, "author") or "",
        version=_extract_scalar(front_matter, "version") or DEFAULT_SKILL_VERSION,
        trigger_mode=_parse_trigger_mode(_extract_scalar(front_matter, "triggerMode")),
        trigger_keywords=_extract_list(front_matter, "triggerKeywords"),
        use_regex=_parse_bool(_extract_scalar(front_matter, "useRegex")),
        case_sensitive=_parse_bool(_extract_scalar(front_matter, "caseSensitive")),
        scan_depth=_parse_scan_depth(_extract_scalar(front_matter, "scanDepth")),
    )
    logger.debug(
        f"解析技能: {skill.name} (mode={skill.trigger_mode.value}, "
        f"keywords={len(skill.trigger_keywords)})"
    )
    return skill
