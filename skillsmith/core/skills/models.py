"""Skills 数据模型

定义技能记录及其来源、触发模式
"""

from __future__ import annotations

import time
import uuid
from enum import Enum
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from skillsmith.core.constants import DEFAULT_SCAN_DEPTH, DEFAULT_SKILL_VERSION


class SkillSource(str, Enum):
    """技能来源"""

    LOCAL = "local"
    MARKETPLACE = "marketplace"


class TriggerMode(str, Enum):
    """技能触发模式"""

    ALWAYS = "always"      # 总是注入元信息，不展开详细内容
    KEYWORD = "keyword"    # 关键词匹配时展开详细内容
    NEVER = "never"        # 仅保留在列表中


class Skill(BaseModel):
    """技能记录

    不可变值对象，修改只能通过 copy_with 生成新记录。
    序列化字段名使用 camelCase（triggerMode、sourceUrl 等），
    构造时 snake_case 与 camelCase 均可
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, description="技能唯一标识")
    name: str = Field(default="", description="技能名称")
    description: str = Field(default="", description="技能描述")
    content: str = Field(default="", description="SKILL.md 正文内容")
    author: str = Field(default="", description="作者")
    version: str = Field(default=DEFAULT_SKILL_VERSION, description="版本号")
    icon: Optional[str] = Field(default=None, description="图标路径或 URI")
    source: SkillSource = Field(default=SkillSource.LOCAL, description="技能来源")
    source_url: Optional[str] = Field(default=None, description="市场来源地址")
    enabled: bool = Field(default=True, description="是否启用")

    trigger_mode: TriggerMode = Field(default=TriggerMode.ALWAYS, description="触发模式")
    trigger_keywords: Tuple[str, ...] = Field(default=(), description="触发关键词")
    use_regex: bool = Field(default=False, description="关键词是否按正则匹配")
    case_sensitive: bool = Field(default=False, description="是否大小写敏感")
    scan_depth: int = Field(default=DEFAULT_SCAN_DEPTH, ge=1, description="建议扫描的最近消息条数")

    created_at: float = Field(default_factory=time.time, description="创建时间（Unix 时间戳）")
    updated_at: float = Field(default_factory=time.time, description="更新时间（Unix 时间戳）")

    def copy_with(self, **changes: Any) -> "Skill":
        """生成一份修改后的新记录

        id 和 created_at 不可改写，updated_at 自动刷新

        Args:
            **changes: 需要修改的字段（snake_case）

        Returns:
            Skill: 新的技能记录
        """
        changes.pop("id", None)
        changes.pop("created_at", None)
        changes.setdefault("updated_at", time.time())
        data = self.model_dump()
        data.update(changes)
        return Skill.model_validate(data)

    @property
    def has_description(self) -> bool:
        return bool(self.description.strip())

    def __hash__(self) -> int:
        """以 id 作为身份，使技能可以用于集合操作"""
        return hash(self.id)
