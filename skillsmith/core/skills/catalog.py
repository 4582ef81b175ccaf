"""技能目录

在内存中管理技能记录和各助手选中的技能 id，提供查询和操作接口
"""

from typing import Dict, List, Optional, Set
from uuid import UUID

from skillsmith.core.config.models import Config
from skillsmith.core.skills.errors import SkillNotFoundError
from skillsmith.core.skills.loader import SkillLoader
from skillsmith.core.skills.models import Skill, SkillSource
from skillsmith.core.skills.parser import parse_skill_md
from skillsmith.core.utils.logger import logger


class SkillCatalog:
    """技能目录（单例）

    记录只能整体替换，不做原地修改；删除技能时同步清理所有助手的选中集合
    """

    _instance: Optional["SkillCatalog"] = None

    def __init__(self):
        """初始化技能目录"""
        self._skills: Dict[UUID, Skill] = {}
        self._assistant_skill_ids: Dict[str, Set[UUID]] = {}

    @classmethod
    def get_instance(cls) -> "SkillCatalog":
        """获取单例实例

        Returns:
            SkillCatalog: 单例实例
        """
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """重置单例实例（主要用于测试）"""
        cls._instance = None

    def add_skill(self, skill: Skill) -> Skill:
        """添加技能，id 已存在时覆盖旧记录

        Args:
            skill: 技能记录

        Returns:
            Skill: 添加的技能
        """
        if skill.id in self._skills:
            logger.debug(f"技能已存在，覆盖: {skill.name} ({skill.id})")
        self._skills[skill.id] = skill
        logger.info(f"添加技能: {skill.name}")
        return skill

    def update_skill(self, skill: Skill) -> bool:
        """用新记录整体替换同 id 的技能

        Args:
            skill: 新的技能记录

        Returns:
            bool: 是否成功替换
        """
        if skill.id not in self._skills:
            logger.warning(f"技能不存在: {skill.id}")
            return False
        self._skills[skill.id] = skill
        logger.info(f"更新技能: {skill.name}")
        return True

    def delete_skill(self, skill_id: UUID) -> bool:
        """删除技能，并从所有助手的选中集合中移除

        Args:
            skill_id: 技能 id

        Returns:
            bool: 是否成功删除
        """
        skill = self._skills.pop(skill_id, None)
        if skill is None:
            logger.warning(f"技能不存在: {skill_id}")
            return False

        for assistant_id, skill_ids in self._assistant_skill_ids.items():
            if skill_id in skill_ids:
                self._assistant_skill_ids[assistant_id] = skill_ids - {skill_id}
                logger.debug(f"从助手 {assistant_id} 移除技能: {skill.name}")
        logger.info(f"删除技能: {skill.name}")
        return True

    def toggle_skill(self, skill_id: UUID) -> bool:
        """切换技能的启用状态

        Args:
            skill_id: 技能 id

        Returns:
            bool: 是否成功切换
        """
        skill = self._skills.get(skill_id)
        if skill is None:
            logger.warning(f"技能不存在: {skill_id}")
            return False
        self._skills[skill_id] = skill.copy_with(enabled=not skill.enabled)
        logger.info(f"{'禁用' if skill.enabled else '启用'}技能: {skill.name}")
        return True

    def get_skill(self, skill_id: UUID) -> Optional[Skill]:
        return self._skills.get(skill_id)

    def require_skill(self, skill_id: UUID) -> Skill:
        """获取技能，不存在时抛出异常

        Raises:
            SkillNotFoundError: 技能不存在
        """
        skill = self._skills.get(skill_id)
        if skill is None:
            raise SkillNotFoundError(skill_id)
        return skill

    def get_all_skills(self) -> List[Skill]:
        """获取所有技能（包括禁用的），保持添加顺序"""
        return list(self._skills.values())

    def get_enabled_skills(self) -> List[Skill]:
        return [skill for skill in self._skills.values() if skill.enabled]

    def select_skill(self, assistant_id: str, skill_id: UUID) -> bool:
        """为助手选中技能

        Args:
            assistant_id: 助手 id
            skill_id: 技能 id

        Returns:
            bool: 是否成功选中
        """
        if skill_id not in self._skills:
            logger.warning(f"技能不存在: {skill_id}")
            return False
        current = self._assistant_skill_ids.get(assistant_id, set())
        self._assistant_skill_ids[assistant_id] = current | {skill_id}
        return True

    def deselect_skill(self, assistant_id: str, skill_id: UUID) -> bool:
        current = self._assistant_skill_ids.get(assistant_id, set())
        if skill_id not in current:
            return False
        self._assistant_skill_ids[assistant_id] = current - {skill_id}
        return True

    def get_selected_skill_ids(self, assistant_id: str) -> Set[UUID]:
        """获取助手选中的技能 id 集合（副本）"""
        return set(self._assistant_skill_ids.get(assistant_id, set()))

    def import_skill(self, raw_text: str, icon: Optional[str] = None) -> Skill:
        """导入本地技能文档

        Args:
            raw_text: SKILL.md 原始内容
            icon: 已保存的图标路径（由调用方负责保存图标文件）

        Returns:
            Skill: 导入的技能
        """
        skill = parse_skill_md(raw_text).copy_with(source=SkillSource.LOCAL, icon=icon)
        return self.add_skill(skill)

    def load_from_config(self, config: Config) -> List[Skill]:
        """从配置指定的技能目录加载本地技能

        Args:
            config: 配置对象

        Returns:
            List[Skill]: 新加入目录的技能
        """
        skills = [self.add_skill(skill) for skill in SkillLoader.from_config(config).scan_directory()]
        logger.info(f"从 {config.skills_dir} 加载了 {len(skills)} 个技能")
        return skills

    def install_marketplace_skill(self, raw_text: str, source_url: str) -> Skill:
        """安装来自市场的技能文档

        Args:
            raw_text: 下载得到的 SKILL.md 内容
            source_url: 技能在市场中的地址

        Returns:
            Skill: 安装的技能
        """
        skill = parse_skill_md(raw_text).copy_with(
            source=SkillSource.MARKETPLACE,
            source_url=source_url,
        )
        return self.add_skill(skill)
