"""技能加载器

负责从本地磁盘读取技能文档并交给解析器
"""

from pathlib import Path
from typing import List, Optional

from skillsmith.core.config.models import Config
from skillsmith.core.constants import ICON_EXTENSIONS, SKILL_FILE_NAME
from skillsmith.core.skills.errors import SkillLoadError
from skillsmith.core.skills.models import Skill
from skillsmith.core.skills.parser import parse_skill_md
from skillsmith.core.utils.logger import logger


def find_icon(skill_dir: Path) -> Optional[Path]:
    """查找技能目录下文件名包含 icon 的图片文件

    Args:
        skill_dir: 技能目录

    Returns:
        Optional[Path]: 图标路径，找不到返回 None
    """
    for file_path in sorted(skill_dir.iterdir()):
        if (
            file_path.is_file()
            and file_path.suffix.lower() in ICON_EXTENSIONS
            and "icon" in file_path.name.lower()
        ):
            return file_path
    return None


class SkillLoader:
    """技能加载器

    支持两种布局：
    - <dir>/<name>.md
    - <dir>/<name>/SKILL.md（同目录下的 icon 图片作为技能图标）
    """

    def __init__(self, skills_dir: Optional[Path] = None):
        """初始化技能加载器

        Args:
            skills_dir: 技能目录
        """
        self.skills_dir = skills_dir

    @classmethod
    def from_config(cls, config: Config) -> "SkillLoader":
        """按配置中的技能目录创建加载器

        Args:
            config: 配置对象

        Returns:
            SkillLoader: 加载器实例
        """
        return cls(config.skills_dir)

    def load_file(self, file_path: Path) -> Skill:
        """读取并解析单个技能文件

        Args:
            file_path: 技能文件路径

        Returns:
            Skill: 解析得到的技能

        Raises:
            SkillLoadError: 文件不存在或无法按 UTF-8 读取
        """
        if not file_path.is_file():
            raise SkillLoadError(file_path, "技能文件不存在")

        try:
            content = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise SkillLoadError(file_path, "技能文件不是 UTF-8 编码", e) from e
        except OSError as e:
            raise SkillLoadError(file_path, f"读取技能文件失败: {e}", e) from e

        skill = parse_skill_md(content)

        if file_path.name.lower() == SKILL_FILE_NAME.lower():
            icon = find_icon(file_path.parent)
            if icon is not None:
                skill = skill.copy_with(icon=str(icon))

        logger.debug(f"加载技能: {skill.name} from {file_path}")
        return skill

    def _candidate_files(self, dir_path: Path) -> List[Path]:
        files = sorted(p for p in dir_path.glob("*.md") if p.is_file())
        for sub_dir in sorted(p for p in dir_path.iterdir() if p.is_dir()):
            skill_md = sub_dir / SKILL_FILE_NAME
            if skill_md.is_file():
                files.append(skill_md)
        return files

    def scan_directory(self, dir_path: Optional[Path] = None) -> List[Skill]:
        """扫描技能目录

        读取失败的文件会被跳过并记录日志

        Args:
            dir_path: 目录路径，默认使用初始化时的目录

        Returns:
            List[Skill]: 找到的技能列表
        """
        dir_path = dir_path or self.skills_dir
        if not dir_path or not dir_path.exists():
            logger.debug(f"技能目录不存在: {dir_path}")
            return []

        if not dir_path.is_dir():
            logger.warning(f"技能路径不是目录: {dir_path}")
            return []

        skills = []
        for file_path in self._candidate_files(dir_path):
            try:
                skills.append(self.load_file(file_path))
            except SkillLoadError as e:
                logger.error(f"读取技能文件失败: {e}")

        logger.info(f"扫描完成，共发现 {len(skills)} 个技能")
        return skills
