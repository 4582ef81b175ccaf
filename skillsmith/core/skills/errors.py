class SkillError(Exception):
    """技能模块基础异常"""


class SkillNotFoundError(SkillError):
    """指定 id 的技能不存在"""

    def __init__(self, skill_id: object):
        """初始化技能不存在异常

        Args:
            skill_id: 查找的技能 id
        """
        self.skill_id = skill_id
        super().__init__(f"技能不存在: {skill_id}")


class SkillLoadError(SkillError):
    """技能文件读取失败"""

    def __init__(self, path: object, message: str, error_details: Exception = None):
        """初始化技能加载异常

        Args:
            path: 技能文件路径
            message: 错误消息
            error_details: 原始异常详情
        """
        self.path = path
        self.message = message
        self.error_details = error_details
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.path}] {self.message}"
