"""项目常量定义

统一管理项目中的魔法数字和默认配置值
"""

# ============================================================================
# 路径和文件名常量
# ============================================================================

# 工作区目录名
SKILLSMITH_DIR = ".skillsmith"

# 配置文件
CONFIG_FILE = "config.yaml"

# 技能目录
SKILLS_DIR = "skills"
SKILL_FILE_NAME = "SKILL.md"

# 日志目录
LOG_DIR = "logs"

# ============================================================================
# 日志配置常量
# ============================================================================

LOG_LEVEL = "INFO"
LOG_FILE = "skillsmith.log"
LOG_ROTATION = "10 MB"
LOG_RETENTION = "14 days"
LOG_COMPRESSION = "tar.gz"
LOG_ENCODING = "utf-8"

# 日志格式
LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "{process.name}:{process.id} | {thread.name}:{thread.id} | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# ============================================================================
# 技能配置常量
# ============================================================================

DEFAULT_SKILL_NAME = "Unnamed Skill"
DEFAULT_SKILL_VERSION = "1.0.0"
DEFAULT_SCAN_DEPTH = 3

# 匹配窗口：参与关键词匹配的最近消息条数
DEFAULT_MATCH_WINDOW = 3
# 元信息中描述的最大展示长度
DESCRIPTION_PREVIEW_LENGTH = 100

# 图标文件扩展名
ICON_EXTENSIONS = (".png", ".jpg", ".svg")

# ============================================================================
# 配置管理常量
# ============================================================================

DEFAULT_SYSTEM_VERSION = "0.1.0"
WORKSPACE_SEARCH_MAX_DEPTH = 3
