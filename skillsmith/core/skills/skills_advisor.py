"""Skills Advisor

在每次请求发送前把助手选中的技能注入到消息列表
"""

from typing import Optional

from skillsmith.core.config.models import Config
from skillsmith.core.llm.advisor import Advisor
from skillsmith.core.llm.protocol import LLMRequest
from skillsmith.core.skills.catalog import SkillCatalog
from skillsmith.core.skills.injector import SkillsInjector
from skillsmith.core.utils.logger import logger


class SkillsAdvisor(Advisor):
    """Skills Advisor，为指定助手注入技能元信息和被触发技能的详细内容"""

    def __init__(
        self,
        assistant_id: str,
        config: Optional[Config] = None,
        catalog: Optional[SkillCatalog] = None,
    ):
        """初始化 Skills Advisor

        Args:
            assistant_id: 助手 id，用于读取其选中的技能
            config: 配置对象
            catalog: 技能目录，默认使用全局单例
        """
        self.assistant_id = assistant_id
        self._config = config
        self.catalog = catalog or SkillCatalog.get_instance()

    @property
    def config(self) -> Config:
        """获取配置对象"""
        if self._config is None:
            raise RuntimeError("SkillsAdvisor.config 未被设置")
        return self._config

    @config.setter
    def config(self, value: Config) -> None:
        self._config = value

    def _build_injector(self) -> SkillsInjector:
        section = self.config.skills_config
        return SkillsInjector(
            match_window=section.match_window,
            description_preview_length=section.description_preview_length,
            honor_scan_depth=section.honor_scan_depth,
        )

    def _inject_skills(self, request: LLMRequest) -> LLMRequest:
        """返回注入技能后的请求副本，原请求不变

        Args:
            request: LLM 请求

        Returns:
            LLMRequest: 新的请求
        """
        if not self.config.skills_enabled:
            logger.debug("Skills 功能未启用，跳过注入")
            return request

        skill_ids = self.catalog.get_selected_skill_ids(self.assistant_id)
        if not skill_ids:
            logger.debug(f"助手 {self.assistant_id} 没有选中技能，跳过注入")
            return request

        messages = self._build_injector().transform(
            skill_ids,
            self.catalog.get_all_skills(),
            request.messages,
        )
        return request.model_copy(update={"messages": messages})

    def before_call(self, request: LLMRequest) -> LLMRequest:
        return self._inject_skills(request)

    def before_stream(self, request: LLMRequest) -> LLMRequest:
        return self._inject_skills(request)
