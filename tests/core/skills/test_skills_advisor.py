"""测试 Skills Advisor"""

import unittest
from pathlib import Path

from skillsmith.core.config.models import Config, ConfigMeta, SkillsSection
from skillsmith.core.llm.advisor import AdvisorChain
from skillsmith.core.llm.protocol import ChatCompletion, LLMRequest, Message
from skillsmith.core.skills.catalog import SkillCatalog
from skillsmith.core.skills.injector import SKILL_CONTEXT_START
from skillsmith.core.skills.skills_advisor import SkillsAdvisor


class TestSkillsAdvisor(unittest.TestCase):
    """测试 SkillsAdvisor"""

    def setUp(self):
        """设置测试环境"""
        SkillCatalog.reset_instance()
        self.catalog = SkillCatalog.get_instance()

        self.review = self.catalog.import_skill(
            "---\nname: Reviewer\ndescription: 代码审查助手\n"
            "triggerMode: keyword\ntriggerKeywords:\n  - review\n---\n\n请检查安全性"
        )
        self.writer = self.catalog.import_skill("# Writer\n写作助手")
        self.catalog.select_skill("assistant", self.review.id)
        self.catalog.select_skill("assistant", self.writer.id)

        meta = ConfigMeta(workspace_dir=Path("."), source="default")
        self.config_enabled = Config(meta=meta, skills=SkillsSection(enabled=True))
        self.config_disabled = Config(meta=meta, skills=SkillsSection(enabled=False))

        self.request = LLMRequest(
            model="test-model",
            messages=[
                Message.system("原始系统提示词"),
                Message.user("please review my code"),
            ],
        )

    def tearDown(self):
        """清理测试环境"""
        SkillCatalog.reset_instance()

    def test_disabled_skills(self):
        """测试 skills 未启用时不添加内容"""
        advisor = SkillsAdvisor("assistant", self.config_disabled)

        self.assertIs(advisor.before_call(self.request), self.request)

    def test_missing_config(self):
        """测试未设置配置时报错"""
        advisor = SkillsAdvisor("assistant")
        with self.assertRaises(RuntimeError):
            advisor.before_call(self.request)

    def test_no_selected_skills(self):
        """测试助手没有选中技能时不添加内容"""
        advisor = SkillsAdvisor("other-assistant", self.config_enabled)

        modified = advisor.before_call(self.request)

        self.assertEqual(len(modified.messages), 2)

    def test_before_call_injects_skills(self):
        """测试 before_call 注入元信息和触发内容"""
        advisor = SkillsAdvisor("assistant", self.config_enabled, self.catalog)

        modified = advisor.before_call(self.request)

        self.assertIsNot(modified, self.request)
        self.assertEqual(len(self.request.messages), 2)
        self.assertEqual(self.request.messages[0].text, "原始系统提示词")

        self.assertEqual([m.role for m in modified.messages], ["system", "system", "user"])
        system_text = modified.messages[0].text
        self.assertIn("原始系统提示词", system_text)
        self.assertIn("**Reviewer**: 代码审查助手", system_text)
        self.assertIn("**Writer**", system_text)
        self.assertIn(SKILL_CONTEXT_START, modified.messages[1].text)
        self.assertIn("请检查安全性", modified.messages[1].text)
        self.assertNotIn("写作助手", modified.messages[1].text)

    def test_before_stream(self):
        """测试 before_stream 方法"""
        advisor = SkillsAdvisor("assistant", self.config_enabled)

        modified = advisor.before_stream(self.request)

        self.assertEqual(len(modified.messages), 3)

    def test_deleted_skill_is_not_injected(self):
        """测试删除的技能不再注入"""
        self.catalog.delete_skill(self.review.id)
        advisor = SkillsAdvisor("assistant", self.config_enabled)

        modified = advisor.before_call(self.request)

        self.assertEqual(len(modified.messages), 2)
        self.assertNotIn("Reviewer", modified.messages[0].text)

    def test_advisor_chain_sends_injected_request(self):
        """测试通过 AdvisorChain 调用时模型收到注入后的请求"""
        received = []

        def api_call(request: LLMRequest) -> ChatCompletion:
            received.append(request)
            return ChatCompletion(
                id="1",
                object="chat.completion",
                created=0,
                model=request.model,
                message=Message.assistant("done"),
            )

        chain = AdvisorChain([SkillsAdvisor("assistant", self.config_enabled)])
        response = chain.call(self.request, api_call)

        self.assertEqual(response.message.text, "done")
        self.assertEqual(len(received[0].messages), 3)


if __name__ == "__main__":
    unittest.main()
