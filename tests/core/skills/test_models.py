"""测试技能数据模型"""

import unittest
import uuid

from pydantic import ValidationError

from skillsmith.core.skills.models import Skill, SkillSource, TriggerMode


class TestSkill(unittest.TestCase):
    """测试 Skill 模型"""

    def test_defaults(self):
        """测试默认值"""
        skill = Skill()

        self.assertIsInstance(skill.id, uuid.UUID)
        self.assertEqual(skill.name, "")
        self.assertEqual(skill.version, "1.0.0")
        self.assertEqual(skill.source, SkillSource.LOCAL)
        self.assertTrue(skill.enabled)
        self.assertEqual(skill.trigger_mode, TriggerMode.ALWAYS)
        self.assertEqual(skill.trigger_keywords, ())
        self.assertEqual(skill.scan_depth, 3)
        self.assertLessEqual(skill.created_at, skill.updated_at + 1)

    def test_unique_ids(self):
        """测试每个技能生成不同的 id"""
        self.assertNotEqual(Skill().id, Skill().id)

    def test_frozen(self):
        """测试记录不可原地修改"""
        skill = Skill(name="a")
        with self.assertRaises(ValidationError):
            skill.name = "b"

    def test_keywords_cannot_be_changed_in_place(self):
        """测试关键词序列不可原地修改"""
        skill = Skill(name="a", trigger_keywords=["a"])

        self.assertIsInstance(skill.trigger_keywords, tuple)
        with self.assertRaises(AttributeError):
            skill.trigger_keywords.append("b")
        self.assertEqual(skill.trigger_keywords, ("a",))

    def test_scan_depth_must_be_positive(self):
        """测试 scan_depth 至少为 1"""
        with self.assertRaises(ValidationError):
            Skill(scan_depth=0)

    def test_copy_with(self):
        """测试 copy_with 生成新记录且保留 id"""
        skill = Skill(name="a", created_at=100.0, updated_at=100.0)

        updated = skill.copy_with(name="b", id=uuid.uuid4(), created_at=1.0)

        self.assertEqual(skill.name, "a")
        self.assertEqual(updated.name, "b")
        self.assertEqual(updated.id, skill.id)
        self.assertEqual(updated.created_at, 100.0)
        self.assertGreater(updated.updated_at, 100.0)

    def test_camel_case_serialization(self):
        """测试序列化使用 camelCase 字段名和小写枚举值"""
        skill = Skill(
            name="m",
            source=SkillSource.MARKETPLACE,
            source_url="https://example.com/skill/1",
            trigger_mode=TriggerMode.KEYWORD,
        )

        data = skill.model_dump(by_alias=True, mode="json")

        self.assertEqual(data["sourceUrl"], "https://example.com/skill/1")
        self.assertEqual(data["triggerMode"], "keyword")
        self.assertEqual(data["source"], "marketplace")
        self.assertIn("scanDepth", data)

        restored = Skill.model_validate(data)
        self.assertEqual(restored, skill)

    def test_hash_by_id(self):
        """测试技能可以放入集合"""
        skill = Skill(name="a", trigger_keywords=["x"])
        self.assertEqual(len({skill, skill}), 1)


if __name__ == "__main__":
    unittest.main()
