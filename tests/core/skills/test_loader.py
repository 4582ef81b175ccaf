"""测试技能加载器"""

import shutil
import tempfile
import unittest
from pathlib import Path

from skillsmith.core.config.models import Config, ConfigMeta, SkillsSection
from skillsmith.core.skills.errors import SkillLoadError
from skillsmith.core.skills.loader import SkillLoader, find_icon
from skillsmith.core.skills.models import TriggerMode


class TestSkillLoader(unittest.TestCase):
    """测试 SkillLoader"""

    def setUp(self):
        """设置测试环境"""
        self.test_dir = Path(tempfile.mkdtemp())
        self.loader = SkillLoader(self.test_dir)

    def tearDown(self):
        """清理测试环境"""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def _write(self, relative: str, content: str) -> Path:
        file_path = self.test_dir / relative
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        return file_path

    def test_load_file(self):
        """测试读取单个技能文件"""
        file_path = self._write(
            "review.md",
            "---\nname: Reviewer\ntriggerMode: keyword\ntriggerKeywords: [review]\n---\n\n# Review\n",
        )

        skill = self.loader.load_file(file_path)

        self.assertEqual(skill.name, "Reviewer")
        self.assertEqual(skill.trigger_mode, TriggerMode.KEYWORD)
        self.assertEqual(skill.trigger_keywords, ("review",))
        self.assertIsNone(skill.icon)

    def test_load_missing_file(self):
        """测试读取不存在的文件"""
        with self.assertRaises(SkillLoadError):
            self.loader.load_file(self.test_dir / "missing.md")

    def test_load_non_utf8_file(self):
        """测试读取非 UTF-8 文件"""
        file_path = self.test_dir / "bad.md"
        file_path.write_bytes(b"\xff\xfe\xfa invalid")

        with self.assertRaises(SkillLoadError) as ctx:
            self.loader.load_file(file_path)
        self.assertIn("UTF-8", str(ctx.exception))

    def test_skill_directory_with_icon(self):
        """测试 SKILL.md 同目录下的图标"""
        self._write("pdf-tools/SKILL.md", "# PDF Tools\nbody")
        icon = self.test_dir / "pdf-tools" / "icon.png"
        icon.write_bytes(b"\x89PNG")

        skill = self.loader.load_file(self.test_dir / "pdf-tools" / "SKILL.md")

        self.assertEqual(skill.name, "PDF Tools")
        self.assertEqual(skill.icon, str(icon))
        self.assertEqual(find_icon(self.test_dir / "pdf-tools"), icon)

    def test_scan_directory(self):
        """测试扫描技能目录，跳过无法读取的文件"""
        self._write("a.md", "# Alpha")
        self._write("b.md", "# Beta")
        self._write("nested/SKILL.md", "# Nested")
        self._write("nested/notes.txt", "ignored")
        self._write("empty-dir/readme.txt", "no skill here")
        (self.test_dir / "broken.md").write_bytes(b"\xff\xfe")

        skills = self.loader.scan_directory()

        self.assertEqual([s.name for s in skills], ["Alpha", "Beta", "Nested"])

    def test_scan_missing_directory(self):
        """测试扫描不存在的目录"""
        self.assertEqual(self.loader.scan_directory(self.test_dir / "nope"), [])

    def test_scan_file_path(self):
        """测试扫描路径不是目录"""
        file_path = self._write("a.md", "# Alpha")
        self.assertEqual(self.loader.scan_directory(file_path), [])

    def test_from_config(self):
        """测试按配置的技能目录创建加载器"""
        self._write("my-skills/a.md", "# Alpha")
        config = Config(
            skills=SkillsSection(skills_dir="my-skills"),
            meta=ConfigMeta(workspace_dir=self.test_dir),
        )

        loader = SkillLoader.from_config(config)

        self.assertEqual(loader.skills_dir, self.test_dir / "my-skills")
        self.assertEqual([s.name for s in loader.scan_directory()], ["Alpha"])


if __name__ == "__main__":
    unittest.main()
