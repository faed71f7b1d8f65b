"""Tests for source file collection."""

from devsync.services.collector_service import CollectorService


class TestCollectorService:
    """Test file discovery and exclusion."""

    def test_collects_java_files_in_order(self, java_project):
        """Only .java files outside excluded directories are collected."""
        files = CollectorService().collect(java_project)

        assert [f.name for f in files] == [
            "Broken.java",
            "Calculator.java",
            "Customer.java",
            "FileCopier.java",
            "OrderService.java",
            "Pricing.java",
        ]

    def test_missing_root_is_empty(self, tmp_path):
        """A root that does not exist yields no files instead of raising."""
        assert CollectorService().collect(tmp_path / "nowhere") == []

    def test_single_file_root(self, java_project):
        path = java_project / "src" / "main" / "java" / "com" / "shop" / "Pricing.java"

        assert CollectorService().collect(path) == [path]
        assert CollectorService().collect(path.with_name("README.md")) == []

    def test_exclusion_is_case_insensitive(self, tmp_path):
        (tmp_path / "Build").mkdir()
        (tmp_path / "Build" / "Out.java").write_text("class Out {}\n")
        (tmp_path / "App.java").write_text("class App {}\n")

        files = CollectorService(excluded_patterns=["build"]).collect(tmp_path)

        assert [f.name for f in files] == ["App.java"]

    def test_custom_extensions(self, tmp_path):
        (tmp_path / "App.java").write_text("class App {}\n")
        (tmp_path / "App.jav").write_text("class App {}\n")

        collector = CollectorService(excluded_patterns=[], extensions=["jav"])

        assert [f.name for f in collector.collect(tmp_path)] == ["App.jav"]

    def test_is_excluded(self):
        collector = CollectorService(excluded_patterns=["test", ".git"])

        assert collector.is_excluded("IntegrationTests")
        assert collector.is_excluded(".github")
        assert not collector.is_excluded("src")
