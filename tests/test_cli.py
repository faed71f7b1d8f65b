"""Tests for the command line entry point."""

from devsync.cli import build_parser, main


class TestAnalyzeCommand:
    """Test ``devsync analyze``."""

    def test_prints_report_and_grade(self, java_project, capsys):
        exit_code = main(["analyze", str(java_project), "--validate"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "DETAILED ISSUES" in out
        assert "CODE QUALITY GRADE REPORT" in out
        assert "Report is consistent" in out

    def test_writes_report_file(self, java_project, tmp_path, capsys):
        report = tmp_path / "report.txt"

        assert main(["analyze", str(java_project), "--output", str(report)]) == 0

        assert report.exists()
        assert report.read_text(encoding="utf-8").startswith("=== DevSync Code Analysis Report ===")
        assert f"Report written to {report}" in capsys.readouterr().out


class TestValidateCommand:
    """Test ``devsync validate``."""

    def test_saved_report_is_consistent(self, java_project, tmp_path):
        report = tmp_path / "report.txt"
        main(["analyze", str(java_project), "-o", str(report)])

        assert main(["validate", str(report)]) == 0

    def test_tampered_report_fails(self, java_project, tmp_path, capsys):
        report = tmp_path / "report.txt"
        main(["analyze", str(java_project), "-o", str(report)])
        text = report.read_text(encoding="utf-8")
        report.write_text(text.replace("\nError: 1\n", "\nError: 7\n"), encoding="utf-8")

        assert main(["validate", str(report)]) == 1
        assert "Severity count mismatch for Error: declared 7, found 1 issues" in capsys.readouterr().err

    def test_missing_report_fails(self, tmp_path, capsys):
        assert main(["validate", str(tmp_path / "absent.txt")]) == 1
        assert "cannot read report" in capsys.readouterr().err


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["analyze"])

        assert args.path == "."
        assert args.output is None
        assert not args.validate

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage: devsync" in capsys.readouterr().out
