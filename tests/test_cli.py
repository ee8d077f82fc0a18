"""Tests for the command-line interface."""

import pytest

from sheet_localizer import cli
from sheet_localizer.errors import NoTargetColumnsError
from sheet_localizer.workbook import WorkbookResult, WorkbookStats


class StubTranslator:
    """Stands in for WorkbookTranslator inside the CLI."""

    reachable = True
    error = None

    def __init__(self, settings=None, show_progress=False):
        self.settings = settings
        self.show_progress = show_progress

    def test_service_reachable(self):
        return self.reachable

    def process_workbook(self, file_path):
        if self.error:
            raise self.error
        stats = WorkbookStats(source_column="1031(DEU)", target_columns=["2057(ENG)"], texts_found=1, translations_applied=1)
        return WorkbookResult(filename="translated_1.xlsx", output_file="out/translated_1.xlsx", stats=stats)


@pytest.fixture
def stub(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setattr(cli, "WorkbookTranslator", StubTranslator)
    monkeypatch.setattr(StubTranslator, "reachable", True)
    monkeypatch.setattr(StubTranslator, "error", None)
    return StubTranslator


class TestMain:
    """Test CLI flows."""

    def test_translate_prints_stats(self, stub, tmp_path, capsys):
        """Test a successful run."""
        input_file = tmp_path / "in.xlsx"
        input_file.write_bytes(b"")

        cli.main([str(input_file), "--log-file", str(tmp_path / "run.log")])

        out = capsys.readouterr().out
        assert "Translation completed successfully!" in out
        assert '"translationsApplied": 1' in out

    def test_missing_input_file(self, stub, tmp_path):
        """Test that a missing file exits with an error."""
        with pytest.raises(SystemExit) as excinfo:
            cli.main([str(tmp_path / "nope.xlsx"), "--log-file", str(tmp_path / "run.log")])
        assert excinfo.value.code == 1

    def test_structural_error_exits(self, stub, tmp_path, capsys):
        """Test that structural errors are reported, not raised."""
        stub.error = NoTargetColumnsError("only one language column")
        input_file = tmp_path / "in.xlsx"
        input_file.write_bytes(b"")

        with pytest.raises(SystemExit):
            cli.main([str(input_file), "--log-file", str(tmp_path / "run.log")])
        assert "only one language column" in capsys.readouterr().out

    def test_check(self, stub, tmp_path, capsys):
        """Test the reachability check."""
        cli.main(["--check", "--log-file", str(tmp_path / "run.log")])
        assert "Configuration is OK!" in capsys.readouterr().out

    def test_check_unreachable(self, stub, tmp_path):
        """Test that an unreachable service exits with 1."""
        stub.reachable = False
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--check", "--log-file", str(tmp_path / "run.log")])
        assert excinfo.value.code == 1

    @pytest.mark.parametrize("timeout", ["0", "-1"])
    def test_non_positive_timeout_flag(self, stub, tmp_path, capsys, timeout):
        """Test that --timeout is validated like the environment variable."""
        input_file = tmp_path / "in.xlsx"
        input_file.write_bytes(b"")

        with pytest.raises(SystemExit) as excinfo:
            cli.main([str(input_file), "--timeout", timeout, "--log-file", str(tmp_path / "run.log")])
        assert excinfo.value.code == 1
        assert "Timeout must be a positive number" in capsys.readouterr().out

    def test_input_required_without_check(self, stub):
        """Test that argparse rejects a call without input."""
        with pytest.raises(SystemExit):
            cli.main([])
