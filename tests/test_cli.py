from pathlib import Path

import pytest
from click.utils import strip_ansi
from typer.testing import CliRunner

import fuzzy_pick.__main__ as entrypoint
from fuzzy_pick import __version__


@pytest.fixture
def names_file(tmp_path: Path) -> Path:
    path = tmp_path / "names.txt"
    path.write_text("c_ommit\nnonsense\ncommit\nc_o_m_m_i_t\n", encoding="utf-8")
    return path


def test_help_includes_expected_options() -> None:
    runner = CliRunner()

    result = runner.invoke(entrypoint.cli, ["--help"])
    output = strip_ansi(result.output)

    assert result.exit_code == 0
    assert "--query" in output
    assert "--max-length" in output
    assert "--print" in output
    assert "--no-create" in output
    assert "--version" in output


def test_version_flag_prints_version_and_exits() -> None:
    runner = CliRunner()

    result = runner.invoke(entrypoint.cli, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == f"fuzzy-pick {__version__}"


def test_cli_passes_options_to_picker(monkeypatch, names_file: Path) -> None:
    runner = CliRunner()
    captured: dict[str, object] = {}

    class _FakeTui:
        def __init__(
            self,
            candidates: list[str],
            *,
            initial_query: str = "",
            allow_create: bool = True,
            max_length: int = 1000,
        ) -> None:
            captured["candidates"] = candidates
            captured["initial_query"] = initial_query
            captured["allow_create"] = allow_create
            captured["max_length"] = max_length

        def run(self) -> str | None:
            captured["run_called"] = True
            return "commit"

    monkeypatch.setattr(entrypoint, "CandidatePickerTui", _FakeTui)

    result = runner.invoke(
        entrypoint.cli,
        [str(names_file), "-q", "com", "--no-create", "--max-length", "50"],
    )

    assert result.exit_code == 0
    assert result.output == "commit\n"
    assert captured == {
        "candidates": ["c_ommit", "nonsense", "commit", "c_o_m_m_i_t"],
        "initial_query": "com",
        "allow_create": False,
        "max_length": 50,
        "run_called": True,
    }


def test_cli_exits_when_picker_is_cancelled(monkeypatch, names_file: Path) -> None:
    runner = CliRunner()

    class _FakeTui:
        def __init__(self, candidates: list[str], **kwargs: object) -> None:
            pass

        def run(self) -> None:
            return None

    monkeypatch.setattr(entrypoint, "CandidatePickerTui", _FakeTui)

    result = runner.invoke(entrypoint.cli, [str(names_file)])

    assert result.exit_code == 1
    assert result.output == ""


def test_cli_exits_for_unreadable_candidates(monkeypatch, tmp_path: Path) -> None:
    runner = CliRunner()
    captured: dict[str, object] = {}

    class _FakeTui:
        def __init__(self, *args: object, **kwargs: object) -> None:
            captured["kwargs"] = kwargs

    monkeypatch.setattr(entrypoint, "CandidatePickerTui", _FakeTui)

    result = runner.invoke(entrypoint.cli, [str(tmp_path / "missing.txt")])

    assert result.exit_code == 1
    assert "Cannot read candidates" in result.output
    assert "missing.txt" in result.output
    assert captured == {}


def test_print_lists_ranked_matches(names_file: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(entrypoint.cli, [str(names_file), "-q", "commit", "--print"])
    lines = strip_ansi(result.output).splitlines()

    assert result.exit_code == 0
    assert [line.split()[-1] for line in lines] == [
        "commit",
        "c_ommit",
        "c_o_m_m_i_t",
    ]
    assert lines[0].split()[0] == "21"


def test_print_requires_query(names_file: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(entrypoint.cli, [str(names_file), "--print"])

    assert result.exit_code == 2


def test_print_exits_when_nothing_matches(names_file: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(entrypoint.cli, [str(names_file), "-q", "xyz", "--print"])

    assert result.exit_code == 1
    assert result.output == ""


def test_max_length_reads_environment(names_file: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        entrypoint.cli,
        [str(names_file), "-q", "commit", "--print"],
        env={"FUZZY_PICK_MAX_LENGTH": "6"},
    )
    lines = strip_ansi(result.output).splitlines()

    assert result.exit_code == 0
    assert [line.split()[-1] for line in lines] == ["commit"]
