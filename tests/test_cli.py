"""Tests for the jump command line."""

import pytest
from click.testing import CliRunner

from jump import __version__
from jump.cli import cli
from jump.commands import search
from jump.completions import complete_database_entry, complete_fragments
from jump.config import load_config
from jump.store import load_store

from .conftest import write_config


@pytest.fixture
def runner():
    return CliRunner()


def lines(result):
    return result.output.strip().splitlines()


class TestAdd:
    def test_add_current_directory(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cli, ["add"])
        assert result.exit_code == 0, result.output
        assert load_store() == {str(tmp_path): 1}

    def test_weight_accumulates(self, runner, tmp_path):
        target = tmp_path / "proj"
        target.mkdir()
        runner.invoke(cli, ["add", str(target), "5"])
        runner.invoke(cli, ["add", str(target)])
        assert load_store() == {str(target): 6}

    def test_weight_before_path(self, runner, tmp_path):
        target = tmp_path / "proj"
        target.mkdir()
        result = runner.invoke(cli, ["add", "7", str(target)])
        assert result.exit_code == 0, result.output
        assert load_store() == {str(target): 7}

    def test_numeric_directory_name(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "2024").mkdir()
        runner.invoke(cli, ["add", "2024"])
        assert load_store() == {str(tmp_path / "2024"): 1}

    def test_reset(self, runner, tmp_path):
        target = tmp_path / "proj"
        target.mkdir()
        runner.invoke(cli, ["add", str(target), "9"])
        runner.invoke(cli, ["add", "--reset", str(target), "2"])
        assert load_store() == {str(target): 2}

    def test_relative_path(self, runner, tmp_path, monkeypatch):
        (tmp_path / "a" / "b").mkdir(parents=True)
        monkeypatch.chdir(tmp_path / "a")
        runner.invoke(cli, ["add", "b/"])
        runner.invoke(cli, ["add", ".."])
        assert load_store() == {str(tmp_path / "a" / "b"): 1, str(tmp_path): 1}

    def test_not_a_directory(self, runner, tmp_path):
        result = runner.invoke(cli, ["add", str(tmp_path / "missing")])
        assert result.exit_code != 0
        assert "not a directory" in result.output
        assert load_store() == {}

    def test_black_listed_directory_is_skipped(self, runner, tmp_path):
        target = tmp_path / "cache"
        target.mkdir()
        write_config(tmp_path, "black_listed_directories:\n  - /cache$\n")
        result = runner.invoke(cli, ["add", str(target)])
        assert result.exit_code == 0
        assert load_store() == {}

    def test_bad_weight(self, runner, tmp_path):
        target = tmp_path / "proj"
        target.mkdir()
        result = runner.invoke(cli, ["add", str(target), "heavy"])
        assert result.exit_code != 0

    def test_too_many_arguments(self, runner, tmp_path):
        result = runner.invoke(cli, ["add", str(tmp_path), "1", "2"])
        assert result.exit_code != 0


class TestRemoveClearShow:
    def test_remove(self, runner, example):
        target = example.path("PART/PART3/B")
        result = runner.invoke(cli, ["remove", target])
        assert result.exit_code == 0, result.output
        assert target not in load_store()
        assert len(load_store()) == len(example.db) - 1

    def test_remove_unknown(self, runner, example):
        result = runner.invoke(cli, ["remove", "/not/stored"])
        assert result.exit_code == 0
        assert "Not in database" in result.output
        assert load_store() == example.db

    def test_clear_matching(self, runner, example):
        result = runner.invoke(cli, ["clear", "PART2"])
        assert result.exit_code == 0, result.output
        assert sorted(load_store()) == sorted(p for p in example.db if "PART2" not in p)

    def test_clear_all_needs_confirmation(self, runner, example):
        result = runner.invoke(cli, ["clear"], input="n\n")
        assert "Cancelled" in result.output
        assert load_store() == example.db

        result = runner.invoke(cli, ["clear"], input="y\n")
        assert result.exit_code == 0
        assert load_store() == {}

    def test_clear_all_forced(self, runner, example):
        runner.invoke(cli, ["clear", "--force"])
        assert load_store() == {}

    def test_show(self, runner, example):
        result = runner.invoke(cli, ["show"])
        assert result.exit_code == 0
        assert lines(result)[0] == f"20 {example.path('PART/PART3/B_directory')}"
        assert lines(result)[-1] == f"1 {example.path('PART/PART3/B')}"
        assert len(lines(result)) == len(example.db)

    def test_show_unreadable_database(self, runner, tmp_path):
        (tmp_path / "jump_db").mkdir()
        result = runner.invoke(cli, ["show"])
        assert result.exit_code == 1
        assert "can't read database" in result.output


class TestSearch:
    def test_prints_best_match(self, runner, example):
        result = runner.invoke(cli, ["search", "B"])
        assert result.exit_code == 0, result.output
        assert lines(result) == [example.path("PART/PART3/B")]

    def test_no_match_exits_non_zero(self, runner, example):
        result = runner.invoke(cli, ["search", "NOTHING_LIKE_THIS"])
        assert result.exit_code == 1
        assert result.output == ""

    def test_flags_override_config(self, runner, example, elsewhere):
        assert runner.invoke(cli, ["search", "F"]).exit_code == 0
        assert runner.invoke(cli, ["search", "--no-sub-db", "F"]).exit_code == 1

    def test_ignore_case_flag(self, runner, example):
        result = runner.invoke(cli, ["search", "-i", "b_dir"])
        assert lines(result) == [example.path("PART/PART3/B_directory")]

    def test_config_switches(self, runner, tmp_path, example):
        write_config(tmp_path, "no_direct_path: true\n")
        result = runner.invoke(cli, ["search", "A"])
        assert lines(result) == [example.path("PART/PART2/A")]

    def test_file_option(self, runner, example):
        target = example.path("PART/PART3/C")
        with open(f"{target}/build.gradle", "w") as f:
            f.write("")
        result = runner.invoke(cli, ["search", "--file", "*.gradle", "C"])
        assert lines(result) == [target]

    def test_quote(self, runner, tmp_path, monkeypatch):
        (tmp_path / "with space").mkdir()
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cli, ["search", "--quote", "with space"])
        assert lines(result) == ["'with space'"]

    def test_invalid_fragment(self, runner, example):
        result = runner.invoke(cli, ["search", "("])
        assert result.exit_code == 1
        assert "invalid path fragment" in result.output

    def test_fragments_required(self, runner):
        assert runner.invoke(cli, ["search"]).exit_code == 2


class TestComplete:
    def test_prints_every_match(self, runner, example):
        result = runner.invoke(cli, ["complete", "B"])
        assert result.exit_code == 0, result.output
        assert lines(result) == [
            example.path("PART/PART3/B"),
            example.path("PART/PART3/B_directory"),
            example.path("PART/PART2/B_directory"),
            # "SUB" below cwd contains a B as well
            example.path("SUB"),
        ]

    def test_without_fragments(self, runner, example):
        result = runner.invoke(cli, ["complete"])
        assert result.exit_code == 0
        assert result.output == ""


class TestShellCompletion:
    def _context(self, **params):
        ctx = search.make_context("search", ["x"], resilient_parsing=True)
        ctx.params = params
        return ctx

    def test_fragments(self, example):
        items = complete_fragments(self._context(fragments=("PART3",)), None, "C")
        assert [i.value for i in items] == [example.path("PART/PART3/C")]
        assert items[0].help == "end directory in db entry"

    def test_single_match_already_typed(self, example):
        target = example.path("PART/PART3/C")
        assert complete_fragments(self._context(fragments=()), None, target) == []

    def test_nothing_typed(self, example):
        assert complete_fragments(self._context(), None, "") == []

    def test_database_entries(self, example):
        items = complete_database_entry(self._context(), None, example.path("PART/PART3/B"))
        assert [i.value for i in items] == [
            example.path("PART/PART3/B"),
            example.path("PART/PART3/B_directory"),
        ]


class TestConfigCommands:
    def test_files(self, runner, tmp_path):
        result = runner.invoke(cli, ["config", "files"])
        assert lines(result) == [str(tmp_path / "jump_db"), str(tmp_path / "config.yaml")]

    def test_set_and_show(self, runner):
        assert runner.invoke(cli, ["config", "set", "ignore_case", "on"]).exit_code == 0
        assert runner.invoke(cli, ["config", "set", "ignore_path", "^\\.git$", "^build$"]).exit_code == 0
        assert load_config() == {"ignore_case": True, "ignore_path": ["^\\.git$", "^build$"]}

        result = runner.invoke(cli, ["config", "show"])
        assert "ignore_case: true" in result.output

    def test_set_rejects_bad_values(self, runner):
        assert runner.invoke(cli, ["config", "set", "ignore_case", "maybe"]).exit_code == 2
        assert runner.invoke(cli, ["config", "set", "verbosity", "9"]).exit_code == 2
        assert runner.invoke(cli, ["config", "set", "ignore_path", "["]).exit_code == 1
        assert load_config() == {}

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert __version__ in result.output
