"""Tests for the easify command line interface."""

import json

import pytest

from easify.cli import main
from easify.config import get_settings


def run_cli(capsys, *argv):
    main(list(argv))
    return capsys.readouterr().out


def run_failing_cli(capsys, *argv):
    with pytest.raises(SystemExit) as exc_info:
        main(list(argv))
    return exc_info.value.code, capsys.readouterr().err


class TestCompileCommand:
    def test_prints_slots(self, capsys):
        output = json.loads(run_cli(capsys, "compile", "-p", "a, *mut b, c"))

        assert output["declaration"] == "a, mut *b, c"
        assert output["rest_index"] == 1
        assert output["minimum_length"] == 2
        assert [slot["role"] for slot in output["slots"]] == ["head", "rest", "tail"]

    def test_malformed_pattern_exits_with_failure(self, capsys):
        code, err = run_failing_cli(capsys, "compile", "-p", "*a, *b")

        assert code == 1
        assert "E_PATTERN_MALFORMED" in err

    def test_slots_file(self, capsys, slots_file):
        path = slots_file(json.dumps({"slots": [{"name": "a"}, {"name": "b", "rest": True}]}))

        output = json.loads(run_cli(capsys, "compile", "--slots-file", str(path)))

        assert output["declaration"] == "a, *b"

    def test_invalid_slots_file(self, capsys, slots_file):
        path = slots_file(json.dumps({"slots": [{"name": "not a name"}]}))

        code, err = run_failing_cli(capsys, "compile", "--slots-file", str(path))

        assert code == 2
        assert "CLI_VALIDATION_ERROR" in err

    def test_missing_slots_file(self, capsys, tmp_path):
        code, err = run_failing_cli(capsys, "compile", "--slots-file", str(tmp_path / "missing.json"))

        assert code == 2
        assert "CLI_FILE_ERROR" in err


class TestPlanCommand:
    def test_plan_json(self, capsys):
        output = json.loads(run_cli(capsys, "plan", "-p", "a, *b, c", "5"))

        assert output["length"] == 5
        assert output["assignments"][0] == {"name": "a", "role": "head", "index": 0, "start": None, "stop": None}
        assert output["assignments"][1]["start"] == 1
        assert output["assignments"][1]["stop"] == 4
        assert output["assignments"][2]["index"] == 4

    def test_plan_too_short(self, capsys):
        code, err = run_failing_cli(capsys, "plan", "-p", "a, *b, c", "1")

        assert code == 1
        assert "at least 2" in err


class TestUnpackCommand:
    def test_unpack_borrowing(self, capsys):
        output = json.loads(run_cli(capsys, "unpack", "-p", "a, *b, c", "[5, 6, 3, 7]"))

        assert [binding["value"] for binding in output["bindings"]] == [5, [6, 3], 7]

    def test_unpack_consuming(self, capsys):
        output = json.loads(run_cli(capsys, "unpack", "-p", "*a, b, c", "[5, 3, 7]", "--consume"))

        assert output["bindings"][0]["value"] == []

    def test_arity_mismatch(self, capsys):
        code, err = run_failing_cli(capsys, "unpack", "-p", "a, b", "[1, 2, 3]")

        assert code == 1
        assert "exactly 2" in err

    def test_sequence_must_be_array(self, capsys):
        code, err = run_failing_cli(capsys, "unpack", "-p", "a, b", '{"a": 1}')

        assert code == 2
        assert "JSON array" in err

    def test_syntax_error(self, capsys):
        code, err = run_failing_cli(capsys, "unpack", "-p", "a b", "[1, 2]")

        assert code == 1
        assert "E_SLOT_SYNTAX" in err


class TestHelperCommands:
    def test_tuple(self, capsys):
        assert json.loads(run_cli(capsys, "tuple", "5", "3")) == [5, 5, 5]

    def test_tuple_plain_text_value(self, capsys):
        assert json.loads(run_cli(capsys, "tuple", "hi", "2")) == ["hi", "hi"]

    def test_tuple_negative_count(self, capsys):
        code, err = run_failing_cli(capsys, "tuple", "5", "-1")

        assert code == 1
        assert "negative" in err

    def test_split(self, capsys):
        assert json.loads(run_cli(capsys, "split", "a-b-c", "-", "2")) == ["a", "b"]


class TestGlobalOptions:
    def test_no_command_prints_help(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 1
        assert "usage" in capsys.readouterr().out

    def test_config_file_is_applied(self, capsys, tmp_path):
        config = tmp_path / "easify.toml"
        config.write_text("[easify]\npattern_cache_size = 3\n", encoding="utf-8")

        run_cli(capsys, "--config", str(config), "compile", "-p", "a")

        assert get_settings().pattern_cache_size == 3

    def test_config_error(self, capsys, tmp_path):
        code, err = run_failing_cli(capsys, "--config", str(tmp_path / "none.toml"), "compile", "-p", "a")

        assert code == 1
        assert "E_CONFIG" in err
