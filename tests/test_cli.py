"""CLI integration smoke tests."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from semantica.cli import app

runner = CliRunner()


def _invoke(*args: str):
    return runner.invoke(app, list(args))


def test_help_does_not_touch_index(override_settings) -> None:
    result = _invoke("-h")

    assert result.exit_code == 0
    assert "--filepath" in result.stdout
    assert not override_settings.get_index_path().exists()


def test_add_then_search(temp_dir: Path, override_settings) -> None:
    index_path = temp_dir / "labels.smv"

    result = _invoke("-f", str(index_path), "-a", "Black cat=247", "-a", "Dog=808")
    assert result.exit_code == 0, result.output
    assert "Added 2 entries" in result.stdout
    assert index_path.exists()

    result = _invoke("-f", str(index_path), "-s", "Black cat")
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "247"


def test_search_missing_index_prints_null(temp_dir: Path, override_settings) -> None:
    index_path = temp_dir / "absent.smv"

    result = _invoke("--filepath", str(index_path), "--search", "anything")

    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "null"
    assert not index_path.exists()


def test_default_path_comes_from_settings(override_settings) -> None:
    result = _invoke("-a", "Dog=808")

    assert result.exit_code == 0, result.output
    assert override_settings.get_index_path().exists()


def test_remove_before_add_and_list(temp_dir: Path, override_settings) -> None:
    index_path = temp_dir / "labels.smv"
    _invoke("-f", str(index_path), "-a", "One=1", "-a", "Two=2", "-a", "Three=3")

    result = _invoke("-f", str(index_path), "-x", "0", "-x", "2", "-a", "Four=4", "-l")

    assert result.exit_code == 0, result.output
    assert "Removed 2 entries" in result.stdout
    lines = [line for line in result.stdout.splitlines() if "\t" in line]
    assert lines == ["0\t2", "1\t4"]


def test_empty_invocation_writes_empty_index(temp_dir: Path, override_settings) -> None:
    index_path = temp_dir / "labels.smv"

    result = _invoke("-f", str(index_path))

    assert result.exit_code == 0, result.output
    assert index_path.read_bytes() == (8).to_bytes(8, "big")


def test_search_with_add_is_usage_error(temp_dir: Path, override_settings) -> None:
    result = _invoke("-f", str(temp_dir / "x.smv"), "-s", "cat", "-a", "Cat=1")
    assert result.exit_code == 2


def test_non_numeric_value_is_usage_error(temp_dir: Path, override_settings) -> None:
    index_path = temp_dir / "x.smv"
    result = _invoke("-f", str(index_path), "-a", "Cat=meow")

    assert result.exit_code == 2
    assert not index_path.exists()


def test_pair_without_separator_is_usage_error(temp_dir: Path, override_settings) -> None:
    result = _invoke("-f", str(temp_dir / "x.smv"), "-a", "Cat")
    assert result.exit_code == 2


def test_non_numeric_id_is_usage_error(temp_dir: Path, override_settings) -> None:
    result = _invoke("-f", str(temp_dir / "x.smv"), "-x", "first")
    assert result.exit_code == 2


def test_unknown_flag_is_usage_error(override_settings) -> None:
    result = _invoke("--frobnicate")
    assert result.exit_code == 2


def test_remove_out_of_range_fails(temp_dir: Path, override_settings) -> None:
    index_path = temp_dir / "labels.smv"
    _invoke("-f", str(index_path), "-a", "One=1")

    result = _invoke("-f", str(index_path), "-x", "4")

    assert result.exit_code == 1
    assert "No entry at position 4" in result.output


def test_corrupt_index_fails_cleanly(temp_dir: Path, override_settings) -> None:
    index_path = temp_dir / "labels.smv"
    index_path.write_bytes(b"\x00\x01")

    result = _invoke("-f", str(index_path), "-s", "cat")

    assert result.exit_code == 1
    assert "corrupt" in result.output


def test_version_flag(override_settings) -> None:
    result = _invoke("--version")
    assert result.exit_code == 0
    assert "semantica version" in result.stdout


def test_add_takes_several_name_value_pairs(temp_dir: Path, override_settings) -> None:
    index_path = temp_dir / "labels.smv"

    result = _invoke("-f", str(index_path), "-a", "One", "1", "Two", "2", "-l")

    assert result.exit_code == 0, result.output
    assert "Added 2 entries" in result.stdout
    lines = [line for line in result.stdout.splitlines() if "\t" in line]
    assert lines == ["0\t1", "1\t2"]


def test_remove_takes_several_ids(temp_dir: Path, override_settings) -> None:
    index_path = temp_dir / "labels.smv"
    _invoke("-f", str(index_path), "-a", "One", "1", "Two", "2", "Three", "3")

    result = _invoke("-f", str(index_path), "-x", "0", "2", "-l")

    assert result.exit_code == 0, result.output
    assert "Removed 2 entries" in result.stdout
    lines = [line for line in result.stdout.splitlines() if "\t" in line]
    assert lines == ["0\t2"]


def test_mixed_pair_forms_and_negative_values(temp_dir: Path, override_settings) -> None:
    index_path = temp_dir / "labels.smv"

    result = _invoke("-f", str(index_path), "--add", "Low", "-5", "High=7", "-l")

    assert result.exit_code == 0, result.output
    lines = [line for line in result.stdout.splitlines() if "\t" in line]
    assert lines == ["0\t-5", "1\t7"]


def test_name_followed_by_flag_is_usage_error(temp_dir: Path, override_settings) -> None:
    index_path = temp_dir / "x.smv"

    result = _invoke("-f", str(index_path), "-a", "Cat", "-l")

    assert result.exit_code == 2
    assert not index_path.exists()


def test_flags_do_not_change_shared_settings(temp_dir: Path, override_settings) -> None:
    import semantica.config as config_module

    result = _invoke("-f", str(temp_dir / "labels.smv"), "--online", "-a", "Dog=808")

    assert result.exit_code == 0, result.output
    assert config_module.get_settings() is override_settings
    assert override_settings.index_path is None
    assert override_settings.online is False
    assert not override_settings.get_index_path().exists()
