"""Tests for the fzf-backed instance picker."""

from unittest.mock import MagicMock, patch

import pytest

from awsssh.core.errors import SelectorError
from awsssh.core.models import InstanceRecord
from awsssh.core.table import encode_record, format_header, is_header
from awsssh.services.fzf import FzfSelector


@pytest.fixture
def records(running_record, stopped_record) -> list[InstanceRecord]:
    return [running_record, stopped_record]


@pytest.fixture(autouse=True)
def fzf_installed():
    with patch("awsssh.services.fzf.shutil.which", return_value="/usr/bin/fzf") as which:
        yield which


def _runner(returncode: int = 0, stdout: str = "") -> MagicMock:
    return MagicMock(return_value=MagicMock(returncode=returncode, stdout=stdout))


def test_empty_inventory_skips_fzf() -> None:
    runner = _runner()
    selector = FzfSelector(runner=runner)

    assert selector.select([]) == []
    runner.assert_not_called()


def test_single_selection(records, running_record) -> None:
    runner = _runner(stdout=encode_record(running_record) + "\n")
    selector = FzfSelector(runner=runner)

    assert selector.select(records) == [running_record]


def test_input_is_header_then_rows(records) -> None:
    runner = _runner(returncode=130)
    FzfSelector(runner=runner).select(records)

    fed = runner.call_args.kwargs["input"].splitlines()
    assert fed[0] == format_header()
    assert is_header(fed[0])
    assert fed[1:] == [encode_record(r) for r in records]


def test_header_excluded_from_matching() -> None:
    command = FzfSelector().build_command()

    assert "--header-lines=1" in command


def test_only_first_five_columns_searchable() -> None:
    command = FzfSelector().build_command()

    assert "--with-nth=1,2,3,4,5" in command
    assert "--delimiter=\t" in command


def test_preview_and_toggle_binding() -> None:
    command = FzfSelector(preview_command="show {}").build_command()

    assert "--preview=show {}" in command
    assert "--bind=ctrl-/:toggle-preview" in command
    assert "--preview-window=right:40%:wrap" in command


def test_default_preview_runs_preview_module() -> None:
    command = FzfSelector().build_command()
    preview = next(arg for arg in command if arg.startswith("--preview="))

    assert preview.endswith("-m awsssh.cli.preview {}")


def test_multi_flag_only_when_requested() -> None:
    assert "--multi" not in FzfSelector().build_command(multi=False)
    assert "--multi" in FzfSelector().build_command(multi=True)


def test_multi_selection_keeps_order(records, running_record, stopped_record) -> None:
    stdout = encode_record(stopped_record) + "\n" + encode_record(running_record) + "\n"
    selector = FzfSelector(runner=_runner(stdout=stdout))

    assert selector.select(records, multi=True) == [stopped_record, running_record]


def test_single_mode_returns_at_most_one(records, running_record, stopped_record) -> None:
    stdout = encode_record(running_record) + "\n" + encode_record(stopped_record) + "\n"
    selector = FzfSelector(runner=_runner(stdout=stdout))

    assert selector.select(records, multi=False) == [running_record]


def test_returns_original_record_objects(records, running_record) -> None:
    selector = FzfSelector(runner=_runner(stdout=encode_record(running_record) + "\n"))

    (picked,) = selector.select(records)

    assert picked is running_record


@pytest.mark.parametrize("returncode", [1, 130])
def test_cancel_returns_empty(records, returncode) -> None:
    selector = FzfSelector(runner=_runner(returncode=returncode))

    assert selector.select(records) == []


def test_unexpected_exit_raises(records) -> None:
    selector = FzfSelector(runner=_runner(returncode=2))

    with pytest.raises(SelectorError, match="status 2"):
        selector.select(records)


def test_missing_binary_raises(records, fzf_installed) -> None:
    fzf_installed.return_value = None

    with pytest.raises(SelectorError, match="not found"):
        FzfSelector(runner=_runner()).select(records)


def test_header_and_garbage_lines_ignored(records, running_record) -> None:
    stdout = format_header() + "\n" + "garbage\n" + encode_record(running_record) + "\n"
    selector = FzfSelector(runner=_runner(stdout=stdout))

    assert selector.select(records, multi=True) == [running_record]
