"""Tests for the end-to-end selection flow and CLI error handling."""

import shlex
import sys
from unittest.mock import MagicMock, patch

import pytest

from awsssh.__main__ import AwsSsh
from awsssh.cli import main as cli_main
from awsssh.constants import ConnectionMode
from awsssh.core.errors import SelectorError
from awsssh.core.models import InstanceRecord
from awsssh.providers.exceptions import CredentialError, ProviderQueryError
from tests.unit.fakes.fake_multiplexer import FakeMultiplexer


def _record(name: str, instance_id: str, status: str = "running") -> InstanceRecord:
    return InstanceRecord(
        name=name, instance_id=instance_id, status=status, public_dns=f"{name}.example"
    )


def _build(
    records: list[InstanceRecord],
    selected: list[InstanceRecord],
    multiplexer: FakeMultiplexer | None = None,
    tmux: bool = True,
    verifier: MagicMock | None = None,
):
    fetcher = MagicMock()
    fetcher.fetch.return_value = records
    selector = MagicMock()
    selector.select.return_value = selected
    launcher = MagicMock()
    multiplexer = multiplexer or FakeMultiplexer()
    verifier = verifier or MagicMock()

    app = AwsSsh(
        inventory_factory=MagicMock(return_value=fetcher),
        selector_factory=MagicMock(return_value=selector),
        launcher_factory=MagicMock(return_value=launcher),
        multiplexer_factory=MagicMock(return_value=multiplexer),
        credentials_verifier=verifier,
        region_resolver=lambda profile: "us-east-1",
        multiplexer_available=lambda: tmux,
        input_func=lambda _: "",
    )
    return app, fetcher, selector, launcher, multiplexer, verifier


@pytest.fixture(autouse=True)
def no_config_file(config_file):
    yield config_file


def test_single_selection_connects_directly() -> None:
    record = _record("h1", "i-1")
    app, fetcher, selector, launcher, multiplexer, _ = _build([record], [record])

    assert app.run(region="us-east-1", connection="ssh", username="u") == 0

    fetcher.fetch.assert_called_once_with("Name", "*")
    launcher.connect.assert_called_once_with(record, ConnectionMode.SSH, "u")
    assert multiplexer.calls == []


def test_multi_selection_uses_workspace() -> None:
    records = [_record("a", "i-1"), _record("b", "i-2")]
    app, _, _, launcher, multiplexer, _ = _build(records, records)

    assert app.run(region="eu-west-1", connection="ssm") == 0

    launcher.connect.assert_not_called()
    assert multiplexer.sessions["awsssh"] == ["ssh:a:i-1", "ssh:b:i-2"]
    assert multiplexer.attached == ["awsssh"]
    launcher_args = shlex.split(multiplexer.commands["ssh:a:i-1"].split("; ", 1)[0])
    assert "--region='eu-west-1'" in launcher_args
    assert "--mode='ssm'" in launcher_args


def test_multi_selection_reports_duplicates() -> None:
    records = [_record("a", "i-1"), _record("b", "i-2")]
    multiplexer = FakeMultiplexer(sessions={"awsssh": ["ssh:a:i-1"]})
    app, *_ = _build(records, records, multiplexer=multiplexer)

    app.run(region="us-east-1")

    assert multiplexer.sessions["awsssh"] == ["ssh:a:i-1", "ssh:b:i-2"]
    assert multiplexer.created_sessions == []
    assert multiplexer.attached == ["awsssh"]


def test_selector_multi_follows_tmux_availability() -> None:
    record = _record("a", "i-1")
    app, _, selector, *_ = _build([record], [record], tmux=False)

    app.run(region="us-east-1")

    selector.select.assert_called_once_with([record], multi=False)


def test_empty_inventory_skips_selector_and_launcher(caplog) -> None:
    app, _, selector, launcher, _, _ = _build([], [])

    with caplog.at_level("INFO"):
        assert app.run(region="us-east-1") == 0

    selector.select.assert_not_called()
    launcher.connect.assert_not_called()
    assert "No instances found" in caplog.text


def test_cancelled_selection_connects_nothing(caplog) -> None:
    record = _record("a", "i-1")
    app, _, _, launcher, multiplexer, _ = _build([record], [])

    with caplog.at_level("INFO"):
        assert app.run(region="us-east-1") == 0

    launcher.connect.assert_not_called()
    assert multiplexer.calls == []
    assert "No instance selected." in caplog.text


def test_credentials_checked_before_query() -> None:
    verifier = MagicMock(side_effect=CredentialError("no creds"))
    app, fetcher, *_ = _build([], [], verifier=verifier)

    with pytest.raises(CredentialError):
        app.run(region="us-east-1")

    fetcher.fetch.assert_not_called()


def test_invalid_connection_fails_before_credentials() -> None:
    app, fetcher, _, _, _, verifier = _build([], [])

    with pytest.raises(ValueError):
        app.run(region="us-east-1", connection="telnet")

    verifier.assert_not_called()
    fetcher.fetch.assert_not_called()


def test_interactive_prompts_when_no_flags() -> None:
    record = _record("h1", "i-1")
    app, fetcher, _, launcher, _, verifier = _build([record], [record])

    app.run()

    verifier.assert_called_once_with(None, "us-east-1")
    fetcher.fetch.assert_called_once_with("Name", "*")
    launcher.connect.assert_called_once_with(record, ConnectionMode.SSH, "ec2-user")


class TestCliMain:
    """Tests for exit codes and messages of the awsssh command."""

    def _run_main(self, argv: list[str], run_side_effect=None) -> int:
        with patch.object(sys, "argv", ["awsssh", *argv]), patch.object(
            cli_main.AwsSsh, "run", side_effect=run_side_effect, return_value=0
        ), patch.object(cli_main, "configure_logging"):
            with pytest.raises(SystemExit) as exc_info:
                cli_main.main()
        return exc_info.value.code

    def test_success_exits_zero(self) -> None:
        assert self._run_main(["--region=us-east-1"]) == 0

    @pytest.mark.parametrize(
        "argv", [["--bogus=1"], ["--region=us-east-1", "--bogus=1"], ["--tagkey=Env"]]
    )
    def test_unknown_arguments_stop_before_flow(self, argv, capsys) -> None:
        with patch.object(cli_main.AwsSsh, "run", return_value=0) as run:
            with patch.object(sys, "argv", ["awsssh", *argv]), patch.object(
                cli_main, "configure_logging"
            ):
                with pytest.raises(SystemExit) as exc_info:
                    cli_main.main()

        assert exc_info.value.code == 2
        run.assert_not_called()
        assert "Unrecognized option(s)" in capsys.readouterr().err

    def test_credential_error(self, capsys) -> None:
        code = self._run_main([], run_side_effect=CredentialError("missing"))

        assert code == 1
        assert "AWS credentials not found" in capsys.readouterr().err

    def test_query_error_printed_verbatim(self, capsys) -> None:
        code = self._run_main([], run_side_effect=ProviderQueryError("throttled"))

        assert code == 1
        assert "AWS query failed: throttled" in capsys.readouterr().err

    def test_value_error_is_config_error(self, capsys) -> None:
        code = self._run_main([], run_side_effect=ValueError("Invalid connection mode"))

        assert code == 2
        assert "Configuration error: Invalid connection mode" in capsys.readouterr().err

    def test_tool_error(self, capsys) -> None:
        code = self._run_main([], run_side_effect=SelectorError("fzf not found"))

        assert code == 1
        assert "fzf not found" in capsys.readouterr().err

    def test_debug_mode_reraises(self, monkeypatch) -> None:
        monkeypatch.setenv("AWSSSH_DEBUG", "1")

        with patch.object(sys, "argv", ["awsssh"]), patch.object(
            cli_main.AwsSsh, "run", side_effect=ProviderQueryError("boom")
        ), patch.object(cli_main, "configure_logging"):
            with pytest.raises(ProviderQueryError):
                cli_main.main()
