"""Pytest configuration and fixtures for awsssh tests."""

import os
import sys
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import yaml

repo_root = Path(__file__).parent.parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from awsssh.core.models import InstanceRecord  # noqa: E402
from tests.unit.fakes.fake_multiplexer import FakeMultiplexer  # noqa: E402


@pytest.fixture
def aws_credentials() -> Generator[None, None, None]:
    """Fixture to set AWS credentials for testing with proper cleanup.

    Sets mock AWS credentials in environment variables for the duration of the test,
    then restores the original environment state.

    Yields
    ------
    None
        Control back to test after setting credentials
    """
    keys = (
        "AWS_ACCESS_KEY_ID",
        "AWS_SECRET_ACCESS_KEY",
        "AWS_SECURITY_TOKEN",
        "AWS_SESSION_TOKEN",
        "AWS_DEFAULT_REGION",
        "AWS_PROFILE",
    )
    saved = {key: os.environ.get(key) for key in keys}

    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"
    os.environ.pop("AWS_PROFILE", None)

    yield

    for key, value in saved.items():
        if value is not None:
            os.environ[key] = value
        else:
            os.environ.pop(key, None)


@pytest.fixture
def config_file(tmp_path: Path) -> Generator[Path, None, None]:
    """Point AWSSSH_CONFIG at a temporary file path.

    Parameters
    ----------
    tmp_path : Path
        Pytest temporary directory path

    Yields
    ------
    Path
        Path to temporary config file (not created)
    """
    config_path = tmp_path / "awsssh.yaml"

    original_env = os.environ.get("AWSSSH_CONFIG")
    os.environ["AWSSSH_CONFIG"] = str(config_path)

    yield config_path

    if original_env is not None:
        os.environ["AWSSSH_CONFIG"] = original_env
    else:
        os.environ.pop("AWSSSH_CONFIG", None)


@pytest.fixture
def write_config(config_file: Path):
    """Helper fixture to write config data to file.

    Parameters
    ----------
    config_file : Path
        Path to config file from config_file fixture

    Returns
    -------
    callable
        Function that takes config_data dict and writes to file
    """

    def _write(config_data: dict[str, Any]) -> None:
        with open(config_file, "w") as f:
            yaml.dump(config_data, f)

    return _write


@pytest.fixture
def running_record() -> InstanceRecord:
    return InstanceRecord(
        name="web-01",
        instance_id="i-0123456789abcdef0",
        private_ip="10.0.1.10",
        public_ip="54.1.2.3",
        status="running",
        image_id="ami-0abc1234",
        instance_type="t3.micro",
        public_dns="ec2-54-1-2-3.compute-1.amazonaws.com",
    )


@pytest.fixture
def stopped_record() -> InstanceRecord:
    return InstanceRecord(
        name="db-01",
        instance_id="i-0fedcba9876543210",
        private_ip="10.0.2.20",
        status="stopped",
        image_id="ami-0abc1234",
        instance_type="t3.small",
    )


@pytest.fixture
def fake_multiplexer() -> FakeMultiplexer:
    return FakeMultiplexer()
