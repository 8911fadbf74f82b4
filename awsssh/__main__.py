#!/usr/bin/env python3
"""awsssh - fuzzy-pick EC2 instances and open shells on them."""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial
from typing import Any

from awsssh.cli.connect import build_window_command
from awsssh.cli.parsing import build_connection_spec
from awsssh.constants import EXIT_SUCCESS
from awsssh.core.config import ConfigLoader
from awsssh.core.interfaces import InventoryProvider, Multiplexer, Selector
from awsssh.core.launcher import ConnectionLauncher
from awsssh.core.models import ConnectionSpec, InstanceRecord
from awsssh.core.orchestrator import WorkspaceOrchestrator
from awsssh.providers.aws.credentials import default_region, verify_credentials
from awsssh.providers.aws.inventory import InventoryFetcher
from awsssh.services.fzf import FzfSelector
from awsssh.services.tmux import TmuxWorkspace, is_tmux_available

logger = logging.getLogger(__name__)


class AwsSsh:
    """Discover, select and connect to EC2 instances.

    Every collaborator can be replaced for testing; the defaults talk to AWS,
    fzf, ssh and tmux.
    """

    def __init__(
        self,
        inventory_factory: Callable[[str, str | None], InventoryProvider] | None = None,
        selector_factory: Callable[[], Selector] | None = None,
        launcher_factory: Callable[[str, str | None], ConnectionLauncher] | None = None,
        multiplexer_factory: Callable[[], Multiplexer] | None = None,
        credentials_verifier: Callable[[str | None, str | None], Any] | None = None,
        region_resolver: Callable[[str | None], str | None] | None = None,
        multiplexer_available: Callable[[], bool] | None = None,
        config_loader: ConfigLoader | None = None,
        input_func: Callable[[str], str] = input,
    ) -> None:
        """Initialize AwsSsh with optional dependency injection."""
        self._config_loader = config_loader or ConfigLoader()
        self._inventory_factory = inventory_factory or (
            lambda region, profile: InventoryFetcher(region=region, profile=profile)
        )
        self._selector_factory = selector_factory or FzfSelector
        self._launcher_factory = launcher_factory or (
            lambda region, profile: ConnectionLauncher(region=region, profile=profile)
        )
        self._multiplexer_factory = multiplexer_factory or TmuxWorkspace
        self._credentials_verifier = credentials_verifier or (
            lambda profile, region: verify_credentials(profile=profile, region=region)
        )
        self._region_resolver = region_resolver or default_region
        self._multiplexer_available = multiplexer_available or is_tmux_available
        self._input = input_func

    def resolve_spec(
        self,
        region: Any = None,
        tag_key: Any = None,
        tag_value: Any = None,
        connection: Any = None,
        username: Any = None,
    ) -> ConnectionSpec:
        settings = self._config_loader.get_settings()
        return build_connection_spec(
            settings,
            region=region,
            tag_key=tag_key,
            tag_value=tag_value,
            connection=connection,
            username=username,
            default_region_getter=lambda: self._region_resolver(settings.get("profile")),
            input_func=self._input,
        )

    def run(
        self,
        region: str | None = None,
        tag_key: str | None = None,
        tag_value: str | None = None,
        connection: str | None = None,
        username: str | None = None,
    ) -> int:
        """Select EC2 instances by tag and open shells on them.

        Parameters
        ----------
        region : str | None
            AWS region to search
        tag_key : str | None
            Tag key to filter on (default: Name)
        tag_value : str | None
            Tag value to match; * and ? are wildcards (default: *)
        connection : str | None
            ssh for direct connections, ssm for Session Manager (default: ssh)
        username : str | None
            Remote login user (default: ec2-user)

        Returns
        -------
        int
            Process exit code
        """
        spec = self.resolve_spec(
            region=region,
            tag_key=tag_key,
            tag_value=tag_value,
            connection=connection,
            username=username,
        )

        self._credentials_verifier(spec.profile, spec.region)

        fetcher = self._inventory_factory(spec.region, spec.profile)
        records = fetcher.fetch(spec.tag_key, spec.tag_value)

        if not records:
            logger.info(
                "No instances found with tag %s=%s in %s.",
                spec.tag_key,
                spec.tag_value,
                spec.region,
            )
            return EXIT_SUCCESS

        multi = self._multiplexer_available()
        selected = self._selector_factory().select(records, multi=multi)

        if not selected:
            logger.info("No instance selected.")
            return EXIT_SUCCESS

        if len(selected) == 1:
            self.connect_one(spec, selected[0])
        else:
            self.connect_many(spec, selected)

        return EXIT_SUCCESS

    def connect_one(self, spec: ConnectionSpec, record: InstanceRecord) -> None:
        launcher = self._launcher_factory(spec.region, spec.profile)
        launcher.connect(record, spec.mode, spec.username)

    def connect_many(self, spec: ConnectionSpec, records: list[InstanceRecord]) -> None:
        orchestrator = WorkspaceOrchestrator(
            multiplexer=self._multiplexer_factory(),
            session_name=spec.session_name,
            command_builder=partial(
                build_window_command, region=spec.region, profile=spec.profile
            ),
        )
        report = orchestrator.launch_all(records, spec.mode, spec.username)

        logger.debug(
            "Workspace %s: %d created, %d duplicate, %d failed",
            spec.session_name,
            len(report.created),
            len(report.duplicates),
            len(report.failed),
        )


if __name__ == "__main__":
    from awsssh.cli.main import main

    main()
