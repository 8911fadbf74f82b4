"""EC2 instance inventory for awsssh."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import boto3

from awsssh.core.models import InstanceRecord
from awsssh.providers.aws.errors import handle_aws_errors
from awsssh.providers.aws.utils import (
    absent_to_none,
    build_session_kwargs,
    tag_value,
)

logger = logging.getLogger(__name__)


class InventoryFetcher:
    """Query EC2 for instances matching a tag filter.

    Parameters
    ----------
    region : str
        AWS region to query
    profile : str | None
        Named AWS profile, or None for the default credential chain
    boto3_client_factory : Callable[..., Any] | None
        Optional factory for creating the EC2 client. If None, a client is
        created from a ``boto3.Session`` bound to ``profile`` and ``region``
    """

    def __init__(
        self,
        region: str,
        profile: str | None = None,
        boto3_client_factory: Callable[..., Any] | None = None,
    ) -> None:
        if not region:
            raise ValueError("A region is required to query instances")

        self.region = region
        self.profile = profile

        if boto3_client_factory is None:
            with handle_aws_errors():
                session = boto3.Session(**build_session_kwargs(profile, region))
            boto3_client_factory = session.client

        self.boto3_client_factory = boto3_client_factory

    def fetch(self, tag_key: str, tag_value_pattern: str) -> list[InstanceRecord]:
        """Return instances whose tag ``tag_key`` matches ``tag_value_pattern``.

        Parameters
        ----------
        tag_key : str
            Tag key to filter on
        tag_value_pattern : str
            Tag value; ``*`` and ``?`` wildcards are evaluated by EC2

        Returns
        -------
        list[InstanceRecord]
            Matching instances sorted by name then id; empty when nothing
            matched

        Raises
        ------
        CredentialError
            If AWS rejects the credentials
        ProviderQueryError
            If the query fails for any other reason
        """
        filters = [{"Name": f"tag:{tag_key}", "Values": [tag_value_pattern]}]
        logger.debug(
            "Querying instances in %s with filter tag:%s=%s",
            self.region,
            tag_key,
            tag_value_pattern,
        )

        records: dict[str, InstanceRecord] = {}

        with handle_aws_errors():
            ec2_client = self.boto3_client_factory("ec2", region_name=self.region)
            paginator = ec2_client.get_paginator("describe_instances")

            for page in paginator.paginate(Filters=filters):
                for reservation in page.get("Reservations", []):
                    for instance in reservation.get("Instances", []):
                        record = self._to_record(instance)
                        if record is None or record.instance_id in records:
                            continue
                        records[record.instance_id] = record

        result = sorted(records.values(), key=lambda r: (r.name.lower(), r.instance_id))
        logger.debug("Found %d instances in %s", len(result), self.region)
        return result

    @staticmethod
    def _to_record(instance: dict[str, Any]) -> InstanceRecord | None:
        instance_id = absent_to_none(instance.get("InstanceId"))
        if instance_id is None:
            logger.debug("Skipping instance without an id: %s", instance)
            return None

        return InstanceRecord(
            name=absent_to_none(tag_value(instance.get("Tags"), "Name")) or "",
            instance_id=instance_id,
            private_ip=absent_to_none(instance.get("PrivateIpAddress")),
            public_ip=absent_to_none(instance.get("PublicIpAddress")),
            status=absent_to_none(instance.get("State", {}).get("Name")) or "",
            image_id=absent_to_none(instance.get("ImageId")),
            instance_type=absent_to_none(instance.get("InstanceType")),
            public_dns=absent_to_none(instance.get("PublicDnsName")),
        )
