"""AWS provider: EC2 inventory, STS identity and SSM-tunnelled SSH."""

from __future__ import annotations

from awsssh.providers.aws.credentials import default_region, verify_credentials
from awsssh.providers.aws.inventory import InventoryFetcher

__all__ = ["InventoryFetcher", "default_region", "verify_credentials"]
