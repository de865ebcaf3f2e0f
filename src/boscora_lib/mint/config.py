"""Connection settings for the parcel NFT contract."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from boscora_lib.core.exceptions import ConfigurationError

ENV_NETWORK_PASSPHRASE = "PUBLIC_SOROBAN_NETWORK_PASSPHRASE"
ENV_CONTRACT_ID = "PUBLIC_BOSCORA_NFT_CONTRACT_ID"
ENV_RPC_URL = "PUBLIC_SOROBAN_RPC_URL"
ENV_ALLOW_HTTP = "SOROBAN_ALLOW_HTTP"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ContractConfig:
    """Configuration handed to a contract client."""

    network_passphrase: str
    contract_id: str
    rpc_url: str
    # Plain HTTP RPC endpoints are for local development only
    allow_http: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ContractConfig:
        """
        Build the configuration from environment variables.

        Raises:
            ConfigurationError: If a required variable is missing or empty
        """
        env = os.environ if environ is None else environ

        missing = [
            name
            for name in (ENV_NETWORK_PASSPHRASE, ENV_CONTRACT_ID, ENV_RPC_URL)
            if not env.get(name)
        ]
        if missing:
            raise ConfigurationError(f"Missing environment variables: {', '.join(missing)}")

        return cls(
            network_passphrase=env[ENV_NETWORK_PASSPHRASE],
            contract_id=env[ENV_CONTRACT_ID],
            rpc_url=env[ENV_RPC_URL],
            allow_http=env.get(ENV_ALLOW_HTTP, "").strip().lower() in _TRUTHY,
        )
