"""Async GraphQL client for the Drips subgraph."""

import logging
from typing import Any

import httpx

from ._exceptions import MissingArgumentError
from .async_helpers import resolve_subgraph_url
from .constants import DEFAULT_CHAIN_ID, get_network_config
from .types import SplitEntry, UserAssetConfig
from .validators import validate_user_id

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

_ASSET_CONFIG_FIELDS = """
    id
    assetId
    dripsEntries {
      id
      userId
      config
    }
    balance
    amountCollected
    lastUpdatedBlockTimestamp
"""

GET_USER_ASSET_CONFIGS = f"""
query getUserAssetConfigs($userId: ID!) {{
  user(id: $userId) {{
    assetConfigs {{{_ASSET_CONFIG_FIELDS}    }}
  }}
}}
"""

GET_USER_ASSET_CONFIG_BY_ID = f"""
query getUserAssetConfigById($configId: ID!) {{
  userAssetConfig(id: $configId) {{{_ASSET_CONFIG_FIELDS}  }}
}}
"""

GET_SPLITS_ENTRIES = """
query getSplitsEntries($userId: ID!) {
  user(id: $userId) {
    splitsEntries {
      id
      userId
      weight
    }
  }
}
"""


class DripsSubgraphClient:
    """
    Read-only client for the Drips subgraph.

    Example:
        >>> async with DripsSubgraphClient.from_chain(5) as subgraph:
        ...     configs = await subgraph.get_user_asset_configs("1234")
    """

    def __init__(
        self,
        api_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """
        Initialize the subgraph client.

        Args:
            api_url: Subgraph GraphQL endpoint. Falls back to DRIPS_SUBGRAPH_URL env var.
            client: Existing httpx client to send requests with
            timeout: Request timeout in seconds (ignored when `client` is given)

        Raises:
            MissingArgumentError: If neither api_url nor DRIPS_SUBGRAPH_URL is set
        """
        self.api_url = resolve_subgraph_url(api_url)
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={"content-type": "application/json", "accept": "application/json"},
        )

    @classmethod
    def from_chain(cls, chain_id: int = DEFAULT_CHAIN_ID, **kwargs: Any) -> "DripsSubgraphClient":
        """Create a client for the default subgraph of a supported chain."""
        return cls(get_network_config(chain_id).subgraph_url, **kwargs)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "DripsSubgraphClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def query(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        POST a GraphQL query and return the decoded JSON response.

        Raises:
            MissingArgumentError: If query is empty
            httpx.HTTPStatusError: On a non-2xx response
        """
        if not query:
            raise MissingArgumentError("query")

        logger.debug("Subgraph query to %s: %s", self.api_url, variables)
        response = await self._client.post(self.api_url, json={"query": query, "variables": variables or {}})
        response.raise_for_status()
        return response.json()

    async def get_user_asset_configs(self, user_id: int | str) -> list[UserAssetConfig]:
        """Get every asset configuration of a user. Unknown users have none."""
        user = str(validate_user_id(user_id))

        response = await self.query(GET_USER_ASSET_CONFIGS, {"userId": user})

        data = (response.get("data") or {}).get("user") or {}
        return [UserAssetConfig.model_validate(row) for row in data.get("assetConfigs") or []]

    async def get_user_asset_config_by_id(self, config_id: str) -> UserAssetConfig | None:
        """Get one asset configuration by its subgraph ID, or None if it doesn't exist."""
        if not config_id:
            raise MissingArgumentError("config_id")

        response = await self.query(GET_USER_ASSET_CONFIG_BY_ID, {"configId": config_id})

        row = (response.get("data") or {}).get("userAssetConfig")
        return UserAssetConfig.model_validate(row) if row else None

    async def get_splits_entries(self, user_id: int | str) -> list[SplitEntry]:
        """Get a user's current splits receivers."""
        user = str(validate_user_id(user_id))

        response = await self.query(GET_SPLITS_ENTRIES, {"userId": user})

        data = (response.get("data") or {}).get("user") or {}
        return [SplitEntry.model_validate(row) for row in data.get("splitsEntries") or []]
