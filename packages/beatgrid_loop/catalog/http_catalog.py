"""
Bank catalog loaders.

The drum-machine sample map is keyed "<Bank>_<sample>" (for example
"RolandTR909_bd"); the bank name is everything before the first underscore.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from beatgrid_core.constants import DEFAULT_CATALOG_URL, FALLBACK_BANKS
from beatgrid_core.exceptions import CatalogUnavailable

logger = logging.getLogger(__name__)


def _bank_of(name: str) -> str | None:
    if "_" not in name:
        return None
    bank = name.split("_", 1)[0]
    return bank or None


def parse_bank_names(data: Any) -> list[str]:
    """
    Extract sorted unique bank names from a sample map.

    Accepts:
        - dict: "<Bank>_<sample>" keys, or bank-like keys whose dict value
          holds "<Bank>_<sample>" keys
        - list: strings, or dicts whose keys / string values follow the
          "<Bank>_<sample>" form

    Example:
        >>> parse_bank_names({"RolandTR909_bd": [], "LinnDrum_sd": [], "_base": "..."})
        ['LinnDrum', 'RolandTR909']
    """
    banks: set[str] = set()

    def add(name: Any) -> None:
        if isinstance(name, str):
            bank = _bank_of(name)
            if bank:
                banks.add(bank)

    if isinstance(data, dict):
        for key, value in data.items():
            if "_" in key:
                add(key)
            elif isinstance(value, dict):
                for sub_key in value:
                    add(sub_key)
    elif isinstance(data, list):
        for item in data:
            if isinstance(item, dict):
                for key, value in item.items():
                    add(key)
                    add(value)
            else:
                add(item)

    return sorted(banks)


class HttpBankCatalog:
    """Bank catalog fetched over HTTP with httpx."""

    def __init__(
        self,
        url: str = DEFAULT_CATALOG_URL,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Args:
            url: Sample map JSON URL
            timeout: Request timeout in seconds
            http_client: Optional pre-configured HTTP client (not closed here)
        """
        self.url = url
        self.timeout = timeout
        self._http_client = http_client

    async def load(self) -> list[str]:
        """
        Fetch and parse the sample map.

        Raises:
            CatalogUnavailable: request failed or the body is not JSON
        """
        try:
            if self._http_client is not None:
                response = await self._http_client.get(self.url, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(self.url)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            raise CatalogUnavailable(f"Catalog request timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            raise CatalogUnavailable(f"Catalog API error: {e}") from e
        except httpx.RequestError as e:
            raise CatalogUnavailable(f"Catalog connection error: {e}") from e
        except ValueError as e:
            raise CatalogUnavailable(f"Catalog is not valid JSON: {e}") from e

        banks = parse_bank_names(data)
        logger.info(f"Catalog {self.url}: {len(banks)} bank(s)")
        return banks


class StaticBankCatalog:
    """Fixed bank list (offline use)."""

    def __init__(self, banks: list[str] | tuple[str, ...] = FALLBACK_BANKS):
        self._banks = list(banks)

    async def load(self) -> list[str]:
        return list(self._banks)
