"""Bank catalog protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class BankCatalog(Protocol):
    """
    Source of valid sample-bank names.

    Implementations:
        - HttpBankCatalog: fetches the drum-machine sample map via httpx
        - StaticBankCatalog: fixed list
    """

    async def load(self) -> list[str]:
        """
        Return the available bank names.

        Raises:
            CatalogUnavailable: if the catalog cannot be fetched or parsed
        """
        ...
