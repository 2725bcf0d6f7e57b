"""Bank catalog loaders."""

from .http_catalog import HttpBankCatalog, StaticBankCatalog, parse_bank_names

__all__ = ["HttpBankCatalog", "StaticBankCatalog", "parse_bank_names"]
