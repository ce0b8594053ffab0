"""Spec Helpers - data-driven test groups and DOM utilities for browser tests."""

__version__ = "0.1.0"

# Public API exports
from spechelpers.dataprovider import (
    DataProvider,
    GroupRegistry,
    InvalidArgumentError,
    create_named_dataset,
    normalize_dataset,
    with_data,
)
from spechelpers.models import DataGroup, KeyedDataset, ListedDataset, NamedDataset, WindowSize
from spechelpers.suite import Suite, SuiteError
from spechelpers.utils import configure_logging
