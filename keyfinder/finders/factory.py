"""Build the configured key finder chain."""

from typing import Optional

from ..catalog.dialects import CatalogDialect
from ..config.config import KeyFinderConfig
from .base import KeyFinder
from .composite import CompositeKeyFinder
from .constraint import PrimaryKeyConstraintFinder
from .heuristic import HeuristicKeyFinder
from .identity import PRIMARY_INDEX_SOURCE, IdentityColumnFinder
from .metadata_table import MetadataTableKeyFinder


def build_finder(name: str, config: KeyFinderConfig) -> KeyFinder:
    """Create a single finder by strategy name.

    Raises:
        ValueError: If the strategy name is unknown
    """
    if name == MetadataTableKeyFinder.name:
        return MetadataTableKeyFinder(config.metadata_table, config.metadata_schema)
    if name == PrimaryKeyConstraintFinder.name:
        return PrimaryKeyConstraintFinder()
    if name == IdentityColumnFinder.name:
        return IdentityColumnFinder(config.identity_source)
    if name == HeuristicKeyFinder.name:
        return HeuristicKeyFinder(config.heuristic_column_names)
    raise ValueError(f"Unknown key finder strategy: {name}")


def default_key_finder(
    config: Optional[KeyFinderConfig] = None,
    dialect: Optional[CatalogDialect] = None,
) -> CompositeKeyFinder:
    """Create the finder chain.

    Default order: metadata table override, declared primary key,
    identity columns, heuristic. When the target dialect is known the
    configuration is checked against it.

    Raises:
        ValueError: If the chain reads a primary index the dialect lacks
    """
    if config is None:
        config = KeyFinderConfig()
    if (
        dialect is not None
        and IdentityColumnFinder.name in config.strategies
        and config.identity_source == PRIMARY_INDEX_SOURCE
        and not dialect.supports_primary_index
    ):
        raise ValueError(
            f"identity_source {PRIMARY_INDEX_SOURCE} is not available for {dialect.name}"
        )
    finders = []
    for name in config.strategies:
        finders.append(build_finder(name, config))
    return CompositeKeyFinder(finders)
