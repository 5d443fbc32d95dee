"""Key finder strategies."""

from .base import KeyFinder
from .composite import CompositeKeyFinder
from .constraint import PrimaryKeyConstraintFinder
from .identity import IdentityColumnFinder
from .heuristic import HeuristicKeyFinder
from .metadata_table import MetadataTableKeyFinder
from .factory import build_finder, default_key_finder

__all__ = [
    "KeyFinder",
    "CompositeKeyFinder",
    "PrimaryKeyConstraintFinder",
    "IdentityColumnFinder",
    "HeuristicKeyFinder",
    "MetadataTableKeyFinder",
    "build_finder",
    "default_key_finder",
]
