"""Configuration management for key discovery."""

from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional
import yaml
from pathlib import Path

STRATEGIES = ("metadata_table", "primary_key", "identity", "heuristic")
IDENTITY_SOURCES = ("identity", "primary_index")


@dataclass
class DataSourceConfig:
    """Configuration for a single data source."""

    name: str
    type: str  # "postgresql", "duckdb"
    config: Dict[str, Any]


@dataclass
class KeyFinderConfig:
    """Configuration for the key finder chain."""

    strategies: List[str] = field(default_factory=lambda: list(STRATEGIES))
    metadata_table: str = "pk_metadata"
    metadata_schema: Optional[str] = None
    identity_source: str = "identity"
    heuristic_column_names: List[str] = field(default_factory=lambda: ["id"])

    def __post_init__(self):
        for name in self.strategies:
            if name not in STRATEGIES:
                raise ValueError(f"Unknown key finder strategy: {name}")
        if self.identity_source not in IDENTITY_SOURCES:
            raise ValueError(f"Unknown identity source: {self.identity_source}")


@dataclass
class LoggingConfig:
    """Configuration for logging setup."""

    level: str = "INFO"
    structured: bool = False
    log_file: Optional[str] = None


@dataclass
class Config:
    """Main configuration class."""

    datasources: Dict[str, DataSourceConfig] = field(default_factory=dict)
    key_finder: KeyFinderConfig = field(default_factory=KeyFinderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path: str) -> Config:
    """Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Parsed configuration

    Example YAML format:
        datasources:
          warehouse:
            type: postgresql
            host: localhost
            port: 5432
            database: mydb
            user: user
            password: pass

          local_duckdb:
            type: duckdb
            path: /data/local.duckdb
            read_only: true

        key_finder:
          strategies: [metadata_table, primary_key, identity, heuristic]
          metadata_table: pk_metadata
          identity_source: identity
          heuristic_column_names: [id]

        logging:
          level: DEBUG
          structured: true
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    # Parse data sources
    datasources = {}
    for name, ds_config in (data.get("datasources") or {}).items():
        ds_config = dict(ds_config)
        ds_type = ds_config.pop("type")
        datasources[name] = DataSourceConfig(name=name, type=ds_type, config=ds_config)

    key_finder = KeyFinderConfig(**(data.get("key_finder") or {}))
    logging_config = LoggingConfig(**(data.get("logging") or {}))

    return Config(datasources=datasources, key_finder=key_finder, logging=logging_config)
