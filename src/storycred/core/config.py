# src/storycred/core/config.py

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

logger = logging.getLogger(__name__)


class ScoringConfig(BaseModel):
    multi_source_score: float = Field(default=0.8, ge=0, le=1)
    single_source_score: float = Field(default=0.4, ge=0, le=1)
    score_precision: int = Field(default=3, ge=0)


class AlertConfig(BaseModel):
    high_threshold: float = Field(default=0.8, ge=0, le=1)
    medium_threshold: float = Field(default=0.5, ge=0, le=1)

    @model_validator(mode="after")
    def check_threshold_order(self) -> "AlertConfig":
        if self.medium_threshold > self.high_threshold:
            raise ValueError("medium_threshold must not exceed high_threshold")
        return self


class StoreConfig(BaseModel):
    seed_path: Optional[str] = None
    latency_seconds: float = Field(default=0.0, ge=0)


class StoryCredConfig(BaseModel):
    """
    Main configuration model for StoryCred.
    """

    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    alerts: AlertConfig = Field(default_factory=AlertConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)

    @field_validator("store", mode="before")
    @classmethod
    def load_store_from_env(cls, v: Any) -> Any:
        """Override store settings with environment variables if present."""
        if isinstance(v, StoreConfig):
            v = v.model_dump()
        if not isinstance(v, dict):
            v = {}

        if "STORYCRED_SEED_PATH" in os.environ:
            v["seed_path"] = os.environ["STORYCRED_SEED_PATH"]
        if "STORYCRED_STORE_LATENCY" in os.environ:
            v["latency_seconds"] = os.environ["STORYCRED_STORE_LATENCY"]

        return v

    @field_validator("alerts", mode="before")
    @classmethod
    def load_alerts_from_env(cls, v: Any) -> Any:
        """Override alert thresholds with environment variables if present."""
        if isinstance(v, AlertConfig):
            v = v.model_dump()
        if not isinstance(v, dict):
            v = {}

        if "STORYCRED_ALERT_HIGH" in os.environ:
            v["high_threshold"] = os.environ["STORYCRED_ALERT_HIGH"]
        if "STORYCRED_ALERT_MEDIUM" in os.environ:
            v["medium_threshold"] = os.environ["STORYCRED_ALERT_MEDIUM"]

        return v

    class Config:
        validate_default = True


def load_config(config_path: Optional[Union[str, Path]] = None) -> StoryCredConfig:
    """
    Load StoryCred configuration from YAML file.

    Args:
        config_path: Path to config.yaml (default: ./config/config.yaml)

    Returns:
        Validated StoryCredConfig instance.
    """
    if config_path is None:
        config_path = Path("config") / "config.yaml"
    else:
        config_path = Path(config_path)

    config_data: Dict[str, Any] = {}
    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}
            logger.info(f"Loaded configuration from {config_path}")
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config file {config_path}: {e}")
    else:
        logger.info(f"Config file not found at {config_path}, using defaults")

    # Create config instance (env vars override file)
    config = StoryCredConfig(**config_data)

    logger.debug("StoryCred configuration loaded with settings:")
    logger.debug(
        f"  Scoring: multi={config.scoring.multi_source_score}, "
        f"single={config.scoring.single_source_score}, "
        f"precision={config.scoring.score_precision}"
    )
    logger.debug(
        f"  Alerts: high>{config.alerts.high_threshold}, "
        f"medium>{config.alerts.medium_threshold}"
    )
    logger.debug(f"  Store seed: {config.store.seed_path}")

    return config
