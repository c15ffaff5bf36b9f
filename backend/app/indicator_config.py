"""Indicator options loaded from indicators.yaml.

Example file::

    inputs:
      length: 20
      source: close
      stdDevMultiplier: 2
      offset: 0
    style:
      basis: {color: "#ff9800"}
      fill: {visible: true, opacity: 0.1}

Anything left out keeps its default: inputs come from the ``BB_*``
environment settings, style from the model defaults. No YAML file means
defaults for everything.
"""

import logging
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from app.config import DEFAULT_INDICATOR_CONFIG, get_settings
from core.models.config import BollingerOptions, BollingerStyle

logger = logging.getLogger(__name__)

_STYLE_PARTS = ("basis", "upper", "lower", "fill")


def _overlay(base: BaseModel, raw: dict | None) -> BaseModel:
    """Return ``base`` with only the fields present in ``raw`` replaced.

    Keys may be field names or their camelCase aliases.
    """
    override = type(base).model_validate(raw or {})
    return base.model_copy(
        update={name: getattr(override, name) for name in override.model_fields_set}
    )


def load_indicator_options(path: Path | None = None) -> BollingerOptions:
    """Load Bollinger Bands options from a YAML file.

    Falls back to environment defaults if the file doesn't exist.

    Raises:
        ValueError: If the file is not a mapping or holds invalid values
    """
    config_path = path or DEFAULT_INDICATOR_CONFIG

    # Load .env into os.environ so BB_* overrides are visible to Settings;
    # the cached instance may predate them
    if load_dotenv(config_path.parent / ".env", override=False):
        get_settings.cache_clear()
    defaults = get_settings().default_params()

    if not config_path.exists():
        logger.info("No indicator config found at %s, using defaults", config_path)
        return BollingerOptions(inputs=defaults)

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"{config_path}: expected a mapping at top level")

    try:
        inputs = _overlay(defaults, raw.get("inputs"))
        style_raw = raw.get("style") or {}
        if not isinstance(style_raw, dict):
            raise ValueError(f"{config_path}: 'style' must be a mapping")
        base_style = BollingerStyle()
        style = base_style.model_copy(
            update={
                name: _overlay(getattr(base_style, name), style_raw.get(name))
                for name in _STYLE_PARTS
            }
        )
    except ValidationError as e:
        raise ValueError(f"{config_path}: invalid indicator options: {e}") from e

    options = BollingerOptions(inputs=inputs, style=style)
    logger.info(
        "Loaded indicator config: length=%d source=%s mult=%s offset=%d",
        inputs.length,
        inputs.source,
        inputs.std_dev_multiplier,
        inputs.offset,
    )
    return options
