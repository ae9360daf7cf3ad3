"""Build models from configuration dictionaries or files."""

from typing import Any, Dict, Union
from pathlib import Path
import logging

from openforecast.models.moving_average import MovingAverageModel
from openforecast.models.weighted_moving_average import WeightedMovingAverageModel
from openforecast.utils.config_manager import MODEL_CONFIG_SCHEMA, ConfigManager
from openforecast.utils.error_handling import IllegalArgumentError

logger = logging.getLogger(__name__)


def create_model(config: Dict[str, Any]) -> WeightedMovingAverageModel:
    """
    Instantiate a model from a configuration dictionary.

    Example config::

        {"model": "moving_average", "period": 3}
        {"model": "weighted_moving_average", "weights": [1, 2, 3]}

    Raises:
        IllegalArgumentError: If the model name is unknown or a required
            parameter is missing
    """
    name = config.get("model")
    if name == "moving_average":
        if "period" not in config:
            raise IllegalArgumentError("moving_average requires 'period'")
        model = MovingAverageModel(config["period"])
    elif name == "weighted_moving_average":
        if "weights" not in config:
            raise IllegalArgumentError("weighted_moving_average requires 'weights'")
        model = WeightedMovingAverageModel(config["weights"])
    else:
        raise IllegalArgumentError(f"Unknown model type: {name!r}")

    logger.info(f"Created {model!r} from configuration")
    return model


def load_model_from_config(
    path: Union[str, Path],
    config_manager: ConfigManager = None,
) -> WeightedMovingAverageModel:
    """Load a YAML/JSON model configuration, validate it and build the model."""
    manager = config_manager or ConfigManager()
    config = manager.load_config(path, schema=MODEL_CONFIG_SCHEMA)
    return create_model(config)
