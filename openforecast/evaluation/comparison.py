"""Side-by-side comparison of trained models by accuracy indicator."""

import logging
from typing import Any, Dict, List, Optional

import pandas as pd

logger = logging.getLogger(__name__)

INDICATOR_NAMES = ["aic", "bias", "mad", "mape", "mse", "sae"]


class ModelComparator:
    """
    Collects trained models and tabulates their accuracy indicators.

    Any object exposing ``is_trained`` and ``accuracy_indicators`` can be
    compared.
    """

    def __init__(self):
        self.models: Dict[str, Any] = {}

    def add_model(self, name: str, model: Any) -> None:
        """
        Add a model instance for comparison.

        Args:
            name: Identifier for the model
            model: Model instance, trained or not
        """
        self.models[name] = model

    def compare_metrics(self, metric_names: Optional[List[str]] = None) -> pd.DataFrame:
        """
        Compare indicators across trained models.

        Args:
            metric_names: Indicators to include; all six when None

        Returns:
            DataFrame with models as rows and indicators as columns
        """
        columns = metric_names or INDICATOR_NAMES
        unknown = set(columns) - set(INDICATOR_NAMES)
        if unknown:
            raise ValueError(f"Unknown indicators: {sorted(unknown)}")

        data = []
        indices = []
        for name, model in self.models.items():
            if not model.is_trained:
                logger.warning(f"Skipping untrained model {name}")
                continue
            indicators = model.accuracy_indicators.to_dict()
            data.append({k: indicators[k] for k in columns})
            indices.append(name)

        if not data:
            return pd.DataFrame(columns=columns)

        return pd.DataFrame(data, index=indices, columns=columns)

    def rank(self, metric: str = "mse", ascending: bool = True) -> pd.DataFrame:
        """
        Order trained models by one indicator.

        Bias is ranked by its absolute value.
        """
        df = self.compare_metrics()
        if df.empty:
            return df
        key = df[metric].abs() if metric == "bias" else df[metric]
        return df.loc[key.sort_values(ascending=ascending).index]

    def best_model(self, metric: str = "mse") -> str:
        """
        Name of the model with the lowest value of ``metric``.

        Raises:
            ValueError: If no trained model has been added
        """
        ranked = self.rank(metric)
        if ranked.empty:
            raise ValueError("No trained models to compare")
        return str(ranked.index[0])
