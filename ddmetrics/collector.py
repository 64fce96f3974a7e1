"""
Base collector class for callback style gauges.
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Union

logger = logging.getLogger(__name__)

Number = Union[int, float]


class Collector(ABC):
    """
    Abstract base class for collectors registered on a Registry.

    Subclasses implement collect(), which is called on every report. Each key
    of the returned dict is reported as a gauge named ``<metric_name>.<key>``.
    """

    @abstractmethod
    def collect(self) -> Dict[str, Number]:
        """
        Collect current values.

        Returns:
            dict: Mapping of value name to number
        """
        pass

    @property
    def name(self) -> str:
        """
        Get the name of the collector.

        Returns:
            str: The name of the collector (class name by default)
        """
        return self.__class__.__name__

    @property
    def metric_name(self) -> str:
        """
        Get the metric name reported values are nested under.
        Defaults to the collector name.
        """
        return getattr(self, '_metric_name', None) or self.name

    @metric_name.setter
    def metric_name(self, value: str) -> None:
        self._metric_name = value

    def safe_collect(self) -> Dict[str, Number]:
        """
        Collect values, logging and returning an empty dict if collect() fails
        or does not return a dict.
        """
        try:
            values = self.collect()
        except Exception as e:
            logger.error("Error collecting metrics from %s: %s", self.name, str(e))
            return {}

        if not isinstance(values, dict):
            logger.error("Collector %s returned %s instead of a dict", self.name, type(values).__name__)
            return {}
        return values
