from hashring.utils.config import Config, RingConfig
from hashring.utils.logging import configure_logging
from hashring.utils.metrics import Metrics, MetricsCollector, Timer

__all__ = [
    "Config",
    "RingConfig",
    "configure_logging",
    "Metrics",
    "MetricsCollector",
    "Timer",
]
