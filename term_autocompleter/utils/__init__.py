from .config_manager import Config
from .logger_utils import Log, configure_logging, get_logger
from .metrics_tracker import Metrics

__all__ = ["Config", "Log", "configure_logging", "get_logger", "Metrics"]
