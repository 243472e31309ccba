from utils.config_loader import config, env
from utils.logger import configure_logging, logger

__all__ = ["config", "configure_logging", "env", "logger"]
