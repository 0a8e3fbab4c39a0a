from .config_loader import load_config
from .logger import get_logger, setup_logger, setup_logger_from_config

__all__ = ['load_config', 'get_logger', 'setup_logger', 'setup_logger_from_config']
