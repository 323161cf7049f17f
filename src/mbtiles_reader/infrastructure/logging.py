"""Logging configuration"""
import logging
import sys
from typing import Dict, Any


DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class LoggingManager:
    """Manages application logging configuration"""

    @staticmethod
    def setup_logging(config: Dict[str, Any]) -> None:
        """Setup logging based on configuration"""
        logging_config = config.get('logging', {})

        level = getattr(logging, str(logging_config.get('level', 'INFO')).upper(), logging.INFO)
        format_str = logging_config.get('format', DEFAULT_FORMAT)

        logging.basicConfig(
            level=level,
            format=format_str,
            stream=sys.stdout,
            force=True
        )
