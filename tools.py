"""
Logging configuration with API token masking.

Library modules log through ``logger``; ``setup_logging`` installs the root
handler and is only called by entry points (see main.py).
"""

import logging
import os
import re

VERBOSE = os.getenv('VERBOSE', 'false').lower() in ('true', '1')


class SensitiveDataFilter(logging.Filter):
    """
    Logging filter that masks OpenShock API tokens in log output.

    Masks:
    - Values of the OpenShockToken header (shows first 6 chars)
    - Bare 64-character alphanumeric tokens (shows first 6 chars)
    """

    def __init__(self):
        super().__init__()
        self.patterns = [
            (re.compile(r"(OpenShockToken['\"]?\s*[:=]\s*['\"]?)([A-Za-z0-9]{6})[A-Za-z0-9_\-]+"), r'\1\2[openshock-token-masked]'),
            (re.compile(r'\b([A-Za-z0-9]{6})[A-Za-z0-9]{58}\b'), r'\1[openshock-token-masked]'),
        ]

    def _mask(self, text):
        for pattern, replacement in self.patterns:
            text = pattern.sub(replacement, text)
        return text

    def filter(self, record):
        if isinstance(record.msg, str):
            record.msg = self._mask(record.msg)

        if record.args:
            new_args = []
            for arg in record.args if isinstance(record.args, tuple) else [record.args]:
                if isinstance(arg, str):
                    arg = self._mask(arg)
                new_args.append(arg)
            record.args = tuple(new_args) if isinstance(record.args, tuple) else new_args[0]

        return True


sensitive_filter = SensitiveDataFilter()

logger = logging.getLogger("openshock")
logger.addFilter(sensitive_filter)


def setup_logging(level=None):
    """
    Configure root logging for scripts using the client.

    Args:
        level: Log level name; defaults to the LOG_LEVEL env var, then INFO
    """
    log_level = (level or os.getenv('LOG_LEVEL', 'INFO')).upper()
    numeric_level = getattr(logging, log_level, logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format='[%(asctime)s] %(levelname)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.addFilter(sensitive_filter)

    # Add filter to all handlers to catch library loggers
    for handler in root_logger.handlers:
        handler.addFilter(sensitive_filter)
