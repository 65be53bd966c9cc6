"""
Padstack logging configuration.

Usage:
    from padstack.logging import logger

    logger.info('Applied parameter set')
    logger.warning('Compile error in parameter program')

To disable all logging:
    import padstack
    padstack.set_log_level('SILENT')

    # Or use standard logging levels:
    padstack.set_log_level('WARNING')  # Only warnings and errors
    padstack.set_log_level('DEBUG')    # Compile/run tracing
"""

import logging

# Create padstack logger
logger = logging.getLogger('padstack')
logger.setLevel(logging.INFO)

# Create handler if none exists
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.DEBUG)
    formatter = logging.Formatter('[%(levelname)s] %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def set_log_level(level: str | int) -> None:
    """
    Set padstack logging level.

    Args:
        level: 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL', 'SILENT',
               or numeric level (logging.DEBUG, etc.)

    Raises:
        ValueError: If level is an unknown name
    """
    if isinstance(level, str):
        name = level.upper()
        if name == 'SILENT':
            logger.setLevel(logging.CRITICAL + 1)  # Above all levels
            return
        numeric = logging.getLevelName(name)
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level '{level}'")
        logger.setLevel(numeric)
    else:
        logger.setLevel(level)
