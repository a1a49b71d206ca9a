"""
------------------------------------------------------------------------------
Project:        HubSlip
File:           hubslip/logger.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Logging setup for HubSlip. Resolver warnings, IBAN checksum
                notices, batch skips and config fallbacks go to stderr and an
                optional log file, so stdout stays free for payload text.
------------------------------------------------------------------------------
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Dict

# Parent of hubslip.resolver, hubslip.hub3, hubslip.batch, hubslip.config, hubslip.main
APP_LOGGER_NAME = "hubslip"

DEFAULT_FORMAT = "%(asctime)s [%(levelname).4s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    component_levels: Optional[Dict[str, str]] = None
) -> None:
    """
    Configures the hubslip logger tree for one CLI run or batch job.

    Args:
        level: Level for all slip components (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional file that also receives resolver and batch warnings.
        component_levels: Overrides per component, e.g. {"resolver": "ERROR"}
            to silence placeholder warnings while batch skips stay visible.
    """
    root = logging.getLogger(APP_LOGGER_NAME)

    # Batch runs may call this repeatedly
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    root.setLevel(numeric_level)

    formatter = logging.Formatter(DEFAULT_FORMAT, datefmt=DATE_FORMAT)

    # stdout carries the payload
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_path), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    if component_levels:
        for component, cmp_level in component_levels.items():
            set_component_level(component, cmp_level)

def get_logger(name: str) -> logging.Logger:
    """
    Returns the logger of a slip component, e.g. get_logger("hub3") gives
    hubslip.hub3. Names already under hubslip are returned unchanged.
    """
    if name == APP_LOGGER_NAME or name.startswith(APP_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")

def set_component_level(component: str, level: str) -> None:
    """
    Changes the level of one component, e.g. to trace reference
    resolution with set_component_level("resolver", "DEBUG").
    """
    logger = get_logger(component)
    numeric_level = getattr(logging, level.upper(), None)
    if numeric_level is not None:
        logger.setLevel(numeric_level)
        logger.propagate = True
