# pysem/logs/logger.py

"""
Run logger setup.

Each projection run gets a named logger that writes to a timestamped log
file in ``log_dir`` and to the console. Engine modules log through
``logging.getLogger(__name__)``; their records reach the run handlers via
the ``pysem`` package logger.
"""

import logging
import os
from datetime import datetime
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(run_name: str = "run", scenario: str = "default",
               log_dir: Optional[str] = None, level: str = "INFO") -> logging.Logger:
    """
    Create the logger of one projection run.

    :param run_name: str, label of the run (used in the log file name)
    :param scenario: str, scenario name (used in the log file name)
    :param log_dir: str, directory for the log file (default: ./logs)
    :param level: str, logging level name (e.g. 'INFO', 'DEBUG')
    :return: logging.Logger writing to file and console
    """
    log_dir = log_dir or os.path.join(os.getcwd(), "logs")
    os.makedirs(log_dir, exist_ok=True)

    safe_scenario = "".join(c if c.isalnum() or c in "-_" else "_" for c in scenario)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = os.path.join(log_dir, f"{run_name}_{safe_scenario}_{stamp}.log")

    # Attach handlers to the package logger so engine modules are captured
    logger = logging.getLogger("pysem")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in list(logger.handlers):
        if getattr(handler, "_pysem_run_handler", False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = logging.FileHandler(log_path)
    file_handler.setFormatter(formatter)
    file_handler._pysem_run_handler = True
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler._pysem_run_handler = True
    logger.addHandler(console_handler)

    return logger
