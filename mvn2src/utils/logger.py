"""
Logger utility for mvn2src.
"""

import logging
import sys
from pathlib import Path


def setup_logger(log_file=None, verbose=False):
    """
    Set up and configure the logger.
    
    Args:
        log_file (str, optional): Path to the log file. If None, logs to console only.
        verbose (bool, optional): Whether to enable verbose logging. Defaults to False.
    
    Returns:
        logging.Logger: Configured logger instance.
    """
    logger = logging.getLogger("mvn2src")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    
    # Drop handlers left over from an earlier call in the same process
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(console_handler)
    
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        
        # The file keeps everything, including per-command debug output
        logger.setLevel(logging.DEBUG)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        logger.addHandler(file_handler)
    
    return logger
