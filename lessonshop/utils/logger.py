"""
Logging utilities with customer data protection.

This module provides logging setup with:
- Configurable log levels and output destinations
- Log rotation for file handlers
- Masking of customer e-mail addresses and phone numbers
- Structured log format
"""

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


EMAIL_PATTERN = re.compile(r'([A-Za-z0-9._%+-])[A-Za-z0-9._%+-]*@([A-Za-z0-9.-]+\.[A-Za-z]{2,})')
# Seven or more digits, optionally separated by spaces, "+" or "-"
PHONE_PATTERN = re.compile(r"(?<!\w)\+?\d(?:[\s-]?\d){6,}(?!\w)")


def mask_email(email: str) -> str:
    """
    Mask email address for safe logging.

    Examples:
        >>> mask_email("user@example.com")
        'u***@example.com'
        >>> mask_email("invalid")
        '***'
    """
    if not email or "@" not in email:
        return "***"

    local, domain = email.split("@", 1)
    masked_local = local[0] + "***" if len(local) > 0 else "***"
    return f"{masked_local}@{domain}"


def mask_phone(phone: str) -> str:
    """
    Mask a phone number, keeping its last two digits.

    Examples:
        >>> mask_phone("+1 555-1234")
        '***34'
    """
    digits = re.sub(r'\D', '', phone or "")
    if len(digits) <= 2:
        return "***"
    return "***" + digits[-2:]


class CustomerDataFilter(logging.Filter):
    """
    Logging filter that masks customer contact details.

    E-mail addresses and phone-number-like digit runs in the final
    message are masked before the record reaches any handler.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Mask contact details in a log record.

        Returns:
            Always True (allows all records through after masking)
        """
        message = record.getMessage()
        message = EMAIL_PATTERN.sub(r'\1***@\2', message)
        message = PHONE_PATTERN.sub(lambda m: mask_phone(m.group(0)), message)
        record.msg = message
        record.args = None
        return True


def setup_logger(
    name: str = "lessonshop",
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up and configure a logger instance.

    Module loggers (``logging.getLogger(__name__)``) inside the
    package propagate to the "lessonshop" logger configured here.

    Args:
        name: Logger name (default: "lessonshop")
        level: Logging level (default: logging.INFO)
        log_file: Optional path to log file for file output

    Returns:
        Configured logger instance

    Examples:
        >>> logger = setup_logger(level=logging.DEBUG,
        ...                       log_file="output/logs/storefront.log")
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    data_filter = CustomerDataFilter()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(data_filter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(data_filter)
        logger.addHandler(file_handler)

    return logger
