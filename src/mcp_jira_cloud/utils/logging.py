"""Logging helpers that keep secrets out of log output."""

import logging


def mask_sensitive(value: str | None, keep_chars: int = 4) -> str:
    """Mask a sensitive value, keeping only a few trailing characters.

    Args:
        value: The value to mask (token, password, ...)
        keep_chars: Number of trailing characters left visible

    Returns:
        Masked representation, or "Not Provided" for empty values
    """
    if not value:
        return "Not Provided"
    if len(value) <= keep_chars * 2:
        return "*" * len(value)
    return "*" * (len(value) - keep_chars) + value[-keep_chars:]


def log_config_param(
    logger: logging.Logger,
    service: str,
    param: str,
    value: str | None,
    sensitive: bool = False,
) -> None:
    """Log a configuration parameter, masking it when sensitive."""
    display_value = mask_sensitive(value) if sensitive else (value or "Not Provided")
    logger.info(f"{service} {param}: {display_value}")
