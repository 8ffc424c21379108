#!/usr/bin/env python3
"""
Configuration utilities for the breeders data-access layer.

This module provides centralized configuration loading and environment
management functions used by the client and the command line entry point.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

DEFAULT_BRAPI_URL = "https://test-server.brapi.org/brapi/v2"
DEFAULT_USER_AGENT = "breeders-data/0.1"


def load_environment_config(environment: Optional[str] = None, env_dir: str = ".") -> Optional[Path]:
    """
    Load BRAPI_* settings from the environment's dotenv file.

    `dev` and `prod` read `.env.{environment}` and override variables already
    set; anything else reads `.env` without overriding.

    Args:
        environment: 'dev', 'prod', or None to use the ENVIRONMENT variable
        env_dir: Directory holding the dotenv files

    Returns:
        Path of the file that was loaded, or None when it does not exist
    """
    if environment is None:
        environment = os.getenv("ENVIRONMENT", "")

    if environment in ["dev", "prod"]:
        env_file = Path(env_dir) / f".env.{environment}"
        override = True
    else:
        if environment:
            logger.warning(f"Unknown environment '{environment}', falling back to .env")
        env_file = Path(env_dir) / ".env"
        override = False

    if not env_file.exists():
        logger.debug(f"No BrAPI config file at {env_file}, using process environment")
        return None

    load_dotenv(env_file, override=override)
    logger.info(f"Loaded BrAPI config from {env_file} (BRAPI_URL={get_brapi_url()})")
    return env_file


def get_brapi_url() -> str:
    """
    Get the BrAPI base URL from environment or use the public test server.

    Returns:
        Base URL without a trailing slash
    """
    return os.getenv("BRAPI_URL", DEFAULT_BRAPI_URL).rstrip("/")


def get_brapi_timeout() -> Optional[float]:
    """
    Get the request timeout in seconds from BRAPI_TIMEOUT.

    Returns:
        Timeout as float, or None when unset (requests then waits indefinitely)

    Raises:
        ValueError: If BRAPI_TIMEOUT is set but not a number
    """
    raw = os.getenv("BRAPI_TIMEOUT")
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"BRAPI_TIMEOUT must be a number of seconds, got '{raw}'")


def get_user_agent() -> str:
    """Get the User-Agent header value from environment or use default."""
    return os.getenv("BRAPI_USER_AGENT", DEFAULT_USER_AGENT)
