"""Resolution of the raw environment source."""

import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from dotenv import dotenv_values, find_dotenv

from .exceptions import EnvConfigurationError


logger = logging.getLogger(__name__)


def _process_env() -> Optional[Mapping[str, str]]:
    return getattr(os, "environ", None)


def _injected_env() -> Optional[Dict[str, Optional[str]]]:
    # Build-time injection: the nearest .env file above the working directory.
    dotenv_path = find_dotenv(usecwd=True)
    if not dotenv_path:
        return None
    return dict(dotenv_values(dotenv_path))


def get_default_env_source() -> Mapping[str, Optional[str]]:
    """Return the ambient env mapping.

    Probed in order: the process environment, then a ``.env`` file found from
    the working directory, then an empty mapping.
    """
    process_env = _process_env()
    if process_env is not None:
        logger.debug("Using process environment as env source")
        return process_env

    injected = _injected_env()
    if injected is not None:
        logger.debug("Using .env file as env source")
        return injected

    logger.debug("No env source available, using empty mapping")
    return {}


def load_env_file(path: Union[str, Path]) -> Dict[str, Optional[str]]:
    """Parse a ``.env`` file without touching ``os.environ``.

    Raises:
        EnvConfigurationError: If the file does not exist
    """
    env_path = Path(path)
    if not env_path.is_file():
        raise EnvConfigurationError(f"Env file not found: {env_path}")
    values = dict(dotenv_values(env_path))
    logger.debug("Loaded %d variables from %s", len(values), env_path)
    return values
