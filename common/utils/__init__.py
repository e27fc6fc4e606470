from os import environ

# add logger
import logging
logger = logging.getLogger(__name__)
# set logger to standard out
logger.addHandler(logging.StreamHandler())
# set log level
logger.setLevel(logging.INFO)

MISSING_ENV_DEFAULT = "CHANGEMEPLS"

def safe_get_env_var(key, default=MISSING_ENV_DEFAULT):
    try:
        return environ[key]
    except KeyError:
        logger.warning(f"Missing {key} environment variable. Setting default to {default}")
        return default
        # ^^ Do this so any ENVs not set in production won't crash the server

def get_int_env_var(key, default):
    """Read an integer setting, falling back to default when unset or not a number."""
    value = safe_get_env_var(key, str(default))
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {key}: {value!r}. Using {default}")
        return default
