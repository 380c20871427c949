import logging
import os

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def canon_scoring_system(val):
    """
    Normalize the scoring system name to a registry key like 'set_based':
      - defaults to 'set_based' when unset/empty
      - lowercases and trims
      - treats dashes and spaces as underscores
    """
    val = (val or "set_based").strip().lower()
    val = val.replace("-", "_").replace(" ", "_")
    return val or "set_based"


def _canon_season(val):
    """Return a trimmed season label, or ``None`` when unset."""
    if val is None:
        return None
    val = val.strip()
    return val or None


def _parse_bool(env_var: str, default: bool) -> bool:
    raw_value = os.getenv(env_var)
    if raw_value is None:
        return default
    value = raw_value.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    logger.warning(
        "%s is not a valid boolean (got %r); defaulting to %s",
        env_var,
        raw_value,
        default,
    )
    return default


def _parse_log_level(val) -> str:
    level = (val or "INFO").strip().upper()
    if level not in logging.getLevelNamesMapping():
        logger.warning("LOG_LEVEL %r is not a known level; defaulting to INFO", val)
        return "INFO"
    return level


SCORING_SYSTEM = canon_scoring_system(os.getenv("SCORING_SYSTEM"))
DEFAULT_SEASON = _canon_season(os.getenv("DEFAULT_SEASON"))
SEASON_FALLBACK = _parse_bool("SEASON_FALLBACK", True)
LOG_LEVEL = _parse_log_level(os.getenv("LOG_LEVEL"))
