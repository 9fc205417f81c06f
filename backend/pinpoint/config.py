import logging
import os

logger = logging.getLogger(__name__)


def _canon_prefix(val):
    """
    Normalize API prefix to always be exactly like '/api':
      - defaults to '/api' when unset/empty
      - ensures a single leading slash
      - removes any trailing slash (except for root)
    """
    val = (val or "/api").strip()
    if not val.startswith("/"):
        val = "/" + val
    if len(val) > 1 and val.endswith("/"):
        val = val[:-1]
    return val


def _parse_float(env_var: str, default: float, *, allow_zero: bool = True) -> float:
    raw_value = os.getenv(env_var)
    if raw_value is None:
        return default

    try:
        value = float(raw_value)
    except ValueError:
        logger.warning(
            "%s is not a valid float (got %r); defaulting to %.2f",
            env_var,
            raw_value,
            default,
        )
        return default

    if value < 0 or (value == 0 and not allow_zero):
        logger.warning("%s must be positive; defaulting to %.2f", env_var, default)
        return default

    return value


SPLIT_POLICIES = ("catalog", "any")


def _split_policy(val):
    val = (val or "catalog").strip().lower()
    if val not in SPLIT_POLICIES:
        logger.warning("SPLIT_POLICY %r is not recognised; using 'catalog'", val)
        return "catalog"
    return val


API_PREFIX = _canon_prefix(os.getenv("API_PREFIX"))

# Idle pin-by-pin entry sessions are dropped after this many seconds.
SESSION_TTL_SECONDS = _parse_float("SESSION_TTL_SECONDS", 3600.0, allow_zero=False)

# "catalog": only named splits are reported; "any": uncatalogued splits too.
SPLIT_POLICY = _split_policy(os.getenv("SPLIT_POLICY"))

SENTRY_DSN = os.getenv("SENTRY_DSN")
SENTRY_ENVIRONMENT = (os.getenv("SENTRY_ENVIRONMENT") or "").strip() or None
SENTRY_TRACES_SAMPLE_RATE = _parse_float("SENTRY_TRACES_SAMPLE_RATE", 0.0)
SENTRY_PROFILES_SAMPLE_RATE = _parse_float("SENTRY_PROFILES_SAMPLE_RATE", 0.0)
