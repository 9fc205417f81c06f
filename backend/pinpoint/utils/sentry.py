import logging

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

from .. import config

logger = logging.getLogger(__name__)


def init_sentry(dsn: str | None = None) -> bool:
    """Initialise Sentry error reporting. Returns whether it was enabled."""
    dsn = dsn if dsn is not None else config.SENTRY_DSN
    if not dsn:
        logger.info("SENTRY_DSN not provided; skipping Sentry initialization.")
        return False

    environment = config.SENTRY_ENVIRONMENT
    sentry_sdk.init(
        dsn=dsn,
        integrations=[FastApiIntegration()],
        environment=environment,
        traces_sample_rate=config.SENTRY_TRACES_SAMPLE_RATE,
        profiles_sample_rate=config.SENTRY_PROFILES_SAMPLE_RATE,
    )
    logger.info(
        "Initialized Sentry%s",
        f" (environment={environment})" if environment else "",
    )
    return True
