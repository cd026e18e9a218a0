"""
Rate limiting configuration.

The Limiter instance is created in igot_tracker/__init__.py with no default
limits; this module applies per-route limits once blueprints are registered.

Limits (per remote IP):
    - Login:         LOGIN_RATE_LIMIT (default 10/minute)
    - Health check:  exempt

Rate limiting is disabled in testing mode.

Usage:
    from igot_tracker.middleware.rate_limiter import init_rate_limits
    init_rate_limits(app, limiter)
"""

import logging

logger = logging.getLogger(__name__)


def init_rate_limits(app, limiter):
    """Apply rate limits to the login route and exempt health checks."""
    if app.config.get("TESTING"):
        app.logger.info("Rate limiter disabled (TESTING=True)")
        return

    login_limit = app.config.get("LOGIN_RATE_LIMIT", "10/minute")
    login_view = app.view_functions.get("auth.login")
    if login_view:
        app.view_functions["auth.login"] = limiter.limit(login_limit)(login_view)

    bp = app.blueprints.get("health")
    if bp:
        limiter.exempt(bp)

    app.logger.info("Rate limiter configured — login: %s", login_limit)
