"""
settings.py — App Configuration
================================
Flask config objects.  `create_app` loads `Config`, then lets any
`TRAVERSAL_VIS_<NAME>` environment variable override `<NAME>`
(values are parsed as JSON where possible, so `TRAVERSAL_VIS_DEFAULT_SPEED_MS=250`
arrives as an int).
"""

import secrets

from engine.stepper import DEFAULT_SPEED_MS

ENV_PREFIX = "TRAVERSAL_VIS"


class Config:
    SECRET_KEY        = secrets.token_hex(32)
    DEFAULT_ALGORITHM = "dfs"
    DEFAULT_SPEED_MS  = DEFAULT_SPEED_MS
    LOG_LEVEL         = "INFO"
    STRUCTURED_LOGS   = False
    MAX_SESSIONS      = 256


class TestingConfig(Config):
    TESTING   = True
    LOG_LEVEL = "DEBUG"
