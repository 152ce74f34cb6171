"""mqstrip: split breakpoint media queries out of CSS files."""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from mqstrip.config import RunConfiguration, resolve_configuration  # noqa: E402
from mqstrip.engine import RunReport, Stripper  # noqa: E402
from mqstrip.errors import ConfigError, PhaseError, StripperError  # noqa: E402

__all__ = [
    "__version__",
    "ConfigError",
    "PhaseError",
    "RunConfiguration",
    "RunReport",
    "Stripper",
    "StripperError",
    "resolve_configuration",
]
