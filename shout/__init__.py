# shout/__init__.py
"""
Shout package initializer.
Defines package version and exposes the logger facade.
"""
__version__ = "0.1.0"

from shout.config import ShoutConfig, WriteMode, load_config
from shout.errors import InvalidConfigError, IOFaultError, LineFormatError, ShoutError
from shout.levels import Level
from shout.shout import Shout

__all__ = [
    "__version__",
    "Shout",
    "ShoutConfig",
    "WriteMode",
    "Level",
    "load_config",
    "ShoutError",
    "InvalidConfigError",
    "IOFaultError",
    "LineFormatError",
]
