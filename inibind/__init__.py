"""Top-level package for inibind.

This package binds section/key-value configuration files into dataclass
instances whose fields carry `ini` metadata. The main entry points are
`load_ini` and `load_ini_bytes`; `IniBinder` exposes per-run settings.
"""

from loguru import logger

from .binder import BindReport, IniBinder, load_ini, load_ini_bytes
from .config import BindConfig, ConfigLoader
from .errors import (
    FileAccessError,
    IniBindError,
    IniSyntaxError,
    UnsupportedFieldKindError,
    UsageError,
    ValueTypeError,
)
from .schema import ini_field

logger.disable(__name__)

__all__ = [
    "BindConfig",
    "BindReport",
    "ConfigLoader",
    "FileAccessError",
    "IniBindError",
    "IniBinder",
    "IniSyntaxError",
    "UnsupportedFieldKindError",
    "UsageError",
    "ValueTypeError",
    "__version__",
    "ini_field",
    "load_ini",
    "load_ini_bytes",
]

__version__ = "0.1.0"
