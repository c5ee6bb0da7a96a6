"""
pco-cli - Planning Center API client and command-line interface.

This package provides an async client for the Planning Center JSON:API
modules (People, Calendar, Check-Ins, Giving, Groups, Publishing,
Registrations, Services, Webhooks) and a CLI built on top of it.
"""

__version__ = "0.1.0"
__author__ = "pco-cli contributors"
__license__ = "Apache-2.0"

from typing import Final

# Package metadata
VERSION: Final[str] = __version__
PACKAGE_NAME: Final[str] = "pco-cli"
USER_AGENT: Final[str] = f"{PACKAGE_NAME}/{VERSION}"

__all__ = [
    "__version__",
    "VERSION",
    "PACKAGE_NAME",
    "USER_AGENT",
]
