"""
Command-line interface for the buildtrigger package.
"""

from .main import main_cli
from .orchestrator import TriggerRunner

__all__ = [
    "main_cli",
    "TriggerRunner",
]
