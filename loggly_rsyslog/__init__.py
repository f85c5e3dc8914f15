"""loggly-rsyslog - Converge an rsyslog forwarding rule for Loggly.

Renders ``/etc/rsyslog.d/10-loggly.conf`` from typed settings and restarts
rsyslog when the rendered content changes.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
