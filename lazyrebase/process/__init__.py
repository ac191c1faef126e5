"""Control protocol between screen modules and the driver loop.

The driver itself lives in ``lazyrebase.process.process`` and is imported
from there to keep this package import-light for the modules.
"""

from . import artifact
from .exit_status import ExitStatus
from .results import Results

__all__ = ["ExitStatus", "Results", "artifact"]
