#!/usr/bin/env python3
"""
Host information for reports and the harness's own memory figure.
"""

import os
import platform
import sys
from typing import Any


def _max_rss_mb(who: int) -> int:
    import resource

    peak = resource.getrusage(who).ru_maxrss
    # Linux reports kilobytes, macOS bytes
    divisor = 1024 * 1024 if sys.platform == "darwin" else 1024
    return int(peak / divisor)


def get_process_memory_mb() -> int:
    """Peak resident memory of the harness process, 0 where unsupported."""
    if sys.platform == "win32":
        return 0
    import resource

    return _max_rss_mb(resource.RUSAGE_SELF)


def get_total_memory_mb() -> int:
    """Physical memory of the host, 0 when it cannot be determined."""
    try:
        return int(os.sysconf("SC_PAGE_SIZE") * os.sysconf("SC_PHYS_PAGES") / (1024 * 1024))
    except (AttributeError, ValueError, OSError):
        return 0


def get_system_info() -> dict[str, Any]:
    """OS, architecture, interpreter, CPU and memory details."""
    return {
        "os": platform.system(),
        "os_release": platform.release(),
        "architecture": platform.machine(),
        "python": platform.python_version(),
        "cpu_count": os.cpu_count() or 0,
        "total_memory_mb": get_total_memory_mb(),
    }
