"""
System and process metrics for failure reports.

Collects uptime, memory, load and CPU figures with psutil. Every metric is
collected on its own so that one unavailable figure does not spoil the report.
"""

import logging
import os
import socket
import threading
import time
from datetime import timedelta

import httpx
import psutil

logger = logging.getLogger(__name__)


def _safely(name: str, func):
    try:
        return func()
    except (psutil.Error, OSError, AttributeError) as e:
        logger.debug(f"Metric {name} is unavailable: {e}")
        return None


def _duration(seconds: float | None) -> str | None:
    if seconds is None:
        return None
    return str(timedelta(seconds=int(seconds)))


def collect_system_metrics() -> dict:
    """Get current system and launcher process metrics."""
    proc = psutil.Process(os.getpid())
    now = time.time()

    memory = _safely("memory", psutil.virtual_memory)
    load = _safely("load", psutil.getloadavg)

    return {
        "clock": time.strftime("%Y-%m-%d %H:%M:%S %z", time.localtime(now)),
        "system_uptime": _duration(_safely("system_uptime", lambda: now - psutil.boot_time())),
        "process_uptime": _duration(_safely("process_uptime", lambda: now - proc.create_time())),
        "total_memory_mb": memory.total // 1024 // 1024 if memory else None,
        "used_memory_mb": memory.used // 1024 // 1024 if memory else None,
        "process_memory_mb": _safely("process_memory", lambda: proc.memory_info().rss // 1024 // 1024),
        "load": " ".join(f"{value:.2f}" for value in load) if load else None,
        "cpu_count": psutil.cpu_count() or os.cpu_count(),
        "thread_count": threading.active_count(),
    }


def get_public_ip(url: str, timeout: float = 5.0) -> str:
    """Look up the public IP address of this host, falling back to its hostname."""
    if url:
        try:
            response = httpx.get(url, timeout=timeout)
            response.raise_for_status()
            address = response.text.strip()
            if address:
                return address
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug(f"Failed to determine public IP address: {e}")
    return socket.gethostname()
