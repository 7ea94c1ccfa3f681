"""Fire-and-forget StatsD counters for pricing and bridge degradations.

Nothing is sent unless ``METRICS_STATSD_ADDR`` ("host:port") is set, so the
helpers are no-ops in tests and local runs. ``METRICS_TAGS=0`` drops the
Datadog-style ``|#key:val`` suffix for plain StatsD servers.

  from cleanpro.utils import metrics
  metrics.incr("pricing.tier_miss")
  with metrics.Timer("quote.bridge.ms", tags={"topic": "quote.created"}):
      ...
"""

from __future__ import annotations

import os
import socket
import time
from typing import Dict, Optional

_ADDR = os.getenv("METRICS_STATSD_ADDR", "").strip()
_USE_TAGS = os.getenv("METRICS_TAGS", "1") not in ("0", "false", "False")
_SOCK: Optional[socket.socket] = None

Tags = Optional[Dict[str, object]]


def _socket() -> Optional[socket.socket]:
    global _SOCK
    if _SOCK is None and _ADDR:
        try:
            host, port = _ADDR.rsplit(":", 1)
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            sock.connect((host, int(port)))
        except (OSError, ValueError):
            return None
        _SOCK = sock
    return _SOCK


def _suffix(tags: Tags) -> str:
    if not tags or not _USE_TAGS:
        return ""
    pairs = [
        f"{str(k).replace(',', '_')}:{str(v).replace(',', '_')}"
        for k, v in tags.items()
        if k is not None
    ]
    return "|#" + ",".join(pairs) if pairs else ""


def _send(line: str) -> None:
    sock = _socket()
    if sock is None:
        return
    try:
        sock.send(line.encode("utf-8"))
    except OSError:
        # UDP sink is best-effort
        pass


def incr(name: str, value: int = 1, tags: Tags = None) -> None:
    _send(f"{name}:{int(value)}|c{_suffix(tags)}")


def timing_ms(name: str, ms: float, tags: Tags = None) -> None:
    _send(f"{name}:{float(ms):.2f}|ms{_suffix(tags)}")


class Timer:
    """Context manager reporting the wrapped block's duration via :func:`timing_ms`."""

    def __init__(self, name: str, tags: Tags = None):
        self.name = name
        self.tags = tags or {}
        self._t0: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._t0 is not None:
            timing_ms(self.name, (time.perf_counter() - self._t0) * 1000.0, tags=self.tags)
        return False
