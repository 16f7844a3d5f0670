# systemd_bot/monitor/process.py
# Uptime and memory of the bot process itself

from datetime import datetime
from typing import Optional

import psutil

MB = 1024 ** 2


class ProcessMonitor:

    def __init__(self, launched: Optional[datetime] = None):
        self.launched = launched or datetime.now()
        self._proc    = psutil.Process()

    def uptime(self, now: Optional[datetime] = None) -> str:
        delta   = (now or datetime.now()) - self.launched
        seconds = max(0, int(delta.total_seconds()))
        days    = seconds // 86400
        hours   = (seconds % 86400) // 3600
        return f"*{days}* day(s) *{hours}* hour(s)"

    def memory(self) -> dict[str, float]:
        mem = self._proc.memory_info()
        return {"sys": mem.vms / MB, "heap": mem.rss / MB}

    def memory_usage(self) -> str:
        m = self.memory()
        return f"Sys: *{m['sys']:.1f} MB*, Heap: *{m['heap']:.1f} MB*"
