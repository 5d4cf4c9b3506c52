"""
Health check utilities
"""

import os
import time
from datetime import datetime
from typing import Dict, Any, Optional

import psutil
from pydantic import BaseModel, ConfigDict

from idservice.application.interfaces import IComponentSearch


class SystemHealth(BaseModel):
    """System health status model"""

    status: str
    timestamp: datetime
    uptime: float
    memory_usage: Dict[str, Any]
    store_reachable: bool

    model_config = ConfigDict()


class HealthChecker:
    """Health checking with process metrics and store reachability"""

    def __init__(self):
        self.start_time = time.time()

    def get_memory_info(self) -> Dict[str, Any]:
        """Get memory usage of this process"""
        process = psutil.Process(os.getpid())
        rss = process.memory_info().rss
        return {
            "rss": rss,
            "percentage": process.memory_percent(),
        }

    def get_system_health(self, search: Optional[IComponentSearch] = None) -> SystemHealth:
        """Get health status; the service is unhealthy when the store is unreachable"""
        uptime = time.time() - self.start_time
        memory = self.get_memory_info()
        store_reachable = search.ping() if search is not None else False

        status = "healthy"
        if not store_reachable:
            status = "unhealthy"
        elif memory["percentage"] > 80:
            status = "warning"

        return SystemHealth(
            status=status,
            timestamp=datetime.now(),
            uptime=uptime,
            memory_usage=memory,
            store_reachable=store_reachable,
        )


# Global health checker instance
health_checker = HealthChecker()
