"""
Service context for log lines.

Identifies which service instance emitted a line: `<service>@<env>:<instance>`.
"""

from functools import lru_cache
import os
import socket

from src.platform.config.core_setting import settings


@lru_cache(maxsize=1)
def get_service_context() -> str:
    # Container runtimes set HOSTNAME to the container id; fall back to the PID locally
    instance = os.getenv('HOSTNAME') or socket.gethostname() or str(os.getpid())
    return f'{settings.SERVICE_NAME}@{settings.DEPLOY_ENV}:{instance[:12]}'
