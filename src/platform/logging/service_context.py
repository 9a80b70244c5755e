"""
Service context for log lines.

Identifies which process wrote a line when several API workers share one log sink.
"""

from functools import lru_cache
import os
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'course-reservation')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Containers set HOSTNAME to the container id, use its short form
    host = os.getenv('HOSTNAME') or socket.gethostname()
    instance = f'{host[:12]}:{os.getpid()}'

    return f'{service_name}@{deploy_env}:{instance}'
