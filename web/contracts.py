"""
Response contracts shared by functions.
"""
from dataclasses import dataclass
from enum import Enum


class HealthStatus(Enum):
    UNHEALTHY = 'Unhealthy'
    DEGRADED = 'Degraded'
    HEALTHY = 'Healthy'


@dataclass
class HealthCheckResponse:
    status: HealthStatus = HealthStatus.HEALTHY
