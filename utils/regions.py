"""
Region name resolution against the regions botocore knows about.
"""
import functools
from typing import FrozenSet

import boto3

from utils.exceptions import ConfigurationError


@functools.lru_cache(maxsize=None)
def _known_regions(service_name: str) -> FrozenSet[str]:
    session = boto3.session.Session()
    regions = set()
    for partition in session.get_available_partitions():
        regions.update(
            session.get_available_regions(service_name, partition_name=partition)
        )
    return frozenset(regions)


def to_region_name(region: str, service_name: str = 's3') -> str:
    """
    Resolve a region string (e.g. "US-EAST-1") to its canonical name.

    Args:
        region: Region string, matched case-insensitively
        service_name: Service whose endpoints are checked

    Returns:
        The canonical region name

    Raises:
        ConfigurationError: If the region is blank or unknown
    """
    if not region or not region.strip():
        raise ConfigurationError(
            "The region string cannot be null or empty.", setting="region"
        )

    candidate = region.strip().lower()
    if candidate in _known_regions(service_name):
        return candidate

    raise ConfigurationError(
        f"The region '{region}' is not a valid AWS region.", setting="region"
    )
