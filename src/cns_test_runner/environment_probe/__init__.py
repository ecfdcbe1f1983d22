"""Environment probe domain exports."""

from .endpoint_models import GLOBAL_ZONE_NAME, LOOPBACK_ADDRESS, EndpointSet, host_variable_name
from .endpoint_resolvers import (
    EndpointResolver,
    EnvironmentProbeError,
    GlobalZoneEndpointResolver,
    InZoneEndpointResolver,
    probe_endpoints,
    read_zone_name,
    select_endpoint_resolver,
)

__all__ = [
    "GLOBAL_ZONE_NAME",
    "LOOPBACK_ADDRESS",
    "EndpointSet",
    "host_variable_name",
    "EndpointResolver",
    "EnvironmentProbeError",
    "GlobalZoneEndpointResolver",
    "InZoneEndpointResolver",
    "probe_endpoints",
    "read_zone_name",
    "select_endpoint_resolver",
]
