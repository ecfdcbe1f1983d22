"""Environment probe domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

GLOBAL_ZONE_NAME = "global"
LOOPBACK_ADDRESS = "127.0.0.1"


def host_variable_name(service_name: str) -> str:
    """Name of the environment variable carrying a service's address, e.g. `VMAPI_HOST`."""
    return f"{service_name.upper().replace('-', '_')}_HOST"


@dataclass(frozen=True)
class EndpointSet:
    """Resolved admin addresses of the service under test and its dependencies."""

    zone_name: str
    addresses: Mapping[str, str]

    def as_environment(self) -> dict[str, str]:
        """Variables exported to the harness and the test files it runs."""
        environment = {"ZONENAME": self.zone_name}
        for service_name, address in self.addresses.items():
            environment[host_variable_name(service_name)] = address
        return environment
