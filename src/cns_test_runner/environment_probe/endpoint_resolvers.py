"""Collaborator endpoint discovery for global-zone and in-zone runs."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import requests

from cns_test_runner.configuration.runtime_settings import ServiceNames
from cns_test_runner.platform_commands import (
    CommandRunner,
    PlatformCommandError,
    run_platform_command,
)

from .endpoint_models import GLOBAL_ZONE_NAME, LOOPBACK_ADDRESS, EndpointSet

_LOGGER = logging.getLogger(__name__)

ADMIN_NIC_TAG = "admin"
SAPI_URL_METADATA_KEY = "sapi-url"
SAPI_REQUEST_TIMEOUT_SECONDS = 30


class EnvironmentProbeError(Exception):
    """Raised when the zone or a collaborator endpoint cannot be determined."""


class EndpointResolver(Protocol):  # pylint: disable=too-few-public-methods
    """Resolves a logical service name to its admin IPv4 address."""

    def resolve(self, service_name: str) -> str: ...


class GlobalZoneEndpointResolver:  # pylint: disable=too-few-public-methods
    """Looks up `<service>0` with vmadm and returns the IP of its admin NIC."""

    def __init__(self, *, run_command: CommandRunner | None = None) -> None:
        self._run_command = run_command or run_platform_command

    def resolve(self, service_name: str) -> str:
        alias = f"{service_name}0"
        output = _run(self._run_command, ("vmadm", "lookup", "-j", f"alias={alias}"))
        try:
            vms = json.loads(output or "[]")
        except json.JSONDecodeError as exc:
            raise EnvironmentProbeError(f"vmadm returned invalid JSON for {alias}: {exc}") from exc
        if not isinstance(vms, list):
            raise EnvironmentProbeError(f"vmadm lookup for {alias} did not return a list.")
        for vm in vms:
            address = _admin_nic_address(vm)
            if address:
                return address
        return ""


class InZoneEndpointResolver:  # pylint: disable=too-few-public-methods
    """Reads `<service>_admin_ips` from this zone's SAPI configuration."""

    def __init__(
        self,
        *,
        zone_name: str,
        under_test: str,
        run_command: CommandRunner | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._zone_name = zone_name
        self._under_test = under_test
        self._run_command = run_command or run_platform_command
        self._session = session or requests.Session()
        self._metadata: Mapping[str, Any] | None = None

    def resolve(self, service_name: str) -> str:
        if service_name == self._under_test:
            return LOOPBACK_ADDRESS
        value = self._zone_metadata().get(f"{service_name}_admin_ips")
        if value is None:
            return ""
        if isinstance(value, list):
            value = ",".join(str(item) for item in value)
        if not isinstance(value, str):
            raise EnvironmentProbeError(f"{service_name}_admin_ips must be a string.")
        return value.split(",")[0].strip()

    def _zone_metadata(self) -> Mapping[str, Any]:
        if self._metadata is None:
            self._metadata = self._fetch_zone_metadata()
        return self._metadata

    def _fetch_zone_metadata(self) -> Mapping[str, Any]:
        sapi_url = _run(self._run_command, ("mdata-get", SAPI_URL_METADATA_KEY))
        if not sapi_url:
            raise EnvironmentProbeError("Instance metadata has no sapi-url.")
        url = f"{sapi_url.rstrip('/')}/configs/{self._zone_name}"
        _LOGGER.debug("fetching zone configuration from %s", url)
        try:
            response = self._session.get(url, timeout=SAPI_REQUEST_TIMEOUT_SECONDS)
            response.raise_for_status()
            document = response.json()
        except requests.RequestException as exc:
            raise EnvironmentProbeError(f"Failed to fetch {url}: {exc}") from exc
        except ValueError as exc:
            raise EnvironmentProbeError(f"Invalid JSON from {url}: {exc}") from exc
        metadata = document.get("metadata") if isinstance(document, Mapping) else None
        if not isinstance(metadata, Mapping):
            raise EnvironmentProbeError(f"Zone configuration from {url} has no metadata.")
        return metadata


def read_zone_name(run_command: CommandRunner | None = None) -> str:
    """Return the name of the zone this process runs in."""
    zone_name = _run(run_command or run_platform_command, ("zonename",))
    if not zone_name:
        raise EnvironmentProbeError("zonename returned an empty zone name.")
    return zone_name


def select_endpoint_resolver(
    zone_name: str,
    *,
    under_test: str,
    run_command: CommandRunner | None = None,
    session: requests.Session | None = None,
) -> EndpointResolver:
    """Pick the vmadm-based resolver in the global zone, the SAPI-based one elsewhere."""
    if zone_name == GLOBAL_ZONE_NAME:
        return GlobalZoneEndpointResolver(run_command=run_command)
    return InZoneEndpointResolver(
        zone_name=zone_name,
        under_test=under_test,
        run_command=run_command,
        session=session,
    )


def probe_endpoints(
    services: ServiceNames,
    *,
    zone_name: str,
    resolver: EndpointResolver,
) -> EndpointSet:
    """Resolve every service endpoint; any empty address aborts the run."""
    addresses: dict[str, str] = {}
    for service_name in services.all:
        address = resolver.resolve(service_name).strip()
        if not address:
            raise EnvironmentProbeError(f"Could not determine the admin IP of {service_name}.")
        _LOGGER.debug("%s admin IP is %s", service_name, address)
        addresses[service_name] = address
    return EndpointSet(zone_name=zone_name, addresses=addresses)


def _admin_nic_address(vm: Any) -> str:
    if not isinstance(vm, Mapping):
        return ""
    for nic in vm.get("nics") or ():
        if isinstance(nic, Mapping) and nic.get("nic_tag") == ADMIN_NIC_TAG:
            return str(nic.get("ip") or "")
    return ""


def _run(run_command: CommandRunner, command: tuple[str, ...]) -> str:
    try:
        return run_command(command)
    except PlatformCommandError as exc:
        raise EnvironmentProbeError(str(exc)) from exc
