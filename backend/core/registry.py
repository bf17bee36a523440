# core/registry.py: Module Registry
#
# Modules advertise the services they provide (register_provider) and
# declare what they need (REQUIRES); validate_dependencies() checks both
# sides match once every module has registered.

import logging
from typing import Any

log = logging.getLogger("wavetech.registry")


class ModuleRegistry:
    """Lightweight dependency injection registry."""

    def __init__(self):
        self._providers: dict[str, Any] = {}
        self._declared_requires: list[tuple[str, str]] = []  # (module_id, interface)

    def register_provider(self, interface_name: str, impl: Any) -> None:
        """Register an implementation for the named interface (last writer wins)."""
        existing = self._providers.get(interface_name)
        if existing is not None and existing is not impl:
            log.warning(
                f"Interface '{interface_name}' already registered by "
                f"{type(existing).__name__!r}; overwriting with {type(impl).__name__!r}"
            )
        self._providers[interface_name] = impl
        log.debug(f"Registered provider for '{interface_name}': {type(impl).__name__}")

    def get_provider(self, interface_name: str) -> Any:
        """Return the registered provider, or None when nothing provides it."""
        provider = self._providers.get(interface_name)
        if provider is None:
            log.warning(f"No provider registered for interface '{interface_name}'.")
        return provider

    def record_requires(self, module_id: str, requires: list[str]) -> None:
        for iface in requires:
            self._declared_requires.append((module_id, iface))

    def validate_dependencies(self) -> bool:
        """Log every unsatisfied REQUIRES declaration. Returns True if none."""
        missing = [
            (module_id, iface)
            for module_id, iface in self._declared_requires
            if iface not in self._providers
        ]
        for module_id, iface in missing:
            log.error(
                f"Unsatisfied dependency: module '{module_id}' requires "
                f"'{iface}' but no provider is registered."
            )
        if not missing:
            log.info(
                f"All module dependencies satisfied "
                f"({len(self._declared_requires)} declarations checked)."
            )
        return not missing

    @property
    def providers(self) -> dict[str, Any]:
        """Read-only view of all registered providers."""
        return dict(self._providers)
