"""Fetch engine - turns view definitions into resource snapshots.

A fetch goes through three steps:

1. :meth:`ResourceBuilder.resolve` substitutes the live API base and the
   name/namespace parameters into the definition's template and produces a
   :class:`~kubedeck.models.definitions.FetchSpec`.
2. The spec is executed through the process executor (CLI definitions) or the
   cluster API client (URL definitions). Both paths yield raw text.
3. The raw text is decoded according to the declared syntax. A decode
   failure yields no snapshot instead of raising.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import quote

import yaml

from kubedeck.constants.defaults import API_BASE_DEFAULT
from kubedeck.constants.enums import FetchMode, NotifySeverity, Syntax
from kubedeck.constants.values import BASE_PLACEHOLDER
from kubedeck.controllers.base import Notifier, notify
from kubedeck.controllers.fetch.api_client import ApiClientError, ClusterApiClient
from kubedeck.controllers.process.executor import ProcessExecutor, SpawnError
from kubedeck.models.definitions import FetchSpec, ViewDefinition
from kubedeck.models.snapshot import ResourceSnapshot

logger = logging.getLogger(__name__)

_NAME_PLACEHOLDER = "{{NAME}}"
_NAMESPACE_PLACEHOLDER = "{{NAMESPACE}}"
_NAMESPACE_FLAGS = ("-n", "--namespace", "-A", "--all-namespaces")
_STRUCTURED = (Syntax.JSON, Syntax.YAML)
_SINCE_MULTIPLIERS = {"s": 1, "m": 60, "h": 60 * 60}


def log_since_seconds(since: str) -> str:
    """Convert a ``30s``/``5m``/``2h`` shorthand to seconds.

    Values with an unknown unit suffix, or no number in front of a known
    one, are returned unchanged.
    """
    value = since.strip()
    multiplier = _SINCE_MULTIPLIERS.get(value[-1:])
    if multiplier is None:
        return value
    try:
        amount = int(value[:-1])
    except ValueError:
        return value
    return str(amount * multiplier)


class ResourceBuilder:
    """Builds and executes fetches for view definitions."""

    def __init__(
        self,
        executor: ProcessExecutor,
        api_client: ClusterApiClient | None = None,
        *,
        api_base: str = API_BASE_DEFAULT,
        notifier: Notifier | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            executor: Runs CLI definitions.
            api_client: Runs URL definitions.
            api_base: Value substituted for ``{{BASE}}``; updated once the
                API proxy reports its address.
            notifier: Sink for fetch errors; defaults to the executor's.
        """
        self.executor = executor
        self.api_client = api_client or ClusterApiClient()
        self.api_base = api_base
        self.notifier = notifier or executor.notifier

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _substitute(self, part: str, name: str | None, namespace: str | None) -> str:
        part = part.replace(BASE_PLACEHOLDER, self.api_base.rstrip("/"))
        if name is not None:
            part = part.replace(_NAME_PLACEHOLDER, name)
        if namespace is not None:
            part = part.replace(_NAMESPACE_PLACEHOLDER, namespace)
        else:
            part = part.replace(f"namespaces/{_NAMESPACE_PLACEHOLDER}/", "")
        return part

    def resolve(
        self,
        definition: ViewDefinition,
        *,
        name: str | None = None,
        namespace: str | None = None,
        all_namespaces: bool = False,
        label_selector: str = "",
        env: Mapping[str, str] | None = None,
    ) -> FetchSpec:
        """Resolve ``definition`` into a concrete fetch specification."""
        parts = [self._substitute(part, name, namespace) for part in definition.url]

        if definition.fetch_mode is FetchMode.HTTP:
            url = parts[0]
            if label_selector:
                separator = "&" if "?" in url else "?"
                url = f"{url}{separator}labelSelector={quote(label_selector, safe='=,!')}"
            return FetchSpec(
                mode=FetchMode.HTTP,
                syntax=definition.syntax,
                url=url,
                env=dict(env or {}),
            )

        args = list(parts)
        if not any(flag in args for flag in _NAMESPACE_FLAGS):
            if namespace:
                args.extend(["-n", namespace])
            elif all_namespaces:
                args.append("-A")
        if label_selector:
            args.extend(["-l", label_selector])
        return FetchSpec(
            mode=FetchMode.CLI,
            syntax=definition.syntax,
            command=definition.cmd,
            args=tuple(args),
            env=dict(env or {}),
        )

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def _api_failed(self, spec: FetchSpec, exc: ApiClientError) -> None:
        logger.warning("Fetch failed for %s: %s", spec.describe(), exc.message)
        notify(self.notifier, exc.message, NotifySeverity.ERROR)

    def fetch_raw_sync(self, spec: FetchSpec) -> str | None:
        """Execute ``spec`` blocking the caller; None when it could not run."""
        if spec.mode is FetchMode.HTTP:
            try:
                return self.api_client.get_text(spec.url)
            except ApiClientError as exc:
                self._api_failed(spec, exc)
                return None
        try:
            return self.executor.run_sync(spec.command, spec.args, env=spec.env).stdout
        except SpawnError:
            return None

    async def fetch_raw(self, spec: FetchSpec) -> str | None:
        """Execute ``spec`` without blocking the event loop."""
        if spec.mode is FetchMode.HTTP:
            try:
                return await self.api_client.aget_text(spec.url)
            except ApiClientError as exc:
                self._api_failed(spec, exc)
                return None
        try:
            handle = await self.executor.run_async(spec.command, spec.args, env=spec.env)
        except SpawnError:
            return None
        result = await handle.wait()
        return result.stdout

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    @staticmethod
    def decode(raw: str, syntax: Syntax) -> tuple[bool, Any]:
        """Decode ``raw`` per ``syntax``.

        Returns:
            ``(ok, data)``; plain text and logs pass through unchanged.
        """
        if syntax not in _STRUCTURED:
            return True, raw
        try:
            data = json.loads(raw) if syntax is Syntax.JSON else yaml.safe_load(raw)
        except (json.JSONDecodeError, yaml.YAMLError):
            logger.exception("Error decoding %s payload", syntax.value)
            return False, None
        if data is None:
            logger.warning("Empty %s payload", syntax.value)
            return False, None
        return True, data

    def build(
        self,
        definition: ViewDefinition,
        spec: FetchSpec,
        raw: str | None,
        *,
        namespace: str | None = None,
        floating: bool = False,
        reload: bool = False,
    ) -> ResourceSnapshot | None:
        """Wrap decoded ``raw`` output in a snapshot, or None when undecodable."""
        if raw is None:
            return None
        ok, data = self.decode(raw, spec.syntax)
        if not ok:
            return None
        return ResourceSnapshot(
            resource=definition.resource,
            display_name=definition.title,
            syntax=spec.syntax,
            raw=raw,
            data=data,
            namespace=namespace,
            floating=floating,
            reload=reload,
        )

    # ------------------------------------------------------------------
    # Public fetch API
    # ------------------------------------------------------------------

    async def fetch(
        self,
        definition: ViewDefinition,
        *,
        name: str | None = None,
        namespace: str | None = None,
        all_namespaces: bool = False,
        label_selector: str = "",
        floating: bool = False,
        reload: bool = False,
    ) -> ResourceSnapshot | None:
        """Fetch and decode ``definition`` without blocking the event loop."""
        spec = self.resolve(
            definition,
            name=name,
            namespace=namespace,
            all_namespaces=all_namespaces,
            label_selector=label_selector,
        )
        raw = await self.fetch_raw(spec)
        return self.build(
            definition, spec, raw, namespace=namespace, floating=floating, reload=reload
        )

    def fetch_sync(
        self,
        definition: ViewDefinition,
        *,
        name: str | None = None,
        namespace: str | None = None,
    ) -> ResourceSnapshot | None:
        """Blocking fetch for short one-shot reads."""
        spec = self.resolve(definition, name=name, namespace=namespace)
        return self.build(definition, spec, self.fetch_raw_sync(spec), namespace=namespace)

    async def view_float(
        self,
        definition: ViewDefinition,
        *,
        namespace: str | None = None,
        reload: bool = False,
    ) -> ResourceSnapshot | None:
        """Fetch for a transient detail surface."""
        return await self.fetch(definition, namespace=namespace, floating=True, reload=reload)

    def set_command(
        self,
        args: Sequence[str],
        *,
        resource: str,
        syntax: Syntax = Syntax.YAML,
        cmd: str = "kubectl",
    ) -> ViewDefinition:
        """Build an ad-hoc definition from a literal argument vector."""
        return ViewDefinition(resource=resource, url=tuple(args), syntax=syntax, cmd=cmd)


__all__ = [
    "ResourceBuilder",
    "log_since_seconds",
]
