"""Compose lifecycle verbs → Invocation (argument vector + execution mode)."""

import shlex
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum

from flow_compose.builder import build_command, require_project
from flow_compose.errors import ConfigurationError
from flow_compose.flags import Verb, merge_options
from flow_compose.options import Options


class Mode(str, Enum):
    COLLECT = "collect"
    ATTACH = "attach"
    EXEC = "exec"


@dataclass(frozen=True)
class Invocation:
    cmd: list[str]
    mode: Mode = Mode.COLLECT

    @property
    def opts(self) -> dict:
        return {"mode": self.mode.value}

    def to_dict(self) -> dict:
        return {"cmd": list(self.cmd), "opts": self.opts}


def _invoke(
    verb: Verb,
    project: str | None,
    compose: Sequence[str],
    opts: Mapping | None = None,
    mode: Mode = Mode.COLLECT,
) -> Invocation:
    options = Options.decode(merge_options(verb, opts))
    cmd = build_command(
        verb,
        project,
        compose,
        services=options.services,
        cmd=options.cmd,
        options=options,
    )
    return Invocation(cmd=cmd, mode=mode)


def pullable_services(
    app_services: Mapping[str, Mapping] | None,
    requested: Sequence[str] | None = None,
) -> list[str]:
    """Services that come from an image rather than a local build.

    With a non-empty requested list, returns its intersection with that set.
    """
    images = [name for name, svc in (app_services or {}).items() if "build" not in (svc or {})]
    if requested:
        return [name for name in dict.fromkeys(requested) if name in images]
    return images


def service_from_container_id(container_id: str) -> str:
    """Extract the service name from a <project>_<service>_<n> container id.

    Assumes the project name has no underscores.
    """
    parts = container_id.split("_")
    if len(parts) < 2 or not parts[1]:
        raise ConfigurationError(f"Cannot derive a service name from container id {container_id!r}")
    return parts[1]


def build(compose, project, opts=None) -> Invocation:
    return _invoke(Verb.BUILD, project, compose, opts)


def get_id(compose, project, opts=None) -> Invocation:
    return _invoke(Verb.PS, project, compose, opts, Mode.EXEC)


def logs(compose, project, opts=None) -> Invocation:
    return _invoke(Verb.LOGS, project, compose, opts, Mode.ATTACH)


def pull(compose, project, opts=None) -> Invocation:
    """Pull image-based services; services with a build directive are skipped."""
    options = Options.decode(opts)
    opts = {**(opts or {}), "services": pullable_services(options.app_services, options.services)}
    return _invoke(Verb.PULL, project, compose, opts)


def remove(compose, project, opts=None) -> Invocation:
    """`down` when purging, otherwise `rm`."""
    verb = Verb.DOWN if Options.decode(opts).purge else Verb.RM
    return _invoke(verb, project, compose, opts)


def run(compose, project, opts=None) -> Invocation:
    """Run a command through /bin/sh inside the container named by opts["id"]."""
    require_project(project)
    options = Options.decode(opts)
    if not options.container_id:
        raise ConfigurationError("run needs the id of a running container")
    if not options.cmd:
        raise ConfigurationError("run needs a command")

    cmd = options.cmd
    if not isinstance(cmd, str):
        cmd = " ".join(shlex.quote(token) for token in cmd)
    if options.pre:
        cmd = "&&".join([options.pre, cmd])

    opts = {
        **(opts or {}),
        "cmd": ["/bin/sh", "-c", cmd],
        "services": [service_from_container_id(options.container_id)],
    }
    return _invoke(Verb.EXEC, project, compose, opts, Mode.ATTACH)


def start(compose, project, opts=None) -> Invocation:
    """Create, rebuild or start services depending on opts."""
    return _invoke(Verb.UP, project, compose, opts)


def stop(compose, project, opts=None) -> Invocation:
    # kill rather than stop, for speed
    return _invoke(Verb.KILL, project, compose, opts)
