"""Assemble a full orchestrator argument vector."""

from collections.abc import Sequence

from flow_compose.errors import ConfigurationError
from flow_compose.flags import Verb
from flow_compose.options import Options, parse_options


def require_project(project: str | None) -> str:
    """Return project, or raise ConfigurationError when it is missing.

    The orchestrator scopes containers, networks and volumes by project name.
    """
    if not project:
        raise ConfigurationError("Need to give this composition a project name!")
    return project


def _units(compose: str | Sequence[str] | None) -> list[str]:
    if compose is None:
        return []
    if isinstance(compose, str):
        return [compose]
    return list(compose)


def _positionals(services, cmd) -> list[str]:
    args = [service for service in services or [] if service]
    if isinstance(cmd, str):
        cmd = [cmd]
    args += [token for token in cmd or [] if token]
    return args


def build_command(
    verb: Verb | str,
    project: str | None,
    compose: str | Sequence[str] | None,
    services: Sequence[str] | None = None,
    cmd: str | Sequence[str] | None = None,
    options: Options | None = None,
) -> list[str]:
    """Build [project][files][verb][flags][services][cmd].

    Compose units keep their order: the orchestrator layers them as given.
    """
    require_project(project)
    verb = Verb(verb)

    args = ["--project-name", project]
    for unit in _units(compose):
        args += ["--file", unit]
    args.append(verb.value)
    args += parse_options(options)
    args += _positionals(services, cmd)
    return args
