"""Click entry point: one command per compose verb."""

import json
import shlex
import sys

import click

from flow_compose import __version__, compose, config, log
from flow_compose.errors import ConfigurationError


def compose_options(f):
    """Options shared by every verb command."""
    f = click.option("--json", "as_json", is_flag=True, help="Print the invocation as JSON")(f)
    f = click.option("--service", "-s", multiple=True, help="Limit to specific service(s)")(f)
    f = click.option(
        "--file", "-f", "files", multiple=True, help="Compose file(s), later files override earlier ones"
    )(f)
    f = click.option(
        "--project-name", "-p", "project", envvar="FLOW_COMPOSE_PROJECT", help="Compose project name"
    )(f)
    return f


def _options(**kwargs) -> dict:
    """Drop unset CLI values so verb defaults apply."""
    return {key: value for key, value in kwargs.items() if value not in (None, False, (), [])}


def _emit(verb_fn, files, project, opts, as_json) -> None:
    try:
        invocation = verb_fn(list(files), project, opts)
    except ConfigurationError as e:
        log.error(str(e))
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(invocation.to_dict()))
    else:
        click.echo(shlex.join(invocation.cmd))


@click.group()
@click.version_option(version=__version__, prog_name="flow-compose")
def main():
    """Translate compose lifecycle actions into orchestrator arguments."""


@main.command()
@compose_options
@click.option("--no-cache", is_flag=True, help="Do not use cache when building")
@click.option("--no-pull", is_flag=True, help="Do not pull newer base images")
def build(project, files, service, as_json, no_cache, no_pull):
    """Build service images."""
    opts = _options(services=list(service), no_cache=no_cache)
    if no_pull:
        opts["pull"] = False
    _emit(compose.build, files, project, opts, as_json)


@main.command()
@compose_options
def pull(project, files, service, as_json):
    """Pull images for services that are not built locally."""
    try:
        app_services = config.app_services(config.load_compose(list(files)))
    except ConfigurationError as e:
        log.error(str(e))
        sys.exit(1)

    for name in service:
        if "build" in (app_services.get(name) or {}):
            log.warning(f"skipping {name}: built from local source")

    opts = _options(services=list(service))
    opts["app"] = {"services": app_services}
    _emit(compose.pull, files, project, opts, as_json)


@main.command()
@compose_options
@click.option("--foreground", is_flag=True, help="Attach instead of running detached")
@click.option("--recreate", is_flag=True, help="Recreate containers even if unchanged")
@click.option("--no-deps", is_flag=True, help="Do not start linked services")
def start(project, files, service, as_json, foreground, recreate, no_deps):
    """Create and start services."""
    opts = _options(services=list(service), no_deps=no_deps)
    if foreground:
        opts["background"] = False
    if recreate:
        opts.update(recreate=True, no_recreate=False)
    _emit(compose.start, files, project, opts, as_json)


@main.command()
@compose_options
def stop(project, files, service, as_json):
    """Kill running services."""
    _emit(compose.stop, files, project, _options(services=list(service)), as_json)


@main.command()
@compose_options
@click.option("--purge", is_flag=True, help="Tear down the whole project (down) instead of rm")
def remove(project, files, service, as_json, purge):
    """Remove service containers."""
    opts = _options(services=list(service), purge=purge)
    _emit(compose.remove, files, project, opts, as_json)


@main.command()
@compose_options
@click.option("--follow", is_flag=True, help="Follow log output")
@click.option("--timestamps", is_flag=True, help="Show timestamps")
def logs(project, files, service, as_json, follow, timestamps):
    """Stream service logs."""
    opts = _options(services=list(service), follow=follow, timestamps=timestamps)
    _emit(compose.logs, files, project, opts, as_json)


@main.command(name="get-id")
@compose_options
def get_id(project, files, service, as_json):
    """Look up container ids."""
    _emit(compose.get_id, files, project, _options(services=list(service)), as_json)


@main.command(context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False})
@compose_options
@click.option("--pre", default=None, help="Shell fragment to run before the command")
@click.option("--user", default=None, help="Run as this user")
@click.option("--env", "-e", "environment", multiple=True, help="KEY=VALUE environment entry")
@click.option("--entrypoint", default=None, help="Override the entrypoint")
@click.argument("container_id")
@click.argument("command", nargs=-1, type=click.UNPROCESSED)
def run(project, files, service, as_json, pre, user, environment, entrypoint, container_id, command):
    """Run COMMAND inside the container CONTAINER_ID."""
    if not command:
        click.echo("Error: No command specified", err=True)
        sys.exit(1)
    opts = _options(
        id=container_id,
        cmd=list(command),
        pre=pre,
        user=user,
        environment=list(environment),
        entrypoint=entrypoint,
    )
    _emit(compose.run, files, project, opts, as_json)


@main.command()
@click.option("--file", "-f", "files", multiple=True, help="Compose file(s)")
def services(files):
    """List services and whether they are built or pulled."""
    try:
        compose_dict = config.load_compose(list(files))
    except ConfigurationError as e:
        log.error(str(e))
        sys.exit(1)

    for svc in config.parse_services(compose_dict):
        source = "build" if svc.is_built else f"image {svc.image or '?'}"
        log.step(f"{svc.name}  {source}")


if __name__ == "__main__":
    main()
