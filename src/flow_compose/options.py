"""Decode an options bag and turn it into orchestrator arguments."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from flow_compose.flags import FLAGS, normalize_keys


@dataclass(frozen=True)
class Options:
    """Known keys of an options bag; anything else is dropped on decode."""

    flags: Mapping[str, bool] = field(default_factory=dict)
    services: list[str] = field(default_factory=list)
    cmd: str | list[str] | None = None
    environment: list[str] = field(default_factory=list)
    user: str | None = None
    entrypoint: str | list[str] | None = None
    pre: str | None = None
    container_id: str | None = None
    purge: bool = False
    app_services: Mapping[str, dict] = field(default_factory=dict)

    @classmethod
    def decode(cls, bag: Mapping | None = None) -> "Options":
        bag = normalize_keys(bag or {})
        app = bag.get("app") or {}
        return cls(
            flags={flag.name: flag.enabled(bag) for flag in FLAGS},
            services=list(bag.get("services") or []),
            cmd=_tokens_or_str(bag.get("cmd")),
            environment=list(bag.get("environment") or []),
            user=bag.get("user"),
            entrypoint=_tokens_or_str(bag.get("entrypoint")),
            pre=bag.get("pre"),
            container_id=bag.get("id"),
            purge=bool(bag.get("purge", False)),
            app_services=dict(app.get("services") or {}),
        )


def _tokens_or_str(value):
    if value is None or isinstance(value, str):
        return value
    return list(value)


def escape_spaces(tokens: Sequence[str]) -> str:
    """Join tokens with spaces, backslash-escaping spaces inside each token."""
    return " ".join(token.replace(" ", "\\ ") for token in tokens)


def parse_entrypoint(entrypoint: str | Sequence[str]) -> str:
    if isinstance(entrypoint, str):
        return entrypoint
    return escape_spaces(entrypoint)


def parse_options(options: Options | Mapping | None = None) -> list[str]:
    """Flatten options into flags, -e pairs, --user and --entrypoint, in that order."""
    if not isinstance(options, Options):
        options = Options.decode(options)

    flags = [flag.token for flag in FLAGS if flag.enabled(options.flags)]
    environment = []
    for variable in options.environment:
        if variable:
            environment += ["-e", variable]
    user = ["--user", options.user] if options.user else []
    entrypoint = []
    if options.entrypoint:
        entrypoint = ["--entrypoint", parse_entrypoint(options.entrypoint)]
    return [arg for arg in flags + environment + user + entrypoint if arg]
