"""Flag table + per-verb default options."""

import re
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import NamedTuple

from flow_compose.config import deep_merge


class Verb(str, Enum):
    BUILD = "build"
    PULL = "pull"
    UP = "up"
    DOWN = "down"
    RM = "rm"
    EXEC = "exec"
    KILL = "kill"
    LOGS = "logs"
    PS = "ps"


class Flag(NamedTuple):
    name: str
    token: str

    def enabled(self, flags: Mapping[str, object]) -> bool:
        return bool(flags.get(self.name, False))


# Output order of boolean flags is the order of this tuple.
FLAGS: tuple[Flag, ...] = (
    Flag("background", "-d"),
    Flag("detach", "-d"),
    Flag("follow", "--follow"),
    Flag("force", "--force"),
    Flag("no_cache", "--no-cache"),
    Flag("no_recreate", "--no-recreate"),
    Flag("no_deps", "--no-deps"),
    Flag("pull", "--pull"),
    Flag("q", "-q"),
    Flag("recreate", "--force-recreate"),
    Flag("remove_orphans", "--remove-orphans"),
    Flag("rm", "--rm"),
    Flag("timestamps", "--timestamps"),
    Flag("volumes", "-v"),
)

_CAMEL = re.compile(r"(?<=[a-z0-9])([A-Z])")

FLAG_NAMES = frozenset(flag.name for flag in FLAGS)

DEFAULT_OPTIONS: Mapping[Verb, Mapping[str, bool]] = MappingProxyType(
    {
        Verb.BUILD: MappingProxyType({"no_cache": False, "pull": True}),
        Verb.DOWN: MappingProxyType({"remove_orphans": True, "volumes": True}),
        Verb.EXEC: MappingProxyType({"detach": False}),
        Verb.KILL: MappingProxyType({}),
        Verb.LOGS: MappingProxyType({"follow": False, "timestamps": False}),
        Verb.PS: MappingProxyType({"q": True}),
        Verb.PULL: MappingProxyType({}),
        Verb.RM: MappingProxyType({"force": True, "volumes": True}),
        Verb.UP: MappingProxyType(
            {
                "background": True,
                "no_recreate": True,
                "recreate": False,
                "remove_orphans": True,
            }
        ),
    }
)


def normalize_key(name: str) -> str:
    """Map camelCase option names (noCache) onto their snake_case form."""
    return _CAMEL.sub(r"_\1", name).lower()


def normalize_keys(opts: Mapping) -> dict:
    return {normalize_key(key): value for key, value in opts.items()}


def merge_options(verb: Verb | str, opts: Mapping | None = None) -> dict:
    """Overlay caller options on a fresh copy of the verb's defaults."""
    return deep_merge(DEFAULT_OPTIONS[Verb(verb)], normalize_keys(opts or {}))
