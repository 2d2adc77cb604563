"""Tests for options.py: permissive decode + option parsing."""

from flow_compose.options import Options, escape_spaces, parse_entrypoint, parse_options


def test_decode_discards_unknown_keys():
    options = Options.decode({"follow": True, "bogus": 1, "folow": True})
    assert options.flags["follow"] is True
    assert "bogus" not in options.flags
    assert "folow" not in options.flags


def test_decode_reads_known_keys():
    options = Options.decode(
        {
            "services": ("web",),
            "cmd": ("ls", "-la"),
            "environment": ["A=1"],
            "user": "www-data",
            "id": "proj_web_1",
            "pre": "cd /app",
            "purge": True,
            "app": {"services": {"web": {"image": "nginx"}}},
        }
    )
    assert options.services == ["web"]
    assert options.cmd == ["ls", "-la"]
    assert options.environment == ["A=1"]
    assert options.user == "www-data"
    assert options.container_id == "proj_web_1"
    assert options.pre == "cd /app"
    assert options.purge is True
    assert options.app_services == {"web": {"image": "nginx"}}


def test_decode_empty():
    options = Options.decode(None)
    assert options.services == []
    assert options.cmd is None
    assert not any(options.flags.values())


def test_parse_empty():
    assert parse_options({}) == []
    assert parse_options(None) == []


def test_parse_flags_follow_table_order():
    # bag order is the reverse of table order
    assert parse_options({"volumes": True, "timestamps": True, "follow": True}) == [
        "--follow",
        "--timestamps",
        "-v",
    ]


def test_parse_false_flags_omitted():
    assert parse_options({"follow": False, "no_cache": 0, "pull": None}) == []


def test_parse_environment_in_order():
    args = parse_options({"environment": ["A=1", "B=2", "A=1"]})
    assert args == ["-e", "A=1", "-e", "B=2", "-e", "A=1"]


def test_parse_user():
    assert parse_options({"user": "root"}) == ["--user", "root"]


def test_parse_user_none_dropped():
    assert parse_options({"user": None}) == []


def test_parse_entrypoint_string_passthrough():
    assert parse_options({"entrypoint": "/bin/bash -c"}) == ["--entrypoint", "/bin/bash -c"]


def test_parse_entrypoint_tokens():
    assert parse_options({"entrypoint": ["/usr/local/bin/my tool", "--flag"]}) == [
        "--entrypoint",
        "/usr/local/bin/my\\ tool --flag",
    ]


def test_parse_full_order():
    args = parse_options(
        {
            "entrypoint": "sh",
            "user": "me",
            "environment": ["X=1"],
            "detach": True,
        }
    )
    assert args == ["-d", "-e", "X=1", "--user", "me", "--entrypoint", "sh"]


def test_escape_spaces():
    assert escape_spaces(["echo", "hello world"]) == "echo hello\\ world"
    assert escape_spaces([]) == ""


def test_parse_entrypoint():
    assert parse_entrypoint("a b") == "a b"
    assert parse_entrypoint(["a", "b"]) == "a b"
