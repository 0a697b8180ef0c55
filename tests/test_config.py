"""
Tests for configuration loading — TOML/YAML/JSON parsing and validation.
"""

import json
import textwrap
from pathlib import Path

import pytest
import yaml

from spinup.core.config.loader import (
    ConfigError,
    FileSyntax,
    dump_configuration,
    guess_file_syntax,
    load_configuration,
    parse_file_contents,
)
from spinup.core.engine.host import TargetOperatingSystem
from spinup.core.models import SnapChannel
from spinup.core.use_cases.config_check import check_config

TOML_DATA = textwrap.dedent("""\
    refresh_system = true

    [package_list]
    base_packages = ["git", "curl"]

    [[package_list.distro_packages]]
    target_os = "arch"
    packages = ["bat"]

    [[file_downloads]]
    base_dir = "~/.local/share/fonts"
    files = [{ source = "https://example.com/font.ttf", target = "font.ttf" }]

    [file_downloads.after_complete]
    command = "fc-cache"
    args = ["-f"]

    [snaps.standard_snaps]
    names = ["postman"]

    [[snaps.alternate_snaps]]
    name = "spotify"
    classic = true
    channel = "beta"

    [[command_sets]]
    commands = [
        { id = 2, command = "b" },
        { id = 1, command = "a", needs_root = true },
    ]
""")

YAML_DATA = textwrap.dedent("""\
    package_list:
      base_packages:
        - git
    custom_commands:
      - command: ls
        args: ["-a", "-l"]
""")

JSON_DATA = json.dumps({"snaps": {"standard_snaps": {"names": ["postman"]}}})

JUNK = "Somerandomjunk"


@pytest.fixture
def write(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content)
        return path

    return _write


# ── Syntax guessing ──────────────────────────────────────────────────


class TestGuessFileSyntax:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("config.json", FileSyntax.JSON),
            ("config.toml", FileSyntax.TOML),
            ("config.yaml", FileSyntax.YAML),
            ("config.yml", FileSyntax.YAML),
            ("config.YML", FileSyntax.YAML),
            ("config", FileSyntax.UNKNOWN),
            ("config.ini", FileSyntax.UNKNOWN),
        ],
    )
    def test_from_extension(self, name, expected):
        assert guess_file_syntax(Path(name)) == expected


# ── Parsing ──────────────────────────────────────────────────────────


class TestParseFileContents:
    def test_toml(self):
        assert parse_file_contents(TOML_DATA, FileSyntax.TOML)["refresh_system"] is True

    def test_toml_as_json_fails(self):
        with pytest.raises(ConfigError, match="Invalid JSON"):
            parse_file_contents(TOML_DATA, FileSyntax.JSON)

    def test_json_is_valid_yaml(self):
        assert parse_file_contents(JSON_DATA, FileSyntax.YAML) == json.loads(JSON_DATA)

    def test_json_as_toml_fails(self):
        with pytest.raises(ConfigError):
            parse_file_contents(JSON_DATA, FileSyntax.TOML)

    def test_yaml_as_json_fails(self):
        with pytest.raises(ConfigError):
            parse_file_contents(YAML_DATA, FileSyntax.JSON)

    @pytest.mark.parametrize("data", [TOML_DATA, YAML_DATA, JSON_DATA])
    def test_unknown_tries_every_syntax(self, data):
        assert parse_file_contents(data, FileSyntax.UNKNOWN)

    def test_junk_with_unknown(self):
        with pytest.raises(ConfigError, match="any syntax"):
            parse_file_contents(JUNK, FileSyntax.UNKNOWN)

    def test_scalar_is_not_a_config(self):
        with pytest.raises(ConfigError, match="mapping"):
            parse_file_contents("just a string", FileSyntax.YAML)

    def test_empty_yaml(self):
        assert parse_file_contents("", FileSyntax.YAML) == {}


# ── Loading ──────────────────────────────────────────────────────────


class TestLoadConfiguration:
    def test_toml(self, write, arch):
        config = load_configuration(write("c.toml", TOML_DATA), arch)
        assert config.refresh_system
        assert config.package_list.args(arch) == ["-S", "--noconfirm", "git", "curl", "bat"]
        op = config.file_downloads[0]
        assert op.after_complete.args(arch) == ["-f"]
        assert op.files[0].target == "font.ttf"
        assert config.snaps.alternate_snaps[0].channel is SnapChannel.BETA
        commands = config.command_sets[0].runnable_commands()
        assert [c.id for c in commands] == [1, 2]
        assert commands[0].needs_root()
        assert config.system_details == arch

    def test_yaml(self, write, arch):
        config = load_configuration(write("c.yml", YAML_DATA), arch)
        assert config.custom_commands[0].args(arch) == ["-a", "-l"]
        assert config.snaps is None

    def test_json(self, write, arch):
        config = load_configuration(write("c.json", JSON_DATA), arch)
        assert config.snaps.standard_snaps.names == ["postman"]

    def test_no_extension(self, write, arch):
        assert load_configuration(write("spinup", YAML_DATA), arch).package_list is not None

    def test_probes_host_when_not_given(self, write, monkeypatch):
        monkeypatch.setattr(
            "spinup.core.services.host_detect.read_os_release", lambda: ("manjaro", None),
        )
        config = load_configuration(write("c.json", "{}"))
        assert config.system_details.target_os == TargetOperatingSystem.ARCH

    def test_system_details_key_ignored(self, write, arch):
        config = load_configuration(write("c.json", '{"system_details": {"target_os": "fedora"}}'), arch)
        assert config.system_details == arch

    def test_missing_file(self, tmp_path, arch):
        with pytest.raises(ConfigError, match="not found"):
            load_configuration(tmp_path / "missing.toml", arch)

    def test_directory(self, tmp_path, arch):
        with pytest.raises(ConfigError, match="not a file"):
            load_configuration(tmp_path, arch)

    def test_junk(self, write, arch):
        with pytest.raises(ConfigError):
            load_configuration(write("c.yaml", JUNK), arch)

    def test_schema_error(self, write, arch):
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_configuration(write("c.yaml", "custom_commands:\n  - args: [x]\n"), arch)


# ── Dumping ──────────────────────────────────────────────────────────


class TestDumpConfiguration:
    def test_yaml_uses_config_keys(self, write, arch):
        config = load_configuration(write("c.toml", TOML_DATA), arch)
        data = yaml.safe_load(dump_configuration(config, "yaml"))
        assert "system_details" not in data
        assert data["file_downloads"][0]["after_complete"] == {
            "command": "fc-cache", "args": ["-f"], "needs_root": False,
        }
        assert data["command_sets"][0]["commands"][0] == {"id": 2, "command": "b", "needs_root": False}
        assert data["snaps"]["alternate_snaps"][0]["channel"] == "beta"

    def test_json_reloads(self, write, arch):
        config = load_configuration(write("c.toml", TOML_DATA), arch)
        again = load_configuration(write("again.json", dump_configuration(config, "json")), arch)
        assert again == config

    def test_unknown_format(self, arch):
        from spinup.core.models import Configuration

        with pytest.raises(ConfigError):
            dump_configuration(Configuration(), "xml")


# ── Config check ─────────────────────────────────────────────────────


class TestCheckConfig:
    def test_valid(self, write, arch):
        result = check_config(write("c.toml", TOML_DATA), arch)
        assert result.valid
        summary = result.to_dict()["summary"]
        assert summary["files"] == 1
        assert summary["command_sets"] == 1

    def test_collects_every_problem(self, write, arch):
        content = textwrap.dedent("""\
            custom_commands:
              - command: ""
            command_sets:
              - commands:
                  - {id: 1, command: a}
                  - {id: 1, command: b}
            snaps:
              standard_snaps:
                names: []
        """)
        result = check_config(write("c.yaml", content), arch)
        assert not result.valid
        joined = "\n".join(result.errors)
        assert "not unique" in joined
        assert "zero-length" in joined
        assert "no names" in joined

    def test_unsupported_host_warns(self, write, unknown_host):
        result = check_config(write("c.yaml", "custom_commands:\n  - command: ls\n"), unknown_host)
        assert result.valid
        assert result.warnings

    def test_unsupported_host_with_packages_is_error(self, write, unknown_host):
        result = check_config(write("c.yaml", YAML_DATA), unknown_host)
        assert not result.valid

    def test_missing_file(self, tmp_path, arch):
        result = check_config(tmp_path / "nope.yaml", arch)
        assert not result.valid
        assert result.to_dict()["valid"] is False
