"""Tests for moi-id CLI commands."""

import json
from pathlib import Path

from typer.testing import CliRunner

from moi_identifiers import __version__
from moi_identifiers.cli import app
from moi_identifiers.cli.errors import ExitCode
from moi_identifiers.core.ids import (
    LOGIC_AUXILIARY,
    LOGIC_EXTRINSIC,
    LOGIC_INTRINSIC,
    Address,
    AssetID,
    LogicID,
    ParticipantID,
)

runner = CliRunner()


class TestVersion:
    """Tests for the version command."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert f"moi-id version {__version__}" in result.output


class TestInspect:
    """Tests for the inspect command."""

    def test_json(self, asset_hex: str) -> None:
        result = runner.invoke(app, ["inspect", asset_hex, "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["hex"] == asset_hex
        assert data["tag"] == "0x10"
        assert data["kind"] == "asset"
        assert data["version"] == 0
        assert data["standard"] == 16
        assert data["variant"] == 0x42
        assert data["flag_states"] == {
            "systemic": False,
            "asset_logical": False,
            "asset_stateful": True,
        }
        assert data["valid"] is True
        assert data["error"] is None

    def test_text(self, participant_hex: str) -> None:
        result = runner.invoke(app, ["inspect", participant_hex])
        assert result.exit_code == 0
        assert "participant v0" in result.output
        assert "systemic" in result.output
        assert "yes" in result.output

    def test_invalid_layout_is_reported_not_raised(self, asset_hex: str, with_byte) -> None:
        """Malformed flags are shown as an invalid identifier, not an error."""
        result = runner.invoke(app, ["inspect", with_byte(asset_hex, 1, 0xFF), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["valid"] is False
        assert data["error"].startswith("MalformedFlagsError")

    def test_unknown_kind(self, asset_hex: str, with_byte) -> None:
        result = runner.invoke(app, ["inspect", with_byte(asset_hex, 0, 0x50), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["kind"] is None
        assert data["kind_nibble"] == 5
        assert data["flag_states"] == {}
        assert "UnsupportedKindError" in data["error"]

    def test_bad_length(self) -> None:
        result = runner.invoke(app, ["inspect", "0x1001"])
        assert result.exit_code == ExitCode.USER_ERROR
        assert "InvalidLengthError" in result.output

    def test_bad_hex(self) -> None:
        result = runner.invoke(app, ["inspect", "invalid-hex"])
        assert result.exit_code == ExitCode.USER_ERROR
        assert "HexDecodeError" in result.output

    def test_config_selects_json(self, asset_hex: str, monkeypatch) -> None:
        monkeypatch.setenv("MOI_ID_OUTPUT_FORMAT", "json")
        result = runner.invoke(app, ["inspect", asset_hex])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["kind"] == "asset"

    def test_project_config_file(self, asset_hex: str, project_dir: Path) -> None:
        (project_dir / ".moi-id.json").write_text(json.dumps({"output": {"format": "json"}}))
        result = runner.invoke(app, ["inspect", asset_hex])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["valid"] is True

    def test_project_env_file(self, asset_hex: str, project_dir: Path) -> None:
        (project_dir / ".env").write_text("MOI_ID_OUTPUT_FORMAT=json\n")
        result = runner.invoke(app, ["inspect", asset_hex])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["hex"] == asset_hex

    def test_invalid_config_file(self, asset_hex: str, project_dir: Path) -> None:
        (project_dir / ".moi-id.json").write_text(json.dumps({"output": {"format": "xml"}}))
        result = runner.invoke(app, ["inspect", asset_hex])
        assert result.exit_code == ExitCode.USER_ERROR
        assert "Invalid configuration" in result.output

    def test_debug_flag(self, asset_hex: str) -> None:
        result = runner.invoke(app, ["--debug", "inspect", asset_hex, "--json"])
        assert result.exit_code == 0


class TestValidate:
    """Tests for the validate command."""

    def test_valid(self, asset_hex: str) -> None:
        result = runner.invoke(app, ["validate", "asset", asset_hex])
        assert result.exit_code == 0
        assert "valid asset id" in result.output

    def test_wrong_kind(self, asset_hex: str) -> None:
        result = runner.invoke(app, ["validate", "participant", asset_hex])
        assert result.exit_code == ExitCode.USER_ERROR
        assert "WrongKindError" in result.output
        assert "not a participant id" in result.output

    def test_malformed_flags(self, logic_hex: str, with_byte) -> None:
        result = runner.invoke(app, ["validate", "logic", with_byte(logic_hex, 1, 0x08)])
        assert result.exit_code == ExitCode.USER_ERROR
        assert "MalformedFlagsError" in result.output

    def test_quiet(self, asset_hex: str) -> None:
        result = runner.invoke(app, ["validate", "logic", asset_hex, "--quiet"])
        assert result.exit_code == ExitCode.USER_ERROR
        assert result.output == ""

    def test_unknown_kind_argument(self, asset_hex: str) -> None:
        result = runner.invoke(app, ["validate", "token", asset_hex])
        assert result.exit_code == 2


class TestGenerate:
    """Tests for the generate command."""

    def test_asset(self, asset_hex: str, fingerprint: bytes) -> None:
        result = runner.invoke(
            app,
            [
                "generate",
                "asset",
                "--fingerprint",
                "0x" + fingerprint.hex(),
                "--variant",
                "66",
                "--standard",
                "16",
                "--flag",
                "asset_stateful",
            ],
        )
        assert result.exit_code == 0
        assert result.stdout.strip() == asset_hex

    def test_random_fingerprint_when_omitted(self) -> None:
        result = runner.invoke(app, ["generate", "participant", "-f", "systemic"])
        assert result.exit_code == 0
        participant = ParticipantID.from_hex(result.stdout.strip())
        assert participant.flags == 0b10000000

    def test_json(self, fingerprint: bytes) -> None:
        result = runner.invoke(
            app,
            ["generate", "logic", "--fingerprint", fingerprint.hex(), "-f", "logic-auxiliary", "--json"],
        )
        assert result.exit_code == 0
        [data] = json.loads(result.stdout)
        assert data["kind"] == "logic"
        assert data["flag_states"]["logic_auxiliary"] is True

    def test_unsupported_flag(self) -> None:
        result = runner.invoke(app, ["generate", "logic", "-f", "asset_stateful"])
        assert result.exit_code == ExitCode.USER_ERROR
        assert "UnsupportedFlagError" in result.output

    def test_unknown_flag(self) -> None:
        result = runner.invoke(app, ["generate", "asset", "-f", "shiny"])
        assert result.exit_code == ExitCode.USER_ERROR
        assert "Unknown flag 'shiny'" in result.output

    def test_standard_only_for_assets(self) -> None:
        result = runner.invoke(app, ["generate", "participant", "--standard", "1"])
        assert result.exit_code == ExitCode.USER_ERROR
        assert "--standard only applies to asset identifiers" in result.output

    def test_short_fingerprint(self) -> None:
        result = runner.invoke(app, ["generate", "asset", "--fingerprint", "0x0102"])
        assert result.exit_code == ExitCode.USER_ERROR
        assert "fingerprint must be 24 bytes" in result.output

    def test_variant_out_of_range(self) -> None:
        result = runner.invoke(app, ["generate", "asset", "--variant", "4294967296"])
        assert result.exit_code == 2


class TestRandom:
    """Tests for the random command."""

    def test_count(self) -> None:
        result = runner.invoke(app, ["random", "logic", "--count", "3"])
        assert result.exit_code == 0
        lines = result.stdout.strip().splitlines()
        assert len(lines) == 3
        for line in lines:
            LogicID.from_hex(line)

    def test_asset_json(self) -> None:
        result = runner.invoke(app, ["random", "asset", "-n", "2", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert len(data) == 2
        assert all(item["valid"] and item["kind"] == "asset" for item in data)
        assert all(not item["flag_states"]["systemic"] for item in data)

    def test_address_json(self) -> None:
        result = runner.invoke(app, ["random", "address", "--count", "2", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert len(data) == 2
        for value in data:
            assert Address.unmarshal_text(value).hex() == value

    def test_count_must_be_positive(self) -> None:
        result = runner.invoke(app, ["random", "asset", "--count", "0"])
        assert result.exit_code == 2


class TestDerive:
    """Tests for the derive command."""

    def test_set_and_unset(self, logic_hex: str) -> None:
        result = runner.invoke(
            app,
            ["derive", logic_hex, "--variant", "9", "--set", "logic_auxiliary", "--unset", "logic_extrinsic"],
        )
        assert result.exit_code == 0
        derived = LogicID.from_hex(result.stdout.strip())
        assert derived.variant == 9
        assert derived.flag(LOGIC_AUXILIARY)
        assert derived.flag(LOGIC_INTRINSIC)
        assert not derived.flag(LOGIC_EXTRINSIC)
        assert derived.fingerprint == LogicID.from_hex(logic_hex).fingerprint

    def test_keeps_standard(self, asset_hex: str) -> None:
        result = runner.invoke(app, ["derive", asset_hex, "--variant", "0"])
        assert result.exit_code == 0
        assert AssetID.from_hex(result.stdout.strip()).standard == 16

    def test_unsupported_flag(self, logic_hex: str) -> None:
        result = runner.invoke(app, ["derive", logic_hex, "--variant", "1", "--set", "asset_stateful"])
        assert result.exit_code == ExitCode.USER_ERROR
        assert "UnsupportedFlagError" in result.output

    def test_invalid_source(self, asset_hex: str, with_byte) -> None:
        result = runner.invoke(app, ["derive", with_byte(asset_hex, 0, 0x01), "--variant", "1"])
        assert result.exit_code == ExitCode.USER_ERROR
        assert "UnsupportedVersionError" in result.output

    def test_variant_required(self, asset_hex: str) -> None:
        result = runner.invoke(app, ["derive", asset_hex])
        assert result.exit_code == 2
