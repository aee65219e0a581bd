"""
Tests for the govee-control command line.

Covers:
1. Argument parsing and validation
2. run(): each command reaches the right dispatcher call
3. main(): errors become exit status 1 with a message
"""

from unittest.mock import AsyncMock

import pytest

from govee_control import cli
from govee_control.capabilities.backends.platform import DEFAULT_BASE_URL
from govee_control.capabilities.exceptions import ValueNotFoundError
from govee_control.capabilities.protocols import ControlResult
from govee_control.capabilities.schema import Capability, Device
from govee_control.config import GoveeApiConfig

DEVICE = Device.model_validate({
    "sku": "H6008",
    "device": "AA:BB",
    "capabilities": [
        {
            "type": "devices.capabilities.on_off",
            "instance": "powerSwitch",
            "parameters": {"dataType": "ENUM", "options": [{"name": "on", "value": 1}, {"name": "off", "value": 0}]},
        },
        {
            "type": "devices.capabilities.color_setting",
            "instance": "colorRgb",
            "parameters": {"dataType": "INTEGER", "range": {"min": 0, "max": 16777215}},
        },
        {
            "type": "devices.capabilities.music_setting",
            "instance": "musicMode",
            "parameters": {
                "dataType": "STRUCT",
                "fields": [{
                    "fieldName": "musicMode",
                    "dataType": "ENUM",
                    "options": [{"name": "Energetic", "value": 5}, {"name": "Calm", "value": 9}],
                }],
            },
        },
    ],
})

SCENE = Capability.model_validate({
    "type": "devices.capabilities.dynamic_scene",
    "instance": "lightScene",
    "parameters": {"dataType": "ENUM", "options": [{"name": "Relax", "value": 42}]},
})


def _make_client() -> AsyncMock:
    client = AsyncMock()
    client.fetch_device.return_value = DEVICE
    client.fetch_scene_capabilities.return_value = [SCENE]
    client.fetch_diy_scene_capabilities.return_value = []
    client.submit_control.return_value = ControlResult(request_id="r", code=200, message="success")
    return client


def _parse(*argv: str):
    return cli.build_parser().parse_args(["--id", "AA:BB", *argv])


# ------------------------------------------------------------------ #
# Parsing
# ------------------------------------------------------------------ #

class TestParser:
    """build_parser: argument types and defaults."""

    def test_music_defaults(self):
        args = _parse("music", "Calm")
        assert args.sensitivity == 100
        assert args.auto_color is False
        assert args.color is None
        assert args.mode == "Calm"

    def test_brightness_out_of_range(self):
        with pytest.raises(SystemExit):
            _parse("brightness", "101")

    def test_sensitivity_out_of_range(self):
        with pytest.raises(SystemExit):
            _parse("music", "--sensitivity", "256", "Calm")

    def test_invalid_color(self):
        with pytest.raises(SystemExit):
            _parse("color", "not-a-color")

    def test_scene_name_required_without_list(self, monkeypatch):
        monkeypatch.setattr(cli.settings.api, "api_key", "key")
        with pytest.raises(SystemExit):
            cli.main(["--id", "AA:BB", "scene"])

    def test_api_key_required(self, monkeypatch):
        monkeypatch.setattr(cli.settings.api, "api_key", None)
        with pytest.raises(SystemExit):
            cli.main(["--id", "AA:BB", "on"])


# ------------------------------------------------------------------ #
# run()
# ------------------------------------------------------------------ #

class TestRun:
    """run() performs exactly the requested operation."""

    @pytest.mark.asyncio
    async def test_on(self):
        client = _make_client()
        await cli.run(_parse("on"), client)
        client.fetch_device.assert_awaited_once_with("AA:BB")
        _, cap, value = client.submit_control.await_args.args
        assert (cap.instance, value) == ("powerSwitch", 1)

    @pytest.mark.asyncio
    async def test_color(self):
        client = _make_client()
        await cli.run(_parse("color", "#ff0080"), client)
        _, cap, value = client.submit_control.await_args.args
        assert (cap.instance, value) == ("colorRgb", 0xFF0080)

    @pytest.mark.asyncio
    async def test_scene_list(self, capsys):
        client = _make_client()
        await cli.run(_parse("scene", "--list"), client)
        assert "Relax" in capsys.readouterr().out
        client.submit_control.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_scene_activate(self):
        client = _make_client()
        await cli.run(_parse("scene", "relax"), client)
        _, cap, value = client.submit_control.await_args.args
        assert (cap.instance, value) == ("lightScene", 42)

    @pytest.mark.asyncio
    async def test_music_list(self, capsys):
        client = _make_client()
        await cli.run(_parse("music", "--list"), client)
        out = capsys.readouterr().out
        assert out.index("Energetic") < out.index("Calm")
        client.submit_control.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_music_activate(self):
        client = _make_client()
        await cli.run(
            _parse("music", "--sensitivity", "50", "--auto-color", "--color", "red", "calm"),
            client,
        )
        _, cap, value = client.submit_control.await_args.args
        assert cap.instance == "musicMode"
        assert value == {"musicMode": 9, "sensitivity": 50, "autoColor": 1, "rgb": 0xFF0000}


# ------------------------------------------------------------------ #
# main()
# ------------------------------------------------------------------ #

class TestMain:
    """main() maps control errors to exit status 1."""

    def test_success(self, monkeypatch):
        monkeypatch.setattr(cli.settings.api, "api_key", "key")
        monkeypatch.setattr(cli, "_run_with_platform", AsyncMock(return_value=None))
        assert cli.main(["--id", "AA:BB", "on"]) == 0

    def test_control_error(self, monkeypatch, capsys):
        monkeypatch.setattr(cli.settings.api, "api_key", "key")
        monkeypatch.setattr(
            cli,
            "_run_with_platform",
            AsyncMock(side_effect=ValueNotFoundError("scene", "Disco")),
        )
        assert cli.main(["--id", "AA:BB", "scene", "Disco"]) == 1
        assert "scene 'Disco' was not found" in capsys.readouterr().out

    def test_api_key_flag_overrides_settings(self, monkeypatch):
        monkeypatch.setattr(cli.settings.api, "api_key", None)
        runner = AsyncMock(return_value=None)
        monkeypatch.setattr(cli, "_run_with_platform", runner)
        assert cli.main(["--api-key", "flag-key", "--id", "AA:BB", "off"]) == 0
        assert runner.await_args.args[1] == "flag-key"

    def test_default_base_url_matches_client(self, monkeypatch):
        monkeypatch.delenv("GOVEE_BASE_URL", raising=False)
        assert GoveeApiConfig().base_url == DEFAULT_BASE_URL
