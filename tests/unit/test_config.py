"""
Unit tests for command-line configuration.
"""

import pytest
from pydantic import ValidationError

from i3_back_to_scratch.config import DaemonConfig, create_parser, load_config


class TestLoadConfig:
    """Test argument parsing and validation."""

    def test_short_class_flag(self):
        config = load_config(["-c", "Alacritty"])

        assert config.tracked_class == "Alacritty"
        assert config.socket_path is None

    def test_long_class_flag(self):
        assert load_config(["--class", "kitty"]).tracked_class == "kitty"

    def test_class_kept_verbatim(self):
        assert load_config(["--class", "Org.Wezfurlong.Wezterm"]).tracked_class == "Org.Wezfurlong.Wezterm"

    def test_class_required(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            load_config([])

        assert exc_info.value.code == 2
        assert "--class" in capsys.readouterr().err

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_class_rejected(self, value):
        with pytest.raises(SystemExit) as exc_info:
            load_config(["--class", value])

        assert exc_info.value.code == 2

    def test_padded_class_not_stripped(self):
        assert load_config(["--class", " Terminal "]).tracked_class == " Terminal "

    def test_socket_path(self):
        config = load_config(["-c", "foot", "--socket", "/run/user/1000/sway-ipc.sock"])

        assert config.socket_path == "/run/user/1000/sway-ipc.sock"

    def test_default_log_level(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        assert load_config(["-c", "foot"]).log_level == "INFO"

    def test_log_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")

        assert load_config(["-c", "foot"]).log_level == "WARNING"

    def test_verbose_overrides_log_level(self):
        config = load_config(["-c", "foot", "--log-level", "ERROR", "-v"])

        assert config.log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(SystemExit):
            load_config(["-c", "foot", "--log-level", "chatty"])


class TestDaemonConfig:
    """Test the pydantic model directly."""

    def test_requires_class(self):
        with pytest.raises(ValidationError):
            DaemonConfig()

    def test_log_level_normalized(self):
        assert DaemonConfig(tracked_class="foot", log_level="debug").log_level == "DEBUG"


class TestParser:
    """Test parser metadata."""

    def test_prog_name(self):
        assert create_parser().prog == "i3-back-to-scratch"

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--version"])

        assert exc_info.value.code == 0
        assert "i3-back-to-scratch 1.0.0" in capsys.readouterr().out
