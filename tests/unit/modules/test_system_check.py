"""Tests for the system compatibility checker."""

import pytest

from devsetup.config_manager import DevSetupConfig
from devsetup.errors import SetupAbortedError
from devsetup.modules.interaction_handler import ScriptedInteractionHandler
from devsetup.modules.system_check import OSInfo, SystemChecker, parse_os_release


class TestParseOsRelease:
    """Unit tests for os-release parsing."""

    def test_parses_quoted_and_unquoted_values(self):
        values = parse_os_release('ID=linuxmint\nNAME="Linux Mint"\nVERSION_ID=\'21.3\'\n')

        assert values == {"ID": "linuxmint", "NAME": "Linux Mint", "VERSION_ID": "21.3"}

    def test_skips_comments_and_blank_lines(self):
        values = parse_os_release("# comment\n\nID=ubuntu\nnot a pair\n")

        assert values == {"ID": "ubuntu"}

    def test_empty_value(self):
        assert parse_os_release("VARIANT=\n") == {"VARIANT": ""}

    def test_unbalanced_quote_is_tolerated(self):
        assert parse_os_release('NAME="Broken\n')["NAME"] == "Broken"


class TestDetect:
    """Unit tests for SystemChecker.detect."""

    def test_detect_ubuntu(self, os_release):
        info = SystemChecker.detect(os_release)

        assert info == OSInfo(id="ubuntu", name="Ubuntu 24.04.1 LTS", version_id="24.04")

    def test_detect_missing_file(self, tmp_path):
        assert SystemChecker.detect(tmp_path / "missing") is None


class TestCheck:
    """Unit tests for the interactive compatibility check."""

    def test_supported_os_passes_without_prompt(self, os_release):
        config = DevSetupConfig(os_release_path=str(os_release))
        handler = ScriptedInteractionHandler()

        info = SystemChecker.check(config, handler)

        assert info.id == "ubuntu"
        assert handler.prompts == []

    def test_linuxmint_is_supported(self, tmp_path):
        path = tmp_path / "os-release"
        path.write_text("ID=linuxmint\nNAME=\"Linux Mint\"\n")
        handler = ScriptedInteractionHandler()

        SystemChecker.check(DevSetupConfig(os_release_path=str(path)), handler)

        assert handler.prompts == []

    def test_unsupported_os_confirmed(self, unsupported_os_release):
        config = DevSetupConfig(os_release_path=str(unsupported_os_release))
        handler = ScriptedInteractionHandler(["y"])

        info = SystemChecker.check(config, handler)

        assert info.id == "fedora"
        assert handler.prompts == ["Continue anyway? (y/n): "]

    @pytest.mark.parametrize("answer", ["n", "", "x"])
    def test_unsupported_os_declined(self, unsupported_os_release, answer):
        config = DevSetupConfig(os_release_path=str(unsupported_os_release))

        with pytest.raises(SetupAbortedError) as exc_info:
            SystemChecker.check(config, ScriptedInteractionHandler([answer]))

        assert exc_info.value.exit_code == 1

    def test_unsupported_os_closed_input_declines(self, unsupported_os_release):
        config = DevSetupConfig(os_release_path=str(unsupported_os_release))

        with pytest.raises(SetupAbortedError):
            SystemChecker.check(config, ScriptedInteractionHandler())

    def test_unsupported_os_warning_logged(self, unsupported_os_release, caplog):
        config = DevSetupConfig(os_release_path=str(unsupported_os_release))

        with caplog.at_level("WARNING", logger="devsetup"):
            SystemChecker.check(config, ScriptedInteractionHandler(["y"]))

        assert "Your system: fedora" in caplog.text

    def test_missing_os_release_aborts(self, tmp_path):
        config = DevSetupConfig(os_release_path=str(tmp_path / "nope"))

        with pytest.raises(SetupAbortedError):
            SystemChecker.check(config, ScriptedInteractionHandler(["y"]))

    def test_custom_allow_list(self, unsupported_os_release):
        config = DevSetupConfig(
            os_release_path=str(unsupported_os_release), supported_os_ids=("fedora",)
        )
        handler = ScriptedInteractionHandler()

        SystemChecker.check(config, handler)

        assert handler.prompts == []
