"""Tests for the system package module (apt and Flatpak)."""

import pytest

from devsetup.config_manager import DevSetupConfig
from devsetup.errors import CommandFailedError
from devsetup.modules.command_runner import RecordingCommandRunner
from devsetup.modules.system_packages import ensure_flatpak, install_jetbrains, update_system


class TestUpdateSystem:
    def test_command_sequence(self, config, runner):
        update_system(config, runner)

        assert runner.command_lines == [
            "sudo apt update",
            "sudo apt upgrade -y",
            "sudo apt install -y curl wget vim git build-essential",
        ]

    def test_update_failure_stops_upgrade(self, config):
        runner = RecordingCommandRunner()
        runner.fail_on("apt update", returncode=100)

        with pytest.raises(CommandFailedError):
            update_system(config, runner)

        assert runner.command_lines == ["sudo apt update"]

    def test_empty_package_list_skips_install(self, runner):
        update_system(DevSetupConfig(apt_packages=()), runner)

        assert not runner.ran("apt install")


class TestEnsureFlatpak:
    def test_present_flatpak_not_reinstalled(self, config):
        runner = RecordingCommandRunner(available={"flatpak"})

        assert ensure_flatpak(config, runner) is False
        assert runner.commands == []

    def test_missing_flatpak_installed_and_remote_added(self, config):
        runner = RecordingCommandRunner()

        assert ensure_flatpak(config, runner) is True
        assert runner.command_lines == [
            "sudo apt install -y flatpak",
            "flatpak remote-add --if-not-exists flathub https://flathub.org/repo/flathub.flatpakrepo",
        ]


class TestInstallJetbrains:
    def test_installs_each_ide_in_order(self, config, runner):
        install_jetbrains(config, runner)

        assert runner.command_lines == [
            "flatpak install -y flathub com.jetbrains.IntelliJ-IDEA-Community",
            "flatpak install -y flathub com.jetbrains.WebStorm",
            "flatpak install -y flathub com.jetbrains.PyCharm-Community",
        ]

    def test_reinstall_is_not_guarded(self, config, runner):
        install_jetbrains(config, runner)
        install_jetbrains(config, runner)

        assert len(runner.commands) == 6

    def test_failure_stops_remaining_ides(self, config):
        runner = RecordingCommandRunner(available={"flatpak"})
        runner.fail_on("WebStorm", returncode=1)

        with pytest.raises(CommandFailedError):
            install_jetbrains(config, runner)

        assert not runner.ran("PyCharm")
