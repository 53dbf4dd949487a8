"""Tests for the setup() entry point."""

import tempfile
from pathlib import Path

import pytest
from kitty_shell_integration import AssetEntry
from kitty_shell_integration import AssetStore
from kitty_shell_integration import ShellIntegrationConfig
from kitty_shell_integration import ShellIntegrationInstallError
from kitty_shell_integration import UnsupportedShellError
from kitty_shell_integration import setup


class FakeRunner:
    def __init__(self, stdout: bytes = b""):
        self.stdout = stdout
        self.calls = 0

    def output(self, args: list[str], env: dict[str, str]) -> bytes:
        self.calls += 1
        return self.stdout


def make_store() -> AssetStore:
    return AssetStore(
        [
            AssetEntry(path="shell-integration/bash/kitty.bash", data=b"# bash\n"),
            AssetEntry(path="shell-integration/zsh/.zshrc", data=b"# zsh\n"),
            AssetEntry(path="shell-integration/fish/vendor_conf.d/kitty.fish", data=b"# fish\n"),
        ]
    )


def test_setup_sets_marker_and_preserves_inputs():
    """Test the marker is set and the caller's argv/env are not modified."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config = ShellIntegrationConfig(cache_dir=Path(tmpdir))
        argv = ["fish", "--login"]
        env = {"XDG_DATA_DIRS": "/usr/share"}

        final_argv, final_env = setup("fish", "no-cursor", argv, env, store=make_store(), config=config)

        assert final_env["KITTY_SHELL_INTEGRATION"] == "no-cursor"
        assert final_argv == ["fish", "--login"]
        assert final_argv is not argv
        assert final_env is not env
        assert argv == ["fish", "--login"]
        assert env == {"XDG_DATA_DIRS": "/usr/share"}


def test_setup_fish_uses_extracted_data_dir():
    """Test fish is pointed at the extracted shell-integration directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config = ShellIntegrationConfig(cache_dir=Path(tmpdir))
        data_dir = Path(tmpdir) / "extracted-ksi" / "shell-integration"

        _, env = setup("fish", "enabled", ["fish"], {}, store=make_store(), config=config)

        assert env["KITTY_FISH_XDG_DATA_DIR"] == str(data_dir)
        assert env["XDG_DATA_DIRS"] == str(data_dir)
        assert (data_dir / "fish" / "vendor_conf.d" / "kitty.fish").exists()


def test_setup_zsh_points_zdotdir_at_integration():
    """Test a configured zsh gets ZDOTDIR redirected to the extracted files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        home = Path(tmpdir) / "home"
        home.mkdir()
        (home / ".zshrc").touch()
        config = ShellIntegrationConfig(cache_dir=Path(tmpdir) / "cache")
        env = {"HOME": str(home), "ZDOTDIR": str(home)}

        _, final_env = setup("zsh", "enabled", ["zsh"], env, store=make_store(), config=config, runner=FakeRunner())

        zdotdir = Path(final_env["ZDOTDIR"])
        assert zdotdir == Path(tmpdir) / "cache" / "extracted-ksi" / "shell-integration" / "zsh"
        assert (zdotdir / ".zshrc").read_bytes() == b"# zsh\n"
        assert final_env["KITTY_ORIG_ZDOTDIR"] == str(home)
        assert env["ZDOTDIR"] == str(home)


def test_setup_zsh_fresh_install_only_adds_marker():
    """Test a fresh zsh install is left alone apart from the marker."""
    with tempfile.TemporaryDirectory() as tmpdir:
        home = Path(tmpdir) / "home"
        home.mkdir()
        config = ShellIntegrationConfig(cache_dir=Path(tmpdir) / "cache")
        runner = FakeRunner(stdout=b"")

        _, final_env = setup(
            "zsh", "enabled", ["zsh"], {"HOME": str(home)}, store=make_store(), config=config, runner=runner
        )

        assert final_env == {"HOME": str(home), "KITTY_SHELL_INTEGRATION": "enabled"}
        assert runner.calls == 1


def test_setup_bash_only_adds_marker():
    """Test bash setup changes nothing but the marker."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config = ShellIntegrationConfig(cache_dir=Path(tmpdir))

        argv, env = setup("bash", "enabled", ["bash"], {"PATH": "/bin"}, store=make_store(), config=config)

        assert argv == ["bash"]
        assert env == {"PATH": "/bin", "KITTY_SHELL_INTEGRATION": "enabled"}


def test_setup_prefers_installed_files():
    """Test an installation directory is used without extracting."""
    with tempfile.TemporaryDirectory() as tmpdir:
        install = Path(tmpdir) / "install"
        (install / "shell-integration" / "fish").mkdir(parents=True)
        config = ShellIntegrationConfig(cache_dir=Path(tmpdir) / "cache", installation_dir=install)

        _, env = setup("fish", "enabled", ["fish"], {}, store=make_store(), config=config)

        assert env["XDG_DATA_DIRS"] == str(install / "shell-integration")
        assert not (Path(tmpdir) / "cache").exists()


def test_setup_unsupported_shell_has_no_side_effects():
    """Test unsupported shells are rejected before touching the filesystem."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config = ShellIntegrationConfig(cache_dir=Path(tmpdir) / "cache")

        with pytest.raises(UnsupportedShellError, match="not supported") as exc_info:
            setup("tcsh", "enabled", ["tcsh"], {}, store=make_store(), config=config)

        assert exc_info.value.context == {"shell_name": "tcsh"}
        assert not (Path(tmpdir) / "cache").exists()


def test_setup_propagates_install_errors():
    """Test extraction failures reach the caller."""
    with tempfile.TemporaryDirectory() as tmpdir:
        blocker = Path(tmpdir) / "cache"
        blocker.write_text("not a directory")
        config = ShellIntegrationConfig(cache_dir=blocker)
        env = {"HOME": tmpdir}

        with pytest.raises(ShellIntegrationInstallError):
            setup("zsh", "enabled", ["zsh"], env, store=make_store(), config=config)

        assert env == {"HOME": tmpdir}
