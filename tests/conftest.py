"""Shared fixtures: an isolated ~/.claude, recorded subprocesses and scripted prompts."""

import subprocess

import pytest

from audio_hooks.utils import platform_utils, sound_player


@pytest.fixture
def claude_home(tmp_path, monkeypatch):
    """Point every path at a temporary home directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("AUDIO_HOOKS_HOME", str(home))
    monkeypatch.delenv("LOG_FILE", raising=False)
    monkeypatch.delenv("DEBUG_HOOKS", raising=False)
    monkeypatch.delenv("ELEVENLABS_API_KEY", raising=False)
    monkeypatch.delenv("WSL_DISTRO_NAME", raising=False)
    monkeypatch.setenv("AUDIO_HOOKS_DEBOUNCE_SECONDS", "0")
    return home


@pytest.fixture
def set_platform(monkeypatch):
    """Pretend to run on "darwin", "win32" or "linux" (optionally WSL)."""

    def _set(name, wsl=False):
        monkeypatch.setattr(platform_utils, "get_platform", lambda: name)
        monkeypatch.setattr(platform_utils, "is_wsl", lambda: wsl)
        monkeypatch.setattr(sound_player, "get_platform", lambda: name)

    _set("linux")
    return _set


class CommandRecorder:
    """Stands in for subprocess.Popen / subprocess.run."""

    def __init__(self):
        self.spawned = []
        self.ran = []
        self.run_result = subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr="")

    def popen(self, command, **kwargs):
        self.spawned.append(command)
        return None

    def run(self, command, **kwargs):
        self.ran.append(command)
        if isinstance(self.run_result, BaseException):
            raise self.run_result
        return self.run_result

    @property
    def commands(self):
        return self.spawned + self.ran


@pytest.fixture
def commands(monkeypatch, set_platform):
    """Record external commands instead of running them; mpg123 is 'installed'."""
    recorder = CommandRecorder()
    monkeypatch.setattr(subprocess, "Popen", recorder.popen)
    monkeypatch.setattr(subprocess, "run", recorder.run)
    monkeypatch.setattr(
        sound_player.shutil, "which", lambda name: "/usr/bin/mpg123" if name == "mpg123" else None
    )
    return recorder


@pytest.fixture
def scripted_prompts(monkeypatch):
    """
    Answer click prompts from lists.

    Returns a function taking (prompts, confirms); the lists are consumed in
    order and returned so tests can check everything was asked.
    """
    import click

    def _script(prompts=(), confirms=()):
        prompts = list(prompts)
        confirms = list(confirms)

        def fake_prompt(text, **kwargs):
            if not prompts:
                raise AssertionError(f"Unexpected prompt: {text}")
            value = prompts.pop(0)
            value_proc = kwargs.get("value_proc")
            return value_proc(value) if value_proc else value

        def fake_confirm(text, **kwargs):
            if not confirms:
                raise AssertionError(f"Unexpected confirmation: {text}")
            return confirms.pop(0)

        monkeypatch.setattr(click, "prompt", fake_prompt)
        monkeypatch.setattr(click, "confirm", fake_confirm)
        return prompts, confirms

    return _script
