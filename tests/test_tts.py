"""Tests for the TTS provider chain used by the voice summary hook."""

import base64
import json
import logging
import subprocess
from pathlib import Path

import pytest

from audio_hooks.utils.tts_manager import TTSManager
from audio_hooks.utils.tts_providers import TTSProviderError, create_provider
from audio_hooks.utils.tts_providers import elevenlabs_provider, mcp_provider
from audio_hooks.utils.tts_providers.elevenlabs_provider import ElevenLabsProvider
from audio_hooks.utils.tts_providers.mcp_provider import McpProvider
from audio_hooks.utils.tts_providers.say_provider import SayProvider

CLIP = b"ID3-fake-mp3-bytes"


@pytest.fixture
def claude_cli(commands, monkeypatch):
    """Make every binary, including `claude`, look installed."""
    monkeypatch.setattr(mcp_provider.shutil, "which", lambda name: f"/usr/bin/{name}")
    return commands


def mcp_response(payload):
    return subprocess.CompletedProcess(args=[], returncode=0, stdout=json.dumps(payload), stderr="")


class TestMcpProvider:
    def test_command_line(self):
        command = McpProvider(voice_id="voice-1").build_command("Completed: Edit")
        assert command[:5] == ["claude", "mcp", "call", "elevenlabs", "generate_speech"]
        assert command[command.index("--text") + 1] == "Completed: Edit"
        assert command[command.index("--voice_id") + 1] == "voice-1"

    def test_speak_plays_clip_and_removes_temp_file(self, claude_cli):
        claude_cli.run_result = mcp_response({"audio_base64": base64.b64encode(CLIP).decode()})

        assert McpProvider().speak("Completed: Edit") is True

        mcp_call, playback = claude_cli.ran
        assert mcp_call[0] == "claude"
        assert playback[0] == "mpg123"
        assert playback[-1].endswith(".mp3")
        assert not Path(playback[-1]).exists()

    @pytest.mark.parametrize(
        "result",
        [
            subprocess.CompletedProcess(args=[], returncode=1, stdout="", stderr="no server"),
            subprocess.CompletedProcess(args=[], returncode=0, stdout="not json", stderr=""),
            mcp_response({"status": "ok"}),
            mcp_response({"audio_base64": "!!!not base64!!!"}),
            subprocess.TimeoutExpired(cmd="claude", timeout=10),
        ],
    )
    def test_failures_raise_provider_error(self, claude_cli, result):
        claude_cli.run_result = result
        with pytest.raises(TTSProviderError):
            McpProvider().fetch_audio("hello")

    def test_missing_cli_is_skipped(self, commands):
        assert McpProvider().speak("hello") is False
        assert commands.commands == []


class FakeTextToSpeech:
    def __init__(self, chunks):
        self.chunks = chunks
        self.calls = []

    def convert(self, **kwargs):
        self.calls.append(kwargs)
        if isinstance(self.chunks, Exception):
            raise self.chunks
        return iter(self.chunks)


class FakeClient:
    def __init__(self, chunks):
        self.text_to_speech = FakeTextToSpeech(chunks)


class TestElevenLabsProvider:
    def test_requires_api_key(self):
        assert ElevenLabsProvider(api_key="").is_available() is False

    def test_generate_audio_joins_chunks(self):
        provider = ElevenLabsProvider(api_key="sk_1234567890abcdef", voice_id="v")
        provider._client = FakeClient([b"ID3", b"-more"])

        assert provider.generate_audio("hi") == b"ID3-more"
        call = provider._client.text_to_speech.calls[0]
        assert call["voice_id"] == "v"
        assert call["model_id"] == "eleven_flash_v2_5"

    @pytest.mark.parametrize("chunks", [[], RuntimeError("401 Unauthorized")])
    def test_api_failures_raise(self, chunks):
        provider = ElevenLabsProvider(api_key="sk_1234567890abcdef")
        provider._client = FakeClient(chunks)
        with pytest.raises(TTSProviderError):
            provider.generate_audio("hi")

    def test_client_created_lazily_with_timeout(self, monkeypatch):
        created = []

        def fake_client(**kwargs):
            created.append(kwargs)
            return FakeClient([b"x"])

        monkeypatch.setattr(elevenlabs_provider, "ElevenLabs", fake_client)
        provider = ElevenLabsProvider(api_key="sk_1234567890abcdef", timeout=4)
        assert created == []
        provider.generate_audio("hi")
        provider.generate_audio("again")
        assert created == [{"api_key": "sk_1234567890abcdef", "timeout": 4}]

    def test_manager_passes_tts_timeout(self):
        manager = TTSManager(["elevenlabs"], api_key="sk_1234567890abcdef", timeout=7)
        assert manager.providers["elevenlabs"].timeout == 7
        assert ElevenLabsProvider().timeout == 10.0


class TestSayProvider:
    def test_unavailable_off_macos(self, commands):
        assert SayProvider().speak("hi") is False
        assert commands.commands == []

    def test_speaks_on_macos(self, claude_cli, set_platform):
        set_platform("darwin")
        assert SayProvider().speak("Completed: Edit") is True
        assert claude_cli.ran == [["say", "-v", "Samantha", "-r", "200", "Completed: Edit"]]


class TestFactory:
    def test_unknown_provider(self):
        assert create_provider("festival") is None

    def test_only_accepted_kwargs_are_passed(self):
        provider = create_provider("mcp", voice_id="v", timeout=3, api_key="ignored")
        assert isinstance(provider, McpProvider)
        assert provider.timeout == 3
        assert create_provider("say", api_key="ignored").provider_name == "say"


class TestManager:
    def test_duplicates_removed(self):
        assert TTSManager(["say", "mcp", "say"]).provider_chain == ["say", "mcp"]

    def test_falls_through_to_next_provider(self, monkeypatch):
        manager = TTSManager(["mcp", "elevenlabs"], api_key="sk_1234567890abcdef")

        def broken(text):
            raise TTSProviderError("timed out")

        monkeypatch.setattr(manager.providers["mcp"], "speak", broken)
        monkeypatch.setattr(manager.providers["elevenlabs"], "speak", lambda text: True)

        assert manager.speak("Completed: Edit") == "elevenlabs"

    def test_all_failing_logs_the_text(self, commands, caplog):
        manager = TTSManager(["mcp", "elevenlabs", "say"])
        with caplog.at_level(logging.INFO):
            assert manager.speak("Attention: approve edit") is None
        assert "TTS message: Attention: approve edit" in caplog.text
