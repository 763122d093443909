"""Tests for the keytempo command line."""

import json

import numpy as np
import pytest
import soundfile as sf
from typer.testing import CliRunner

from keytempo.cli import app

from generate_test_audio import (
    C_MAJOR_CHORD,
    SR,
    generate_chord,
    generate_click_train,
    generate_silence,
    save_wav,
)

runner = CliRunner()


@pytest.fixture
def clicks_wav(tmp_path):
    return save_wav("clicks_120bpm.wav", generate_click_train(120.0, 10.0), directory=str(tmp_path))


@pytest.fixture
def chord_wav(tmp_path):
    path = tmp_path / "c_major_chord.wav"
    sf.write(str(path), generate_chord(C_MAJOR_CHORD, 3.0), SR)
    return str(path)


@pytest.fixture
def silence_wav(tmp_path):
    return save_wav("silence.wav", generate_silence(2.0), directory=str(tmp_path))


class TestAnalyzeCommand:

    def test_click_train(self, clicks_wav):
        result = runner.invoke(app, ["analyze", clicks_wav])
        assert result.exit_code == 0, result.output
        assert "BPM: 120.2" in result.output

    def test_chord(self, chord_wav):
        result = runner.invoke(app, ["analyze", chord_wav])
        assert result.exit_code == 0, result.output
        assert "Key: C major" in result.output

    def test_silence_shows_placeholder(self, silence_wav):
        result = runner.invoke(app, ["analyze", silence_wav, "--copy"])
        assert result.exit_code == 0, result.output
        assert "BPM: —" in result.output
        assert "Key: —" in result.output
        assert "Nothing to copy yet." in result.output

    def test_json(self, clicks_wav):
        result = runner.invoke(app, ["analyze", clicks_wav, "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["tempo"] == pytest.approx(120.0, abs=2.0)
        assert data["sample_rate"] == SR
        assert data["duration"] == pytest.approx(10.0)

    def test_max_seconds(self, clicks_wav):
        result = runner.invoke(app, ["analyze", clicks_wav, "--json", "--max-seconds", "0.05"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["duration"] == pytest.approx(0.05, abs=1e-3)
        assert data["tempo"] is None
        assert data["key"] is None

    def test_copy_text(self, chord_wav):
        result = runner.invoke(app, ["analyze", chord_wav, "--copy", "--parallel"])
        assert result.exit_code == 0, result.output
        assert "Key: C major" in result.output
        assert "BPM: " in result.output

    def test_verbose_candidates(self, chord_wav):
        result = runner.invoke(app, ["analyze", chord_wav, "--verbose"])
        assert result.exit_code == 0, result.output
        assert "Key Candidates" in result.output

    def test_config_file(self, clicks_wav, tmp_path):
        config = tmp_path / "keytempo.toml"
        config.write_text("[tempo]\nmin_bpm = 130.0\nmax_bpm = 200.0\n")
        result = runner.invoke(app, ["analyze", clicks_wav, "--json", "--config", str(config)])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["tempo"] is None

    def test_invalid_config_file(self, clicks_wav, tmp_path):
        config = tmp_path / "keytempo.toml"
        config.write_text("[tempo]\nmin_bpm = 300.0\n")
        result = runner.invoke(app, ["analyze", clicks_wav, "--config", str(config)])
        assert result.exit_code == 1
        assert "Invalid config" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["analyze", str(tmp_path / "missing.wav")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("not audio")
        result = runner.invoke(app, ["analyze", str(path)])
        assert result.exit_code == 1
        assert "Failed" in result.output


class TestOtherCommands:

    def test_export(self, chord_wav, tmp_path):
        output = tmp_path / "out" / "result.json"
        result = runner.invoke(app, ["export", chord_wav, "-o", str(output)])
        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text())["key"] == "C major"

    def test_info(self, silence_wav):
        result = runner.invoke(app, ["info", silence_wav])
        assert result.exit_code == 0, result.output
        assert "Sample rate: 44100 Hz" in result.output
        assert "Samples: 88,200" in result.output


class TestAudioLoader:

    def test_truncates_to_max_seconds(self, silence_wav):
        from keytempo.input import AudioLoader

        loader = AudioLoader(max_seconds=1.0)
        audio, sr = loader.load(silence_wav)
        assert sr == SR
        assert len(audio) == SR
        assert loader.get_duration(audio, sr) == pytest.approx(1.0)

    def test_truncate_trims_decoder_overshoot(self):
        from keytempo.input import AudioLoader

        audio = np.zeros(22052, dtype=np.float32)
        assert len(AudioLoader(max_seconds=0.5).truncate(audio, SR)) == 22050
        assert len(AudioLoader(max_seconds=1.0).truncate(audio, SR)) == 22052
        assert len(AudioLoader(max_seconds=None).truncate(audio, SR)) == 22052

    def test_native_rate_and_mono(self, tmp_path):
        from keytempo.input import AudioLoader

        path = tmp_path / "stereo.wav"
        stereo = np.stack([generate_silence(0.5, sr=22050)] * 2, axis=1)
        sf.write(str(path), stereo, 22050)

        audio, sr = AudioLoader().load(str(path))
        assert sr == 22050
        assert audio.ndim == 1

    def test_unsupported_format(self, tmp_path):
        from keytempo.input import AudioLoader

        dummy_file = tmp_path / "test.xyz"
        dummy_file.write_text("dummy content")

        with pytest.raises(ValueError, match="Unsupported format"):
            AudioLoader().load(str(dummy_file))

    def test_missing_file(self, tmp_path):
        from keytempo.input import AudioLoader

        with pytest.raises(FileNotFoundError):
            AudioLoader().load(str(tmp_path / "missing.wav"))
