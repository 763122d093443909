"""Generate synthetic signals (and sample WAV files) for testing."""

import numpy as np
import os
from scipy.io import wavfile

# Ensure examples directory exists
EXAMPLES_DIR = os.path.join(os.path.dirname(__file__), "..", "examples")

SR = 44100

# C4, E4, G4, C5
C_MAJOR_CHORD = [261.63, 329.63, 392.00, 523.25]


def generate_sine_wave(freq: float, duration: float, sr: int = SR) -> np.ndarray:
    """Generate a sine wave at given frequency."""
    t = np.arange(int(sr * duration)) / sr
    return np.sin(2 * np.pi * freq * t).astype(np.float32)


def generate_chord(frequencies: list, duration: float, sr: int = SR) -> np.ndarray:
    """Generate a chord by summing equal-amplitude sine waves."""
    voices = [generate_sine_wave(f, duration, sr) for f in frequencies]
    chord = np.sum(voices, axis=0)

    # Normalize to avoid clipping
    max_abs = np.max(np.abs(chord)) or 1.0
    return (chord / max_abs).astype(np.float32)


def generate_click_train(bpm: float, duration: float, sr: int = SR) -> np.ndarray:
    """Generate single-sample clicks, one per beat, starting at sample 0."""
    audio = np.zeros(int(sr * duration), dtype=np.float32)
    period = 60.0 * sr / bpm
    positions = np.round(np.arange(0, len(audio), period)).astype(int)
    audio[positions[positions < len(audio)]] = 1.0
    return audio


def generate_silence(duration: float, sr: int = SR) -> np.ndarray:
    """Generate silence."""
    return np.zeros(int(sr * duration), dtype=np.float32)


def save_wav(filename: str, audio: np.ndarray, sr: int = SR, directory: str = EXAMPLES_DIR) -> str:
    """Save audio as 16-bit WAV file."""
    os.makedirs(directory, exist_ok=True)
    audio_16bit = (np.clip(audio, -1.0, 1.0) * 32767).astype(np.int16)
    filepath = os.path.join(directory, filename)
    wavfile.write(filepath, sr, audio_16bit)
    return filepath


def main():
    # 1. Click train at 120 BPM - 10 seconds
    print("Generating clicks_120bpm.wav...")
    print("Created:", save_wav("clicks_120bpm.wav", generate_click_train(120.0, 10.0)))

    # 2. Sustained C major chord (C4 E4 G4 C5) - 3 seconds
    print("Generating c_major_chord.wav...")
    print("Created:", save_wav("c_major_chord.wav", generate_chord(C_MAJOR_CHORD, 3.0)))

    # 3. Single A4 note (440 Hz) - 2 seconds
    print("Generating single_a4.wav...")
    print("Created:", save_wav("single_a4.wav", generate_sine_wave(440.0, 2.0)))

    # 4. Silence (for edge case testing)
    print("Generating silence.wav...")
    print("Created:", save_wav("silence.wav", generate_silence(2.0)))

    print("\nAll test audio files generated!")


if __name__ == "__main__":
    main()
