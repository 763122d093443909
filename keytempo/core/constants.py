"""Global constants for keytempo."""

# Pitch names (sharps only)
PITCH_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
MODES = ("major", "minor")

# Onset-energy analysis (tempo)
ENERGY_FRAME_SIZE = 1024
ENERGY_HOP = 512
MIN_BPM = 60.0
MAX_BPM = 200.0

# Spectral analysis (key)
FFT_SIZE = 4096
FFT_HOP = 1024
CHROMA_MIN_FREQ = 50.0  # Hz
CHROMA_MAX_FREQ = 2000.0  # Hz

# Tuning reference
A4_FREQ = 440.0
A4_MIDI = 69

# Krumhansl-Schmuckler key profiles
KRUMHANSL_MAJOR = (6.35, 2.23, 3.48, 2.33, 4.38, 4.09, 2.52, 5.19, 2.39, 3.66, 2.29, 2.88)
KRUMHANSL_MINOR = (6.33, 2.68, 3.52, 5.38, 2.60, 3.53, 2.54, 4.75, 3.98, 2.69, 3.34, 3.17)

# Input defaults
DEFAULT_MAX_SECONDS = 20.0
