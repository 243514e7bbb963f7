"""Global constants for Fourier Chords."""

# Pitch names
PITCH_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Audio processing defaults
DEFAULT_SR = 44100
DEFAULT_WINDOW_SIZE = 1024
DEFAULT_BLOCK_SIZE = 512

# Threshold ratios, applied fresh on every pass
MAGNITUDE_THRESHOLD_DIVISOR = 3.0  # of the spectrum maximum
PROMINENCE_THRESHOLD_DIVISOR = 4.0  # of the strongest candidate

# Returned by max_magnitude() for an empty spectrum
EMPTY_SPECTRUM_MAGNITUDE = 0.0

# Note table range (MIDI numbers)
NOTE_TABLE_MIDI_MIN = 12  # C0
NOTE_TABLE_MIDI_MAX = 111  # D#8
A4_FREQUENCY = 440.0
A4_MIDI = 69
