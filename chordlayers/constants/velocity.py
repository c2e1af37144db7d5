"""MIDI velocity constants.

Velocity is the MIDI attack strength (0-127). Chords and pitched layers play
softer than drum hits.
"""

# Primary defaults
DEFAULT_VELOCITY = 80           # Melody and bass notes
DEFAULT_CHORD_VELOCITY = 80     # Every chord tone
DEFAULT_DRUM_VELOCITY = 100     # Kick, snare and hi-hat hits

# Note-off messages always carry zero velocity
NOTE_OFF_VELOCITY = 0

# MIDI standard range
MIN_VELOCITY = 0
MAX_VELOCITY = 127
