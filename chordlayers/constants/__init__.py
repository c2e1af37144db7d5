"""Constants for chordlayers.

This package contains three sets of constants:

- ``chordlayers.constants`` - Tick-based MIDI timing (this module)
- ``chordlayers.constants.velocity`` - MIDI velocity constants
- ``chordlayers.constants.gm_drums`` - General MIDI drum notes used by drum layers

All export timing is expressed in **ticks** at 480 ticks per quarter note,
the division written into every exported file header. Bars are always four
beats long (4/4 is assumed throughout), so one bar is 1920 ticks.
"""

# MIDI file resolution (header division)
MIDI_TICKS_PER_QUARTER = 480

BEATS_PER_BAR = 4
TICKS_PER_BAR = MIDI_TICKS_PER_QUARTER * BEATS_PER_BAR

# Fraction of each pattern slot that a note sounds for.
NOTE_LENGTH_RATIO = 0.8

# Shortest note written to a file, in ticks.
MIN_NOTE_TICKS = 1

# Pitch used whenever a note name cannot be resolved (Middle C).
FALLBACK_PITCH = 60
