"""
chordlayers - chord progressions and pattern layers to MIDI.

Pick a chord progression, stack a few pattern layers on top of it (drums,
bass, melody), then play the result live or export it as Standard MIDI
Files. Layers are written in a tiny text notation: tokens separated by
spaces, bars separated by ``|``::

    drums:   "k h s h | k k s h"
    bass:    "C2 - C2 G2 | A1 - A1 E2"

Every bar is split evenly between its tokens, so the number of tokens sets
the rhythm. ``-`` is a rest; drum layers understand ``k`` (kick), ``s``
(snare) and ``h`` (closed hi-hat).

What it does:

- **Byte-exact export.** Each progression or layer becomes its own format 1
  MIDI file at 480 ticks per quarter note, with a tempo track and a named
  note track. Output is deterministic.
- **Live playback.** A cooperative asyncio transport loops the arrangement
  over the progression's length and drives a MIDI output port, with
  per-genre General MIDI programs. Stopping revokes every pending note.
- **Genre catalog.** Pop, jazz, electronic and hip-hop progressions, each
  with a short note on where it is used.
- **Forgiving input.** Malformed notes play as Middle C, unknown chords as
  C major, empty bars stay silent. Only a missing or non-positive tempo is
  an error.

Minimal example:

    ```python
    import chordlayers

    session = chordlayers.Session(
        progression = chordlayers.find_progression("pop", "I-V-vi-IV"),
        layers = (chordlayers.new_layer("drums", "k h s h | k k s h"),),
        bpm = 120,
    )

    for exported in chordlayers.export_session(session):
        print(exported.name, len(exported.data))
    ```

Command line: ``python -m chordlayers export session.yaml --out out/``.

Package-level exports: ``Session``, ``Layer``, ``InstrumentKind``,
``new_layer``, ``find_progression``, ``custom_progression``,
``export_session``, ``Player``, ``InvalidTempo``.
"""

import chordlayers.chords
import chordlayers.events
import chordlayers.export
import chordlayers.layers
import chordlayers.player
import chordlayers.session


Session = chordlayers.session.Session
Layer = chordlayers.layers.Layer
InstrumentKind = chordlayers.layers.InstrumentKind
new_layer = chordlayers.layers.new_layer
find_progression = chordlayers.chords.find_progression
custom_progression = chordlayers.chords.custom_progression
export_session = chordlayers.export.export_session
Player = chordlayers.player.Player
InvalidTempo = chordlayers.events.InvalidTempo
