"""Note-name to MIDI pitch conversion.

Note names are written ``<Letter>[#]<Octave>``, for example ``"C4"``,
``"A#3"`` or ``"G10"``. Convention: **C4 = 60** (Middle C), matching the MIDI
Manufacturers Association standard and most DAWs.

Only natural and sharp spellings are understood. The single flat chord in the
chord library (``"Bb"``) is stored already spelled with sharps, so nothing
upstream ever hands a flat to :func:`note_to_pitch`.

Module-level constants:
- `NOTE_NAME_TO_PC`: Maps note names (e.g., `"C"`, `"F#"`) to pitch classes (0-11)
- `PC_TO_NOTE_NAME`: Maps pitch classes to note names
"""

import logging
import re
import typing

import chordlayers.constants


logger = logging.getLogger(__name__)


NOTE_NAME_TO_PC: typing.Dict[str, int] = {
	"C": 0,
	"C#": 1,
	"D": 2,
	"D#": 3,
	"E": 4,
	"F": 5,
	"F#": 6,
	"G": 7,
	"G#": 8,
	"A": 9,
	"A#": 10,
	"B": 11,
}

PC_TO_NOTE_NAME: typing.List[str] = [
	"C",
	"C#",
	"D",
	"D#",
	"E",
	"F",
	"F#",
	"G",
	"G#",
	"A",
	"A#",
	"B",
]

_NOTE_PATTERN = re.compile(r"([A-G]#?)([0-9]+)")


def note_to_pitch (token: str) -> int:

	"""Convert a note name to a MIDI note number.

	Malformed input never raises: anything that is not a well-formed note
	name, or that names a note outside the MIDI range, resolves to Middle C
	(60). Pattern layers rely on this to keep typos from breaking playback or
	export.

	Parameters:
		token: Note name such as ``"C4"`` or ``"A#3"``.

	Returns:
		MIDI note number (0-127).

	Example:
		```python
		note_to_pitch("C4")   # → 60
		note_to_pitch("A#4")  # → 70
		note_to_pitch("Bb4")  # → 60 (flats are not parsed)
		```
	"""

	match = _NOTE_PATTERN.fullmatch(token)

	if match is None:
		logger.debug(f"Unrecognised note {token!r} - using {chordlayers.constants.FALLBACK_PITCH}")
		return chordlayers.constants.FALLBACK_PITCH

	name, octave = match.groups()
	pitch_class = NOTE_NAME_TO_PC.get(name)

	# E# and B# are not in the chromatic table.
	if pitch_class is None:
		logger.debug(f"Unsupported note spelling {token!r} - using {chordlayers.constants.FALLBACK_PITCH}")
		return chordlayers.constants.FALLBACK_PITCH

	pitch = (int(octave) + 1) * 12 + pitch_class

	if pitch > 127:
		logger.debug(f"Note {token!r} is above the MIDI range - using {chordlayers.constants.FALLBACK_PITCH}")
		return chordlayers.constants.FALLBACK_PITCH

	return pitch


def pitch_to_note (pitch: int) -> str:

	"""Return the sharp spelling of a MIDI note number (``60`` → ``"C4"``)."""

	if not 0 <= pitch <= 127:
		raise ValueError(f"MIDI pitch must be 0-127, got {pitch}")

	return f"{PC_TO_NOTE_NAME[pitch % 12]}{pitch // 12 - 1}"
