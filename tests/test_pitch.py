import pytest

import chordlayers.pitch


@pytest.mark.parametrize("token, expected", [
	("C4", 60),
	("A4", 69),
	("A#4", 70),
	("C0", 12),
	("B3", 59),
	("G9", 127),
	("C10", 60),
])
def test_note_to_pitch (token: str, expected: int) -> None:

	"""Note names map to (octave + 1) * 12 + pitch class."""

	assert chordlayers.pitch.note_to_pitch(token) == expected


@pytest.mark.parametrize("token", ["Z9", "", "c4", "Bb4", "C#", "4", "C4 ", "H2", "E#4", "B#3"])
def test_malformed_tokens_fall_back_to_middle_c (token: str) -> None:

	"""Anything that is not a sharp/natural note name resolves to 60."""

	assert chordlayers.pitch.note_to_pitch(token) == 60


def test_out_of_range_falls_back () -> None:

	"""Notes above G9 are outside the MIDI range and resolve to 60."""

	assert chordlayers.pitch.note_to_pitch("G#9") == 60
	assert chordlayers.pitch.note_to_pitch("A12") == 60


def test_pitch_to_note () -> None:

	"""Pitches spell back with sharps."""

	assert chordlayers.pitch.pitch_to_note(60) == "C4"
	assert chordlayers.pitch.pitch_to_note(70) == "A#4"
	assert chordlayers.pitch.pitch_to_note(127) == "G9"


def test_pitch_to_note_rejects_out_of_range () -> None:

	"""Pitches outside 0-127 raise ValueError."""

	with pytest.raises(ValueError):
		chordlayers.pitch.pitch_to_note(128)
