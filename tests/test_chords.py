import pytest

import chordlayers.chords


def test_known_chord_pitches () -> None:

	"""Library chords resolve to their voiced pitches."""

	assert chordlayers.chords.chord_pitches("C") == [60, 64, 67]
	assert chordlayers.chords.chord_pitches("G") == [67, 71, 74]
	assert chordlayers.chords.chord_pitches("Am7") == [69, 72, 76, 79]


def test_flat_chord_is_pre_spelled_with_sharps () -> None:

	"""The Bb chord is stored as A#4 D5 F5 and resolves without flat parsing."""

	assert chordlayers.chords.chord_notes("Bb") == ("A#4", "D5", "F5")
	assert chordlayers.chords.chord_pitches("Bb") == [70, 74, 77]


def test_unknown_chord_falls_back_to_c_major () -> None:

	"""Unknown symbols sound as a C major triad."""

	chord = chordlayers.chords.get_chord("F#m9")

	assert chord.symbol == "F#m9"
	assert chord.notes == chordlayers.chords.DEFAULT_CHORD_NOTES
	assert chord.pitches() == [60, 64, 67]


def test_every_library_chord_has_three_or_four_notes () -> None:

	"""Chord voicings are triads or seventh chords."""

	for symbol, notes in chordlayers.chords.CHORD_NOTES.items():
		assert 3 <= len(notes) <= 4, symbol


def test_catalog_genres () -> None:

	"""The catalog offers four genres with three progressions each."""

	assert chordlayers.chords.GENRES == ["pop", "jazz", "electronic", "hiphop"]

	for genre in chordlayers.chords.GENRES:
		progressions = chordlayers.chords.progressions_for(genre)
		assert len(progressions) == 3
		assert all(progression.genre == genre for progression in progressions)


def test_catalog_chords_are_all_in_library () -> None:

	"""Catalog progressions only use chords the library can voice."""

	for progressions in chordlayers.chords.PROGRESSIONS.values():
		for progression in progressions:
			for symbol in progression.chords:
				assert symbol in chordlayers.chords.CHORD_NOTES


def test_find_progression () -> None:

	"""Progressions are found by genre and name."""

	progression = chordlayers.chords.find_progression("jazz", "ii-V-I")

	assert progression.chords == ("Dm7", "G7", "Cmaj7")
	assert progression.bar_count == 3
	assert progression.theory


def test_find_progression_unknown () -> None:

	"""Unknown genres and names raise KeyError."""

	with pytest.raises(KeyError):
		chordlayers.chords.find_progression("polka", "I-V")

	with pytest.raises(KeyError):
		chordlayers.chords.find_progression("pop", "I-II-III")


def test_custom_progression () -> None:

	"""Custom progressions keep the symbols as given and get a default name."""

	progression = chordlayers.chords.custom_progression(["C", "G", "Xyz"], genre="jazz")

	assert progression.chords == ("C", "G", "Xyz")
	assert progression.name == "C-G-Xyz"
	assert progression.genre == "jazz"
