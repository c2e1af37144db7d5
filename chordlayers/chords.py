"""Chord voicings and the genre progression catalog.

This module holds the static harmony data: a table of chord symbols and the
note names that voice them, and a catalog of progressions grouped by genre.

Module-level constants:
- `CHORD_NOTES`: Maps chord symbols (e.g., `"Am"`, `"G7"`) to note names
- `DEFAULT_CHORD_NOTES`: C-major triad used for unknown chord symbols
- `PROGRESSIONS`: Maps genre names to their `Progression` catalog
- `GENRES`: Catalog genre names in display order

Unknown chord symbols are not an error: they sound as a C-major triad.
"""

import dataclasses
import logging
import typing

import chordlayers.pitch


logger = logging.getLogger(__name__)


CHORD_NOTES: typing.Dict[str, typing.Tuple[str, ...]] = {
	"C": ("C4", "E4", "G4"),
	"Dm": ("D4", "F4", "A4"),
	"Em": ("E4", "G4", "B4"),
	"F": ("F4", "A4", "C5"),
	"G": ("G4", "B4", "D5"),
	"Am": ("A4", "C5", "E5"),
	"Bb": ("A#4", "D5", "F5"),
	"Cmaj7": ("C4", "E4", "G4", "B4"),
	"Dm7": ("D4", "F4", "A4", "C5"),
	"Em7": ("E4", "G4", "B4", "D5"),
	"G7": ("G4", "B4", "D5", "F5"),
	"Am7": ("A4", "C5", "E5", "G5"),
}

DEFAULT_CHORD_NOTES: typing.Tuple[str, ...] = ("C4", "E4", "G4")


@dataclasses.dataclass(frozen=True)
class Chord:

	"""
	A chord symbol and the note names that voice it.
	"""

	symbol: str
	notes: typing.Tuple[str, ...]


	def pitches (self) -> typing.List[int]:

		"""
		Return the MIDI note numbers of this chord's notes.
		"""

		return [chordlayers.pitch.note_to_pitch(note) for note in self.notes]


@dataclasses.dataclass(frozen=True)
class Progression:

	"""A named chord sequence, one chord per bar.

	Attributes:
		name: Display name, usually the roman-numeral formula (``"ii-V-I"``).
		genre: Catalog genre the progression belongs to.
		chords: Chord symbols in playing order.
		theory: One-line description of where the progression is used.
	"""

	name: str
	genre: str
	chords: typing.Tuple[str, ...]
	theory: str = ""


	@property
	def bar_count (self) -> int:

		"""
		Number of bars the progression lasts.
		"""

		return len(self.chords)


def _catalog (genre: str, entries: typing.List[typing.Tuple[str, typing.List[str], str]]) -> typing.List[Progression]:

	"""Build a genre's progression list from (name, chords, theory) tuples."""

	return [Progression(name=name, genre=genre, chords=tuple(chords), theory=theory) for name, chords, theory in entries]


PROGRESSIONS: typing.Dict[str, typing.List[Progression]] = {
	"pop": _catalog("pop", [
		("I-V-vi-IV", ["C", "G", "Am", "F"], 'The "pop-punk progression" - used in countless hits'),
		("vi-IV-I-V", ["Am", "F", "C", "G"], "Sensitive and emotional - common in ballads"),
		("I-IV-V", ["C", "F", "G"], "Classic three-chord progression"),
	]),
	"jazz": _catalog("jazz", [
		("ii-V-I", ["Dm7", "G7", "Cmaj7"], "The fundamental jazz progression"),
		("I-vi-ii-V", ["Cmaj7", "Am7", "Dm7", "G7"], "Rhythm changes turnaround"),
		("iii-vi-ii-V", ["Em7", "Am7", "Dm7", "G7"], "Descending circle progression"),
	]),
	"electronic": _catalog("electronic", [
		("i-VI-III-VII", ["Am", "F", "C", "G"], "Minor key house progression"),
		("i-v-VI-IV", ["Am", "Em", "F", "Dm"], "Dark electronic vibe"),
		("I-bVII-IV", ["C", "Bb", "F"], "Mixolydian mode - uplifting EDM"),
	]),
	"hiphop": _catalog("hiphop", [
		("i-IV-v", ["Am", "Dm", "Em"], "Simple minor progression for beats"),
		("i-VI-III-VII", ["Am", "F", "C", "G"], "Natural minor progression"),
		("I-V", ["C", "G"], "Minimal two-chord groove"),
	]),
}

GENRES: typing.List[str] = list(PROGRESSIONS)

DEFAULT_GENRE = "pop"


def get_chord (symbol: str) -> Chord:

	"""Look up a chord symbol, falling back to a C-major triad.

	Parameters:
		symbol: Chord symbol from the library (e.g. ``"Am"``, ``"Cmaj7"``).

	Returns:
		The `Chord` for the symbol. Unknown symbols keep their symbol but carry
		`DEFAULT_CHORD_NOTES`.
	"""

	notes = CHORD_NOTES.get(symbol)

	if notes is None:
		logger.debug(f"Unknown chord {symbol!r} - using a C major triad")
		notes = DEFAULT_CHORD_NOTES

	return Chord(symbol=symbol, notes=notes)


def chord_notes (symbol: str) -> typing.Tuple[str, ...]:

	"""
	Return the note names for a chord symbol (C-major triad if unknown).
	"""

	return get_chord(symbol).notes


def chord_pitches (symbol: str) -> typing.List[int]:

	"""
	Return the MIDI note numbers for a chord symbol (C-major triad if unknown).
	"""

	return get_chord(symbol).pitches()


def progressions_for (genre: str) -> typing.List[Progression]:

	"""Return the catalog progressions for a genre.

	Raises:
		KeyError: If the genre is not in the catalog.
	"""

	if genre not in PROGRESSIONS:
		raise KeyError(f"Unknown genre: {genre!r}. Expected one of {GENRES}")

	return list(PROGRESSIONS[genre])


def find_progression (genre: str, name: str) -> Progression:

	"""Return the catalog progression called *name* within *genre*.

	Raises:
		KeyError: If the genre or the progression name is not in the catalog.
	"""

	for progression in progressions_for(genre):
		if progression.name == name:
			return progression

	names = [progression.name for progression in PROGRESSIONS[genre]]
	raise KeyError(f"Unknown {genre} progression: {name!r}. Expected one of {names}")


def custom_progression (chords: typing.Sequence[str], genre: str = DEFAULT_GENRE, name: typing.Optional[str] = None) -> Progression:

	"""Build a progression from an arbitrary chord list.

	Symbols are kept as given; unknown ones sound as a C-major triad when
	the progression is played or exported.

	Example:
		```python
		custom_progression(["C", "G"])  # Progression(name="C-G", genre="pop", ...)
		```
	"""

	chords = tuple(chords)

	if name is None:
		name = "-".join(chords)

	return Progression(name=name, genre=genre, chords=chords)
