import chordlayers.mini_notation


def test_two_bars ():

	"""Bar separators split the pattern; whitespace splits tokens."""

	bars = chordlayers.mini_notation.parse("k - s - | k k s h")

	assert bars == [["k", "-", "s", "-"], ["k", "k", "s", "h"]]


def test_empty_string ():

	"""An empty pattern is a single empty bar."""

	assert chordlayers.mini_notation.parse("") == [[]]


def test_whitespace_only ():

	"""A whitespace-only pattern is a single empty bar."""

	assert chordlayers.mini_notation.parse("   \t ") == [[]]


def test_consecutive_separators_keep_positions ():

	"""Empty bars between separators keep later bars at their index."""

	bars = chordlayers.mini_notation.parse("C4 || E4 |")

	assert bars == [["C4"], [], ["E4"], []]


def test_whitespace_runs ():

	"""Runs of mixed whitespace count as one separator."""

	bars = chordlayers.mini_notation.parse("  C4 \t  E4\nG4  ")

	assert bars == [["C4", "E4", "G4"]]


def test_tokens_not_validated ():

	"""Any token text is passed through untouched."""

	bars = chordlayers.mini_notation.parse("zz Q9 ~")

	assert bars == [["zz", "Q9", "~"]]


def test_is_empty ():

	"""Only patterns with no tokens at all are empty."""

	assert chordlayers.mini_notation.is_empty("")
	assert chordlayers.mini_notation.is_empty(" | | ")
	assert not chordlayers.mini_notation.is_empty("-")
	assert not chordlayers.mini_notation.is_empty("| k")
