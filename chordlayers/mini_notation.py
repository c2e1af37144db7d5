import typing


Bar = typing.List[str]

BAR_SEPARATOR = "|"
REST = "-"


def parse (notation: str) -> typing.List[Bar]:

	"""
	Parse a pattern string into bars of tokens.

	A pattern is a sequence of bars separated by ``|``. Within a bar, tokens
	are separated by any run of whitespace and share the bar equally, so the
	number of tokens sets the bar's subdivision.

	**Syntax:**
	- `k s k s`: Four tokens in one bar (quarter notes).
	- `C4 E4 | G4`: Two bars, the second holding a single whole-bar note.
	- `-`: A rest.

	Tokens are not validated here: what a token means depends on the layer
	that owns the pattern (drum symbols or note names).

	Parameters:
		notation: The pattern string to parse.

	Returns:
		One list of tokens per bar. A bar with no tokens is an empty list and
		keeps its position, so bar numbers line up with the text.

	Example:
		```python
		parse("k - s - | k k s h")  # → [["k", "-", "s", "-"], ["k", "k", "s", "h"]]
		parse("C4 || E4")           # → [["C4"], [], ["E4"]]
		parse("")                   # → [[]]
		```
	"""

	return [_tokenize(segment) for segment in notation.split(BAR_SEPARATOR)]


def _tokenize (segment: str) -> Bar:

	"""
	Split one bar's text into tokens.
	"a  b c" -> ["a", "b", "c"]
	"""

	return [token for token in segment.strip().split() if token]


def is_empty (notation: str) -> bool:

	"""
	Return True when a pattern contains no tokens in any bar.
	"""

	return not any(parse(notation))
