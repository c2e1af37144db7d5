import dataclasses
import enum
import itertools
import typing


class InstrumentKind (enum.Enum):

	"""
	The instrument a layer plays. Decides how the layer's tokens are read.
	"""

	MELODY = "melody"
	BASS = "bass"
	DRUMS = "drums"


	@classmethod
	def parse (cls, value: typing.Union[str, "InstrumentKind"]) -> "InstrumentKind":

		"""Return the kind named by *value* (case-insensitive).

		Raises:
			ValueError: If *value* does not name a kind.
		"""

		if isinstance(value, InstrumentKind):
			return value

		try:
			return cls(str(value).strip().lower())
		except ValueError:
			expected = [kind.value for kind in cls]
			raise ValueError(f"Unknown instrument kind: {value!r}. Expected one of {expected}") from None


@dataclasses.dataclass(frozen=True)
class Layer:

	"""An independent pattern track played alongside the progression.

	Attributes:
		id: Identifier, used in exported file names.
		kind: Instrument kind that interprets the pattern tokens.
		pattern: Raw pattern text (see :mod:`chordlayers.mini_notation`).
		name: Display name, written as the MIDI track name on export.
	"""

	id: str
	kind: InstrumentKind
	pattern: str = ""
	name: str = ""


	def with_pattern (self, pattern: str) -> "Layer":

		"""
		Return a copy of this layer with a new pattern.
		"""

		return dataclasses.replace(self, pattern=pattern)


_layer_ids = itertools.count(1)


def default_layer_name (kind: InstrumentKind, existing: typing.Iterable[Layer]) -> str:

	"""Name a new layer after its kind and how many of that kind exist.

	Example:
		```python
		default_layer_name(InstrumentKind.DRUMS, [])             # → "Drums 1"
		default_layer_name(InstrumentKind.DRUMS, [drums_layer])  # → "Drums 2"
		```
	"""

	count = sum(1 for layer in existing if layer.kind is kind)

	return f"{kind.value.capitalize()} {count + 1}"


def new_layer (
	kind: typing.Union[str, InstrumentKind],
	pattern: str = "",
	existing: typing.Iterable[Layer] = (),
	name: typing.Optional[str] = None,
	layer_id: typing.Optional[str] = None
) -> Layer:

	"""Create a layer, filling in a default name and a fresh id.

	Parameters:
		kind: Instrument kind, as an enum member or its name.
		pattern: Initial pattern text.
		existing: Layers already in the arrangement (used for the default name).
		name: Explicit display name.
		layer_id: Explicit id. Generated ids are unique within the process.
	"""

	kind = InstrumentKind.parse(kind)
	existing = list(existing)

	if name is None:
		name = default_layer_name(kind, existing)

	if layer_id is None:
		layer_id = str(next(_layer_ids))

	return Layer(id=layer_id, kind=kind, pattern=pattern, name=name)
