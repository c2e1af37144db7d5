import dataclasses
import typing

import chordlayers.chords
import chordlayers.layers


@dataclasses.dataclass(frozen=True)
class Session:

	"""A snapshot of everything needed to play or export an arrangement.

	Sessions are immutable: editing an arrangement means building a new one
	(``dataclasses.replace`` works well for this).

	Attributes:
		progression: Chord progression, or None for layers only.
		layers: Pattern layers in arrangement order.
		bpm: Tempo in beats per minute. Checked when the session is played
			or exported, not here.
		genre: Genre used to pick voice presets for live playback.
	"""

	progression: typing.Optional[chordlayers.chords.Progression] = None
	layers: typing.Tuple[chordlayers.layers.Layer, ...] = ()
	bpm: float = 120
	genre: str = chordlayers.chords.DEFAULT_GENRE


	def with_layer (self, layer: chordlayers.layers.Layer) -> "Session":

		"""
		Return a copy of this session with *layer* appended.
		"""

		return dataclasses.replace(self, layers=self.layers + (layer,))


	def without_layer (self, layer_id: str) -> "Session":

		"""
		Return a copy of this session without the layer whose id is *layer_id*.
		"""

		return dataclasses.replace(self, layers=tuple(layer for layer in self.layers if layer.id != layer_id))
