import dataclasses

import pytest

import chordlayers.chords
import chordlayers.layers
import chordlayers.session

from chordlayers.layers import InstrumentKind


def test_parse_kind () -> None:

	"""Kinds parse from their names, case-insensitively."""

	assert InstrumentKind.parse("drums") is InstrumentKind.DRUMS
	assert InstrumentKind.parse(" Bass ") is InstrumentKind.BASS
	assert InstrumentKind.parse(InstrumentKind.MELODY) is InstrumentKind.MELODY


def test_parse_unknown_kind () -> None:

	"""Unknown kinds raise ValueError naming the valid ones."""

	with pytest.raises(ValueError, match="Unknown instrument kind"):
		InstrumentKind.parse("kazoo")


def test_default_names_count_per_kind () -> None:

	"""New layers are numbered within their kind."""

	first = chordlayers.layers.new_layer("drums")
	bass = chordlayers.layers.new_layer("bass", existing=[first])
	second = chordlayers.layers.new_layer("drums", existing=[first, bass])

	assert first.name == "Drums 1"
	assert bass.name == "Bass 1"
	assert second.name == "Drums 2"


def test_generated_ids_are_unique () -> None:

	"""Generated layer ids do not repeat."""

	ids = {chordlayers.layers.new_layer("melody").id for _ in range(10)}

	assert len(ids) == 10


def test_layers_are_immutable () -> None:

	"""Layers are frozen; edits produce new layers."""

	layer = chordlayers.layers.new_layer("melody", pattern="C4", layer_id="7")

	with pytest.raises(dataclasses.FrozenInstanceError):
		layer.pattern = "D4"  # type: ignore[misc]

	edited = layer.with_pattern("D4 E4")

	assert edited.pattern == "D4 E4"
	assert edited.id == "7"
	assert layer.pattern == "C4"


def test_session_layer_editing () -> None:

	"""Sessions add and remove layers by returning new sessions."""

	session = chordlayers.session.Session(progression=chordlayers.chords.custom_progression(["C"]))
	drums = chordlayers.layers.new_layer("drums", "k s", layer_id="d")
	bass = chordlayers.layers.new_layer("bass", "C2", layer_id="b")

	session = session.with_layer(drums).with_layer(bass)
	assert [layer.id for layer in session.layers] == ["d", "b"]

	session = session.without_layer("d")
	assert [layer.id for layer in session.layers] == ["b"]
