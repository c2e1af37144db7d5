import dataclasses
import logging
import os
import pathlib
import typing

import chordlayers.events
import chordlayers.layers
import chordlayers.midi_file
import chordlayers.mini_notation
import chordlayers.session
import chordlayers.timeline


logger = logging.getLogger(__name__)

CHORDS_FILENAME = "chords.mid"
CHORDS_TRACK_NAME = "Chords"


@dataclasses.dataclass(frozen=True)
class ExportedFile:

	"""
	A named Standard MIDI File, ready to be saved or offered for download.
	"""

	name: str
	data: bytes


def layer_filename (layer: chordlayers.layers.Layer) -> str:

	"""Return the file name for an exported layer, e.g. ``"drums_3.mid"``.

	Raises:
		ValueError: If the layer id would escape the output directory.
	"""

	if any(sep in layer.id for sep in ("/", "\\")) or layer.id in ("", ".", ".."):
		raise ValueError(f"Layer id {layer.id!r} cannot be used in a file name")

	return f"{layer.kind.value}_{layer.id}.mid"


def export_layer (layer: chordlayers.layers.Layer, bpm: float) -> typing.Optional[ExportedFile]:

	"""Encode one layer as its own MIDI file.

	Returns:
		The file, or None when the layer's pattern holds no tokens at all.
	"""

	if chordlayers.mini_notation.is_empty(layer.pattern):
		logger.info(f"Skipping empty layer {layer.name or layer.id!r}")
		return None

	track_name = layer.name or layer.kind.value.capitalize()
	events = chordlayers.timeline.layer_track(layer)

	return ExportedFile(layer_filename(layer), chordlayers.midi_file.encode(track_name, events, bpm))


def export_session (session: chordlayers.session.Session) -> typing.List[ExportedFile]:

	"""Encode a session as separate MIDI files.

	The progression (when set) becomes ``chords.mid``; each layer with a
	non-empty pattern becomes ``<kind>_<id>.mid``. Every file is a complete,
	stand-alone format 1 file with its own tempo track.

	Raises:
		InvalidTempo: If the session's bpm is missing or not positive.
		ValueError: If two layers would export under the same file name.
	"""

	chordlayers.events.validate_bpm(session.bpm)

	files: typing.List[ExportedFile] = []

	if session.progression is not None:
		events = chordlayers.timeline.chord_track(session.progression)
		files.append(ExportedFile(CHORDS_FILENAME, chordlayers.midi_file.encode(CHORDS_TRACK_NAME, events, session.bpm)))

	for layer in session.layers:
		exported = export_layer(layer, session.bpm)
		if exported is not None:
			files.append(exported)

	_check_unique_names(files)

	return files


def _check_unique_names (files: typing.Iterable[ExportedFile]) -> None:

	"""Raise ValueError if two files would be saved under the same name."""

	seen: typing.Set[str] = set()

	for exported in files:
		if exported.name in seen:
			raise ValueError(f"Two exported files are named {exported.name!r}; layer ids must be unique")
		seen.add(exported.name)


def write_files (files: typing.Iterable[ExportedFile], directory: typing.Union[str, os.PathLike]) -> typing.List[pathlib.Path]:

	"""Save exported files into *directory* (created if missing).

	Returns:
		The paths written, in order.
	"""

	files = list(files)
	_check_unique_names(files)

	directory = pathlib.Path(directory)
	directory.mkdir(parents=True, exist_ok=True)

	paths: typing.List[pathlib.Path] = []

	for exported in files:
		path = directory / exported.name
		path.write_bytes(exported.data)
		logger.info(f"Saved {path} ({len(exported.data)} bytes)")
		paths.append(path)

	return paths
