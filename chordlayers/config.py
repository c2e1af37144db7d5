"""YAML configuration for arrangements.

A configuration file describes one session::

    bpm: 96
    genre: jazz
    progression: ii-V-I          # a catalog name within the genre...
    # chords: [Dm7, G7, Cmaj7]   # ...or an explicit chord list
    layers:
      - kind: drums
        pattern: "k h s h | k k s h"
      - kind: bass
        name: Walking bass
        pattern: "D3 F3 A3 C4 | G2 B2 D3 F3 | C3 E3 G3 B3"
    output_dir: out
    midi:
      device_name: null

Every key is optional. Layers without a ``name`` get the default names
(``"Drums 1"``). Layers without an ``id`` get the lowest free numeric id
(``1``, ``2``, ...) in file order; explicit ids must be unique and may not
contain path separators, since they end up in exported file names.
"""

import logging
import os
import typing

import yaml

import chordlayers.chords
import chordlayers.layers
import chordlayers.session


logger = logging.getLogger(__name__)

DEFAULT_BPM = 120
DEFAULT_OUTPUT_DIR = "."


class ConfigError (ValueError):

	"""
	Raised when a configuration file is malformed or names unknown items.
	"""


def load_config (config_path: str = 'config.yaml') -> dict:

	"""
	Load configuration from a YAML file.

	A missing file is not an error: a warning is logged and the defaults
	apply.

	Raises:
		ConfigError: If the file is not valid YAML or not a mapping.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		try:
			config = yaml.safe_load(f)
		except yaml.YAMLError as e:
			raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

	if config is None:
		return {}

	if not isinstance(config, dict):
		raise ConfigError(f"{config_path} must contain a mapping at the top level")

	return config


def _progression_from_config (config: dict, genre: str) -> typing.Optional[chordlayers.chords.Progression]:

	"""Resolve the ``progression`` or ``chords`` key, if either is present."""

	name = config.get('progression')
	chords = config.get('chords')

	if name is not None and chords is not None:
		raise ConfigError("Use either 'progression' or 'chords', not both")

	if name is not None:
		try:
			return chordlayers.chords.find_progression(genre, str(name))
		except KeyError as e:
			raise ConfigError(e.args[0]) from e

	if chords is not None:
		if not isinstance(chords, list):
			raise ConfigError("'chords' must be a list of chord symbols")
		return chordlayers.chords.custom_progression([str(chord) for chord in chords], genre=genre)

	return None


def _layers_from_config (entries: typing.Any) -> typing.Tuple[chordlayers.layers.Layer, ...]:

	"""Build layers from the ``layers`` list."""

	if entries is None:
		return ()

	if not isinstance(entries, list):
		raise ConfigError("'layers' must be a list")

	for index, entry in enumerate(entries, 1):
		if not isinstance(entry, dict) or 'kind' not in entry:
			raise ConfigError(f"Layer {index} must be a mapping with a 'kind'")

	# Explicit ids are reserved first so generated ones never collide with them.
	explicit_ids: typing.Set[str] = set()

	for index, entry in enumerate(entries, 1):

		if entry.get('id') is None:
			continue

		layer_id = _layer_id(entry['id'], index)

		if layer_id in explicit_ids:
			raise ConfigError(f"Layer {index}: duplicate id {layer_id!r}")

		explicit_ids.add(layer_id)

	layers: typing.List[chordlayers.layers.Layer] = []
	used_ids = set(explicit_ids)
	next_id = 1

	for index, entry in enumerate(entries, 1):

		try:
			kind = chordlayers.layers.InstrumentKind.parse(entry['kind'])
		except ValueError as e:
			raise ConfigError(f"Layer {index}: {e}") from e

		pattern = entry.get('pattern', "")

		if pattern is None:
			pattern = ""

		if not isinstance(pattern, str):
			raise ConfigError(f"Layer {index}: 'pattern' must be a string, got {pattern!r}")

		if entry.get('id') is not None:
			layer_id = _layer_id(entry['id'], index)
		else:
			while str(next_id) in used_ids:
				next_id += 1
			layer_id = str(next_id)
			used_ids.add(layer_id)

		name = entry.get('name')

		layers.append(chordlayers.layers.new_layer(
			kind,
			pattern = pattern,
			existing = layers,
			name = str(name) if name is not None else None,
			layer_id = layer_id
		))

	return tuple(layers)


def _layer_id (value: typing.Any, index: int) -> str:

	"""Return a layer id as text, rejecting ids that are unsafe in file names."""

	layer_id = str(value).strip()

	if not layer_id or layer_id in (".", "..") or any(sep in layer_id for sep in ("/", "\\")):
		raise ConfigError(f"Layer {index}: invalid id {value!r}")

	return layer_id


def session_from_config (config: dict) -> chordlayers.session.Session:

	"""Build a session from a loaded configuration mapping.

	Raises:
		ConfigError: For unknown genres, progressions or layer kinds, or
			malformed sections.
	"""

	genre = str(config.get('genre', chordlayers.chords.DEFAULT_GENRE))

	if genre not in chordlayers.chords.PROGRESSIONS:
		raise ConfigError(f"Unknown genre: {genre!r}. Expected one of {chordlayers.chords.GENRES}")

	session = chordlayers.session.Session(
		progression = _progression_from_config(config, genre),
		layers = _layers_from_config(config.get('layers')),
		bpm = config.get('bpm', DEFAULT_BPM),
		genre = genre
	)

	logger.debug(f"Loaded session: {session}")

	return session


def load_session (config_path: str) -> chordlayers.session.Session:

	"""
	Load a configuration file and build its session.
	"""

	return session_from_config(load_config(config_path))


def output_dir (config: dict) -> str:

	"""
	Return the configured export directory.
	"""

	return str(config.get('output_dir') or DEFAULT_OUTPUT_DIR)


def midi_device (config: dict) -> typing.Optional[str]:

	"""
	Return the configured MIDI output device name, if any.
	"""

	midi = config.get('midi') or {}

	if not isinstance(midi, dict):
		raise ConfigError("'midi' must be a mapping")

	return midi.get('device_name')
