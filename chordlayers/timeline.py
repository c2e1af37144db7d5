"""Turn a progression and its layers into timed note events.

Two time domains are produced from the same bar arithmetic:

- **Ticks** (:func:`chord_track`, :func:`layer_track`) for MIDI export, at
  480 ticks per quarter note and 1920 ticks per bar. Slot widths are
  truncated to whole ticks.
- **Seconds** (:func:`build_playback` and friends) for live playback, where
  a bar lasts ``(60 / bpm) * 4`` seconds and slots are exact fractions of it.

Every bar is split evenly between its tokens, so ``"k s"`` plays half notes
and ``"k s k s"`` quarter notes. Layers index their own bars from zero and
never wrap to match the progression's length.
"""

import dataclasses
import logging
import math
import typing

import chordlayers.chords
import chordlayers.constants
import chordlayers.constants.gm_drums
import chordlayers.constants.velocity
import chordlayers.events
import chordlayers.layers
import chordlayers.mini_notation
import chordlayers.pitch

from chordlayers.events import Event, EventKind
from chordlayers.layers import InstrumentKind


logger = logging.getLogger(__name__)

# Bars assumed for the playback loop when no progression is selected.
DEFAULT_LOOP_BARS = 4

CHORD_ROUTE = "chords"


@dataclasses.dataclass(frozen=True)
class PlaybackEvent:

	"""A note (or chord) to sound at a time offset from transport start.

	Attributes:
		time: Offset from transport start in seconds.
		route: Routing key telling the voice set which instrument plays it
			(``"chords"``, ``"bass"``, ``"melody"``, ``"kick"``, ``"snare"``, ``"hihat"``).
		pitches: MIDI note numbers; several for chords, one otherwise.
		duration: How long the note sounds, in seconds.
		velocity: MIDI velocity (0-127).
	"""

	time: float
	route: str
	pitches: typing.Tuple[int, ...]
	duration: float
	velocity: int


@dataclasses.dataclass(frozen=True)
class _Hit:

	"""A pattern token resolved for a particular instrument kind."""

	pitch: int
	route: str
	velocity: int


def _resolve_token (kind: InstrumentKind, token: str) -> typing.Optional[_Hit]:

	"""Interpret a pattern token for a layer kind, or return None for a rest."""

	if kind is InstrumentKind.DRUMS:
		pitch = chordlayers.constants.gm_drums.DRUM_SYMBOL_MAP.get(token)
		if pitch is None:
			return None
		route = chordlayers.constants.gm_drums.DRUM_SYMBOL_ROUTE[token]
		return _Hit(pitch, route, chordlayers.constants.velocity.DEFAULT_DRUM_VELOCITY)

	elif kind is InstrumentKind.BASS or kind is InstrumentKind.MELODY:
		if token == chordlayers.mini_notation.REST:
			return None
		pitch = chordlayers.pitch.note_to_pitch(token)
		return _Hit(pitch, kind.value, chordlayers.constants.velocity.DEFAULT_VELOCITY)

	raise ValueError(f"Unhandled instrument kind: {kind!r}")


def sort_events (events: typing.Iterable[Event]) -> typing.List[Event]:

	"""
	Return events ordered by tick; events on the same tick keep their order.
	"""

	return sorted(events, key=lambda event: event.tick)


def note_ticks (slot_ticks: int) -> int:

	"""Return the sounding length of a note filling a slot of *slot_ticks*.

	Notes sound for 80% of their slot, truncated to whole ticks and never
	shorter than one tick.
	"""

	return max(chordlayers.constants.MIN_NOTE_TICKS, math.floor(slot_ticks * chordlayers.constants.NOTE_LENGTH_RATIO))


def chord_track (progression: typing.Optional[chordlayers.chords.Progression]) -> typing.List[Event]:

	"""Generate note events for a progression, one chord per bar.

	Each chord tone starts on its bar's first tick at velocity 80 and stops
	exactly one bar later.

	Example:
		```python
		events = chord_track(custom_progression(["C", "G"]))
		# C4 E4 G4 on at 0 and off at 1920, G4 B4 D5 on at 1920 and off at 3840
		```
	"""

	events: typing.List[Event] = []

	if progression is None:
		return events

	ticks_per_bar = chordlayers.constants.TICKS_PER_BAR

	for bar_index, symbol in enumerate(progression.chords):

		start_tick = bar_index * ticks_per_bar

		for pitch in chordlayers.chords.chord_pitches(symbol):
			events.append(Event(start_tick, EventKind.NOTE_ON, pitch, chordlayers.constants.velocity.DEFAULT_CHORD_VELOCITY))
			events.append(Event(start_tick + ticks_per_bar, EventKind.NOTE_OFF, pitch, chordlayers.constants.velocity.NOTE_OFF_VELOCITY))

	return events


def layer_track (layer: chordlayers.layers.Layer) -> typing.List[Event]:

	"""Generate note events for a layer's pattern.

	For bar ``b`` holding ``n`` tokens, token ``j`` starts at
	``b * 1920 + j * (1920 // n)``. Rests and empty bars produce nothing.
	"""

	events: typing.List[Event] = []
	ticks_per_bar = chordlayers.constants.TICKS_PER_BAR

	for bar_index, bar in enumerate(chordlayers.mini_notation.parse(layer.pattern)):

		if not bar:
			continue

		slot_ticks = ticks_per_bar // len(bar)
		duration = note_ticks(slot_ticks)

		for item_index, token in enumerate(bar):

			hit = _resolve_token(layer.kind, token)

			if hit is None:
				continue

			start_tick = bar_index * ticks_per_bar + item_index * slot_ticks

			events.append(Event(start_tick, EventKind.NOTE_ON, hit.pitch, hit.velocity))
			events.append(Event(start_tick + duration, EventKind.NOTE_OFF, hit.pitch, chordlayers.constants.velocity.NOTE_OFF_VELOCITY))

	return events


def beat_seconds (bpm: float) -> float:

	"""
	Return the length of one beat in seconds.

	Raises:
		InvalidTempo: If bpm is missing or not positive.
	"""

	return 60.0 / chordlayers.events.validate_bpm(bpm)


def bar_seconds (bpm: float) -> float:

	"""
	Return the length of one bar in seconds: ``(60 / bpm) * 4``.
	"""

	return beat_seconds(bpm) * chordlayers.constants.BEATS_PER_BAR


def _playback_duration (route: str, bpm: float) -> float:

	"""Sounding time of a live note: a bar for chords, 1/32 for hi-hats, 1/8 otherwise."""

	if route == CHORD_ROUTE:
		return bar_seconds(bpm)

	if route == "hihat":
		return beat_seconds(bpm) / 8

	return beat_seconds(bpm) / 2


def chord_playback (progression: typing.Optional[chordlayers.chords.Progression], bpm: float) -> typing.List[PlaybackEvent]:

	"""
	Generate seconds-domain chord events, one per bar of the progression.
	"""

	bar_length = bar_seconds(bpm)
	events: typing.List[PlaybackEvent] = []

	if progression is None:
		return events

	for bar_index, symbol in enumerate(progression.chords):
		events.append(PlaybackEvent(
			time = bar_index * bar_length,
			route = CHORD_ROUTE,
			pitches = tuple(chordlayers.chords.chord_pitches(symbol)),
			duration = _playback_duration(CHORD_ROUTE, bpm),
			velocity = chordlayers.constants.velocity.DEFAULT_CHORD_VELOCITY
		))

	return events


def layer_playback (layer: chordlayers.layers.Layer, bpm: float) -> typing.List[PlaybackEvent]:

	"""
	Generate seconds-domain events for a layer, mirroring :func:`layer_track`.
	"""

	bar_length = bar_seconds(bpm)
	events: typing.List[PlaybackEvent] = []

	for bar_index, bar in enumerate(chordlayers.mini_notation.parse(layer.pattern)):

		if not bar:
			continue

		slot_length = bar_length / len(bar)

		for item_index, token in enumerate(bar):

			hit = _resolve_token(layer.kind, token)

			if hit is None:
				continue

			events.append(PlaybackEvent(
				time = bar_index * bar_length + item_index * slot_length,
				route = hit.route,
				pitches = (hit.pitch,),
				duration = _playback_duration(hit.route, bpm),
				velocity = hit.velocity
			))

	return events


def build_playback (
	progression: typing.Optional[chordlayers.chords.Progression],
	layers: typing.Iterable[chordlayers.layers.Layer],
	bpm: float
) -> typing.List[PlaybackEvent]:

	"""Generate the full live schedule: chords first, then each layer in order.

	The result is sorted by time; events at the same time keep the order in
	which they were generated.

	Raises:
		InvalidTempo: If bpm is missing or not positive.
	"""

	chordlayers.events.validate_bpm(bpm)

	events = chord_playback(progression, bpm)

	for layer in layers:
		events.extend(layer_playback(layer, bpm))

	events.sort(key=lambda event: event.time)

	logger.debug(f"Built playback schedule: {len(events)} events")

	return events


def loop_length (progression: typing.Optional[chordlayers.chords.Progression], bpm: float) -> float:

	"""Return the playback loop length in seconds.

	The loop covers the progression's bars, or `DEFAULT_LOOP_BARS` when no
	progression is selected (or it has no chords).
	"""

	bars = progression.bar_count if progression is not None and progression.bar_count else DEFAULT_LOOP_BARS

	return bars * bar_seconds(bpm)
