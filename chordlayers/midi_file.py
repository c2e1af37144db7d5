"""Standard MIDI File writer.

Builds byte-exact format 1 files: a header chunk, a tempo track, then one note
track per exported entity. All multi-byte fields are big-endian.

Layout of the file produced by :func:`encode`::

    MThd 00000006 0001 0002 01E0           header: format 1, 2 tracks, 480 tpq
    MTrk <len>  00 FF 51 03 tt tt tt        tempo (microseconds per quarter)
                00 FF 2F 00                 end of track
    MTrk <len>  00 FF 03 <len> <name>       track name
                <delta> 90|80 <pitch> <vel> note on/off, channel 0 ...
                00 FF 2F 00                 end of track

Events are written in tick order; events on the same tick keep the order they
were given in. Encoding is deterministic: the same events always produce the
same bytes.
"""

import dataclasses
import logging
import struct
import typing

import chordlayers.constants
import chordlayers.events

from chordlayers.constants.velocity import MAX_VELOCITY, MIN_VELOCITY
from chordlayers.events import Event, EventKind


logger = logging.getLogger(__name__)


HEADER_CHUNK_ID = b"MThd"
TRACK_CHUNK_ID = b"MTrk"
FORMAT_MULTI_TRACK = 1

NOTE_ON_STATUS = 0x90
NOTE_OFF_STATUS = 0x80

META_EVENT = 0xFF
META_TRACK_NAME = 0x03
META_END_OF_TRACK = 0x2F
META_SET_TEMPO = 0x51

MICROSECONDS_PER_MINUTE = 60_000_000
MAX_TEMPO = 0xFFFFFF


def encode_vlq (value: int) -> bytes:

	"""Encode a non-negative integer as a MIDI variable-length quantity.

	The value is split into 7-bit groups, most significant first. Every byte
	but the last has its high bit set.

	Example:
		```python
		encode_vlq(0)      # → b"\\x00"
		encode_vlq(128)    # → b"\\x81\\x00"
		encode_vlq(16384)  # → b"\\x81\\x80\\x00"
		```

	Raises:
		ValueError: If *value* is negative.
	"""

	if value < 0:
		raise ValueError(f"Variable-length quantities cannot be negative, got {value}")

	groups = [value & 0x7F]
	value >>= 7

	while value:
		groups.append((value & 0x7F) | 0x80)
		value >>= 7

	return bytes(reversed(groups))


def tempo_from_bpm (bpm: float) -> int:

	"""Return microseconds per quarter note for a tempo, rounded half up.

	Raises:
		InvalidTempo: If bpm is missing, not positive, or too slow to fit the
			three-byte tempo field.
	"""

	bpm = chordlayers.events.validate_bpm(bpm)
	tempo = int(MICROSECONDS_PER_MINUTE / bpm + 0.5)

	if not 0 < tempo <= MAX_TEMPO:
		raise chordlayers.events.InvalidTempo(f"BPM {bpm} cannot be stored in a MIDI tempo event")

	return tempo


def _chunk (chunk_id: bytes, payload: bytes) -> bytes:

	"""Wrap a payload in a chunk with its 4-byte big-endian length."""

	return chunk_id + struct.pack(">I", len(payload)) + payload


def _meta (meta_type: int, data: bytes = b"") -> bytes:

	"""Return a meta event (without its delta time)."""

	return bytes([META_EVENT, meta_type]) + encode_vlq(len(data)) + data


_END_OF_TRACK = b"\x00" + _meta(META_END_OF_TRACK)


@dataclasses.dataclass
class Track:

	"""
	A named note track: channel-0 note events stamped with absolute ticks.
	"""

	name: str
	events: typing.List[Event] = dataclasses.field(default_factory=list)


	def to_bytes (self) -> bytes:

		"""
		Serialize the track as a complete ``MTrk`` chunk.
		"""

		payload = bytearray(b"\x00")
		payload += _meta(META_TRACK_NAME, self.name.encode("utf-8"))

		last_tick = 0

		for event in sorted(self.events, key=lambda e: e.tick):

			if event.tick < 0:
				raise ValueError(f"Event ticks cannot be negative, got {event.tick}")

			if not (0 <= event.pitch <= 127 and MIN_VELOCITY <= event.velocity <= MAX_VELOCITY):
				raise ValueError(f"Pitch and velocity must be 0-127, got {event.pitch} and {event.velocity}")

			status = NOTE_ON_STATUS if event.kind is EventKind.NOTE_ON else NOTE_OFF_STATUS

			payload += encode_vlq(event.tick - last_tick)
			payload += bytes([status, event.pitch, event.velocity])

			last_tick = event.tick

		payload += _END_OF_TRACK

		return _chunk(TRACK_CHUNK_ID, bytes(payload))


@dataclasses.dataclass
class MidiFile:

	"""A format 1 Standard MIDI File: tempo track first, then the note tracks.

	Attributes:
		bpm: Tempo written into the tempo track.
		tracks: Note tracks, in file order.
		ticks_per_quarter: Header division (default 480).
	"""

	bpm: float
	tracks: typing.List[Track] = dataclasses.field(default_factory=list)
	ticks_per_quarter: int = chordlayers.constants.MIDI_TICKS_PER_QUARTER


	def _header (self) -> bytes:

		"""
		Return the ``MThd`` chunk.
		"""

		payload = struct.pack(">HHH", FORMAT_MULTI_TRACK, len(self.tracks) + 1, self.ticks_per_quarter)

		return _chunk(HEADER_CHUNK_ID, payload)


	def _tempo_track (self) -> bytes:

		"""
		Return the tempo track chunk.
		"""

		tempo = tempo_from_bpm(self.bpm)
		payload = b"\x00" + _meta(META_SET_TEMPO, tempo.to_bytes(3, "big")) + _END_OF_TRACK

		return _chunk(TRACK_CHUNK_ID, payload)


	def to_bytes (self) -> bytes:

		"""
		Serialize the whole file.

		Raises:
			InvalidTempo: If the tempo is missing or not positive.
		"""

		data = self._header() + self._tempo_track()

		for track in self.tracks:
			data += track.to_bytes()

		return data


def encode (track_name: str, events: typing.Iterable[Event], bpm: float) -> bytes:

	"""Encode one named note track as a complete Standard MIDI File.

	Parameters:
		track_name: Written as the note track's name meta event.
		events: Note events with absolute ticks (any order; not modified).
		bpm: Tempo for the tempo track.

	Returns:
		The file contents.

	Raises:
		InvalidTempo: If bpm is missing or not positive.
	"""

	midi_file = MidiFile(bpm=bpm, tracks=[Track(name=track_name, events=list(events))])
	data = midi_file.to_bytes()

	logger.debug(f"Encoded track {track_name!r}: {len(midi_file.tracks[0].events)} events, {len(data)} bytes")

	return data
