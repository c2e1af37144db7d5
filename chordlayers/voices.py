"""Voice sets: the instruments that sound playback events.

A voice set receives seconds-domain events from the player and turns them
into sound. Its timbre depends on the genre only, and it is never edited in
place: when the genre changes the player disposes of the whole set and
creates a new one, so no voice is left ringing from the old configuration.

The built-in :class:`MidiVoiceSet` plays through a MIDI output port. Each
route gets its own channel (drums on the General MIDI percussion channel) and
each genre selects General MIDI programs for the chord, bass and melody
channels.
"""

import asyncio
import logging
import typing

import mido

import chordlayers.chords
import chordlayers.constants.gm_drums
import chordlayers.pitch
import chordlayers.timeline


logger = logging.getLogger(__name__)


class VoiceSet (typing.Protocol):

	"""
	Protocol for objects that sound playback events.
	"""

	def trigger (self, event: chordlayers.timeline.PlaybackEvent) -> None:

		"""
		Start sounding an event now; it stops by itself after its duration.
		"""

		...


	def release_all (self) -> None:

		"""
		Silence every sounding note immediately.
		"""

		...


	def dispose (self) -> None:

		"""
		Silence everything and release the voices. The set is unusable afterwards.
		"""

		...


VoiceFactory = typing.Callable[[str], VoiceSet]


ROUTE_CHANNELS: typing.Dict[str, int] = {
	chordlayers.timeline.CHORD_ROUTE: 0,
	"bass": 1,
	"melody": 2,
	"kick": chordlayers.constants.gm_drums.GM_DRUM_CHANNEL,
	"snare": chordlayers.constants.gm_drums.GM_DRUM_CHANNEL,
	"hihat": chordlayers.constants.gm_drums.GM_DRUM_CHANNEL,
}

# General MIDI programs (0-indexed) per genre and pitched route.
GENRE_PROGRAMS: typing.Dict[str, typing.Dict[str, int]] = {
	"pop": {"chords": 4, "bass": 33, "melody": 73},          # E.Piano 1, Finger Bass, Flute
	"jazz": {"chords": 0, "bass": 32, "melody": 73},         # Grand Piano, Acoustic Bass, Flute
	"electronic": {"chords": 90, "bass": 38, "melody": 73},  # Polysynth Pad, Synth Bass 1, Flute
	"hiphop": {"chords": 89, "bass": 39, "melody": 73},      # Warm Pad, Synth Bass 2, Flute
}


def genre_programs (genre: str) -> typing.Dict[str, int]:

	"""Return the program map for a genre, using the default genre's for unknown names."""

	if genre not in GENRE_PROGRAMS:
		logger.warning(f"No voice presets for genre {genre!r} - using {chordlayers.chords.DEFAULT_GENRE!r}")
		return GENRE_PROGRAMS[chordlayers.chords.DEFAULT_GENRE]

	return GENRE_PROGRAMS[genre]


class MidiVoiceSet:

	"""
	Plays events on a MIDI output port.

	Note-offs are scheduled on the running asyncio loop; their timer handles
	are kept so that :meth:`release_all` can revoke them and silence the notes
	at once.
	"""

	def __init__ (self, midi_out: typing.Any, genre: str = chordlayers.chords.DEFAULT_GENRE) -> None:

		"""
		Wrap an open mido output port. Use :meth:`create` to also send the genre's programs.
		"""

		self.midi_out = midi_out
		self.genre = genre
		self.disposed = False
		self._pending: typing.Dict[typing.Tuple[int, int], asyncio.TimerHandle] = {}


	@classmethod
	def create (cls, midi_out: typing.Any, genre: str) -> "MidiVoiceSet":

		"""
		Build a voice set for *genre* and send its program changes.
		"""

		voices = cls(midi_out, genre)

		for route, program in genre_programs(genre).items():
			voices._send(mido.Message('program_change', channel=ROUTE_CHANNELS[route], program=program))

		logger.info(f"Created MIDI voices for genre {genre!r}")

		return voices


	@classmethod
	def factory (cls, midi_out: typing.Any) -> VoiceFactory:

		"""
		Return a voice factory bound to one output port.
		"""

		def _create (genre: str) -> VoiceSet:
			return cls.create(midi_out, genre)

		return _create


	def _send (self, message: mido.Message) -> None:

		"""Send a message, logging port failures instead of raising."""

		try:
			self.midi_out.send(message)
		except Exception:
			logger.exception("MIDI send failed (device may be disconnected)")


	def _note_off (self, channel: int, pitch: int) -> None:

		"""Stop one note and forget its pending handle."""

		self._pending.pop((channel, pitch), None)
		self._send(mido.Message('note_off', channel=channel, note=pitch, velocity=0))


	def trigger (self, event: chordlayers.timeline.PlaybackEvent) -> None:

		"""
		Send note-ons for the event and schedule the matching note-offs.
		"""

		if self.disposed:
			return

		channel = ROUTE_CHANNELS[event.route]
		loop = asyncio.get_running_loop()

		logger.debug(f"{event.route}: {' '.join(chordlayers.pitch.pitch_to_note(pitch) for pitch in event.pitches)} for {event.duration:.3f}s")

		for pitch in event.pitches:

			# A retriggered note ends the previous one on the same key.
			previous = self._pending.pop((channel, pitch), None)
			if previous is not None:
				previous.cancel()
				self._send(mido.Message('note_off', channel=channel, note=pitch, velocity=0))

			self._send(mido.Message('note_on', channel=channel, note=pitch, velocity=event.velocity))
			self._pending[(channel, pitch)] = loop.call_later(event.duration, self._note_off, channel, pitch)


	def release_all (self) -> None:

		"""
		Cancel pending note-offs and send them immediately.
		"""

		for (channel, pitch), handle in list(self._pending.items()):
			handle.cancel()
			self._send(mido.Message('note_off', channel=channel, note=pitch, velocity=0))

		self._pending.clear()


	def dispose (self) -> None:

		"""
		Silence all notes. The port stays open; it belongs to the caller.
		"""

		if self.disposed:
			return

		self.release_all()
		self.disposed = True

		logger.info(f"Disposed MIDI voices for genre {self.genre!r}")
