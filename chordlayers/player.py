import enum
import functools
import logging
import typing

import chordlayers.chords
import chordlayers.session
import chordlayers.timeline
import chordlayers.transport
import chordlayers.voices


logger = logging.getLogger(__name__)


class PlayerState (enum.Enum):

	STOPPED = "stopped"
	PLAYING = "playing"


class Player:

	"""
	Live playback of a session: a two-state machine over a looping transport.

	- **Stopped → Playing** (:meth:`play`): clear anything still scheduled,
	  rebuild the schedule from the session, start the transport.
	- **Playing → Stopped** (:meth:`stop`): revoke every pending callback, halt
	  the transport, silence the voices.

	Calling :meth:`play` while playing restarts from the top with the new
	session. There is no paused state.
	"""

	def __init__ (
		self,
		voice_factory: chordlayers.voices.VoiceFactory,
		genre: str = chordlayers.chords.DEFAULT_GENRE,
		transport: typing.Optional[chordlayers.transport.Transport] = None
	) -> None:

		"""Create a stopped player.

		Parameters:
			voice_factory: Builds a voice set for a genre.
			genre: Genre of the initial voice set.
			transport: Clock to drive playback (a new looping one by default).
		"""

		self._voice_factory = voice_factory
		self.genre = genre
		self.voices: chordlayers.voices.VoiceSet = voice_factory(genre)
		self.transport = transport if transport is not None else chordlayers.transport.Transport(loop=True)
		self.state = PlayerState.STOPPED
		self.session: typing.Optional[chordlayers.session.Session] = None


	@property
	def playing (self) -> bool:

		"""
		True while the player is in the Playing state.
		"""

		return self.state is PlayerState.PLAYING


	def set_genre (self, genre: str) -> None:

		"""Replace the voice set with a fresh one for *genre*.

		The old set is disposed of first, so nothing it was sounding keeps
		ringing. Sets are always swapped whole, never adjusted.
		"""

		self.voices.dispose()
		self.voices = self._voice_factory(genre)
		self.genre = genre

		logger.info(f"Voices switched to {genre!r}")


	async def play (self, session: chordlayers.session.Session) -> None:

		"""Start (or restart) playback of *session* from its first bar.

		Raises:
			InvalidTempo: If the session's bpm is missing or not positive. The
				player's state is unchanged in that case.
		"""

		events = chordlayers.timeline.build_playback(session.progression, session.layers, session.bpm)
		loop_end = chordlayers.timeline.loop_length(session.progression, session.bpm)

		if self.playing:
			await self.transport.stop()
			self.voices.release_all()

		self.transport.cancel()

		if session.genre != self.genre:
			self.set_genre(session.genre)

		self.transport.loop = True
		self.transport.loop_end = loop_end

		for event in events:
			self.transport.schedule(functools.partial(self._trigger, event), event.time)

		self.session = session
		self.state = PlayerState.PLAYING

		await self.transport.start()

		logger.info(f"Playing {len(events)} events at {session.bpm} BPM, looping every {loop_end:.2f}s")


	async def stop (self) -> None:

		"""
		Stop playback. No scheduled event fires after this returns.
		"""

		if not self.playing:
			return

		await self.transport.stop()
		self.voices.release_all()
		self.state = PlayerState.STOPPED

		logger.info("Playback stopped")


	def dispose (self) -> None:

		"""
		Release the current voice set. Call after :meth:`stop` when done with the player.
		"""

		self.voices.dispose()


	def _trigger (self, event: chordlayers.timeline.PlaybackEvent, when: float) -> None:

		"""Transport callback: hand one event to the voices."""

		self.voices.trigger(event)
