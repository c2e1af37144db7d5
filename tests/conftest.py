import typing

import mido
import pytest

import chordlayers.timeline


class FakeMidiOut:

	"""MIDI output stub that records what it is sent."""

	def __init__ (self) -> None:

		"""Start with an empty message log."""

		self.messages: typing.List[mido.Message] = []
		self.closed = False


	def send (self, message: mido.Message) -> None:

		"""Record an outgoing MIDI message."""

		self.messages.append(message)


	def close (self) -> None:

		"""Mark the fake device closed."""

		self.closed = True


class RecordingVoiceSet:

	"""Voice set stub that records triggers and lifecycle calls."""

	def __init__ (self, genre: str) -> None:

		"""Remember the genre this set was created for."""

		self.genre = genre
		self.triggered: typing.List[chordlayers.timeline.PlaybackEvent] = []
		self.releases = 0
		self.disposed = False


	def trigger (self, event: chordlayers.timeline.PlaybackEvent) -> None:

		"""Record a triggered event."""

		self.triggered.append(event)


	def release_all (self) -> None:

		"""Count release requests."""

		self.releases += 1


	def dispose (self) -> None:

		"""Mark the set disposed."""

		self.disposed = True


# Module-level reference so tests can access the most recently opened FakeMidiOut.
_current_fake_output: typing.Optional[FakeMidiOut] = None


def _fake_get_output_names () -> typing.List[str]:

	"""Return a fixed list of MIDI output names for tests."""

	return ["Dummy MIDI", "Other MIDI"]


def _fake_open_output (name: str) -> FakeMidiOut:

	"""Return a fake MIDI output regardless of the name."""

	global _current_fake_output
	fake = FakeMidiOut()
	_current_fake_output = fake
	return fake


@pytest.fixture
def patch_midi (monkeypatch: pytest.MonkeyPatch) -> None:

	"""Patch mido to use fake MIDI outputs for tests that open devices."""

	monkeypatch.setattr(mido, "get_output_names", _fake_get_output_names)
	monkeypatch.setattr(mido, "open_output", _fake_open_output)


@pytest.fixture
def voice_sets () -> typing.List[RecordingVoiceSet]:

	"""Every voice set created by the `voice_factory` fixture, in creation order."""

	return []


@pytest.fixture
def voice_factory (voice_sets: typing.List[RecordingVoiceSet]) -> typing.Callable[[str], RecordingVoiceSet]:

	"""A voice factory producing recording voice sets."""

	def _create (genre: str) -> RecordingVoiceSet:
		voices = RecordingVoiceSet(genre)
		voice_sets.append(voices)
		return voices

	return _create
