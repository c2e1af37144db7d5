import dataclasses
import enum
import math
import typing


class EventKind (enum.Enum):

	NOTE_ON = "note_on"
	NOTE_OFF = "note_off"


@dataclasses.dataclass(frozen=True)
class Event:

	"""
	A note-on or note-off at a tick position (480 ticks per quarter note).
	"""

	tick: int
	kind: EventKind
	pitch: int
	velocity: int


class InvalidTempo (ValueError):

	"""
	Raised when a tempo is missing, not a number, or not positive.
	"""


def validate_bpm (bpm: typing.Any) -> float:

	"""Check a tempo and return it as a float.

	Everything that turns bars into real time (playback scheduling and the
	tempo meta event in exported files) goes through this check.

	Raises:
		InvalidTempo: If *bpm* is None, not a real number, not finite, or <= 0.
	"""

	if bpm is None:
		raise InvalidTempo("BPM is required")

	if isinstance(bpm, bool) or not isinstance(bpm, (int, float)):
		raise InvalidTempo(f"BPM must be a number, got {bpm!r}")

	if not math.isfinite(bpm) or bpm <= 0:
		raise InvalidTempo(f"BPM must be positive, got {bpm!r}")

	return float(bpm)
