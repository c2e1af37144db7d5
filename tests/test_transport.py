import asyncio
import typing

import pytest

import chordlayers.transport

from chordlayers.transport import TransportState


@pytest.mark.asyncio
async def test_callbacks_fire_in_order () -> None:

	"""Callbacks fire in offset order, ties in scheduling order."""

	transport = chordlayers.transport.Transport()
	fired: typing.List[str] = []

	transport.schedule(lambda t: fired.append("c"), 0.02)
	transport.schedule(lambda t: fired.append("a"), 0.0)
	transport.schedule(lambda t: fired.append("b"), 0.0)

	await transport.start()
	await asyncio.sleep(0.1)

	assert fired == ["a", "b", "c"]


@pytest.mark.asyncio
async def test_non_looping_transport_stops_when_done () -> None:

	"""Without looping the transport stops itself after the last callback."""

	transport = chordlayers.transport.Transport()
	transport.schedule(lambda t: None, 0.0)

	await transport.start()
	await asyncio.sleep(0.05)

	assert transport.state is TransportState.STOPPED


@pytest.mark.asyncio
async def test_callback_receives_due_time () -> None:

	"""Callbacks are passed the clock time they were due at."""

	transport = chordlayers.transport.Transport()
	times: typing.List[float] = []

	transport.schedule(times.append, 0.01)

	await transport.start()
	await asyncio.sleep(0.05)

	assert times == [pytest.approx(transport.start_time + 0.01)]


@pytest.mark.asyncio
async def test_stop_prevents_due_callbacks () -> None:

	"""A stop before the clock task runs means nothing fires, even callbacks already due."""

	transport = chordlayers.transport.Transport(loop=True, loop_end=1.0)
	fired: typing.List[float] = []

	transport.schedule(fired.append, 0.0)

	await transport.start()
	await transport.stop()
	await asyncio.sleep(0.05)

	assert fired == []
	assert transport.pending == 0
	assert transport.state is TransportState.STOPPED


@pytest.mark.asyncio
async def test_stop_revokes_pending_callbacks () -> None:

	"""Callbacks later in the schedule never fire after a stop."""

	transport = chordlayers.transport.Transport(loop=True, loop_end=1.0)
	fired: typing.List[str] = []

	transport.schedule(lambda t: fired.append("early"), 0.0)
	transport.schedule(lambda t: fired.append("late"), 0.2)

	await transport.start()
	await asyncio.sleep(0.05)
	await transport.stop()
	await asyncio.sleep(0.3)

	assert fired == ["early"]


@pytest.mark.asyncio
async def test_loop_restarts_schedule () -> None:

	"""A looping transport fires the schedule once per cycle."""

	transport = chordlayers.transport.Transport(loop=True, loop_end=0.04)
	fired: typing.List[float] = []

	transport.schedule(fired.append, 0.0)

	await transport.start()
	await asyncio.sleep(0.15)
	await transport.stop()

	assert len(fired) >= 3
	assert transport.cycle >= 2
	assert all(later > earlier for earlier, later in zip(fired, fired[1:]))


@pytest.mark.asyncio
async def test_callbacks_past_loop_end_never_fire () -> None:

	"""Callbacks at or after the loop end are outside the loop."""

	transport = chordlayers.transport.Transport(loop=True, loop_end=0.03)
	fired: typing.List[str] = []

	transport.schedule(lambda t: fired.append("in"), 0.0)
	transport.schedule(lambda t: fired.append("out"), 0.03)

	await transport.start()
	await asyncio.sleep(0.1)
	await transport.stop()

	assert "in" in fired
	assert "out" not in fired


@pytest.mark.asyncio
async def test_cancel_clears_schedule () -> None:

	"""cancel() removes every scheduled callback."""

	transport = chordlayers.transport.Transport()
	fired: typing.List[float] = []

	transport.schedule(fired.append, 0.0)
	transport.cancel()
	transport.schedule(fired.append, 0.0)
	transport.cancel()

	await transport.start()
	await asyncio.sleep(0.02)

	assert fired == []


@pytest.mark.asyncio
async def test_failing_callback_does_not_stop_clock () -> None:

	"""A callback that raises is logged and later callbacks still fire."""

	transport = chordlayers.transport.Transport()
	fired: typing.List[str] = []

	def explode (t: float) -> None:
		raise RuntimeError("boom")

	transport.schedule(explode, 0.0)
	transport.schedule(lambda t: fired.append("after"), 0.01)

	await transport.start()
	await asyncio.sleep(0.05)

	assert fired == ["after"]


def test_negative_offset_rejected () -> None:

	"""Callbacks cannot be scheduled before the start."""

	transport = chordlayers.transport.Transport()

	with pytest.raises(ValueError):
		transport.schedule(lambda t: None, -0.1)


@pytest.mark.asyncio
async def test_loop_requires_positive_length () -> None:

	"""Looping with a zero loop length is rejected at start."""

	transport = chordlayers.transport.Transport(loop=True, loop_end=0.0)

	with pytest.raises(ValueError):
		await transport.start()

	assert transport.state is TransportState.STOPPED


@pytest.mark.asyncio
async def test_stall_resumes_in_current_cycle () -> None:

	"""After a stall of many cycles the loop resumes where the clock is, without a burst."""

	now = [0.0]
	transport = chordlayers.transport.Transport(loop=True, loop_end=0.01, clock=lambda: now[0])
	fired: typing.List[float] = []

	transport.schedule(fired.append, 0.0)

	await transport.start()
	await asyncio.sleep(0)

	assert fired == [0.0]

	# Jump the clock 100 cycles ahead while the clock task sleeps.
	now[0] = 1.005
	await asyncio.sleep(0.05)
	await transport.stop()

	assert fired == [0.0, pytest.approx(1.0)]
	assert transport.cycle == 100
