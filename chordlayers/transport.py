import asyncio
import dataclasses
import enum
import heapq
import itertools
import logging
import math
import time
import typing


logger = logging.getLogger(__name__)


class TransportState (enum.Enum):

	STOPPED = "stopped"
	PLAYING = "playing"


@dataclasses.dataclass
class ScheduledCallback:

	"""
	A callback registered to fire at an offset (seconds) from the start of each cycle.
	"""

	callback: typing.Callable[[float], typing.Any]
	offset: float
	order: int


class Transport:

	"""
	A cooperative clock that fires callbacks at offsets from its start time.

	The transport runs as a single asyncio task. Between firings it sleeps, so
	callers never block waiting for a note. When ``loop`` is set the whole
	schedule restarts every ``loop_end`` seconds; callbacks placed at or
	after ``loop_end`` never fire while looping.

	Stopping is immediate: :meth:`stop` empties the pending queue and cancels
	the clock task before it yields, so no callback fires after a stop
	request, including callbacks that were already due but had not run yet.
	"""

	def __init__ (
		self,
		loop: bool = False,
		loop_end: float = 0.0,
		clock: typing.Callable[[], float] = time.perf_counter
	) -> None:

		"""Create a stopped transport.

		Parameters:
			loop: Restart the schedule every ``loop_end`` seconds.
			loop_end: Loop length in seconds (must be positive when looping).
			clock: Monotonic time source in seconds.
		"""

		self.loop = loop
		self.loop_end = loop_end
		self._clock = clock

		self.state = TransportState.STOPPED
		self.task: typing.Optional[asyncio.Task] = None
		self.start_time = 0.0
		self.cycle_start = 0.0
		self.cycle = 0

		self._schedule: typing.List[ScheduledCallback] = []
		self._queue: typing.List[typing.Tuple[float, int, ScheduledCallback]] = []
		self._counter = itertools.count()


	@property
	def playing (self) -> bool:

		"""
		True while the clock is running.
		"""

		return self.state is TransportState.PLAYING


	@property
	def pending (self) -> int:

		"""
		Number of callbacks waiting to fire in the current cycle.
		"""

		return len(self._queue)


	def schedule (self, callback: typing.Callable[[float], typing.Any], offset: float) -> ScheduledCallback:

		"""Register a callback at *offset* seconds from the start of each cycle.

		The callback receives the time (on the transport's clock) it was due.
		Scheduling while playing adds the callback to the current cycle when
		its time has not passed yet, and to every later cycle.

		Raises:
			ValueError: If *offset* is negative.
		"""

		if offset < 0:
			raise ValueError("Callback offset cannot be negative")

		entry = ScheduledCallback(callback=callback, offset=offset, order=next(self._counter))
		self._schedule.append(entry)

		if self.playing and self.cycle_start + offset >= self._clock():
			self._push(entry, self.cycle_start)

		return entry


	def cancel (self) -> None:

		"""
		Remove every scheduled callback, fired or not.
		"""

		self._schedule.clear()
		self._queue.clear()


	def _push (self, entry: ScheduledCallback, cycle_start: float) -> None:

		"""Queue one callback for the cycle beginning at *cycle_start*."""

		if self.loop and entry.offset >= self.loop_end:
			return

		heapq.heappush(self._queue, (cycle_start + entry.offset, entry.order, entry))


	def _arm_cycle (self, cycle_start: float) -> None:

		"""Queue the whole schedule for the cycle beginning at *cycle_start*."""

		self.cycle_start = cycle_start

		for entry in self._schedule:
			self._push(entry, cycle_start)


	async def start (self) -> None:

		"""Start the clock from time zero of the schedule.

		Raises:
			ValueError: If looping with a loop length that is not positive.
		"""

		if self.playing:
			return

		if self.loop and self.loop_end <= 0:
			raise ValueError("Loop length must be positive")

		self.state = TransportState.PLAYING
		self.start_time = self._clock()
		self.cycle = 0
		self._queue = []
		self._arm_cycle(self.start_time)
		self.task = asyncio.create_task(self._run_loop())

		loop_text = f"{self.loop_end:.3f}s" if self.loop else "off"
		logger.info(f"Transport started ({len(self._schedule)} callbacks, loop {loop_text})")


	async def stop (self) -> None:

		"""
		Halt the clock and revoke every pending callback.
		"""

		if not self.playing:
			return

		# Revoke and halt before yielding to the event loop.
		self.state = TransportState.STOPPED
		self._queue.clear()
		self._schedule.clear()

		task = self.task
		self.task = None

		if task is not None and task is not asyncio.current_task():
			task.cancel()
			try:
				await task
			except asyncio.CancelledError:
				pass

		logger.info("Transport stopped")


	def _fire (self, entry: ScheduledCallback, when: float) -> None:

		"""Run one callback, logging (not raising) anything it throws."""

		try:
			entry.callback(when)
		except Exception:
			logger.exception(f"Transport callback at {entry.offset:.3f}s failed")


	async def _run_loop (self) -> None:

		"""Sleep until the next callback or loop boundary, then fire what is due."""

		while self.playing:

			next_cycle = self.cycle_start + self.loop_end if self.loop else None

			if self._queue:
				target = self._queue[0][0]
				if next_cycle is not None:
					target = min(target, next_cycle)

			elif next_cycle is not None:
				target = next_cycle

			else:
				logger.info("Schedule complete (no more callbacks).")
				self.state = TransportState.STOPPED
				self.task = None
				break

			sleep_time = target - self._clock()

			if sleep_time > 0:
				await asyncio.sleep(sleep_time)

			now = self._clock()

			while self.playing and self._queue and self._queue[0][0] <= now:
				when, _, entry = heapq.heappop(self._queue)
				self._fire(entry, when)

			if self.playing and next_cycle is not None and now >= next_cycle:

				# After a stall longer than a cycle, resume in the cycle that contains now.
				skipped = math.floor((now - next_cycle) / self.loop_end)

				if skipped > 0:
					logger.warning(f"Transport fell {skipped} loop(s) behind - skipping ahead")

				self.cycle += 1 + skipped
				self._arm_cycle(next_cycle + skipped * self.loop_end)
				logger.debug(f"Transport loop {self.cycle}")
