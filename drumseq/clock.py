"""Playback clock: writes a rendered pattern out one step at a time, in tempo.

The clock treats each *step* as the unit paced at ``bpm``: at 60 BPM one step
is printed per second, at 120 BPM one every half second.  Pass
``steps_per_beat=4`` to pace quarter notes instead, so that a 16-step measure
lasts four beats.

Playback is single-threaded.  :meth:`PlaybackClock.play` blocks the calling
thread with ``time.sleep`` between steps; :meth:`PlaybackClock.play_async`
runs the same loop on ``asyncio.sleep``.  Either can be stopped between steps
with :meth:`PlaybackClock.stop`, for example from a ``"step"`` listener.

Sleep targets are absolute (measured from the start of playback on
``time.perf_counter()``), so time spent writing and in listeners does not add
up as drift across the measure.
"""

import asyncio
import logging
import sys
import time
import typing

import drumseq.constants
import drumseq.errors
import drumseq.event_emitter
import drumseq.renderer


logger = logging.getLogger(__name__)


def step_interval (bpm: float, steps_per_beat: int = drumseq.constants.DEFAULT_STEPS_PER_BEAT) -> float:

	"""
	Seconds between two steps at the given tempo.

	Raises ``InvalidTempoError`` when ``bpm`` is not positive.
	"""

	if not bpm > 0:
		raise drumseq.errors.InvalidTempoError(bpm)

	if steps_per_beat <= 0:
		raise ValueError("steps_per_beat must be positive")

	steps_per_second = (bpm * steps_per_beat) / drumseq.constants.SECONDS_PER_MINUTE

	return 1.0 / steps_per_second


class PlaybackClock:

	"""
	Paces the steps of a rendered pattern out to a text stream.

	Register listeners on :attr:`events` to follow playback:

	- ``"start"`` - ``(step_count, interval_seconds)`` before the first step.
	- ``"step"`` - ``(index, token)`` right after each step is written.
	- ``"stop"`` - ``(steps_played)`` once playback finishes or is stopped.
	"""

	def __init__ (self, output: typing.Optional[typing.TextIO] = None, steps_per_beat: int = drumseq.constants.DEFAULT_STEPS_PER_BEAT) -> None:

		"""Create an idle clock.

		Parameters:
			output: Stream the steps are written to. ``None`` writes to
				whatever ``sys.stdout`` is when playback starts.
			steps_per_beat: How many steps make up one beat of ``bpm``.
				The default of 1 paces one step per beat.
		"""

		if steps_per_beat <= 0:
			raise ValueError("steps_per_beat must be positive")

		self.output = output
		self.steps_per_beat = steps_per_beat
		self.events = drumseq.event_emitter.EventEmitter()

		self.running = False
		self.steps_played = 0


	def stop (self) -> None:

		"""
		Ask the running playback to stop before its next step.

		Does nothing when the clock is idle.
		"""

		if not self.running:
			return

		logger.info("Stopping playback...")

		self.running = False


	def play (self, rendered: str, bpm: float) -> None:

		"""Write each step of ``rendered`` to the output, ``bpm`` steps per minute.

		Blocks until every step has been written and its interval has elapsed,
		or until :meth:`stop` is called.

		Parameters:
			rendered: A string produced by :func:`drumseq.renderer.render`.
			bpm: Tempo; must be positive.

		Raises:
			InvalidTempoError: ``bpm`` is not a positive number (zero, negative or NaN).
			EmptyRenderError: ``rendered`` holds no steps.
			FormatError: ``rendered`` has an empty step between separators.
		"""

		tokens, interval = self._prepare(rendered, bpm)

		self.running = True
		self.steps_played = 0

		try:
			self.events.emit_sync("start", len(tokens), interval)

			next_step_time = time.perf_counter()

			for index, token in enumerate(tokens):

				if not self.running:
					break

				self._write_step(index, token)
				self.events.emit_sync("step", index, token)

				if not self.running:
					break

				next_step_time += interval
				sleep_time = next_step_time - time.perf_counter()

				if sleep_time > 0:
					time.sleep(sleep_time)

		finally:
			self.running = False

		self._log_finished(len(tokens))
		self.events.emit_sync("stop", self.steps_played)


	async def play_async (self, rendered: str, bpm: float) -> None:

		"""
		Same as :meth:`play`, but yields to the event loop between steps.

		Cancelling the task ends playback immediately; :meth:`stop` ends it
		before the next step.
		"""

		tokens, interval = self._prepare(rendered, bpm)

		self.running = True
		self.steps_played = 0

		try:
			await self.events.emit_async("start", len(tokens), interval)

			next_step_time = time.perf_counter()

			for index, token in enumerate(tokens):

				if not self.running:
					break

				self._write_step(index, token)
				await self.events.emit_async("step", index, token)

				if not self.running:
					break

				next_step_time += interval
				sleep_time = next_step_time - time.perf_counter()

				if sleep_time > 0:
					await asyncio.sleep(sleep_time)

		finally:
			self.running = False

		self._log_finished(len(tokens))
		await self.events.emit_async("stop", self.steps_played)


	def _prepare (self, rendered: str, bpm: float) -> typing.Tuple[typing.List[str], float]:

		"""
		Validate the inputs and return the step tokens and the step interval.
		"""

		if self.running:
			raise RuntimeError("Playback is already in progress on this clock")

		interval = step_interval(bpm, self.steps_per_beat)
		tokens = drumseq.renderer.split_steps(rendered)

		if not tokens:
			raise drumseq.errors.EmptyRenderError("Nothing to play - the render has no steps")

		logger.info(f"Playing {len(tokens)} steps at {bpm} BPM ({1.0 / interval:.2f} steps per second, {interval * 1000:.2f} ms per step)")

		return tokens, interval


	def _write_step (self, index: int, token: str) -> None:

		"""
		Write one step, so that the concatenated output reads like the render.
		"""

		stream = self.output if self.output is not None else sys.stdout
		separator = drumseq.constants.SEPARATOR

		text = f"{token}{separator}"

		if index == 0:
			text = separator + text

		stream.write(text)
		stream.flush()

		self.steps_played += 1


	def _log_finished (self, step_count: int) -> None:

		if self.steps_played < step_count:
			logger.info(f"Playback stopped after {self.steps_played} of {step_count} steps")
		else:
			logger.info("Playback complete")
