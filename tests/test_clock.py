import asyncio
import io
import math
import typing

import pytest

import drumseq.clock
import drumseq.errors


def test_step_interval () -> None:

	"""One step per beat: 60 BPM is one second, 120 BPM half a second."""

	assert drumseq.clock.step_interval(60) == pytest.approx(1.0)
	assert drumseq.clock.step_interval(120) == pytest.approx(0.5)
	assert drumseq.clock.step_interval(30) == pytest.approx(2.0)


def test_step_interval_steps_per_beat () -> None:

	"""Four steps per beat paces sixteenth notes against a quarter-note tempo."""

	assert drumseq.clock.step_interval(60, steps_per_beat=4) == pytest.approx(0.25)


def test_step_interval_rejects_bad_tempo () -> None:

	"""Zero and negative tempos are invalid."""

	with pytest.raises(drumseq.errors.InvalidTempoError):
		drumseq.clock.step_interval(0)

	with pytest.raises(drumseq.errors.InvalidTempoError):
		drumseq.clock.step_interval(-5)

	with pytest.raises(ValueError):
		drumseq.clock.step_interval(60, steps_per_beat=0)


def test_play_writes_render (fake_time: typing.Any, output: io.StringIO, demo_render: str) -> None:

	"""The steps written to the stream add up to the render itself."""

	clock = drumseq.clock.PlaybackClock(output=output)
	clock.play(demo_render, 120)

	assert output.getvalue() == demo_render
	assert clock.steps_played == 16
	assert not clock.running


def test_play_writes_steps_one_at_a_time (fake_time: typing.Any) -> None:

	"""The first step has a leading separator, every step a trailing one."""

	writes: typing.List[str] = []

	class Recorder (io.StringIO):

		def write (self, text: str) -> int:

			writes.append(text)
			return super().write(text)

	clock = drumseq.clock.PlaybackClock(output=Recorder())
	clock.play("|kick|-|snare|", 60)

	assert writes == ["|kick|", "-|", "snare|"]


@pytest.mark.parametrize("bpm, expected", [(60, 1.0), (120, 0.5)])
def test_play_timing (fake_time: typing.Any, output: io.StringIO, bpm: int, expected: float) -> None:

	"""Steps are written one interval apart, and the last step lasts one interval too."""

	times: typing.List[float] = []

	clock = drumseq.clock.PlaybackClock(output=output)
	clock.events.on("step", lambda index, token: times.append(fake_time.now))
	clock.play("|kick|-|snare|-|", bpm)

	assert times == pytest.approx([0.0, expected, 2 * expected, 3 * expected])
	assert fake_time.sleeps == pytest.approx([expected] * 4)


def test_play_does_not_drift (fake_time: typing.Any, output: io.StringIO) -> None:

	"""Time spent writing a step is taken out of the following sleep."""

	clock = drumseq.clock.PlaybackClock(output=output)

	def slow_listener (index: int, token: str) -> None:
		fake_time.now += 0.1

	clock.events.on("step", slow_listener)
	clock.play("|kick|-|snare|", 60)

	assert fake_time.sleeps == pytest.approx([0.9, 0.9, 0.9])
	assert fake_time.now == pytest.approx(3.0)


def test_play_real_time (output: io.StringIO) -> None:

	"""With the real clock, playback takes roughly steps times the interval."""

	import time

	clock = drumseq.clock.PlaybackClock(output=output)

	started = time.perf_counter()
	clock.play("|kick|-|snare|-|", 6000)
	elapsed = time.perf_counter() - started

	# 4 steps at 10 ms each.
	assert elapsed >= 0.039
	assert elapsed < 1.0


@pytest.mark.parametrize("bpm", [0, -5])
def test_play_rejects_bad_tempo (fake_time: typing.Any, output: io.StringIO, demo_render: str, bpm: int) -> None:

	"""Playback refuses non-positive tempos and writes nothing."""

	clock = drumseq.clock.PlaybackClock(output=output)

	with pytest.raises(drumseq.errors.InvalidTempoError):
		clock.play(demo_render, bpm)

	assert output.getvalue() == ""
	assert not clock.running


@pytest.mark.parametrize("rendered", ["", "||", "   "])
def test_play_rejects_empty_render (fake_time: typing.Any, output: io.StringIO, rendered: str) -> None:

	"""There must be at least one step to play."""

	clock = drumseq.clock.PlaybackClock(output=output)

	with pytest.raises(drumseq.errors.EmptyRenderError):
		clock.play(rendered, 60)

	assert fake_time.sleeps == []


def test_play_defaults_to_stdout (fake_time: typing.Any, capsys: pytest.CaptureFixture) -> None:

	"""Without an output stream, steps go to standard output."""

	drumseq.clock.PlaybackClock().play("|kick|-|", 60)

	assert capsys.readouterr().out == "|kick|-|"


def test_events_are_emitted_in_order (fake_time: typing.Any, output: io.StringIO) -> None:

	"""Listeners see start, every step, then stop."""

	seen: typing.List[typing.Tuple[typing.Any, ...]] = []

	clock = drumseq.clock.PlaybackClock(output=output)
	clock.events.on("start", lambda count, interval: seen.append(("start", count, interval)))
	clock.events.on("step", lambda index, token: seen.append(("step", index, token)))
	clock.events.on("stop", lambda played: seen.append(("stop", played)))

	clock.play("|kick|-|", 120)

	assert seen == [("start", 2, 0.5), ("step", 0, "kick"), ("step", 1, "-"), ("stop", 2)]


def test_stop_from_listener (fake_time: typing.Any, output: io.StringIO) -> None:

	"""Stopping during a step ends playback before the next one."""

	clock = drumseq.clock.PlaybackClock(output=output)
	stopped: typing.List[int] = []

	def on_step (index: int, token: str) -> None:
		if index == 1:
			clock.stop()

	clock.events.on("step", on_step)
	clock.events.on("stop", stopped.append)
	clock.play("|kick|-|snare|-|", 60)

	assert output.getvalue() == "|kick|-|"
	assert stopped == [2]
	assert fake_time.sleeps == pytest.approx([1.0])


def test_stop_when_idle_is_harmless () -> None:

	"""Calling stop() without playback does nothing."""

	clock = drumseq.clock.PlaybackClock()
	clock.stop()

	assert not clock.running


def test_clock_can_play_again (fake_time: typing.Any, output: io.StringIO) -> None:

	"""A finished clock is ready for the next playback."""

	clock = drumseq.clock.PlaybackClock(output=output)
	clock.play("|kick|", 60)
	clock.play("|snare|", 60)

	assert output.getvalue() == "|kick||snare|"


def test_async_listener_rejected_in_blocking_play (fake_time: typing.Any, output: io.StringIO) -> None:

	"""Blocking playback cannot await listeners."""

	async def on_step (index: int, token: str) -> None:
		return None

	clock = drumseq.clock.PlaybackClock(output=output)
	clock.events.on("step", on_step)

	with pytest.raises(ValueError):
		clock.play("|kick|", 60)

	assert not clock.running


def test_invalid_steps_per_beat () -> None:

	"""The clock needs at least one step per beat."""

	with pytest.raises(ValueError):
		drumseq.clock.PlaybackClock(steps_per_beat=0)


@pytest.mark.asyncio
async def test_play_async (output: io.StringIO) -> None:

	"""Async playback writes the same output and awaits async listeners."""

	tokens: typing.List[str] = []

	async def on_step (index: int, token: str) -> None:
		tokens.append(token)

	clock = drumseq.clock.PlaybackClock(output=output)
	clock.events.on("step", on_step)

	await clock.play_async("|kick|-|snare|", 60000)

	assert output.getvalue() == "|kick|-|snare|"
	assert tokens == ["kick", "-", "snare"]
	assert not clock.running


@pytest.mark.asyncio
async def test_play_async_stop (output: io.StringIO) -> None:

	"""stop() from another task ends async playback between steps."""

	clock = drumseq.clock.PlaybackClock(output=output)

	async def stop_soon () -> None:
		while clock.steps_played < 1:
			await asyncio.sleep(0.001)
		clock.stop()

	# 600 BPM: each step waits 100 ms, so stop() lands during the first sleep.
	stopper = asyncio.create_task(stop_soon())
	await clock.play_async("|kick|-|snare|-|", 600)
	await stopper

	assert output.getvalue() in ("|kick|", "|kick|-|")
	assert not clock.running


@pytest.mark.asyncio
async def test_play_async_cancel (output: io.StringIO) -> None:

	"""Cancelling the playback task leaves the clock idle."""

	clock = drumseq.clock.PlaybackClock(output=output)
	task = asyncio.create_task(clock.play_async("|kick|-|snare|-|", 60))

	await asyncio.sleep(0.01)
	task.cancel()

	with pytest.raises(asyncio.CancelledError):
		await task

	assert output.getvalue() == "|kick|"
	assert not clock.running


@pytest.mark.asyncio
async def test_concurrent_play_is_refused (output: io.StringIO) -> None:

	"""A clock plays one render at a time."""

	clock = drumseq.clock.PlaybackClock(output=output)
	task = asyncio.create_task(clock.play_async("|kick|-|", 60))

	await asyncio.sleep(0.01)

	with pytest.raises(RuntimeError):
		clock.play("|snare|", 60)

	task.cancel()

	with pytest.raises(asyncio.CancelledError):
		await task


def test_nan_tempo_is_rejected (fake_time: typing.Any, output: io.StringIO) -> None:

	"""NaN is not a positive tempo, so nothing is played unpaced."""

	with pytest.raises(drumseq.errors.InvalidTempoError):
		drumseq.clock.step_interval(math.nan)

	clock = drumseq.clock.PlaybackClock(output=output)

	with pytest.raises(drumseq.errors.InvalidTempoError):
		clock.play("|kick|-|", math.nan)

	assert output.getvalue() == ""
	assert not clock.running


def test_play_refuses_render_with_empty_first_step (fake_time: typing.Any, output: io.StringIO) -> None:

	"""A render whose first step is empty fails instead of playing one step short."""

	clock = drumseq.clock.PlaybackClock(output=output)

	with pytest.raises(drumseq.errors.FormatError):
		clock.play("||kick|", 60)

	assert output.getvalue() == ""
