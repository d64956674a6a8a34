import io
import typing

import pytest

import drumseq.clock
import drumseq.constants


class FakeTime:

	"""Stand-in for the ``time`` module that advances only when slept on."""

	def __init__ (self) -> None:

		"""Start the fake clock at zero with no recorded sleeps."""

		self.now = 0.0
		self.sleeps: typing.List[float] = []


	def perf_counter (self) -> float:

		"""Return the current fake time in seconds."""

		return self.now


	def sleep (self, seconds: float) -> None:

		"""Record the sleep and advance the fake time instead of blocking."""

		self.sleeps.append(seconds)
		self.now += seconds


@pytest.fixture
def fake_time (monkeypatch: pytest.MonkeyPatch) -> FakeTime:

	"""Patch the playback clock's time source so tests run instantly."""

	fake = FakeTime()
	monkeypatch.setattr(drumseq.clock, "time", fake)
	return fake


@pytest.fixture
def output () -> io.StringIO:

	"""A text stream to capture playback output."""

	return io.StringIO()


@pytest.fixture
def demo_text () -> str:

	"""The three-track rock beat used throughout the tests."""

	return drumseq.constants.DEMO_PATTERN


@pytest.fixture
def demo_render () -> str:

	"""The canonical render of the demo pattern."""

	return "|hi-hat,kick|-|hi-hat|-|hi-hat,snare|-|hi-hat|-|hi-hat,kick|-|hi-hat|-|hi-hat,snare|-|hi-hat|-|"
