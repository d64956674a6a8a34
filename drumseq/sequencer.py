import logging
import typing

import drumseq.clock
import drumseq.config
import drumseq.parser
import drumseq.pattern
import drumseq.renderer


logger = logging.getLogger(__name__)


class DrumMachine:

	"""
	Parses, renders and plays drum patterns.

	The three steps are kept separate so each can be used on its own; the
	rendered string is handed to :meth:`play` explicitly rather than remembered
	between calls.

	Example:
		```python
		machine = drumseq.DrumMachine()
		pattern = machine.parse(drumseq.constants.DEMO_PATTERN)
		rendered = machine.render(pattern)
		machine.play(rendered, bpm=60)
		```
	"""

	def __init__ (self, settings: typing.Optional[drumseq.config.Settings] = None, output: typing.Optional[typing.TextIO] = None) -> None:

		"""Create a drum machine.

		Parameters:
			settings: Default tempo, step pacing and parser strictness.
				Uses ``Settings()`` defaults when omitted.
			output: Stream that playback writes to (``sys.stdout`` when omitted).
		"""

		self.settings = settings if settings is not None else drumseq.config.Settings()
		self.clock = drumseq.clock.PlaybackClock(output=output, steps_per_beat=self.settings.steps_per_beat)


	def parse (self, text: str) -> drumseq.pattern.Pattern:

		"""
		Parse pattern text, honouring the configured strictness.
		"""

		pattern = drumseq.parser.parse(text, strict=self.settings.strict)

		logger.debug(f"Parsed pattern with {len(pattern)} instruments: {list(pattern.instrument_names)}")

		return pattern


	def render (self, pattern: drumseq.pattern.Pattern) -> str:

		"""
		Render one play of the pattern. See :func:`drumseq.renderer.render`.
		"""

		return drumseq.renderer.render(pattern)


	def play (self, rendered: str, bpm: typing.Optional[float] = None) -> None:

		"""
		Play a rendered pattern, at ``bpm`` or the configured tempo.
		"""

		self.clock.play(rendered, self._resolve_bpm(bpm))


	async def play_async (self, rendered: str, bpm: typing.Optional[float] = None) -> None:

		"""
		Play a rendered pattern without blocking the event loop.
		"""

		await self.clock.play_async(rendered, self._resolve_bpm(bpm))


	def play_pattern (self, pattern: drumseq.pattern.Pattern, bpm: typing.Optional[float] = None) -> str:

		"""
		Render the pattern, play it, and return the render.
		"""

		rendered = self.render(pattern)
		self.play(rendered, bpm)

		return rendered


	def stop (self) -> None:

		"""
		Stop playback before its next step.
		"""

		self.clock.stop()


	def on_event (self, event_name: str, callback: typing.Callable[..., typing.Any]) -> None:

		"""
		Register a callback for a playback event (``start``, ``step`` or ``stop``).
		"""

		self.clock.events.on(event_name, callback)


	def _resolve_bpm (self, bpm: typing.Optional[float]) -> float:

		return self.settings.bpm if bpm is None else bpm
