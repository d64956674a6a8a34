"""Exceptions raised by drumseq.

Every error derives from :class:`DrumMachineError`, so callers can catch the
whole family in one place.  Errors caused by bad input values are also
``ValueError`` subclasses.

- :class:`FormatError` - pattern text or a rendered string is malformed.
- :class:`MalformedLineError` - a pattern line has no ``|`` separator.
- :class:`InvalidBeatError` - strict parsing met a beat symbol other than ``x`` or ``-``.
- :class:`DuplicateInstrumentError` - an instrument name appears twice.
- :class:`RaggedTrackError` - tracks of different lengths reached the renderer.
- :class:`InvalidTempoError` - playback was asked for a tempo that is not positive.
- :class:`EmptyRenderError` - playback was handed a render with no steps.
"""

import typing


class DrumMachineError (Exception):

	"""Base class for all drumseq errors."""

	pass


class FormatError (DrumMachineError, ValueError):

	"""
	Raised when text does not follow the pattern or render notation.
	"""

	def __init__ (self, message: str, line_number: typing.Optional[int] = None, line: typing.Optional[str] = None) -> None:

		"""
		Store the 1-based line number and raw line that failed, when known.
		"""

		if line_number is not None:
			message = f"line {line_number}: {message}"

		super().__init__(message)

		self.line_number = line_number
		self.line = line


class MalformedLineError (FormatError):

	pass


class InvalidBeatError (FormatError):

	pass


class DuplicateInstrumentError (DrumMachineError, ValueError):

	def __init__ (self, instrument: str, line_number: typing.Optional[int] = None) -> None:

		message = f"Duplicate instrument name {instrument!r}"

		if line_number is not None:
			message = f"line {line_number}: {message}"

		super().__init__(message)

		self.instrument = instrument
		self.line_number = line_number


class RaggedTrackError (DrumMachineError, ValueError):

	"""
	Raised when a pattern's tracks do not all have the same number of steps.
	"""

	def __init__ (self, lengths: typing.Dict[str, int]) -> None:

		"""
		Keep the step count of every track so the caller can see which one is off.
		"""

		summary = ", ".join(f"{name}={length}" for name, length in lengths.items())
		super().__init__(f"Tracks have different step counts: {summary}")

		self.lengths = lengths


class InvalidTempoError (DrumMachineError, ValueError):

	def __init__ (self, bpm: float) -> None:

		super().__init__(f"BPM must be positive, got {bpm!r}")

		self.bpm = bpm


class EmptyRenderError (DrumMachineError, ValueError):

	pass
