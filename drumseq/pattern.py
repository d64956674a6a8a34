import dataclasses
import typing

import drumseq.errors


Row = typing.Tuple[bool, ...]


@dataclasses.dataclass (frozen=True)
class Pattern:

	"""
	One measure of drum tracks: an instrument name and a row of steps per track.

	``track[i]`` holds the steps for ``instrument_names[i]``.  The order of the
	names is the order they first appeared in the pattern text, and is the order
	used when several instruments play on the same step.

	Rows are expected to share one length (the step count of the measure), but
	that is only checked when the length is needed - see :attr:`step_count`.
	Steps must be bools or ints (0 is silent); anything else raises ``TypeError``.
	"""

	instrument_names: typing.Tuple[str, ...] = ()
	track: typing.Tuple[Row, ...] = ()


	def __post_init__ (self) -> None:

		"""
		Freeze the inputs into tuples and check names against rows.
		"""

		names = tuple(self.instrument_names)
		rows = tuple(_freeze_row(row) for row in self.track)

		if len(names) != len(rows):
			raise ValueError(f"Pattern has {len(names)} instrument names but {len(rows)} tracks")

		seen: typing.Set[str] = set()

		for name in names:
			if name in seen:
				raise drumseq.errors.DuplicateInstrumentError(name)
			seen.add(name)

		object.__setattr__(self, "instrument_names", names)
		object.__setattr__(self, "track", rows)


	def __len__ (self) -> int:

		"""Number of instruments in the pattern."""

		return len(self.instrument_names)


	@property
	def row_lengths (self) -> typing.Dict[str, int]:

		"""Step count of each track, keyed by instrument name."""

		return {name: len(row) for name, row in zip(self.instrument_names, self.track)}


	@property
	def is_ragged (self) -> bool:

		"""True when the tracks do not all have the same number of steps."""

		return len(set(len(row) for row in self.track)) > 1


	@property
	def step_count (self) -> int:

		"""
		Number of steps in the measure (0 for an empty pattern).

		Raises ``RaggedTrackError`` when the tracks disagree.
		"""

		if not self.track:
			return 0

		if self.is_ragged:
			raise drumseq.errors.RaggedTrackError(self.row_lengths)

		return len(self.track[0])


	def row (self, instrument: str) -> Row:

		"""
		Return the steps for one instrument.

		Raises ``KeyError`` if the instrument is not in the pattern.
		"""

		try:
			index = self.instrument_names.index(instrument)
		except ValueError:
			raise KeyError(instrument) from None

		return self.track[index]


def _freeze_row (row: typing.Iterable[typing.Any]) -> Row:

	"""
	Copy a row into a tuple of bools, refusing cells that are not bools or ints.
	"""

	if isinstance(row, str):
		raise TypeError(f"Track rows must hold bools, not a string ({row!r}) - use drumseq.parser.parse for text")

	cells = tuple(row)

	for beat in cells:
		if not isinstance(beat, int):
			raise TypeError(f"Track steps must be bools or ints, got {beat!r}")

	return tuple(bool(beat) for beat in cells)
