import logging
import typing

import drumseq.constants
import drumseq.errors
import drumseq.pattern


logger = logging.getLogger(__name__)


def parse (text: str, strict: bool = False) -> drumseq.pattern.Pattern:

	"""
	Parse pattern text into a :class:`~drumseq.pattern.Pattern`.

	Each line describes one track: an instrument name, then the beats of the
	measure split into groups by ``|``. Whitespace around the name is ignored.

	**Syntax:**
	- `x`: The instrument plays on this step.
	- `-`: Silence.
	- `|`: Group separator, for readability only. Groups are joined together.

	Any symbol other than ``-`` counts as a hit unless ``strict`` is set.
	Blank lines are skipped.

	Parameters:
		text: The pattern text. Any line-ending convention is accepted.
		strict: When True, only ``x`` and ``-`` are valid beats, and instrument
			names must be free of commas.

	Returns:
		A `Pattern` with one track per line, in the order the lines appear.

	Raises:
		MalformedLineError: A line has no ``|`` separator.
		InvalidBeatError: Strict mode met an unexpected beat symbol.
		FormatError: A line has no instrument name, or strict mode met a name
			containing a comma.
		DuplicateInstrumentError: An instrument name appears on two lines.

	Example:
		```python
		pattern = parse(
			"hi-hat |x-x-|x-x-|x-x-|x-x-|\\n"
			"kick   |x---|----|x---|----|"
		)
		pattern.instrument_names  # ("hi-hat", "kick")
		```

	Row lengths are not compared here; the renderer checks them.
	"""

	instrument_names: typing.List[str] = []
	track: typing.List[typing.Tuple[bool, ...]] = []

	for line_number, line in enumerate(text.splitlines(), start=1):

		if not line.strip():
			continue

		name, sequence = _split_line(line, line_number)

		if strict:
			_check_name(name, line, line_number)

		if name in instrument_names:
			raise drumseq.errors.DuplicateInstrumentError(name, line_number=line_number)

		row = tuple(_beat_to_bool(beat, strict, line, line_number) for beat in sequence)

		instrument_names.append(name)
		track.append(row)

		logger.debug(f"Parsed track {name!r} ({len(row)} steps, {sum(row)} hits)")

	return drumseq.pattern.Pattern(instrument_names=tuple(instrument_names), track=tuple(track))


def _split_line (line: str, line_number: int) -> typing.Tuple[str, str]:

	"""
	Split a line into its instrument name and its flattened beat symbols.
	"hi-hat |x-x-|x-x-|" -> ("hi-hat", "x-x-x-x-")
	"""

	name, separator, sequence = line.partition(drumseq.constants.SEPARATOR)

	if not separator:
		raise drumseq.errors.MalformedLineError(
			f"expected '{drumseq.constants.SEPARATOR}' after the instrument name",
			line_number = line_number,
			line = line
		)

	name = name.strip()

	if not name:
		raise drumseq.errors.FormatError("missing instrument name", line_number=line_number, line=line)

	return name, sequence.strip().replace(drumseq.constants.SEPARATOR, "")


def _check_name (name: str, line: str, line_number: int) -> None:

	if drumseq.constants.JOINER in name:
		raise drumseq.errors.FormatError(
			f"instrument name {name!r} must not contain '{drumseq.constants.JOINER}'",
			line_number = line_number,
			line = line
		)


def _beat_to_bool (beat: str, strict: bool, line: str, line_number: int) -> bool:

	if beat == drumseq.constants.REST:
		return False

	if strict and beat != drumseq.constants.HIT:
		raise drumseq.errors.InvalidBeatError(
			f"unexpected beat symbol {beat!r} (use '{drumseq.constants.HIT}' or '{drumseq.constants.REST}')",
			line_number = line_number,
			line = line
		)

	return True
