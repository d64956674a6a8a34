"""Turn a pattern into text.

:func:`render` flattens a pattern into one token per step, naming the
instruments that play on that step::

	|hi-hat,kick|-|hi-hat|-|hi-hat,snare|-|hi-hat|-|

:func:`split_steps` recovers the step tokens from such a string, and
:func:`format_pattern` writes a pattern back out as a grid in the notation the
parser reads::

	hi-hat |x-x-|x-x-|x-x-|x-x-|
	snare  |----|x---|----|x---|
	kick   |x---|----|x---|----|
"""

import typing

import drumseq.constants
import drumseq.errors
import drumseq.pattern


def active_instruments (pattern: drumseq.pattern.Pattern) -> typing.List[typing.Tuple[str, ...]]:

	"""
	Return, for each step, the instruments that play on it.

	Names keep the pattern's instrument order. Raises ``RaggedTrackError``
	if the tracks have different lengths.
	"""

	steps: typing.List[typing.Tuple[str, ...]] = []

	for step in range(pattern.step_count):
		steps.append(tuple(
			name
			for name, row in zip(pattern.instrument_names, pattern.track)
			if row[step]
		))

	return steps


def render (pattern: drumseq.pattern.Pattern) -> str:

	"""
	Render one play of the pattern as a ``|``-delimited string of steps.

	Each step is a comma-joined list of the instruments playing on it, or
	``-`` when nothing plays. A pattern with no instruments or no steps renders
	as an empty string.

	Raises:
		RaggedTrackError: The tracks do not all have the same number of steps.
	"""

	tokens = [
		drumseq.constants.JOINER.join(names) if names else drumseq.constants.REST
		for names in active_instruments(pattern)
	]

	if not tokens:
		return ""

	separator = drumseq.constants.SEPARATOR

	return separator + separator.join(tokens) + separator


def split_steps (rendered: str) -> typing.List[str]:

	"""
	Split a rendered string back into its step tokens.

	"|kick|-|snare|" -> ["kick", "-", "snare"]

	Only one separator is taken off each end. An empty render gives an empty
	list. Raises ``FormatError`` when two separators have nothing between them,
	including at either end, so a broken render never loses a step.
	"""

	separator = drumseq.constants.SEPARATOR
	body = rendered.strip().removeprefix(separator).removesuffix(separator)

	if not body:
		return []

	tokens = body.split(separator)

	for index, token in enumerate(tokens):
		if not token:
			raise drumseq.errors.FormatError(f"Step {index} of the render is empty")

	return tokens


def format_pattern (pattern: drumseq.pattern.Pattern, group_size: int = drumseq.constants.DEFAULT_GROUP_SIZE) -> str:

	"""
	Write the pattern as a grid, one line per track, in the parser's notation.

	Names are padded to a common width so the grids line up, and beats are
	split into groups of ``group_size`` steps.
	"""

	if group_size <= 0:
		raise ValueError("group_size must be positive")

	step_count = pattern.step_count

	if not pattern.instrument_names:
		return ""

	label_width = max(len(name) for name in pattern.instrument_names)
	separator = drumseq.constants.SEPARATOR
	lines: typing.List[str] = []

	for name, row in zip(pattern.instrument_names, pattern.track):

		beats = "".join(drumseq.constants.HIT if hit else drumseq.constants.REST for hit in row)
		groups = [beats[i:i + group_size] for i in range(0, step_count, group_size)]

		lines.append(f"{name.ljust(label_width)} {separator}" + "".join(group + separator for group in groups))

	return "\n".join(lines)
