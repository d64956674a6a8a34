"""Notation constants shared by the parser, renderer and playback clock.

A pattern line looks like::

	hi-hat |x-x-|x-x-|x-x-|x-x-|

and a rendered measure looks like::

	|hi-hat,kick|-|hi-hat|-|
"""

SEPARATOR = "|"
REST = "-"
HIT = "x"
JOINER = ","

DEFAULT_BPM = 120
DEFAULT_STEPS_PER_BEAT = 1
DEFAULT_GROUP_SIZE = 4

SECONDS_PER_MINUTE = 60.0

# Standard rock beat, one measure of sixteenth-note steps.
DEMO_PATTERN = (
	"hi-hat |x-x-|x-x-|x-x-|x-x-|\n"
	"snare  |----|x---|----|x---|\n"
	"kick   |x---|----|x---|----|"
)
