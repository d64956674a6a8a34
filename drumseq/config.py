"""YAML configuration for the drum machine.

A config file is optional.  Every key has a default::

	sequencer:
	  bpm: 120            # tempo used when play() is not given one
	  steps_per_beat: 1   # 4 paces quarter notes instead of steps
	parser:
	  strict: false       # only accept 'x' and '-' as beats
"""

import dataclasses
import logging
import os
import typing

import yaml

import drumseq.constants


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "drumseq.yaml"

_KNOWN_KEYS: typing.Dict[str, typing.Set[str]] = {
	"sequencer": {"bpm", "steps_per_beat"},
	"parser": {"strict"},
}


@dataclasses.dataclass
class Settings:

	"""
	Resolved settings for a :class:`~drumseq.sequencer.DrumMachine`.
	"""

	bpm: float = drumseq.constants.DEFAULT_BPM
	steps_per_beat: int = drumseq.constants.DEFAULT_STEPS_PER_BEAT
	strict: bool = False


	def __post_init__ (self) -> None:

		if isinstance(self.bpm, bool) or not isinstance(self.bpm, (int, float)) or not self.bpm > 0:
			raise ValueError(f"bpm must be a positive number, got {self.bpm!r}")

		if isinstance(self.steps_per_beat, bool) or not isinstance(self.steps_per_beat, int) or self.steps_per_beat <= 0:
			raise ValueError(f"steps_per_beat must be a positive integer, got {self.steps_per_beat!r}")

		if not isinstance(self.strict, bool):
			raise ValueError(f"strict must be true or false, got {self.strict!r}")


def load_config (config_path: str = DEFAULT_CONFIG_PATH) -> dict:

	"""
	Load configuration from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		data = yaml.safe_load(f)

	if data is None:
		return {}

	if not isinstance(data, dict):
		raise ValueError(f"Config file {config_path} must contain a mapping at the top level")

	return data


def settings_from_dict (config: typing.Dict[str, typing.Any]) -> Settings:

	"""
	Build ``Settings`` from a parsed config mapping, warning about unknown keys.
	"""

	for section, values in config.items():

		if section not in _KNOWN_KEYS:
			logger.warning(f"Ignoring unknown config section {section!r}")
			continue

		if not isinstance(values, dict):
			raise ValueError(f"Config section {section!r} must be a mapping")

		for key in values:
			if key not in _KNOWN_KEYS[section]:
				logger.warning(f"Ignoring unknown config key {section}.{key}")

	sequencer = config.get('sequencer') or {}
	parser = config.get('parser') or {}

	return Settings(
		bpm = sequencer.get('bpm', drumseq.constants.DEFAULT_BPM),
		steps_per_beat = sequencer.get('steps_per_beat', drumseq.constants.DEFAULT_STEPS_PER_BEAT),
		strict = parser.get('strict', False)
	)


def load_settings (config_path: str = DEFAULT_CONFIG_PATH) -> Settings:

	"""
	Load ``Settings`` from a YAML file, falling back to defaults when it is missing.
	"""

	return settings_from_dict(load_config(config_path))
