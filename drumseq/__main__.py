import logging
import sys

import drumseq.config
import drumseq.constants
import drumseq.renderer
import drumseq.sequencer


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main () -> None:

	"""
	Play the built-in demo pattern at the configured tempo.
	"""

	logger.info("drumseq starting...")

	settings = drumseq.config.load_settings()
	machine = drumseq.sequencer.DrumMachine(settings=settings)

	pattern = machine.parse(drumseq.constants.DEMO_PATTERN)
	logger.info("Pattern:\n" + drumseq.renderer.format_pattern(pattern))

	rendered = machine.render(pattern)

	try:
		machine.play(rendered)
	except KeyboardInterrupt:
		logger.info("Stopping...")
	finally:
		sys.stdout.write("\n")
		sys.stdout.flush()


if __name__ == "__main__":
	main()
