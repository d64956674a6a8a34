import logging

import drumseq
import drumseq.constants

logging.basicConfig(level=logging.INFO)

# Four steps per beat, so each measure lasts four beats of 100 BPM. The rock
# beat plays once, then a fill that is cut off after its fifteenth step.

machine = drumseq.DrumMachine(settings=drumseq.Settings(bpm=100, steps_per_beat=4))

pattern = machine.parse(drumseq.constants.DEMO_PATTERN)
print(drumseq.format_pattern(pattern))

machine.play(machine.render(pattern))
print()

fill = machine.parse("""
	closed hat |x-x-|x-x-|x-x-|x---|
	open hat   |----|----|----|--x-|
	snare      |----|x---|----|x-xx|
	kick       |x---|--x-|x---|----|
""")


def stop_on_last_snare (index: int, token: str) -> None:

	if index == 14:
		machine.stop()


machine.on_event("step", stop_on_last_snare)
machine.play(machine.render(fill))
print()
