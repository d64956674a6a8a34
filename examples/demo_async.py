import asyncio
import logging

import drumseq
import drumseq.constants

logging.basicConfig(level=logging.INFO)


async def main () -> None:

	machine = drumseq.DrumMachine(settings=drumseq.Settings(bpm=480))
	rendered = machine.render(machine.parse(drumseq.constants.DEMO_PATTERN))

	async def on_step (index: int, token: str) -> None:
		if token != "-":
			logging.info(f"Step {index + 1}: {token}")

	machine.on_event("step", on_step)

	# Stop after two seconds, wherever playback has got to.
	playback = asyncio.create_task(machine.play_async(rendered))
	await asyncio.sleep(2.0)
	machine.stop()
	await playback
	print()


if __name__ == "__main__":
	asyncio.run(main())
