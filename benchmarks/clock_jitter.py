"""Playback clock jitter benchmark.

Plays a measure of steps through the playback clock and measures how far
each step lands from its ideal time (first step + index * interval).

Usage:
    python benchmarks/clock_jitter.py [--bpm BPM] [--steps N] [--async] [--compare]

Options:
    --bpm BPM           Tempo in BPM, one step per beat (default: 600)
    --steps N           Number of steps to measure (default: 64)
    --async             Measure play_async() instead of the blocking play()
    --compare           Run both modes and print a side-by-side comparison
"""

import argparse
import asyncio
import io
import logging
import statistics
import time

# Suppress playback logging during benchmark — we want clean output.
logging.basicConfig(level=logging.ERROR)

import drumseq.clock


def _run_benchmark (bpm: float, steps: int, use_async: bool) -> list[float]:

	"""Play *steps* steps and return per-step jitter (seconds)."""

	step_times: list[float] = []
	interval = drumseq.clock.step_interval(bpm)
	rendered = "|" + "|".join(["kick"] + ["-"] * (steps - 1)) + "|"

	clock = drumseq.clock.PlaybackClock(output=io.StringIO())
	clock.events.on("step", lambda index, token: step_times.append(time.perf_counter()))

	if use_async:
		asyncio.run(clock.play_async(rendered, bpm))
	else:
		clock.play(rendered, bpm)

	return [t - (step_times[0] + i * interval) for i, t in enumerate(step_times)]


def _print_report (jitter: list[float], bpm: float, use_async: bool, label: str = "") -> None:

	if not jitter:
		print("No jitter data collected.")
		return

	ms = [j * 1000 for j in jitter]

	mean_ms   = statistics.mean(ms)
	median_ms = statistics.median(ms)
	stdev_ms  = statistics.stdev(ms) if len(ms) > 1 else 0.0
	p95_ms    = sorted(ms)[int(len(ms) * 0.95)]
	max_ms    = max(ms)

	# Accumulated drift would show up as a growing gap between first and last samples.
	drift_ms  = ms[-1] - ms[0] if len(ms) > 1 else 0.0

	interval_ms = drumseq.clock.step_interval(bpm) * 1000

	mode = "play_async()" if use_async else "play()"
	header = f"  {label}  " if label else ""

	print(f"\nPlayback Jitter Benchmark{header}— {len(ms)} steps at {bpm:.0f} BPM ({mode})")
	print(f"{'─' * 62}")
	print(f"  Step interval   : {interval_ms:.3f} ms")
	print(f"{'─' * 62}")
	print(f"  Mean jitter     : {mean_ms:>8.3f} ms")
	print(f"  Median jitter   : {median_ms:>8.3f} ms")
	print(f"  Std deviation   : {stdev_ms:>8.3f} ms")
	print(f"  P95 jitter      : {p95_ms:>8.3f} ms")
	print(f"  Max jitter      : {max_ms:>8.3f} ms")
	print(f"  Clock drift     : {drift_ms:>+8.3f} ms")
	print(f"{'─' * 62}")
	print()


def main () -> None:

	parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
	parser.add_argument("--bpm",     type=float, default=600, help="Tempo in BPM (default: 600)")
	parser.add_argument("--steps",   type=int,   default=64,  help="Steps to measure (default: 64)")
	parser.add_argument("--async",   action="store_true", dest="use_async", help="Measure play_async()")
	parser.add_argument("--compare", action="store_true", help="Run both modes and compare")
	args = parser.parse_args()

	if args.steps <= 0:
		parser.error("--steps must be positive")

	if args.compare:
		print("\nRunning play() ...")
		_print_report(_run_benchmark(args.bpm, args.steps, use_async=False), args.bpm, use_async=False, label="[blocking]")

		print("Running play_async() ...")
		_print_report(_run_benchmark(args.bpm, args.steps, use_async=True), args.bpm, use_async=True, label="[async]")

	else:
		_print_report(_run_benchmark(args.bpm, args.steps, args.use_async), args.bpm, args.use_async)


if __name__ == "__main__":
	main()
