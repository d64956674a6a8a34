
"""
drumseq - the sequencer core of a text-based drum machine.

drumseq reads drum patterns written as ASCII grids, works out which
instruments play on each step of the measure, and prints the steps out in
time at a chosen tempo. There is no audio engine: playback paces text.

- **Parse.** One line per instrument: a name, then the measure's beats in
  ``|``-separated groups. ``x`` plays, ``-`` rests. Duplicate instruments and
  lines without a separator are rejected.
- **Render.** Flattens the grid into one token per step, naming the
  instruments that play together in the order they were written.
- **Play.** Writes each step to a stream and sleeps for the interval implied
  by the tempo. Blocking and asyncio variants, stoppable between steps, with
  ``start``/``step``/``stop`` events for listeners.

Minimal example:

    ```python
    import drumseq

    machine = drumseq.DrumMachine()

    pattern = machine.parse(
        "hi-hat |x-x-|x-x-|x-x-|x-x-|\n"
        "snare  |----|x---|----|x---|\n"
        "kick   |x---|----|x---|----|"
    )

    rendered = machine.render(pattern)
    # |hi-hat,kick|-|hi-hat|-|hi-hat,snare|-|hi-hat|-|hi-hat,kick|-|hi-hat|-|hi-hat,snare|-|hi-hat|-|

    machine.play(rendered, bpm=120)
    ```

Package-level exports: ``DrumMachine``, ``Pattern``, ``Settings``, ``parse``,
``render``, ``format_pattern``, ``load_settings``.
"""

import drumseq.config
import drumseq.pattern
import drumseq.parser
import drumseq.renderer
import drumseq.sequencer


DrumMachine = drumseq.sequencer.DrumMachine
Pattern = drumseq.pattern.Pattern
Settings = drumseq.config.Settings
parse = drumseq.parser.parse
render = drumseq.renderer.render
format_pattern = drumseq.renderer.format_pattern
load_settings = drumseq.config.load_settings
