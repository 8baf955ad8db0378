"""AmplifierNetwork: Intcode programs wired into a feedback loop.

    +---+    +---+    +---+    +---+    +---+
0 ->| A |--->| B |--->| C |--->| D |--->| E |--+
    +---+    +---+    +---+    +---+    +---+  |
      ^                                        |
      +----------------------------------------+

Every amplifier runs its own copy of one program. Its first input is a phase
setting; every later input is the signal produced by the amplifier before it.
The amplifiers are resumed one run_program() call at a time in a fixed cyclic
order until the active one halts. The trial result is the last signal the
final amplifier produced.

With phase settings 0-4 the programs output once and halt when resumed, so
the same loop also evaluates a plain serial chain.
"""

import itertools
import logging
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .program import IntcodeProgram

logger = logging.getLogger(__name__)


class AmplifierNetwork:
    """Phase-setting search over a cyclic chain of amplifiers.

    Attributes:
        program: Initial memory image shared (by copy) by every amplifier
        amplifier_count: Number of amplifiers in the loop
        phase_bias: Lowest phase setting; settings are bias .. bias+count-1
        initial_signal: Signal fed to the first amplifier
    """

    DEFAULT_AMPLIFIERS = 5
    SERIAL_PHASE_BIAS = 0
    FEEDBACK_PHASE_BIAS = 5

    def __init__(
        self,
        program: Iterable[int],
        amplifier_count: int = DEFAULT_AMPLIFIERS,
        phase_bias: int = FEEDBACK_PHASE_BIAS,
        initial_signal: int = 0,
        max_cycles: Optional[int] = None,
    ):
        if amplifier_count < 1:
            raise ValueError("amplifier_count must be at least 1")
        self.program: List[int] = list(program)
        self.amplifier_count = amplifier_count
        self.phase_bias = phase_bias
        self.initial_signal = initial_signal
        self.max_cycles = max_cycles

    def phase_permutations(self) -> Iterator[Tuple[int, ...]]:
        """Lazily yield every ordering of the phase settings."""
        phases = range(self.phase_bias, self.phase_bias + self.amplifier_count)
        return itertools.permutations(phases)

    def build_amplifiers(self, phases: Sequence[int]) -> List[IntcodeProgram]:
        """Create one program per amplifier, seeded with its phase setting."""
        if len(phases) != self.amplifier_count:
            raise ValueError(
                f"Expected {self.amplifier_count} phase settings, got {len(phases)}"
            )
        return [
            IntcodeProgram(self.program, phase, self.initial_signal, max_cycles=self.max_cycles)
            for phase in phases
        ]

    def run_trial(self, phases: Sequence[int]) -> int:
        """Run the loop for one phase ordering.

        Args:
            phases: Phase setting for each amplifier, in loop order

        Returns:
            The last signal produced by the final amplifier before the loop
            halted (the initial signal if it never produced one)

        Raises:
            IntcodeError: If any amplifier faults; the trial is abandoned
        """
        amplifiers = self.build_amplifiers(phases)
        last = self.amplifier_count - 1

        signal = self.initial_signal
        result = self.initial_signal
        index = 0
        while True:
            amplifier = amplifiers[index]
            amplifier.set_input(signal)

            output = amplifier.run_program()
            if output is None:
                break
            signal = output

            if index == last:
                result = signal
            index = (index + 1) % self.amplifier_count

        logger.debug("Phases %s -> signal %d", tuple(phases), result)
        return result

    def best_phases(self) -> Tuple[Tuple[int, ...], int]:
        """Search every phase ordering exhaustively.

        The best signal is the true maximum, so it can be negative when every
        ordering yields a negative signal; there is no floor at zero.

        Returns:
            (phases, signal) for the ordering with the highest final signal
        """
        best: Optional[Tuple[Tuple[int, ...], int]] = None
        for phases in self.phase_permutations():
            signal = self.run_trial(phases)
            if best is None or signal > best[1]:
                best = (phases, signal)

        logger.info("Best phases %s -> signal %d", best[0], best[1])
        return best

    def max_signal(self) -> int:
        """Highest final signal over all phase orderings."""
        return self.best_phases()[1]
