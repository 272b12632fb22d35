"""Terminal input and output used by the game."""

from __future__ import annotations

import random
import sys
from typing import Callable, Optional, TextIO

CONTINUE_PROMPT = "\nPress Enter to continue..."


class Console:
    """Reads answers from a line source and writes text to a stream."""

    def __init__(
        self,
        input_func: Callable[[], str] = input,
        output: Optional[TextIO] = None,
    ) -> None:
        self._input = input_func
        self._output = output if output is not None else sys.stdout

    def write(self, text: str) -> None:
        """Write text as is, without adding a newline."""
        self._output.write(text)
        self._output.flush()

    def ask(self, prompt: str) -> str:
        """Show a prompt and return the next line; end of input reads as empty."""
        self.write(prompt)
        try:
            answer = self._input()
        except EOFError:
            return ""
        return answer.rstrip("\r\n")

    def wait_for_enter(self) -> None:
        """Pause until the user presses Enter."""
        self.ask(CONTINUE_PROMPT)


def roll_dice(rng: Optional[random.Random] = None) -> int:
    """Return a die roll between 1 and 6."""
    source = rng if rng is not None else random
    return source.randint(1, 6)