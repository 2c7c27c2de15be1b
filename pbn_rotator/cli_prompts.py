# pbn_rotator/cli_prompts.py
from __future__ import annotations

from typing import Callable, Optional, Sequence, TypeVar

T = TypeVar("T")


def prompt_choice(
    prompt: str,
    options: Sequence[T],
    *,
    default_index: int = 0,
    label: Optional[Callable[[T], str]] = None,
) -> T:
    """
    Choose one item from `options` by number.

    - Shows a numbered list (1..N), using `label` to describe each option
    - Empty input returns options[default_index]
    - Re-prompts on invalid input
    """
    if not options:
        raise ValueError("prompt_choice: options must not be empty")

    if default_index < 0 or default_index >= len(options):
        raise ValueError("prompt_choice: default_index out of range")

    describe = label or str
    for i, opt in enumerate(options, start=1):
        print(f"  {i}) {describe(opt)}")

    while True:
        try:
            raw = input(f"{prompt} [{default_index + 1}]: ").strip()
        except EOFError:
            raise RuntimeError("Input aborted (EOF) while prompting user.")

        if raw == "":
            return options[default_index]

        try:
            n = int(raw)
        except ValueError:
            print(f"Please enter a number between 1 and {len(options)}.")
            continue

        if 1 <= n <= len(options):
            return options[n - 1]

        print(f"Please enter a number between 1 and {len(options)}.")
