from typing import Union

import numpy as np

RandomState = Union[int, np.random.Generator, None]


def as_generator(random_state: RandomState) -> np.random.Generator:
    """Turn a seed or generator into an owned `numpy.random.Generator`.

    Passing a `Generator` returns the same object, so draws advance the caller's
    stream. Passing an `int` or `None` creates a fresh generator.

    Args:
        random_state (int | np.random.Generator | None): Seed or generator.

    Returns:
        np.random.Generator: The random source.
    """
    if isinstance(random_state, np.random.Generator):
        return random_state
    if isinstance(random_state, np.random.RandomState):
        raise TypeError(
            "Legacy `np.random.RandomState` objects are not supported. "
            "Pass an integer seed or a `np.random.Generator`."
        )
    return np.random.default_rng(random_state)


def print_message(source: str, message: str, level: int = 0, verbose: int = 0):
    """Print `[source] message` if the verbosity is at least `level`.

    Args:
        source (str): Name of the calling routine, printed in brackets.
        message (str): The message.
        level (int, optional): Level of the message. Defaults to 0.
        verbose (int, optional): Verbosity of the caller. Defaults to 0.
    """
    if level <= verbose:
        print(f"[{source}]", message)


def relative_change(current: float, previous: float, offset: float = 0.01) -> float:
    """Relative change $|c - p| / (p + \\text{offset})$ used by the stopping rules.

    The offset keeps the ratio finite for values close to zero.
    """
    return abs(current - previous) / (previous + offset)
