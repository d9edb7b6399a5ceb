"""DeprecationWarning helpers for "path@preset" keys and the text() renderers.

Python 3.13+.
"""

import functools
import warnings
from collections.abc import Callable

__all__ = ["deprecated", "warn_deprecated"]


def warn_deprecated(
    feature: str,
    *,
    removal_version: str,
    alternative: str | None = None,
    stacklevel: int = 2,
) -> None:
    """Warn that `feature` goes away in `removal_version`."""
    msg = f"{feature} is deprecated and will be removed in version {removal_version}."
    if alternative:
        msg += f" Use {alternative} instead."
    warnings.warn(msg, DeprecationWarning, stacklevel=stacklevel)


def deprecated[**P, R](
    *, removal_version: str, alternative: str | None = None
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Wrap a callable so each call warns; the docstring gains a deprecation note."""

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            # Point the warning at whoever called the deprecated function.
            warn_deprecated(
                f"{func.__qualname__}()",
                removal_version=removal_version,
                alternative=alternative,
                stacklevel=3,
            )
            return func(*args, **kwargs)

        lines = [".. deprecated::", f"    Will be removed in version {removal_version}."]
        if alternative:
            lines.append(f"    Use :func:`{alternative}` instead.")
        note = "\n".join(lines)
        wrapper.__doc__ = f"{wrapper.__doc__}\n\n{note}" if wrapper.__doc__ else note
        return wrapper

    return decorator
