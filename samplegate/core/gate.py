"""
samplegate.core.gate
====================

The sample gate: decides which offered samples reach a statistic.

A `SampleGate` holds an ordered list of `Interval` objects together with a
`RangeMode` that says how to read them:

- `RangeMode.EXCLUDED`: samples inside the ranges are rejected
- `RangeMode.INCLUDED`: only samples inside the ranges are accepted
- `RangeMode.UNDEFINED`: nothing fixed yet; every real sample is accepted

The mode can be fixed exactly once. Adding a range without a mode fixes it
to EXCLUDED. Missing samples (``None``) and NaN are never accepted; NaN is
counted separately.

Only the first stored range takes part in a decision. Later ranges are kept
and reported by `get_ranges()` but do not change the outcome.

Examples
--------
>>> from samplegate.core.gate import SampleGate
>>> from samplegate.core.interval import Interval
>>> from samplegate.core.names import RangeMode
>>> gate = SampleGate()
>>> gate.add_range(Interval.closed(0, 10))
>>> gate.mode
<RangeMode.EXCLUDED: 'excluded'>
>>> gate.is_accepted(5.0), gate.is_accepted(20.0)
(False, True)
>>> gate.is_accepted(float("nan")), gate.num_nan
(False, 1)
>>> gate.add_range(Interval.closed(20, 30), RangeMode.INCLUDED)
Traceback (most recent call last):
...
samplegate.core.gate.ConfigurationError: Requested range mode 'included' is incompatible with the fixed mode 'excluded'
"""

from __future__ import annotations
import logging
import math
import warnings
from typing import Callable, List, Optional, Tuple

from samplegate.core.interval import Interval
from samplegate.core.names import RangeMode, SampleClass

logger = logging.getLogger(__name__)

# Hook invoked by `SampleGate.offer`; returns True when the sample was used.
UpdateHook = Callable[[Optional[float]], bool]


class ConfigurationError(ValueError):
    """Raised when a gate's ranges or range mode are configured inconsistently."""


class SampleGate:
    """
    Range-based acceptance filter with offer counters.

    Parameters
    ----------
    mode : RangeMode, default=RangeMode.UNDEFINED
        Initial range mode. Seeding a fixed mode locks it immediately.
    """

    def __init__(self, mode: RangeMode = RangeMode.UNDEFINED) -> None:
        self._ranges: List[Interval] = []
        self._mode = RangeMode(mode)
        self._num_offered = 0
        self._num_accepted = 0
        self._num_nan = 0

    def __repr__(self) -> str:
        ranges = ", ".join(str(r) for r in self._ranges)
        return (
            f"SampleGate(mode={self._mode.value}, ranges=[{ranges}], "
            f"offered={self._num_offered}, accepted={self._num_accepted}, "
            f"nan={self._num_nan})"
        )

    # ---- configuration ----

    def add_range(
        self, interval: Optional[Interval], mode: Optional[RangeMode] = None
    ) -> None:
        """
        Store ``interval`` and, if needed, fix the range mode.

        Without ``mode`` an undefined gate becomes EXCLUDED. With ``mode`` an
        undefined gate adopts it, while a gate whose mode is already fixed
        must be asked for the same mode. A ``None`` interval is ignored.

        Raises
        ------
        ConfigurationError
            If ``mode`` is UNDEFINED or differs from the fixed mode. The
            interval is not stored in that case.
        """
        if interval is None:
            return

        if mode is None:
            if self._mode is RangeMode.UNDEFINED:
                self._fix_mode(RangeMode.EXCLUDED)
        else:
            mode = RangeMode(mode)
            if mode is RangeMode.UNDEFINED:
                raise ConfigurationError(
                    "A range must be added with RangeMode.INCLUDED or RangeMode.EXCLUDED"
                )
            if self._mode is RangeMode.UNDEFINED:
                self._fix_mode(mode)
            elif self._mode is not mode:
                raise ConfigurationError(
                    f"Requested range mode '{mode.value}' is incompatible "
                    f"with the fixed mode '{self._mode.value}'"
                )

        self._ranges.append(interval)

    def set_mode(self, mode: RangeMode) -> None:
        """
        Fix the range mode without adding a range.

        Raises
        ------
        ConfigurationError
            If the mode has already been fixed.
        """
        if self._mode is not RangeMode.UNDEFINED:
            raise ConfigurationError(
                f"Range mode is already fixed to '{self._mode.value}'"
            )
        mode = RangeMode(mode)
        if mode is not RangeMode.UNDEFINED:
            self._fix_mode(mode)

    def add_excluded_range(self, interval: Optional[Interval]) -> None:
        """
        Store ``interval`` without touching the range mode.

        On a gate whose mode is still UNDEFINED the stored range has no
        effect on decisions and every real sample stays accepted.

        .. deprecated::
            Use `add_range`, which also fixes the range mode.
        """
        warnings.warn(
            "SampleGate.add_excluded_range is deprecated; use add_range instead",
            DeprecationWarning,
            stacklevel=2,
        )
        if interval is not None:
            self._ranges.append(interval)

    def _fix_mode(self, mode: RangeMode) -> None:
        self._mode = mode
        logger.debug("Range mode fixed to %s", mode.value)

    # ---- queries ----

    def get_ranges(self) -> Tuple[Interval, ...]:
        """Return the stored ranges in insertion order."""
        return tuple(self._ranges)

    def get_excluded_ranges(self) -> Tuple[Interval, ...]:
        """
        .. deprecated::
            Use `get_ranges`.
        """
        warnings.warn(
            "SampleGate.get_excluded_ranges is deprecated; use get_ranges instead",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.get_ranges()

    @property
    def mode(self) -> RangeMode:
        return self._mode

    @property
    def num_offered(self) -> int:
        """Number of samples passed to `offer`."""
        return self._num_offered

    @property
    def num_accepted(self) -> int:
        """Number of offered samples that the update hook reported as used."""
        return self._num_accepted

    @property
    def num_nan(self) -> int:
        """Number of NaN samples seen by `is_accepted` and `is_excluded`."""
        return self._num_nan

    # ---- decisions ----

    def classify(self, sample: Optional[float]) -> SampleClass:
        """
        Classify ``sample`` without touching any counter.

        Examples
        --------
        >>> gate = SampleGate(RangeMode.INCLUDED)
        >>> gate.add_range(Interval.closed(0, 1))
        >>> [gate.classify(x).value for x in (None, float("nan"), 0.5, 2.0)]
        ['absent', 'nan', 'accepted', 'rejected']
        """
        if sample is None:
            return SampleClass.ABSENT
        if math.isnan(sample):
            return SampleClass.NAN

        if self._ranges:
            # first range decides
            inside = self._ranges[0].contains(sample)
            if self._mode is RangeMode.EXCLUDED:
                return SampleClass.REJECTED if inside else SampleClass.ACCEPTED
            if self._mode is RangeMode.INCLUDED:
                return SampleClass.ACCEPTED if inside else SampleClass.REJECTED

        return SampleClass.ACCEPTED

    def is_accepted(self, sample: Optional[float]) -> bool:
        """Return True if ``sample`` should be used. Counts NaN samples."""
        outcome = self.classify(sample)
        if outcome is SampleClass.NAN:
            self._num_nan += 1
        return outcome is SampleClass.ACCEPTED

    def is_excluded(self, sample: Optional[float]) -> bool:
        """
        Return True if ``sample`` should be ignored. Counts NaN samples.

        .. deprecated::
            Use `is_accepted` with the opposite logic.
        """
        warnings.warn(
            "SampleGate.is_excluded is deprecated; use is_accepted instead",
            DeprecationWarning,
            stacklevel=2,
        )
        outcome = self.classify(sample)
        if outcome is SampleClass.NAN:
            self._num_nan += 1
        return outcome is not SampleClass.ACCEPTED

    # ---- bridging ----

    def offer(self, sample: Optional[float], update: UpdateHook) -> None:
        """
        Count ``sample`` as offered and hand it to ``update``.

        ``update`` decides whether the sample is consumed (normally through
        `is_accepted`) and returns True if it was.
        """
        self._num_offered += 1
        if update(sample):
            self._num_accepted += 1
