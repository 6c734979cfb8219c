"""
Run configuration for the random walk Metropolis sampler.

This module provides the SamplerConfig dataclass which gathers the knobs of a
single run (burn-in, thinning, persistence) and validates them before any
sampling work happens.
"""

from dataclasses import dataclass
from typing import List


def _is_int(value) -> bool:
    """True for Python and numpy integers, False for bools."""
    return not isinstance(value, bool) and hasattr(value, "__index__")


@dataclass(frozen=True)
class SamplerConfig:
    """
    Configuration of a single random walk Metropolis run.

    Attributes:
        burn (int):
            Number of Metropolis steps discarded before collection starts.
            Default: 1000.

        skip (int):
            Thinning interval. One sample is kept every ``skip`` steps.
            Default: 5.

        persist (bool):
            If True, kept samples are streamed to an HDF5 file instead of
            being returned in memory. Default: False.

        dataset_name (str):
            Path of the HDF5 file written when ``persist`` is True.
            Default: "Samples".

        buffer_capacity (int):
            Number of samples held in memory between two flushes to disk.
            Also the chunk width of the HDF5 dataset. Default: 25000.

        flush_partial (bool):
            If True, samples left in a partially filled buffer at the end of
            the run are written to disk. If False they are dropped, which
            reproduces the historical behaviour of the chunked writer.
            Default: True.

        print_iteration (int):
            Log progress every ``print_iteration`` collection steps.
            0 disables progress messages. Default: 0.

    Examples:
        >>> config = SamplerConfig(burn=500, skip=2)
        >>> config.persist
        False
    """

    burn: int = 1000
    skip: int = 5
    persist: bool = False
    dataset_name: str = "Samples"
    buffer_capacity: int = 25000
    flush_partial: bool = True
    print_iteration: int = 0

    def __post_init__(self) -> None:
        errors: List[str] = []

        if not _is_int(self.burn) or self.burn < 1:
            errors.append(f"burn must be a positive integer, got {self.burn!r}")

        if not _is_int(self.skip) or self.skip < 1:
            errors.append(f"skip must be a positive integer, got {self.skip!r}")

        if not _is_int(self.buffer_capacity) or self.buffer_capacity < 1:
            errors.append(
                f"buffer_capacity must be a positive integer, got {self.buffer_capacity!r}"
            )

        if not _is_int(self.print_iteration) or self.print_iteration < 0:
            errors.append(
                f"print_iteration must be a non-negative integer, got {self.print_iteration!r}"
            )

        if self.persist and not str(self.dataset_name):
            errors.append("dataset_name must be a non-empty path when persist=True")

        if errors:
            raise ValueError("Invalid sampler configuration:\n  " + "\n  ".join(errors))


def validate_n_samples(n_samples) -> None:
    """
    Check the number of kept samples requested for a run.

    Raises:
        ValueError: If ``n_samples`` is not a positive integer.
    """
    if not _is_int(n_samples) or n_samples < 1:
        raise ValueError(f"n_samples must be a positive integer, got {n_samples!r}")
