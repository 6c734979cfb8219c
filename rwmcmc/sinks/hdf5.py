"""
Chunked HDF5 storage of kept samples.

Samples are gathered in a fixed (d, capacity) buffer and copied to a
pre-allocated (d, n_samples) dataset one full buffer at a time, so memory use
does not grow with the length of the chain.
"""

from typing import Optional

import h5py
import numpy as np

from rwmcmc.core.errors import DatasetAllocationError
from rwmcmc.core.sink import SinkProtocol
from rwmcmc.sinks.buffer import ChunkCounter, advance
from rwmcmc.utils.logging import RWMLogger

logger = RWMLogger.get_logger(__name__)


class ChunkedHDF5Sink(SinkProtocol):
    """
    Sink that streams kept samples to an HDF5 dataset in column blocks.

    The file is opened with mode "w", so an existing file at ``path`` is
    truncated. The dataset has shape (dim, n_samples), dtype float64 and
    chunks of ``buffer_capacity`` columns, matching the flush granularity.

    Attributes:
        path (str): Location of the HDF5 file.
        dim (int): Number of parameters.
        n_samples (int): Total number of kept samples in the run.
        buffer_capacity (int): Columns held in memory between flushes.
        flush_partial (bool): Write a partially filled buffer on ``finalize``.
            When False, those samples are dropped and a warning is logged.
        dataset (str): Name of the dataset inside the file.
    """

    def __init__(
        self,
        path: str,
        dim: int,
        n_samples: int,
        buffer_capacity: int = 25000,
        flush_partial: bool = True,
        dataset: str = "params",
    ):
        if dim < 1 or n_samples < 1 or buffer_capacity < 1:
            raise DatasetAllocationError(
                "Cannot allocate sample dataset with "
                f"dim={dim}, n_samples={n_samples}, buffer_capacity={buffer_capacity}."
            )

        self.path = str(path)
        self.dim = dim
        self.n_samples = n_samples
        self.buffer_capacity = buffer_capacity
        self.flush_partial = flush_partial
        self.dataset = dataset

        self._counter = ChunkCounter(buffer_capacity)
        self._populated = 0
        self._file: Optional[h5py.File] = None

        try:
            self._file = h5py.File(self.path, "w")
            self._dset = self._file.create_dataset(
                dataset,
                shape=(dim, n_samples),
                dtype=np.float64,
                chunks=(dim, min(buffer_capacity, n_samples)),
            )
        except (OSError, ValueError) as exc:
            self.close()
            raise DatasetAllocationError(
                f"Could not allocate dataset '{dataset}' of shape ({dim}, {n_samples}) in {self.path}"
            ) from exc

        # Allocated once and overwritten in place after every flush
        self._buffer = np.empty((dim, buffer_capacity), dtype=np.float64)

        logger.debug(
            f"Allocated {self.path}:{dataset} with shape ({dim}, {n_samples}), "
            f"chunk width {min(buffer_capacity, n_samples)}"
        )

    @property
    def fill_count(self) -> int:
        """Samples waiting in the buffer."""
        return self._counter.fill_count

    @property
    def flush_count(self) -> int:
        """Full buffers written so far."""
        return self._counter.flush_count

    @property
    def populated(self) -> int:
        """Columns of the dataset that hold samples."""
        return self._populated

    def emit(self, position: np.ndarray) -> None:
        self._buffer[:, self._counter.fill_count] = np.ravel(position)
        self._counter, destination = advance(self._counter)

        if destination is not None:
            self._write(destination, self._buffer)

    def finalize(self) -> None:
        """
        Handle any partially filled buffer and close the file.

        The number of populated columns is stored in the ``populated``
        attribute of the dataset.
        """
        if self._file is None:
            return None

        leftover = self._counter.fill_count
        if leftover:
            if self.flush_partial:
                self._write(self._counter.pending, self._buffer[:, :leftover])
            else:
                logger.warning(
                    f"Dropping {leftover} samples left in a partial buffer; "
                    f"{self._populated} of {self.n_samples} columns of {self.path} are populated"
                )

        self._dset.attrs["populated"] = self._populated
        self.close()
        return None

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def _write(self, destination: slice, block: np.ndarray) -> None:
        self._dset[:, destination] = block
        self._populated = destination.stop
        logger.debug(f"Wrote columns [{destination.start}, {destination.stop}) to {self.path}")

    def __enter__(self) -> "ChunkedHDF5Sink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
