"""
Reading persisted samples back from disk.
"""

import os

import h5py
import numpy as np


def load_samples(path: str, dataset: str = "params", populated_only: bool = False) -> np.ndarray:
    """
    Load samples written by ChunkedHDF5Sink.

    Parameters:
    ----------
        path (str): HDF5 file written by a persisted run.
        dataset (str): Dataset name inside the file.
        populated_only (bool): Return only the columns that were actually
            written (the ``populated`` attribute), instead of the full
            pre-allocated (d, n_samples) array.

    Returns:
    -------
        samples (np.ndarray): Array of shape (d, n) with n = n_samples or the
        populated column count.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"The file {path} does not exist.")

    with h5py.File(path, "r") as f:
        if dataset not in f:
            raise KeyError(f"Dataset '{dataset}' not found in {path}.")
        dset = f[dataset]
        if populated_only:
            n = int(dset.attrs.get("populated", dset.shape[1]))
            return dset[:, :n]
        return dset[()]
