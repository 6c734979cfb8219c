"""
Script housing some helper functions
"""

# Imports
import numpy as np

def is_positive_definite(A: np.ndarray) -> bool:
    """
    Check if a matrix A is positive definite by attempting Cholesky decomposition.

    Parameters
    ----------
    A : (d, d) array
        Matrix to check for positive definiteness

    Returns
    -------
    is_pd : bool
        True if A is positive definite, False otherwise
    """
    try:
        np.linalg.cholesky(A)
        return True
    except np.linalg.LinAlgError:
        return False
