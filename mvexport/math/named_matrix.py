"""
Named Matrix implementation for mvexport.

Analysis results keep their score, lag and posterior matrices as NamedMatrix
objects, with one row per entity and the entity identifier as row name.
"""

import numpy as np
import pandas as pd
import logging
from typing import List, Union, Optional, Any

# Set up logging
logger = logging.getLogger(__name__)


class NamedMatrix:
    """
    A matrix with named rows and columns.

    Uses a pandas DataFrame as the underlying storage.
    """

    def __init__(self,
                 matrix: Optional[Union[np.ndarray, pd.DataFrame]] = None,
                 rownames: Optional[List[Any]] = None,
                 colnames: Optional[List[Any]] = None):
        """
        Initialize a NamedMatrix with optional initial data.

        Args:
            matrix: Initial matrix data (numpy array or pandas DataFrame)
            rownames: List of row names
            colnames: List of column names
        """
        if matrix is None:
            self._matrix = pd.DataFrame(
                index=list(rownames or []),
                columns=list(colnames or [])
            )
        elif isinstance(matrix, pd.DataFrame):
            self._matrix = matrix.copy()
            if rownames is not None:
                self._matrix.index = list(rownames)
            if colnames is not None:
                self._matrix.columns = list(colnames)
        else:
            matrix = np.asarray(matrix)
            if matrix.ndim == 1:
                # A single component is a column vector
                matrix = matrix.reshape(-1, 1)
            if matrix.ndim != 2:
                raise ValueError(f"Expected a 2-dimensional matrix, got {matrix.ndim} dimensions")
            rows = list(rownames) if rownames is not None else list(range(matrix.shape[0]))
            cols = list(colnames) if colnames is not None else list(range(matrix.shape[1]))
            self._matrix = pd.DataFrame(matrix, index=rows, columns=cols)

    @property
    def matrix(self) -> pd.DataFrame:
        """Get the underlying DataFrame."""
        return self._matrix

    @property
    def values(self) -> np.ndarray:
        """Get the matrix as a numpy array."""
        return self._matrix.values

    @property
    def shape(self):
        """(number of rows, number of columns)."""
        return self._matrix.shape

    def rownames(self) -> List[Any]:
        """Get the list of row names."""
        return list(self._matrix.index)

    def colnames(self) -> List[Any]:
        """Get the list of column names."""
        return list(self._matrix.columns)

    def __repr__(self) -> str:
        return f"NamedMatrix(rows={self.shape[0]}, cols={self.shape[1]})"


def as_named_matrix(obj: Any, rownames: Optional[List[Any]] = None) -> Optional[NamedMatrix]:
    """
    Coerce a matrix-like object into a NamedMatrix.

    Accepts a NamedMatrix, a pandas DataFrame, a numpy array or nested lists.
    None is passed through so that absent fields can be reported later.

    Args:
        obj: Matrix-like object
        rownames: Row names to apply (entity identifiers); keeps the object's
            own row names when omitted

    Returns:
        A NamedMatrix, or None
    """
    if obj is None:
        return None
    if isinstance(obj, NamedMatrix):
        if rownames is None:
            return obj
        return NamedMatrix(obj.matrix, rownames=rownames)
    if isinstance(obj, pd.DataFrame):
        return NamedMatrix(obj, rownames=rownames)
    logger.debug("Coercing %s into a NamedMatrix", type(obj).__name__)
    return NamedMatrix(np.array(obj), rownames=rownames)
