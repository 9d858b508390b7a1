"""
Validation of entity metadata.

The metadata passed alongside an analysis must document, for every entity,
its identifier (``key``) and its location (``lat``, ``lon``). Entities of the
analysis that are absent from the metadata are reported but do not stop the
export.
"""

import logging
import warnings
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Sequence

import pandas as pd

from mvexport.errors import CoverageWarning, MalformedMetadata, MissingColumn
from mvexport.utils.general import missing_items

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("key", "lat", "lon")


@dataclass
class CoverageReport:
    """How many analysed entities are documented in the metadata."""

    n_reference: int
    n_documented: int
    missing_keys: List[Any] = field(default_factory=list)

    @property
    def nb_missing(self) -> int:
        return len(self.missing_keys)

    @property
    def complete(self) -> bool:
        return self.nb_missing == 0


def as_table(metadata: Any) -> pd.DataFrame:
    """
    Coerce metadata into a DataFrame.

    Args:
        metadata: DataFrame, dict of columns or list of records

    Returns:
        The metadata as a DataFrame
    """
    if isinstance(metadata, pd.DataFrame):
        return metadata
    try:
        return pd.DataFrame(metadata)
    except (ValueError, TypeError) as e:
        raise MalformedMetadata(f"'metadata' cannot be read as a table: {e}") from e


def coverage_report(metadata: pd.DataFrame, reference_keys: Iterable[Any]) -> CoverageReport:
    """
    Compare the analysed entities with the entities of the metadata.

    Args:
        metadata: Metadata table with a 'key' column
        reference_keys: Entity identifiers of the analysis

    Returns:
        CoverageReport listing the undocumented keys in reference order
    """
    reference = list(reference_keys)
    missing = missing_items(reference, metadata["key"])
    return CoverageReport(
        n_reference=len(reference),
        n_documented=len(reference) - len(missing),
        missing_keys=missing,
    )


def check_metadata(metadata: Any,
                   reference_keys: Iterable[Any],
                   required: Sequence[str] = REQUIRED_COLUMNS,
                   stacklevel: int = 2) -> pd.DataFrame:
    """
    Check that metadata has the required columns and documents the entities.

    Args:
        metadata: Metadata table
        reference_keys: Entity identifiers of the analysis
        required: Columns that must be present, checked in order
        stacklevel: Passed to warnings.warn; 2 attributes the coverage
            warning to the caller of this function

    Returns:
        The metadata as a DataFrame, otherwise unchanged

    Raises:
        MissingColumn: for the first required column that is absent
    """
    info = as_table(metadata)

    for column in required:
        if column not in info.columns:
            raise MissingColumn(column)
    # The merge needs 'key' even when the caller does not require it
    if "key" not in info.columns:
        raise MissingColumn("key")

    report = coverage_report(info, reference_keys)
    if report.nb_missing > 0:
        msg = f"{report.nb_missing} individuals are not documented in 'metadata'"
        logger.warning(msg)
        warnings.warn(msg, CoverageWarning, stacklevel=stacklevel)

    return info
