"""
Export of analysis results for mvMapper.

mvMapper is an interactive tool for visualising the outputs of a multivariate
analysis on a map in a web browser (https://popphylotools.github.io/mvMapper/).
It reads a single CSV file containing at least:

- key: unique entity identifier
- PC1: first principal component; further components are optional and, when
  present, numbered consecutively after PC1
- lat: latitude of each entity
- lon: longitude of each entity

Some analyses add columns:

- spca: Lag_PC columns hold the lag vectors of the principal components; the
  lag operator computes, for each entity, the average score of its
  neighbours, which helps reveal patches and clines.
- dapc: grp is the group used in the analysis; assigned_grp is the group
  assigned by the discriminant functions; support is the assignment
  probability of assigned_grp.

Any other column of the metadata is exported as well.
"""

import logging
from typing import Any, Optional

import pandas as pd

from mvexport.components.config import Config, ConfigManager
from mvexport.exports.extractors import get_extractor
from mvexport.exports.validators import check_metadata
from mvexport.exports.writer import PathLike, write_export

logger = logging.getLogger(__name__)


class Exporter:
    """
    Builds mvMapper tables from analysis results and entity metadata.
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize the exporter.

        Args:
            config: Configuration (defaults to the shared configuration)
        """
        self.config = config or ConfigManager.get_config()

    def build_table(self, analysis: Any, metadata: Any, stacklevel: int = 1) -> pd.DataFrame:
        """
        Merge the analysis-derived columns with the metadata.

        Keys are compared by equality only: a numeric key never matches a
        string key, so such entities are dropped rather than coerced.

        Args:
            analysis: Analysis result (dudi, dapc or spca)
            metadata: Table with at least 'key', 'lat' and 'lon' columns
            stacklevel: Frames above this method to blame for the coverage
                warning

        Returns:
            One row per entity present in both the analysis and the metadata
        """
        extractor = get_extractor(analysis)
        analysis_table = extractor(analysis)

        info = check_metadata(
            metadata,
            analysis_table["key"],
            required=self.config.get('export.required-columns', ['key', 'lat', 'lon']),
            stacklevel=stacklevel + 2
        )

        # pandas refuses to join int and str key columns
        out = pd.merge(
            analysis_table.astype({"key": object}),
            info.astype({"key": object}), on="key", how="inner",
            sort=bool(self.config.get('export.sort-keys', False))
        )
        if out.empty:
            logger.warning("No entity of the analysis is documented in 'metadata'; the export is empty")
        else:
            logger.info(f"Exported {len(out)} of {len(analysis_table)} entities")
        return out

    def export(self,
               analysis: Any,
               metadata: Any,
               write_file: bool = True,
               out_file: Optional[PathLike] = None) -> pd.DataFrame:
        """
        Export an analysis for mvMapper.

        Args:
            analysis: Analysis result (dudi, dapc or spca)
            metadata: Table with at least 'key', 'lat' and 'lon' columns;
                other columns are exported as well
            write_file: Write the table to a CSV file
            out_file: File to write to; when None the file is named
                'mvmapper_data_<date and time>.csv'

        Returns:
            The exported table, whether or not it was written
        """
        out = self.build_table(analysis, metadata, stacklevel=2)
        if write_file:
            write_export(out, out_file, self.config)
        return out


def export(analysis: Any,
           metadata: Any,
           write_file: bool = True,
           out_file: Optional[PathLike] = None,
           config: Optional[Config] = None) -> pd.DataFrame:
    """
    Export an analysis for mvMapper.

    Example:
        >>> loc = pd.read_csv("swallowtails_loc.csv")
        >>> out = export(dapc1, loc, write_file=True, out_file="mvMapper_Data.csv")

    Args:
        analysis: Analysis result (dudi, dapc or spca)
        metadata: Table with at least 'key', 'lat' and 'lon' columns
        write_file: Write the table to a CSV file
        out_file: File to write to; a timestamped name is used when None
        config: Configuration (defaults to the shared configuration)

    Returns:
        The exported table
    """
    exporter = Exporter(config)
    out = exporter.build_table(analysis, metadata, stacklevel=2)
    if write_file:
        write_export(out, out_file, exporter.config)
    return out


export_to_mvmapper = export
