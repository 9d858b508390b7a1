"""
mvexport package.

Exports the results of multivariate analyses (dudi, dapc, spca) to the
tabular format read by the mvMapper visualisation tool.
"""

__version__ = '0.1.0'

from mvexport.analysis.results import (
    OrdinationResult, DiscriminantResult, SpatialComponentResult, load_analysis
)
from mvexport.components.config import Config, ConfigManager
from mvexport.errors import (
    MvExportError, UnsupportedAnalysisType, MalformedAnalysisResult,
    MissingColumn, MalformedMetadata, IOFailure, CoverageWarning
)
from mvexport.exports import Exporter, export, export_to_mvmapper, register_extractor
