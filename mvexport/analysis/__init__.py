"""
Analysis result containers.
"""

from mvexport.analysis.results import (
    OrdinationResult, DiscriminantResult, SpatialComponentResult, load_analysis
)
