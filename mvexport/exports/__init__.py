"""
Export of analysis results to the mvMapper table format.
"""

from mvexport.exports.exporter import Exporter, export, export_to_mvmapper
from mvexport.exports.extractors import get_extractor, register_extractor, registered_types
from mvexport.exports.validators import CoverageReport, check_metadata, coverage_report
from mvexport.exports.writer import default_output_path, write_export
