"""
Extraction strategies.

Each strategy turns one kind of analysis result into a table with a ``key``
column followed by the analysis-derived columns expected by mvMapper. New
kinds of analyses are supported by registering a new strategy:

    @register_extractor(MyResult)
    def extract_my_result(result):
        ...
"""

import logging
from typing import Any, Callable, Dict, List

import numpy as np
import pandas as pd

from mvexport.analysis.results import (
    OrdinationResult, DiscriminantResult, SpatialComponentResult
)
from mvexport.errors import MalformedAnalysisResult, UnsupportedAnalysisType
from mvexport.math.named_matrix import NamedMatrix
from mvexport.utils.general import numbered_names, type_names

logger = logging.getLogger(__name__)

Extractor = Callable[[Any], pd.DataFrame]

_EXTRACTORS: Dict[type, Extractor] = {}


def register_extractor(result_type: type) -> Callable[[Extractor], Extractor]:
    """
    Register an extraction strategy for a result type.

    Args:
        result_type: Class of analysis results handled by the strategy

    Returns:
        Decorator registering the strategy and returning it unchanged
    """
    def decorator(func: Extractor) -> Extractor:
        _EXTRACTORS[result_type] = func
        return func
    return decorator


def registered_types() -> List[type]:
    """Result types that have an extraction strategy."""
    return list(_EXTRACTORS)


def get_extractor(analysis: Any) -> Extractor:
    """
    Find the extraction strategy for an analysis object.

    The object's class hierarchy is searched from the most specific class.

    Args:
        analysis: Analysis result

    Returns:
        The extraction strategy

    Raises:
        UnsupportedAnalysisType: if no strategy handles the object
    """
    for cls in type(analysis).__mro__:
        if cls in _EXTRACTORS:
            logger.debug("Using %s extractor for %s", cls.__name__, type(analysis).__name__)
            return _EXTRACTORS[cls]
    raise UnsupportedAnalysisType(type_names(analysis))


def extract(analysis: Any) -> pd.DataFrame:
    """Extract the analysis table using the registered strategy."""
    return get_extractor(analysis)(analysis)


def _require(result: Any, field: str) -> Any:
    value = getattr(result, field, None)
    if value is None:
        raise MalformedAnalysisResult(field)
    return value


def _score_table(result: Any) -> pd.DataFrame:
    """key + PC1..PCk from the score matrix."""
    scores: NamedMatrix = _require(result, "scores")
    n_comps = scores.shape[1]
    if n_comps == 0:
        raise MalformedAnalysisResult("scores", "analysis field 'scores' has no components")

    table = pd.DataFrame(scores.values, columns=numbered_names("PC", n_comps))
    table.insert(0, "key", scores.rownames())
    return table


def _check_rows(field: str, n_found: int, n_expected: int) -> None:
    if n_found != n_expected:
        raise MalformedAnalysisResult(
            field,
            f"analysis field '{field}' has {n_found} rows, expected {n_expected}"
        )


@register_extractor(OrdinationResult)
def extract_ordination(result: OrdinationResult) -> pd.DataFrame:
    """
    Columns: key, PC1..PCk.
    """
    return _score_table(result)


@register_extractor(DiscriminantResult)
def extract_discriminant(result: DiscriminantResult) -> pd.DataFrame:
    """
    Columns: key, PC1..PCk, grp, assigned_grp, support.

    ``support`` is the highest posterior membership probability of each
    entity, i.e. the probability of its assigned group.
    """
    table = _score_table(result)
    n_rows = len(table)

    grp = _require(result, "grp")
    assign = _require(result, "assign")
    posterior: NamedMatrix = _require(result, "posterior")
    _check_rows("grp", len(grp), n_rows)
    _check_rows("assign", len(assign), n_rows)
    _check_rows("posterior", posterior.shape[0], n_rows)
    if posterior.shape[1] == 0:
        raise MalformedAnalysisResult("posterior", "analysis field 'posterior' has no groups")

    table["grp"] = grp
    table["assigned_grp"] = assign
    table["support"] = np.nanmax(posterior.values.astype(float), axis=1)
    return table


@register_extractor(SpatialComponentResult)
def extract_spatial(result: SpatialComponentResult) -> pd.DataFrame:
    """
    Columns: key, PC1..PCk, Lag_PC1..Lag_PCk.

    The lag matrix must match the score matrix in rows, row order and width.
    """
    table = _score_table(result)
    scores: NamedMatrix = result.scores
    lag_scores: NamedMatrix = _require(result, "lag_scores")

    _check_rows("lag_scores", lag_scores.shape[0], len(table))
    if lag_scores.shape[1] != scores.shape[1]:
        raise MalformedAnalysisResult(
            "lag_scores",
            f"analysis field 'lag_scores' has {lag_scores.shape[1]} columns, "
            f"expected {scores.shape[1]}"
        )
    if _has_entity_names(lag_scores) and lag_scores.rownames() != scores.rownames():
        raise MalformedAnalysisResult(
            "lag_scores", "analysis field 'lag_scores' rows do not match the score rows"
        )

    lag_names = numbered_names("Lag_PC", lag_scores.shape[1])
    lags = pd.DataFrame(lag_scores.values, columns=lag_names)
    return pd.concat([table, lags], axis=1)


def _has_entity_names(matrix: NamedMatrix) -> bool:
    """False when the row names are the default positional range."""
    return matrix.rownames() != list(range(matrix.shape[0]))
