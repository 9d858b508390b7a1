"""
Analysis result containers.

These classes are the adapter boundary between a statistical library and the
exporter. They hold the fields the exporter reads from each kind of analysis:

- OrdinationResult: principal component scores (ade4 ``dudi$li``)
- DiscriminantResult: scores plus prior groups, assigned groups and posterior
  membership probabilities (adegenet ``dapc``)
- SpatialComponentResult: scores plus their lag vectors (adegenet ``spca$ls``)

Matrices are stored as NamedMatrix objects whose row names are the entity
identifiers.
"""

import logging
from dataclasses import dataclass, fields as dataclass_fields
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Type

import numpy as np
import pandas as pd

from mvexport.errors import MalformedAnalysisResult
from mvexport.math.named_matrix import NamedMatrix, as_named_matrix

logger = logging.getLogger(__name__)


def _coerce_matrix(value: Any, field_name: str,
                   keys: Optional[Sequence[Any]] = None) -> Optional[NamedMatrix]:
    """Coerce a field to a NamedMatrix, reporting shape problems against the field."""
    if isinstance(value, Mapping):
        value = pd.DataFrame(dict(value))
    try:
        return as_named_matrix(value, rownames=list(keys) if keys is not None else None)
    except (ValueError, TypeError) as e:
        raise MalformedAnalysisResult(
            field_name, f"analysis field '{field_name}' is not a valid matrix: {e}"
        ) from e


def _coerce_labels(value: Any) -> Optional[List[Any]]:
    """Group labels as a plain list (pandas categoricals and arrays included)."""
    if value is None:
        return None
    if isinstance(value, (pd.Series, pd.Index, pd.Categorical)):
        return list(value)
    return list(np.asarray(value).ravel())


@dataclass
class OrdinationResult:
    """
    Scores of a principal-component-based ordination.

    Attributes:
        scores: Entities x retained components
        keys: Optional entity identifiers, used as row names of bare arrays
    """

    analysis_kind: ClassVar[str] = "dudi"
    aliases: ClassVar[Dict[str, str]] = {"li": "scores", "rownames": "keys"}

    scores: Any = None
    keys: Optional[Sequence[Any]] = None

    def __post_init__(self):
        self.scores = _coerce_matrix(self.scores, "scores", self.keys)
        if self.keys is not None:
            self.keys = list(self.keys)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> 'OrdinationResult':
        """
        Build a result from a mapping.

        Both the Python field names and the R field names of the original
        analysis objects (``li``, ``ls``, ``ind.coord``, ``rownames``...) are
        accepted.

        Args:
            payload: Mapping of field name to value

        Returns:
            A new result object
        """
        values = {}
        for name, value in payload.items():
            values[cls.aliases.get(name, name)] = value

        # ClassVar attributes are not fields
        names = [f.name for f in dataclass_fields(cls)]
        for name in names:
            if name != "keys" and values.get(name) is None:
                raise MalformedAnalysisResult(name)
        unknown = set(values) - set(names)
        if unknown:
            logger.debug("Ignoring unknown analysis fields: %s", sorted(unknown))

        return cls(**{k: v for k, v in values.items() if k in names})


@dataclass
class DiscriminantResult(OrdinationResult):
    """
    Result of a discriminant analysis of principal components.

    Attributes:
        scores: Entities x retained discriminant functions
        grp: Group of each entity, as given to the analysis
        assign: Group assigned to each entity by the discriminant functions
        posterior: Entities x groups membership probabilities
    """

    analysis_kind: ClassVar[str] = "dapc"
    aliases: ClassVar[Dict[str, str]] = {"ind.coord": "scores", "rownames": "keys"}

    grp: Any = None
    assign: Any = None
    posterior: Any = None

    def __post_init__(self):
        super().__post_init__()
        self.grp = _coerce_labels(self.grp)
        self.assign = _coerce_labels(self.assign)
        self.posterior = _coerce_matrix(self.posterior, "posterior")


@dataclass
class SpatialComponentResult(OrdinationResult):
    """
    Result of a spatial principal component analysis.

    Attributes:
        scores: Entities x retained components
        lag_scores: Lag vectors of the scores; each entity's value is the
            average score of its neighbours
    """

    analysis_kind: ClassVar[str] = "spca"
    aliases: ClassVar[Dict[str, str]] = {"li": "scores", "ls": "lag_scores", "rownames": "keys"}

    lag_scores: Any = None

    def __post_init__(self):
        super().__post_init__()
        self.lag_scores = _coerce_matrix(self.lag_scores, "lag_scores", self.keys)


RESULT_TYPES: Dict[str, Type[OrdinationResult]] = {
    cls.analysis_kind: cls
    for cls in (OrdinationResult, DiscriminantResult, SpatialComponentResult)
}


def load_analysis(payload: Mapping[str, Any], kind: str) -> OrdinationResult:
    """
    Build an analysis result of the given kind from a mapping.

    Args:
        payload: Field mapping, e.g. parsed from a JSON or YAML file
        kind: One of 'dudi', 'dapc', 'spca'

    Returns:
        The analysis result
    """
    if kind not in RESULT_TYPES:
        raise ValueError(f"Unknown analysis kind '{kind}'. Must be one of {sorted(RESULT_TYPES)}")
    return RESULT_TYPES[kind].from_dict(payload)
