"""
Tests for the extraction strategies.
"""

import pytest
import numpy as np
import pandas as pd
import sys
import os

# Add the parent directory to the path to import the module
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mvexport.analysis.results import (
    OrdinationResult, DiscriminantResult, SpatialComponentResult
)
from mvexport.errors import MalformedAnalysisResult, UnsupportedAnalysisType
from mvexport.exports import extractors
from mvexport.exports.extractors import (
    extract, extract_discriminant, extract_ordination, extract_spatial,
    get_extractor, register_extractor, registered_types
)


class TestDispatch:
    """Tests for choosing an extraction strategy."""

    def test_each_kind(self, dudi, dapc, spca):
        assert get_extractor(dudi) is extract_ordination
        assert get_extractor(dapc) is extract_discriminant
        assert get_extractor(spca) is extract_spatial

    def test_subclass_uses_parent_strategy(self, scores):
        class PcaResult(OrdinationResult):
            pass

        assert get_extractor(PcaResult(scores=scores)) is extract_ordination

    def test_unsupported(self):
        with pytest.raises(UnsupportedAnalysisType) as excinfo:
            get_extractor({'li': [[1.0]]})
        assert excinfo.value.type_names == ['dict', 'object']
        assert str(excinfo.value) == "No method available for the class dict, object"

    def test_unsupported_is_type_error(self):
        with pytest.raises(TypeError):
            extract(42)

    def test_register(self, monkeypatch, scores):
        monkeypatch.setattr(extractors, '_EXTRACTORS', dict(extractors._EXTRACTORS))

        class Coinertia:
            def __init__(self, frame):
                self.frame = frame

        @register_extractor(Coinertia)
        def extract_coinertia(result):
            return result.frame.reset_index().rename(columns={'index': 'key'})

        assert Coinertia in registered_types()
        table = extract(Coinertia(scores))
        assert list(table['key']) == ['A', 'B', 'C']


class TestOrdination:
    """Tests for the dudi extractor."""

    def test_columns(self, dudi):
        table = extract(dudi)
        assert list(table.columns) == ['key', 'PC1', 'PC2']
        assert list(table['key']) == ['A', 'B', 'C']
        assert np.allclose(table[['PC1', 'PC2']].values, [[1, 2], [3, 4], [5, 6]])

    def test_width_follows_scores(self):
        result = OrdinationResult(scores=np.zeros((4, 5)), keys=list('wxyz'))
        table = extract(result)
        assert list(table.columns) == ['key', 'PC1', 'PC2', 'PC3', 'PC4', 'PC5']
        assert len(table) == 4

    def test_missing_scores(self):
        with pytest.raises(MalformedAnalysisResult) as excinfo:
            extract(OrdinationResult())
        assert excinfo.value.field == 'scores'

    def test_no_components(self):
        with pytest.raises(MalformedAnalysisResult):
            extract(OrdinationResult(scores=np.zeros((3, 0)), keys=list('abc')))

    def test_pure(self, dudi):
        first = extract(dudi)
        second = extract(dudi)
        pd.testing.assert_frame_equal(first, second)


class TestDiscriminant:
    """Tests for the dapc extractor."""

    def test_columns(self, dapc):
        table = extract(dapc)
        assert list(table.columns) == ['key', 'PC1', 'PC2', 'grp', 'assigned_grp', 'support']
        assert list(table['grp']) == [1, 1, 2]
        assert list(table['assigned_grp']) == [1, 2, 2]

    def test_support_is_row_max(self, dapc):
        table = extract(dapc)
        assert np.allclose(table['support'], [0.9, 0.6, 0.8])

    def test_support_not_first_column(self, scores):
        """Support is the row maximum wherever it sits in the row."""
        result = DiscriminantResult(
            scores=scores, grp=['a', 'b', 'c'], assign=['c', 'b', 'a'],
            posterior=[[0.1, 0.2, 0.7], [0.25, 0.5, 0.25], [1.0, 0.0, 0.0]]
        )
        assert np.allclose(extract(result)['support'], [0.7, 0.5, 1.0])

    def test_missing_posterior(self, scores):
        result = DiscriminantResult(scores=scores, grp=[1, 1, 2], assign=[1, 2, 2])
        with pytest.raises(MalformedAnalysisResult) as excinfo:
            extract(result)
        assert excinfo.value.field == 'posterior'

    def test_group_length_mismatch(self, scores):
        result = DiscriminantResult(
            scores=scores, grp=[1, 1], assign=[1, 2, 2], posterior=np.eye(3)
        )
        with pytest.raises(MalformedAnalysisResult) as excinfo:
            extract(result)
        assert excinfo.value.field == 'grp'

    def test_posterior_rows_mismatch(self, scores):
        result = DiscriminantResult(
            scores=scores, grp=[1, 1, 2], assign=[1, 2, 2], posterior=np.eye(2)
        )
        with pytest.raises(MalformedAnalysisResult) as excinfo:
            extract(result)
        assert excinfo.value.field == 'posterior'


class TestSpatial:
    """Tests for the spca extractor."""

    def test_columns(self, spca):
        table = extract(spca)
        assert list(table.columns) == ['key', 'PC1', 'PC2', 'Lag_PC1', 'Lag_PC2']
        assert np.allclose(table['Lag_PC2'], [1.0, 2.0, 3.0])

    def test_lag_width_must_match(self, scores):
        result = SpatialComponentResult(scores=scores, lag_scores=np.zeros((3, 1)))
        with pytest.raises(MalformedAnalysisResult) as excinfo:
            extract(result)
        assert excinfo.value.field == 'lag_scores'

    def test_lag_rows_must_match(self, scores):
        result = SpatialComponentResult(scores=scores, lag_scores=np.zeros((2, 2)))
        with pytest.raises(MalformedAnalysisResult):
            extract(result)

    def test_lag_row_order_must_match(self, scores):
        result = SpatialComponentResult(scores=scores, lag_scores=scores.loc[['C', 'B', 'A']])
        with pytest.raises(MalformedAnalysisResult):
            extract(result)

    def test_unnamed_lag_rows_follow_scores(self, scores):
        result = SpatialComponentResult(scores=scores, lag_scores=np.ones((3, 2)))
        table = extract(result)
        assert list(table['key']) == ['A', 'B', 'C']
        assert np.allclose(table['Lag_PC1'], 1.0)

    def test_missing_lag(self, scores):
        with pytest.raises(MalformedAnalysisResult) as excinfo:
            extract(SpatialComponentResult(scores=scores))
        assert excinfo.value.field == 'lag_scores'
