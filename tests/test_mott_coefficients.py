"""Tests for the Mott fit coefficient provider."""

import logging

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from mott_mc.physics.mott_coefficients import (
    NO_FIT_AVAILABLE, AnalyticFit, MottCoefficientTable, NoFitAvailable,
    load_coefficient_table,
)


def _matrix(seed):
    return np.random.default_rng(seed).uniform(-1.0, 1.0, size=(5, 6)) + np.eye(5, 6)


class TestTagging:

    def test_missing_element_has_no_fit(self, empty_table):
        assert empty_table.get(14) is NO_FIT_AVAILABLE
        assert isinstance(empty_table.get(14), NoFitAvailable)

    def test_present_element_has_fit(self):
        matrix = _matrix(1)
        table = MottCoefficientTable({14: matrix})

        fit = table.get(14)

        assert isinstance(fit, AnalyticFit)
        assert_array_equal(fit.coefficients, matrix)

    def test_z_truncated(self):
        table = MottCoefficientTable({14: _matrix(1)})
        assert isinstance(table.get(14.99), AnalyticFit)
        assert table.get(13.99) is NO_FIT_AVAILABLE

    def test_zero_leading_coefficient_means_no_fit(self):
        matrix = _matrix(2)
        matrix[0, 0] = 0.0
        table = MottCoefficientTable({26: matrix})
        assert table.get(26) is NO_FIT_AVAILABLE
        assert 26 not in table

    def test_fit_range(self):
        with pytest.raises(ValueError, match="Z <= 92"):
            MottCoefficientTable({93: _matrix(3)})

    def test_shape_checked(self):
        with pytest.raises(ValueError, match="shape"):
            AnalyticFit(np.ones((6, 5)))

    def test_coefficients_read_only(self):
        fit = AnalyticFit(_matrix(4))
        with pytest.raises(ValueError):
            fit.coefficients[0, 0] = 2.0


class TestTableFiles:

    def test_save_and_load(self, tmp_path):
        table = MottCoefficientTable({6: _matrix(5), 79: _matrix(6)})
        filename = tmp_path / 'mott.dat'

        table.save(filename)
        loaded = MottCoefficientTable.from_file(filename)

        assert len(loaded) == 2
        np.testing.assert_allclose(loaded.get(79).coefficients, table.get(79).coefficients,
                                   rtol=1e-9)

    def test_binary_sibling_preferred(self, tmp_path):
        MottCoefficientTable({6: _matrix(5)}).save(tmp_path / 'mott.dat')
        row = np.concatenate(([8], _matrix(7).ravel()))
        np.save(tmp_path / 'mott.npy', row[np.newaxis, :])

        loaded = MottCoefficientTable.from_file(tmp_path / 'mott.dat')

        assert 8 in loaded
        assert 6 not in loaded

    def test_wrong_column_count(self, tmp_path):
        filename = tmp_path / 'mott.dat'
        np.savetxt(filename, np.ones((2, 10)))
        with pytest.raises(ValueError, match="31 columns"):
            MottCoefficientTable.from_file(filename)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_coefficient_table(tmp_path / 'missing.dat')

    def test_no_table_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger='mott_mc'):
            table = load_coefficient_table(None)
        assert len(table) == 0
        assert "McKinley-Feshbach" in caplog.text
