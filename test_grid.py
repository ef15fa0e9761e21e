#!/usr/bin/env python3
import numpy as np
import pytest

import pydemgrid as pdg
from pydemgrid.grid import Grid, Coordinate


def test_default_grid_is_empty_and_unset():
    g = Grid()
    assert g.width() == 0 and g.height() == 0
    assert g.cellsize == -1.0
    assert g.xllcorner == -1.0
    assert g.yllcorner == -1.0
    assert g.data_cells == -1
    assert g.no_data == -1.0
    assert g.dtype is pdg.grid.F32


def test_unsigned_and_bool_grids_have_no_nodata_by_default():
    assert Grid('u32').no_data is None
    assert Grid(bool).no_data is None
    assert Grid('i8').no_data == -1


@pytest.mark.parametrize("w,h", [(0, 0), (1, 1), (4, 3), (0, 5), (7, 0), (33, 17)])
def test_resize_sets_dimensions(w, h):
    g = Grid()
    g.resize(w, h)
    assert g.width() == w
    assert g.height() == h
    assert g.rshp == (h, w)


def test_resize_negative_raises():
    g = Grid()
    with pytest.raises(ValueError):
        g.resize(-1, 3)


def test_resize_rejects_non_integer_dimensions():
    g = Grid()
    with pytest.raises(TypeError):
        g.resize(3.7, 2)
    with pytest.raises(TypeError):
        g.resize(3, 2.0)
    assert g.width() == 0 and g.height() == 0
    g.resize(np.int64(3), np.int32(2))
    assert (g.width(), g.height()) == (3, 2)


def test_resize_reports_ram_estimate(capsys):
    g = Grid('f32')
    g.resize(1024, 1024)
    err = capsys.readouterr().err
    assert "Approx RAM requirement: 4MB" in err

    g8 = Grid('i8')
    g8.resize(1024, 1024)
    assert "Approx RAM requirement: 1MB" in capsys.readouterr().err


def test_resize_report_can_be_silenced(capsys, monkeypatch):
    monkeypatch.setattr(pdg.constants, "REPORT_RAM", False)
    Grid().resize(10, 10)
    assert capsys.readouterr().err == ""


def test_in_grid_bounds():
    g = Grid()
    g.resize(5, 4)
    for y in range(4):
        for x in range(5):
            assert g.in_grid(x, y)
    for x, y in [(-1, 0), (0, -1), (5, 0), (0, 4), (5, 4), (-1, -1), (100, 2)]:
        assert not g.in_grid(x, y)


@pytest.mark.parametrize("w", range(1, 6))
@pytest.mark.parametrize("h", range(1, 6))
def test_every_cell_is_edge_or_interior(w, h):
    g = Grid()
    g.resize(w, h)
    for y in range(h):
        for x in range(w):
            edge = g.edge_grid(x, y)
            interior = g.interior_grid(x, y)
            assert not (edge and interior)
            if w < 3 or h < 3:
                assert not interior
                assert edge
            else:
                assert edge or interior


def test_fill_sets_every_cell():
    g = Grid('f32')
    g.resize(257, 129)
    g.fill(3.5)
    assert np.all(g.to_numpy() == 3.5)
    assert g.at(0, 0) == 3.5
    assert g.at(256, 128) == 3.5


def test_fill_on_empty_grid_is_noop():
    g = Grid()
    g.fill(1.)
    g.resize(0, 3)
    g.fill(1.)
    assert g.height() == 3


def test_fill_casts_to_element_type():
    g = Grid('i8')
    g.resize(3, 3)
    g.fill(4.0)
    assert g.at(1, 1) == 4
    assert isinstance(g.at(1, 1), int)


def test_scenario_resize_fill_classify():
    g = Grid()
    assert g.width() == 0 and g.height() == 0
    g.resize(4, 3)
    g.fill(7)
    cells = [g.at(x, y) for y in range(g.height()) for x in range(g.width())]
    assert len(cells) == 12
    assert all(c == 7 for c in cells)
    assert g.edge_grid(0, 0)
    assert not g.edge_grid(2, 1)
    assert g.interior_grid(2, 1)


def test_cell_write_and_read():
    g = Grid('i32')
    g.resize(4, 3)
    g.fill(0)
    g.set(3, 2, 11)
    g[1, 0] = 5
    g[Coordinate(2, 1)] = 9
    assert g.at(3, 2) == 11
    assert g[1, 0] == 5
    assert g[2, 1] == 9
    z = g.to_numpy()
    assert z[2, 3] == 11 and z[0, 1] == 5 and z[1, 2] == 9
    assert z.sum() == 25


def test_equality_scenario():
    a = Grid()
    b = Grid()
    a.resize(5, 5)
    b.resize(5, 5)
    a.fill(1)
    b.fill(2)
    assert not a.equals(b)
    assert a != b
    b.fill(1)
    assert a.equals(b)
    assert b.equals(a)
    assert a == b


def test_equality_reflexive_and_single_cell_difference():
    a = Grid('u32')
    b = Grid('u32')
    a.resize(6, 4)
    b.resize(6, 4)
    a.fill(8)
    b.fill(8)
    assert a.equals(a)
    b[5, 3] = 9
    assert not a.equals(b)
    assert not b.equals(a)


def test_equality_false_on_dimension_mismatch():
    a = Grid()
    b = Grid()
    a.resize(4, 3)
    b.resize(3, 4)
    a.fill(0)
    b.fill(0)
    assert not a.equals(b)
    assert not b.equals(a)
    b.resize(4, 4)
    b.fill(0)
    assert not a.equals(b)


def test_equality_ignores_metadata():
    a = Grid()
    b = Grid()
    a.resize(2, 2)
    b.resize(2, 2)
    a.fill(1)
    b.fill(1)
    a.cellsize = 10.
    b.no_data = -9999.
    assert a.equals(b)


def test_empty_grids_are_equal():
    assert Grid().equals(Grid())


def test_equality_across_element_types():
    a = Grid('f32')
    b = Grid('i32')
    with pytest.raises(TypeError):
        a.equals(b)
    assert (a == b) is False


def test_estimated_output_size():
    for name, per_cell in [('f32', 9), ('u32', 9), ('i8', 4), ('bool', 2)]:
        g = Grid(name)
        g.resize(7, 5)
        assert g.estimated_output_size() == per_cell * 7 * 5


def test_estimated_output_size_unsupported_types():
    for name in ('f64', 'i32'):
        g = Grid(name)
        g.resize(2, 2)
        with pytest.raises(TypeError):
            g.estimated_output_size()


def test_metadata_copy_construction():
    a = Grid('f32')
    a.resize(6, 4)
    a.cellsize = 30.0
    a.xllcorner = 100.0
    a.yllcorner = 200.0
    a.no_data = -9999.
    a.data_cells = 42

    b = Grid('i32', copyfrom = a)
    assert b.dtype is pdg.grid.I32
    assert b.cellsize == 30.0
    assert b.xllcorner == 100.0
    assert b.yllcorner == 200.0
    assert b.data_cells == 42
    assert b.no_data == -9999
    assert isinstance(b.no_data, int)
    assert b.width() == a.width()
    assert b.height() == a.height()


def test_copy_from_unset_nodata_stays_unset():
    labels = Grid('u32')
    labels.resize(3, 2)
    assert labels.no_data is None
    dem = Grid('f32', copyfrom = labels)
    assert dem.no_data is None
    flags = Grid(bool)
    assert Grid('i8', copyfrom = flags).no_data is None


def test_copy_metadata_from_resizes_existing_grid():
    a = Grid('f32')
    a.resize(3, 8)
    a.cellsize = 2.5
    b = Grid('bool')
    b.resize(10, 10)
    b.copy_metadata_from(a)
    assert (b.width(), b.height()) == (3, 8)
    assert b.cellsize == 2.5
    assert b.no_data is True  # -1 cast to bool


def test_clear_keeps_metadata():
    g = Grid()
    g.resize(4, 4)
    g.cellsize = 12.
    g.no_data = -9999.
    g.data_cells = 3
    g.clear()
    assert g.width() == 0 and g.height() == 0
    assert g.cellsize == 12.
    assert g.no_data == -9999.
    assert g.data_cells == 3


def test_context_manager_releases_storage():
    with Grid() as g:
        g.resize(3, 3)
        assert g.width() == 3
    assert g.width() == 0 and g.height() == 0


def test_numpy_round_trip_keeps_orientation():
    z = np.arange(12, dtype = np.float32).reshape(3, 4)
    g = Grid('f32')
    g.from_numpy(z)
    assert (g.width(), g.height()) == (4, 3)
    assert g.at(1, 2) == z[2, 1]
    assert g.at(3, 0) == z[0, 3]
    np.testing.assert_array_equal(g.to_numpy(), z)


def test_bool_grid():
    m = np.array([[True, False], [False, True], [True, True]])
    g = Grid(bool)
    g.from_numpy(m)
    assert g.at(0, 0) is True
    assert g.at(1, 0) is False
    assert g.to_numpy().dtype == np.bool_
    np.testing.assert_array_equal(g.to_numpy(), m)
    g.fill(False)
    assert not g.to_numpy().any()


def test_from_numpy_rejects_non_2d():
    with pytest.raises(ValueError):
        Grid().from_numpy(np.zeros(5))


def test_to_numpy_of_empty_grid():
    g = Grid('u32')
    g.resize(0, 4)
    z = g.to_numpy()
    assert z.shape == (4, 0)
    assert z.dtype == np.uint32


def test_unknown_element_type():
    with pytest.raises(TypeError):
        Grid('complex')
    with pytest.raises(TypeError):
        Grid(np.complex64)
