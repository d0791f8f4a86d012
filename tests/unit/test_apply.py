
import logging

import pytest

import numpy as np

from polymask import MASK_MISSING, MaskResult, NotFoundError, apply_mask
from polymask.apply import enlarge_mask, get_circle_kernel


@pytest.fixture
def data():
    return np.arange(16.).reshape(4, 4)


def test_keep_inside(data, square_mask):
    out = apply_mask(data, square_mask)
    assert isinstance(out, np.ma.MaskedArray)
    np.testing.assert_array_equal(out.mask, square_mask == 0)
    assert out.sum() == 5 + 6 + 9 + 10


def test_keep_outside(data, square_mask):
    out = apply_mask(data, square_mask, keep='outside')
    np.testing.assert_array_equal(out.mask, square_mask == 1)


def test_not_modified(data, square_mask):
    out = apply_mask(data, square_mask)
    out[0, 0] = -5.
    assert data[0, 0] == 0.


def test_existing_mask(data, square_mask):
    data = np.ma.masked_equal(data, 5.)
    out = apply_mask(data, square_mask)
    assert out.count() == 3


def test_loop_dimensions(square_mask):
    data = np.ones((3, 2, 4, 4))
    out = apply_mask(data, square_mask)
    assert out.shape == (3, 2, 4, 4)
    assert out.count() == 3 * 2 * 4


def test_missing(data, square_mask, caplog):
    mask = square_mask.copy()
    mask[1, 1] = MASK_MISSING
    for keep in ['inside', 'outside']:
        assert apply_mask(data, mask, keep=keep).mask[1, 1]

    result = MaskResult.failed((4, 4), NotFoundError('missing'))
    with caplog.at_level(logging.WARNING):
        out = apply_mask(data, result)
    assert out.mask.all()
    assert 'not computed' in caplog.text


def test_fill_value(data, square_mask):
    out = apply_mask(data, square_mask, fill_value=-999.)
    assert out.filled()[0, 0] == -999.


def test_invalid(data, square_mask):
    with pytest.raises(IndexError):
        apply_mask(data, square_mask[:3])
    with pytest.raises(IndexError):
        apply_mask(np.ones(4), square_mask)
    with pytest.raises(ValueError):
        apply_mask(data, square_mask, keep='both')


def test_circle_kernel():
    np.testing.assert_array_equal(get_circle_kernel(3), np.ones((3, 3)))
    kernel = get_circle_kernel(5)
    assert kernel[2, 2] == 1
    assert kernel[0, 2] == 1
    assert kernel[0, 0] == 0


def test_enlarge():
    pytest.importorskip('scipy')
    mask = np.zeros((5, 5), dtype=bool)
    mask[2, 2] = True
    out = enlarge_mask(mask, 1)
    assert out.dtype == bool
    expected = np.zeros((5, 5), dtype=bool)
    expected[1:4, 1:4] = True
    np.testing.assert_array_equal(out, expected)


def test_enlarge_missing():
    pytest.importorskip('scipy')
    mask = np.zeros((5, 5), dtype=np.int32)
    mask[0, 0] = 1
    mask[4, 4] = MASK_MISSING
    out = enlarge_mask(mask, 1)
    assert out.dtype == np.int32
    assert out[1, 1] == 1
    assert out[2, 2] == 0
    assert out[4, 4] == MASK_MISSING
