import logging

import numpy as np
import pytest

from wallgraph import Segment
from wallgraph.logging_utils import debug_log_call, safe_repr

LOGGER = logging.getLogger('wallgraph.test')


def test_safe_repr_formats_segments_and_truncates_lists():
    assert safe_repr(Segment.from_coords(0, 0, 1, 0)) == '(0.000, 0.000)-(1.000, 0.000)'
    assert safe_repr(list(range(7))).endswith('... (7 total)]')


def test_safe_repr_summarises_arrays():
    text = safe_repr(np.array([1.0, 3.0]))

    assert 'shape=(2,)' in text
    assert 'min=1' in text
    assert 'max=3' in text


def test_debug_log_call_logs_entry_and_exit(caplog):
    caplog.set_level(logging.DEBUG, logger='wallgraph.test')

    @debug_log_call(LOGGER)
    def add(a, b):
        return a + b

    assert add(2, b=3) == 5
    assert 'Entering' in caplog.text
    assert 'b=3' in caplog.text
    assert 'Exiting' in caplog.text


def test_debug_log_call_reraises(caplog):
    caplog.set_level(logging.DEBUG, logger='wallgraph.test')

    @debug_log_call(LOGGER)
    def fail():
        raise ValueError('bad wall')

    with pytest.raises(ValueError):
        fail()
    assert 'raised' in caplog.text


def test_debug_log_call_can_skip_result(caplog):
    caplog.set_level(logging.DEBUG, logger='wallgraph.test')

    @debug_log_call(LOGGER, log_result=False)
    def build():
        return 'large-result-marker'

    assert build() == 'large-result-marker'
    assert 'Exiting' in caplog.text
    assert 'large-result-marker' not in caplog.text
