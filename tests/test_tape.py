"""
Tests for the recording tape and tape switching.
"""

import gc

import pytest

from revad import Var, constant, grad, use_tape, Tape, sin
from revad.core import tape as tape_mod


def test_only_operations_are_recorded(tape):
    x = Var(1.0)
    c = constant(2.0)
    assert len(tape) == 0
    y = x * c + x
    assert len(tape) == 2
    assert [n.op_tag for n in tape] == ["mul", "add"]
    assert y.value() == 3.0


def test_construction_order_is_topological(tape):
    x = Var(0.3)
    y = sin(x) * x
    z = y + sin(y)
    for node in tape:
        for p in node.operands:
            if p.is_op:
                assert p.index < node.index


def test_use_tape_restores_previous(tape):
    assert tape_mod.global_tape is tape
    with use_tape() as inner:
        assert tape_mod.global_tape is inner
        assert inner is not tape
    assert tape_mod.global_tape is tape


def test_use_tape_restores_on_exception(tape):
    with pytest.raises(RuntimeError):
        with use_tape():
            raise RuntimeError("boom")
    assert tape_mod.global_tape is tape


def test_use_given_tape():
    t = Tape()
    with use_tape(t):
        y = Var(1.0) + 1
    assert len(t) == 1
    assert y.value() == 2.0


def test_leaves_cross_tapes():
    x = Var(2.0)
    with use_tape():
        y = x * x
        assert grad(y, x) == 4.0


def test_operations_from_another_tape_can_be_extended():
    x = Var(2.0)
    y = x * x
    with use_tape() as inner:
        z = y * 3 + x
        assert len(inner) == 2
        assert grad(z, x) == 13.0
    assert grad(z, x) == 13.0


def test_reset_keeps_existing_graphs_usable(tape):
    x = Var(2.0)
    y = x * x
    tape.reset()
    assert len(tape) == 0
    assert y.value() == 4.0
    z = y + x
    assert len(tape) == 1
    assert grad(z, x) == 5.0
    assert grad(y, x) == 4.0


def test_tape_forgets_released_nodes(tape):
    x = Var(1.0)
    y = x * 2.0
    z = y + 1.0
    assert len(tape) == 2
    del z
    gc.collect()
    assert [n.op_tag for n in tape] == ["mul"]
