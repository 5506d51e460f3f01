"""Shared fixtures and helpers for value numbering tests."""

import os
import sys

# Add the repository root to the path for imports
_this_dir = os.path.dirname(os.path.abspath(__file__))
_repo_root = os.path.dirname(os.path.dirname(_this_dir))
sys.path.insert(0, _repo_root)

from lvn import (
    FunctionBuilder,
    Function,
    PassConfig,
    RecordingSink,
    ValueNumbering,
    NumberingResult,
)


def _cfg(name, **opts):
    """Helper to create PassConfig."""
    return PassConfig(name=name, enabled=True, options=opts)


def number(func: Function, constant_aware: bool = True) -> tuple[NumberingResult, RecordingSink]:
    """Run value numbering on func, returning the result and the records it emitted."""
    sink = RecordingSink()
    result = ValueNumbering(constant_aware=constant_aware, sink=sink).run(func)
    return result, sink


def build_constant_scenario() -> Function:
    """store 5 -> %p; load; add; store 3 -> %q; load; add"""
    b = FunctionBuilder("consts")
    p = b.alloca("p")
    q = b.alloca("q")
    b.store(b.const(5), p)
    v1 = b.load(p, "v1")
    b.add(v1, v1, "v2")
    b.store(b.const(3), q)
    v3 = b.load(q, "v3")
    b.add(v3, v3, "v4")
    b.ret()
    return b.build()


def build_commuted_add() -> Function:
    """%s = add %a, %b; %t = add %b, %a"""
    b = FunctionBuilder("commuted")
    pa = b.alloca("pa")
    pb = b.alloca("pb")
    a = b.load(pa, "a")
    c = b.load(pb, "b")
    s = b.add(a, c, "s")
    b.add(c, a, "t")
    b.ret(s)
    return b.build()
