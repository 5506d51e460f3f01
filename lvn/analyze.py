"""
Main Analysis Entry Points

Builds the default pipeline from lvn/pass_config.json and runs value numbering
over a single function or a whole module.
"""

import json
import os
from typing import Optional

from .diagnostics import DiagnosticSink
from .ir import Function, Module
from .numbering import NumberingResult, ValueNumbering
from .pass_manager import PassManager
from .passes import ValueNumberingPass

CONFIG_PATH = os.path.join(os.path.dirname(__file__), "pass_config.json")


def default_pipeline(
    sink: Optional[DiagnosticSink] = None,
    config_path: Optional[str] = None,
    print_after_all: bool = False,
    print_metrics: bool = False,
) -> PassManager:
    """
    Create a PassManager running value numbering with the shipped config.

    Args:
        sink: Where numbering records go (discarded if None)
        config_path: JSON config to load instead of lvn/pass_config.json
        print_after_all: If True, print each function before analyzing it
        print_metrics: If True, print pass metrics and diagnostics
    """
    with open(config_path or CONFIG_PATH) as f:
        config_data = json.load(f)

    pm = PassManager(print_after_all=print_after_all, print_metrics=print_metrics)
    pm.set_config(config_data)
    pm.add_pass(ValueNumberingPass(sink))
    return pm


def analyze_function(
    func: Function,
    constant_aware: bool = True,
    sink: Optional[DiagnosticSink] = None,
) -> NumberingResult:
    """Number one function directly, without a pass manager."""
    return ValueNumbering(constant_aware=constant_aware, sink=sink).run(func)


def analyze_module(
    module: Module,
    sink: Optional[DiagnosticSink] = None,
    config_path: Optional[str] = None,
    print_metrics: bool = False,
) -> dict[str, NumberingResult]:
    """Number every function of a module; results keyed by function name."""
    pm = default_pipeline(sink, config_path=config_path, print_metrics=print_metrics)
    results = pm.run(module)
    return {name: per_pass["value-numbering"]
            for name, per_pass in results.items()
            if "value-numbering" in per_pass}
