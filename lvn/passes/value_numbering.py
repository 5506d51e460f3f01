"""
Value Numbering Pass

Exposes local value numbering as a function analysis. The function is only
read; the pass returns a NumberingResult.
"""

from typing import Optional

from ..diagnostics import DiagnosticSink
from ..ir import Function, count_instructions
from ..numbering import NumberingResult, ValueNumbering
from ..pass_manager import FunctionPass, PassConfig


class ValueNumberingPass(FunctionPass):
    """
    Local value numbering with function-wide tables.

    Options:
    - constant_aware (default True): intern literal operands by value
    """

    def __init__(self, sink: Optional[DiagnosticSink] = None):
        super().__init__()
        self._sink = sink

    @property
    def name(self) -> str:
        return "value-numbering"

    def run(self, func: Function, config: PassConfig) -> NumberingResult:
        self._init_metrics()

        constant_aware = config.options.get("constant_aware", True)
        engine = ValueNumbering(constant_aware=constant_aware, sink=self._sink)
        result = engine.run(func)

        if self._metrics:
            self._metrics.instructions = count_instructions(func)
            self._metrics.custom = {
                "instructions_numbered": len(result.records),
                "values_issued": result.values_issued,
                "redundant": len(result.redundant_records()),
                "loads_forwarded": result.loads_forwarded,
                "constants": len(result.constant_numbers),
            }
            for record in result.redundant_records():
                self._add_metric_message(f"redundant: {record.text}")

        return result
