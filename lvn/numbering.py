"""
Local Value Numbering

Walks a function once, in block order then instruction order, and gives every
computed value a number such that instructions computing the same value share
it. Tables live for the whole function, not per block.

- store: binds the pointer to the stored value's number
- load:  reuses the number bound to its pointer, or gets a fresh one
- binary arithmetic: looked up by canonical expression; a hit is redundant
- anything else is skipped
"""

from dataclasses import dataclass, field
from typing import Optional

from .canonical import (
    ConstantTable, Expression, ValueNumberCounter,
    intern_constant, make_expression, opcode_name,
)
from .diagnostics import DiagnosticSink, NullSink, NumberingRecord
from .ir import Const, Store, Load, BinaryOp, Instruction, Function, Value


class UnresolvedOperandError(RuntimeError):
    """An arithmetic operand has no value number and is not a literal."""

    def __init__(self, instruction: Instruction, operand: Value):
        self.instruction = instruction
        self.operand = operand
        super().__init__(f"Operand {operand!r} of '{instruction!r}' has no value number")


@dataclass
class NumberingState:
    """Mutable tables for one function's scan."""

    # Maps value identity (SSAValue, Global, Const occurrence) -> value number
    value_numbers: dict[object, int] = field(default_factory=dict)

    # Maps canonical expression -> value number
    expressions: dict[Expression, int] = field(default_factory=dict)

    # Literal value -> value number; None when constants are not interned
    constants: Optional[ConstantTable] = None

    counter: ValueNumberCounter = field(default_factory=ValueNumberCounter)

    # Loads that reused the number bound to their pointer
    loads_forwarded: int = 0

    @classmethod
    def create(cls, constant_aware: bool) -> "NumberingState":
        return cls(constants=ConstantTable() if constant_aware else None)

    def number_of(self, value) -> Optional[int]:
        return self.value_numbers.get(value)

    def fresh(self, value) -> int:
        """Give `value` the next number."""
        vn = self.counter.allocate()
        self.value_numbers[value] = vn
        return vn

    def number_or_fresh(self, value) -> int:
        vn = self.value_numbers.get(value)
        if vn is None:
            vn = self.fresh(value)
        return vn

    def intern(self, const: Const) -> int:
        if self.constants is None:
            raise RuntimeError("Constant interning requested but constants are not interned")
        return intern_constant(const.value, self.constants, self.counter)


@dataclass
class NumberingResult:
    """Outcome of numbering one function: its records and final tables."""
    function_name: str
    records: list[NumberingRecord]
    value_numbers: dict[object, int]
    expressions: dict[Expression, int]
    constant_numbers: dict[int, int]
    next_value_number: int
    loads_forwarded: int = 0

    @property
    def values_issued(self) -> int:
        return self.next_value_number - 1

    def number_of(self, value) -> Optional[int]:
        return self.value_numbers.get(value)

    def redundant_records(self) -> list[NumberingRecord]:
        return [r for r in self.records if r.redundant]

    def record_for(self, inst: Instruction) -> Optional[NumberingRecord]:
        for r in self.records:
            if r.instruction is inst:
                return r
        return None


class ValueNumbering:
    """
    Local value numbering over one function at a time.

    With constant_aware set, literal operands are interned by value so every
    occurrence of the same literal shares a number. Without it each literal
    occurrence is an ordinary value numbered on first sight.
    """

    def __init__(self, constant_aware: bool = True, sink: Optional[DiagnosticSink] = None):
        self.constant_aware = constant_aware
        self.sink = sink if sink is not None else NullSink()

    def run(self, func: Function) -> NumberingResult:
        """Number every instruction of `func` and return the final tables."""
        state = NumberingState.create(self.constant_aware)
        records: list[NumberingRecord] = []

        self.sink.begin_function(func)
        for block in func.blocks:
            for inst in block.instructions:
                record = self._number_instruction(inst, state)
                if record is None:
                    continue
                records.append(record)
                self.sink.emit(record)

        result = NumberingResult(
            function_name=func.name,
            records=records,
            value_numbers=dict(state.value_numbers),
            expressions=dict(state.expressions),
            constant_numbers=dict(state.constants.numbers) if state.constants is not None else {},
            next_value_number=state.counter.next,
            loads_forwarded=state.loads_forwarded,
        )
        self.sink.end_function(result)
        return result

    def _number_instruction(self, inst: Instruction, state: NumberingState) -> Optional[NumberingRecord]:
        if isinstance(inst, Store):
            return self._number_store(inst, state)
        if isinstance(inst, Load):
            return self._number_load(inst, state)
        if isinstance(inst, BinaryOp):
            return self._number_binary_op(inst, state)
        # Other instructions are invisible to numbering
        return None

    def _number_store(self, store: Store, state: NumberingState) -> NumberingRecord:
        if isinstance(store.value, Const) and self.constant_aware:
            vn = state.intern(store.value)
        else:
            vn = state.number_or_fresh(store.value)

        # A store always rebinds the location, whatever it held before
        state.value_numbers[store.pointer] = vn
        return NumberingRecord(store, vn, (vn,))

    def _number_load(self, load: Load, state: NumberingState) -> NumberingRecord:
        pointer_vn = state.number_of(load.pointer)
        if pointer_vn is not None:
            state.value_numbers[load.result] = pointer_vn
            state.loads_forwarded += 1
            vn = pointer_vn
        else:
            vn = state.fresh(load.result)
        return NumberingRecord(load, vn, (pointer_vn,))

    def _number_binary_op(self, op: BinaryOp, state: NumberingState) -> NumberingRecord:
        lhs = self._operand_number(op.lhs, op, state)
        rhs = self._operand_number(op.rhs, op, state)
        expr = make_expression(op.opcode, lhs, rhs)

        existing = state.expressions.get(expr)
        if existing is not None:
            state.value_numbers[op.result] = existing
            return NumberingRecord(op, existing, (lhs, rhs), opcode_name(op.opcode), redundant=True)

        vn = state.fresh(op.result)
        state.expressions[expr] = vn
        return NumberingRecord(op, vn, (lhs, rhs), opcode_name(op.opcode))

    def _operand_number(self, operand: Value, inst: Instruction, state: NumberingState) -> int:
        if isinstance(operand, Const):
            if self.constant_aware:
                return state.intern(operand)
            return state.number_or_fresh(operand)

        vn = state.number_of(operand)
        if vn is None:
            raise UnresolvedOperandError(inst, operand)
        return vn
