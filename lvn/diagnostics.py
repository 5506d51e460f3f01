"""
Numbering Diagnostics

One record per numbered instruction, and the sinks the engine writes them to.
A sink is handed to the engine by its caller; the engine never writes to a
process-wide stream on its own.
"""

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, TextIO

from .ir import Instruction, Function
from .printing import render_instruction

INSTRUCTION_COLUMN_WIDTH = 40


@dataclass(frozen=True)
class NumberingRecord:
    """What value numbering decided for one instruction.

    For store and load records `operands` holds a single number: the stored
    value's number, or the pointer's number (None if the location was never
    written). Binary arithmetic records carry both operand numbers plus the
    opcode mnemonic and the redundant flag.
    """
    instruction: Instruction
    number: int
    operands: tuple[Optional[int], ...]
    opcode_name: Optional[str] = None
    redundant: bool = False

    @property
    def text(self) -> str:
        return render_instruction(self.instruction)

    @property
    def equation(self) -> str:
        ops = ["?" if o is None else str(o) for o in self.operands]
        if self.opcode_name is None:
            return f"{self.number} = {ops[0]}"
        eq = f"{self.number} = {ops[0]} {self.opcode_name} {ops[1]}"
        if self.redundant:
            eq += " (redundant)"
        return eq


def format_record(record: NumberingRecord) -> str:
    """Instruction text padded to a fixed column, then the equation."""
    return f"{record.text:<{INSTRUCTION_COLUMN_WIDTH}} {record.equation}"


class DiagnosticSink(ABC):
    """Receives numbering records in program order."""

    def begin_function(self, func: Function) -> None:
        """Called once before the first record of a function."""
        pass

    @abstractmethod
    def emit(self, record: NumberingRecord) -> None:
        """Receive one record."""
        pass

    def end_function(self, result) -> None:
        """Called once after the last record of a function."""
        pass


class StreamSink(DiagnosticSink):
    """Writes formatted records to a text stream (stderr by default)."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved late so redirected stderr is honored
        return self._stream if self._stream is not None else sys.stderr

    def begin_function(self, func: Function) -> None:
        self.stream.write(f"ValueNumbering: {func.name}\n")
        self.stream.flush()

    def emit(self, record: NumberingRecord) -> None:
        self.stream.write(format_record(record) + "\n")
        self.stream.flush()


@dataclass
class RecordingSink(DiagnosticSink):
    """Keeps every record it receives."""
    records: list[NumberingRecord] = field(default_factory=list)
    functions: list[str] = field(default_factory=list)

    def begin_function(self, func: Function) -> None:
        self.functions.append(func.name)

    def emit(self, record: NumberingRecord) -> None:
        self.records.append(record)

    def lines(self) -> list[str]:
        return [format_record(r) for r in self.records]


class NullSink(DiagnosticSink):
    """Discards records."""

    def emit(self, record: NumberingRecord) -> None:
        pass
