"""Tests for expression canonicalization and constant interning."""

import unittest

from lvn.canonical import (
    ConstantTable,
    Expression,
    ValueNumberCounter,
    intern_constant,
    is_commutative,
    make_expression,
    opcode_name,
)
from lvn.ir import BinaryOpcode


class TestMakeExpression(unittest.TestCase):

    def test_commutative_operands_are_ordered(self):
        for opcode in (BinaryOpcode.ADD, BinaryOpcode.MUL):
            expr = make_expression(opcode, 7, 3)
            self.assertEqual(expr, Expression(opcode, 3, 7))
            self.assertEqual(make_expression(opcode, 3, 7), make_expression(opcode, 7, 3))

    def test_non_commutative_order_preserved(self):
        for opcode in (BinaryOpcode.SUB, BinaryOpcode.UDIV, BinaryOpcode.SDIV):
            self.assertEqual(make_expression(opcode, 7, 3), Expression(opcode, 7, 3))
            self.assertNotEqual(make_expression(opcode, 7, 3), make_expression(opcode, 3, 7))

    def test_equal_operands(self):
        self.assertEqual(make_expression(BinaryOpcode.SUB, 4, 4), make_expression(BinaryOpcode.SUB, 4, 4))

    def test_opcode_is_part_of_key(self):
        self.assertNotEqual(make_expression(BinaryOpcode.ADD, 1, 2), make_expression(BinaryOpcode.MUL, 1, 2))
        # udiv and sdiv print the same but are different computations
        self.assertNotEqual(make_expression(BinaryOpcode.UDIV, 1, 2), make_expression(BinaryOpcode.SDIV, 1, 2))

    def test_expressions_are_hashable_keys(self):
        table = {make_expression(BinaryOpcode.ADD, 2, 1): 3}
        self.assertEqual(table[make_expression(BinaryOpcode.ADD, 1, 2)], 3)

    def test_is_commutative(self):
        self.assertTrue(is_commutative(BinaryOpcode.ADD))
        self.assertTrue(is_commutative(BinaryOpcode.MUL))
        self.assertFalse(is_commutative(BinaryOpcode.SUB))
        # Only add and mul are normalized
        self.assertFalse(is_commutative(BinaryOpcode.XOR))
        self.assertEqual(make_expression(BinaryOpcode.XOR, 5, 2), Expression(BinaryOpcode.XOR, 5, 2))


class TestOpcodeName(unittest.TestCase):

    def test_known_mnemonics(self):
        self.assertEqual(opcode_name(BinaryOpcode.ADD), "add")
        self.assertEqual(opcode_name(BinaryOpcode.SUB), "sub")
        self.assertEqual(opcode_name(BinaryOpcode.MUL), "mul")
        self.assertEqual(opcode_name(BinaryOpcode.UDIV), "div")
        self.assertEqual(opcode_name(BinaryOpcode.SDIV), "div")

    def test_other_opcodes_are_unknown(self):
        for opcode in (BinaryOpcode.XOR, BinaryOpcode.SHL, BinaryOpcode.SREM, BinaryOpcode.AND):
            self.assertEqual(opcode_name(opcode), "unknown")


class TestInternConstant(unittest.TestCase):

    def test_miss_allocates_and_hit_reuses(self):
        table = ConstantTable()
        counter = ValueNumberCounter()

        self.assertEqual(intern_constant(5, table, counter), 1)
        self.assertEqual(intern_constant(3, table, counter), 2)
        self.assertEqual(intern_constant(5, table, counter), 1)

        self.assertEqual(counter.next, 3)
        self.assertEqual(counter.issued, 2)
        self.assertEqual(table.numbers, {5: 1, 3: 2})
        self.assertIn(5, table)
        self.assertEqual(len(table), 2)

    def test_shares_counter_with_other_allocations(self):
        table = ConstantTable()
        counter = ValueNumberCounter()
        self.assertEqual(counter.allocate(), 1)
        self.assertEqual(intern_constant(-1, table, counter), 2)
        self.assertEqual(counter.allocate(), 3)
        self.assertEqual(table.lookup(-1), 2)
        self.assertIsNone(table.lookup(0))


if __name__ == "__main__":
    unittest.main()
