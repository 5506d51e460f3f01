"""Tests for IR printing."""

import io
import unittest
from contextlib import redirect_stdout

from lvn import FunctionBuilder, ModuleBuilder
from lvn.ir import BinaryOp, BinaryOpcode, Const, Global, Load, Other, SSAValue, Store
from lvn.printing import print_function, print_module, render_instruction, render_value


class TestRenderInstruction(unittest.TestCase):

    def test_values(self):
        self.assertEqual(render_value(SSAValue(3)), "%3")
        self.assertEqual(render_value(SSAValue(3, "x")), "%x")
        self.assertEqual(render_value(Global("g")), "@g")
        self.assertEqual(render_value(Const(-4)), "-4")

    def test_memory(self):
        p, x = SSAValue(0, "p"), SSAValue(1, "x")
        self.assertEqual(render_instruction(Store(Const(5), p)), "store i32 5, i32* %p")
        self.assertEqual(render_instruction(Store(x, Global("g"))), "store i32 %x, i32* @g")
        self.assertEqual(render_instruction(Load(x, p)), "%x = load i32, i32* %p")

    def test_binary(self):
        a, b, r = SSAValue(0, "a"), SSAValue(1, "b"), SSAValue(2, "r")
        self.assertEqual(render_instruction(BinaryOp(BinaryOpcode.ADD, r, a, b)), "%r = add i32 %a, %b")
        self.assertEqual(render_instruction(BinaryOp(BinaryOpcode.SDIV, r, a, Const(2))), "%r = sdiv i32 %a, 2")

    def test_other(self):
        p, r = SSAValue(0, "p"), SSAValue(1, "r")
        self.assertEqual(render_instruction(Other("alloca", p)), "%p = alloca i32")
        self.assertEqual(render_instruction(Other("ret", None, [r])), "ret i32 %r")
        self.assertEqual(render_instruction(Other("ret")), "ret void")
        self.assertEqual(render_instruction(Other("br", None, ["label %exit"])), "br label %exit")
        self.assertEqual(render_instruction(Other("call", r, ["@foo"])), "%r = call @foo")

    def test_unknown_instruction_type(self):
        with self.assertRaises(ValueError):
            render_instruction("not an instruction")


class TestPrintFunction(unittest.TestCase):

    def test_print_function(self):
        b = FunctionBuilder("f")
        a = b.param("a")
        p = b.alloca("p")
        b.store(a, p)
        b.br("exit")
        b.block("exit")
        x = b.load(p, "x")
        b.ret(x)

        out = io.StringIO()
        print_function(b.build(), file=out)
        self.assertEqual(out.getvalue().splitlines(), [
            "define i32 @f(i32 %a) {",
            "entry:",
            "  %p = alloca i32",
            "  store i32 %a, i32* %p",
            "  br label %exit",
            "",
            "exit:",
            "  %x = load i32, i32* %p",
            "  ret i32 %x",
            "}",
        ])

    def test_print_module_to_stdout(self):
        mb = ModuleBuilder("m")
        g = mb.global_("g")
        fb = mb.function("main")
        fb.store(fb.const(1), g)
        fb.ret()
        mb.add(fb.build())

        out = io.StringIO()
        with redirect_stdout(out):
            print_module(mb.build())
        text = out.getvalue()
        self.assertTrue(text.startswith("; ModuleID = 'm'\n@g = global i32 0\n"))
        self.assertIn("define i32 @main() {", text)
        self.assertIn("  store i32 1, i32* @g", text)


if __name__ == "__main__":
    unittest.main()
