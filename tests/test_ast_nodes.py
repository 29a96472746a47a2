"""
Test suite for the Kaleidoscope AST nodes.

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from kaleidoscope.parser import (
    ASTNodeType, ASTVisitor, NumberNode, VariableNode, BinaryOpNode, CallNode,
    PrototypeNode, FunctionNode, TreePrinter, parse_string,
)


class TestNodes(unittest.TestCase):
    """Test cases for node construction and comparison."""
    
    def test_value_equality_and_hash(self):
        a = BinaryOpNode("+", NumberNode(1.0), VariableNode("x"))
        b = BinaryOpNode("+", NumberNode(1.0), VariableNode("x"))
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertNotEqual(a, BinaryOpNode("-", NumberNode(1.0), VariableNode("x")))
    
    def test_sequences_stored_as_tuples(self):
        call = CallNode("f", [NumberNode(1.0)])
        self.assertEqual(call.arguments, (NumberNode(1.0),))
        proto = PrototypeNode("f", ["a", "b"])
        self.assertEqual(proto.argument_names, ("a", "b"))
    
    def test_nodes_are_immutable(self):
        node = NumberNode(1.0)
        with self.assertRaises(AttributeError):
            node.value = 2.0
    
    def test_anonymous_function(self):
        fn = FunctionNode.anonymous(NumberNode(1.0))
        self.assertTrue(fn.is_anonymous)
        self.assertEqual(fn.prototype, PrototypeNode("", []))
    
    def test_node_types(self):
        self.assertEqual(NumberNode(1.0).node_type, ASTNodeType.NUMBER)
        self.assertEqual(CallNode("f").node_type, ASTNodeType.CALL)
        self.assertEqual(FunctionNode.anonymous(VariableNode("x")).node_type, ASTNodeType.FUNCTION)
    
    def test_walk_visits_every_node(self):
        fn = parse_string("def f(x) g(x, 1) + 2")[0]
        names = [type(node).__name__ for node in fn.walk()]
        self.assertEqual(names, [
            "FunctionNode", "PrototypeNode", "BinaryOpNode",
            "CallNode", "VariableNode", "NumberNode", "NumberNode",
        ])
    
    def test_str(self):
        fn = parse_string("def f(x) x * 2")[0]
        self.assertEqual(
            str(fn),
            "FunctionNode(prototype: PrototypeNode(name: f, argumentNames: [x]), "
            "body: BinaryOpNode(*, lhs: VariableNode(x), rhs: NumberNode(2.0)))"
        )
        self.assertEqual(str(CallNode("f", [NumberNode(1.0)])), "CallNode(name: f, arguments: [NumberNode(1.0)])")


class TestVisitor(unittest.TestCase):
    """Test cases for the visitor pattern."""
    
    def test_dispatch_by_class_name(self):
        class Counter(ASTVisitor):
            def __init__(self):
                self.numbers = 0
            
            def visit_NumberNode(self, node):
                self.numbers += 1
            
            def generic_visit(self, node):
                for child in node.children():
                    child.accept(self)
        
        counter = Counter()
        parse_string("f(1, 2 + 3) * 4")[0].accept(counter)
        self.assertEqual(counter.numbers, 4)
    
    def test_missing_visitor_method(self):
        with self.assertRaises(NotImplementedError):
            NumberNode(1.0).accept(ASTVisitor())
    
    def test_tree_printer(self):
        fn = parse_string("def f(x) x + 1")[0]
        self.assertEqual(TreePrinter().render(fn), "\n".join([
            "Function",
            "  Prototype f(x)",
            "  BinaryOp +",
            "    Variable x",
            "    Number 1.0",
        ]))
    
    def test_tree_printer_anonymous_call(self):
        fn = parse_string("foo(3, 4)")[0]
        self.assertEqual(TreePrinter(indent="| ").render(fn), "\n".join([
            "Function",
            "| Prototype <anonymous>()",
            "| Call foo",
            "| | Number 3.0",
            "| | Number 4.0",
        ]))


if __name__ == '__main__':
    unittest.main()
