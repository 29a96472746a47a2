"""
Kaleidoscope Parser Package

Recursive descent parser with operator-precedence climbing for binary
expressions. Produces immutable, value-comparable AST nodes.

Key Features:
- Function definitions and bare top-level expressions
- Configurable binary operator precedence table
- Classified errors (ParseErrorKind) with source locations

Author: xwest
"""

from .ast_nodes import (
    ASTNodeType, ASTVisitor, ASTNode, ExprNode,
    NumberNode, VariableNode, BinaryOpNode, CallNode,
    PrototypeNode, FunctionNode, TreePrinter,
)
from .parser import Parser, DEFAULT_PRECEDENCE, parse_tokens, parse_string, parse_file
from .errors import ParseError, ParseErrorKind

__all__ = [
    # Core parser
    "Parser",
    "DEFAULT_PRECEDENCE",
    "parse_tokens",
    "parse_string",
    "parse_file",
    
    # AST nodes
    "ASTNodeType", "ASTVisitor", "ASTNode", "ExprNode",
    "NumberNode", "VariableNode", "BinaryOpNode", "CallNode",
    "PrototypeNode", "FunctionNode", "TreePrinter",
    
    # Error handling
    "ParseError", "ParseErrorKind",
]
