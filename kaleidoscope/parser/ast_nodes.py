"""
Abstract Syntax Tree node definitions for Kaleidoscope.

The node set is closed: four expression kinds (number, variable, binary
operation, call) plus prototypes and function definitions. Nodes are
immutable and compare by value, so two parses of the same text produce
equal trees. Traversal goes through the visitor pattern.

Author: xwest
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Sequence, Tuple


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""
    
    # Expressions
    NUMBER = "Number"
    VARIABLE = "Variable"
    BINARY_OP = "BinaryOp"
    CALL = "Call"
    
    # Declarations
    PROTOTYPE = "Prototype"
    FUNCTION = "Function"


class ASTVisitor:
    """
    Visitor for AST nodes.
    
    `visit(node)` dispatches to `visit_<ClassName>(node)`. Subclasses
    implement the methods for the nodes they care about; anything else
    goes to `generic_visit`.
    """
    
    def visit(self, node: 'ASTNode') -> Any:
        method = getattr(self, f"visit_{type(node).__name__}", self.generic_visit)
        return method(node)
    
    def generic_visit(self, node: 'ASTNode') -> Any:
        raise NotImplementedError(f"{type(self).__name__} has no visitor for {type(node).__name__}")


class ASTNode(ABC):
    """Base class for all AST nodes."""
    
    node_type: ASTNodeType
    
    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)
    
    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes."""
        pass
    
    def walk(self):
        """Yield this node and every node below it, depth first."""
        yield self
        for child in self.children():
            yield from child.walk()


# ============================================================================
# Expressions
# ============================================================================

class ExprNode(ASTNode):
    """Base class for expressions."""
    pass


@dataclass(frozen=True)
class NumberNode(ExprNode):
    """Numeric literal."""
    value: float
    
    node_type = ASTNodeType.NUMBER
    
    def children(self) -> List[ASTNode]:
        return []
    
    def __str__(self) -> str:
        return f"NumberNode({self.value})"


@dataclass(frozen=True)
class VariableNode(ExprNode):
    """Reference to a variable (a function argument)."""
    name: str
    
    node_type = ASTNodeType.VARIABLE
    
    def children(self) -> List[ASTNode]:
        return []
    
    def __str__(self) -> str:
        return f"VariableNode({self.name})"


@dataclass(frozen=True)
class BinaryOpNode(ExprNode):
    """Binary arithmetic operation."""
    op: str
    lhs: ExprNode
    rhs: ExprNode
    
    node_type = ASTNodeType.BINARY_OP
    
    def children(self) -> List[ASTNode]:
        return [self.lhs, self.rhs]
    
    def __str__(self) -> str:
        return f"BinaryOpNode({self.op}, lhs: {self.lhs}, rhs: {self.rhs})"


@dataclass(frozen=True)
class CallNode(ExprNode):
    """Function call by name."""
    callee: str
    arguments: Tuple[ExprNode, ...] = ()
    
    node_type = ASTNodeType.CALL
    
    def __post_init__(self):
        object.__setattr__(self, "arguments", tuple(self.arguments))
    
    def children(self) -> List[ASTNode]:
        return list(self.arguments)
    
    def __str__(self) -> str:
        args = ", ".join(str(arg) for arg in self.arguments)
        return f"CallNode(name: {self.callee}, arguments: [{args}])"


# ============================================================================
# Declarations
# ============================================================================

@dataclass(frozen=True)
class PrototypeNode(ASTNode):
    """Function name and argument names. Duplicate names are not checked."""
    name: str
    argument_names: Tuple[str, ...] = ()
    
    node_type = ASTNodeType.PROTOTYPE
    
    def __post_init__(self):
        object.__setattr__(self, "argument_names", tuple(self.argument_names))
    
    @property
    def is_anonymous(self) -> bool:
        return self.name == ""
    
    def children(self) -> List[ASTNode]:
        return []
    
    def __str__(self) -> str:
        return f"PrototypeNode(name: {self.name}, argumentNames: [{', '.join(self.argument_names)}])"


@dataclass(frozen=True)
class FunctionNode(ASTNode):
    """
    Function definition.
    
    A bare top-level expression is a FunctionNode with an anonymous
    prototype (empty name, no arguments).
    """
    prototype: PrototypeNode
    body: ExprNode
    
    node_type = ASTNodeType.FUNCTION
    
    @classmethod
    def anonymous(cls, body: ExprNode) -> 'FunctionNode':
        return cls(PrototypeNode("", ()), body)
    
    @property
    def is_anonymous(self) -> bool:
        return self.prototype.is_anonymous
    
    def children(self) -> List[ASTNode]:
        return [self.prototype, self.body]
    
    def __str__(self) -> str:
        return f"FunctionNode(prototype: {self.prototype}, body: {self.body})"


# ============================================================================
# Printing
# ============================================================================

class TreePrinter(ASTVisitor):
    """Renders a tree as indented text, one node per line."""
    
    def __init__(self, indent: str = "  "):
        self.indent = indent
        self._depth = 0
        self._lines: List[str] = []
    
    def render(self, node: ASTNode) -> str:
        self._depth = 0
        self._lines = []
        node.accept(self)
        return "\n".join(self._lines)
    
    def _emit(self, text: str):
        self._lines.append(self.indent * self._depth + text)
    
    def _nested(self, nodes: Sequence[ASTNode]):
        self._depth += 1
        for node in nodes:
            node.accept(self)
        self._depth -= 1
    
    def visit_NumberNode(self, node: NumberNode):
        self._emit(f"Number {node.value}")
    
    def visit_VariableNode(self, node: VariableNode):
        self._emit(f"Variable {node.name}")
    
    def visit_BinaryOpNode(self, node: BinaryOpNode):
        self._emit(f"BinaryOp {node.op}")
        self._nested(node.children())
    
    def visit_CallNode(self, node: CallNode):
        self._emit(f"Call {node.callee}")
        self._nested(node.arguments)
    
    def visit_PrototypeNode(self, node: PrototypeNode):
        name = node.name or "<anonymous>"
        self._emit(f"Prototype {name}({', '.join(node.argument_names)})")
    
    def visit_FunctionNode(self, node: FunctionNode):
        self._emit("Function")
        self._nested(node.children())
