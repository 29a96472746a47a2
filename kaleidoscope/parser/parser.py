"""
Kaleidoscope Recursive Descent Parser

Structural constructs (definitions, prototypes, calls, parentheses) are
parsed by recursive descent. Chains of binary operators are folded with
precedence climbing over a fixed precedence table, which gives `*` and `/`
priority over `+` and `-` and left associativity within a level.

The first syntax error aborts the parse. There is no recovery.

Author: xwest
"""

import logging
from typing import Dict, List, Mapping, Optional

from ..lexer.tokens import Token, TokenType, SourceLocation
from .ast_nodes import (
    ExprNode, NumberNode, VariableNode, BinaryOpNode, CallNode,
    PrototypeNode, FunctionNode
)
from .errors import (
    create_unexpected_token_error, create_undefined_operator_error,
    create_expected_character_error, create_expected_expression_error,
    create_expected_argument_list_error, create_expected_function_name_error,
    create_nesting_too_deep_error
)

logger = logging.getLogger(__name__)


DEFAULT_PRECEDENCE: Dict[str, int] = {
    "+": 20,
    "-": 20,
    "*": 40,
    "/": 40,
}

# Returned for anything that isn't a binary operator; below every real level
NO_PRECEDENCE = -1


class Parser:
    """
    Kaleidoscope parser.
    
    Consumes the lexer's token list and produces one FunctionNode per
    top-level unit. Bare expressions are wrapped in an anonymous function.
    """
    
    def __init__(self, tokens: List[Token], precedence: Optional[Mapping[str, int]] = None):
        """
        Initialize parser with a list of tokens.
        
        Args:
            tokens: List of tokens from the lexer
            precedence: Binary operator precedence table, defaults to DEFAULT_PRECEDENCE
        """
        self.tokens = tokens
        self.current = 0
        self.precedence = dict(precedence) if precedence is not None else dict(DEFAULT_PRECEDENCE)
    
    def parse(self) -> List[FunctionNode]:
        """
        Parse the token stream into top-level nodes.
        
        Returns:
            Function definitions and wrapped top-level expressions, in source order
            
        Raises:
            ParseError: On the first syntax error
        """
        self.current = 0
        nodes: List[FunctionNode] = []
        
        while self.current < len(self.tokens):
            start = self.current
            
            try:
                if self._check(TokenType.DEFINE):
                    node = self._parse_definition()
                else:
                    node = self._parse_top_level_expression()
            except RecursionError as e:
                raise create_nesting_too_deep_error(self._peek()) from e
            
            if self.current == start:
                raise create_unexpected_token_error("a definition or expression", self._peek())
            
            logger.debug("parsed top-level %s", node.prototype.name or "<anonymous>")
            nodes.append(node)
        
        return nodes
    
    def _parse_definition(self) -> FunctionNode:
        """Parse `def prototype expression`."""
        self._advance()  # def
        prototype = self._parse_prototype()
        body = self._parse_expression()
        return FunctionNode(prototype, body)
    
    def _parse_top_level_expression(self) -> FunctionNode:
        """Parse a bare expression as an anonymous function."""
        body = self._parse_expression()
        return FunctionNode.anonymous(body)
    
    def _parse_prototype(self) -> PrototypeNode:
        """Parse `name ( arg, ... )`."""
        name_token = self._advance()
        if not name_token.is_identifier:
            raise create_expected_function_name_error(name_token)
        
        open_token = self._advance()
        if open_token.type != TokenType.PARENS_OPEN:
            raise create_expected_character_error("(", open_token)
        
        argument_names: List[str] = []
        while self._check(TokenType.IDENTIFIER):
            argument_names.append(self._advance().value)
            
            if self._check(TokenType.PARENS_CLOSE):
                break
            
            separator = self._advance()
            if separator.type != TokenType.COMMA:
                raise create_expected_argument_list_error(separator)
        
        # Closing ')' is taken without checking; a missing one shows up
        # as an error in the body instead
        self._advance()
        
        return PrototypeNode(name_token.value, argument_names)
    
    # Expressions
    
    def _parse_expression(self) -> ExprNode:
        """Parse a primary followed by any binary operator chain."""
        lhs = self._parse_primary()
        return self._parse_binary_op(lhs)
    
    def _parse_primary(self) -> ExprNode:
        """Dispatch on the current token to the matching primary production."""
        token = self._peek()
        
        if token.is_identifier:
            return self._parse_identifier()
        if token.type == TokenType.NUMBER:
            return self._parse_number()
        if token.type == TokenType.PARENS_OPEN:
            return self._parse_parens()
        
        raise create_expected_expression_error(token)
    
    def _parse_number(self) -> NumberNode:
        token = self._advance()
        if token.type != TokenType.NUMBER:
            raise create_unexpected_token_error("a number", token)
        return NumberNode(token.value)
    
    def _parse_parens(self) -> ExprNode:
        """Parse `( expression )`."""
        open_token = self._advance()
        if open_token.type != TokenType.PARENS_OPEN:
            raise create_expected_character_error("(", open_token)
        
        expr = self._parse_expression()
        
        close_token = self._advance()
        if close_token.type != TokenType.PARENS_CLOSE:
            raise create_expected_character_error(")", close_token)
        
        return expr
    
    def _parse_identifier(self) -> ExprNode:
        """Parse a variable reference or a call `name ( expr, ... )`."""
        name_token = self._advance()
        if not name_token.is_identifier:
            raise create_unexpected_token_error("an identifier", name_token)
        
        if not self._check(TokenType.PARENS_OPEN):
            return VariableNode(name_token.value)
        self._advance()  # (
        
        arguments: List[ExprNode] = []
        if not self._check(TokenType.PARENS_CLOSE):
            while True:
                arguments.append(self._parse_expression())
                
                if self._check(TokenType.PARENS_CLOSE):
                    break
                
                separator = self._advance()
                if separator.type != TokenType.COMMA:
                    raise create_expected_argument_list_error(separator)
        
        self._advance()  # )
        return CallNode(name_token.value, arguments)
    
    def _parse_binary_op(self, lhs: ExprNode, min_precedence: int = 0) -> ExprNode:
        """
        Fold trailing binary operators into `lhs` by precedence climbing.
        
        Stops at the first token that isn't an operator or binds looser
        than `min_precedence`. When the operator after the right operand
        binds tighter than the current one, it's folded into the right
        operand first.
        """
        while True:
            token_precedence = self._current_precedence()
            if token_precedence < min_precedence:
                return lhs
            
            op_token = self._advance()
            if op_token.type != TokenType.BINARY_OPERATOR:
                raise create_unexpected_token_error("a binary operator", op_token)
            
            rhs = self._parse_primary()
            
            next_precedence = self._current_precedence()
            if token_precedence < next_precedence:
                rhs = self._parse_binary_op(rhs, token_precedence + 1)
            
            lhs = BinaryOpNode(op_token.value, lhs, rhs)
    
    def _current_precedence(self) -> int:
        """Precedence of the current token, or NO_PRECEDENCE if it isn't an operator.
        
        Raises:
            ParseError: If the operator isn't in the precedence table
        """
        token = self._peek()
        if token.type != TokenType.BINARY_OPERATOR:
            return NO_PRECEDENCE
        
        precedence = self.precedence.get(token.value)
        if precedence is None:
            raise create_undefined_operator_error(token.value, token)
        return precedence
    
    # Utility methods
    
    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        return self._peek().type == token_type
    
    def _advance(self) -> Token:
        """Consume and return current token (EOF once past the end)."""
        token = self._peek()
        self.current += 1
        return token
    
    def _peek(self) -> Token:
        """Return current token without consuming."""
        if self.current < len(self.tokens):
            return self.tokens[self.current]
        # Return EOF token if past end
        return Token(TokenType.EOF, "", None, self._eof_location())
    
    def _eof_location(self) -> SourceLocation:
        if self.tokens and self.tokens[-1].location is not None:
            last = self.tokens[-1].location
            return SourceLocation(last.filename, last.line, last.column + len(self.tokens[-1].lexeme),
                                  last.offset + len(self.tokens[-1].lexeme))
        return SourceLocation("<eof>", 0, 0, 0)


def parse_tokens(tokens: List[Token], precedence: Optional[Mapping[str, int]] = None) -> List[FunctionNode]:
    """Parse an already tokenized program."""
    return Parser(tokens, precedence).parse()


def parse_string(source: str, filename: str = "<string>") -> List[FunctionNode]:
    """
    Convenience function to parse a source string.
    
    Args:
        source: Source code string
        filename: Filename for error reporting
        
    Returns:
        Top-level function nodes
        
    Raises:
        ParseError: If parsing fails
    """
    from ..lexer import tokenize_string
    
    tokens = tokenize_string(source, filename)
    return Parser(tokens).parse()


def parse_file(filepath: str) -> List[FunctionNode]:
    """
    Convenience function to parse a source file.
    
    Raises:
        ParseError: If parsing fails
        OSError: If file cannot be read
    """
    from ..lexer import tokenize_file
    
    tokens = tokenize_file(filepath)
    return Parser(tokens).parse()
