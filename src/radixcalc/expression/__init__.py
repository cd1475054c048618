"""
Expression pipeline: лексер -> парсер -> вычислитель.
"""

from radixcalc.expression.evaluator import Evaluator, evaluate
from radixcalc.expression.lexer import Lexer, is_command_line, tokenize
from radixcalc.expression.parser import Parser, parse

__all__ = [
    "Lexer",
    "Parser",
    "Evaluator",
    "tokenize",
    "parse",
    "evaluate",
    "is_command_line",
]
