# src/flight_config/core/document/script.py
"""
Avaliador da linguagem declarativa de configuração (subconjunto de Lua).

Este módulo transforma texto-fonte declarativo em mutações sobre o
namespace global de um documento. É o avaliador padrão tanto para o
arquivo base (`.lua`, `.cfg`, ...) quanto para o arquivo de settings.

Linguagem suportada:
    - statements: `alvo = expr`, `local nome = expr`, chamadas de função
    - alvos: `nome`, `alvo.campo`, `alvo[expr]` (atribuição múltipla permitida)
    - expressões: nil, booleanos, números, strings, construtores de tabela,
      acesso a campos/índices, chamadas, parênteses, operadores binários
      `or and < <= > >= == ~= .. + - * / % ^` e unários `not - #`
    - comentários `--` e `--[[ ... ]]`

Decisões arquiteturais:
    - O trecho é analisado por completo antes de executar: erro de sintaxe
      não produz nenhum binding
    - Erro de execução interrompe os statements seguintes; bindings
      anteriores permanecem
    - Definições de função e controle de fluxo são rejeitados (o documento
      é declarativo; funções vêm apenas do prelúdio)

Invariantes:
    - Toda falha é `ScriptSyntaxError` ou `ScriptRuntimeError`, com linha
    - O avaliador só muta a tabela de globais recebida

Limites explícitos:
    - Não é um interpretador Lua completo
    - Não realiza I/O
"""

from __future__ import annotations

import math
import operator
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..errors import EvaluationError, ScriptRuntimeError, ScriptSyntaxError
from .table import (
    Function,
    Table,
    format_number,
    is_number,
    numeral_value,
    to_number,
    truthy,
    type_name,
    wrap_integer,
)

_KEYWORDS = frozenset(
    {
        "and", "break", "do", "else", "elseif", "end", "false", "for", "function",
        "if", "in", "local", "nil", "not", "or", "repeat", "return", "then",
        "true", "until", "while",
    }
)

_OPERATORS = (
    "...", "..", "==", "~=", "<=", ">=",
    "+", "-", "*", "/", "%", "^", "#", "<", ">", "=",
    "(", ")", "{", "}", "[", "]", ";", ":", ",", ".",
)

_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_NUMBER_RE = re.compile(r"0[xX][0-9a-fA-F]+|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_ESCAPES = {
    "n": "\n", "t": "\t", "r": "\r", "a": "\a", "b": "\b",
    "f": "\f", "v": "\v", "\\": "\\", '"': '"', "'": "'", "\n": "\n",
}

# (prioridade à esquerda, prioridade à direita)
_BINARY_PRIORITY: Dict[str, Tuple[int, int]] = {
    "or": (1, 1),
    "and": (2, 2),
    "<": (3, 3), ">": (3, 3), "<=": (3, 3), ">=": (3, 3), "~=": (3, 3), "==": (3, 3),
    "..": (5, 4),
    "+": (6, 6), "-": (6, 6),
    "*": (7, 7), "/": (7, 7), "%": (7, 7),
    "^": (10, 9),
}
_UNARY_PRIORITY = 8

# limite de aninhamento de expressões (construtores, parênteses, operadores)
MAX_SYNTAX_LEVELS = 100

_INTEGER_OPS: Dict[str, Callable[[Any, Any], Any]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
}


# =====================================================
# Tokens
# =====================================================

@dataclass(frozen=True)
class Token:
    kind: str  # name | keyword | number | string | op | eof
    value: Any
    line: int


def _long_bracket_level(text: str, i: int) -> Optional[int]:
    """Nível de um abre-colchete longo (`[[`, `[=[`, ...) em `i`, ou `None`."""
    if i >= len(text) or text[i] != "[":
        return None
    j = i + 1
    while j < len(text) and text[j] == "=":
        j += 1
    if j < len(text) and text[j] == "[":
        return j - i - 1
    return None


def tokenize(text: str, source: str = "<string>") -> List[Token]:
    tokens: List[Token] = []
    i, line, n = 0, 1, len(text)

    if text.startswith("#"):
        # linha shebang
        while i < n and text[i] != "\n":
            i += 1

    while i < n:
        ch = text[i]

        if ch == "\n":
            line += 1
            i += 1
            continue
        if ch in " \t\r\f\v":
            i += 1
            continue

        # comentários
        if text.startswith("--", i):
            level = _long_bracket_level(text, i + 2)
            if level is not None:
                close = "]" + "=" * level + "]"
                end = text.find(close, i + 2)
                if end < 0:
                    raise ScriptSyntaxError("unfinished long comment", source=source, line=line)
                line += text.count("\n", i, end)
                i = end + len(close)
            else:
                while i < n and text[i] != "\n":
                    i += 1
            continue

        # strings longas
        level = _long_bracket_level(text, i)
        if level is not None:
            close = "]" + "=" * level + "]"
            start = i + level + 2
            end = text.find(close, start)
            if end < 0:
                raise ScriptSyntaxError("unfinished long string", source=source, line=line)
            value = text[start:end]
            if value.startswith("\n"):
                value = value[1:]
            tokens.append(Token("string", value, line))
            line += text.count("\n", i, end)
            i = end + len(close)
            continue

        if ch in "\"'":
            value, i, line = _read_string(text, i, line, source)
            tokens.append(Token("string", value, line))
            continue

        if ch.isdigit() or (ch == "." and i + 1 < n and text[i + 1].isdigit()):
            m = _NUMBER_RE.match(text, i)
            literal = m.group(0)
            end = m.end()
            if end < n and (text[end].isalnum() or text[end] == "_"):
                raise ScriptSyntaxError(f"malformed number near '{literal}{text[end]}'", source=source, line=line)
            tokens.append(Token("number", numeral_value(literal), line))
            i = end
            continue

        m = _NAME_RE.match(text, i)
        if m:
            word = m.group(0)
            tokens.append(Token("keyword" if word in _KEYWORDS else "name", word, line))
            i = m.end()
            continue

        for op in _OPERATORS:
            if text.startswith(op, i):
                tokens.append(Token("op", op, line))
                i += len(op)
                break
        else:
            raise ScriptSyntaxError(f"unexpected symbol near '{ch}'", source=source, line=line)

    tokens.append(Token("eof", None, line))
    return tokens


def _read_string(text: str, i: int, line: int, source: str) -> Tuple[str, int, int]:
    quote = text[i]
    start_line = line
    i += 1
    out: List[str] = []
    n = len(text)
    while True:
        if i >= n or text[i] == "\n":
            raise ScriptSyntaxError("unfinished string", source=source, line=start_line)
        ch = text[i]
        if ch == quote:
            return "".join(out), i + 1, line
        if ch != "\\":
            out.append(ch)
            i += 1
            continue

        i += 1
        if i >= n:
            raise ScriptSyntaxError("unfinished string", source=source, line=start_line)
        esc = text[i]
        if esc in _ESCAPES:
            out.append(_ESCAPES[esc])
            if esc == "\n":
                line += 1
            i += 1
        elif esc.isdigit():
            j = i
            while j < n and j - i < 3 and text[j].isdigit():
                j += 1
            code = int(text[i:j])
            if code > 255:
                raise ScriptSyntaxError("escape sequence too large", source=source, line=line)
            out.append(chr(code))
            i = j
        else:
            # escapes desconhecidos mantêm o caractere
            out.append(esc)
            i += 1


# =====================================================
# AST
# =====================================================

@dataclass
class Node:
    line: int


@dataclass
class Literal(Node):
    value: Any


@dataclass
class NameRef(Node):
    name: str


@dataclass
class IndexExpr(Node):
    obj: Node
    key: Node


@dataclass
class CallExpr(Node):
    func: Node
    args: List[Node]


@dataclass
class TableConstructor(Node):
    # chave None → item posicional
    fields: List[Tuple[Optional[Node], Node]]


@dataclass
class BinOp(Node):
    op: str
    left: Node
    right: Node


@dataclass
class UnOp(Node):
    op: str
    operand: Node


@dataclass
class Assign(Node):
    targets: List[Node]
    values: List[Node]


@dataclass
class LocalAssign(Node):
    names: List[str]
    values: List[Node]


@dataclass
class CallStatement(Node):
    call: CallExpr


@dataclass
class Chunk:
    source: str
    statements: List[Node] = field(default_factory=list)


# =====================================================
# Parser
# =====================================================

class _Parser:
    def __init__(self, tokens: List[Token], source: str):
        self.tokens = tokens
        self.pos = 0
        self.source = source
        self.depth = 0

    @property
    def tok(self) -> Token:
        return self.tokens[self.pos]

    def _peek(self, offset: int = 1) -> Token:
        return self.tokens[min(self.pos + offset, len(self.tokens) - 1)]

    def _advance(self) -> Token:
        tok = self.tokens[self.pos]
        if tok.kind != "eof":
            self.pos += 1
        return tok

    def _check(self, kind: str, value: Any = None) -> bool:
        tok = self.tok
        return tok.kind == kind and (value is None or tok.value == value)

    def _accept(self, kind: str, value: Any = None) -> bool:
        if self._check(kind, value):
            self._advance()
            return True
        return False

    def _expect(self, kind: str, value: Any = None) -> Token:
        if not self._check(kind, value):
            wanted = f"'{value}'" if value is not None else kind
            self._error(f"{wanted} expected near {self._describe(self.tok)}")
        return self._advance()

    def _error(self, message: str, line: Optional[int] = None) -> None:
        raise ScriptSyntaxError(message, source=self.source, line=line or self.tok.line)

    @staticmethod
    def _describe(tok: Token) -> str:
        if tok.kind == "eof":
            return "<eof>"
        if tok.kind == "string":
            return f"'\"{tok.value}\"'"
        return f"'{tok.value}'"

    # -----------------------------
    # Statements
    # -----------------------------
    def parse_chunk(self) -> Chunk:
        chunk = Chunk(source=self.source)
        while not self._check("eof"):
            stmt = self._statement()
            if stmt is not None:
                chunk.statements.append(stmt)
        return chunk

    def _statement(self) -> Optional[Node]:
        tok = self.tok

        if self._accept("op", ";"):
            return None

        if tok.kind == "keyword" and tok.value == "local":
            self._advance()
            if self._check("keyword", "function"):
                self._error("function definitions are not supported")
            names = [self._expect("name").value]
            while self._accept("op", ","):
                names.append(self._expect("name").value)
            values: List[Node] = []
            if self._accept("op", "="):
                values = self._expr_list()
            return LocalAssign(tok.line, names, values)

        if tok.kind == "keyword" and tok.value not in ("nil", "true", "false", "not"):
            if tok.value == "function":
                self._error("function definitions are not supported")
            self._error(f"'{tok.value}' statements are not supported")

        expr = self._suffixed_expr()

        if self._check("op", "=") or self._check("op", ","):
            targets = [expr]
            while self._accept("op", ","):
                targets.append(self._suffixed_expr())
            self._expect("op", "=")
            for target in targets:
                if not isinstance(target, (NameRef, IndexExpr)):
                    self._error("cannot assign to this expression", line=target.line)
            return Assign(tok.line, targets, self._expr_list())

        if isinstance(expr, CallExpr):
            return CallStatement(tok.line, expr)

        self._error(f"syntax error near {self._describe(self.tok)}")
        return None

    def _expr_list(self) -> List[Node]:
        exprs = [self._expr()]
        while self._accept("op", ","):
            exprs.append(self._expr())
        return exprs

    # -----------------------------
    # Expressões
    # -----------------------------
    def _expr(self) -> Node:
        return self._subexpr(0)

    def _subexpr(self, limit: int) -> Node:
        self.depth += 1
        if self.depth > MAX_SYNTAX_LEVELS:
            self._error("chunk has too many syntax levels")
        try:
            return self._subexpr_at_level(limit)
        finally:
            self.depth -= 1

    def _subexpr_at_level(self, limit: int) -> Node:
        tok = self.tok
        if (tok.kind == "keyword" and tok.value == "not") or (tok.kind == "op" and tok.value in ("-", "#")):
            self._advance()
            left: Node = UnOp(tok.line, tok.value, self._subexpr(_UNARY_PRIORITY))
        else:
            left = self._simple_expr()

        while True:
            op = self._binary_op()
            if op is None or _BINARY_PRIORITY[op][0] <= limit:
                return left
            line = self._advance().line
            right = self._subexpr(_BINARY_PRIORITY[op][1])
            left = BinOp(line, op, left, right)

    def _binary_op(self) -> Optional[str]:
        tok = self.tok
        if tok.kind in ("op", "keyword") and tok.value in _BINARY_PRIORITY:
            return tok.value
        return None

    def _simple_expr(self) -> Node:
        tok = self.tok
        if tok.kind == "number" or tok.kind == "string":
            self._advance()
            return Literal(tok.line, tok.value)
        if tok.kind == "keyword":
            if tok.value in ("nil", "true", "false"):
                self._advance()
                return Literal(tok.line, {"nil": None, "true": True, "false": False}[tok.value])
            if tok.value == "function":
                self._error("function definitions are not supported")
        if self._check("op", "{"):
            return self._table_constructor()
        if self._check("op", "..."):
            self._error("varargs are not supported")
        return self._suffixed_expr()

    def _primary_expr(self) -> Node:
        tok = self.tok
        if tok.kind == "name":
            self._advance()
            return NameRef(tok.line, tok.value)
        if self._accept("op", "("):
            expr = self._expr()
            self._expect("op", ")")
            return expr
        self._error(f"unexpected symbol near {self._describe(tok)}")
        raise AssertionError("unreachable")

    def _suffixed_expr(self) -> Node:
        expr = self._primary_expr()
        while True:
            tok = self.tok
            if self._accept("op", "."):
                name = self._expect("name")
                expr = IndexExpr(tok.line, expr, Literal(name.line, name.value))
            elif self._accept("op", "["):
                key = self._expr()
                self._expect("op", "]")
                expr = IndexExpr(tok.line, expr, key)
            elif self._check("op", ":"):
                self._error("method calls are not supported")
            elif self._accept("op", "("):
                args: List[Node] = []
                if not self._check("op", ")"):
                    args = self._expr_list()
                self._expect("op", ")")
                expr = CallExpr(tok.line, expr, args)
            elif self._check("op", "{"):
                expr = CallExpr(tok.line, expr, [self._table_constructor()])
            elif tok.kind == "string":
                self._advance()
                expr = CallExpr(tok.line, expr, [Literal(tok.line, tok.value)])
            else:
                return expr

    def _table_constructor(self) -> TableConstructor:
        line = self._expect("op", "{").line
        fields: List[Tuple[Optional[Node], Node]] = []
        while not self._check("op", "}"):
            if self._accept("op", "["):
                key = self._expr()
                self._expect("op", "]")
                self._expect("op", "=")
                fields.append((key, self._expr()))
            elif self.tok.kind == "name" and self._peek().kind == "op" and self._peek().value == "=":
                name = self._advance()
                self._advance()
                fields.append((Literal(name.line, name.value), self._expr()))
            else:
                fields.append((None, self._expr()))
            if not (self._accept("op", ",") or self._accept("op", ";")):
                break
        self._expect("op", "}")
        return TableConstructor(line, fields)


def parse_script(text: str, source: str = "<string>") -> Chunk:
    """Analisa o texto por completo; levanta `ScriptSyntaxError` na primeira falha."""
    return _Parser(tokenize(text, source), source).parse_chunk()


# =====================================================
# Interpretação
# =====================================================

class _Interpreter:
    def __init__(self, globals_table: Table, source: str):
        self.globals = globals_table
        self.source = source
        self.locals: Dict[str, Any] = {}

    def _fail(self, message: str, node: Node) -> None:
        raise ScriptRuntimeError(message, source=self.source, line=node.line)

    def run(self, chunk: Chunk) -> None:
        for stmt in chunk.statements:
            self._exec(stmt)

    def _exec(self, stmt: Node) -> None:
        if isinstance(stmt, Assign):
            values = self._adjust([self._eval(v) for v in stmt.values], len(stmt.targets))
            for target, value in zip(stmt.targets, values):
                self._assign(target, value)
        elif isinstance(stmt, LocalAssign):
            values = self._adjust([self._eval(v) for v in stmt.values], len(stmt.names))
            for name, value in zip(stmt.names, values):
                self.locals[name] = value
        elif isinstance(stmt, CallStatement):
            self._eval(stmt.call)
        else:  # pragma: no cover
            self._fail(f"unsupported statement {type(stmt).__name__}", stmt)

    @staticmethod
    def _adjust(values: List[Any], count: int) -> List[Any]:
        return (values + [None] * count)[:count]

    def _assign(self, target: Node, value: Any) -> None:
        if isinstance(target, NameRef):
            if target.name in self.locals:
                self.locals[target.name] = value
            else:
                self.globals.set(target.name, value)
            return

        assert isinstance(target, IndexExpr)
        obj = self._eval(target.obj)
        key = self._eval(target.key)
        if not isinstance(obj, Table):
            self._fail(f"attempt to index a {type_name(obj)} value", target)
        if key is None:
            self._fail("table index is nil", target)
        if isinstance(key, float) and math.isnan(key):
            self._fail("table index is NaN", target)
        obj.set(key, value)

    def _eval(self, node: Node) -> Any:
        if isinstance(node, Literal):
            return node.value

        if isinstance(node, NameRef):
            if node.name in self.locals:
                return self.locals[node.name]
            return self.globals.get(node.name)

        if isinstance(node, IndexExpr):
            obj = self._eval(node.obj)
            if not isinstance(obj, Table):
                self._fail(f"attempt to index a {type_name(obj)} value", node)
            return obj.get(self._eval(node.key))

        if isinstance(node, CallExpr):
            func = self._eval(node.func)
            args = [self._eval(a) for a in node.args]
            if not isinstance(func, Function):
                self._fail(f"attempt to call a {type_name(func)} value", node)
            try:
                return func.call(*args)
            except EvaluationError as e:
                if e.line is not None:
                    raise
                raise ScriptRuntimeError(f"{func.name}: {e.reason}", source=self.source, line=node.line) from None

        if isinstance(node, TableConstructor):
            table = Table()
            position = 1
            for key_node, value_node in node.fields:
                value = self._eval(value_node)
                if key_node is None:
                    table.set(position, value)
                    position += 1
                    continue
                key = self._eval(key_node)
                if key is None:
                    self._fail("table index is nil", key_node)
                if isinstance(key, float) and math.isnan(key):
                    self._fail("table index is NaN", key_node)
                table.set(key, value)
            return table

        if isinstance(node, UnOp):
            return self._unary(node)

        if isinstance(node, BinOp):
            return self._binary(node)

        self._fail(f"unsupported expression {type(node).__name__}", node)  # pragma: no cover
        return None

    def _unary(self, node: UnOp) -> Any:
        value = self._eval(node.operand)
        if node.op == "not":
            return not truthy(value)
        if node.op == "-":
            number = to_number(value)
            if number is None:
                self._fail(f"attempt to perform arithmetic on a {type_name(value)} value", node)
            return wrap_integer(-number) if isinstance(number, int) else -number
        # "#"
        if isinstance(value, str):
            return len(value)
        if isinstance(value, Table):
            return value.border()
        self._fail(f"attempt to get length of a {type_name(value)} value", node)
        return None

    def _binary(self, node: BinOp) -> Any:
        op = node.op

        # curto-circuito
        if op == "and":
            left = self._eval(node.left)
            return self._eval(node.right) if truthy(left) else left
        if op == "or":
            left = self._eval(node.left)
            return left if truthy(left) else self._eval(node.right)

        left = self._eval(node.left)
        right = self._eval(node.right)

        if op == "==":
            return _raw_equal(left, right)
        if op == "~=":
            return not _raw_equal(left, right)
        if op in ("<", "<=", ">", ">="):
            return self._compare(op, left, right, node)
        if op == "..":
            return self._concat(left, right, node)
        return self._arith(op, left, right, node)

    def _compare(self, op: str, left: Any, right: Any, node: Node) -> bool:
        comparable = (is_number(left) and is_number(right)) or (
            isinstance(left, str) and isinstance(right, str)
        )
        if not comparable:
            self._fail(f"attempt to compare {type_name(left)} with {type_name(right)}", node)
        if op == "<":
            return left < right
        if op == "<=":
            return left <= right
        if op == ">":
            return left > right
        return left >= right

    def _concat(self, left: Any, right: Any, node: Node) -> str:
        parts = []
        for value in (left, right):
            if isinstance(value, str):
                parts.append(value)
            elif is_number(value):
                parts.append(format_number(value))
            else:
                self._fail(f"attempt to concatenate a {type_name(value)} value", node)
        return parts[0] + parts[1]

    def _arith(self, op: str, left: Any, right: Any, node: Node) -> Any:
        x = to_number(left)
        y = to_number(right)
        if x is None or y is None:
            bad = left if x is None else right
            self._fail(f"attempt to perform arithmetic on a {type_name(bad)} value", node)

        if op in _INTEGER_OPS:
            result = _INTEGER_OPS[op](x, y)
            # inteiros: 64 bits com wrap-around
            return wrap_integer(result) if isinstance(result, int) else result
        if op == "/":
            if y == 0:
                if x == 0 or math.isnan(x):
                    return math.nan
                return math.copysign(math.inf, x) * math.copysign(1.0, y)
            return x / y
        if op == "%":
            if y == 0:
                return math.nan
            return x % y
        # "^"
        try:
            return math.pow(x, y)
        except ValueError:
            return math.nan
        except OverflowError:
            return math.inf


def _raw_equal(left: Any, right: Any) -> bool:
    if type_name(left) != type_name(right):
        return False
    if isinstance(left, (Table, Function)):
        return left is right
    return left == right


def run_chunk(chunk: Chunk, globals_table: Table) -> None:
    _Interpreter(globals_table, chunk.source).run(chunk)


def evaluate_script(text: str, globals_table: Table, *, source: str = "<string>") -> None:
    """Analisa e executa `text` sobre `globals_table`."""
    run_chunk(parse_script(text, source), globals_table)


# =====================================================
# Literais
# =====================================================

def to_literal(value: Any) -> str:
    """
    Codifica um escalar Python como literal da linguagem de script.

    Usado pelos setters para montar o statement `nome = literal` e como
    valor persistido no overlay de settings.

    Raises:
        TypeError: Se o valor não for nil, booleano, número ou string.
    """
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "0/0"
        if math.isinf(value):
            return "1/0" if value > 0 else "-1/0"
        return repr(value)
    if isinstance(value, str):
        return '"' + "".join(_escape_char(c) for c in value) + '"'
    raise TypeError(f"cannot encode {type(value).__name__} as a script literal")


def _escape_char(c: str) -> str:
    if c == "\\":
        return "\\\\"
    if c == '"':
        return '\\"'
    if c == "\n":
        return "\\n"
    if c == "\r":
        return "\\r"
    if c == "\t":
        return "\\t"
    if ord(c) < 32 or ord(c) == 127:
        return "\\%03d" % ord(c)
    return c
