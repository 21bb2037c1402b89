"""
Renders lbasic expression trees as Python expression source.

This module defines the `PythonEmitter` class, which converts the expression
trees built by the translator into Python expressions an executor can
``eval`` against its own namespace of variables, constants and functions.

Mapping:
    - Binary operators are fully parenthesized: ``(A + 1)``.
    - ``=`` becomes ``==``, ``<>`` becomes ``!=``.
    - ``AND`` / ``OR`` become ``and`` / ``or``.
    - Unary minus becomes ``(-X)``.
    - The ``$`` string marker in names becomes ``_S`` (``A$`` -> ``A_S``).
    - Subscripts render as ``A[i]``, calls as ``NAME(a, b)``.
    - String bodies are placed between double quotes verbatim, so backslash
      escapes kept by the lexer carry over.

Raises:
    - `NotImplementedError`: If a node kind has no emitter.
"""

from dataclasses import fields

from lbasic.lbasic_ast import ASTNode, Statement, Variable

_PY_OPS = {"=": "==", "<>": "!=", "AND": "and", "OR": "or"}


def python_name(name: str) -> str:
    return name.replace("$", "_S")


class PythonEmitter:
    """Emits Python expression source from lbasic expression trees.

    Methods:
        emit_expr(node): Emits a Python expression from an expression node.
        emit_variable_ref(var): Emits an assignable target for a Variable.
        emit_operands(stmt): Emits every expression operand of a statement.
    """

    def emit_expr_number(self, node: ASTNode) -> str:
        return repr(node.value)

    def emit_expr_string(self, node: ASTNode) -> str:
        return f'"{node.value}"'

    def emit_expr_constant(self, node: ASTNode) -> str:
        return str(node.value)

    def emit_expr_variable(self, node: ASTNode) -> str:
        return python_name(str(node.value))

    def emit_expr_subscript(self, node: ASTNode) -> str:
        return f"{python_name(str(node.value))}[{self.emit_expr(node.children[0])}]"

    def emit_expr_call(self, node: ASTNode) -> str:
        args = ", ".join(self.emit_expr(arg) for arg in node.children)
        return f"{python_name(str(node.value))}({args})"

    def emit_expr_neg(self, node: ASTNode) -> str:
        return f"(-{self.emit_expr(node.children[0])})"

    def emit_expr_arith(self, node: ASTNode) -> str:
        left = self.emit_expr(node.children[0])
        right = self.emit_expr(node.children[1])
        op = _PY_OPS.get(str(node.value), str(node.value))
        return f"({left} {op} {right})"

    emit_expr_compare = emit_expr_arith
    emit_expr_logic = emit_expr_arith

    def emit_expr(self, node: ASTNode) -> str:
        """
        Dispatches expression emission based on node kind.

        Parameters
        ----------
        node : ASTNode
            The expression node to emit.

        Returns
        -------
        str
            The resulting Python code for the expression.

        Raises
        ------
        NotImplementedError
            If no emitter exists for the node kind.
        """
        method = getattr(self, f"emit_expr_{node.kind}", None)
        if not callable(method):
            raise NotImplementedError(f"No expression emitter for kind '{node.kind}'")
        return str(method(node))

    def emit_variable_ref(self, var: Variable) -> str:
        name = python_name(var.name)
        if var.subscript is None:
            return name
        return f"{name}[{self.emit_expr(var.subscript)}]"

    def emit_operands(self, stmt: Statement) -> list[str]:
        """Emits the expressions and variable targets of a statement in field order.

        Nested IF branches are walked recursively.
        """
        out: list[str] = []
        for f in fields(stmt):
            value = getattr(stmt, f.name)
            if isinstance(value, ASTNode):
                out.append(self.emit_expr(value))
            elif isinstance(value, Variable):
                out.append(self.emit_variable_ref(value))
            elif isinstance(value, Statement):
                out.extend(self.emit_operands(value))
        return out
