"""Java parser using tree-sitter for shallow structural analysis.

Builds a small declaration/statement model per file:
- Package and imports
- Type declarations (classes, interfaces, enums, records) with fields and methods
- Per-method facts: parameters, locals, identifier reads, switches, calls,
  object creations, catch clauses, conditionals and loops

No symbol resolution is attempted beyond looking up a switch selector's
declared type among the enclosing method's parameters/locals and the
enclosing type's fields.
"""

import logging
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import Callable, Optional

import tree_sitter_java as tsjava
from tree_sitter import Language, Node, Parser

from devsync.errors import SourceParseError

logger = logging.getLogger(__name__)

TYPE_NODES = {
    "class_declaration",
    "interface_declaration",
    "enum_declaration",
    "record_declaration",
    "annotation_type_declaration",
}
METHOD_NODES = {"method_declaration", "constructor_declaration", "compact_constructor_declaration"}
MEMBER_FIELD_NODES = {"field_declaration", "constant_declaration"}
SWITCH_NODES = {"switch_expression", "switch_statement"}
LOOP_NODES = {"for_statement", "enhanced_for_statement", "while_statement", "do_statement"}
BRANCH_NODES = {"if_statement", "for_statement", "enhanced_for_statement", "while_statement"}
COMMENT_NODES = {"line_comment", "block_comment", "comment"}
JUMP_STATEMENTS = {
    "break_statement",
    "return_statement",
    "throw_statement",
    "continue_statement",
    "yield_statement",
}
# Parents under which a switch produces a value rather than standing alone.
VALUE_CONTEXTS = {
    "variable_declarator",
    "return_statement",
    "assignment_expression",
    "argument_list",
    "yield_statement",
    "lambda_expression",
    "parenthesized_expression",
    "binary_expression",
    "ternary_expression",
}


@dataclass
class Parameter:
    name: str
    type: str
    line: int


@dataclass
class LocalVariable:
    name: str
    type: str
    line: int
    has_initializer: bool = False


@dataclass
class FieldDeclaration:
    names: list[str]
    type: str
    modifiers: set[str]
    line: int

    @property
    def is_public(self) -> bool:
        return "public" in self.modifiers

    @property
    def is_constant(self) -> bool:
        return {"static", "final"} <= self.modifiers


@dataclass
class SwitchCase:
    """One ``case``/``default`` label and the statements directly under it."""

    labels: list[str]  # empty for default
    statements: list[str]  # node types, in order
    line: int
    arrow: bool = False

    @property
    def is_default(self) -> bool:
        return not self.labels

    @property
    def is_empty(self) -> bool:
        return not self.statements

    @property
    def ends_with_jump(self) -> bool:
        return any(statement in JUMP_STATEMENTS for statement in self.statements)


@dataclass
class SwitchStatement:
    selector: str
    selector_kind: str  # tree-sitter type of the selector expression
    selector_type: Optional[str]  # declared type when resolvable
    line: int
    cases: list[SwitchCase]
    nesting_level: int
    comments: list[str] = field(default_factory=list)
    used_as_value: bool = False

    @property
    def has_default(self) -> bool:
        return any(case.is_default for case in self.cases)

    @property
    def case_count(self) -> int:
        return sum(len(case.labels) for case in self.cases)

    @property
    def has_return(self) -> bool:
        return any("return_statement" in case.statements for case in self.cases)


@dataclass
class MethodCall:
    name: str
    receiver: Optional[str]
    line: int


@dataclass
class ObjectCreation:
    type_name: str
    line: int
    variable: Optional[str] = None


@dataclass
class CatchClause:
    exception_type: str
    parameter: str
    line: int
    statements: list[str]


@dataclass
class Conditional:
    line: int
    logical_operators: int
    nesting_level: int


@dataclass
class MethodDeclaration:
    name: str
    modifiers: set[str]
    annotations: list[str]
    return_type: Optional[str]
    parameters: list[Parameter]
    line: int
    end_line: int
    is_constructor: bool = False
    has_body: bool = True
    local_variables: list[LocalVariable] = field(default_factory=list)
    references: set[str] = field(default_factory=set)
    switches: list[SwitchStatement] = field(default_factory=list)
    calls: list[MethodCall] = field(default_factory=list)
    creations: list[ObjectCreation] = field(default_factory=list)
    catch_clauses: list[CatchClause] = field(default_factory=list)
    conditionals: list[Conditional] = field(default_factory=list)
    loop_count: int = 0

    @property
    def is_public(self) -> bool:
        return "public" in self.modifiers

    @property
    def is_test(self) -> bool:
        return self.name.lower().startswith("test") or "Test" in self.annotations

    @property
    def decision_points(self) -> int:
        return (
            len(self.conditionals)
            + self.loop_count
            + sum(len(switch.cases) for switch in self.switches)
        )


@dataclass
class TypeDeclaration:
    kind: str  # class, interface, enum, record, annotation_type
    name: str
    modifiers: set[str]
    annotations: list[str]
    line: int
    end_line: int
    fields: list[FieldDeclaration] = field(default_factory=list)
    methods: list[MethodDeclaration] = field(default_factory=list)
    enum_constants: list[str] = field(default_factory=list)

    @property
    def is_abstract(self) -> bool:
        return self.kind == "interface" or "abstract" in self.modifiers

    @property
    def field_count(self) -> int:
        return sum(len(declaration.names) for declaration in self.fields)

    @property
    def member_count(self) -> int:
        methods = [m for m in self.methods if not m.is_constructor]
        return self.field_count + len(methods)


@dataclass
class CompilationUnit:
    package: Optional[str] = None
    imports: list[str] = field(default_factory=list)
    types: list[TypeDeclaration] = field(default_factory=list)
    branch_count: int = 0

    @property
    def methods(self) -> list[MethodDeclaration]:
        return [method for declaration in self.types for method in declaration.methods]

    @property
    def enums(self) -> dict[str, list[str]]:
        return {t.name: t.enum_constants for t in self.types if t.kind == "enum"}

    @property
    def class_count(self) -> int:
        return sum(1 for t in self.types if t.kind in {"class", "interface"})


@dataclass
class JavaSource:
    """A parsed Java file: display path, raw text and its shallow model."""

    path: str
    text: str
    unit: CompilationUnit

    @cached_property
    def lines(self) -> list[str]:
        return split_lines(self.text)


def split_lines(text: str) -> list[str]:
    """Split on line feeds only, so line numbers match tree-sitter rows."""
    lines = [line.removesuffix("\r") for line in text.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def walk(node: Node, visit: Callable[[Node], Optional[bool]]) -> None:
    """Depth-first pre-order traversal.

    ``visit`` is called once per node; returning ``False`` skips the node's
    children.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        if visit(current) is False:
            continue
        stack.extend(reversed(current.children))


def find_all(node: Node, types: set[str]) -> list[Node]:
    """All descendants (and ``node`` itself) whose type is in ``types``."""
    found: list[Node] = []

    def collect(current: Node) -> None:
        if current.type in types:
            found.append(current)

    walk(node, collect)
    return found


def _same(a: Optional[Node], b: Optional[Node]) -> bool:
    if a is None or b is None:
        return False
    return a.type == b.type and a.start_byte == b.start_byte and a.end_byte == b.end_byte


def _line(node: Node) -> int:
    return node.start_point[0] + 1


def _simple_type(type_text: str) -> str:
    """``java.util.Map<K, V>[]`` -> ``Map``."""
    base = type_text.split("<", 1)[0].replace("[]", "").replace("...", "").strip()
    return base.rsplit(".", 1)[-1]


class JavaParser:
    """Parser for Java code using tree-sitter."""

    def __init__(self):
        self._language = Language(tsjava.language())
        self._parser = Parser(self._language)

    def parse_file(self, file_path: Path, display_path: Optional[str] = None) -> JavaSource:
        """Read and parse a file; raises SourceParseError when that is impossible."""
        try:
            raw = Path(file_path).read_bytes()
        except OSError as e:
            raise SourceParseError(f"Cannot read file: {e}") from e
        return self.parse_bytes(raw, display_path or Path(file_path).name)

    def parse(self, code: str, file_path: str = "Unknown.java") -> JavaSource:
        """Parse Java source text."""
        return self.parse_bytes(code.encode("utf-8"), file_path)

    def parse_bytes(self, raw: bytes, file_path: str) -> JavaSource:
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            line = raw.count(b"\n", 0, e.start) + 1
            raise SourceParseError(f"File is not valid UTF-8: {e.reason}", line=line) from e

        tree = self._parser.parse(raw)
        root = tree.root_node
        if root.has_error:
            line = self._first_error_line(root)
            raise SourceParseError(f"Syntax error near line {line}", line=line)

        unit = _UnitBuilder(raw).build(root)
        return JavaSource(path=file_path, text=text, unit=unit)

    def _first_error_line(self, root: Node) -> int:
        lines: list[int] = []

        def visit(node: Node) -> Optional[bool]:
            if lines or not (node.has_error or node.is_missing):
                return False
            if node.type == "ERROR" or node.is_missing:
                lines.append(_line(node))
                return False
            return None

        walk(root, visit)
        return lines[0] if lines else 0


class _UnitBuilder:
    """Turns one tree-sitter tree into a CompilationUnit."""

    def __init__(self, source: bytes):
        self._source = source

    def text(self, node: Optional[Node]) -> str:
        if node is None:
            return ""
        return self._source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    def build(self, root: Node) -> CompilationUnit:
        unit = CompilationUnit()

        for child in root.named_children:
            if child.type == "package_declaration":
                unit.package = self._declaration_name(child, "package")
            elif child.type == "import_declaration":
                unit.imports.append(self._declaration_name(child, "import"))

        def visit(node: Node) -> None:
            if node.type in TYPE_NODES:
                unit.types.append(self._build_type(node))
            elif node.type in BRANCH_NODES:
                unit.branch_count += 1

        walk(root, visit)
        return unit

    def _declaration_name(self, node: Node, keyword: str) -> str:
        name = self.text(node).strip().rstrip(";")
        name = name[len(keyword):].strip()
        if name.startswith("static "):
            name = name[len("static "):].strip()
        return name

    def _modifiers(self, node: Node) -> tuple[set[str], list[str]]:
        modifiers: set[str] = set()
        annotations: list[str] = []
        for child in node.children:
            if child.type != "modifiers":
                continue
            for modifier in child.children:
                if modifier.type in {"marker_annotation", "annotation"}:
                    annotations.append(_simple_type(self.text(modifier.child_by_field_name("name"))))
                elif modifier.type not in COMMENT_NODES:
                    modifiers.add(self.text(modifier))
        return modifiers, annotations

    def _build_type(self, node: Node) -> TypeDeclaration:
        modifiers, annotations = self._modifiers(node)
        declaration = TypeDeclaration(
            kind=node.type[: -len("_declaration")],
            name=self.text(node.child_by_field_name("name")),
            modifiers=modifiers,
            annotations=annotations,
            line=_line(node),
            end_line=node.end_point[0] + 1,
        )
        body = node.child_by_field_name("body")
        if body is None:
            return declaration

        members = list(body.named_children)
        if node.type == "enum_declaration":
            for child in body.named_children:
                if child.type == "enum_constant":
                    declaration.enum_constants.append(self.text(child.child_by_field_name("name")))
                elif child.type == "enum_body_declarations":
                    members.extend(child.named_children)

        fields_by_name: dict[str, str] = {}
        in_interface = declaration.kind in {"interface", "annotation_type"}
        for member in members:
            if member.type in MEMBER_FIELD_NODES:
                field_declaration = self._build_field(member, in_interface)
                declaration.fields.append(field_declaration)
                for name in field_declaration.names:
                    fields_by_name[name] = field_declaration.type

        for member in members:
            if member.type in METHOD_NODES:
                declaration.methods.append(self._build_method(member, fields_by_name, in_interface))
        return declaration

    def _build_field(self, node: Node, in_interface: bool) -> FieldDeclaration:
        modifiers, _ = self._modifiers(node)
        if in_interface or node.type == "constant_declaration":
            modifiers |= {"public", "static", "final"}
        names = [
            self.text(declarator.child_by_field_name("name"))
            for declarator in node.children_by_field_name("declarator")
        ]
        return FieldDeclaration(
            names=names,
            type=self.text(node.child_by_field_name("type")),
            modifiers=modifiers,
            line=_line(node),
        )

    def _build_parameters(self, node: Optional[Node]) -> list[Parameter]:
        parameters: list[Parameter] = []
        if node is None:
            return parameters
        for child in node.named_children:
            if child.type == "formal_parameter":
                parameters.append(
                    Parameter(
                        name=self.text(child.child_by_field_name("name")),
                        type=self.text(child.child_by_field_name("type")),
                        line=_line(child),
                    )
                )
            elif child.type == "spread_parameter":
                declarator = next(
                    (c for c in child.named_children if c.type == "variable_declarator"), None
                )
                type_node = next(
                    (
                        c
                        for c in child.named_children
                        if c.type not in {"modifiers", "variable_declarator"}
                    ),
                    None,
                )
                parameters.append(
                    Parameter(
                        name=self.text(declarator.child_by_field_name("name")) if declarator else "",
                        type=f"{self.text(type_node)}...",
                        line=_line(child),
                    )
                )
        return parameters

    def _build_method(
        self,
        node: Node,
        fields_by_name: dict[str, str],
        in_interface: bool,
    ) -> MethodDeclaration:
        modifiers, annotations = self._modifiers(node)
        if in_interface and "private" not in modifiers:
            modifiers.add("public")
        is_constructor = node.type != "method_declaration"
        body = node.child_by_field_name("body")

        method = MethodDeclaration(
            name=self.text(node.child_by_field_name("name")),
            modifiers=modifiers,
            annotations=annotations,
            return_type=None if is_constructor else self.text(node.child_by_field_name("type")),
            parameters=self._build_parameters(node.child_by_field_name("parameters")),
            line=_line(node),
            end_line=node.end_point[0] + 1,
            is_constructor=is_constructor,
            has_body=body is not None,
        )
        if body is not None:
            self._scan_body(body, method, fields_by_name)
        return method

    def _scan_body(self, body: Node, method: MethodDeclaration, fields_by_name: dict[str, str]) -> None:
        switch_nodes: list[Node] = []

        def visit(node: Node) -> Optional[bool]:
            kind = node.type
            if kind in TYPE_NODES:
                # Local types are modelled separately.
                return False
            if kind == "local_variable_declaration":
                type_text = self.text(node.child_by_field_name("type"))
                for declarator in node.children_by_field_name("declarator"):
                    method.local_variables.append(
                        LocalVariable(
                            name=self.text(declarator.child_by_field_name("name")),
                            type=type_text,
                            line=_line(declarator),
                            has_initializer=declarator.child_by_field_name("value") is not None,
                        )
                    )
            elif kind == "identifier":
                if self._is_reference(node):
                    method.references.add(self.text(node))
            elif kind in SWITCH_NODES:
                switch_nodes.append(node)
            elif kind == "method_invocation":
                receiver = node.child_by_field_name("object")
                method.calls.append(
                    MethodCall(
                        name=self.text(node.child_by_field_name("name")),
                        receiver=self.text(receiver) if receiver is not None else None,
                        line=_line(node),
                    )
                )
            elif kind == "object_creation_expression":
                method.creations.append(
                    ObjectCreation(
                        type_name=_simple_type(self.text(node.child_by_field_name("type"))),
                        line=_line(node),
                        variable=self._assigned_variable(node),
                    )
                )
            elif kind == "catch_clause":
                method.catch_clauses.append(self._build_catch(node))
            elif kind == "if_statement":
                method.conditionals.append(self._build_conditional(node))
            elif kind in LOOP_NODES:
                method.loop_count += 1

        walk(body, visit)

        for node in switch_nodes:
            method.switches.append(self._build_switch(node, method, fields_by_name))

    def _is_reference(self, node: Node) -> bool:
        """True when an identifier reads a name rather than declaring or selecting one."""
        parent = node.parent
        if parent is None:
            return False
        if parent.type in {
            "variable_declarator",
            "formal_parameter",
            "catch_formal_parameter",
            "enhanced_for_statement",
            "resource",
        }:
            return not _same(parent.child_by_field_name("name"), node)
        if parent.type == "method_invocation":
            return not _same(parent.child_by_field_name("name"), node)
        if parent.type == "field_access":
            return not _same(parent.child_by_field_name("field"), node)
        if parent.type in {"labeled_statement", "break_statement", "continue_statement"}:
            return False
        return True

    def _assigned_variable(self, node: Node) -> Optional[str]:
        parent = node.parent
        if parent is None:
            return None
        if parent.type == "variable_declarator" and _same(parent.child_by_field_name("value"), node):
            return self.text(parent.child_by_field_name("name"))
        if parent.type == "assignment_expression" and _same(parent.child_by_field_name("right"), node):
            left = parent.child_by_field_name("left")
            if left is not None and left.type == "identifier":
                return self.text(left)
        return None

    def _build_catch(self, node: Node) -> CatchClause:
        parameter = next((c for c in node.named_children if c.type == "catch_formal_parameter"), None)
        exception_type = ""
        name = ""
        if parameter is not None:
            catch_type = next((c for c in parameter.named_children if c.type == "catch_type"), None)
            exception_type = self.text(catch_type)
            name = self.text(parameter.child_by_field_name("name"))
        body = node.child_by_field_name("body")
        statements = []
        if body is not None:
            statements = [
                self.text(child) for child in body.named_children if child.type not in COMMENT_NODES
            ]
        return CatchClause(
            exception_type=exception_type,
            parameter=name,
            line=_line(node),
            statements=statements,
        )

    def _build_conditional(self, node: Node) -> Conditional:
        condition = node.child_by_field_name("condition")
        operators = 0
        if condition is not None:
            for binary in find_all(condition, {"binary_expression"}):
                operator = binary.child_by_field_name("operator")
                if operator is not None and operator.type in {"&&", "||"}:
                    operators += 1

        depth = 0
        child, parent = node, node.parent
        while parent is not None and parent.type not in METHOD_NODES:
            if parent.type == "if_statement":
                is_else_if = child.type == "if_statement" and _same(
                    parent.child_by_field_name("alternative"), child
                )
                if not is_else_if:
                    depth += 1
            child, parent = parent, parent.parent
        return Conditional(line=_line(node), logical_operators=operators, nesting_level=depth + 1)

    def _build_switch(
        self,
        node: Node,
        method: MethodDeclaration,
        fields_by_name: dict[str, str],
    ) -> SwitchStatement:
        condition = node.child_by_field_name("condition")
        selector = condition
        if condition is not None and condition.type == "parenthesized_expression":
            selector = next(
                (c for c in condition.named_children if c.type not in COMMENT_NODES), condition
            )

        body = node.child_by_field_name("body")
        cases: list[SwitchCase] = []
        comments: list[str] = []
        if body is not None:
            for child in body.named_children:
                if child.type == "switch_block_statement_group":
                    cases.extend(self._group_cases(child))
                elif child.type == "switch_rule":
                    cases.append(self._rule_case(child))
            comments.extend(self.text(c) for c in find_all(body, COMMENT_NODES))
        previous = node.prev_named_sibling
        if previous is not None and previous.type in COMMENT_NODES:
            comments.append(self.text(previous))

        nesting = 1
        ancestor = node.parent
        while ancestor is not None and ancestor.type not in METHOD_NODES:
            if ancestor.type in SWITCH_NODES:
                nesting += 1
            ancestor = ancestor.parent

        return SwitchStatement(
            selector=self.text(selector),
            selector_kind=selector.type if selector is not None else "",
            selector_type=self._resolve_selector_type(selector, method, fields_by_name),
            line=_line(node),
            cases=cases,
            nesting_level=nesting,
            comments=comments,
            used_as_value=node.parent is not None and node.parent.type in VALUE_CONTEXTS,
        )

    def _label_values(self, label: Node) -> list[str]:
        if any(child.type == "default" for child in label.children):
            return []
        return [self.text(child) for child in label.named_children if child.type not in COMMENT_NODES]

    def _group_cases(self, group: Node) -> list[SwitchCase]:
        cases: list[SwitchCase] = []
        for child in group.named_children:
            if child.type == "switch_label":
                cases.append(SwitchCase(labels=self._label_values(child), statements=[], line=_line(child)))
            elif child.type not in COMMENT_NODES and cases:
                # Statements belong to the last label of the group.
                cases[-1].statements.append(child.type)
        return cases

    def _rule_case(self, rule: Node) -> SwitchCase:
        label = next((c for c in rule.named_children if c.type == "switch_label"), None)
        statements: list[str] = []
        for child in rule.named_children:
            if child.type == "switch_label" or child.type in COMMENT_NODES:
                continue
            if child.type == "block":
                statements.extend(c.type for c in child.named_children if c.type not in COMMENT_NODES)
            else:
                statements.append(child.type)
        return SwitchCase(
            labels=self._label_values(label) if label is not None else [],
            statements=statements,
            line=_line(rule),
            arrow=True,
        )

    def _resolve_selector_type(
        self,
        selector: Optional[Node],
        method: MethodDeclaration,
        fields_by_name: dict[str, str],
    ) -> Optional[str]:
        if selector is None:
            return None
        name = None
        if selector.type == "identifier":
            name = self.text(selector)
            for parameter in method.parameters:
                if parameter.name == name:
                    return _simple_type(parameter.type)
            for variable in method.local_variables:
                if variable.name == name:
                    return _simple_type(variable.type)
        elif selector.type == "field_access":
            receiver = selector.child_by_field_name("object")
            if receiver is not None and receiver.type == "this":
                name = self.text(selector.child_by_field_name("field"))
        if name is not None and name in fields_by_name:
            return _simple_type(fields_by_name[name])
        return None
