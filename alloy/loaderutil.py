"""Discovering loader and API handler functions in Go source files."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional


@dataclass(frozen=True)
class LoaderInfo:
    """A discovered loader or API handler."""

    route: str
    function_name: str
    file_path: str
    is_api: bool


@dataclass(frozen=True)
class FuncDecl:
    """A top-level Go function declaration; types are normalised source text."""

    @dataclass(frozen=True)
    class Field:
        names: tuple[str, ...]
        type: str

    name: str
    params: tuple[Field, ...]
    results: Optional[tuple[Field, ...]] = None
    receiver: Optional[Field] = None

    @property
    def is_exported(self) -> bool:
        return self.name[:1].isupper()


class _Token(NamedTuple):
    kind: str
    text: str
    newline_before: bool


_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {")", "]", "}"}
_TYPE_KEYWORDS = frozenset({"chan", "func", "map", "struct", "interface"})


def _scan_quoted(source: str, start: int, quote: str) -> int:
    i = start + 1
    while i < len(source):
        ch = source[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        if ch == "\n":
            break
        i += 1
    raise ValueError(f"unterminated literal at offset {start}")


def _tokenize(source: str) -> list[_Token]:
    tokens: list[_Token] = []
    i, n = 0, len(source)
    newline = True
    while i < n:
        ch = source[i]
        if ch == "\n":
            newline = True
            i += 1
            continue
        if ch in " \t\r\f\v":
            i += 1
            continue
        if source.startswith("//", i):
            end = source.find("\n", i)
            i = n if end == -1 else end
            continue
        if source.startswith("/*", i):
            end = source.find("*/", i + 2)
            if end == -1:
                raise ValueError("unterminated block comment")
            newline = newline or "\n" in source[i:end]
            i = end + 2
            continue
        if ch.isalpha() or ch == "_":
            j = i + 1
            while j < n and (source[j].isalnum() or source[j] == "_"):
                j += 1
            kind = "ident"
        elif ch.isdigit() or (ch == "." and i + 1 < n and source[i + 1].isdigit()):
            j = i + 1
            while j < n and (source[j].isalnum() or source[j] in "._"):
                j += 1
            kind = "number"
        elif ch in "\"'":
            j = _scan_quoted(source, i, ch)
            kind = "string"
        elif ch == "`":
            end = source.find("`", i + 1)
            if end == -1:
                raise ValueError("unterminated raw string")
            j = end + 1
            kind = "string"
        elif source.startswith("...", i):
            j = i + 3
            kind = "op"
        else:
            j = i + 1
            kind = "op"
        tokens.append(_Token(kind, source[i:j], newline))
        newline = False
        i = j
    return tokens


def _check_balance(tokens: list[_Token]) -> None:
    stack: list[str] = []
    for tok in tokens:
        if tok.kind != "op":
            continue
        if tok.text in _OPENERS:
            stack.append(_OPENERS[tok.text])
        elif tok.text in _CLOSERS:
            if not stack or stack.pop() != tok.text:
                raise ValueError(f"unexpected {tok.text!r}")
    if stack:
        raise ValueError("unbalanced brackets")


def _is_op(tok: _Token, text: str) -> bool:
    return tok.kind == "op" and tok.text == text


def _take_group(tokens: list[_Token], start: int) -> tuple[list[_Token], int]:
    depth = 0
    for index in range(start, len(tokens)):
        tok = tokens[index]
        if tok.kind == "op" and tok.text in _OPENERS:
            depth += 1
        elif tok.kind == "op" and tok.text in _CLOSERS:
            depth -= 1
            if depth == 0:
                return tokens[start + 1 : index], index + 1
    raise ValueError("unbalanced brackets")


def _join(tokens: list[_Token]) -> str:
    text = ""
    prev: Optional[_Token] = None
    for tok in tokens:
        if prev is not None and prev.kind != "op" and tok.kind != "op":
            text += " "
        text += tok.text
        prev = tok
    return text


def _split_commas(tokens: list[_Token]) -> list[list[_Token]]:
    entries: list[list[_Token]] = [[]]
    depth = 0
    for tok in tokens:
        if tok.kind == "op" and tok.text in _OPENERS:
            depth += 1
        elif tok.kind == "op" and tok.text in _CLOSERS:
            depth -= 1
        elif depth == 0 and _is_op(tok, ","):
            entries.append([])
            continue
        entries[-1].append(tok)
    if not entries[-1]:
        entries.pop()
    if any(not entry for entry in entries):
        raise ValueError("empty parameter")
    return entries


def _is_named(entry: list[_Token]) -> bool:
    return (
        len(entry) >= 2
        and entry[0].kind == "ident"
        and entry[0].text not in _TYPE_KEYWORDS
        and not _is_op(entry[1], ".")
    )


def _parse_fields(tokens: list[_Token]) -> tuple[FuncDecl.Field, ...]:
    entries = _split_commas(tokens)
    if not any(_is_named(entry) for entry in entries):
        return tuple(FuncDecl.Field((), _join(entry)) for entry in entries)
    fields = []
    pending: list[str] = []
    for entry in entries:
        if _is_named(entry):
            fields.append(FuncDecl.Field(tuple(pending + [entry[0].text]), _join(entry[1:])))
            pending = []
        elif len(entry) == 1 and entry[0].kind == "ident":
            pending.append(entry[0].text)
        else:
            raise ValueError("mixed named and unnamed parameters")
    if pending:
        raise ValueError("mixed named and unnamed parameters")
    return tuple(fields)


def _take_type(tokens: list[_Token], start: int) -> tuple[list[_Token], int]:
    index = start
    collected: list[_Token] = []
    while index < len(tokens):
        tok = tokens[index]
        if collected and tok.newline_before:
            break
        if _is_op(tok, ";"):
            break
        if _is_op(tok, "{"):
            if not collected or collected[-1].text not in ("interface", "struct"):
                break
        if tok.kind == "op" and tok.text in _OPENERS:
            group, end = _take_group(tokens, index)
            collected.extend(tokens[index:end])
            index = end
            continue
        collected.append(tok)
        index += 1
    return collected, index


def _parse_func_decl(tokens: list[_Token], index: int) -> tuple[FuncDecl, int]:
    def at(i: int) -> Optional[_Token]:
        return tokens[i] if i < len(tokens) else None

    receiver = None
    if at(index) is not None and _is_op(tokens[index], "("):
        inner, index = _take_group(tokens, index)
        fields = _parse_fields(inner)
        if len(fields) != 1:
            raise ValueError("method must have exactly one receiver")
        receiver = fields[0]
    name_tok = at(index)
    if name_tok is None or name_tok.kind != "ident":
        raise ValueError("expected function name")
    index += 1
    if at(index) is not None and _is_op(tokens[index], "["):
        _, index = _take_group(tokens, index)
    if at(index) is None or not _is_op(tokens[index], "("):
        raise ValueError(f"expected parameters for {name_tok.text}")
    inner, index = _take_group(tokens, index)
    params = _parse_fields(inner)

    results = None
    nxt = at(index)
    if nxt is not None and not nxt.newline_before:
        if _is_op(nxt, "("):
            inner, index = _take_group(tokens, index)
            results = _parse_fields(inner)
        elif not (_is_op(nxt, "{") or _is_op(nxt, ";")):
            type_tokens, index = _take_type(tokens, index)
            results = (FuncDecl.Field((), _join(type_tokens)),)
    return FuncDecl(name_tok.text, params, results, receiver), index


def parse_go_functions(source: str) -> list[FuncDecl]:
    """Return the top-level function declarations of a Go source file.

    Raises ValueError when the file is not syntactically usable.
    """
    tokens = _tokenize(source)
    if len(tokens) < 2 or tokens[0].text != "package" or tokens[1].kind != "ident":
        raise ValueError("expected package clause")
    _check_balance(tokens)
    decls = []
    depth = 0
    index = 2
    while index < len(tokens):
        tok = tokens[index]
        if tok.kind == "op" and tok.text in _OPENERS:
            depth += 1
        elif tok.kind == "op" and tok.text in _CLOSERS:
            depth -= 1
        elif (
            depth == 0
            and tok.kind == "ident"
            and tok.text == "func"
            and (tok.newline_before or _is_op(tokens[index - 1], ";"))
        ):
            decl, index = _parse_func_decl(tokens, index + 1)
            decls.append(decl)
            continue
        index += 1
    return decls


def _normalise(expr: str) -> str:
    return "".join(expr.split())


def is_gin_context_type(expr: str) -> bool:
    """True if the type expression is ``*gin.Context``."""
    return _normalise(expr) == "*gin.Context"


def is_any_type(expr: str) -> bool:
    """True if the type expression is ``any``."""
    return _normalise(expr) == "any"


def is_error_type(expr: str) -> bool:
    """True if the type expression is ``error``."""
    return _normalise(expr) == "error"


def is_valid_loader_signature(func_decl: FuncDecl) -> bool:
    """True for ``func(c *gin.Context) (any, error)``."""
    if func_decl.params is None or func_decl.results is None:
        return False
    if len(func_decl.params) != 1 or not is_gin_context_type(func_decl.params[0].type):
        return False
    if len(func_decl.results) != 2:
        return False
    return is_any_type(func_decl.results[0].type) and is_error_type(func_decl.results[1].type)


def is_valid_api_handler_signature(func_decl: FuncDecl) -> bool:
    """True for ``func(c *gin.Context)`` with no results."""
    if func_decl.params is None:
        return False
    if len(func_decl.params) != 1 or not is_gin_context_type(func_decl.params[0].type):
        return False
    return not func_decl.results


def _walk_files(root: str) -> Iterator[str]:
    if not stat.S_ISDIR(os.lstat(root).st_mode):
        yield root
        return
    for name in sorted(os.listdir(root)):
        path = os.path.join(root, name)
        if os.path.isdir(path) and not os.path.islink(path):
            yield from _walk_files(path)
        else:
            yield path


def discover_loaders(pages_dir: str) -> list[LoaderInfo]:
    """Find page loaders and API handlers in the ``.go`` files under ``pages_dir``."""
    if not pages_dir:
        raise ValueError("pagesDir is required")
    abs_dir = os.path.abspath(pages_dir)
    api_dir = os.path.join(abs_dir, "api")
    loaders = []
    for path in _walk_files(abs_dir):
        if not path.endswith(".go") or path.endswith("_test.go"):
            continue
        is_api = api_dir in path
        if not is_api and not os.path.exists(path.removesuffix(".go") + ".tsx"):
            continue
        try:
            with open(path, encoding="utf-8") as handle:
                decls = parse_go_functions(handle.read())
        except (OSError, UnicodeDecodeError, ValueError):
            continue
        check = is_valid_api_handler_signature if is_api else is_valid_loader_signature
        for decl in decls:
            if decl.is_exported and check(decl):
                loaders.append(
                    LoaderInfo(
                        route=file_path_to_route(path, abs_dir, is_api),
                        function_name=decl.name,
                        file_path=os.path.relpath(path, abs_dir),
                        is_api=is_api,
                    )
                )
                break
    return loaders


def _route_segment(part: str) -> str:
    if part.startswith("[") and part.endswith("]"):
        return ":" + part.removeprefix("[").removesuffix("]")
    return part


def file_path_to_route(file_path: str, pages_dir: str, is_api: bool) -> str:
    """Map a ``.go`` file to its route; API handlers get an ``/api`` prefix."""
    relative = file_path.removeprefix(pages_dir).removeprefix(os.sep).removesuffix(".go")
    if is_api:
        relative = relative.removeprefix("api" + os.sep)
    if not is_api and relative == "index":
        return "/"
    route = "/" + "/".join(_route_segment(part) for part in relative.split(os.sep))
    return "/api" + route if is_api else route


def _capitalise(text: str) -> str:
    return text[:1].upper() + text[1:]


def file_path_to_function_name(file_path: str) -> str:
    """Build a ``Load...`` function name from a page file path."""
    filename = os.path.basename(file_path).removesuffix(".go").removesuffix(".tsx")
    file_part = "".join(_capitalise(part) for part in filename.split("_") if part)
    directory = os.path.dirname(file_path)
    directory = os.path.normpath(directory) if directory else "."
    if directory in (".", ""):
        return "Load" + file_part
    segments = file_path.replace(os.sep, "/").split("/")[:-1]
    name = "Load"
    for segment in segments:
        if segment in (".", ""):
            continue
        if segment.startswith("[") and segment.endswith("]"):
            segment = segment.removeprefix("[").removesuffix("]")
        name += _capitalise(segment)
    return name + file_part