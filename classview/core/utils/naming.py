"""Type-name helpers shared by the resolvers and the renderer."""

from typing import List

from ..constants import LIBRARY_PREFIXES


def strip_type_arguments(text: str) -> str:
    """Remove every balanced `<...>` block, e.g. `Map<K, List<V>>` -> `Map`."""
    out = []
    depth = 0
    for ch in text:
        if ch == "<":
            depth += 1
        elif ch == ">":
            if depth:
                depth -= 1
        elif depth == 0:
            out.append(ch)
    return "".join(out)


def simple_name(type_name: str) -> str:
    """`java.lang.Exception` -> `Exception`; generic arguments are dropped."""
    base = strip_type_arguments(type_name).strip()
    return base.rsplit(".", 1)[-1]


def package_of(qualified_name: str) -> str:
    base = strip_type_arguments(qualified_name).strip()
    return base.rsplit(".", 1)[0] if "." in base else ""


def is_library_name(type_name: str) -> bool:
    return type_name.startswith(LIBRARY_PREFIXES)


def split_top_level(text: str, sep: str = ",") -> List[str]:
    """Split on `sep` outside angle brackets; empty pieces are dropped."""
    parts: List[str] = []
    depth = 0
    current = []
    for ch in text:
        if ch == "<":
            depth += 1
        elif ch == ">" and depth:
            depth -= 1
        if ch == sep and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(ch)
    parts.append("".join(current).strip())
    return [p for p in parts if p]


def split_tokens(text: str) -> List[str]:
    """Whitespace tokenization that keeps `Map<K, V>` as one token."""
    tokens: List[str] = []
    depth = 0
    current = []
    for ch in text:
        if ch == "<":
            depth += 1
        elif ch == ">" and depth:
            depth -= 1
        if ch.isspace() and depth == 0:
            if current:
                tokens.append("".join(current))
                current = []
            continue
        current.append(ch)
    if current:
        tokens.append("".join(current))
    return tokens
